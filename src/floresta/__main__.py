import argparse
import sys

from .classify.score_and_label import run
from .config import (DB_LIMIT, DB_TABLE, LEXICON_CSV, MIN_TOKEN_LENGTH, SAMPLES_JSON, TEXT_FIELD,
                     postgres_connection_string)
from .errors import LexiconFormatError, SampleFormatError, ScoringError
from .storage.store import print_rows


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="floresta", description="Score text samples against a polarity lexicon")
    ap.add_argument("--lexicon", default=str(LEXICON_CSV), help="Lexicon CSV (Attribute,Type,Class,ClassificationType)")
    ap.add_argument("--samples", default=str(SAMPLES_JSON), help="JSON array of sample objects")
    ap.add_argument("--text-field", default=TEXT_FIELD, help="Sample field holding the raw text")
    ap.add_argument("--min-length", type=int, default=MIN_TOKEN_LENGTH, help="Shortest token kept, in characters")
    ap.add_argument("--lenient-samples", action="store_true", help="Ignore malformed sample JSON instead of failing")
    ap.add_argument("--no-create-lexicon", action="store_true", help="Fail when the lexicon file is missing")
    ap.add_argument("--fail-fast", action="store_true", help="Stop at the first sample the classifier rejects")
    ap.add_argument("--out-csv", default=None, help="Also write per-sample scores to this CSV")
    ap.add_argument("--skip-db", action="store_true", help="Skip the diagnostic datastore read")
    ap.add_argument("--db-table", default=DB_TABLE)
    ap.add_argument("--db-limit", type=int, default=DB_LIMIT)
    ap.add_argument("--progress", action="store_true", help="Show a progress bar on stderr")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if not args.skip_db:
        print_rows(postgres_connection_string(), args.db_table, args.db_limit)

    try:
        run(
            args.lexicon,
            args.samples,
            text_field=args.text_field,
            min_length=args.min_length,
            lenient_samples=args.lenient_samples,
            create_missing_lexicon=not args.no_create_lexicon,
            fail_fast=args.fail_fast,
            out_csv=args.out_csv,
            progress=args.progress,
        )
    except LexiconFormatError as e:
        print(f"[ERROR] malformed lexicon: {e}", file=sys.stderr)
        return 2
    except (OSError, SampleFormatError, ScoringError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
