import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import pandas as pd

from ..errors import ScoringError
from ..logger import get_logger
from ..preprocess.tokenize import join_tokens, tokenize_file
from ..storage.schema import LABELS, RESULT_COLUMNS
from .bayes import Classifier, NaiveBayesClassifier, Scores
from .lexicon import LexiconRecord, TrainingSets, load_lexicon

logger = get_logger("score")

POSITIVE, NEUTRAL, NEGATIVE = LABELS


@dataclass(frozen=True)
class SampleResult:
    index: int
    tokens: List[str]
    scores: Optional[Scores]
    matches: List[LexiconRecord]


def train_classifier(classifier: Classifier, training: TrainingSets) -> Classifier:
    classifier.train([
        (POSITIVE, training.positive),
        (NEUTRAL, training.neutral),
        (NEGATIVE, training.negative),
    ])
    return classifier


def header_line(labels: Sequence[str] = LABELS) -> str:
    return " - ".join(f"[{i}] {lab}" for i, lab in enumerate(labels))


def format_probability(p: float) -> str:
    # shortest round-trip form, integral values without the trailing ".0"
    s = repr(float(p))
    return s[:-2] if s.endswith(".0") else s


def format_scores(scores: Scores) -> str:
    return "[" + " ".join(format_probability(p) for p in scores.probabilities) + "]"


def annotate(tokens: Sequence[str], index: Mapping[str, LexiconRecord]) -> List[LexiconRecord]:
    return [index[t] for t in tokens if t in index]


def score_samples(classifier: Classifier, token_sets: Sequence[Sequence[str]],
                  index: Mapping[str, LexiconRecord], out=None,
                  fail_fast: bool = False) -> List[SampleResult]:
    """
    Score each token set in order and print the report lines.

    Every lexicon hit is printed as ``<Attribute> - <Type>`` before the
    sample's ``<index> [<scores>] <likely>`` line. A ScoringError skips the
    sample's score line unless *fail_fast*.
    """
    out = out or sys.stdout
    results = []
    for i, tokens in enumerate(token_sets):
        matches = annotate(tokens, index)
        for rec in matches:
            print(f"{rec.attribute} - {rec.type}", file=out)
        try:
            scores = classifier.score(tokens)
        except ScoringError as e:
            if fail_fast:
                raise
            logger.warning(f"Skipping sample {i}: {e}")
            scores = None
        else:
            print(i, format_scores(scores), scores.likely, file=out)
        results.append(SampleResult(index=i, tokens=list(tokens), scores=scores, matches=matches))
    return results


def results_frame(results: Sequence[SampleResult], labels: Sequence[str] = LABELS) -> pd.DataFrame:
    rows = []
    for r in results:
        row = {"index": r.index, "tokens": join_tokens(r.tokens)}
        for k, lab in enumerate(labels):
            row[f"score_{lab}"] = r.scores.probabilities[k] if r.scores else None
        row["label"] = r.scores.label if r.scores else ""
        row["strict"] = r.scores.strict if r.scores else None
        row["matches"] = "|".join(f"{m.attribute}:{m.cls}" for m in r.matches)
        rows.append(row)
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def export_results(results: Sequence[SampleResult], out_csv: Path) -> Path:
    out_csv = Path(out_csv)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    results_frame(results).to_csv(out_csv, index=False)
    logger.info(f"Wrote {len(results)} scored samples to {out_csv}")
    return out_csv


def run(lexicon_path, samples_path, out=None, classifier: Optional[Classifier] = None,
        text_field: Optional[str] = None, min_length: Optional[int] = None,
        lenient_samples: bool = False, create_missing_lexicon: bool = True,
        fail_fast: bool = False, out_csv=None, progress: bool = False) -> List[SampleResult]:
    out = out or sys.stdout
    lexicon = load_lexicon(lexicon_path, create_missing=create_missing_lexicon)

    kwargs = {}
    if text_field is not None:
        kwargs["text_field"] = text_field
    if min_length is not None:
        kwargs["min_length"] = min_length
    # samples are read before anything is printed so a bad file leaves stdout empty
    token_sets = tokenize_file(samples_path, lenient=lenient_samples, progress=progress, **kwargs)

    classifier = classifier or NaiveBayesClassifier(LABELS)
    train_classifier(classifier, lexicon.training)
    print(header_line(classifier.labels), file=out)

    results = score_samples(classifier, token_sets, lexicon.index, out=out, fail_fast=fail_fast)
    if out_csv:
        export_results(results, out_csv)
    return results
