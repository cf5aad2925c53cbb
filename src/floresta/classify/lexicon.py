"""
Polarity lexicon loading.

The lexicon is a CSV file (OpLexicon layout) whose first line is a header:

    Attribute,Type,Class,ClassificationType
    bom,adj,1,A

Records are partitioned by ``Class`` into the positive, neutral and negative
training lists, and indexed by term for the annotation lookup. ``"1"`` is
positive and ``"-1"`` is negative, as the lexicon documents them.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from ..errors import LexiconFormatError
from ..logger import get_logger
from ..storage.schema import LEXICON_COLUMNS

logger = get_logger("lexicon")

POSITIVE, NEUTRAL, NEGATIVE = "1", "0", "-1"


@dataclass(frozen=True)
class LexiconRecord:
    attribute: str
    type: str
    cls: str
    classification_type: str


@dataclass(frozen=True)
class TrainingSets:
    positive: List[str] = field(default_factory=list)
    neutral: List[str] = field(default_factory=list)
    negative: List[str] = field(default_factory=list)

    def as_tuple(self) -> Tuple[List[str], List[str], List[str]]:
        return self.positive, self.neutral, self.negative


@dataclass(frozen=True)
class Lexicon:
    records: Tuple[LexiconRecord, ...]
    index: Mapping[str, LexiconRecord]
    training: TrainingSets


def _column_positions(header: List[str]) -> List[int]:
    names = [h.strip().lower() for h in header]
    wanted = [c.lower() for c in LEXICON_COLUMNS]
    if all(w in names for w in wanted):
        return [names.index(w) for w in wanted]
    if len(header) < len(LEXICON_COLUMNS):
        raise LexiconFormatError(
            f"lexicon header has {len(header)} columns, expected {len(LEXICON_COLUMNS)}: {header}"
        )
    return list(range(len(LEXICON_COLUMNS)))


class _RecordLines:
    """Line iterator that remembers the raw text of the record being read."""

    def __init__(self, f):
        self._f = f
        self._lines: List[str] = []

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._f)
        self._lines.append(line)
        return line

    def take(self) -> str:
        raw = "".join(self._lines)
        self._lines.clear()
        return raw


def _has_bare_quote(raw: str) -> bool:
    # a quote may only open a field or appear escaped inside a quoted one
    in_quotes = False
    field_start = True
    i = 0
    while i < len(raw):
        ch = raw[i]
        if in_quotes:
            if ch == '"':
                if raw.startswith('"', i + 1):
                    i += 1
                else:
                    in_quotes = False
        elif ch == '"':
            if not field_start:
                return True
            in_quotes = True
        field_start = not in_quotes and ch == ","
        i += 1
    return False


def read_records(path: Path) -> List[LexiconRecord]:
    """Parse every data row of the lexicon file. Raises LexiconFormatError on bad content."""
    records: List[LexiconRecord] = []
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            lines = _RecordLines(f)
            rdr = csv.reader(lines, strict=True)
            header = None
            positions: List[int] = []
            for row in rdr:
                if _has_bare_quote(lines.take()):
                    raise LexiconFormatError(f"{path}:{rdr.line_num}: bare \" in non-quoted field")
                if not row:
                    continue
                if header is None:
                    header = row
                    positions = _column_positions(header)
                    continue
                if len(row) != len(header):
                    raise LexiconFormatError(
                        f"{path}:{rdr.line_num}: expected {len(header)} fields, got {len(row)}"
                    )
                attribute, typ, cls, ctype = (row[i] for i in positions)
                records.append(LexiconRecord(attribute, typ, cls, ctype))
    except UnicodeDecodeError as e:
        raise LexiconFormatError(f"{path}: not valid UTF-8 ({e})") from e
    except csv.Error as e:
        raise LexiconFormatError(f"{path}: {e}") from e
    return records


def build_index(records: Iterable[LexiconRecord]) -> Mapping[str, LexiconRecord]:
    # later duplicates overwrite earlier ones
    index: Dict[str, LexiconRecord] = {}
    for r in records:
        if r.attribute:
            index[r.attribute] = r
    return MappingProxyType(index)


def partition(records: Iterable[LexiconRecord]) -> TrainingSets:
    sets = TrainingSets()
    buckets = {POSITIVE: sets.positive, NEUTRAL: sets.neutral, NEGATIVE: sets.negative}
    for r in records:
        bucket = buckets.get(r.cls)
        if bucket is not None and r.attribute:
            bucket.append(r.attribute)
    return sets


def load_lexicon(path, create_missing: bool = True) -> Lexicon:
    path = Path(path)
    if not path.exists():
        if not create_missing:
            raise FileNotFoundError(f"Lexicon not found: {path}")
        logger.warning(f"Lexicon {path} not found, creating an empty one")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()

    records = read_records(path)
    training = partition(records)
    logger.info(
        f"Loaded {len(records)} lexicon records from {path} "
        f"(positive={len(training.positive)}, neutral={len(training.neutral)}, "
        f"negative={len(training.negative)})"
    )
    return Lexicon(records=tuple(records), index=build_index(records), training=training)


def load(path, create_missing: bool = True) -> Tuple[List[str], List[str], List[str]]:
    """Return the (positive, neutral, negative) training lists of the lexicon at *path*."""
    return load_lexicon(path, create_missing=create_missing).training.as_tuple()
