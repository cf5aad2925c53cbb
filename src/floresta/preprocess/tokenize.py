import json
from pathlib import Path
from typing import Iterable, List

from tqdm import tqdm

from ..config import MIN_TOKEN_LENGTH, TEXT_FIELD
from ..errors import SampleFormatError
from ..logger import get_logger

logger = get_logger("tokenize")


def tokenize(s: str, min_length: int = MIN_TOKEN_LENGTH) -> List[str]:
    """Whitespace tokens of at least *min_length* code points, lowercased, in order."""
    if not s:
        return []
    return [t.lower() for t in s.split() if len(t) >= min_length]


def join_tokens(tokens) -> str:
    return " ".join(tokens)


def _field_value(item: dict, text_field: str):
    # every key matching the field case-insensitively is applied in order; the last one wins
    wanted = text_field.casefold()
    value = ""
    for key, v in item.items():
        if key.casefold() == wanted:
            value = v
    return value


def _sample_text(item, text_field: str, lenient: bool, pos: int) -> str:
    if not isinstance(item, dict):
        if lenient:
            return ""
        raise SampleFormatError(f"sample {pos} is not an object: {item!r}")
    value = _field_value(item, text_field)
    if value is None:
        return ""
    if not isinstance(value, str):
        if lenient:
            return ""
        raise SampleFormatError(f"sample {pos}: field {text_field!r} is not a string")
    return value


def load_samples(path, text_field: str = TEXT_FIELD, lenient: bool = False) -> List[str]:
    """
    Read the raw sample texts from a JSON array of objects.

    A missing file raises FileNotFoundError. Malformed JSON raises
    SampleFormatError unless *lenient*, in which case the error is logged and
    no samples are returned. Lenient reads replace invalid UTF-8 with U+FFFD.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Sample file not found: {path}")
    try:
        raw = path.read_bytes()
        data = json.loads(raw.decode("utf-8", errors="replace" if lenient else "strict"))
        if data is None:
            data = []
        if not isinstance(data, list):
            raise SampleFormatError(f"{path}: expected a JSON array, got {type(data).__name__}")
    except (json.JSONDecodeError, UnicodeDecodeError, SampleFormatError) as e:
        if not lenient:
            if isinstance(e, SampleFormatError):
                raise
            raise SampleFormatError(f"{path}: {e}") from e
        logger.warning(f"Ignoring malformed sample file {path}: {e}")
        return []
    return [_sample_text(item, text_field, lenient, i) for i, item in enumerate(data)]


def tokenize_samples(samples: Iterable[str], min_length: int = MIN_TOKEN_LENGTH,
                     progress: bool = False) -> List[List[str]]:
    return [tokenize(s, min_length) for s in tqdm(samples, desc="tokenize", disable=not progress)]


def tokenize_file(path, text_field: str = TEXT_FIELD, min_length: int = MIN_TOKEN_LENGTH,
                  lenient: bool = False, progress: bool = False) -> List[List[str]]:
    samples = load_samples(path, text_field=text_field, lenient=lenient)
    logger.info(f"Loaded {len(samples)} samples from {path}")
    return tokenize_samples(samples, min_length=min_length, progress=progress)
