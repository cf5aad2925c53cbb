class FlorestaError(Exception):
    """Base class for pipeline errors."""


class LexiconFormatError(FlorestaError, ValueError):
    """The lexicon file could not be parsed. Fatal."""


class SampleFormatError(FlorestaError, ValueError):
    """The sample file is not a JSON array of text objects."""


class ScoringError(FlorestaError, RuntimeError):
    """The classifier failed on a single token set."""
