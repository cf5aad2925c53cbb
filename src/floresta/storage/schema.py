LEXICON_COLUMNS = [
    "Attribute",           # the term
    "Type",                # part-of-speech tag
    "Class",               # -1 negative, 0 neutral, 1 positive
    "ClassificationType",  # A automatic, M manual
]

LABELS = ["Positive", "Neutral", "Negative"]

RESULT_COLUMNS = (
    ["index", "tokens"]
    + [f"score_{label}" for label in LABELS]
    + ["label", "strict", "matches"]
)
