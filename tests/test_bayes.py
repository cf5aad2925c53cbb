import pytest

from floresta.classify.bayes import NaiveBayesClassifier
from floresta.storage.schema import LABELS


def _trained():
    clf = NaiveBayesClassifier(LABELS)
    clf.train([
        ("Positive", ["bom", "otimo"]),
        ("Neutral", ["normal"]),
        ("Negative", ["ruim", "pessimo"]),
    ])
    return clf


def test_empty_training_scores_uniformly():
    clf = NaiveBayesClassifier(LABELS)
    clf.train([("Positive", []), ("Neutral", []), ("Negative", [])])

    scores = clf.score(["qualquer", "coisa"])

    assert scores.probabilities == pytest.approx((1 / 3, 1 / 3, 1 / 3))
    assert scores.likely == 0
    assert scores.strict is False


def test_terms_pull_towards_their_class():
    clf = _trained()

    positive = clf.score(["bom"])
    negative = clf.score(["ruim", "pessimo"])

    assert positive.label == "Positive" and positive.likely == 0 and positive.strict
    assert negative.label == "Negative" and negative.likely == 2 and negative.strict
    assert sum(positive.probabilities) == pytest.approx(1.0)


def test_unseen_terms_leave_the_priors():
    scores = _trained().score(["nunca", "visto"])

    assert scores.probabilities == pytest.approx((1 / 3, 1 / 3, 1 / 3))
    assert scores.strict is False


def test_priors_follow_document_counts():
    clf = NaiveBayesClassifier(LABELS)
    clf.learn(["bom"], "Positive")
    clf.learn(["legal"], "Positive")
    clf.learn(["ruim"], "Negative")
    clf.fit()

    scores = clf.score([])

    assert scores.probabilities == pytest.approx((2 / 3, 0.0, 1 / 3))
    assert scores.label == "Positive"


def test_scoring_fits_pending_documents():
    clf = NaiveBayesClassifier(LABELS)
    clf.learn(["bom"], "Positive")
    clf.learn(["ruim"], "Negative")

    scores = clf.score(["ruim"])

    assert scores.label == "Negative"
    assert scores.probabilities[1] == 0.0


def test_train_accepts_a_mapping():
    clf = NaiveBayesClassifier(["Good", "Bad"])
    clf.train({"Good": ["feliz"], "Bad": ["triste"]})

    assert clf.score(["triste"]).label == "Bad"


def test_unknown_label_is_rejected():
    clf = NaiveBayesClassifier(LABELS)

    with pytest.raises(ValueError, match="unknown label"):
        clf.learn(["bom"], "Good")


def test_labels_must_be_distinct():
    with pytest.raises(ValueError):
        NaiveBayesClassifier(["Positive", "Positive"])
