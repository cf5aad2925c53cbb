"""
Naive Bayes classifier over term lists.

Each ``learn`` call adds one training document (a list of terms) for a label;
class priors follow the number of documents per label. Scoring returns the
posterior for every label, in the order the labels were declared.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB

from ..errors import ScoringError


@dataclass(frozen=True)
class Scores:
    probabilities: Tuple[float, ...]
    likely: int
    label: str
    strict: bool


class Classifier(Protocol):
    labels: Sequence[str]

    def train(self, labeled_sets: Sequence[Tuple[str, Sequence[str]]]) -> None: ...

    def score(self, tokens: Sequence[str]) -> Scores: ...


def _identity(doc):
    return doc


def _argmax_strict(arr: np.ndarray) -> Tuple[int, bool]:
    i = int(np.argmax(arr))
    return i, int(np.count_nonzero(arr == arr[i])) == 1


class NaiveBayesClassifier:
    def __init__(self, labels: Sequence[str], alpha: float = 1.0):
        if len(labels) < 2:
            raise ValueError("at least two labels are required")
        if len(set(labels)) != len(labels):
            raise ValueError(f"duplicate labels: {labels}")
        self.labels = list(labels)
        self.alpha = alpha
        self._label_index: Dict[str, int] = {lab: i for i, lab in enumerate(self.labels)}
        self._docs: List[List[str]] = []
        self._y: List[int] = []
        self._vectorizer: Optional[CountVectorizer] = None
        self._model: Optional[MultinomialNB] = None
        self._fitted = False

    def learn(self, terms: Sequence[str], label: str) -> None:
        if label not in self._label_index:
            raise ValueError(f"unknown label {label!r}, expected one of {self.labels}")
        self._docs.append(list(terms))
        self._y.append(self._label_index[label])
        self._fitted = False

    def train(self, labeled_sets) -> None:
        if isinstance(labeled_sets, Mapping):
            labeled_sets = labeled_sets.items()
        for label, terms in labeled_sets:
            self.learn(terms, label)
        self.fit()

    def fit(self) -> None:
        self._vectorizer = None
        self._model = None
        self._fitted = True
        if not any(self._docs):
            # nothing to count; scores fall back to the priors
            return
        vec = CountVectorizer(analyzer=_identity, lowercase=False)
        X = vec.fit_transform(self._docs)
        model = MultinomialNB(alpha=self.alpha)
        model.fit(X, self._y)
        self._vectorizer, self._model = vec, model

    def _priors(self) -> np.ndarray:
        counts = np.bincount(np.asarray(self._y, dtype=int), minlength=len(self.labels)).astype(float)
        if counts.sum() == 0:
            return np.full(len(self.labels), 1.0 / len(self.labels))
        return counts / counts.sum()

    def score(self, tokens: Sequence[str]) -> Scores:
        if not self._fitted:
            self.fit()
        try:
            if self._model is None:
                probs = self._priors()
            else:
                X = self._vectorizer.transform([list(tokens)])
                proba = self._model.predict_proba(X)[0]
                probs = np.zeros(len(self.labels))
                probs[self._model.classes_] = proba
        except ValueError as e:
            raise ScoringError(f"could not score {list(tokens)!r}: {e}") from e
        likely, strict = _argmax_strict(probs)
        return Scores(
            probabilities=tuple(float(p) for p in probs),
            likely=likely,
            label=self.labels[likely],
            strict=strict,
        )
