"""Text normalization shared by training and prediction."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List

from nltk.stem import PorterStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

_NON_WORD = re.compile(r"[^\w\s]")


@lru_cache(maxsize=1)
def _stemmer() -> PorterStemmer:
    return PorterStemmer()


def normalize_text(text: str) -> str:
    """Lowercase ``text`` and drop every character that is not a word character or whitespace."""

    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    return _NON_WORD.sub("", text.lower())


def tokenize(text: str, *, stem: bool = False, remove_stopwords: bool = False) -> List[str]:
    """Normalize ``text`` and split it into words.

    Stopword removal runs before stemming so that the English stopword list is
    matched against surface forms.
    """

    words = normalize_text(text).split()
    if remove_stopwords:
        words = [word for word in words if word not in ENGLISH_STOP_WORDS]
    if stem:
        stemmer = _stemmer()
        words = [stemmer.stem(word) for word in words]
    return words


class Tokenizer:
    """Picklable callable used as the vectorizer analyzer."""

    def __init__(self, stem: bool = False, remove_stopwords: bool = False) -> None:
        self.stem = stem
        self.remove_stopwords = remove_stopwords

    def __call__(self, text: str) -> List[str]:
        return tokenize(text, stem=self.stem, remove_stopwords=self.remove_stopwords)

    def __repr__(self) -> str:
        return f"Tokenizer(stem={self.stem}, remove_stopwords={self.remove_stopwords})"
