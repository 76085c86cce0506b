"""Offline training script."""

from __future__ import annotations

import pytest

import train_classifier
from sepitori.nlp.bayes_classifier import BayesClassifier, ClassifierError


def test_train_and_save_classifier(corpus_path, model_path):
    clf = train_classifier.train_and_save_classifier(corpus_path, model_path)

    assert sorted(clf.labels) == ["non-sepitori", "sepitori"]
    assert len(clf.documents) == 8
    assert BayesClassifier.load(model_path).known_features == clf.known_features


def test_empty_corpus_is_rejected(tmp_path, model_path):
    with pytest.raises(ClassifierError):
        train_classifier.train_and_save_classifier(tmp_path / "empty.jsonl", model_path)
    assert not model_path.exists()


def test_main_exit_codes(tmp_path, corpus_path, model_path):
    assert train_classifier.main(["--corpus", str(corpus_path), "--model", str(model_path)]) == 0
    assert model_path.exists()

    missing = tmp_path / "missing.jsonl"
    assert train_classifier.main(["--corpus", str(missing), "--model", str(tmp_path / "other.pkl")]) == 1


def test_main_reports_corrupt_corpus(tmp_path):
    corpus = tmp_path / "broken.jsonl"
    corpus.write_text("{broken\n", encoding="utf-8")
    assert train_classifier.main(["--corpus", str(corpus), "--model", str(tmp_path / "m.pkl")]) == 1
