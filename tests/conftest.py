"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the sepitori package and train_classifier are importable when tests run from the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sepitori.api.endpoints import classifier_router
from sepitori.main import app
from sepitori.nlp.bayes_classifier import BayesClassifier
from sepitori.services.training_corpus import TrainingCorpus
from sepitori.services.training_service import TrainingService

from tests.utils import EXAMPLES


@pytest.fixture()
def corpus_path(tmp_path) -> Path:
    path = tmp_path / "data" / "training.jsonl"
    path.parent.mkdir(parents=True)
    path.write_text("".join(json.dumps(row) + "\n" for row in EXAMPLES), encoding="utf-8")
    return path


@pytest.fixture()
def model_path(tmp_path) -> Path:
    return tmp_path / "data" / "sepitori_classifier.pkl"


@pytest.fixture()
def classifier() -> BayesClassifier:
    clf = BayesClassifier()
    for row in EXAMPLES:
        clf.add_document(row["text"], row["label"])
    clf.train()
    return clf


@pytest.fixture()
def training_service(corpus_path, model_path, router_state) -> TrainingService:
    return TrainingService(corpus=TrainingCorpus(corpus_path), model_path=model_path, state=router_state)


@pytest.fixture()
def router_state():
    """Reset the router state before and after each test."""

    state = classifier_router.router.state
    state.classifier = None
    state.training_service = None
    try:
        yield state
    finally:
        state.classifier = None
        state.training_service = None


@pytest.fixture()
def client(router_state, classifier, training_service) -> TestClient:
    router_state.classifier = classifier
    router_state.training_service = training_service
    return TestClient(app)


@pytest.fixture()
def unloaded_client(router_state, training_service) -> TestClient:
    router_state.training_service = training_service
    return TestClient(app)
