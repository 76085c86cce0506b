"""Incremental training: add an example, retrain, persist, record it in the corpus."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from sepitori.nlp.bayes_classifier import BayesClassifier, ClassifierError
from sepitori.services.training_corpus import CorpusError, TrainingCorpus

logger = logging.getLogger(__name__)


class ModelNotLoadedError(Exception):
    """There is no live classifier to train."""


class PersistenceError(Exception):
    """The model was retrained in memory but could not be written to disk."""


class TrainingService:
    """Serialises retraining of the live classifier held in ``state.classifier``.

    The live classifier is read and replaced only while the lock is held, so a
    request can never retrain a copy that an earlier request already replaced.
    """

    def __init__(
        self,
        corpus: TrainingCorpus,
        model_path: str | Path,
        state: Any,
        reload_after_train: bool = False,
    ) -> None:
        self.corpus = corpus
        self.model_path = Path(model_path)
        self.state = state
        self.reload_after_train = reload_after_train
        self._lock = threading.Lock()

    def add_example(self, text: str, label: str) -> BayesClassifier:
        """Train the live classifier on one more example and return the classifier now serving.

        With ``reload_after_train`` the model is read back from disk and the
        fresh copy replaces ``state.classifier``.

        Raises:
            ModelNotLoadedError: no classifier has been loaded yet.
            ClassifierError: the retrain itself failed; the example is dropped.
            PersistenceError: the model or the corpus could not be written.
        """

        with self._lock:
            classifier = getattr(self.state, "classifier", None)
            if classifier is None:
                raise ModelNotLoadedError("Model not loaded yet")

            classifier.add_document(text, label)
            try:
                classifier.train()
            except ClassifierError:
                classifier.documents.pop()
                logger.error("--- [TRAIN] Retrain failed, example dropped: '%s'", text)
                raise

            try:
                classifier.save(self.model_path)
            except ClassifierError as exc:
                logger.exception("--- [TRAIN] Could not save the model to '%s'", self.model_path)
                raise PersistenceError("Model updated in memory but could not be saved") from exc

            try:
                self.corpus.append(text, label)
            except CorpusError as exc:
                logger.exception("--- [TRAIN] Could not append to corpus '%s'", self.corpus.path)
                raise PersistenceError("Model updated but the training corpus could not be written") from exc

            if self.reload_after_train:
                try:
                    classifier = BayesClassifier.load(self.model_path)
                except ClassifierError as exc:
                    logger.exception("--- [TRAIN] Could not reload the model from '%s'", self.model_path)
                    raise PersistenceError("Model saved but could not be reloaded") from exc
                self.state.classifier = classifier

        logger.info("--- [TRAIN] Added '%s' as '%s'", text, label)
        return classifier
