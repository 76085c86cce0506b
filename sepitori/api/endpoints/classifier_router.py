"""Routes for Sepitori prediction, incremental training and model introspection."""

from __future__ import annotations

import logging
import threading
from types import SimpleNamespace

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from sepitori.core.config import settings
from sepitori.nlp.bayes_classifier import BayesClassifier, ClassifierError
from sepitori.schemas import classification_schema
from sepitori.services import prediction_service
from sepitori.services.training_corpus import TrainingCorpus
from sepitori.services.training_service import ModelNotLoadedError, PersistenceError, TrainingService

router = APIRouter(tags=["Classifier"])
if getattr(router, "state", None) is None:
    router.state = SimpleNamespace()

_service_lock = threading.Lock()
logger = logging.getLogger(__name__)


def init_classifier() -> None:
    if getattr(router.state, "classifier", None):
        return

    try:
        classifier = BayesClassifier.load(settings.MODEL_PATH)
        router.state.classifier = classifier
        logger.info("✅ Model loaded and ready (%s features).", classifier.feature_count)
    except ClassifierError as exc:
        logger.error("❌ Failed to load model: %s", exc)
        router.state.classifier = None


def get_classifier() -> BayesClassifier:
    classifier = getattr(router.state, "classifier", None)
    if not classifier:
        raise HTTPException(status_code=503, detail="Model not loaded yet")
    return classifier


def get_training_service() -> TrainingService:
    with _service_lock:
        service = getattr(router.state, "training_service", None)
        if service is None:
            service = TrainingService(
                corpus=TrainingCorpus(settings.TRAINING_DATA_PATH),
                model_path=settings.MODEL_PATH,
                state=router.state,
                reload_after_train=settings.RELOAD_MODEL_AFTER_TRAIN,
            )
            router.state.training_service = service
    return service


def get_label_rules() -> prediction_service.LabelRules:
    return prediction_service.LabelRules.from_settings(settings)


@router.post("/predict", response_model=classification_schema.PredictOut)
def predict(
    payload: classification_schema.PredictIn,
    clf: BayesClassifier = Depends(get_classifier),
    rules: prediction_service.LabelRules = Depends(get_label_rules),
):
    if not payload.text:
        raise HTTPException(status_code=400, detail="Text is required")

    result = prediction_service.predict(clf, payload.text, rules)
    return classification_schema.PredictOut(**result)


@router.post(
    "/train",
    response_model=classification_schema.TrainOut,
    dependencies=[Depends(get_classifier)],
)
def train(
    payload: classification_schema.TrainIn,
    service: TrainingService = Depends(get_training_service),
):
    if not payload.text or not payload.label:
        raise HTTPException(status_code=400, detail="Text and label are required")

    try:
        service.add_example(payload.text, payload.label)
    except ModelNotLoadedError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except ClassifierError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        return JSONResponse(status_code=500, content={"success": False, "message": str(exc)})

    return {"success": True, "message": "New sentence added and model updated!"}


@router.get("/debug-features", response_model=classification_schema.DebugFeaturesOut)
def debug_features(clf: BayesClassifier = Depends(get_classifier)):
    keys = sorted(clf.known_features)
    return classification_schema.DebugFeaturesOut(
        total_features=len(keys),
        feature_keys=keys[: settings.DEBUG_FEATURES_LIMIT],
    )


@router.get("/health", response_model=classification_schema.HealthOut)
def health():
    classifier = getattr(router.state, "classifier", None)
    return classification_schema.HealthOut(
        status="ok",
        model_loaded=classifier is not None,
        total_features=classifier.feature_count if classifier else 0,
    )
