# Fichier: sepitori/schemas/classification_schema.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Les champs sont optionnels pour pouvoir répondre 400 (et non 422) s'ils manquent
class PredictIn(BaseModel):
    text: Optional[str] = None


class TrainIn(BaseModel):
    text: Optional[str] = None
    label: Optional[str] = None


class Probabilities(_CamelModel):
    sepitori: float
    non_sepitori: float = Field(alias="nonSepitori")
    sepitori_confidence: float = Field(alias="sepitoriConfidence")
    non_confidence: float = Field(alias="nonConfidence")
    unseen_words: List[str] = Field(alias="unseenWords")


class PredictOut(_CamelModel):
    text: str
    final_label: str = Field(alias="finalLabel")
    probabilities: Probabilities


class TrainOut(BaseModel):
    success: bool
    message: Optional[str] = None


class DebugFeaturesOut(_CamelModel):
    total_features: int = Field(alias="totalFeatures")
    feature_keys: List[str] = Field(alias="featureKeys")


class HealthOut(_CamelModel):
    status: str
    model_loaded: bool = Field(alias="modelLoaded")
    total_features: int = Field(alias="totalFeatures")
