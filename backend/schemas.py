"""Request and response models for the AI backend.

Wire names are camelCase where the web client expects them
(``diseaseName``, ``aiInsights``); Python code uses the snake_case attributes.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.config import MAX_SYMPTOMS


def normalize_symptoms(symptoms: list[str]) -> list[str]:
    """Lower-case, trim and de-duplicate symptom names, keeping first-seen order."""
    if len(symptoms) > MAX_SYMPTOMS:
        raise ValueError(f"Maximum {MAX_SYMPTOMS} symptoms allowed")
    cleaned: list[str] = []
    for symptom in symptoms:
        symptom = symptom.strip().lower()
        if symptom and symptom not in cleaned:
            cleaned.append(symptom)
    if not cleaned:
        raise ValueError("Please provide at least one symptom")
    return cleaned


class SymptomRequest(BaseModel):
    symptoms: list[str]

    @field_validator("symptoms")
    @classmethod
    def _normalize(cls, value: list[str]) -> list[str]:
        return normalize_symptoms(value)


class AIInsights(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    severity: str
    recommended_actions: list[str] = Field(alias="recommendedActions")
    lifestyle_changes: list[str] = Field(alias="lifestyleChanges")
    warning_signs: list[str] = Field(alias="warningSigns")
    follow_up_recommendations: list[str] = Field(alias="followUpRecommendations")


class DiseaseDetails(BaseModel):
    """Structured guidance the LLM produces for one disease."""
    model_config = ConfigDict(populate_by_name=True)

    description: str
    precautions: list[str]
    medications: list[str]
    workouts: list[str]
    diets: list[str]
    ai_insights: AIInsights = Field(alias="aiInsights")


class DiseasePrediction(DiseaseDetails):
    disease_name: str = Field(alias="diseaseName")
    probability: float = Field(ge=0, le=100)


class PredictionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    predicted_probabilities: dict[str, float]
    individual_model_results: dict[str, dict[str, float]]
    input_symptoms: list[str]
    iterations_per_model: int = 0
    total_predictions: int = 0
    disease_predictions: list[DiseasePrediction] = Field(alias="diseasePredictions")


class ChatMessage(BaseModel):
    role: str
    content: str


class RecentSymptomEntry(BaseModel):
    """Condensed symptom-history item the frontend sends as chat context."""
    model_config = ConfigDict(populate_by_name=True)

    created_at: Optional[str] = Field(default=None, alias="createdAt")
    disease: Optional[str] = None
    symptoms: list[str] = []
    description: Optional[str] = None
    precautions: list[str] = []
    medications: list[str] = []
    workouts: list[str] = []
    diets: list[str] = []


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1)
    history: list[ChatMessage] = []
    recent_symptoms: list[RecentSymptomEntry] = Field(default=[], alias="recentSymptoms")


class ChatResponse(BaseModel):
    message: str
    history: list[ChatMessage]


class HealthResponse(BaseModel):
    status: str
    model: str
    llm_available: bool
