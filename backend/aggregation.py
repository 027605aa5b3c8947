"""
Aggregation & Enrichment

Turns one classifier call into a ranked list of enriched disease
predictions. All prediction endpoints go through ``analyze_symptoms``;
callers only decide what to do with the result (persist it, reshape it).
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Tuple

from backend.classifier import MODEL_NAMES, ClassifierGateway, ClassifierResult
from backend.content import ContentGenerator, fallback_details
from backend.exceptions import PredictionServiceError
from backend.schemas import DiseaseDetails, DiseasePrediction, PredictionResponse

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    symptoms: List[str]
    classifier: ClassifierResult
    predictions: List[DiseasePrediction]

    @property
    def top(self) -> DiseasePrediction:
        return self.predictions[0]

    def to_response(self) -> PredictionResponse:
        return PredictionResponse(
            predicted_probabilities={p.disease_name: p.probability for p in self.predictions},
            individual_model_results={
                name: self.classifier.per_model.get(name, {}) for name in MODEL_NAMES
            },
            input_symptoms=self.classifier.input_symptoms or self.symptoms,
            iterations_per_model=self.classifier.iterations_per_model,
            total_predictions=self.classifier.total_predictions,
            disease_predictions=self.predictions,
        )


def rank_probabilities(probabilities: Dict[str, float]) -> List[Tuple[str, float]]:
    """
    Rank a disease -> percentage map.

    Names are trimmed and merged case-insensitively (highest probability
    wins, first spelling is kept). Order is probability descending, then
    name ascending so equal scores rank deterministically.
    """
    merged: Dict[str, Tuple[str, float]] = {}
    for name, pct in probabilities.items():
        name = name.strip()
        if not name:
            continue
        key = name.casefold()
        if key in merged:
            spelling, best = merged[key]
            merged[key] = (spelling, max(best, pct))
        else:
            merged[key] = (name, pct)
    return sorted(merged.values(), key=lambda item: (-item[1], item[0].casefold()))


def _describe(generator: ContentGenerator, disease_name: str) -> DiseaseDetails:
    try:
        return generator.describe(disease_name)
    except Exception:
        logger.exception(f"Content generator crashed for '{disease_name}', using fallback")
        return fallback_details()


def enrich(ranked: List[Tuple[str, float]], generator: ContentGenerator) -> List[DiseasePrediction]:
    """Fetch details once per disease, concurrently, preserving rank order."""
    if not ranked:
        return []

    with ThreadPoolExecutor(max_workers=len(ranked)) as executor:
        futures = [executor.submit(_describe, generator, name) for name, _ in ranked]
        details = [future.result() for future in futures]

    return [
        DiseasePrediction(
            disease_name=name,
            probability=pct,
            **info.model_dump(),
        )
        for (name, pct), info in zip(ranked, details)
    ]


def analyze_symptoms(
    symptoms: List[str],
    gateway: ClassifierGateway,
    generator: ContentGenerator,
) -> AnalysisResult:
    """
    Run the classifier once and enrich every distinct predicted disease.

    Raises:
        PredictionServiceError: the classifier call failed; nothing else ran.
    """
    result = gateway.predict(symptoms)
    ranked = rank_probabilities(result.combined)
    if not ranked:
        raise PredictionServiceError(details={"reason": "no named diseases"})
    logger.info(f"Classifier returned {len(ranked)} diseases for {len(symptoms)} symptoms")
    predictions = enrich(ranked, generator)
    return AnalysisResult(symptoms=symptoms, classifier=result, predictions=predictions)
