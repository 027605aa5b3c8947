"""
Classifier Gateway

Thin client for the remote ML service that runs the Decision Tree,
Naive Bayes and Random Forest ensemble. The service answers with one
probability map per model plus a combined map; this module only reshapes
that payload and never retries.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from backend import config
from backend.exceptions import PredictionServiceError

logger = logging.getLogger(__name__)

MODEL_NAMES = ("DecisionTree", "NaiveBayes", "RandomForest")


@dataclass
class ClassifierResult:
    """Raw classifier output, probabilities as percentages in [0, 100]."""
    per_model: Dict[str, Dict[str, float]]
    combined: Dict[str, float]
    input_symptoms: List[str] = field(default_factory=list)
    iterations_per_model: int = 0
    total_predictions: int = 0


def _coerce_probabilities(raw: Any) -> Dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    probabilities = {}
    for disease, value in raw.items():
        try:
            pct = float(value)
        except (TypeError, ValueError):
            continue
        probabilities[str(disease)] = min(max(pct, 0.0), 100.0)
    return probabilities


def merge_model_probabilities(per_model: Dict[str, Dict[str, float]]) -> Dict[str, float]:
    """
    Average per-model maps into one table.

    A disease a model did not predict counts as 0 for that model. Key order
    follows first appearance across models.
    """
    if not per_model:
        return {}
    totals: Dict[str, float] = {}
    for probabilities in per_model.values():
        for disease, pct in probabilities.items():
            totals[disease] = totals.get(disease, 0.0) + pct
    return {disease: total / len(per_model) for disease, total in totals.items()}


def parse_classifier_payload(data: Any, symptoms: List[str]) -> ClassifierResult:
    if not isinstance(data, dict):
        raise PredictionServiceError(details={"reason": "response is not a JSON object"})

    raw_models = data.get("individual_model_results") or {}
    per_model = {
        name: _coerce_probabilities(raw_models.get(name)) if isinstance(raw_models, dict) else {}
        for name in MODEL_NAMES
    }

    combined = _coerce_probabilities(data.get("predicted_probabilities"))
    if not combined:
        present = {name: probs for name, probs in per_model.items() if probs}
        combined = merge_model_probabilities(present)
    if not combined:
        raise PredictionServiceError(details={"reason": "no predicted probabilities"})

    return ClassifierResult(
        per_model=per_model,
        combined=combined,
        input_symptoms=list(data.get("input_symptoms") or symptoms),
        iterations_per_model=int(data.get("iterations_per_model") or 0),
        total_predictions=int(data.get("total_predictions") or 0),
    )


class ClassifierGateway:
    """HTTP client for the remote ``/predict`` endpoint."""

    def __init__(
        self,
        url: str = config.CLASSIFIER_URL,
        timeout: float = config.CLASSIFIER_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def predict(self, symptoms: List[str]) -> ClassifierResult:
        try:
            response = self.session.post(self.url, json={"symptoms": symptoms}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Classifier request failed: {e}")
            raise PredictionServiceError(details={"reason": "connection failed"}) from e

        if response.status_code != 200:
            logger.error(f"Classifier responded with status {response.status_code}")
            raise PredictionServiceError(details={"status": response.status_code})

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Classifier returned a non-JSON body")
            raise PredictionServiceError(details={"reason": "invalid JSON"}) from e

        return parse_classifier_payload(data, symptoms)
