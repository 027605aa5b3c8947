"""Fixtures for the AI backend tests: fake classifier and content generator."""
import threading
from unittest.mock import Mock

import pytest

from backend.classifier import ClassifierGateway, ClassifierResult
from backend.content import ContentGenerator, fallback_details


class RecordingGenerator(ContentGenerator):
    """Returns canned details and remembers which diseases were asked for."""

    def __init__(self, failing=()):
        super().__init__(client=None)
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def describe(self, disease_name):
        with self._lock:
            self.calls.append(disease_name)
        if disease_name in self.failing:
            raise RuntimeError(f"LLM exploded on {disease_name}")
        return fallback_details().model_copy(update={
            "description": f"About {disease_name}",
            "precautions": [f"Rest ({disease_name})"],
        })


@pytest.fixture
def classifier_result() -> ClassifierResult:
    return ClassifierResult(
        per_model={
            "DecisionTree": {"Flu": 90.0, "Common Cold": 10.0},
            "NaiveBayes": {"Flu": 70.0, "Common Cold": 20.0, "Migraine": 10.0},
            "RandomForest": {"Flu": 80.0, "Common Cold": 15.0, "Migraine": 5.0},
        },
        combined={"Flu": 80.0, "Common Cold": 15.0, "Migraine": 5.0},
        input_symptoms=["fever", "headache"],
        iterations_per_model=10,
        total_predictions=30,
    )


@pytest.fixture
def gateway(classifier_result) -> Mock:
    mock = Mock(spec=ClassifierGateway)
    mock.predict.return_value = classifier_result
    return mock


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def make_generator():
    return RecordingGenerator
