"""Fixtures for the Django frontend tests."""
import pytest
from django.core.cache import cache

from payloads import make_prediction

PASSWORD = "s3cure-Passw0rd!"


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user("alice", "alice@example.com", PASSWORD)


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user("bob", "bob@example.com", PASSWORD)


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def backend_payload():
    """What the AI backend answers for ``POST /predict``."""
    return {
        "predicted_probabilities": {"Flu": 80.0, "Common Cold": 15.0, "Migraine": 5.0},
        "individual_model_results": {
            "DecisionTree": {"Flu": 90.0},
            "NaiveBayes": {"Flu": 70.0, "Common Cold": 30.0},
            "RandomForest": {"Flu": 80.0, "Migraine": 20.0},
        },
        "input_symptoms": ["fever", "headache"],
        "iterations_per_model": 10,
        "total_predictions": 30,
        "diseasePredictions": [
            make_prediction("Flu", 80.0),
            make_prediction("Common Cold", 15.0),
            make_prediction("Migraine", 5.0),
        ],
    }


@pytest.fixture
def entry_factory():
    from frontend.frontend_app.models import SymptomEntry

    def create(owner, symptoms=("fever",), predictions=None):
        predictions = predictions or [make_prediction("Flu", 60.0), make_prediction("Cold", 40.0)]
        return SymptomEntry.objects.create_with_predictions(owner, list(symptoms), predictions)

    return create
