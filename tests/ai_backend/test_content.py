"""
Unit tests for the LLM content generator.

Verifies structured parsing and that every failure degrades to placeholder
content instead of raising.
"""
import json

import pytest
from unittest.mock import Mock

from backend.content import (
    FALLBACK_DESCRIPTION,
    ContentGenerator,
    fallback_details,
    parse_details,
)
from backend.schemas import DiseaseDetails

FULL_ANSWER = {
    "description": "A viral infection of the respiratory tract.",
    "precautions": ["Rest", "Stay hydrated"],
    "medications": ["Paracetamol"],
    "workouts": ["Light walking"],
    "diets": ["Warm soups"],
    "aiInsights": {
        "severity": "Moderate",
        "recommendedActions": ["Monitor temperature"],
        "lifestyleChanges": ["Sleep more"],
        "warningSigns": ["Difficulty breathing"],
        "followUpRecommendations": ["See a GP if fever lasts 3 days"],
    },
}


def _client_returning(text):
    client = Mock()
    completion = Mock()
    completion.choices = [Mock(message=Mock(content=text))]
    client.chat.completions.create.return_value = completion
    return client


def _assert_placeholder(details: DiseaseDetails):
    assert details.description == FALLBACK_DESCRIPTION
    for items in (details.precautions, details.medications, details.workouts, details.diets):
        assert len(items) > 0
    assert details.ai_insights.severity == "Unknown"


class TestParseDetails:

    def test_parses_fenced_json(self):
        text = "```json\n" + json.dumps(FULL_ANSWER) + "\n```"
        details = parse_details(text)

        assert details.description.startswith("A viral infection")
        assert details.medications == ["Paracetamol"]
        assert details.ai_insights.warning_signs == ["Difficulty breathing"]

    def test_fills_empty_fields(self):
        details = parse_details(json.dumps({"description": "Short.", "precautions": []}))

        assert details.description == "Short."
        assert details.precautions == ["Consult with a healthcare professional"]
        assert details.diets
        assert details.ai_insights.severity == "Unknown"

    @pytest.mark.parametrize("text", [None, "", "not json", "[1, 2]"])
    def test_rejects_unusable_text(self, text):
        with pytest.raises(ValueError):
            parse_details(text)


class TestContentGenerator:

    def test_without_client_returns_fallback(self):
        generator = ContentGenerator(client=None)

        assert not generator.is_available
        _assert_placeholder(generator.describe("Flu"))

    def test_uses_structured_output(self):
        client = _client_returning(json.dumps(FULL_ANSWER))
        generator = ContentGenerator(client=client, model="test-model")

        details = generator.describe("Flu")

        assert details.workouts == ["Light walking"]
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["response_format"]["json_schema"]["name"] == "DiseaseDetails"
        assert '"Flu"' in kwargs["messages"][-1]["content"]

    def test_call_failure_returns_fallback(self):
        client = Mock()
        client.chat.completions.create.side_effect = RuntimeError("rate limited")

        _assert_placeholder(ContentGenerator(client=client).describe("Flu"))

    def test_garbage_answer_returns_fallback(self):
        client = _client_returning("Sorry, I cannot help with that.")

        _assert_placeholder(ContentGenerator(client=client).describe("Flu"))

    def test_fallback_is_a_fresh_copy(self):
        first = fallback_details()
        first.precautions.append("mutated")

        assert "mutated" not in fallback_details().precautions
