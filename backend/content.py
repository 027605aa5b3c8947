"""
Content Generator

Asks the LLM for structured guidance about one disease. Generation is
best-effort: a failed call or unusable answer degrades to placeholder
content so the disease still shows up in the prediction list.
"""
import json
import logging
import re
from typing import Any, Optional

from huggingface_hub import InferenceClient
from pydantic import ValidationError

from backend import config
from backend.schemas import DiseaseDetails

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Information not available"

FALLBACK_LISTS = {
    "precautions": ["Consult with a healthcare professional"],
    "medications": ["Consult with a doctor for proper medication"],
    "workouts": ["Light exercise as recommended by doctor"],
    "diets": ["Balanced diet as recommended by nutritionist"],
}

FALLBACK_INSIGHTS = {
    "severity": "Unknown",
    "recommendedActions": ["Seek medical consultation"],
    "lifestyleChanges": ["Maintain healthy lifestyle"],
    "warningSigns": ["Monitor symptoms closely"],
    "followUpRecommendations": ["Regular medical check-ups"],
}

_FENCE_RE = re.compile(r"```(?:json)?\s*|\s*```")

response_format = {
    "type": "json_schema",
    "json_schema": {
        "name": "DiseaseDetails",
        "schema": DiseaseDetails.model_json_schema(),
        "strict": True,
    },
}


def fallback_details() -> DiseaseDetails:
    return DiseaseDetails.model_validate({
        "description": FALLBACK_DESCRIPTION,
        **{key: list(values) for key, values in FALLBACK_LISTS.items()},
        "aiInsights": {
            key: list(value) if isinstance(value, list) else value
            for key, value in FALLBACK_INSIGHTS.items()
        },
    })


def build_prompt(disease_name: str) -> str:
    return (
        f'For the disease "{disease_name}", return only a JSON object with:\n'
        '"description": a brief description of the disease,\n'
        '"precautions": [...], "medications": [...] (common medications), '
        '"workouts": [...] (recommended exercises), "diets": [...] (dietary recommendations),\n'
        '"aiInsights": {"severity": "Mild/Moderate/Severe", "recommendedActions": [...], '
        '"lifestyleChanges": [...], "warningSigns": [...], "followUpRecommendations": [...]}\n'
    )


def _fill_empty(data: dict[str, Any]) -> dict[str, Any]:
    for key, placeholder in FALLBACK_LISTS.items():
        if not data.get(key):
            data[key] = list(placeholder)
    if not str(data.get("description") or "").strip():
        data["description"] = FALLBACK_DESCRIPTION

    insights = data.get("aiInsights")
    if not isinstance(insights, dict):
        insights = {}
    for key, placeholder in FALLBACK_INSIGHTS.items():
        if not insights.get(key):
            insights[key] = list(placeholder) if isinstance(placeholder, list) else placeholder
    data["aiInsights"] = insights
    return data


def parse_details(text: Optional[str]) -> DiseaseDetails:
    """Parse an LLM answer, tolerating markdown fences and missing fields.

    Raises ``ValueError`` (``json.JSONDecodeError`` or ``ValidationError``)
    when the text cannot be turned into ``DiseaseDetails``.
    """
    if not text:
        raise ValueError("empty completion")
    data = json.loads(_FENCE_RE.sub("", text).strip())
    if not isinstance(data, dict):
        raise ValueError("completion is not a JSON object")
    return DiseaseDetails.model_validate(_fill_empty(data))


class ContentGenerator:
    """Generates ``DiseaseDetails`` for a disease name through the LLM."""

    def __init__(self, client: Optional[InferenceClient] = None, model: str = config.MODEL_NAME):
        self.client = client
        self.model = model

    @property
    def is_available(self) -> bool:
        return self.client is not None

    def describe(self, disease_name: str) -> DiseaseDetails:
        if self.client is None:
            return fallback_details()

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": "Return JSON only."},
                          {"role": "user", "content": build_prompt(disease_name)}],
                max_tokens=config.LLM_MAX_TOKENS,
                temperature=config.LLM_TEMPERATURE,
                response_format=response_format,
            )
            text = completion.choices[0].message.content
        except Exception as e:
            logger.warning(f"Content generation failed for '{disease_name}': {e}")
            return fallback_details()

        try:
            return parse_details(text)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Unparseable content for '{disease_name}': {e}")
            return fallback_details()

