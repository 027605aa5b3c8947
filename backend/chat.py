"""Follow-up chat assistant that knows the user's recent symptom history."""
import logging
from typing import List, Optional

from huggingface_hub import InferenceClient

from backend import config
from backend.exceptions import ServiceNotConfiguredError, UpstreamServiceError
from backend.schemas import ChatMessage, RecentSymptomEntry

logger = logging.getLogger(__name__)

MEDICAL_DISCLAIMER = (
    "The information provided is for informational purposes only and is not a substitute "
    "for professional medical advice, diagnosis, or treatment. Always seek the advice of your "
    "physician or other qualified health provider with any questions you may have regarding "
    "a medical condition."
)

TONE_INSTRUCTIONS = (
    "- Be empathetic and acknowledge the user's concerns\n"
    "- Use simple, non-technical language\n"
    "- Include appropriate disclaimers\n"
    "- Provide practical, actionable advice when appropriate\n"
    "- Reference the user's symptom history when relevant\n"
)


def build_medical_context(recent_symptoms: List[RecentSymptomEntry]) -> str:
    context = "Recent Symptom History:\n"
    if not recent_symptoms:
        context += "No recent symptom history available.\n"
    for entry in recent_symptoms:
        context += (
            f"\nDate: {entry.created_at or 'unknown'}\n"
            f"Disease: {entry.disease or 'unknown'}\n"
            f"Symptoms: {', '.join(entry.symptoms)}\n"
            f"Description: {entry.description or ''}\n"
            f"Precautions: {', '.join(entry.precautions)}\n"
            f"Medications: {', '.join(entry.medications)}\n"
            f"Workouts: {', '.join(entry.workouts)}\n"
            f"Diets: {', '.join(entry.diets)}\n"
            "---\n"
        )
    return (
        f"{context}\nMedical Disclaimer:\n{MEDICAL_DISCLAIMER}\n\n"
        f"Tone Instructions:\n{TONE_INSTRUCTIONS}"
    )


class ChatAssistant:
    def __init__(self, client: Optional[InferenceClient] = None, model: str = config.MODEL_NAME):
        self.client = client
        self.model = model

    def reply(
        self,
        message: str,
        history: List[ChatMessage],
        recent_symptoms: List[RecentSymptomEntry],
    ) -> tuple[str, List[ChatMessage]]:
        """Send one user turn; return the answer and the extended history."""
        if self.client is None:
            raise ServiceNotConfiguredError("Chat model")

        messages = [{"role": "system", "content": build_medical_context(recent_symptoms)}]
        messages += [{"role": m.role, "content": m.content} for m in history]
        messages.append({"role": "user", "content": message})

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=config.LLM_MAX_TOKENS,
                temperature=0.7,
            )
            text = completion.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"Chat completion failed: {e}")
            raise UpstreamServiceError("Failed to process chat message", service="llm") from e

        return text, [
            *history,
            ChatMessage(role="user", content=message),
            ChatMessage(role="assistant", content=text),
        ]
