"""AI backend: classifier gateway, LLM content generation and symptom aggregation."""
