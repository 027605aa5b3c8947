"""
Exception hierarchy for the AI backend.

Each error knows the HTTP status it maps to; ``app.py`` registers a single
handler that renders ``to_dict()``.
"""
from typing import Any, Dict, Optional


class SymptomCheckerError(Exception):
    """Base exception for backend failures."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class PredictionServiceError(SymptomCheckerError):
    """The classifier ensemble could not be reached or answered garbage."""

    status_code = 503

    def __init__(self, message: str = "Prediction service unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="PREDICTION_SERVICE_UNAVAILABLE", details=details)


class UpstreamServiceError(SymptomCheckerError):
    """A third-party API (LLM, recipes, places) failed."""

    status_code = 502

    def __init__(self, message: str, service: str = "unknown", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="UPSTREAM_ERROR",
            details={"service": service, **(details or {})}
        )
        self.service = service


class ServiceNotConfiguredError(SymptomCheckerError):
    """A required API key or client is missing."""

    status_code = 503

    def __init__(self, service: str):
        super().__init__(
            message=f"{service} is not configured.",
            code="NOT_CONFIGURED",
            details={"service": service}
        )
        self.service = service
