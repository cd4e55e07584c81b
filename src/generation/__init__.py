"""Gemini-backed analysis, script and thumbnail generation."""

from .errors import (
    CollaboratorError,
    GenerationError,
    MissingCredentialError,
    SchemaValidationError,
    describe_generation_error,
)
from .orchestrator import SCRIPT_FALLBACK_NOTICE, GenerationOrchestrator
from .schemas import AnalysisResult, ThumbnailConcept, TopicSuggestion

__all__ = [
    "CollaboratorError",
    "GenerationError",
    "MissingCredentialError",
    "SchemaValidationError",
    "describe_generation_error",
    "SCRIPT_FALLBACK_NOTICE",
    "GenerationOrchestrator",
    "AnalysisResult",
    "ThumbnailConcept",
    "TopicSuggestion",
]
