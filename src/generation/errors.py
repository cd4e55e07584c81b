"""Failure taxonomy for calls to the text-generation collaborator."""
from __future__ import annotations


class GenerationError(Exception):
    """Base class; every orchestrator failure is one of the subclasses below."""


class MissingCredentialError(GenerationError):
    def __init__(self, message: str = "API 키가 설정되지 않았습니다.") -> None:
        super().__init__(message)


class CollaboratorError(GenerationError):
    """Transport, quota or authentication failure reported by the model API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)


class SchemaValidationError(GenerationError):
    """The model answered, but the payload is not the structured shape we asked for."""


def describe_generation_error(exc: Exception) -> str:
    """Return the Korean notice shown to the user for a failed request."""
    if isinstance(exc, MissingCredentialError):
        return "먼저 Gemini API 키를 설정해주세요."
    if isinstance(exc, CollaboratorError):
        if exc.is_auth_failure:
            return "Gemini 인증에 실패했습니다. API 키를 확인해 주세요."
        if exc.status_code == 429:
            return "Gemini 사용량 한도를 초과했습니다. 잠시 후 다시 시도해 주세요."
        return f"Gemini 요청에 실패했습니다: {exc}"
    if isinstance(exc, SchemaValidationError):
        return "AI 응답 형식이 올바르지 않습니다. 다시 시도해 주세요."
    return f"요청 처리 중 오류가 발생했습니다: {exc}"
