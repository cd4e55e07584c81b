from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.generation.errors import SchemaValidationError

M = TypeVar("M", bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)


class TopicSuggestion(_Payload):
    title: str = Field(min_length=1)
    reasoning: str = Field(min_length=1)


class AnalysisResult(_Payload):
    tone: str = Field(min_length=1)
    target_audience: str = Field(alias="targetAudience", min_length=1)
    key_themes: Tuple[str, ...] = Field(alias="keyThemes", min_length=1)
    suggested_topics: Tuple[TopicSuggestion, ...] = Field(alias="suggestedTopics", min_length=1)


class ThumbnailConcept(_Payload):
    title: str = Field(min_length=1)
    subtitle: Optional[str] = None
    image_prompt: str = Field(alias="imagePrompt", min_length=1)

    @field_validator("subtitle")
    @classmethod
    def blank_subtitle_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class RecommendedTechnique(_Payload):
    name: str = Field(min_length=1)
    description: str = ""
    examples: Tuple[str, ...] = ()


class ScriptAnalysisReport(_Payload):
    original_intent: str = Field(alias="originalIntent", min_length=1)
    detected_emotion: str = Field(alias="detectedEmotion", min_length=1)
    target_audience: str = Field(alias="targetAudience", min_length=1)
    recommended_technique: RecommendedTechnique = Field(alias="recommendedTechnique")
    strength_score: float = Field(alias="strengthScore", ge=0, le=10)
    improvement_areas: Tuple[str, ...] = Field(alias="improvementAreas")

    @property
    def strength_label(self) -> str:
        if self.strength_score >= 8:
            return "우수"
        if self.strength_score >= 6:
            return "보통"
        return "개선 필요"


class HollywoodTopic(_Payload):
    title: str = Field(min_length=1)
    hook: str = Field(min_length=1)
    applied_technique: str = Field(alias="appliedTechnique", min_length=1)
    viral_potential: float = Field(alias="viralPotential", ge=0, le=10)
    reasoning: str = ""


class HollywoodTopicList(_Payload):
    suggestions: Tuple[HollywoodTopic, ...] = Field(min_length=1)


class ActStructure(_Payload):
    act1: str = ""
    act2: str = ""
    act3: str = ""


class HollywoodScript(_Payload):
    technique: str
    structure: ActStructure
    full_script: str
    key_elements: Tuple[str, ...] = ()


def parse_payload(model: Type[M], text: Optional[str]) -> M:
    """Validate a JSON payload from the model; any defect becomes SchemaValidationError."""
    if not text or not text.strip():
        raise SchemaValidationError("Empty structured response from the model.")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaValidationError(f"Model response is not valid JSON: {exc}") from exc
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise SchemaValidationError(f"Model response is missing required fields: {exc.error_count()} error(s)") from exc


# ----------------------------
# Response schemas sent to Gemini (OpenAPI subset)
# ----------------------------
ANALYSIS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "tone": {"type": "STRING", "description": "한국어로 된 톤 (예: 유머러스한, 진지한)"},
        "targetAudience": {"type": "STRING", "description": "한국어로 된 타겟 시청자 설명"},
        "keyThemes": {
            "type": "ARRAY",
            "items": {"type": "STRING", "description": "한국어로 된 핵심 테마"},
        },
        "suggestedTopics": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING", "description": "눈길을 끄는 한국어 유튜브 제목"},
                    "reasoning": {"type": "STRING", "description": "이 제목이 효과적인 이유 (한국어)"},
                },
                "required": ["title", "reasoning"],
            },
        },
    },
    "required": ["tone", "targetAudience", "keyThemes", "suggestedTopics"],
}

THUMBNAIL_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "썸네일에 크게 들어갈 짧은 한국어 문구"},
        "subtitle": {"type": "STRING", "description": "보조 문구 (선택)"},
        "imagePrompt": {"type": "STRING", "description": "English prompt for the background image, no text in image"},
    },
    "required": ["title", "imagePrompt"],
}

SCRIPT_REPORT_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "originalIntent": {"type": "STRING"},
        "detectedEmotion": {"type": "STRING"},
        "targetAudience": {"type": "STRING"},
        "recommendedTechnique": {
            "type": "OBJECT",
            "properties": {
                "name": {"type": "STRING"},
                "description": {"type": "STRING"},
                "examples": {"type": "ARRAY", "items": {"type": "STRING"}},
            },
        },
        "strengthScore": {"type": "NUMBER"},
        "improvementAreas": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "originalIntent",
        "detectedEmotion",
        "targetAudience",
        "recommendedTechnique",
        "strengthScore",
        "improvementAreas",
    ],
}

HOLLYWOOD_TOPICS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "suggestions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "hook": {"type": "STRING"},
                    "appliedTechnique": {"type": "STRING"},
                    "viralPotential": {"type": "NUMBER"},
                    "reasoning": {"type": "STRING"},
                },
                "required": ["title", "hook", "appliedTechnique", "viralPotential", "reasoning"],
            },
        }
    },
    "required": ["suggestions"],
}
