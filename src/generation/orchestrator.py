"""Mediates between workflow steps and the Gemini text collaborator.

Each public method is one request/response round trip. Nothing here retries:
a failed call raises a ``GenerationError`` subclass and the user re-submits.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Protocol, Sequence

from src.credentials import CredentialStore
from src.generation import prompts
from src.generation.errors import MissingCredentialError
from src.generation.schemas import (
    ANALYSIS_RESPONSE_SCHEMA,
    HOLLYWOOD_TOPICS_RESPONSE_SCHEMA,
    SCRIPT_REPORT_RESPONSE_SCHEMA,
    THUMBNAIL_RESPONSE_SCHEMA,
    ActStructure,
    AnalysisResult,
    HollywoodScript,
    HollywoodTopic,
    HollywoodTopicList,
    ScriptAnalysisReport,
    ThumbnailConcept,
    parse_payload,
)

_logger = logging.getLogger(__name__)

SCRIPT_FALLBACK_NOTICE = "대본 생성에 실패했습니다."
HOLLYWOOD_FALLBACK_NOTICE = "대본 생성 실패"


class TextGenerator(Protocol):
    def generate_text(self, prompt: str) -> str: ...

    def generate_json(self, prompt: str, schema: dict) -> str: ...


GeneratorFactory = Callable[[str], TextGenerator]


def _default_factory(api_key: str) -> TextGenerator:
    from utils import GeminiTextGenerator

    return GeminiTextGenerator(api_key)


def _require_text(value: str, what: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{what} must not be empty.")
    return cleaned


_ACT_PATTERNS = {
    "act1": re.compile(r"ACT 1[^\n]*\n([\s\S]*?)(?=ACT 2|$)", re.IGNORECASE),
    "act2": re.compile(r"ACT 2[^\n]*\n([\s\S]*?)(?=ACT 3|$)", re.IGNORECASE),
    "act3": re.compile(r"ACT 3[^\n]*\n([\s\S]*?)$", re.IGNORECASE),
}


def extract_acts(full_script: str) -> ActStructure:
    parts = {}
    for name, pattern in _ACT_PATTERNS.items():
        match = pattern.search(full_script or "")
        # The opening "**" or "#" of the next bold act heading stays behind.
        parts[name] = match.group(1).strip().rstrip("*#").strip() if match else ""
    return ActStructure(**parts)


class GenerationOrchestrator:
    def __init__(self, credentials: CredentialStore, generator_factory: Optional[GeneratorFactory] = None) -> None:
        self.credentials = credentials
        self._factory = generator_factory or _default_factory

    def _generator(self) -> TextGenerator:
        api_key = self.credentials.get()
        if not api_key:
            raise MissingCredentialError()
        return self._factory(api_key)

    # ----------------------------
    # Main workflow
    # ----------------------------
    def analyze(self, raw_text: str) -> AnalysisResult:
        text = _require_text(raw_text, "Input text")
        generator = self._generator()
        _logger.info("Requesting analysis (%d chars).", len(text))
        payload = generator.generate_json(prompts.analysis_prompt(text), ANALYSIS_RESPONSE_SCHEMA)
        result = parse_payload(AnalysisResult, payload)
        _logger.info(
            "Analysis received: tone=%s, %d themes, %d topics.",
            result.tone,
            len(result.key_themes),
            len(result.suggested_topics),
        )
        return result

    def generate(
        self,
        topic: str,
        tone: str,
        audience: str,
        duration: str = prompts.DEFAULT_DURATION,
        style: str = prompts.DEFAULT_STYLE,
    ) -> str:
        generator = self._generator()
        _logger.info("Requesting script for topic %r (duration=%s, style=%s).", topic, duration, style)
        script = generator.generate_text(prompts.script_prompt(topic, tone, audience, duration, style))
        if not script.strip():
            _logger.warning("Model returned an empty script; substituting fallback notice.")
            return SCRIPT_FALLBACK_NOTICE
        return script

    def generate_thumbnail(self, topic: str, tone: str) -> ThumbnailConcept:
        generator = self._generator()
        _logger.info("Requesting thumbnail concept for topic %r.", topic)
        payload = generator.generate_json(prompts.thumbnail_prompt(topic, tone), THUMBNAIL_RESPONSE_SCHEMA)
        return parse_payload(ThumbnailConcept, payload)

    # ----------------------------
    # Hollywood storytelling flow
    # ----------------------------
    def analyze_original_script(self, original_script: str) -> ScriptAnalysisReport:
        text = _require_text(original_script, "Original script")
        generator = self._generator()
        payload = generator.generate_json(prompts.original_script_report_prompt(text), SCRIPT_REPORT_RESPONSE_SCHEMA)
        report = parse_payload(ScriptAnalysisReport, payload)
        _logger.info(
            "Script report received: technique=%s, score=%s.",
            report.recommended_technique.name,
            report.strength_score,
        )
        return report

    def suggest_hollywood_topics(self, report: ScriptAnalysisReport, original_script: str) -> Sequence[HollywoodTopic]:
        generator = self._generator()
        prompt = prompts.hollywood_topics_prompt(
            original_intent=report.original_intent,
            detected_emotion=report.detected_emotion,
            target_audience=report.target_audience,
            technique_name=report.recommended_technique.name,
            strength_score=report.strength_score,
            original_script=original_script,
        )
        payload = generator.generate_json(prompt, HOLLYWOOD_TOPICS_RESPONSE_SCHEMA)
        return parse_payload(HollywoodTopicList, payload).suggestions

    def generate_hollywood_script(
        self,
        topic: HollywoodTopic,
        report: ScriptAnalysisReport,
        duration: str = "8분",
    ) -> HollywoodScript:
        generator = self._generator()
        prompt = prompts.hollywood_script_prompt(
            title=topic.title,
            hook=topic.hook,
            applied_technique=topic.applied_technique,
            viral_potential=topic.viral_potential,
            target_audience=report.target_audience,
            detected_emotion=report.detected_emotion,
            technique_description=report.recommended_technique.description,
            duration=duration,
        )
        full_script = generator.generate_text(prompt).strip() or HOLLYWOOD_FALLBACK_NOTICE
        return HollywoodScript(
            technique=topic.applied_technique,
            structure=extract_acts(full_script),
            full_script=full_script,
            key_elements=(
                f"{topic.applied_technique} 기법 적용",
                "삼막 구조 완성",
                f"바이럴 가능성 {topic.viral_potential:g}/10",
                f"타겟: {report.target_audience}",
            ),
        )
