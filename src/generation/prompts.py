"""Prompt templates sent to Gemini. All copy is Korean, matching the product UI."""
from __future__ import annotations

DEFAULT_DURATION = "8-10분"
DEFAULT_STYLE = "정보 전달형"

DURATION_OPTIONS = ["1분 이내 (쇼츠)", "3-5분", "8-10분", "15-20분"]
STYLE_OPTIONS = ["정보 전달형", "스토리텔링형", "리스트형 (TOP N)", "튜토리얼형", "리뷰/비교형"]

HOLLYWOOD_ROLE = "당신은 **헐리우드 스토리텔링 전문가**이자 **유튜브 콘텐츠 설계자(Architect)**입니다."

HOLLYWOOD_TECHNIQUES = [
    "**삼막 구조 (Three-Act Structure)**: 설정-갈등-해결",
    "**영웅의 여정 (Hero's Journey)**: 평범한 주인공의 변화와 성장",
    "**인셉션 기법 (Inception Hook)**: 강렬한 시작으로 몰입 유도",
    "**타이트 로프 (Tightrope)**: 긴장감 유지하며 위기 고조",
    "**반전 기법 (Plot Twist)**: 예상을 뒤엎는 전개",
    "**감정 롤러코스터 (Emotional Arc)**: 감정의 기복을 통한 몰입",
    "**타임 프레셔 (Time Pressure)**: 시간 제약으로 긴장감 증폭",
]


def analysis_prompt(input_text: str) -> str:
    return (
        "당신은 전문 유튜브 전략 컨설턴트입니다.\n"
        "다음 대본 초안이나 주제 아이디어를 분석하세요. 모든 응답은 한국어로 작성해 주세요.\n\n"
        "1. 예상되는 톤(Tone)을 파악하세요 (예: 교육적, 코믹, 진지함 등).\n"
        "2. 타겟 시청자(Target Audience)를 파악하세요.\n"
        "3. 정확히 3가지 핵심 테마(Key Themes)를 추출하세요.\n"
        "4. 이 분석을 바탕으로 동일한 시청자에게 어필하되 새로운 관점을 제시하는 "
        "클릭 가능한 바이럴 비디오 제목/주제 정확히 5가지를 생성하고, 각각 효과적인 이유를 설명하세요.\n\n"
        f"입력 텍스트:\n\"{input_text}\""
    )


def script_prompt(topic: str, tone: str, audience: str, duration: str, style: str) -> str:
    return (
        f"비디오 제목: \"{topic}\"에 대한 시청 지속 시간이 높은 완벽한 유튜브 대본을 작성하세요.\n\n"
        f"타겟 시청자: {audience}\n"
        f"원하는 톤: {tone}\n"
        f"영상 길이: {duration}\n"
        f"대본 스타일: {style}\n\n"
        "구조 요구사항:\n"
        "1. 후킹 (HOOK) (0-60초): 즉시 관심을 사로잡으세요.\n"
        "2. 인트로 (INTRO): 영상의 주제를 명확히 밝히세요.\n"
        "3. 본문 (BODY): 명확한 포인트/단계로 나누세요. 가능한 경우 타임스탬프를 사용하세요 (예: [02:30]).\n"
        "4. 아웃트로 및 CTA (OUTRO & CTA): 명확한 행동 유도를 포함하세요.\n\n"
        "출력은 굵은 헤더와 명확한 간격을 사용하여 마크다운 형식으로 작성하세요. "
        "모든 내용은 한국어로 작성하세요."
    )


def thumbnail_prompt(topic: str, tone: str) -> str:
    return (
        "당신은 클릭률이 높은 유튜브 썸네일을 기획하는 디자이너입니다.\n\n"
        f"영상 제목: \"{topic}\"\n"
        f"영상 톤: {tone}\n\n"
        "다음을 작성하세요:\n"
        "1. title: 썸네일에 크게 들어갈 5-10자 내외의 강렬한 한국어 문구\n"
        "2. subtitle: 필요한 경우에만 짧은 보조 문구 (없으면 생략)\n"
        "3. imagePrompt: 배경 이미지를 생성하기 위한 상세한 영어 프롬프트. "
        "구도, 조명, 색감, 인물 표정을 구체적으로 묘사하고, 이미지 안에 글자는 넣지 마세요."
    )


def original_script_report_prompt(original_script: str) -> str:
    techniques = "\n".join(f"{i}. {t}" for i, t in enumerate(HOLLYWOOD_TECHNIQUES, start=1))
    return (
        f"{HOLLYWOOD_ROLE}\n\n"
        "## 임무: 원문 분석 (Phase 1)\n\n"
        "사용자가 입력한 대본 초안을 분석하여, 헐리우드 영화 기법을 적용할 최적의 전략을 수립하세요.\n\n"
        f"### 헐리우드 대표 기법들:\n{techniques}\n\n"
        "### 분석 항목:\n"
        "1. **원본 의도 파악**: 사용자가 전달하고자 하는 핵심 메시지\n"
        "2. **감정 톤 감지**: 유머, 진지함, 감동, 충격 등\n"
        "3. **타겟 시청자**: 누구를 위한 콘텐츠인가\n"
        "4. **최적 영화 기법 추천**: 7가지 중 가장 효과적인 기법 선택\n"
        "5. **강점 점수**: 현재 대본의 완성도 (1-10점)\n"
        "6. **개선 영역**: 보완이 필요한 부분들\n\n"
        f"입력된 대본:\n\"\"\"\n{original_script}\n\"\"\"\n\n"
        "모든 응답은 한국어로 작성하세요."
    )


def hollywood_topics_prompt(
    original_intent: str,
    detected_emotion: str,
    target_audience: str,
    technique_name: str,
    strength_score: float,
    original_script: str,
) -> str:
    return (
        f"{HOLLYWOOD_ROLE}\n\n"
        "## 임무: 새로운 주제 제안 (Phase 2)\n\n"
        "### 분석 결과:\n"
        f"- 원본 의도: {original_intent}\n"
        f"- 감정 톤: {detected_emotion}\n"
        f"- 타겟 시청자: {target_audience}\n"
        f"- 추천 기법: {technique_name}\n"
        f"- 현재 강점 점수: {strength_score:g}/10\n\n"
        f"### 원문:\n\"\"\"\n{original_script}\n\"\"\"\n\n"
        "### 임무:\n"
        f"추천된 헐리우드 기법 \"{technique_name}\"을 활용하여,\n"
        "**바이럴 가능성이 높은 새로운 주제 5가지**를 제안하세요.\n\n"
        "### 요구사항:\n"
        "1. 각 주제는 원본의 핵심 메시지를 유지하되, 더 강렬하게 포장\n"
        "2. 헐리우드 기법이 명확히 적용되도록 구조화\n"
        "3. 클릭을 유도하는 매력적인 제목\n"
        "4. 첫 30초 훅(Hook) 전략 포함\n"
        "5. 바이럴 가능성 점수 (1-10) 및 이유 명시\n\n"
        "모든 응답은 한국어로 작성하세요."
    )


def hollywood_script_prompt(
    title: str,
    hook: str,
    applied_technique: str,
    viral_potential: float,
    target_audience: str,
    detected_emotion: str,
    technique_description: str,
    duration: str,
) -> str:
    return (
        f"{HOLLYWOOD_ROLE}\n\n"
        "## 임무: 헐리우드 기법 적용 대본 작성 (Phase 3)\n\n"
        "### 선택된 주제:\n"
        f"- 제목: {title}\n"
        f"- 훅 전략: {hook}\n"
        f"- 적용 기법: {applied_technique}\n"
        f"- 바이럴 가능성: {viral_potential:g}/10\n\n"
        "### 타겟 정보:\n"
        f"- 시청자: {target_audience}\n"
        f"- 감정 톤: {detected_emotion}\n"
        f"- 예상 길이: {duration}\n\n"
        "### 작성 요구사항:\n\n"
        f"#### 1. {applied_technique} 기법 엄격 적용\n"
        f"{technique_description}\n\n"
        "#### 2. 삼막 구조로 작성:\n\n"
        "**ACT 1 - 설정 (0-30초)**\n"
        "- 강력한 훅으로 시작\n- 문제/호기심 유발\n- 영상의 가치 약속\n\n"
        "**ACT 2 - 갈등/전개 (본문)**\n"
        "- 핵심 포인트 3-5개\n- 각 포인트마다 긴장감 유지\n- 예시와 스토리텔링 활용\n- 감정 기복 설계\n\n"
        "**ACT 3 - 해결/클라이맥스 (마무리)**\n"
        "- 핵심 메시지 재강조\n- 감동적/충격적 마무리\n- 명확한 CTA\n\n"
        "#### 3. 출력 형식:\n"
        "- 마크다운 형식\n- 타임스탬프 포함 [00:00]\n- **굵은 글씨**로 강조점 표시\n"
        "- 감정 방향 지시 포함 예: (흥분된 톤으로), (진지하게)\n\n"
        "모든 응답은 한국어로 작성하세요."
    )
