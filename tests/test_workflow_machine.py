import pytest

from src.generation import AnalysisResult, TopicSuggestion
from src.workflow import (
    AnalyzingState,
    GeneratingState,
    InputState,
    InvalidTransitionError,
    ResultState,
    SelectingState,
    Step,
    WorkflowMachine,
    progress_steps,
)

ANALYSIS = AnalysisResult(
    tone="진지한",
    target_audience="대학생",
    key_themes=("공부", "습관", "시간 관리"),
    suggested_topics=tuple(TopicSuggestion(title=f"주제 {n}", reasoning="좋음") for n in range(1, 6)),
)
TOPIC = ANALYSIS.suggested_topics[0]


def _selecting_machine() -> WorkflowMachine:
    machine = WorkflowMachine()
    ticket = machine.start_analysis("아이디어")
    machine.complete_analysis(ticket, ANALYSIS)
    return machine


def test_blank_input_never_leaves_input() -> None:
    machine = WorkflowMachine()

    for text in ("", "   ", "\n\t"):
        assert machine.start_analysis(text) is None
        assert isinstance(machine.state, InputState)


def test_happy_path_reaches_result() -> None:
    machine = WorkflowMachine()

    ticket = machine.start_analysis("아이디어")
    assert isinstance(machine.state, AnalyzingState)
    assert machine.busy

    assert machine.complete_analysis(ticket, ANALYSIS)
    assert isinstance(machine.state, SelectingState)
    assert machine.state.analysis is ANALYSIS

    ticket = machine.choose_topic(TOPIC)
    assert isinstance(machine.state, GeneratingState)
    assert machine.state.topic == TOPIC

    assert machine.complete_generation(ticket, "**대본**")
    assert isinstance(machine.state, ResultState)
    assert machine.state.script == "**대본**"
    assert not machine.busy


def test_analysis_failure_returns_to_input_with_error() -> None:
    machine = WorkflowMachine()
    ticket = machine.start_analysis("아이디어")

    assert machine.fail_analysis(ticket, "실패")

    assert isinstance(machine.state, InputState)
    assert machine.state.draft == "아이디어"
    assert machine.error == "실패"


def test_generation_failure_returns_to_selecting_with_error() -> None:
    machine = _selecting_machine()
    ticket = machine.choose_topic(TOPIC)

    assert machine.fail_generation(ticket, "네트워크 오류")

    assert isinstance(machine.state, SelectingState)
    assert machine.state.analysis is ANALYSIS
    assert machine.error == "네트워크 오류"


def test_stale_failure_after_reset_is_ignored() -> None:
    machine = _selecting_machine()
    ticket = machine.choose_topic(TOPIC)
    machine.reset()
    before = machine.state

    assert machine.fail_generation(ticket, "늦게 도착한 오류") is False
    assert machine.complete_generation(ticket, "늦은 대본") is False
    assert machine.state is before
    assert machine.error is None


def test_stale_ticket_from_earlier_request_is_ignored() -> None:
    machine = WorkflowMachine()
    old = machine.start_analysis("첫 번째")
    machine.cancel()
    new = machine.start_analysis("두 번째")

    assert machine.complete_analysis(old, ANALYSIS) is False
    assert isinstance(machine.state, AnalyzingState)
    assert machine.complete_analysis(new, ANALYSIS) is True


def test_cancel_returns_to_issuing_step_without_error() -> None:
    machine = WorkflowMachine()
    ticket = machine.start_analysis("아이디어")
    machine.cancel()

    assert ticket.cancelled
    assert isinstance(machine.state, InputState)
    assert machine.error is None

    machine = _selecting_machine()
    ticket = machine.choose_topic(TOPIC)
    machine.cancel()
    assert isinstance(machine.state, SelectingState)
    assert machine.complete_generation(ticket, "대본") is False


def test_back_navigation() -> None:
    machine = _selecting_machine()
    ticket = machine.choose_topic(TOPIC)
    machine.complete_generation(ticket, "대본")

    assert isinstance(machine.back(), SelectingState)
    assert isinstance(machine.back(), InputState)
    assert machine.state.draft == "아이디어"


def test_illegal_transitions_raise() -> None:
    machine = WorkflowMachine()

    with pytest.raises(InvalidTransitionError):
        machine.choose_topic(TOPIC)
    with pytest.raises(InvalidTransitionError):
        machine.back()
    with pytest.raises(InvalidTransitionError):
        machine.cancel()

    machine.start_analysis("아이디어")
    with pytest.raises(InvalidTransitionError):
        machine.start_analysis("또 다른 아이디어")


def test_reset_from_any_step_clears_everything() -> None:
    machine = _selecting_machine()
    ticket = machine.choose_topic(TOPIC)
    machine.complete_generation(ticket, "대본")

    state = machine.reset()

    assert state == InputState()
    assert state.step is Step.INPUT


def test_progress_steps_mapping() -> None:
    assert progress_steps(Step.INPUT) == [("입력", "current"), ("전략", "pending"), ("대본", "pending")]
    assert progress_steps(Step.ANALYZING) == progress_steps(Step.INPUT)
    assert progress_steps(Step.GENERATING) == [("입력", "completed"), ("전략", "current"), ("대본", "pending")]
    assert progress_steps(Step.RESULT) == [("입력", "completed"), ("전략", "completed"), ("대본", "current")]
