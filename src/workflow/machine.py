"""Five-step workflow: Input -> Analyzing -> Selecting -> Generating -> Result.

States are frozen dataclasses, each carrying only the data that is valid in
that step. Requests are identified by a ``RequestTicket``; a completion that
arrives with a ticket other than the pending one is dropped.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from src.generation.schemas import AnalysisResult, TopicSuggestion

_logger = logging.getLogger(__name__)


class Step(str, Enum):
    INPUT = "INPUT"
    ANALYZING = "ANALYZING"
    SELECTING = "SELECTING"
    GENERATING = "GENERATING"
    RESULT = "RESULT"


class InvalidTransitionError(RuntimeError):
    pass


@dataclass(eq=False)
class RequestTicket:
    """Identity of one in-flight request; ``cancel()`` marks its result as unwanted."""

    id: int
    step: Step
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(frozen=True)
class InputState:
    draft: str = ""
    error: Optional[str] = None
    step: Step = field(default=Step.INPUT, init=False)


@dataclass(frozen=True)
class AnalyzingState:
    draft: str
    ticket: RequestTicket
    step: Step = field(default=Step.ANALYZING, init=False)


@dataclass(frozen=True)
class SelectingState:
    draft: str
    analysis: AnalysisResult
    error: Optional[str] = None
    step: Step = field(default=Step.SELECTING, init=False)


@dataclass(frozen=True)
class GeneratingState:
    draft: str
    analysis: AnalysisResult
    topic: TopicSuggestion
    ticket: RequestTicket
    step: Step = field(default=Step.GENERATING, init=False)


@dataclass(frozen=True)
class ResultState:
    draft: str
    analysis: AnalysisResult
    topic: TopicSuggestion
    script: str
    step: Step = field(default=Step.RESULT, init=False)


WorkflowState = Union[InputState, AnalyzingState, SelectingState, GeneratingState, ResultState]


class WorkflowMachine:
    def __init__(self, state: Optional[WorkflowState] = None) -> None:
        self.state: WorkflowState = state or InputState()
        self._ticket_ids = itertools.count(1)

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def step(self) -> Step:
        return self.state.step

    @property
    def busy(self) -> bool:
        return isinstance(self.state, (AnalyzingState, GeneratingState))

    @property
    def error(self) -> Optional[str]:
        return getattr(self.state, "error", None)

    @property
    def pending_ticket(self) -> Optional[RequestTicket]:
        return getattr(self.state, "ticket", None)

    def _move(self, new_state: WorkflowState) -> WorkflowState:
        _logger.info("Workflow %s -> %s", self.state.step.value, new_state.step.value)
        self.state = new_state
        return new_state

    def _require(self, expected: type, action: str) -> None:
        if not isinstance(self.state, expected):
            raise InvalidTransitionError(f"Cannot {action} from step {self.state.step.value}.")

    def _is_current(self, ticket: RequestTicket, expected: type) -> bool:
        current = self.pending_ticket
        if not isinstance(self.state, expected) or current is not ticket or ticket.cancelled:
            _logger.info("Ignoring stale response for request #%s.", ticket.id)
            return False
        return True

    # ----------------------------
    # Analysis
    # ----------------------------
    def start_analysis(self, text: str) -> Optional[RequestTicket]:
        """Enter Analyzing; returns ``None`` (and stays put) for blank input."""
        self._require(InputState, "analyze")
        if not (text or "").strip():
            return None
        ticket = RequestTicket(next(self._ticket_ids), Step.ANALYZING)
        self._move(AnalyzingState(draft=text, ticket=ticket))
        return ticket

    def complete_analysis(self, ticket: RequestTicket, analysis: AnalysisResult) -> bool:
        if not self._is_current(ticket, AnalyzingState):
            return False
        self._move(SelectingState(draft=self.state.draft, analysis=analysis))
        return True

    def fail_analysis(self, ticket: RequestTicket, reason: str) -> bool:
        if not self._is_current(ticket, AnalyzingState):
            return False
        self._move(InputState(draft=self.state.draft, error=reason))
        return True

    # ----------------------------
    # Script generation
    # ----------------------------
    def choose_topic(self, topic: TopicSuggestion) -> RequestTicket:
        self._require(SelectingState, "choose a topic")
        state = self.state
        ticket = RequestTicket(next(self._ticket_ids), Step.GENERATING)
        self._move(GeneratingState(draft=state.draft, analysis=state.analysis, topic=topic, ticket=ticket))
        return ticket

    def complete_generation(self, ticket: RequestTicket, script: str) -> bool:
        if not self._is_current(ticket, GeneratingState):
            return False
        state = self.state
        self._move(ResultState(draft=state.draft, analysis=state.analysis, topic=state.topic, script=script))
        return True

    def fail_generation(self, ticket: RequestTicket, reason: str) -> bool:
        if not self._is_current(ticket, GeneratingState):
            return False
        state = self.state
        self._move(SelectingState(draft=state.draft, analysis=state.analysis, error=reason))
        return True

    # ----------------------------
    # Navigation
    # ----------------------------
    def back(self) -> WorkflowState:
        state = self.state
        if isinstance(state, SelectingState):
            return self._move(InputState(draft=state.draft))
        if isinstance(state, ResultState):
            return self._move(SelectingState(draft=state.draft, analysis=state.analysis))
        raise InvalidTransitionError(f"Cannot go back from step {state.step.value}.")

    def cancel(self) -> WorkflowState:
        """Abandon the in-flight request and return to the step that issued it."""
        state = self.state
        if isinstance(state, AnalyzingState):
            state.ticket.cancel()
            return self._move(InputState(draft=state.draft))
        if isinstance(state, GeneratingState):
            state.ticket.cancel()
            return self._move(SelectingState(draft=state.draft, analysis=state.analysis))
        raise InvalidTransitionError(f"Nothing to cancel in step {state.step.value}.")

    def reset(self) -> WorkflowState:
        ticket = self.pending_ticket
        if ticket is not None:
            ticket.cancel()
        return self._move(InputState())


# ----------------------------
# Progress indicator
# ----------------------------
PROGRESS_STEPS: Tuple[Tuple[Step, str], ...] = (
    (Step.INPUT, "입력"),
    (Step.SELECTING, "전략"),
    (Step.RESULT, "대본"),
)

_VISIBLE_STEP = {
    Step.INPUT: Step.INPUT,
    Step.ANALYZING: Step.INPUT,
    Step.SELECTING: Step.SELECTING,
    Step.GENERATING: Step.SELECTING,
    Step.RESULT: Step.RESULT,
}


def progress_steps(current: Step) -> List[Tuple[str, str]]:
    """Return ``(label, status)`` per visible step; status is completed/current/pending."""
    order = [step for step, _ in PROGRESS_STEPS]
    current_index = order.index(_VISIBLE_STEP[current])
    statuses = []
    for index, (_, label) in enumerate(PROGRESS_STEPS):
        if index < current_index:
            statuses.append((label, "completed"))
        elif index == current_index:
            statuses.append((label, "current"))
        else:
            statuses.append((label, "pending"))
    return statuses
