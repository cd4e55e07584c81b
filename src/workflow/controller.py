from __future__ import annotations

import logging

from src.generation import prompts
from src.generation.errors import GenerationError, describe_generation_error
from src.generation.orchestrator import GenerationOrchestrator
from src.generation.schemas import TopicSuggestion
from src.workflow.machine import GeneratingState, InvalidTransitionError, WorkflowMachine, WorkflowState

_logger = logging.getLogger(__name__)


class ScriptWorkflow:
    """Runs one orchestrator request per transition and feeds the outcome back to the machine.

    Unexpected exceptions still put the machine back in an interactive step
    before they propagate to the caller.
    """

    def __init__(self, orchestrator: GenerationOrchestrator, machine: WorkflowMachine | None = None) -> None:
        self.orchestrator = orchestrator
        self.machine = machine or WorkflowMachine()

    @property
    def state(self) -> WorkflowState:
        return self.machine.state

    def analyze(self, text: str) -> WorkflowState:
        ticket = self.machine.start_analysis(text)
        if ticket is None:
            return self.state
        try:
            analysis = self.orchestrator.analyze(text)
        except GenerationError as exc:
            _logger.warning("Analysis failed: %s", exc)
            self.machine.fail_analysis(ticket, describe_generation_error(exc))
        except Exception as exc:
            _logger.exception("Unexpected error during analysis.")
            self.machine.fail_analysis(ticket, describe_generation_error(exc))
            raise
        else:
            self.machine.complete_analysis(ticket, analysis)
        return self.state

    def choose_topic(
        self,
        topic: TopicSuggestion,
        duration: str = prompts.DEFAULT_DURATION,
        style: str = prompts.DEFAULT_STYLE,
    ) -> WorkflowState:
        ticket = self.machine.choose_topic(topic)
        state = self.state
        if not isinstance(state, GeneratingState):
            raise InvalidTransitionError(f"Expected the generating step, got {state.step.value}.")
        try:
            script = self.orchestrator.generate(
                topic.title,
                state.analysis.tone,
                state.analysis.target_audience,
                duration,
                style,
            )
        except GenerationError as exc:
            _logger.warning("Script generation failed: %s", exc)
            self.machine.fail_generation(ticket, describe_generation_error(exc))
        except Exception as exc:
            _logger.exception("Unexpected error during script generation.")
            self.machine.fail_generation(ticket, describe_generation_error(exc))
            raise
        else:
            self.machine.complete_generation(ticket, script)
        return self.state

    def back(self) -> WorkflowState:
        return self.machine.back()

    def reset(self) -> WorkflowState:
        return self.machine.reset()
