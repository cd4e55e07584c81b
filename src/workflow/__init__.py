"""Step state machine driving the script studio."""

from .machine import (
    AnalyzingState,
    GeneratingState,
    InputState,
    InvalidTransitionError,
    RequestTicket,
    ResultState,
    SelectingState,
    Step,
    WorkflowMachine,
    progress_steps,
)
from .controller import ScriptWorkflow

__all__ = [
    "AnalyzingState",
    "GeneratingState",
    "InputState",
    "InvalidTransitionError",
    "RequestTicket",
    "ResultState",
    "SelectingState",
    "Step",
    "WorkflowMachine",
    "progress_steps",
    "ScriptWorkflow",
]
