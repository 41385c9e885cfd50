# core/pipeline/step.py
"""
Step State Machine
==================

Per-step lifecycle tracking for a pipeline run.

Steps have no object of their own; they are addressed by position. Index 0
is reserved for input acquisition and indices 1..N map one-to-one onto the
tool list. Two integer-keyed maps hold the state:

- status: step index -> StepStatus
- errors: step index -> error message (failed steps only)

A step with no status entry is PENDING; ``status_of`` applies that rule so
callers never rely on a lookup miss.

Transitions:

    pending -> configuring -> processing -> done | failed
    configuring | processing | failed -> skipped   (explicit skip)
    failed -> configuring                          (retry)

``done`` and ``skipped`` are only left through a full reset. No operation
raises; an illegal retry is logged and ignored.
"""

from enum import Enum
from typing import Dict, Optional

from pdfchain.core.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "INPUT_STEP",
    "StepStatus",
    "StepStateMachine",
]

# Reserved index for the input acquisition phase
INPUT_STEP = 0


class StepStatus(str, Enum):
    """Status of a pipeline step."""

    PENDING = "pending"
    CONFIGURING = "configuring"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.DONE, StepStatus.SKIPPED)


class StepStateMachine:
    """
    Status and error maps for every step of one run.

    The machine keeps one independent status per step index; steps never
    share state.
    """

    def __init__(self):
        self.status: Dict[int, StepStatus] = {}
        self.errors: Dict[int, str] = {}

    def status_of(self, step: int) -> StepStatus:
        """Status of a step, PENDING when no entry exists."""
        return self.status.get(step, StepStatus.PENDING)

    def error_of(self, step: int) -> str:
        """Error message of a step, empty when none was recorded."""
        return self.errors.get(step, "")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self, total_steps: int) -> None:
        """Seed steps 1..total_steps as pending and drop previous errors."""
        self.status = {i: StepStatus.PENDING for i in range(1, total_steps + 1)}
        self.errors = {}

    def clear(self) -> None:
        """Remove every status and error entry."""
        self.status = {}
        self.errors = {}

    # =========================================================================
    # Transitions
    # =========================================================================

    def advance(self, step: int) -> None:
        """Promote a pending step to configuring; other states are left as is."""
        if self.status_of(step) == StepStatus.PENDING:
            self._set(step, StepStatus.CONFIGURING)

    def set_configuring(self, step: int) -> None:
        self._set(step, StepStatus.CONFIGURING)

    def set_processing(self, step: int) -> None:
        self._set(step, StepStatus.PROCESSING)

    def complete(self, step: int) -> None:
        self._set(step, StepStatus.DONE)

    def fail(self, step: int, message: str) -> None:
        self._set(step, StepStatus.FAILED)
        self.errors[step] = message
        logger.warning(f"Step {step} failed: {message}")

    def skip(self, step: int) -> None:
        self._set(step, StepStatus.SKIPPED)

    def retry(self, step: int) -> bool:
        """
        Move a failed step back to configuring and clear its error.

        Returns:
            True if the step was failed and has been reset, False otherwise
        """
        current = self.status_of(step)
        if current != StepStatus.FAILED:
            logger.debug(f"Ignoring retry of step {step} in state '{current.value}'")
            return False
        self._set(step, StepStatus.CONFIGURING)
        self.errors[step] = ""
        return True

    def _set(self, step: int, status: StepStatus) -> None:
        previous = self.status_of(step)
        self.status[step] = status
        logger.debug(f"Step {step}: {previous.value} -> {status.value}")

    # =========================================================================
    # Queries
    # =========================================================================

    def is_terminal(self, step: int) -> bool:
        """True once a step is done or skipped."""
        return self.status_of(step).is_terminal

    def all_finished(self, total_steps: int) -> bool:
        """True when every step 1..total_steps is done or skipped."""
        if total_steps <= 0:
            return False
        return all(self.is_terminal(i) for i in range(1, total_steps + 1))

    def blocking_step(self, total_steps: int) -> Optional[int]:
        """First failed step, which blocks forward advancement."""
        for i in range(1, total_steps + 1):
            if self.status_of(i) == StepStatus.FAILED:
                return i
        return None

    def counts(self, total_steps: int) -> Dict[str, int]:
        """Number of steps 1..total_steps in each status."""
        counts = {status.value: 0 for status in StepStatus}
        for i in range(1, total_steps + 1):
            counts[self.status_of(i).value] += 1
        return counts
