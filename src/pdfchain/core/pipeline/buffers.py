# core/pipeline/buffers.py
"""
Buffer Retention
================

Intermediate payload storage with bounded memory.

Each step output may be tens of megabytes, so only the two most recent step
outputs are kept. Storing the output of step k first drops every entry
below k - 1. The original input lives outside the evictable map and is
never dropped by this policy.

Payloads are held by reference; they are never copied or inspected.
"""

from typing import Dict, List, Optional

from pdfchain.core.logger import get_logger

logger = get_logger(__name__)

__all__ = ["BufferRetentionManager"]


class BufferRetentionManager:
    """Original input plus a two-slot window of step outputs."""

    def __init__(self):
        self.original_input: Optional[bytes] = None
        self.intermediate_results: Dict[int, bytes] = {}

    def set_original_input(self, payload: bytes) -> None:
        self.original_input = payload

    def store(self, step: int, payload: bytes) -> None:
        """
        Retain the output of a step, evicting older outputs first.

        Args:
            step: Step index the payload belongs to
            payload: Output bytes (held by reference)
        """
        evicted = [k for k in self.intermediate_results if k < step - 1]
        for k in evicted:
            del self.intermediate_results[k]
        if evicted:
            logger.debug(f"Evicted intermediate results for steps {sorted(evicted)}")
        self.intermediate_results[step] = payload

    def get_step_input(self, step: int) -> Optional[bytes]:
        """
        Input of a step.

        Steps 0 and 1 read the original input. Later steps read the nearest
        retained output below them, falling back to the original input.
        """
        if step <= 1:
            return self.original_input
        for k in range(step - 1, 0, -1):
            payload = self.intermediate_results.get(k)
            if payload is not None:
                return payload
        return self.original_input

    def get_last_successful_output(self) -> Optional[bytes]:
        """Output with the highest step index, or the original input."""
        if self.intermediate_results:
            return self.intermediate_results[max(self.intermediate_results)]
        return self.original_input

    def retained_steps(self) -> List[int]:
        return sorted(self.intermediate_results)

    def retained_bytes(self) -> int:
        """Total size of the retained step outputs (original input excluded)."""
        return sum(len(p) for p in self.intermediate_results.values())

    def clear_results(self) -> None:
        self.intermediate_results = {}

    def clear(self) -> None:
        """Drop the original input and every step output."""
        self.original_input = None
        self.intermediate_results = {}
