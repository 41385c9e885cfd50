# core/pipeline/executor.py
"""
Transformation contract types.

The transformation itself is an external service. A service is any
callable ``(tool_id, inputs, options) -> ToolOutput`` that either returns
the produced files or raises (typically
``pdfchain.core.exceptions.TransformError``) to reject the step. The error
text becomes the failed step's message.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pdfchain.core.pipeline.step import StepStatus

__all__ = [
    "OutputFile",
    "ToolOutput",
    "StepRunResult",
    "TransformFn",
    "estimate_page_count",
]

# Only the head of a document is scanned
PAGE_SCAN_LIMIT = 512_000
_PAGE_OBJECT = re.compile(rb"/Type\s*/Page(?!s)")


@dataclass
class OutputFile:
    """A single file produced by a tool."""

    name: str
    data: bytes
    page_count: Optional[int] = None


@dataclass
class ToolOutput:
    """Everything a tool produced for one invocation."""

    files: List[OutputFile] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def primary(self) -> Optional[OutputFile]:
        """First produced file; the one threaded into the next step."""
        return self.files[0] if self.files else None


@dataclass
class StepRunResult:
    """Outcome of driving one step through the transformation service."""

    step: int
    tool_id: str
    status: StepStatus
    error: Optional[str] = None
    duration_seconds: float = 0.0
    output: Optional[ToolOutput] = None
    discarded: bool = False

    @property
    def success(self) -> bool:
        return self.status == StepStatus.DONE and not self.discarded

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "step": self.step,
            "tool_id": self.tool_id,
            "status": self.status.value,
            "error": self.error,
            "duration_seconds": self.duration_seconds,
            "discarded": self.discarded,
            "files": [f.name for f in self.output.files] if self.output else [],
        }


# (tool_id, input payloads, options) -> ToolOutput; raises on rejection
TransformFn = Callable[[str, List[bytes], Dict[str, Any]], ToolOutput]


def estimate_page_count(data: bytes) -> int:
    """
    Rough page count of a PDF payload, for display only.

    Counts ``/Type /Page`` objects (not ``/Pages``) in the first
    PAGE_SCAN_LIMIT bytes; at least 1.
    """
    return len(_PAGE_OBJECT.findall(data[:PAGE_SCAN_LIMIT])) or 1
