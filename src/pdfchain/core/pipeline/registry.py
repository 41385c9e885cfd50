# core/pipeline/registry.py
"""
Tool Registry
=============

Read-only catalog of the document tools a pipeline can chain.

The orchestration core treats tool ids as opaque strings and never checks
them against this registry; the registry is used for display labels and
duration estimates only. Unknown ids fall back to the raw id as label and
to a one second estimate.

Example:
    from pdfchain.core.pipeline.registry import estimate_time, format_time

    seconds = estimate_time("add-page-numbers", page_count=120)
    print(format_time(seconds))  # "~7 seconds"
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

__all__ = [
    "ToolInfo",
    "TOOL_REGISTRY",
    "CATEGORIES",
    "get_tool",
    "tool_label",
    "pipeline_tools",
    "estimate_time",
    "estimate_pipeline_time",
    "format_time",
    "format_duration",
]

# (page_count, file_size_bytes) -> seconds
EstimateFn = Callable[[int, int], float]

CATEGORIES: Dict[str, str] = {
    "organize": "Organize",
    "transform": "Transform",
    "stamp": "Stamp",
    "security": "Security",
    "info": "Info",
}


@dataclass(frozen=True)
class ToolInfo:
    """Display metadata for a single tool."""

    id: str
    name: str
    description: str
    icon: str
    category: str
    estimate: EstimateFn
    pipeline_compatible: bool = True
    accepts_multiple_files: bool = False

    @property
    def category_label(self) -> str:
        return CATEGORIES.get(self.category, self.category.title())


def _tool(
    tool_id: str,
    name: str,
    description: str,
    icon: str,
    category: str,
    estimate: EstimateFn,
    **kwargs,
) -> ToolInfo:
    return ToolInfo(tool_id, name, description, icon, category, estimate, **kwargs)


TOOL_REGISTRY: Dict[str, ToolInfo] = {
    tool.id: tool
    for tool in [
        _tool("split", "Split PDF", "Split document into separate files", "Scissors",
              "organize", lambda p, s: 0.5 + p * 0.01),
        _tool("merge", "Merge PDFs", "Combine multiple PDFs into one", "Layers",
              "organize", lambda p, s: 0.5 + p * 0.02,
              pipeline_compatible=False, accepts_multiple_files=True),
        _tool("reorder", "Reorder Pages", "Rearrange pages by dragging", "ArrowUpDown",
              "organize", lambda p, s: 0.5 + p * 0.01),
        _tool("delete-pages", "Delete Pages", "Remove unwanted pages", "Trash2",
              "organize", lambda p, s: 0.5 + p * 0.01),
        _tool("extract-pages", "Extract Pages", "Pull specific pages into a new PDF",
              "FileOutput", "organize", lambda p, s: 0.5 + p * 0.01),
        _tool("add-blank-pages", "Add Blank Pages", "Insert blank pages at any position",
              "FilePlus", "organize", lambda p, s: 0.5),
        _tool("rotate", "Rotate Pages", "Rotate pages in any direction", "RotateCw",
              "transform", lambda p, s: 0.3 + p * 0.005),
        _tool("scale", "Scale / Resize", "Change page dimensions", "Maximize",
              "transform", lambda p, s: 1 + p * 0.03),
        _tool("add-page-numbers", "Page Numbers", "Add page numbers to your document", "Hash",
              "stamp", lambda p, s: 1 + p * 0.05),
        _tool("text-watermark", "Text Watermark", "Add text watermark to pages", "Type",
              "stamp", lambda p, s: 1 + p * 0.05),
        _tool("encrypt", "Encrypt PDF", "Password-protect your PDF", "Lock",
              "security", lambda p, s: 0.5 + p * 0.02),
        _tool("unlock", "Unlock PDF", "Remove password protection", "Unlock",
              "security", lambda p, s: 0.5),
        _tool("edit-metadata", "Edit Metadata", "View and edit document properties",
              "FileText", "info", lambda p, s: 0.3),
    ]
}


def get_tool(tool_id: str) -> Optional[ToolInfo]:
    """Look up a tool by id. Unknown ids return None."""
    return TOOL_REGISTRY.get(tool_id)


def tool_label(tool_id: str) -> str:
    """Display name for a tool, falling back to the raw id."""
    tool = get_tool(tool_id)
    return tool.name if tool else tool_id


def pipeline_tools() -> List[str]:
    """Ids of the tools that may be placed in a pipeline."""
    return [tool.id for tool in TOOL_REGISTRY.values() if tool.pipeline_compatible]


def estimate_time(tool_id: str, page_count: int, file_size: int = 0) -> float:
    """
    Estimate processing time for one tool.

    Args:
        tool_id: Tool identifier
        page_count: Number of pages in the input document
        file_size: Input size in bytes

    Returns:
        Estimated seconds, rounded to one decimal. Unknown tools estimate 1.0.
    """
    tool = get_tool(tool_id)
    if tool is None:
        return 1.0
    # half-up rounding to one decimal
    return math.floor(tool.estimate(page_count, file_size) * 10 + 0.5) / 10


def estimate_pipeline_time(tool_ids: List[str], page_count: int, file_size: int = 0) -> float:
    """Sum of per-step estimates for a tool sequence."""
    return round(sum(estimate_time(t, page_count, file_size) for t in tool_ids), 1)


def format_time(seconds: float) -> str:
    """Human readable form of an estimate."""
    if seconds < 1:
        return "< 1 second"
    if seconds < 60:
        return f"~{math.ceil(seconds)} seconds"
    return f"~{math.ceil(seconds / 60)} minutes"


def format_duration(ms: float) -> str:
    """Human readable form of a measured duration in milliseconds."""
    seconds = ms / 1000
    if seconds < 1:
        return f"{int(ms)}ms"
    return f"{seconds:.1f}s"
