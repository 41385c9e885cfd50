# controllers/__init__.py
"""
Controllers Package
===================

Application controllers that sit between views (CLI, UI) and the pipeline core.

Architecture:
    View (CLI/UI)
        ↓ (tool ids, payloads)
    PipelineController
        ↓ (delegates to)
    Core pipeline (step state, buffers, validator, presets, registry)

Usage:
    from pdfchain.controllers import PipelineController

    pipeline = PipelineController()
    pipeline.add_tool("rotate")
    pipeline.add_tool("encrypt")
    result = pipeline.plan(page_count=40)
"""
from .base import ControllerResult, ToDictMixin
from .pipeline import PipelineController, PipelinePlan, PlanStep

__all__ = [
    # Base
    "ControllerResult",
    "ToDictMixin",
    # Pipeline
    "PipelineController",
    "PipelinePlan",
    "PlanStep",
]
