"""
Pipeline Package
================

Orchestration core for linear document-tool pipelines.

This package provides:
- StepStatus / StepStateMachine: per-step lifecycle tracking
- BufferRetentionManager: bounded retention of intermediate payloads
- PipelineValidator: ordering checks on tool sequences
- PipelinePreset: ready-made tool sequences
- Tool registry: display metadata and time estimates
- Transformation contract types (ToolOutput, OutputFile)
"""

from .buffers import BufferRetentionManager
from .executor import OutputFile, StepRunResult, ToolOutput, TransformFn
from .presets import PIPELINE_PRESETS, PipelinePreset, get_preset, list_presets, load_presets_file
from .registry import (
    TOOL_REGISTRY,
    ToolInfo,
    estimate_pipeline_time,
    estimate_time,
    format_duration,
    format_time,
    get_tool,
    pipeline_tools,
    tool_label,
)
from .step import INPUT_STEP, StepStateMachine, StepStatus
from .validator import (
    MAX_PIPELINE_TOOLS,
    PipelineValidator,
    ValidationResult,
    ValidationWarning,
    WarningType,
    validate_pipeline,
)

__all__ = [
    # Step state
    "INPUT_STEP",
    "StepStatus",
    "StepStateMachine",
    # Buffers
    "BufferRetentionManager",
    # Validation
    "MAX_PIPELINE_TOOLS",
    "PipelineValidator",
    "ValidationResult",
    "ValidationWarning",
    "WarningType",
    "validate_pipeline",
    # Presets
    "PipelinePreset",
    "PIPELINE_PRESETS",
    "get_preset",
    "list_presets",
    "load_presets_file",
    # Registry
    "ToolInfo",
    "TOOL_REGISTRY",
    "get_tool",
    "tool_label",
    "pipeline_tools",
    "estimate_time",
    "estimate_pipeline_time",
    "format_time",
    "format_duration",
    # Transformation contract
    "OutputFile",
    "ToolOutput",
    "StepRunResult",
    "TransformFn",
]
