"""
pdfchain - Linear pipelines of document tools
=============================================

Version: 0.1.0
"""

__version__ = "0.1.0"

from pdfchain.controllers.pipeline import PipelineController
from pdfchain.core.pipeline import (
    PIPELINE_PRESETS,
    PipelinePreset,
    StepStatus,
    ToolOutput,
    ValidationResult,
    validate_pipeline,
)

__all__ = [
    "__version__",
    "PipelineController",
    "PipelinePreset",
    "PIPELINE_PRESETS",
    "StepStatus",
    "ToolOutput",
    "ValidationResult",
    "validate_pipeline",
]
