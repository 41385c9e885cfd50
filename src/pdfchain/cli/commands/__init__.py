"""CLI command modules for pdfchain."""

from .config import config
from .pipeline import plan, validate
from .presets import presets
from .tools import tools

__all__ = [
    "config",
    "plan",
    "presets",
    "tools",
    "validate",
]
