"""Command line interface for pdfchain."""

from .cli import cli

__all__ = ["cli"]
