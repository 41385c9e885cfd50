"""
Exception hierarchy for pdfchain.

Pipeline operations themselves never raise; these are used at the
edges (configuration files, preset files, transformation services).
"""


class PdfChainError(Exception):
    """Base exception for all pdfchain errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(PdfChainError):
    """A configuration file could not be read or parsed."""

    pass


class PresetError(PdfChainError):
    """A preset definition is missing required fields or malformed."""

    pass


class TransformError(PdfChainError):
    """A transformation service rejected a step."""

    def __init__(self, message: str, tool_id: str = None, **kwargs):
        self.tool_id = tool_id
        super().__init__(message, **kwargs)
