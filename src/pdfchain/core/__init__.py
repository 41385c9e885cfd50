"""Core orchestration, configuration and logging for pdfchain."""
