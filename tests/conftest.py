# tests/conftest.py
"""
Global pytest fixtures for pdfchain tests.
"""

import pytest

from pdfchain.core.config import get_default_config, reset_config, set_config
from pdfchain.core.exceptions import TransformError
from pdfchain.core.pipeline.executor import OutputFile, ToolOutput


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the built-in defaults, not files on this machine."""
    config = get_default_config()
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def sample_pdf():
    """Opaque input payload standing in for a PDF document."""
    return b"%PDF-1.7 sample"


@pytest.fixture
def stamping_service():
    """Transformation service that appends the tool id to its input."""

    def service(tool_id, inputs, options):
        data = inputs[0] + b"|" + tool_id.encode()
        return ToolOutput(
            files=[OutputFile(name=f"{tool_id}.pdf", data=data)],
            processing_time=0.01,
        )

    return service


@pytest.fixture
def failing_service():
    """Transformation service that rejects every step."""

    def service(tool_id, inputs, options):
        raise TransformError(f"{tool_id} failed: damaged xref table", tool_id=tool_id)

    return service


@pytest.fixture
def presets_file(tmp_path):
    """TOML file with one extra preset and one override of a built-in."""
    path = tmp_path / "presets.toml"
    path.write_text(
        """
[[presets]]
id = "rotate-lock"
name = "Rotate & Lock"
description = "Fix orientation and password-protect"
icon = "Lock"
tools = ["rotate", "encrypt"]

[[presets]]
id = "secure-stamp"
name = "Secure Stamp (custom)"
tools = ["text-watermark", "add-page-numbers", "encrypt"]
""",
        encoding="utf-8",
    )
    return path
