# tests/controllers/conftest.py
"""
Controller-specific pytest fixtures.
"""

import pytest

from pdfchain.controllers.pipeline import PipelineController


@pytest.fixture
def controller(default_config):
    """A PipelineController on default configuration."""
    return PipelineController(config=default_config)


@pytest.fixture
def started(controller, sample_pdf):
    """
    Factory that loads tools, starts a run and supplies the input.

    Returns the controller pointed at step 1.
    """

    def start(*tool_ids, payload=sample_pdf):
        for tool_id in tool_ids:
            controller.add_tool(tool_id)
        controller.start_pipeline()
        controller.accept_input(payload)
        return controller

    return start
