"""
Unit tests for pdfchain.core.pipeline.registry module.
"""

import pytest

from pdfchain.core.pipeline.registry import (
    TOOL_REGISTRY,
    estimate_pipeline_time,
    estimate_time,
    format_duration,
    format_time,
    get_tool,
    pipeline_tools,
    tool_label,
)


class TestRegistry:
    """Tests for tool lookup."""

    def test_thirteen_tools(self):
        assert len(TOOL_REGISTRY) == 13

    def test_get_tool(self):
        tool = get_tool("encrypt")

        assert tool.name == "Encrypt PDF"
        assert tool.category_label == "Security"

    def test_unknown_tool(self):
        assert get_tool("ocr") is None
        assert tool_label("ocr") == "ocr"

    def test_merge_is_not_chainable(self):
        tools = pipeline_tools()

        assert "merge" not in tools
        assert "rotate" in tools
        assert len(tools) == 12


class TestEstimates:
    """Tests for processing time estimates."""

    @pytest.mark.parametrize(
        "tool_id,pages,expected",
        [
            ("split", 10, 0.6),
            ("rotate", 120, 0.9),
            ("add-page-numbers", 120, 7.0),
            ("scale", 50, 2.5),
            ("unlock", 500, 0.5),
            ("edit-metadata", 1, 0.3),
        ],
    )
    def test_estimate_time(self, tool_id, pages, expected):
        assert estimate_time(tool_id, pages) == expected

    def test_unknown_tool_estimates_one_second(self):
        assert estimate_time("ocr", 100) == 1.0

    def test_pipeline_estimate(self):
        assert estimate_pipeline_time(["rotate", "add-page-numbers"], 120) == 7.9

    def test_empty_pipeline_estimate(self):
        assert estimate_pipeline_time([], 10) == 0


class TestFormatting:
    """Tests for human readable durations."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0.4, "< 1 second"),
            (1.0, "~1 seconds"),
            (7.9, "~8 seconds"),
            (59.5, "~60 seconds"),
            (60, "~1 minutes"),
            (125, "~3 minutes"),
        ],
    )
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected

    @pytest.mark.parametrize(
        "ms,expected",
        [
            (0, "0ms"),
            (250.7, "250ms"),
            (1000, "1.0s"),
            (2345, "2.3s"),
        ],
    )
    def test_format_duration(self, ms, expected):
        assert format_duration(ms) == expected
