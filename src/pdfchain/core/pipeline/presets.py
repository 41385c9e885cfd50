# core/pipeline/presets.py
"""
Pipeline Presets
================

Ready-made tool sequences a user can load into the builder in one step.

Additional presets can be shipped as a TOML file:

    [[presets]]
    id = "rotate-lock"
    name = "Rotate & Lock"
    description = "Fix orientation and password-protect"
    icon = "Lock"
    tools = ["rotate", "encrypt"]
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pdfchain.core.config import load_toml
from pdfchain.core.exceptions import PresetError
from pdfchain.core.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "PipelinePreset",
    "PIPELINE_PRESETS",
    "get_preset",
    "list_presets",
    "load_presets_file",
]

REQUIRED_FIELDS = ("id", "name", "tools")


@dataclass(frozen=True)
class PipelinePreset:
    """A named tool sequence."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    tools: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "tools": list(self.tools),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelinePreset":
        """
        Build a preset from a mapping.

        Raises:
            PresetError: If the entry is not a table, a required field is missing
                or tools is not a list of strings
        """
        if not isinstance(data, dict):
            raise PresetError(f"Preset entry must be a table, got {type(data).__name__}")

        missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
        if missing:
            raise PresetError(
                f"Preset is missing required field(s): {', '.join(missing)}",
                {"preset": data.get("id", "")},
            )

        tools = data["tools"]
        if not isinstance(tools, list) or not all(isinstance(t, str) for t in tools):
            raise PresetError(
                f"Preset '{data['id']}' tools must be a list of tool ids",
                {"preset": data["id"]},
            )

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            icon=str(data.get("icon", "")),
            tools=list(tools),
        )


PIPELINE_PRESETS: List[PipelinePreset] = [
    PipelinePreset(
        id="scan-cleanup",
        name="Scan Cleanup",
        description="Remove password, delete blank pages, add page numbers",
        icon="ScanLine",
        tools=["unlock", "delete-pages", "add-page-numbers"],
    ),
    PipelinePreset(
        id="secure-stamp",
        name="Secure & Stamp",
        description="Add a watermark and password-protect",
        icon="ShieldCheck",
        tools=["text-watermark", "encrypt"],
    ),
    PipelinePreset(
        id="document-prep",
        name="Document Prep",
        description="Reorder, clean up, number, and brand your document",
        icon="FileCheck",
        tools=["reorder", "delete-pages", "add-page-numbers", "text-watermark"],
    ),
    PipelinePreset(
        id="number-lock",
        name="Number & Lock",
        description="Add page numbers and password-protect",
        icon="Lock",
        tools=["add-page-numbers", "encrypt"],
    ),
]


def load_presets_file(filepath: Union[str, Path]) -> List[PipelinePreset]:
    """
    Load presets from a TOML file with ``[[presets]]`` tables.

    Args:
        filepath: Path to the presets file

    Returns:
        List of presets in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file is not valid TOML
        PresetError: If an entry is malformed
    """
    data = load_toml(filepath)
    entries = data.get("presets", [])
    if not isinstance(entries, list):
        raise PresetError(f"'presets' in {filepath} must be an array of tables")

    presets = [PipelinePreset.from_dict(entry) for entry in entries]
    logger.debug(f"Loaded {len(presets)} preset(s) from {filepath}")
    return presets


def list_presets(extra: Optional[List[PipelinePreset]] = None) -> List[PipelinePreset]:
    """
    Built-in presets followed by any extra ones.

    An extra preset with the same id as a built-in replaces it in place.
    """
    by_id: Dict[str, PipelinePreset] = {p.id: p for p in PIPELINE_PRESETS}
    for preset in extra or []:
        by_id[preset.id] = preset
    return list(by_id.values())


def get_preset(
    preset_id: str,
    extra: Optional[List[PipelinePreset]] = None,
) -> Optional[PipelinePreset]:
    """Find a preset by id, None if unknown."""
    for preset in list_presets(extra):
        if preset.id == preset_id:
            return preset
    return None
