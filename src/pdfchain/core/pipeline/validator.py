# core/pipeline/validator.py
"""
Pipeline Validator
==================

Ordering checks for a sequence of tool ids.

The validator is a pure function of the tool list: it keeps no state and is
re-run from scratch after every builder mutation. Warnings come in three
kinds:

- error: blocks starting the pipeline (``valid`` becomes False)
- warning: likely mistake, does not block
- suggestion: ordering hint, does not block

Example:
    from pdfchain.core.pipeline.validator import validate_pipeline

    result = validate_pipeline(["encrypt", "rotate"])
    for warning in result.warnings:
        print(warning)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List

from pdfchain.core.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "MAX_PIPELINE_TOOLS",
    "WarningType",
    "ValidationWarning",
    "ValidationResult",
    "ValidationRule",
    "PipelineValidator",
    "validate_pipeline",
]

MAX_PIPELINE_TOOLS = 5


class WarningType(str, Enum):
    """Severity of a validation warning."""

    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


@dataclass(frozen=True)
class ValidationWarning:
    """A single validation finding."""

    type: WarningType
    message: str

    def __str__(self) -> str:
        return f"[{self.type.value.upper()}] {self.message}"


@dataclass
class ValidationResult:
    """Result of validating a tool list."""

    valid: bool = True
    warnings: List[ValidationWarning] = field(default_factory=list)

    def add(self, type: WarningType, message: str) -> None:
        """Add a finding. Errors invalidate the result."""
        self.warnings.append(ValidationWarning(type, message))
        if type == WarningType.ERROR:
            self.valid = False

    @property
    def errors(self) -> List[ValidationWarning]:
        return [w for w in self.warnings if w.type == WarningType.ERROR]

    @property
    def has_errors(self) -> bool:
        return any(w.type == WarningType.ERROR for w in self.warnings)

    def of_type(self, type: WarningType) -> List[ValidationWarning]:
        return [w for w in self.warnings if w.type == type]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "valid": self.valid,
            "warnings": [{"type": w.type.value, "message": w.message} for w in self.warnings],
        }


ValidationRule = Callable[[List[str], ValidationResult], None]


def _check_length(tool_ids: List[str], result: ValidationResult) -> None:
    if len(tool_ids) > MAX_PIPELINE_TOOLS:
        result.add(
            WarningType.ERROR,
            f"Pipeline is limited to {MAX_PIPELINE_TOOLS} steps to ensure reliable performance.",
        )


def _check_unlock_first(tool_ids: List[str], result: ValidationResult) -> None:
    if "unlock" in tool_ids and tool_ids.index("unlock") > 0:
        result.add(
            WarningType.WARNING,
            "Unlock PDF should be the first step so other tools can read the PDF content.",
        )


def _check_encrypt_last(tool_ids: List[str], result: ValidationResult) -> None:
    if "encrypt" in tool_ids and tool_ids.index("encrypt") < len(tool_ids) - 1:
        result.add(
            WarningType.WARNING,
            "Encrypt should be the last step. "
            "Tools after it would need the password to process the PDF.",
        )


def _check_delete_before_numbering(tool_ids: List[str], result: ValidationResult) -> None:
    if "delete-pages" in tool_ids and "add-page-numbers" in tool_ids:
        if tool_ids.index("delete-pages") > tool_ids.index("add-page-numbers"):
            result.add(
                WarningType.SUGGESTION,
                "Consider moving Delete Pages before Add Page Numbers "
                "so numbers are correct after deletion.",
            )


def _check_duplicates(tool_ids: List[str], result: ValidationResult) -> None:
    seen = set()
    for tool_id in tool_ids:
        if tool_id in seen:
            result.add(
                WarningType.SUGGESTION,
                f"'{tool_id}' appears twice in the pipeline. Is that intentional?",
            )
        seen.add(tool_id)


DEFAULT_RULES: List[ValidationRule] = [
    _check_length,
    _check_unlock_first,
    _check_encrypt_last,
    _check_delete_before_numbering,
    _check_duplicates,
]


class PipelineValidator:
    """
    Rule-based validator for tool sequences.

    Rules are callables taking the tool list and the result being built.
    Extra rules can be registered with ``add_rule``; an instance is itself a
    callable suitable for ``PipelineController(validator=...)``.
    """

    def __init__(self, rules: List[ValidationRule] = None):
        self._rules: List[ValidationRule] = list(DEFAULT_RULES if rules is None else rules)

    def add_rule(self, rule: ValidationRule) -> "PipelineValidator":
        """Register an extra rule. Returns self for chaining."""
        self._rules.append(rule)
        return self

    def validate(self, tool_ids: List[str]) -> ValidationResult:
        """
        Validate a tool sequence.

        Args:
            tool_ids: Ordered tool identifiers

        Returns:
            ValidationResult with any findings
        """
        result = ValidationResult(valid=True)
        tools = list(tool_ids)
        for rule in self._rules:
            rule(tools, result)
        return result

    def __call__(self, tool_ids: List[str]) -> ValidationResult:
        return self.validate(tool_ids)


def validate_pipeline(
    tool_ids: List[str],
    strict: bool = False,
) -> ValidationResult:
    """
    Validate a tool sequence with the default rule set.

    Args:
        tool_ids: Ordered tool identifiers
        strict: If True, treat warnings and suggestions as errors

    Returns:
        ValidationResult
    """
    result = PipelineValidator().validate(tool_ids)

    if strict and result.warnings:
        result = ValidationResult(
            valid=False,
            warnings=[ValidationWarning(WarningType.ERROR, w.message) for w in result.warnings],
        )

    if result.warnings:
        logger.debug(f"Validation of {tool_ids}: {len(result.warnings)} finding(s)")

    return result
