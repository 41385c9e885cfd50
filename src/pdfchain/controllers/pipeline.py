# controllers/pipeline.py
"""
Pipeline Controller
===================

Builder and execution controller for a linear chain of document tools.

One PipelineController holds the whole state of one pipeline session: the
selected tool list, its validation verdict, the per-step status and error
maps, the retained intermediate payloads and the current step pointer. It is
created once per session and handed to the UI layer; nothing is global.

Builder phase (pointer is -1):
    add_tool, remove_tool, reorder_tools, load_preset, clear_pipeline.
    Every mutation re-runs the validator over the whole tool list.

Execution phase (after start_pipeline):
    Step 0 is input acquisition, steps 1..N run the tools in order. The
    caller drives each step:

        controller.set_step_processing(k)
        try:
            output = service(tool_id, [controller.get_step_input(k)], options)
            controller.complete_step(k, output.files[0].data)
        except TransformError as e:
            controller.fail_step(k, str(e))

    ``run_step`` packages exactly that sequence.

Usage:
    from pdfchain.controllers.pipeline import PipelineController

    pipeline = PipelineController()
    pipeline.load_preset("secure-stamp")
    if pipeline.can_start:
        pipeline.start_pipeline()
        pipeline.accept_input(pdf_bytes)
        for step in range(1, pipeline.total_steps + 1):
            pipeline.advance_to_step(step)
            pipeline.run_step(step, service)
    final = pipeline.final_output()

None of the operations raise. Failures of the transformation service are
recorded on the failed step and recovery is always explicit (retry_step or
skip_step).
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from pdfchain.core.config import Config, get_config
from pdfchain.core.exceptions import PdfChainError
from pdfchain.core.logger import get_logger
from pdfchain.core.pipeline.buffers import BufferRetentionManager
from pdfchain.core.pipeline.executor import (
    OutputFile,
    StepRunResult,
    ToolOutput,
    TransformFn,
    estimate_page_count,
)
from pdfchain.core.pipeline.presets import (
    PipelinePreset,
    get_preset,
    list_presets,
    load_presets_file,
)
from pdfchain.core.pipeline.registry import (
    estimate_pipeline_time,
    estimate_time,
    format_time,
    tool_label,
)
from pdfchain.core.pipeline.step import INPUT_STEP, StepStateMachine, StepStatus
from pdfchain.core.pipeline.validator import (
    MAX_PIPELINE_TOOLS,
    ValidationResult,
    validate_pipeline,
)

from .base import ControllerResult, ToDictMixin

logger = get_logger(__name__)

# Builder phase / no run in progress
NO_STEP = -1

Validator = Callable[[List[str]], ValidationResult]

# (step index, new status) -> None
StepProgressCallback = Callable[[int, StepStatus], None]


@dataclass
class PlanStep(ToDictMixin):
    """One step of a pipeline plan."""

    step: int
    tool_id: str
    name: str
    estimated_seconds: float


@dataclass
class PipelinePlan(ToDictMixin):
    """Validation verdict and time estimates for a tool sequence."""

    tools: List[str]
    valid: bool
    can_start: bool
    steps: List[PlanStep] = field(default_factory=list)
    warnings: List[Dict[str, str]] = field(default_factory=list)
    estimated_seconds: float = 0.0

    def _to_dict_extra(self) -> Optional[Dict[str, Any]]:
        return {"estimated": format_time(self.estimated_seconds)}


class PipelineController:
    """
    Composition root for pipeline building and execution.

    Read access:
        selected_tools, current_step, step_status, step_errors,
        intermediate_results, original_input, validation, is_executing
    """

    def __init__(
        self,
        validator: Optional[Validator] = None,
        config: Optional[Config] = None,
        presets: Optional[List[PipelinePreset]] = None,
    ):
        """
        Initialize the controller.

        Args:
            validator: Callable returning a ValidationResult for a tool list.
                Defaults to the built-in ordering rules.
            config: Configuration; defaults to the global configuration.
            presets: Extra presets resolvable by id in load_preset. When None,
                presets from the configured presets file are used.
        """
        config = config or get_config()
        self._validator: Validator = validator or validate_pipeline
        self._min_tools = int(config.get("pipeline", "min_tools", 2))
        self._output_name = config.get("pipeline", "output_name", "pipeline-output.pdf")
        self._presets = presets if presets is not None else _configured_presets(config)

        self._selected_tools: List[str] = []
        self._validation = ValidationResult()
        self._current_step = NO_STEP
        self._is_executing = False
        self._steps = StepStateMachine()
        self._buffers = BufferRetentionManager()
        self._tool_outputs: Dict[int, ToolOutput] = {}
        # bumped on start/cancel/reset/clear so late completions can be told apart
        self._run_id = 0
        self._progress_callback: Optional[StepProgressCallback] = None

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def selected_tools(self) -> List[str]:
        return self._selected_tools.copy()

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def step_status(self) -> Dict[int, StepStatus]:
        return dict(self._steps.status)

    @property
    def step_errors(self) -> Dict[int, str]:
        return dict(self._steps.errors)

    @property
    def intermediate_results(self) -> Dict[int, bytes]:
        return dict(self._buffers.intermediate_results)

    @property
    def original_input(self) -> Optional[bytes]:
        return self._buffers.original_input

    @property
    def validation(self) -> ValidationResult:
        return self._validation

    @property
    def is_executing(self) -> bool:
        return self._is_executing

    @property
    def presets(self) -> List[PipelinePreset]:
        """Built-in presets plus the extra ones this controller was given."""
        return list_presets(self._presets)

    @property
    def total_steps(self) -> int:
        return len(self._selected_tools)

    @property
    def can_start(self) -> bool:
        """UI start gate: enough tools, a valid ordering, and no run in progress."""
        return (
            len(self._selected_tools) >= self._min_tools
            and self._validation.valid
            and not self._is_executing
        )

    @property
    def is_pipeline_done(self) -> bool:
        """True when every tool step is done or skipped."""
        return self._steps.all_finished(self.total_steps)

    def status_of(self, step: int) -> StepStatus:
        """Status of a step; steps without an entry are pending."""
        return self._steps.status_of(step)

    def tool_for_step(self, step: int) -> Optional[str]:
        """Tool id run by a 1-based step, None outside 1..N."""
        if 1 <= step <= len(self._selected_tools):
            return self._selected_tools[step - 1]
        return None

    def set_progress_callback(self, callback: Optional[StepProgressCallback]) -> None:
        """
        Set a callback invoked after every step status change.

        Callback signature: (step, status) -> None
        """
        self._progress_callback = callback

    def _report(self, step: int) -> None:
        if self._progress_callback:
            self._progress_callback(step, self._steps.status_of(step))

    # =========================================================================
    # Builder
    # =========================================================================

    def _revalidate(self) -> None:
        self._validation = self._validator(list(self._selected_tools))

    def add_tool(self, tool_id: str) -> None:
        """Append a tool. A sixth tool is dropped without error."""
        if len(self._selected_tools) >= MAX_PIPELINE_TOOLS:
            logger.debug(f"Pipeline full, ignoring '{tool_id}'")
            return
        self._selected_tools.append(tool_id)
        self._revalidate()

    def remove_tool(self, index: int) -> None:
        """Remove the tool at a 0-based index. Execution state is not renumbered."""
        if 0 <= index < len(self._selected_tools):
            del self._selected_tools[index]
        self._revalidate()

    def reorder_tools(self, from_index: int, to_index: int) -> None:
        """Move one tool to a new 0-based position, shifting the others."""
        if 0 <= from_index < len(self._selected_tools):
            tool_id = self._selected_tools.pop(from_index)
            self._selected_tools.insert(to_index, tool_id)
        self._revalidate()

    def load_preset(self, preset: Union[PipelinePreset, str]) -> None:
        """Replace the tool list with a preset's tools, truncated to five."""
        if isinstance(preset, str):
            found = get_preset(preset, self._presets)
            if found is None:
                logger.warning(f"Unknown preset '{preset}'")
                return
            preset = found
        self._selected_tools = list(preset.tools[:MAX_PIPELINE_TOOLS])
        self._revalidate()
        logger.debug(f"Loaded preset '{preset.id}': {self._selected_tools}")

    def clear_pipeline(self) -> None:
        """Full reset: empty tool list, no run, no retained state."""
        self._selected_tools = []
        self._validation = ValidationResult()
        self._drop_run_state()
        logger.debug("Pipeline cleared")

    # =========================================================================
    # Whole-pipeline execution
    # =========================================================================

    def start_pipeline(self) -> None:
        """
        Begin a run over the current tool list.

        Validity is a UI-level start condition (see ``can_start``) and is not
        re-checked here. An empty tool list leaves the state untouched.
        """
        if not self._selected_tools:
            logger.debug("Ignoring start of an empty pipeline")
            return
        self._run_id += 1
        self._steps.initialize(len(self._selected_tools))
        self._buffers.clear()
        self._tool_outputs = {}
        self._is_executing = True
        self.advance_to_step(INPUT_STEP)
        logger.info(f"Pipeline started: {' -> '.join(self._selected_tools)}")

    def cancel_pipeline(self) -> None:
        """Stop driving the run. Status, errors and results stay inspectable."""
        self._run_id += 1
        self._current_step = NO_STEP
        self._is_executing = False
        logger.info("Pipeline cancelled")

    def reset_pipeline(self) -> None:
        """Drop the run state but keep the tool list and validation for a rerun."""
        self._drop_run_state()
        logger.debug("Pipeline reset")

    def _drop_run_state(self) -> None:
        self._run_id += 1
        self._current_step = NO_STEP
        self._is_executing = False
        self._steps.clear()
        self._buffers.clear()
        self._tool_outputs = {}

    # =========================================================================
    # Step operations
    # =========================================================================

    def set_original_input(self, payload: bytes) -> None:
        self._buffers.set_original_input(payload)

    def accept_input(self, payload: bytes) -> None:
        """Store the original input and move on to the first tool step."""
        self.set_original_input(payload)
        self.advance_to_step(1)

    def advance_to_step(self, step: int) -> None:
        """Point at a step; a pending step becomes configuring."""
        if not INPUT_STEP <= step <= self.total_steps:
            logger.debug(f"Ignoring advance to step {step}: outside 0..{self.total_steps}")
            return
        self._current_step = step
        if self._steps.status_of(step) == StepStatus.PENDING:
            self._steps.advance(step)
            self._report(step)

    def next_step_after(self, step: int) -> Optional[int]:
        """Index following a step, None after the last tool."""
        if step < self.total_steps:
            return step + 1
        return None

    def continue_from(self, step: int) -> None:
        """Advance past a finished step; the last step stays current."""
        following = self.next_step_after(step)
        if following is not None:
            self.advance_to_step(following)

    def can_advance_from(self, step: int) -> bool:
        """A failed step blocks forward movement until retried or skipped."""
        return self._steps.status_of(step) != StepStatus.FAILED

    def set_step_configuring(self, step: int) -> None:
        self._steps.set_configuring(step)
        self._report(step)

    def set_step_processing(self, step: int) -> None:
        self._steps.set_processing(step)
        self._report(step)

    def complete_step(self, step: int, output: bytes) -> None:
        """Mark a step done and retain its output."""
        self._buffers.store(step, output)
        self._prune_tool_outputs(step)
        self._steps.complete(step)
        self._report(step)

    def fail_step(self, step: int, error: str) -> None:
        """Mark a step failed with a human-readable error."""
        self._steps.fail(step, error)
        self._report(step)

    def skip_step(self, step: int) -> None:
        """Mark a step skipped; its input passes through as its output."""
        payload = self._buffers.get_step_input(step)
        if payload is not None:
            self._buffers.store(step, payload)
            self._prune_tool_outputs(step)
        self._steps.skip(step)
        self._report(step)

    def skip_and_continue(self, step: int) -> None:
        self.skip_step(step)
        self.continue_from(step)

    def retry_step(self, step: int) -> None:
        """Send a failed step back to configuring and clear its error."""
        if self._steps.retry(step):
            self._report(step)

    def _prune_tool_outputs(self, step: int) -> None:
        for k in [k for k in self._tool_outputs if k < step - 1]:
            del self._tool_outputs[k]

    # =========================================================================
    # Data flow
    # =========================================================================

    def get_step_input(self, step: int) -> Optional[bytes]:
        return self._buffers.get_step_input(step)

    def get_last_successful_output(self) -> Optional[bytes]:
        return self._buffers.get_last_successful_output()

    def final_output(self, name: Optional[str] = None) -> Optional[ToolOutput]:
        """
        Final artifact once every step is done or skipped.

        Returns the full output recorded by ``run_step`` when it produced the
        last retained payload; otherwise wraps that payload as a single file
        with an estimated page count.

        Args:
            name: File name for a wrapped payload (default from config)
        """
        if not self.is_pipeline_done:
            return None

        payload = self.get_last_successful_output()
        if payload is None:
            return None

        if self._tool_outputs:
            recorded = self._tool_outputs[max(self._tool_outputs)]
            if recorded.primary is not None and recorded.primary.data is payload:
                return recorded

        wrapped = OutputFile(
            name=name or self._output_name,
            data=payload,
            page_count=estimate_page_count(payload),
        )
        return ToolOutput(files=[wrapped])

    def run_step(
        self,
        step: int,
        transform: TransformFn,
        options: Optional[Dict[str, Any]] = None,
    ) -> StepRunResult:
        """
        Drive one step through a transformation service.

        Marks the step processing, calls ``transform(tool_id, [input], options)``
        and completes the step with the first produced file, or fails it with
        the service's error text. A result that arrives after the run was
        cancelled or reset is discarded.

        Args:
            step: 1-based step index
            transform: Transformation service callable
            options: Tool options passed through to the service

        Returns:
            StepRunResult describing the outcome
        """
        tool_id = self.tool_for_step(step)
        if tool_id is None:
            return StepRunResult(
                step=step,
                tool_id="",
                status=self._steps.status_of(step),
                error=f"No tool at step {step}",
            )

        payload = self.get_step_input(step)
        if payload is None:
            logger.warning(f"Step {step} has no input; not running {tool_id}")
            return StepRunResult(
                step=step,
                tool_id=tool_id,
                status=self._steps.status_of(step),
                error="No input available for this step.",
            )

        run_id = self._run_id
        self.set_step_processing(step)
        logger.info(f"Running step {step}: {tool_label(tool_id)}")
        started = time.perf_counter()

        output: Optional[ToolOutput] = None
        error: Optional[str] = None
        try:
            output = transform(tool_id, [payload], dict(options or {}))
        except Exception as e:
            error = str(e) or e.__class__.__name__

        duration = time.perf_counter() - started

        if run_id != self._run_id or not self._is_executing:
            logger.warning(f"Discarding late result for step {step}: run was cancelled or reset")
            return StepRunResult(
                step=step,
                tool_id=tool_id,
                status=self._steps.status_of(step),
                error=error,
                duration_seconds=duration,
                discarded=True,
            )

        if error is None and (output is None or not output.files):
            error = "No output was produced."

        if error is not None:
            self.fail_step(step, error)
            return StepRunResult(step, tool_id, StepStatus.FAILED, error=error,
                                 duration_seconds=duration)

        self.complete_step(step, output.files[0].data)
        self._tool_outputs[step] = output
        logger.info(f"Step {step} done in {duration:.2f}s")
        return StepRunResult(step, tool_id, StepStatus.DONE, duration_seconds=duration,
                             output=output)

    # =========================================================================
    # Facade operations
    # =========================================================================

    def validate_tools(self, tool_ids: List[str], strict: bool = False) -> ControllerResult[ValidationResult]:
        """
        Validate an arbitrary tool sequence without touching the builder.

        Returns:
            ControllerResult carrying the ValidationResult in both outcomes;
            success mirrors validity
        """
        if strict:
            result = validate_pipeline(tool_ids, strict=True)
        else:
            result = self._validator(list(tool_ids))
        messages = [str(w) for w in result.warnings]
        if result.valid:
            return ControllerResult.ok(
                data=result,
                message=f"Pipeline with {len(tool_ids)} step(s) is valid",
                warnings=messages,
            )
        return ControllerResult(
            success=False,
            data=result,
            error="; ".join(w.message for w in result.errors) or "Pipeline is invalid",
            warnings=messages,
        )

    def plan(
        self,
        tool_ids: Optional[List[str]] = None,
        page_count: int = 1,
        file_size: int = 0,
    ) -> ControllerResult[PipelinePlan]:
        """
        Validation verdict plus per-step time estimates.

        Args:
            tool_ids: Tool sequence to plan; defaults to the selected tools
            page_count: Page count of the input document
            file_size: Input size in bytes
        """
        tools = list(self._selected_tools if tool_ids is None else tool_ids)
        if not tools:
            return ControllerResult.fail("Pipeline has no steps")

        validation = self._validator(tools)
        steps = [
            PlanStep(
                step=i,
                tool_id=tool_id,
                name=tool_label(tool_id),
                estimated_seconds=estimate_time(tool_id, page_count, file_size),
            )
            for i, tool_id in enumerate(tools, 1)
        ]
        total = estimate_pipeline_time(tools, page_count, file_size)
        plan = PipelinePlan(
            tools=tools,
            valid=validation.valid,
            can_start=validation.valid and len(tools) >= self._min_tools,
            steps=steps,
            warnings=validation.to_dict()["warnings"],
            estimated_seconds=total,
        )
        return ControllerResult.ok(
            data=plan,
            message=f"{len(tools)} step(s), estimated {format_time(total)}",
            warnings=[str(w) for w in validation.warnings],
        )

    def summary(self) -> Dict[str, Any]:
        """Snapshot of the session for logging and display."""
        return {
            "tools": self.selected_tools,
            "current_step": self._current_step,
            "is_executing": self._is_executing,
            "steps": [
                {
                    "step": i,
                    "tool_id": tool_id,
                    "name": tool_label(tool_id),
                    "status": self._steps.status_of(i).value,
                    "error": self._steps.error_of(i),
                }
                for i, tool_id in enumerate(self._selected_tools, 1)
            ],
            "counts": self._steps.counts(self.total_steps),
            "retained_steps": self._buffers.retained_steps(),
            "retained_bytes": self._buffers.retained_bytes(),
            "validation": self._validation.to_dict(),
        }


def _configured_presets(config: Config) -> List[PipelinePreset]:
    """Presets from the configured presets file; empty when none is set."""
    path = config.get("presets", "file", "")
    if not path:
        return []
    try:
        return load_presets_file(path)
    except (OSError, PdfChainError) as e:
        logger.warning(f"Could not load presets from {path}: {e}")
        return []
