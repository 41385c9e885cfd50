# tests/controllers/test_pipeline.py
"""
Tests for PipelineController.

Covers the builder operations, the step execution surface, buffer retention
as seen through the controller, and the run_step / plan helpers.
"""

import pytest

from pdfchain.controllers.pipeline import NO_STEP, PipelineController, PipelinePlan
from pdfchain.core.pipeline.executor import OutputFile, ToolOutput
from pdfchain.core.pipeline.presets import PipelinePreset
from pdfchain.core.pipeline.step import StepStatus
from pdfchain.core.pipeline.validator import ValidationResult, WarningType


def _rejecting_validator(tool_ids):
    result = ValidationResult()
    result.add(WarningType.ERROR, "not allowed")
    return result


class TestPipelineBuilder:
    """Tests for tool list mutations."""

    def test_initial_state(self, controller):
        assert controller.selected_tools == []
        assert controller.current_step == NO_STEP
        assert controller.is_executing is False
        assert controller.validation.valid is True
        assert controller.validation.warnings == []
        assert controller.original_input is None

    def test_add_tool_appends(self, controller):
        controller.add_tool("rotate")
        controller.add_tool("encrypt")

        assert controller.selected_tools == ["rotate", "encrypt"]

    def test_sixth_tool_is_dropped(self, controller):
        for tool_id in ["a", "b", "c", "d", "e", "f"]:
            controller.add_tool(tool_id)

        assert controller.selected_tools == ["a", "b", "c", "d", "e"]

    def test_selected_tools_is_a_copy(self, controller):
        controller.add_tool("rotate")
        controller.selected_tools.append("encrypt")

        assert controller.selected_tools == ["rotate"]

    def test_adding_out_of_order_tools_produces_warnings(self, controller):
        controller.add_tool("encrypt")
        controller.add_tool("rotate")

        assert len(controller.validation.warnings) > 0
        assert controller.validation.valid is True

    def test_remove_tool(self, controller):
        for tool_id in ["a", "b", "c"]:
            controller.add_tool(tool_id)

        controller.remove_tool(1)

        assert controller.selected_tools == ["a", "c"]

    def test_remove_tool_out_of_range_is_noop(self, controller):
        controller.add_tool("a")

        controller.remove_tool(3)
        controller.remove_tool(-1)

        assert controller.selected_tools == ["a"]

    def test_remove_tool_revalidates(self, controller):
        controller.add_tool("encrypt")
        controller.add_tool("rotate")
        assert controller.validation.warnings

        controller.remove_tool(1)

        assert controller.validation.warnings == []

    def test_reorder_tools_moves_one_entry(self, controller):
        for tool_id in ["a", "b", "c"]:
            controller.add_tool(tool_id)

        controller.reorder_tools(0, 2)

        assert controller.selected_tools == ["b", "c", "a"]

    @pytest.mark.parametrize("i,j", [(0, 3), (3, 0), (1, 2), (2, 1), (0, 1)])
    def test_reorder_round_trip_restores_order(self, controller, i, j):
        tools = ["a", "b", "c", "d"]
        for tool_id in tools:
            controller.add_tool(tool_id)

        controller.reorder_tools(i, j)
        controller.reorder_tools(j, i)

        assert controller.selected_tools == tools

    def test_reorder_fixes_encrypt_warning(self, controller):
        controller.add_tool("encrypt")
        controller.add_tool("rotate")

        controller.reorder_tools(0, 1)

        assert controller.selected_tools == ["rotate", "encrypt"]
        assert controller.validation.warnings == []

    def test_load_preset_by_id(self, controller):
        controller.load_preset("scan-cleanup")

        assert controller.selected_tools == ["unlock", "delete-pages", "add-page-numbers"]
        assert controller.validation.valid is True

    def test_load_preset_object_replaces_list(self, controller):
        controller.add_tool("rotate")
        preset = PipelinePreset(id="p", name="P", tools=["scale", "encrypt"])

        controller.load_preset(preset)

        assert controller.selected_tools == ["scale", "encrypt"]

    def test_load_preset_truncates_to_five(self, controller):
        preset = PipelinePreset(id="long", name="Long", tools=list("abcdefg"))

        controller.load_preset(preset)

        assert controller.selected_tools == ["a", "b", "c", "d", "e"]

    def test_load_unknown_preset_is_noop(self, controller):
        controller.add_tool("rotate")

        controller.load_preset("does-not-exist")

        assert controller.selected_tools == ["rotate"]

    def test_every_mutation_calls_validator(self, mocker, default_config):
        validator = mocker.Mock(return_value=ValidationResult())
        controller = PipelineController(validator=validator, config=default_config)

        controller.add_tool("a")
        controller.add_tool("b")
        controller.reorder_tools(0, 1)
        controller.remove_tool(0)
        controller.load_preset("number-lock")

        assert validator.call_count == 5
        assert [c.args[0] for c in validator.call_args_list] == [
            ["a"],
            ["a", "b"],
            ["b", "a"],
            ["a"],
            ["add-page-numbers", "encrypt"],
        ]

    def test_clear_pipeline_resets_everything(self, started):
        controller = started("rotate", "encrypt")
        controller.complete_step(1, b"rotated")
        controller.add_tool("encrypt")

        controller.clear_pipeline()

        assert controller.selected_tools == []
        assert controller.current_step == NO_STEP
        assert controller.is_executing is False
        assert controller.step_status == {}
        assert controller.step_errors == {}
        assert controller.intermediate_results == {}
        assert controller.original_input is None
        assert controller.validation.warnings == []


class TestCanStart:
    """Tests for the start gate."""

    def test_needs_two_tools(self, controller):
        controller.add_tool("rotate")
        assert controller.can_start is False

        controller.add_tool("encrypt")
        assert controller.can_start is True

    def test_invalid_pipeline_cannot_start(self, default_config):
        controller = PipelineController(validator=_rejecting_validator, config=default_config)
        controller.add_tool("a")
        controller.add_tool("b")

        assert controller.validation.valid is False
        assert controller.can_start is False

    def test_not_while_executing(self, controller):
        controller.add_tool("a")
        controller.add_tool("b")
        controller.start_pipeline()

        assert controller.can_start is False

    def test_min_tools_from_config(self, default_config):
        default_config.set("pipeline", "min_tools", 3)
        controller = PipelineController(config=default_config)
        controller.add_tool("a")
        controller.add_tool("b")

        assert controller.can_start is False

    def test_start_does_not_recheck_validity(self, default_config):
        controller = PipelineController(validator=_rejecting_validator, config=default_config)
        controller.add_tool("a")

        controller.start_pipeline()

        assert controller.is_executing is True


class TestPipelineExecution:
    """Tests for the step operations."""

    def test_start_pipeline(self, controller):
        controller.add_tool("a")
        controller.add_tool("b")

        controller.start_pipeline()

        assert controller.current_step == 0
        assert controller.step_status[1] == StepStatus.PENDING
        assert controller.step_status[2] == StepStatus.PENDING
        assert controller.is_executing is True

    def test_start_drives_input_step_to_configuring(self, controller):
        controller.add_tool("a")

        controller.start_pipeline()

        assert controller.status_of(0) == StepStatus.CONFIGURING

    def test_start_empty_pipeline_is_noop(self, controller):
        controller.start_pipeline()

        assert controller.current_step == NO_STEP
        assert controller.is_executing is False
        assert controller.step_status == {}

    def test_start_keeps_tool_list_and_validation(self, controller):
        controller.add_tool("encrypt")
        controller.add_tool("rotate")
        validation = controller.validation

        controller.start_pipeline()

        assert controller.selected_tools == ["encrypt", "rotate"]
        assert controller.validation is validation

    def test_start_clears_previous_run(self, started):
        controller = started("a", "b")
        controller.complete_step(1, b"out")
        controller.fail_step(2, "boom")

        controller.start_pipeline()

        assert controller.intermediate_results == {}
        assert controller.step_errors == {}
        assert controller.original_input is None
        assert controller.step_status[2] == StepStatus.PENDING

    def test_accept_input_moves_to_first_step(self, started, sample_pdf):
        controller = started("a", "b")

        assert controller.original_input == sample_pdf
        assert controller.current_step == 1
        assert controller.step_status[1] == StepStatus.CONFIGURING

    def test_advance_promotes_pending(self, started):
        controller = started("a", "b")

        controller.advance_to_step(2)

        assert controller.current_step == 2
        assert controller.step_status[2] == StepStatus.CONFIGURING

    def test_advance_does_not_change_done_step(self, started):
        controller = started("a", "b")
        controller.complete_step(1, b"out")

        controller.advance_to_step(1)

        assert controller.current_step == 1
        assert controller.step_status[1] == StepStatus.DONE

    @pytest.mark.parametrize("step", [NO_STEP, 3, 7])
    def test_advance_outside_run_is_ignored(self, started, step):
        controller = started("a", "b")

        controller.advance_to_step(step)

        assert controller.current_step == 1
        assert step not in controller.step_status

    def test_set_configuring_and_processing(self, started):
        controller = started("a")

        controller.set_step_processing(1)
        assert controller.step_status[1] == StepStatus.PROCESSING

        controller.set_step_configuring(1)
        assert controller.step_status[1] == StepStatus.CONFIGURING

    def test_complete_step_evicts_old_results(self, started):
        controller = started("a", "b", "c")

        controller.complete_step(1, b"X")
        controller.complete_step(2, b"Y")
        controller.complete_step(3, b"Z")

        results = controller.intermediate_results
        assert 1 not in results
        assert results[2] == b"Y"
        assert results[3] == b"Z"

    def test_at_most_two_results_retained(self, started):
        controller = started("a", "b", "c", "d", "e")

        for k in range(1, 6):
            controller.complete_step(k, f"out-{k}".encode())
            results = controller.intermediate_results
            assert all(m >= k - 1 for m in results)
            assert len(results) <= 2

    def test_input_of_first_steps_is_original(self, started, sample_pdf):
        controller = started("a", "b", "c", "d")

        for k in range(1, 5):
            controller.complete_step(k, f"out-{k}".encode())
            assert controller.get_step_input(0) == sample_pdf
            assert controller.get_step_input(1) == sample_pdf

    def test_input_is_previous_output(self, started):
        controller = started("a", "b", "c")
        controller.complete_step(1, b"X")
        controller.complete_step(2, b"Y")

        assert controller.get_step_input(2) == b"X"
        assert controller.get_step_input(3) == b"Y"

    def test_original_input_survives_eviction(self, started, sample_pdf):
        controller = started("a", "b", "c", "d", "e")

        for k in range(1, 6):
            controller.complete_step(k, f"out-{k}".encode())

        assert controller.original_input == sample_pdf

    def test_skip_step_passes_input_through(self, controller, sample_pdf):
        controller.add_tool("a")
        controller.add_tool("b")
        controller.start_pipeline()
        controller.set_original_input(sample_pdf)

        controller.skip_step(1)

        assert controller.step_status[1] == StepStatus.SKIPPED
        assert controller.intermediate_results[1] == sample_pdf
        assert controller.get_step_input(2) == sample_pdf

    def test_skip_middle_step_forwards_previous_output(self, started):
        controller = started("a", "b", "c")
        controller.complete_step(1, b"X")

        controller.skip_step(2)

        assert controller.intermediate_results[2] == b"X"
        assert controller.get_step_input(3) == b"X"

    def test_skip_without_input_stores_nothing(self, controller):
        controller.add_tool("a")
        controller.start_pipeline()

        controller.skip_step(1)

        assert controller.step_status[1] == StepStatus.SKIPPED
        assert controller.intermediate_results == {}

    def test_fail_then_retry(self, controller):
        controller.add_tool("a")
        controller.start_pipeline()

        controller.fail_step(1, "boom")
        assert controller.step_status[1] == StepStatus.FAILED
        assert controller.step_errors[1] == "boom"

        controller.retry_step(1)

        assert controller.step_status[1] == StepStatus.CONFIGURING
        assert controller.step_errors[1] == ""

    def test_retry_of_done_step_is_noop(self, started):
        controller = started("a")
        controller.complete_step(1, b"out")

        controller.retry_step(1)

        assert controller.step_status[1] == StepStatus.DONE

    def test_failed_step_blocks_advance(self, started):
        controller = started("a", "b")
        controller.fail_step(1, "boom")

        assert controller.can_advance_from(1) is False

        controller.skip_and_continue(1)

        assert controller.can_advance_from(1) is True
        assert controller.current_step == 2

    def test_failure_does_not_touch_other_steps(self, started):
        controller = started("a", "b", "c")
        controller.complete_step(1, b"X")

        controller.fail_step(2, "boom")

        assert controller.step_status[1] == StepStatus.DONE
        assert controller.step_status[3] == StepStatus.PENDING
        assert controller.intermediate_results[1] == b"X"

    def test_next_step_after(self, started):
        controller = started("a", "b")

        assert controller.next_step_after(0) == 1
        assert controller.next_step_after(1) == 2
        assert controller.next_step_after(2) is None

    def test_continue_from_last_step_stays(self, started):
        controller = started("a", "b")
        controller.advance_to_step(2)

        controller.continue_from(2)

        assert controller.current_step == 2

    def test_cancel_keeps_state(self, started, sample_pdf):
        controller = started("a", "b")
        controller.complete_step(1, b"X")
        controller.fail_step(2, "boom")

        controller.cancel_pipeline()

        assert controller.current_step == NO_STEP
        assert controller.is_executing is False
        assert controller.selected_tools == ["a", "b"]
        assert controller.step_status[1] == StepStatus.DONE
        assert controller.step_errors[2] == "boom"
        assert controller.intermediate_results[1] == b"X"
        assert controller.original_input == sample_pdf

    def test_reset_clears_run_state_only(self, started):
        controller = started("encrypt", "rotate")
        validation = controller.validation
        controller.complete_step(1, b"X")

        controller.reset_pipeline()

        assert controller.current_step == NO_STEP
        assert controller.is_executing is False
        assert controller.step_status == {}
        assert controller.step_errors == {}
        assert controller.intermediate_results == {}
        assert controller.original_input is None
        assert controller.selected_tools == ["encrypt", "rotate"]
        assert controller.validation is validation

    def test_last_successful_output(self, controller, sample_pdf):
        controller.add_tool("a")
        controller.add_tool("b")
        controller.start_pipeline()
        assert controller.get_last_successful_output() is None

        controller.set_original_input(sample_pdf)
        assert controller.get_last_successful_output() == sample_pdf

        controller.complete_step(1, b"X")
        controller.complete_step(2, b"Y")
        assert controller.get_last_successful_output() == b"Y"

    def test_remove_tool_does_not_renumber_state(self, started):
        controller = started("a", "b", "c")
        controller.complete_step(2, b"Y")

        controller.remove_tool(0)

        assert controller.selected_tools == ["b", "c"]
        assert controller.step_status[2] == StepStatus.DONE
        assert controller.intermediate_results[2] == b"Y"

    def test_is_pipeline_done(self, started):
        controller = started("a", "b")
        assert controller.is_pipeline_done is False

        controller.complete_step(1, b"X")
        controller.skip_step(2)

        assert controller.is_pipeline_done is True

    def test_progress_callback(self, started, mocker):
        controller = started("a", "b")
        callback = mocker.Mock()
        controller.set_progress_callback(callback)

        controller.set_step_processing(1)
        controller.complete_step(1, b"X")

        callback.assert_has_calls([
            mocker.call(1, StepStatus.PROCESSING),
            mocker.call(1, StepStatus.DONE),
        ])


class TestRunStep:
    """Tests for driving steps through a transformation service."""

    def test_success_completes_step(self, started, stamping_service, sample_pdf):
        controller = started("rotate", "encrypt")

        result = controller.run_step(1, stamping_service)

        assert result.success is True
        assert result.status == StepStatus.DONE
        assert result.tool_id == "rotate"
        assert controller.step_status[1] == StepStatus.DONE
        assert controller.intermediate_results[1] == sample_pdf + b"|rotate"

    def test_service_receives_input_and_options(self, started, sample_pdf, mocker):
        controller = started("rotate", "encrypt")
        service = mocker.Mock(return_value=ToolOutput(files=[OutputFile("r.pdf", b"R")]))

        controller.run_step(1, service, {"angle": 90})

        service.assert_called_once_with("rotate", [sample_pdf], {"angle": 90})

    def test_rejection_fails_step(self, started, failing_service):
        controller = started("rotate", "encrypt")

        result = controller.run_step(1, failing_service)

        assert result.success is False
        assert result.status == StepStatus.FAILED
        assert controller.step_status[1] == StepStatus.FAILED
        assert controller.step_errors[1] == "rotate failed: damaged xref table"
        assert 1 not in controller.intermediate_results

    def test_unexpected_exception_is_captured(self, started):
        controller = started("rotate", "encrypt")

        def broken(tool_id, inputs, options):
            raise ValueError("bad page tree")

        result = controller.run_step(1, broken)

        assert result.status == StepStatus.FAILED
        assert controller.step_errors[1] == "bad page tree"

    def test_no_files_fails_step(self, started):
        controller = started("rotate", "encrypt")

        result = controller.run_step(1, lambda tool_id, inputs, options: ToolOutput())

        assert result.status == StepStatus.FAILED
        assert controller.step_errors[1] == "No output was produced."

    def test_no_input_leaves_step_untouched(self, controller, mocker):
        service = mocker.Mock()
        controller.add_tool("rotate")
        controller.start_pipeline()
        controller.advance_to_step(1)

        result = controller.run_step(1, service)

        service.assert_not_called()
        assert result.success is False
        assert result.discarded is False
        assert result.error == "No input available for this step."
        assert result.status == StepStatus.CONFIGURING
        assert controller.step_status[1] == StepStatus.CONFIGURING
        assert 1 not in controller.step_errors

    def test_step_without_tool(self, started, stamping_service):
        controller = started("rotate")

        result = controller.run_step(4, stamping_service)

        assert result.success is False
        assert result.error == "No tool at step 4"
        assert 4 not in controller.step_status

    def test_retry_after_failure(self, started, failing_service, stamping_service):
        controller = started("rotate", "encrypt")
        controller.run_step(1, failing_service)

        controller.retry_step(1)
        result = controller.run_step(1, stamping_service)

        assert result.success is True
        assert controller.step_errors[1] == ""

    def test_late_result_after_cancel_is_discarded(self, started):
        controller = started("rotate", "encrypt")

        def cancelling(tool_id, inputs, options):
            controller.cancel_pipeline()
            return ToolOutput(files=[OutputFile("late.pdf", b"late")])

        result = controller.run_step(1, cancelling)

        assert result.discarded is True
        assert result.success is False
        assert 1 not in controller.intermediate_results
        assert controller.step_status[1] == StepStatus.PROCESSING

    def test_late_failure_after_reset_is_discarded(self, started):
        controller = started("rotate", "encrypt")

        def resetting(tool_id, inputs, options):
            controller.reset_pipeline()
            raise RuntimeError("too late")

        result = controller.run_step(1, resetting)

        assert result.discarded is True
        assert controller.step_status == {}
        assert controller.step_errors == {}

    def test_late_result_after_restart_is_discarded(self, started, sample_pdf):
        controller = started("rotate", "encrypt")

        def restarting(tool_id, inputs, options):
            controller.start_pipeline()
            controller.accept_input(sample_pdf)
            return ToolOutput(files=[OutputFile("late.pdf", b"late")])

        result = controller.run_step(1, restarting)

        assert result.discarded is True
        assert controller.step_status[1] == StepStatus.CONFIGURING

    def test_full_run_produces_final_output(self, started, stamping_service, sample_pdf):
        controller = started("rotate", "add-page-numbers", "encrypt")

        for step in range(1, controller.total_steps + 1):
            controller.advance_to_step(step)
            assert controller.run_step(step, stamping_service).success

        final = controller.final_output()
        assert controller.is_pipeline_done is True
        assert final.files[0].name == "encrypt.pdf"
        assert final.files[0].data == sample_pdf + b"|rotate|add-page-numbers|encrypt"

    def test_step_result_to_dict(self, started, stamping_service):
        controller = started("rotate", "encrypt")

        data = controller.run_step(1, stamping_service).to_dict()

        assert data["status"] == "done"
        assert data["files"] == ["rotate.pdf"]
        assert data["discarded"] is False


class TestFinalOutput:
    """Tests for materializing the final artifact."""

    def test_none_until_done(self, started):
        controller = started("a", "b")
        controller.complete_step(1, b"X")

        assert controller.final_output() is None

    def test_wraps_last_payload(self, started):
        controller = started("a", "b")
        controller.complete_step(1, b"X")
        controller.complete_step(2, b"Y")

        final = controller.final_output()

        assert final.files[0].name == "pipeline-output.pdf"
        assert final.files[0].data == b"Y"

    def test_custom_name(self, started):
        controller = started("a")
        controller.complete_step(1, b"X")

        assert controller.final_output("report.pdf").files[0].name == "report.pdf"

    def test_wrapped_payload_has_page_estimate(self, started):
        controller = started("a")
        controller.complete_step(1, b"<< /Type /Pages >> << /Type /Page >> << /Type /Page >>")

        assert controller.final_output().files[0].page_count == 2

    def test_name_from_config(self, default_config, sample_pdf):
        default_config.set("pipeline", "output_name", "chained.pdf")
        controller = PipelineController(config=default_config)
        controller.add_tool("a")
        controller.start_pipeline()
        controller.accept_input(sample_pdf)
        controller.complete_step(1, b"X")

        assert controller.final_output().files[0].name == "chained.pdf"

    def test_all_skipped_returns_original(self, started, sample_pdf):
        controller = started("a", "b")
        controller.skip_step(1)
        controller.skip_step(2)

        assert controller.final_output().files[0].data == sample_pdf


class TestControllerPresets:
    """Tests for presets resolved through the controller."""

    def test_presets_from_config_file(self, default_config, presets_file):
        default_config.set("presets", "file", str(presets_file))
        controller = PipelineController(config=default_config)

        controller.load_preset("rotate-lock")

        assert controller.selected_tools == ["rotate", "encrypt"]

    def test_configured_preset_overrides_builtin(self, default_config, presets_file):
        default_config.set("presets", "file", str(presets_file))
        controller = PipelineController(config=default_config)

        controller.load_preset("secure-stamp")

        assert controller.selected_tools == ["text-watermark", "add-page-numbers", "encrypt"]

    def test_unreadable_presets_file_falls_back_to_builtins(self, default_config, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[[presets]\nid = ", encoding="utf-8")
        default_config.set("presets", "file", str(bad))

        controller = PipelineController(config=default_config)

        assert [p.id for p in controller.presets] == [
            "scan-cleanup",
            "secure-stamp",
            "document-prep",
            "number-lock",
        ]

    @pytest.mark.parametrize("content", [
        b'presets = ["rotate-lock"]\n',
        b'[[presets]]\nid = "x\xff"\nname = "X"\ntools = ["rotate"]\n',
    ])
    def test_malformed_presets_file_falls_back_to_builtins(self, default_config, tmp_path,
                                                           content):
        bad = tmp_path / "bad.toml"
        bad.write_bytes(content)
        default_config.set("presets", "file", str(bad))

        controller = PipelineController(config=default_config)

        assert [p.id for p in controller.presets] == [
            "scan-cleanup",
            "secure-stamp",
            "document-prep",
            "number-lock",
        ]

    def test_explicit_presets_argument(self, default_config):
        extra = [PipelinePreset(id="solo", name="Solo", tools=["rotate"])]
        controller = PipelineController(config=default_config, presets=extra)

        controller.load_preset("solo")

        assert controller.selected_tools == ["rotate"]


class TestFacadeOperations:
    """Tests for validate_tools, plan and summary."""

    def test_validate_tools_valid(self, controller):
        result = controller.validate_tools(["rotate", "encrypt"])

        assert result.success is True
        assert result.data.valid is True
        assert controller.selected_tools == []

    def test_validate_tools_reports_warnings(self, controller):
        result = controller.validate_tools(["encrypt", "rotate"])

        assert result.success is True
        assert len(result.warnings) == 1
        assert "Encrypt should be the last step" in result.warnings[0]

    def test_validate_tools_strict_fails(self, controller):
        result = controller.validate_tools(["encrypt", "rotate"], strict=True)

        assert result.success is False
        assert "Encrypt should be the last step" in result.error
        assert result.data.valid is False

    def test_validate_too_many_tools(self, controller):
        result = controller.validate_tools(list("abcdef"))

        assert result.success is False
        assert "limited to 5 steps" in result.error

    def test_plan_estimates(self, controller):
        result = controller.plan(["rotate", "add-page-numbers"], page_count=120)

        plan = result.data
        assert result.success is True
        assert isinstance(plan, PipelinePlan)
        assert [s.estimated_seconds for s in plan.steps] == [0.9, 7.0]
        assert plan.estimated_seconds == 7.9
        assert plan.can_start is True
        assert result.to_dict()["data"]["estimated"] == "~8 seconds"

    def test_plan_defaults_to_selected_tools(self, controller):
        controller.load_preset("number-lock")

        plan = controller.plan(page_count=10).data

        assert plan.tools == ["add-page-numbers", "encrypt"]
        assert [s.name for s in plan.steps] == ["Page Numbers", "Encrypt PDF"]

    def test_plan_single_tool_cannot_start(self, controller):
        plan = controller.plan(["rotate"]).data

        assert plan.valid is True
        assert plan.can_start is False

    def test_plan_unknown_tool_uses_fallbacks(self, controller):
        plan = controller.plan(["custom-ocr", "encrypt"]).data

        assert plan.steps[0].name == "custom-ocr"
        assert plan.steps[0].estimated_seconds == 1.0

    def test_plan_empty_fails(self, controller):
        result = controller.plan([])

        assert result.success is False
        assert result.error == "Pipeline has no steps"

    def test_summary(self, started):
        controller = started("rotate", "encrypt")
        controller.complete_step(1, b"12345")
        controller.fail_step(2, "boom")

        summary = controller.summary()

        assert summary["tools"] == ["rotate", "encrypt"]
        assert summary["current_step"] == 1
        assert summary["steps"][0]["status"] == "done"
        assert summary["steps"][1]["error"] == "boom"
        assert summary["counts"]["failed"] == 1
        assert summary["retained_steps"] == [1]
        assert summary["retained_bytes"] == 5
