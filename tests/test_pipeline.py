"""Tests for the step runner."""
import pytest

from arch_oem_installer.pipeline import run_pipeline


class RecordingStep:
    def __init__(self, step_id, log, fail=False):
        self.step_id = step_id
        self.log = log
        self.fail = fail

    def run(self, state):
        self.log.append(self.step_id)
        if self.fail:
            raise RuntimeError(f"{self.step_id} failed")
        return state


class TestRunPipeline:
    def test_runs_in_order(self):
        log = []
        steps = [RecordingStep("a", log), RecordingStep("b", log), RecordingStep("c", log)]

        result = run_pipeline(state={}, steps=steps)

        assert log == ["a", "b", "c"]
        assert result.ran_steps == ["a", "b", "c"]
        assert result.state["execution"]["completed_steps"] == ["a", "b", "c"]
        assert result.state["execution"]["current_step"] is None

    def test_halts_on_first_failure(self):
        log = []
        state = {}
        steps = [RecordingStep("a", log), RecordingStep("b", log, fail=True), RecordingStep("c", log)]

        with pytest.raises(RuntimeError, match="b failed"):
            run_pipeline(state=state, steps=steps)

        assert log == ["a", "b"]
        assert state["execution"]["completed_steps"] == ["a"]
        assert state["execution"]["current_step"] == "b"

    def test_prior_completion_does_not_skip(self):
        log = []
        state = {"execution": {"completed_steps": ["a"]}}

        run_pipeline(state=state, steps=[RecordingStep("a", log)])

        assert log == ["a"]
