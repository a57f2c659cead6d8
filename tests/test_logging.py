"""
Tests for import-scoped logging context and stage timing.
"""

import pytest

from idea_graph.logging import (
    PipelineTimer,
    add_context_info,
    get_project_id,
    get_trace_id,
    logging_context,
)


class TestLoggingContext:
    def test_binds_both_ids(self):
        with logging_context(trace_id="import-7", project_id="proj-42"):
            assert (get_trace_id(), get_project_id()) == ("import-7", "proj-42")

        assert get_trace_id() is None
        assert get_project_id() is None

    def test_nested_scopes_unwind(self):
        with logging_context(trace_id="fresh-import"):
            with logging_context(trace_id="smart-import", project_id="proj-1"):
                assert get_trace_id() == "smart-import"
            assert get_trace_id() == "fresh-import"
            assert get_project_id() is None

    def test_unset_id_inherits_outer_scope(self):
        with logging_context(project_id="proj-outer"):
            with logging_context(trace_id="t-inner"):
                assert get_project_id() == "proj-outer"

    def test_restored_when_body_raises(self):
        with pytest.raises(ValueError):
            with logging_context(trace_id="doomed"):
                raise ValueError("parse failed")

        assert get_trace_id() is None

    def test_processor_stamps_event(self):
        with logging_context(trace_id="t1", project_id="p1"):
            event = add_context_info(None, "info", {"event": "import.started"})

        assert event == {"event": "import.started", "trace_id": "t1", "project_id": "p1"}

    def test_processor_leaves_event_alone_outside_import(self):
        event = add_context_info(None, "info", {"event": "health"})

        assert event == {"event": "health"}


class TestPipelineTimer:
    def test_stages_recorded_in_order(self):
        timer = PipelineTimer()

        with timer.stage("parse"):
            pass
        with timer.stage("smart_import"):
            pass

        assert list(timer.stages) == ["parse", "smart_import"]
        assert all(ms >= 0 for ms in timer.stages.values())

    def test_failed_stage_still_timed(self):
        timer = PipelineTimer()

        with pytest.raises(RuntimeError):
            with timer.stage("generate"):
                raise RuntimeError("boom")

        assert "generate" in timer.stages

    def test_summary_rounds_recorded_values(self):
        timer = PipelineTimer()
        timer.record("parse", 12.3456)
        timer.record("generate", 3.0)

        summary = timer.summary()

        assert summary["stages"] == {"parse": 12.35, "generate": 3.0}
        assert summary["total_ms"] >= 0
