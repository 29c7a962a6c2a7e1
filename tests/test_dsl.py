from __future__ import annotations

import pytest

from conftest import FakeItem
from oecli.dsl import ExecutorProperties, item, sequence, sh, task
from oecli.errors import StepError, WorkflowLoadError
from oecli.events import End
from oecli.model import ItemStep, RunStatus
from oecli.runner import load_workflow, run_plan
from oecli.sequence import StepSequence


def test_run_replaces_earlier_batches():
    props = ExecutorProperties().then_run(FakeItem("a")).then_run(FakeItem("b"))
    props.run(FakeItem("c"))

    steps = props.get_steps()
    assert [[s.title for s in batch] for batch in steps] == [["c"]]


def test_run_parallel_replaces_and_then_run_appends():
    props = (
        ExecutorProperties()
        .run(FakeItem("old"))
        .run_parallel([FakeItem("a"), FakeItem("b")])
        .then_run(FakeItem("c"))
        .then_run_parallel([FakeItem("d"), FakeItem("e")])
    )

    assert props.num_steps() == 5
    assert [[s.title for s in batch] for batch in props.get_steps()] == [["a", "b"], ["c"], ["d", "e"]]


def test_get_steps_empties_the_properties():
    props = ExecutorProperties().run(FakeItem("a"))
    assert len(props.get_steps()) == 1
    assert props.get_steps() == []


def test_sequence_helper_single_steps_and_parallel_lists():
    seq = sequence("Setup", FakeItem("a"), [FakeItem("b"), FakeItem("c")], item(FakeItem("d")), description="all of it")

    assert isinstance(seq, StepSequence)
    assert seq.title == "Setup"
    assert seq.description == "all of it"
    assert [[s.title for s in batch] for batch in seq.steps] == [["a"], ["b", "c"], ["d"]]


def test_sequence_helper_keeps_every_positional_step():
    seq = sequence("T", FakeItem("a"), FakeItem("b"))

    assert seq.num_steps() == 2
    assert seq.description == ""
    assert [[s.title for s in batch] for batch in seq.steps] == [["a"], ["b"]]


def test_item_wraps_work_item():
    step = item(FakeItem("a"))
    assert isinstance(step, ItemStep)
    assert step.title == "a"


def test_task_runs_callable():
    calls = []
    step = task("Write", lambda: calls.append(1) or "written", description="writes")
    work = step.take()

    assert step.description == "writes"
    assert work.should_run().status is RunStatus.RUN
    assert work.execute() == "written"
    assert calls == [1]


def test_task_check_true_skips():
    work = task("Write", lambda: None, check=lambda: True).take()
    assert work.should_run().status is RunStatus.SKIP
    assert work.execute() == ""


def test_sh_skips_when_created_path_exists(tmp_path):
    (tmp_path / "out.txt").write_text("x")
    work = sh("Make out", "echo hi", creates=str(tmp_path / "out.txt")).take()
    assert work.should_run().status is RunStatus.SKIP


def test_sh_missing_cwd_is_check_error(tmp_path):
    work = sh("Make out", "true", cwd=str(tmp_path / "missing")).take()
    result = work.should_run()
    assert result.status is RunStatus.ERROR
    assert "missing" in result.message


def test_sh_executes_in_cwd(tmp_path):
    work = sh("Write file", "echo hello > made.txt && echo done", cwd=str(tmp_path)).take()
    assert work.should_run().status is RunStatus.RUN
    assert work.execute() == "done"
    assert (tmp_path / "made.txt").read_text().strip() == "hello"


def test_sh_creates_is_relative_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    project = tmp_path / "project"
    project.mkdir()
    (project / "out.txt").write_text("x")

    in_project = sh("Make out", "echo hi > out.txt", creates="out.txt", cwd=str(project)).take()
    assert in_project.should_run().status is RunStatus.SKIP

    (tmp_path / "other.txt").write_text("x")
    elsewhere = sh("Make other", "echo hi > other.txt", creates="other.txt", cwd=str(project)).take()
    assert elsewhere.should_run().status is RunStatus.RUN


def test_sh_output_with_invalid_utf8_succeeds(tmp_path, handler):
    run_plan(ExecutorProperties().run(sh("Binary output", "printf '\\377\\376'", cwd=str(tmp_path))), handler)

    (_, end), = handler.of_type(End)
    assert "\ufffd" in end.message


def test_sh_failure_raises_step_error(tmp_path):
    work = sh("Fail", "echo broken >&2; exit 3", cwd=str(tmp_path)).take()
    with pytest.raises(StepError) as exc_info:
        work.execute()
    assert "exit=3" in exc_info.value.message
    assert "broken" in exc_info.value.message


# ---------------------------------------------------------------------
# Workflow files
# ---------------------------------------------------------------------

def test_load_workflow_function(tmp_path):
    wf = tmp_path / "wf.py"
    wf.write_text(
        "from oecli import ExecutorProperties, task\n"
        "def workflow():\n"
        "    return ExecutorProperties().run(task('one', lambda: 'ok')).then_run(task('two', lambda: 'ok'))\n"
    )
    props = load_workflow(wf)
    assert props.num_steps() == 2


def test_load_workflow_plan_constant(tmp_path):
    wf = tmp_path / "wf.py"
    wf.write_text(
        "from oecli import ExecutorProperties, task\n"
        "PLAN = ExecutorProperties().run(task('one', lambda: 'ok'))\n"
    )
    assert load_workflow(str(wf)).num_steps() == 1


def test_load_workflow_missing_file(tmp_path):
    with pytest.raises(WorkflowLoadError, match="not found"):
        load_workflow(tmp_path / "nope.py")


def test_load_workflow_requires_python_file(tmp_path):
    wf = tmp_path / "wf.yaml"
    wf.write_text("steps: []\n")
    with pytest.raises(WorkflowLoadError, match=".py"):
        load_workflow(wf)


def test_load_workflow_rejects_other_values(tmp_path):
    wf = tmp_path / "wf.py"
    wf.write_text("def workflow():\n    return ['not', 'a', 'plan']\n")
    with pytest.raises(WorkflowLoadError):
        load_workflow(wf)
