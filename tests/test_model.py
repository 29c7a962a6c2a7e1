from __future__ import annotations

import pytest

from conftest import FakeItem
from oecli.errors import SchedulerError
from oecli.model import ItemStep, RunStatus, ShouldRunResult, StepId, as_step
from oecli.sequence import StepSequence


def test_should_run_result_constructors():
    assert ShouldRunResult.ok().status is RunStatus.RUN
    assert ShouldRunResult.skip().status is RunStatus.SKIP
    err = ShouldRunResult.error("gh not logged in")
    assert err.status is RunStatus.ERROR
    assert err.message == "gh not logged in"


def test_step_ids_are_unique_and_compare_by_value():
    a, b = StepId.new_random(), StepId.new_random()
    assert a != b
    assert a == StepId(a.id)
    assert len({a, b, StepId(a.id)}) == 2


def test_item_step_takes_details_from_work_item():
    step = ItemStep(FakeItem("Clone repo"))
    assert step.title == "Clone repo"
    assert step.description == "fake Clone repo"
    assert step.details.title == "Clone repo"


def test_item_step_falls_back_to_class_name():
    class Untitled(FakeItem):
        pass

    item = Untitled("x")
    item.title = ""
    assert ItemStep(item).title == "Untitled"


def test_item_step_can_be_taken_once():
    item = FakeItem("a")
    step = ItemStep(item)
    assert not step.consumed
    assert step.take() is item
    assert step.consumed
    with pytest.raises(SchedulerError):
        step.take()


def test_steps_compare_by_id():
    item = FakeItem("a")
    one, two = ItemStep(item), ItemStep(item)
    assert one == one
    assert one != two
    assert len({one, two, one}) == 2


def test_as_step_wraps_work_items_and_rejects_other_values():
    item = FakeItem("a")
    wrapped = as_step(item)
    assert isinstance(wrapped, ItemStep)
    assert as_step(wrapped) is wrapped
    with pytest.raises(TypeError):
        as_step("not a step")


def test_sequence_batches_and_cursor():
    nested = StepSequence("nested").then_run(FakeItem("n1"))
    seq = (
        StepSequence("outer", "outer sequence")
        .set_steps([FakeItem("a"), FakeItem("b")])
        .then_run(FakeItem("c"))
        .then_run_parallel([FakeItem("d"), nested])
    )

    assert seq.num_steps() == 5
    assert seq.remaining_steps() == 5
    assert [len(batch) for batch in seq.steps] == [2, 1, 2]

    first = seq.take_next_batch()
    assert [s.title for s in first] == ["a", "b"]
    assert seq.cursor == 1
    assert seq.remaining_steps() == 3

    seq.take_next_batch()
    last = seq.take_next_batch()
    assert last[1] is nested
    assert not seq.has_next()


def test_set_steps_replaces_batches():
    seq = StepSequence("s").then_run(FakeItem("a")).then_run(FakeItem("b"))
    seq.set_steps([FakeItem("c")])
    assert seq.num_steps() == 1
    assert seq.steps[0][0].title == "c"


def test_take_next_batch_when_exhausted():
    seq = StepSequence("empty")
    assert seq.num_steps() == 0
    assert not seq.has_next()
    with pytest.raises(SchedulerError):
        seq.take_next_batch()
