"""Tests for Action variants — leaf, GroupAction, MultiAction.

Covers:
- Guarded execute/unexecute and their post-state return values
- Default and explicit display names
- GroupAction first/last bracket semantics
- MultiAction identity dedup and error propagation
"""

import pytest
from unittest.mock import MagicMock

from undo_history.core.actions import (
    Action,
    CallbackAction,
    GroupAction,
    MultiAction,
)


class CountingAction(Action):
    """Leaf action counting hook invocations."""

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.done = 0
        self.undone = 0

    def execute_task(self):
        self.done += 1

    def unexecute_task(self):
        self.undone += 1


class FailingAction(Action):
    def execute_task(self):
        raise RuntimeError("boom")

    def unexecute_task(self):
        raise RuntimeError("boom")


# ===================================================================
# Leaf actions
# ===================================================================

class TestLeafAction:

    def setup_method(self):
        self.action = CountingAction()

    def test_initially_not_executed(self):
        assert not self.action.executed

    def test_execute_runs_hook_once(self):
        assert self.action.execute() is True
        assert self.action.execute() is True
        assert self.action.done == 1
        assert self.action.executed

    def test_unexecute_without_execute_is_noop(self):
        assert self.action.unexecute() is True
        assert self.action.undone == 0

    def test_unexecute_runs_hook_once(self):
        self.action.execute()
        assert self.action.unexecute() is True
        assert self.action.unexecute() is True
        assert self.action.undone == 1
        assert not self.action.executed

    def test_execute_unexecute_cycle(self):
        for _ in range(3):
            self.action.execute()
            self.action.unexecute()
        assert self.action.done == 3
        assert self.action.undone == 3

    def test_default_name_is_class_name(self):
        assert self.action.name == "CountingAction"

    def test_explicit_name(self):
        assert CountingAction("Move").name == "Move"

    def test_cannot_instantiate_abstract_action(self):
        with pytest.raises(TypeError):
            Action()

    def test_hook_error_propagates_after_flag_flip(self):
        action = FailingAction()
        with pytest.raises(RuntimeError):
            action.execute()
        assert action.executed


class TestCallbackAction:

    def test_calls_supplied_hooks(self):
        do, undo = MagicMock(), MagicMock()
        action = CallbackAction(do, undo, name="Paste")
        action.execute()
        do.assert_called_once_with()
        undo.assert_not_called()
        action.unexecute()
        undo.assert_called_once_with()

    def test_name(self):
        assert CallbackAction(MagicMock(), MagicMock(), name="Paste").name == "Paste"
        assert CallbackAction(MagicMock(), MagicMock()).name == "CallbackAction"


# ===================================================================
# GroupAction
# ===================================================================

class TestGroupAction:

    def test_three_members_use_first_and_third(self):
        first, middle, last = CountingAction(), CountingAction(), CountingAction()
        group = GroupAction()
        group.add_action(first)
        group.add_action(middle)
        group.add_action(last)

        assert group.execute() is True
        assert group.unexecute() is True

        assert (first.done, first.undone) == (1, 0)
        assert (middle.done, middle.undone) == (0, 0)
        assert (last.done, last.undone) == (0, 0)
        assert group.first_action is first
        assert group.last_action is last

    def test_unexecute_last_member_after_its_own_execute(self):
        first, last = CountingAction(), CountingAction()
        last.execute()
        group = GroupAction()
        group.add_action(first)
        group.add_action(last)
        group.execute()
        group.unexecute()
        assert last.undone == 1

    def test_single_member_used_both_ways(self):
        only = CountingAction()
        group = GroupAction()
        group.add_action(only)
        group.execute()
        group.unexecute()
        assert (only.done, only.undone) == (1, 1)

    def test_empty_group_execute_returns_false(self):
        group = GroupAction()
        assert group.execute() is False
        assert group.executed
        assert group.execute() is True

    def test_empty_group_unexecute_returns_false(self):
        group = GroupAction()
        group.execute()
        assert group.unexecute() is False
        assert not group.executed

    def test_guarded_like_leaf(self):
        first = CountingAction()
        group = GroupAction()
        group.add_action(first)
        group.execute()
        group.execute()
        assert first.done == 1

    def test_name_defaults_to_first_member(self):
        group = GroupAction()
        assert group.name == ""
        group.add_action(CountingAction("Begin drag"))
        group.add_action(CountingAction("End drag"))
        assert group.name == "Begin drag"

    def test_explicit_name_wins(self):
        group = GroupAction(name="Drag")
        group.add_action(CountingAction("Begin drag"))
        assert group.name == "Drag"
        group.name = None
        assert group.name == "Begin drag"


# ===================================================================
# MultiAction
# ===================================================================

class TestMultiAction:

    def test_duplicate_reference_rejected(self):
        multi = MultiAction()
        action = CountingAction()
        assert multi.add_action(action) is True
        assert multi.add_action(action) is False
        assert len(multi) == 1

    def test_distinct_instances_accepted(self):
        multi = MultiAction()
        assert multi.add_action(CountingAction())
        assert multi.add_action(CountingAction())
        assert len(multi) == 2

    def test_dedup_is_by_identity_not_equality(self):
        class AlwaysEqual(CountingAction):
            def __eq__(self, other):
                return True

            __hash__ = object.__hash__

        multi = MultiAction()
        assert multi.add_action(AlwaysEqual())
        assert multi.add_action(AlwaysEqual())
        assert len(multi) == 2

    def test_execute_and_unexecute_touch_every_member(self):
        members = [CountingAction() for _ in range(4)]
        multi = MultiAction()
        for member in members:
            multi.add_action(member)

        assert multi.execute() is True
        assert multi.unexecute() is True
        assert all(m.done == 1 and m.undone == 1 for m in members)

    def test_guarded_like_leaf(self):
        member = CountingAction()
        multi = MultiAction()
        multi.add_action(member)
        multi.execute()
        multi.execute()
        multi.unexecute()
        multi.unexecute()
        assert (member.done, member.undone) == (1, 1)

    def test_failing_member_propagates(self):
        multi = MultiAction()
        multi.add_action(FailingAction())
        with pytest.raises(RuntimeError):
            multi.execute()

    def test_name_defaults_to_a_member(self):
        multi = MultiAction()
        assert multi.name == ""
        multi.add_action(CountingAction("Nudge"))
        assert multi.name == "Nudge"

    def test_explicit_name(self):
        multi = MultiAction(name="Align")
        multi.add_action(CountingAction("Nudge"))
        assert multi.name == "Align"

    def test_actions_view(self):
        a, b = CountingAction(), CountingAction()
        multi = MultiAction()
        multi.add_action(a)
        multi.add_action(b)
        assert set(map(id, multi.actions)) == {id(a), id(b)}
