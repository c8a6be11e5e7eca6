"""Reversible units of work recorded by History.

Three variants share one contract (``execute``/``unexecute``/``name``):

- ``Action`` subclasses (and ``CallbackAction``): a single task.
- ``GroupAction``: open/close bracket, executes its first member,
  unexecutes its last member.
- ``MultiAction``: unordered set, executes/unexecutes every member,
  adding the same instance twice is ignored.

``execute()`` and ``unexecute()`` return the state after the call
(``executed`` / ``not executed``), not whether any work ran. A second
``execute()`` on an executed action is a no-op that still returns True.

If a hook raises, the executed flag has already flipped and the error
propagates unchanged. The action is then in a partial state and the
caller has to recover (typically ``History.clear()``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Undoable(Protocol):
    """Anything History can hold."""

    @property
    def name(self) -> str: ...

    def execute(self) -> bool: ...

    def unexecute(self) -> bool: ...


class Action(ABC):
    """Single task with guarded execute/unexecute.

    Subclasses implement :meth:`execute_task` and :meth:`unexecute_task`.
    The wrapper guarantees that neither hook runs twice in a row.
    """

    def __init__(self, name: str = "") -> None:
        self._executed = False
        self._name = name or ""

    @property
    def name(self) -> str:
        """Display label. Defaults to the class name."""
        return self._name or self.__class__.__name__

    @property
    def executed(self) -> bool:
        return self._executed

    def execute(self) -> bool:
        if not self._executed:
            self._executed = True
            self.execute_task()
        return self._executed

    def unexecute(self) -> bool:
        if self._executed:
            self._executed = False
            self.unexecute_task()
        return not self._executed

    @abstractmethod
    def execute_task(self) -> None:
        """Forward effect."""
        ...

    @abstractmethod
    def unexecute_task(self) -> None:
        """Backward effect."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} executed={self._executed}>"


class CallbackAction(Action):
    """Action whose forward/backward effects are plain callables.

    Usage::

        action = CallbackAction(lambda: doc.append("x"), doc.pop, name="Type x")
        history.execute_and_record(action)
    """

    def __init__(
        self,
        do: Callable[[], object],
        undo: Callable[[], object],
        name: str = "",
    ) -> None:
        super().__init__(name)
        self._do = do
        self._undo = undo

    def execute_task(self) -> None:
        self._do()

    def unexecute_task(self) -> None:
        self._undo()


class GroupAction:
    """Bracket of two actions: ``execute`` runs the first, ``unexecute`` the last.

    Only the first and the most recently added member are kept. Members
    added in between are never invoked. With a single member, that member
    is used for both directions.
    """

    def __init__(self, name: str = "") -> None:
        self._executed = False
        self._name = name or ""
        self._first_action: Undoable | None = None
        self._last_action: Undoable | None = None

    @property
    def name(self) -> str:
        if not self._name and self._first_action is not None:
            return self._first_action.name
        return self._name

    @name.setter
    def name(self, value: str | None) -> None:
        self._name = value or ""

    @property
    def executed(self) -> bool:
        return self._executed

    @property
    def first_action(self) -> Undoable | None:
        return self._first_action

    @property
    def last_action(self) -> Undoable | None:
        return self._last_action

    def add_action(self, action: Undoable) -> None:
        if self._first_action is None:
            self._first_action = action
        else:
            self._last_action = action

    def execute(self) -> bool:
        if not self._executed:
            self._executed = True
            if self._first_action is None:
                return False
            self._first_action.execute()
        return self._executed

    def unexecute(self) -> bool:
        if self._executed:
            self._executed = False
            target = self._last_action
            if target is None:
                target = self._first_action
            if target is None:
                return False
            target.unexecute()
        return not self._executed

    def __repr__(self) -> str:
        return f"<GroupAction {self.name!r} executed={self._executed}>"


class MultiAction:
    """Set of actions executed and unexecuted together.

    Membership is by identity. Members run in insertion order with no
    rollback: a raising member stops the iteration.
    """

    def __init__(self, name: str = "") -> None:
        self._executed = False
        self._name = name or ""
        # keyed by id() so members with a custom __eq__ still dedup by identity
        self._actions: dict[int, Undoable] = {}

    @property
    def name(self) -> str:
        if not self._name and self._actions:
            return next(iter(self._actions.values())).name
        return self._name

    @name.setter
    def name(self, value: str | None) -> None:
        self._name = value or ""

    @property
    def executed(self) -> bool:
        return self._executed

    @property
    def actions(self) -> tuple[Undoable, ...]:
        return tuple(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def add_action(self, action: Undoable) -> bool:
        """Add a member. Returns False if this instance is already present."""
        if id(action) in self._actions:
            return False
        self._actions[id(action)] = action
        return True

    def execute(self) -> bool:
        if not self._executed:
            self._executed = True
            for action in list(self._actions.values()):
                action.execute()
        return self._executed

    def unexecute(self) -> bool:
        if self._executed:
            self._executed = False
            for action in list(self._actions.values()):
                action.unexecute()
        return not self._executed

    def __repr__(self) -> str:
        return f"<MultiAction {self.name!r} members={len(self._actions)} executed={self._executed}>"
