"""Event callbacks around a view."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

from weft.event import Callback, Event, EventResult, EventTrigger, Key
from weft.view.view import View
from weft.view.view_wrapper import ViewWrapper

if TYPE_CHECKING:
    from weft.root import Root

V = TypeVar("V", bound=View)

TriggerLike = Union[EventTrigger, Event, Key, str, Callable[[Event], bool]]
InnerCallback = Callable[[Any, Event], Optional[EventResult]]


class _Phase(Enum):
    BEFORE_CHILD = "before_child"
    AFTER_CHILD = "after_child"


@dataclass
class _Action:
    trigger: EventTrigger
    phase: _Phase
    callback: InnerCallback


def _always(callback: Callback) -> InnerCallback:
    def action(view: Any, event: Event) -> EventResult:
        return EventResult.consumed(callback)

    return action


class OnEventView(ViewWrapper[V]):
    """
    Runs callbacks when chosen events reach a view.

    Dispatch happens in three steps:

    1. Every matching *pre* callback runs.  If any returned a result,
       the results are merged and the child never sees the event.
    2. Otherwise the child gets the event.  A consumed result stops here.
    3. Every matching *post* callback runs and their results are merged.

    Triggers accept anything :meth:`EventTrigger.coerce` does: a trigger,
    an event, a :class:`Key` or a single character.

    Example::

        view = OnEventView(TextView("hello")).with_event("q", lambda root: root.quit())
    """

    def __init__(self, view: V) -> None:
        super().__init__(view)
        self._actions: list[_Action] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def set_on_event(self, trigger: TriggerLike, callback: Callable[[Root], Any]) -> None:
        """Run *callback* when the child ignores a matching event."""
        self.set_on_event_inner(trigger, _always(Callback.from_fn(callback)))

    def set_on_pre_event(self, trigger: TriggerLike, callback: Callable[[Root], Any]) -> None:
        """Run *callback* on a matching event; the child never sees it."""
        self.set_on_pre_event_inner(trigger, _always(Callback.from_fn(callback)))

    def set_on_event_inner(self, trigger: TriggerLike, callback: InnerCallback) -> None:
        """
        Call ``callback(child, event)`` when the child ignores a matching event.

        A ``None`` return means the callback does not handle the event.
        """
        self._actions.append(_Action(EventTrigger.coerce(trigger), _Phase.AFTER_CHILD, callback))

    def set_on_pre_event_inner(self, trigger: TriggerLike, callback: InnerCallback) -> None:
        """
        Call ``callback(child, event)`` before the child sees a matching event.

        Returning a result, even an ignored one, keeps the event from the
        child.  Returning ``None`` lets it through.
        """
        self._actions.append(_Action(EventTrigger.coerce(trigger), _Phase.BEFORE_CHILD, callback))

    def with_event(self, trigger: TriggerLike, callback: Callable[[Root], Any]) -> OnEventView[V]:
        """Chainable variant of :meth:`set_on_event`."""
        self.set_on_event(trigger, callback)
        return self

    def with_pre_event(self, trigger: TriggerLike, callback: Callable[[Root], Any]) -> OnEventView[V]:
        self.set_on_pre_event(trigger, callback)
        return self

    def with_event_inner(self, trigger: TriggerLike, callback: InnerCallback) -> OnEventView[V]:
        self.set_on_event_inner(trigger, callback)
        return self

    def with_pre_event_inner(self, trigger: TriggerLike, callback: InnerCallback) -> OnEventView[V]:
        self.set_on_pre_event_inner(trigger, callback)
        return self

    def clear_event(self, event: Event | Key | str) -> None:
        """Remove every callback registered for exactly *event*."""
        tag = EventTrigger.coerce(event).tag
        self._actions = [a for a in self._actions if not a.trigger.has_tag(tag)]

    def clear_callbacks(self) -> None:
        self._actions.clear()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _run(self, phase: _Phase, event: Event) -> list[EventResult]:
        results = []
        for action in list(self._actions):
            if action.phase is not phase or not action.trigger.apply(event):
                continue
            result = action.callback(self.view, event)
            if result is not None:
                results.append(result)
        return results

    def on_event(self, event: Event) -> EventResult:
        pre = self._run(_Phase.BEFORE_CHILD, event)
        if pre:
            result = pre[0]
            for other in pre[1:]:
                result = result.and_(other)
        else:
            result = self.view.on_event(event)

        if result.is_consumed():
            return result

        post = EventResult.ignored()
        for other in self._run(_Phase.AFTER_CHILD, event):
            post = post.and_(other)
        return post
