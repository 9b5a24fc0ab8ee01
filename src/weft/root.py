"""
Application root.

:class:`Root` ties a backend, a theme and a view tree together and runs
the event loop::

    from weft import Root, PuppetBackend
    from weft.views import Button

    root = Root(PuppetBackend())
    root.set_root_view(Button("Quit", lambda r: r.quit()))
    root.run()
"""

from __future__ import annotations

import queue
import time
from typing import Any, Callable, TypeVar

from weft.backend import Backend
from weft.config import WeftConfig
from weft.direction import Direction
from weft.event import Event, EventResult, Exit, Refresh
from weft.keybindings import KeybindingsManager
from weft.logging import get_logger, set_level
from weft.printer import Printer
from weft.theme import Theme, get_default_theme, load_theme
from weft.vec import XY
from weft.view.view import CannotFocus, Selector, View
from weft.views.dummy import DummyView
from weft.views.on_event_view import OnEventView, TriggerLike
from weft.views.scroll_view import ScrollView

logger = get_logger("root")

V = TypeVar("V", bound=View)
R = TypeVar("R")

# Delay between input polls when nothing happens.
INPUT_POLL_DELAY_MS = 30


class Root:
    """
    Owns the backend, the theme and the root view.

    Parameters
    ----------
    backend:
        Where input comes from and output goes to.
    theme:
        Theme used for drawing; the default theme otherwise.
    keybindings:
        Action bindings.  The ``quit`` and ``redraw`` actions are
        registered as global callbacks.
    """

    def __init__(
        self,
        backend: Backend,
        theme: Theme | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self.backend = backend
        self.theme = theme or get_default_theme()
        self.keybindings = keybindings or KeybindingsManager()
        self.config = WeftConfig()
        self.fps: int | None = None
        self.user_data: Any = None

        self._root: OnEventView[View] = OnEventView(DummyView())
        self._running = True
        self._boring_frames = 0
        self._cb_queue: queue.Queue[Callable[[Root], Any]] = queue.Queue()

        self.add_global_callback(self.keybindings.trigger("quit"), lambda r: r.quit())
        self.add_global_callback(self.keybindings.trigger("redraw"), lambda r: r.clear())

    @classmethod
    def from_config(cls, config: WeftConfig, backend: Backend) -> Root:
        """Build a root with the theme, keybindings and log level from *config*."""
        set_level(config.log_level)
        theme = load_theme(config.theme) if config.theme else None
        root = cls(backend, theme=theme, keybindings=KeybindingsManager(config.keybindings))
        root.config = config
        root.fps = config.fps
        return root

    # ------------------------------------------------------------------
    # View tree
    # ------------------------------------------------------------------

    def set_root_view(self, view: View) -> None:
        """Replace the root view and give it the focus if it accepts."""
        self._root.view = view
        try:
            self._root.take_focus(Direction.none())
        except CannotFocus:
            pass

    @property
    def root_view(self) -> View:
        return self._root.view

    def scroll_view(self, view: V) -> ScrollView[V]:
        """Wrap *view* in a :class:`ScrollView` set up from the scroll config."""
        wrapped = ScrollView(view)
        self.config.scroll.apply(wrapped.core)
        return wrapped

    def call_on_name(self, name: str, callback: Callable[[Any], R]) -> R | None:
        """Run *callback* on the view named *name*; ``None`` if there is none."""
        results: list[R] = []
        self._root.call_on_any(Selector(name), lambda v: results.append(callback(v)))
        return results[0] if results else None

    def find_name(self, name: str) -> View | None:
        return self.call_on_name(name, lambda v: v)

    def focus_name(self, name: str) -> None:
        """
        Move the focus to the view named *name*.

        Raises
        ------
        ViewNotFound
            If no focusable view has that name.
        """
        result = self._root.focus_view(Selector(name))
        result.process(self)

    # ------------------------------------------------------------------
    # Global callbacks
    # ------------------------------------------------------------------

    def add_global_callback(self, trigger: TriggerLike, callback: Callable[[Root], Any]) -> None:
        """Run *callback* when no view handles a matching event."""
        self._root.set_on_event(trigger, callback)

    def set_on_pre_event(self, trigger: TriggerLike, callback: Callable[[Root], Any]) -> None:
        """Run *callback* on a matching event before any view sees it."""
        self._root.set_on_pre_event(trigger, callback)

    def clear_global_callbacks(self, event: Event) -> None:
        self._root.clear_event(event)

    @property
    def cb_sink(self) -> queue.Queue[Callable[[Root], Any]]:
        """Queue for callbacks sent from other threads; drained by :meth:`step`."""
        return self._cb_queue

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_event(self, event: Event) -> EventResult:
        """Dispatch *event* through the view tree and run the resulting callback."""
        if isinstance(event, Exit):
            self.quit()
            return EventResult.consumed()
        result = self._root.on_event(event)
        logger.debug("Event %s -> %s", event, "consumed" if result.is_consumed() else "ignored")
        result.process(self)
        return result

    def _process_callbacks(self) -> bool:
        processed = False
        while self._running:
            try:
                callback = self._cb_queue.get_nowait()
            except queue.Empty:
                break
            callback(self)
            processed = True
        return processed

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def screen_size(self) -> XY[int]:
        return self.backend.screen_size()

    def set_title(self, title: str) -> None:
        self.backend.set_title(title)

    def clear(self) -> None:
        self.backend.clear(self.theme.color("background"))

    def layout(self, size: XY[int] | None = None) -> None:
        size = size if size is not None else self.screen_size()
        self._root.layout(size)

    def draw(self, size: XY[int] | None = None) -> None:
        size = size if size is not None else self.screen_size()
        printer = Printer(size, self.theme, self.backend)
        printer.clear()
        self._root.draw(printer)

    def refresh(self) -> None:
        """Lay out, draw and flush one frame."""
        self._boring_frames = 0
        # One size for both phases, even if the terminal is resizing.
        size = self.screen_size()
        self.layout(size)
        self.draw(size)
        self.backend.refresh()

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def is_running(self) -> bool:
        return self._running

    def quit(self) -> None:
        self._running = False

    def process_events(self) -> bool:
        """Handle pending input then queued callbacks; ``True`` if anything happened."""
        received = False
        while self._running:
            event = self.backend.poll_event()
            if event is None:
                break
            received = True
            self.on_event(event)
        if self._process_callbacks():
            received = True
        return received

    def post_events(self, received: bool) -> None:
        """Redraw if something happened or the auto-refresh is due, else idle."""
        due = False
        if not received and self.fps:
            repeats = max(1000 // INPUT_POLL_DELAY_MS // self.fps, 1)
            due = self._boring_frames >= repeats
        if received or due:
            if not received:
                self.on_event(Refresh())
            self.refresh()
        if not received:
            time.sleep(INPUT_POLL_DELAY_MS / 1000)
            self._boring_frames += 1

    def step(self) -> bool:
        received = self.process_events()
        self.post_events(received)
        return received

    def run(self) -> None:
        """Run the event loop until :meth:`quit`."""
        self._running = True
        self.refresh()
        while self._running:
            self.step()
