"""
Application controller.

Owns the screen, the root primitive and the focus, runs the blocking event
loop and draws frames.

All state lives behind one reader/writer lock.  Read-only operations take
it shared, mutations take it exclusively, and no user-supplied callable
(handlers, hooks, ``focus``/``blur``) is ever called while it is held:
state is snapshotted or changed, the lock released, then the callable
invoked.  Handlers may therefore call back into the application freely,
from the loop thread or from their own threads.

Example:
    from celltui import Application, ScreenConfig
    from celltui.widgets import InputField

    app = Application(ScreenConfig())
    field = InputField().set_label("Name: ")
    app.set_root(field, fullscreen=True)
    app.run()
"""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Union

from celltui.config import ScreenConfig
from celltui.events import CharacterEvent, Event, KeyEvent, PointerEvent, ResizeEvent
from celltui.keybindings import KeybindingsManager
from celltui.logging import get_logger
from celltui.primitive import Primitive
from celltui.rwlock import RWLock
from celltui.screen import Screen, new_screen

logger = get_logger("application")

InputEvent = Union[KeyEvent, CharacterEvent]

ScreenFactory = Callable[[ScreenConfig], Screen]
KeyCapture = Callable[[InputEvent], Union[InputEvent, None]]
BeforeDraw = Callable[[Screen], bool]
AfterDraw = Callable[[Screen], None]


class BackendInitError(RuntimeError):
    """The screen could not be created or initialised; the loop never started."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"screen initialisation failed: {cause}")
        self.cause = cause


class Application:
    """
    The top node of an application.

    Parameters
    ----------
    config:
        Screen configuration, stored and handed to *screen_factory* when
        :meth:`run` starts.
    keybindings:
        Supplies the ``quit`` and ``redraw`` bindings; default Ctrl+C and
        Ctrl+L.
    screen_factory:
        Builds the screen from *config*; defaults to
        :func:`celltui.screen.new_screen`.
    """

    def __init__(
        self,
        config: ScreenConfig | None = None,
        *,
        keybindings: KeybindingsManager | None = None,
        screen_factory: ScreenFactory | None = None,
    ) -> None:
        self._config = config or ScreenConfig()
        self._keybindings = keybindings or KeybindingsManager()
        self._screen_factory = screen_factory or new_screen

        self._lock = RWLock()

        self._screen: Screen | None = None
        self._focus: weakref.ref[Primitive] | None = None
        self._focus_generation = 0
        self._root: Primitive | None = None
        self._root_fullscreen = False
        self._key_capture: KeyCapture | None = None
        self._before_draw: BeforeDraw | None = None
        self._after_draw: AfterDraw | None = None
        self._suspended = False

    @property
    def config(self) -> ScreenConfig:
        return self._config

    @property
    def keybindings(self) -> KeybindingsManager:
        return self._keybindings

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> None:
        """
        Start the screen and run the event loop until :meth:`stop`.

        Returns normally when the loop ends.  Raises
        :class:`BackendInitError` if the screen cannot be brought up.  Any
        exception escaping the loop is re-raised after the screen has been
        released.
        """
        with self._lock.write():
            try:
                screen = self._screen_factory(self._config)
                screen.init()
            except Exception as exc:
                logger.error("Screen initialisation failed: %s", exc)
                raise BackendInitError(exc) from exc
            self._screen = screen
        logger.debug("Event loop starting")

        try:
            self.draw()
            self._loop()
        except BaseException:
            logger.exception("Event loop aborted; releasing the screen")
            raise
        finally:
            self.stop()
        logger.debug("Event loop finished")

    def stop(self) -> None:
        """Release the screen, ending :meth:`run`.  Safe to call repeatedly."""
        with self._lock.write():
            screen = self._screen
            self._screen = None
        if screen is None:
            return
        screen.fini()
        logger.debug("Screen released")

    def is_running(self) -> bool:
        with self._lock.read():
            return self._screen is not None

    def _loop(self) -> None:
        while True:
            with self._lock.write():
                screen = self._screen
                self._suspended = False
            if screen is None:
                break

            event = screen.poll_event()
            if event is None:
                with self._lock.write():
                    resume = self._suspended
                    self._suspended = False
                if resume:
                    continue
                break

            self._dispatch(event)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, event: Event) -> None:
        if isinstance(event, (KeyEvent, CharacterEvent)):
            self._dispatch_input(event)
        elif isinstance(event, PointerEvent):
            self._dispatch_pointer(event)
        elif isinstance(event, ResizeEvent):
            self._dispatch_resize(event)
        else:
            logger.debug("Ignoring unsupported event %r", event)

    def _dispatch_input(self, event: InputEvent) -> None:
        with self._lock.read():
            focused = self._focus() if self._focus is not None else None
            capture = self._key_capture

        # Releases are never forwarded; they only count for quitting.
        if isinstance(event, KeyEvent) and event.is_release:
            if self._is_quit(event):
                self.stop()
            return

        if capture is not None:
            captured = capture(event)
            if captured is None:
                return
            event = captured

        if self._is_quit(event):
            self.stop()
            return
        if isinstance(event, KeyEvent) and self._keybindings.matches(event.key, "redraw"):
            self._redraw()
            return

        if focused is None:
            return
        if isinstance(event, KeyEvent):
            handler = focused.key_handler()
        else:
            handler = focused.character_handler()
        if handler is None:
            return
        handler(event, self.set_focus)
        self.draw()

    def _dispatch_pointer(self, event: PointerEvent) -> None:
        with self._lock.read():
            root = self._root
        if root is None:
            return
        handler = root.mouse_handler()
        if handler is None:
            return
        handler(event, self.set_focus)
        self.draw()

    def _dispatch_resize(self, event: ResizeEvent) -> None:
        logger.debug("Resized to %dx%d", event.width, event.height)
        self._redraw()

    def _redraw(self) -> None:
        with self._lock.read():
            screen = self._screen
        if screen is None:
            return
        screen.clear()
        self.draw()

    def _is_quit(self, event: InputEvent) -> bool:
        return isinstance(event, KeyEvent) and self._keybindings.matches(event.key, "quit")

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self) -> Application:
        """
        Draw the root primitive and flush the screen.

        Does nothing before :meth:`run`, after :meth:`stop` or without a
        root.  A before-draw hook returning ``True`` replaces the frame:
        the screen is flushed without drawing the root or calling the
        after-draw hook.
        """
        with self._lock.read():
            screen = self._screen
            root = self._root
            fullscreen = self._root_fullscreen
            before = self._before_draw
            after = self._after_draw

        if screen is None or root is None:
            return self

        if fullscreen:
            width, height = screen.size()
            root.set_rect(0, 0, width, height)

        if before is not None and before(screen):
            screen.show()
            return self

        root.draw(screen)
        if after is not None:
            after(screen)
        screen.show()
        return self

    def set_before_draw_func(self, handler: BeforeDraw | None) -> Application:
        """
        Install a callable run before each frame; ``None`` removes it.

        If it returns ``True`` the root is not drawn for that frame.  The
        screen is not cleared for it; call ``screen.clear()`` if needed.
        """
        with self._lock.write():
            self._before_draw = handler
        return self

    def get_before_draw_func(self) -> BeforeDraw | None:
        with self._lock.read():
            return self._before_draw

    def set_after_draw_func(self, handler: AfterDraw | None) -> Application:
        """Install a callable run after the root is drawn; ``None`` removes it."""
        with self._lock.write():
            self._after_draw = handler
        return self

    def get_after_draw_func(self) -> AfterDraw | None:
        with self._lock.read():
            return self._after_draw

    # ------------------------------------------------------------------
    # Input capture
    # ------------------------------------------------------------------

    def set_key_capture(self, capture: KeyCapture | None) -> Application:
        """
        Install a callable that sees every key and character event first.

        It returns the event to deliver (the same one or a substitute) or
        ``None`` to drop it.  It can swallow the quit key on press; key
        releases bypass it.
        """
        with self._lock.write():
            self._key_capture = capture
        return self

    def get_key_capture(self) -> KeyCapture | None:
        with self._lock.read():
            return self._key_capture

    # ------------------------------------------------------------------
    # Root and focus
    # ------------------------------------------------------------------

    def set_root(self, root: Primitive, fullscreen: bool = False) -> Application:
        """
        Make *root* the primitive drawn on each frame and focus it.

        With *fullscreen* the root is resized to the screen before every
        frame.
        """
        with self._lock.write():
            self._root = root
            self._root_fullscreen = fullscreen
            if self._screen is not None:
                self._screen.clear()
        self.set_focus(root)
        return self

    def get_root(self) -> Primitive | None:
        with self._lock.read():
            return self._root

    def resize_to_full_screen(self, primitive: Primitive) -> Application:
        """Resize *primitive* to cover the whole screen (no-op when not running)."""
        with self._lock.read():
            if self._screen is None:
                return self
            width, height = self._screen.size()
        primitive.set_rect(0, 0, width, height)
        return self

    def set_focus(self, primitive: Primitive | None) -> Application:
        """
        Give *primitive* the focus; key and character events go to it.

        The previous holder is blurred before the new one's ``focus`` runs.
        ``focus`` receives this method as its ``request_focus`` callback so
        a container can hand focus to a child.  If another ``set_focus``
        lands while ``blur`` runs, this call does not focus *primitive*.
        """
        with self._lock.write():
            previous = self._focus() if self._focus is not None else None
            self._focus = weakref.ref(primitive) if primitive is not None else None
            self._focus_generation += 1
            generation = self._focus_generation
            if self._screen is not None:
                self._screen.hide_cursor()

        if previous is not None and previous is not primitive:
            previous.blur()
        if primitive is None:
            return self
        with self._lock.read():
            superseded = self._focus_generation != generation
        if not superseded:
            primitive.focus(self.set_focus)
        return self

    def get_focus(self) -> Primitive | None:
        with self._lock.read():
            return self._focus() if self._focus is not None else None
