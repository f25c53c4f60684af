"""
Animated image playback.

Frames of an animated image (GIF, APNG, WebP ...) are decoded with Pillow
and painted as half-block cells: every cell shows two vertically stacked
pixels, the upper one as foreground of ``▀`` and the lower one as
background.  Playback runs on a background thread that paints straight
onto the screen and flushes it after each frame, then calls the finished
callback.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from os import PathLike

from PIL import Image, ImageChops, ImageSequence

from celltui.ansi import hex_to_rgb, rgb_to_hex
from celltui.box import Widget
from celltui.logging import get_logger
from celltui.screen.base import STYLE_DEFAULT, Screen
from celltui.theme import Theme

logger = get_logger("widgets.video")

HALF_BLOCK = "▀"

DEFAULT_DELAY_MS = 60


class VideoLoadError(OSError):
    """The file could not be opened or decoded as an image sequence."""


class VideoPlayer(Widget):
    """
    Plays the frames of an animated image once.

    Call :meth:`load` and :meth:`set_finished_func` before the player is
    first drawn; the first :meth:`draw` starts playback.  Later draws
    repaint the most recent frame so the box background does not hide it.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        super().__init__(theme)
        self._frames: list[Image.Image] = []
        self._delay = DEFAULT_DELAY_MS
        self._mask: tuple[int, int, int] | None = None
        self._finished: Callable[[], None] | None = None

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._started = False
        self._last_frame: Image.Image | None = None

    def load(self, path: str | PathLike[str]) -> VideoPlayer:
        """
        Decode every frame of the image at *path*.

        Resets playback so the next draw plays the new sequence.

        Raises:
            VideoLoadError: the file is missing or not a readable image.
        """
        try:
            with Image.open(path) as image:
                frames = [frame.convert("RGB") for frame in ImageSequence.Iterator(image)]
        except (OSError, ValueError) as exc:
            raise VideoLoadError(f"cannot load {path}: {exc}") from exc
        if not frames:
            raise VideoLoadError(f"cannot load {path}: no frames")

        self.stop()
        with self._lock:
            self._frames = frames
            self._started = False
            self._last_frame = None
        logger.debug("Loaded %d frames from %s", len(frames), path)
        return self

    def frame_count(self) -> int:
        return len(self._frames)

    def set_delay(self, delay_ms: int) -> VideoPlayer:
        """Milliseconds between frames."""
        self._delay = delay_ms
        return self

    def get_delay(self) -> int:
        return self._delay

    def set_mask(self, color: str | None) -> VideoPlayer:
        """Multiply every frame by *color* (``"#rrggbb"``); ``None`` removes the mask."""
        self._mask = hex_to_rgb(color) if color else None
        return self

    def set_finished_func(self, handler: Callable[[], None]) -> VideoPlayer:
        """
        Called on the playback thread after the last frame.

        The player cannot move focus by itself; the callback usually does
        that through the application.
        """
        self._finished = handler
        return self

    def is_playing(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def stop(self) -> None:
        """Stop playback without calling the finished callback."""
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is None:
            return
        self._stop.set()
        if thread is not threading.current_thread() and thread.is_alive():
            thread.join()

    def draw(self, screen: Screen) -> None:
        if self._finished is None:
            raise RuntimeError("VideoPlayer drawn without a finished callback")

        self.box.draw(screen)
        rect = self.get_inner_rect()

        with self._lock:
            frame = self._last_frame
            thread: threading.Thread | None = None
            if not self._started:
                if not self._frames:
                    raise RuntimeError("VideoPlayer drawn before load()")
                self._started = True
                self._stop.clear()
                thread = threading.Thread(
                    target=self._play,
                    args=(screen, rect),
                    name="celltui-video",
                    daemon=True,
                )
                self._thread = thread

        if frame is not None:
            self._paint(screen, frame, rect)
        if thread is not None:
            logger.debug("Playback starting: %d frames, %d ms apart", len(self._frames), self._delay)
            thread.start()

    def _play(self, screen: Screen, rect: tuple[int, int, int, int]) -> None:
        for frame in self._frames:
            if self._stop.wait(self._delay / 1000.0):
                logger.debug("Playback stopped")
                return
            with self._lock:
                self._last_frame = frame
            self._paint(screen, frame, rect)
            screen.show()

        with self._lock:
            if self._thread is threading.current_thread():
                self._thread = None
        logger.debug("Playback finished")
        finished = self._finished
        if finished is not None:
            finished()

    def _paint(self, screen: Screen, frame: Image.Image, rect: tuple[int, int, int, int]) -> None:
        x, y, width, height = rect
        if width <= 0 or height <= 0:
            return

        image = frame.resize((width, height * 2))
        if self._mask is not None:
            image = ImageChops.multiply(image, Image.new("RGB", image.size, self._mask))
        pixels = image.load()

        for row in range(height):
            for col in range(width):
                top = pixels[col, row * 2]
                bottom = pixels[col, row * 2 + 1]
                style = STYLE_DEFAULT.foreground(rgb_to_hex(*top)).background(rgb_to_hex(*bottom))
                screen.set_content(x + col, y + row, HALF_BLOCK, style)
