"""Progress indicators redrawn on a single terminal line by a background thread.

Three kinds share one lifecycle (``idle -> running -> done``):

* ``spinner`` -- a rotating glyph redrawn every 250ms until finished.
* ``bar`` -- a percentage bar redrawn on every :meth:`Progress.update`.
* ``loading`` -- a spinner that stays invisible until a delay has passed,
  so fast operations never flicker on screen.

Every :meth:`Progress.start` must be matched by exactly one
:meth:`Progress.success` or :meth:`Progress.fail`; there is no timeout, and
an unfinished indicator keeps its thread alive for the life of the process.

Example::

    bar = new_bar("Downloading")
    bar.start()
    for i, chunk in enumerate(chunks):
        fetch(chunk)
        bar.update((i + 1) / len(chunks))
    bar.success()
"""

from __future__ import annotations

import itertools
import logging
import math
import queue
import threading
from typing import Literal

from pi.clt.style import GREEN, RED, sstyled
from pi.clt.terminal import (
    CARRIAGE_RETURN,
    CLEAR_LINE,
    HIDE_CURSOR,
    SHOW_CURSOR,
    ProcessTerminal,
    Terminal,
)
from pi.clt.utils import visible_width

logger = logging.getLogger(__name__)

ProgressKind = Literal["spinner", "bar", "loading"]
ProgressState = Literal["idle", "running", "done"]

SPINNER_LINE = ("|", "/", "-", "\\")
SPINNER_DOTS = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
SPINNER_ARROWS = ("←", "↖", "↑", "↗", "→", "↘", "↓", "↙")

SPINNER_INTERVAL = 0.25
LOADING_INTERVAL = 0.08

_MIN_DOTS = 3


class _Signal:
    """Terminal signal sent through the control channel."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


_SUCCESS = _Signal("success")
_FAIL = _Signal("fail")


class _Channel:
    """Unbuffered hand-off between the caller and the render thread.

    :meth:`send` returns only after the receiver has called :meth:`done`
    for that value, so a sender never races ahead of the frame it asked for.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[float | _Signal] = queue.Queue(maxsize=1)

    def send(self, value: float | _Signal) -> None:
        self._queue.put(value)
        self._queue.join()

    def receive(self, timeout: float | None = None) -> float | _Signal:
        """Wait for a value; raises :class:`queue.Empty` on timeout."""
        return self._queue.get(timeout=timeout)

    def done(self) -> None:
        self._queue.task_done()


class Progress:
    """A spinner, bar or loading message bound to one terminal line.

    Use :func:`new_spinner`, :func:`new_bar` or :func:`new_loading_message`
    rather than constructing one directly.  Instances are single-use.
    """

    def __init__(
        self,
        kind: ProgressKind,
        label: str,
        display_length: int,
        *,
        frames: tuple[str, ...] = SPINNER_LINE,
        interval: float = SPINNER_INTERVAL,
        delay: float = 0.0,
        terminal: Terminal | None = None,
    ) -> None:
        self.kind = kind
        self.label = label
        # Approximate length of the label plus filler, excluding the status
        # indicator at the end (glyph, OK, FAIL or percentage).
        self.display_length = display_length
        self.frames = frames
        self.interval = interval
        self.delay = delay
        self._terminal: Terminal = terminal or ProcessTerminal()

        self._state: ProgressState = "idle"
        self._lock = threading.Lock()
        self._channel = _Channel()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> ProgressState:
        return self._state

    # -- lifecycle ------------------------------------------------------------

    def start(self) -> None:
        """Launch the render thread and return immediately."""
        with self._lock:
            if self._state != "idle":
                logger.debug("Ignoring start() on %s in state %s", self.kind, self._state)
                return
            self._state = "running"
            target = {
                "spinner": self._run_spinner,
                "bar": self._run_bar,
                "loading": self._run_loading,
            }[self.kind]
            self._thread = threading.Thread(
                target=target, daemon=True, name=f"pi-clt-{self.kind}"
            )
            self._thread.start()
        logger.debug("Started %s %r", self.kind, self.label)

    def update(self, fraction: float) -> None:
        """Redraw a bar at *fraction* complete, clamped to ``[0, 1]``.

        NaN is drawn as 0.  Blocks until the frame has been drawn.  Ignored
        for other kinds.
        """
        if self.kind != "bar":
            logger.debug("Ignoring update() on %s", self.kind)
            return
        with self._lock:
            if self._state != "running":
                logger.debug("Ignoring update() on bar in state %s", self._state)
                return
            if math.isnan(fraction):
                fraction = 0.0
            self._channel.send(min(max(fraction, 0.0), 1.0))

    def success(self) -> None:
        """Finish successfully; returns once the final frame is drawn."""
        self._finish(_SUCCESS)

    def fail(self) -> None:
        """Finish with a failure; returns once the final frame is drawn."""
        self._finish(_FAIL)

    def _finish(self, signal: _Signal) -> None:
        with self._lock:
            if self._state != "running":
                logger.debug("Ignoring %s on %s in state %s", signal.name, self.kind, self._state)
                return
            self._state = "done"
            self._channel.send(signal)
            if self._thread is not None:
                self._thread.join()
        logger.debug("Finished %s %r: %s", self.kind, self.label, signal.name)

    # -- drawing --------------------------------------------------------------

    def _draw(self, frame: str) -> None:
        # Writes are best effort; the caller may be blocked on the channel
        try:
            self._terminal.write(frame)
        except Exception:
            logger.debug("Dropping %s frame after write error", self.kind, exc_info=True)

    def _dots(self) -> str:
        return "." * max(self.display_length - visible_width(self.label), _MIN_DOTS)

    def _run_spinner(self) -> None:
        dots = self._dots()
        for glyph in itertools.cycle(self.frames):
            self._draw(f"{HIDE_CURSOR}{CARRIAGE_RETURN}{self.label}{dots}[{glyph}]")
            try:
                signal = self._channel.receive(timeout=self.interval)
            except queue.Empty:
                continue

            try:
                if signal is _SUCCESS:
                    status = sstyled("OK", GREEN)
                else:
                    status = sstyled("FAIL", RED)
                self._draw(f"{SHOW_CURSOR}{CARRIAGE_RETURN}{self.label}{dots}[{status}]\n")
            finally:
                self._channel.done()
            return

    def _bar_frame(self, fill: str, status: str) -> str:
        return f"{HIDE_CURSOR}{CARRIAGE_RETURN}{self.label}: [{fill}] {status}"

    def _run_bar(self) -> None:
        length = self.display_length
        while True:
            value = self._channel.receive()
            try:
                if value is _SUCCESS:
                    self._draw(self._bar_frame("=" * length, sstyled("100%", GREEN)))
                    self._draw(f"{SHOW_CURSOR}\n")
                    return
                if value is _FAIL:
                    self._draw(self._bar_frame("X" * length, sstyled("FAIL", RED)))
                    self._draw(f"{SHOW_CURSOR}\n")
                    return
                filled = min(math.floor(value * length + 0.5), length)
                fill = "=" * filled + " " * (length - filled)
                self._draw(self._bar_frame(fill, f"{100.0 * value:2.0f}%"))
            finally:
                self._channel.done()

    def _run_loading(self) -> None:
        # Nothing is drawn if the caller finishes within the delay
        try:
            self._channel.receive(timeout=self.delay)
        except queue.Empty:
            pass
        else:
            self._channel.done()
            return

        for glyph in itertools.cycle(self.frames):
            self._draw(f"{HIDE_CURSOR}{CARRIAGE_RETURN}{glyph} {self.label}")
            try:
                signal = self._channel.receive(timeout=self.interval)
            except queue.Empty:
                continue

            try:
                if signal is _SUCCESS:
                    self._draw(f"{CARRIAGE_RETURN}{CLEAR_LINE}{SHOW_CURSOR}")
                else:
                    self._draw(
                        f"{CARRIAGE_RETURN}{CLEAR_LINE}{SHOW_CURSOR}"
                        f"{self.label} [{sstyled('FAIL', RED)}]\n"
                    )
            finally:
                self._channel.done()
            return


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def _format_label(label: str, args: tuple[object, ...]) -> str:
    return label % args if args else label


def new_spinner(
    label: str,
    *args: object,
    display_length: int = 30,
    terminal: Terminal | None = None,
) -> Progress:
    """Return a spinner; *args* are %-formatted into *label*."""
    return Progress(
        "spinner",
        _format_label(label, args),
        display_length,
        frames=SPINNER_LINE,
        interval=SPINNER_INTERVAL,
        terminal=terminal,
    )


def new_bar(
    label: str,
    *args: object,
    display_length: int = 20,
    terminal: Terminal | None = None,
) -> Progress:
    """Return a progress bar driven by :meth:`Progress.update`."""
    return Progress(
        "bar",
        _format_label(label, args),
        display_length,
        terminal=terminal,
    )


def new_loading_message(
    label: str,
    frames: tuple[str, ...] = SPINNER_DOTS,
    delay: float = 0.0,
    *,
    interval: float = LOADING_INTERVAL,
    terminal: Terminal | None = None,
) -> Progress:
    """Return a loading message that appears only after *delay* seconds."""
    return Progress(
        "loading",
        label,
        0,
        frames=frames,
        interval=interval,
        delay=delay,
        terminal=terminal,
    )
