"""Full-screen live mode.

One producer task polls the keyboard and two fixed-rate timers and pushes
events onto an unbounded asyncio queue; one consumer drains the queue in
arrival order and is the only code that touches the game.
"""
import asyncio
import curses
import logging
import os
from typing import Optional, Protocol

from .events import ActionKind, Event, EventKind, Key, KeyPress, apply_action, get_action
from .game import WordleGame
from .render import CursesRenderer
from .word import is_letter

logger = logging.getLogger(__name__)

# upper bound for a single blocking poll, ticks can't fall behind by more than this
MAX_POLL = 0.05

BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)
ESC_KEY = 27


class InputSource(Protocol):
    def poll(self, timeout: float) -> Optional[Event]:
        """Waits at most `timeout` seconds for one input event."""


class Renderer(Protocol):
    def draw(self, view) -> None:
        ...


def key_event(ch: int) -> Event:
    if ch in BACKSPACE_KEYS:
        return Event.key_press(KeyPress(Key.BACKSPACE))
    if ch in ENTER_KEYS:
        return Event.key_press(KeyPress(Key.ENTER))
    if ch == ESC_KEY:
        return Event.key_press(KeyPress(Key.ESC))
    if 0 <= ch < 128 and is_letter(chr(ch)):
        return Event.key_press(KeyPress.of(chr(ch)))
    return Event.key_press(KeyPress(Key.OTHER))


class CursesInput:
    def __init__(self, window):
        self.window = window

    def poll(self, timeout: float) -> Optional[Event]:
        self.window.timeout(max(0, int(timeout * 1000)))
        try:
            ch = self.window.getch()
        except curses.error as e:
            return Event(EventKind.ERROR, detail=str(e))
        if ch == -1:
            return None
        if ch == curses.KEY_MOUSE:
            try:
                _, _, _, _, bstate = curses.getmouse()
            except curses.error:
                return None
            return Event(EventKind.MOUSE, detail=str(bstate))
        return key_event(ch)


class EventPump:
    """Producer side: input events plus Tick and Render on their own intervals."""

    def __init__(self, source: InputSource, tick_rate: float = 4.0, frame_rate: float = 60.0):
        self.source = source
        self.tick_delay = 1.0 / tick_rate
        self.render_delay = 1.0 / frame_rate
        self.queue: "asyncio.Queue[Event]" = asyncio.Queue()
        self.cancelled = asyncio.Event()

    def cancel(self) -> None:
        self.cancelled.set()

    def drain(self) -> int:
        dropped = 0
        while not self.queue.empty():
            self.queue.get_nowait()
            dropped += 1
        return dropped

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        self.queue.put_nowait(Event(EventKind.INIT))
        next_tick = next_render = loop.time()

        while not self.cancelled.is_set():
            timeout = min(max(0.0, min(next_tick, next_render) - loop.time()), MAX_POLL)
            event = self.source.poll(timeout)
            if event is not None:
                self.queue.put_nowait(event)

            now = loop.time()
            if now >= next_tick:
                self.queue.put_nowait(Event(EventKind.TICK))
                next_tick = max(next_tick + self.tick_delay, now)
            if now >= next_render:
                self.queue.put_nowait(Event(EventKind.RENDER))
                next_render = max(next_render + self.render_delay, now)
            # let the consumer catch up before the next poll
            await asyncio.sleep(0)
        logger.debug("Event pump stopped")


async def consume(game: WordleGame, queue: "asyncio.Queue[Event]", renderer: Renderer) -> None:
    while True:
        event = await queue.get()
        action = get_action(game, event)
        apply_action(game, action)
        if action.kind is ActionKind.QUIT:
            logger.info("Quit requested")
            return
        if action.kind not in (ActionKind.TICK, ActionKind.NONE):
            renderer.draw(game.view())


async def run_live(game: WordleGame, renderer: Renderer, source: InputSource,
                   tick_rate: float = 4.0, frame_rate: float = 60.0) -> None:
    """
    Runs the producer and the consumer until the player quits or either side fails.
    Events still queued at shutdown are dropped.
    """
    pump = EventPump(source, tick_rate, frame_rate)
    producer = asyncio.create_task(pump.run())
    consumer = asyncio.create_task(consume(game, pump.queue, renderer))
    done = set()
    try:
        done, _ = await asyncio.wait({producer, consumer}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pump.cancel()
        consumer.cancel()
        await asyncio.gather(producer, consumer, return_exceptions=True)
        dropped = pump.drain()
        if dropped:
            logger.debug("Dropped %d queued event(s) on shutdown", dropped)

    for task in done:
        if not task.cancelled():
            # re-raises whatever ended the loop early
            task.result()


class Terminal:
    """Puts the terminal in curses mode and always gives it back, even when setup fails halfway."""

    def __init__(self):
        self.screen = None

    def __enter__(self):
        os.environ.setdefault("ESCDELAY", "25")
        self.screen = curses.initscr()
        try:
            curses.noecho()
            curses.cbreak()
            self.screen.keypad(True)
            curses.mousemask(curses.ALL_MOUSE_EVENTS)
            try:
                curses.curs_set(0)
            except curses.error:
                logger.debug("Terminal can't hide the cursor")
        except BaseException:
            self.restore()
            raise
        return self.screen

    def __exit__(self, exc_type, exc, tb):
        self.restore()
        return False

    def restore(self) -> None:
        if self.screen is None:
            return
        try:
            self.screen.keypad(False)
            curses.nocbreak()
            curses.echo()
        finally:
            curses.endwin()
            self.screen = None


def play_live(game: WordleGame, tick_rate: float = 4.0, frame_rate: float = 60.0) -> None:
    with Terminal() as screen:
        renderer = CursesRenderer(screen)
        renderer.init_colors()
        asyncio.run(run_live(game, renderer, CursesInput(screen), tick_rate, frame_rate))
