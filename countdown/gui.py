"""Countdown GUI -- tkinter keypad window."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable

from countdown import config as cfg
from countdown.display import format_clock
from countdown.engine import TimerEngine
from countdown.models import WindowPosition
from countdown.scheduler import TkScheduler

log = logging.getLogger(__name__)

_BG = "#2b2b2b"
_FG = "#e0e0e0"
_ACCENT = "#6a9fb5"
_DIAL_SIZE = 240
_DIAL_WIDTH = 12


class CountdownApp:
    """Main GUI application window."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title("Countdown")
        self.config = cfg.load_config()
        self._apply_window_position(360, 620)
        self.root.configure(bg=_BG)

        self.engine = TimerEngine(
            TkScheduler(self.root), tick_interval=self.config.tick_interval
        )
        self._keypad_buttons: list[ttk.Button] = []

        self._style = ttk.Style()
        self._style.theme_use("clam")
        self._configure_styles()
        self._build_ui()
        self._bind_engine()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    # ------------------------------------------------------------------
    # Window position
    # ------------------------------------------------------------------

    def _apply_window_position(self, w: int, h: int) -> None:
        """Set window geometry based on the configured position preference."""
        if self.config.window_position == WindowPosition.TOP_LEFT:
            self.root.geometry(f"{w}x{h}+0+0")
        else:
            self.root.update_idletasks()
            sw = self.root.winfo_screenwidth()
            sh = self.root.winfo_screenheight()
            self.root.geometry(f"{w}x{h}+{(sw - w) // 2}+{(sh - h) // 2}")

    def _configure_styles(self) -> None:
        """Configure ttk styles for a dark theme."""
        self._style.configure("TFrame", background=_BG)
        self._style.configure("TLabel", background=_BG, foreground=_FG)
        self._style.configure(
            "Clock.TLabel",
            background=_BG,
            foreground="#e8c547",
            font=("monospace", 26, "bold"),
        )
        self._style.configure("Key.TButton", font=("sans-serif", 16), padding=8)
        self._style.configure("Accent.TButton", font=("sans-serif", 12, "bold"), padding=8)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        """Construct all UI elements."""
        dial_frame = ttk.Frame(self.root)
        dial_frame.pack(pady=(16, 8))

        self._dial = tk.Canvas(
            dial_frame,
            width=_DIAL_SIZE,
            height=_DIAL_SIZE,
            bg=_BG,
            highlightthickness=0,
        )
        self._dial.pack()
        inset = _DIAL_WIDTH
        box = (inset, inset, _DIAL_SIZE - inset, _DIAL_SIZE - inset)
        self._dial.create_oval(*box, outline="#444", width=_DIAL_WIDTH)
        self._arc = self._dial.create_arc(
            *box, start=90, extent=-359.9, style=tk.ARC, outline=_ACCENT, width=_DIAL_WIDTH
        )
        self._clock_label = ttk.Label(dial_frame, text="", style="Clock.TLabel")
        self._dial.create_window(_DIAL_SIZE // 2, _DIAL_SIZE // 2, window=self._clock_label)

        keypad = ttk.Frame(self.root)
        keypad.pack(pady=8)
        # (label, row, column, command); 1-9 in a phone layout, then 0 and DEL.
        keys: list[tuple[str, int, int, Callable[[], None]]] = [
            (str(n), (n - 1) // 3, (n - 1) % 3, self._digit_command(n)) for n in range(1, 10)
        ]
        keys.append(("0", 3, 1, self._digit_command(0)))
        keys.append(("DEL", 3, 2, self.engine.backspace))
        for text, row, column, command in keys:
            button = ttk.Button(keypad, text=text, width=4, style="Key.TButton", command=command)
            button.grid(row=row, column=column, padx=4, pady=4)
            self._keypad_buttons.append(button)

        self._toggle_button = ttk.Button(
            self.root, text="Start", style="Accent.TButton", command=self._on_toggle
        )
        self._toggle_button.pack(pady=(8, 16))

        for n in range(10):
            self.root.bind(str(n), lambda _event, n=n: self.engine.press_digit(n))
        self.root.bind("<BackSpace>", lambda _event: self.engine.backspace())
        self.root.bind("<Return>", lambda _event: self._on_toggle())

    def _digit_command(self, digit: int) -> Callable[[], None]:
        return lambda: self.engine.press_digit(digit)

    # ------------------------------------------------------------------
    # Engine bindings
    # ------------------------------------------------------------------

    def _bind_engine(self) -> None:
        for field in (self.engine.hours, self.engine.minutes, self.engine.seconds):
            field.subscribe(lambda _value: self._render_clock())
        self.engine.percent_remaining.subscribe(self._render_percent)
        self.engine.is_running.subscribe(self._render_running)

    def _render_clock(self) -> None:
        self._clock_label.configure(
            text=format_clock(
                self.engine.hours.value,
                self.engine.minutes.value,
                self.engine.seconds.value,
            )
        )

    def _render_percent(self, percent: float) -> None:
        # Tk draws nothing for a full 360 degree extent.
        extent = -min(359.9, 360.0 * percent)
        self._dial.itemconfigure(self._arc, extent=extent)

    def _render_running(self, running: bool) -> None:
        self._toggle_button.configure(text="Stop" if running else "Start")
        state = ["disabled"] if running else ["!disabled"]
        for button in self._keypad_buttons:
            button.state(state)

    def _on_toggle(self) -> None:
        if self.engine.is_running.value:
            self.engine.stop()
        else:
            self.engine.start()

    def _on_close(self) -> None:
        # Cancel the pending tick while the Tk interpreter is still alive.
        self.engine.stop()
        self.root.destroy()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Start the tkinter main loop."""
        self.root.mainloop()


def run_gui() -> None:
    """Entry point for the GUI (called from CLI)."""
    log.debug("Opening countdown window")
    app = CountdownApp()
    app.run()
