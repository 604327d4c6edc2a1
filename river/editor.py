"""Main editor controller for the daily-notes editor."""

import datetime
import errno
import logging
import os
import select
import signal
import sys
import termios
import time
from typing import Optional

from .autosave import AutoSaveTimer
from .config import Settings
from .constants import EditorConstants
from .files import ensure_daily_note, load_lines, save_lines
from .keyboard import KeyboardHandler, KeyEvent
from .modes import Mode
from .session import EditorSession
from .stats import DailyStats, StatsStore
from .status import compose_status
from .terminal import TerminalInterface
from .typing_session import TypingSessionTracker

logger = logging.getLogger(__name__)


class Editor:
    """Ties the editing session to the terminal, the clock and the disk."""

    def __init__(self, settings: Optional[Settings] = None,
                 terminal: Optional[TerminalInterface] = None,
                 today=datetime.date.today):
        self.settings = settings or Settings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.stats_store = StatsStore(self.settings.daily_notes_dir)
        self._today = today

        day = today()
        self.tracker = TypingSessionTracker(
            self.settings.typing_timeout_seconds,
            accumulated=self.stats_store.load(day).typing_seconds,
            day=day,
            today=today,
            on_rollover=self._on_rollover,
        )
        self.session = self._new_session([""])
        self.autosave = AutoSaveTimer()
        self.filename: Optional[str] = None
        # Day whose writing the open buffer counts toward
        self.note_day: Optional[datetime.date] = None
        self.running = False
        self._last_stats_save = time.monotonic()
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _new_session(self, lines) -> EditorSession:
        return EditorSession(self.settings, lines, tracker=self.tracker,
                             height=self.terminal.height, width=self.terminal.width)

    @property
    def status_message(self) -> Optional[str]:
        return self.session.status_message

    @status_message.setter
    def status_message(self, message: Optional[str]) -> None:
        self.session.status_message = message

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def load_file(self, filename) -> None:
        """Load a note and put the cursor at the end, on a fresh line.

        An unreadable file leaves the editor on an empty, unnamed buffer so
        the file on disk is never overwritten.
        """
        filename = str(filename)
        try:
            lines = load_lines(filename)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading {filename}: {e}")
            self.filename = None
            self.note_day = None
            self.session = self._new_session([""])
            self.status_message = f"Error: Cannot read {filename}"
            return

        if lines[-1]:
            lines.append("")
        self.filename = filename
        self.note_day = self._today()
        self.session = self._new_session(lines)
        last = len(self.session.buffer) - 1
        self.session.cursor.move_to(last, self.session.buffer.line_length(last))
        self.session.cursor.recompute_viewport(self.session.height, self.session.width)

    def open_daily_note(self) -> None:
        """Open (creating if needed) today's note in the notes directory."""
        try:
            path = ensure_daily_note(self.settings.daily_notes_dir, self._today())
        except OSError as e:
            logger.error(f"Cannot create daily note in {self.settings.daily_notes_dir}: {e}")
            self.status_message = f"Error: Cannot create note in {self.settings.daily_notes_dir}"
            return
        self.load_file(path)

    def save(self, announce: bool = False) -> bool:
        """Write the buffer to its file; failures become status messages.

        Returns:
            True if the save succeeded
        """
        self.autosave.cancel()
        if not self.filename:
            self.status_message = "Error: No file name"
            return False
        try:
            save_lines(self.filename, self.session.lines())
        except PermissionError:
            logger.warning(f"Permission denied saving {self.filename}")
            self.status_message = f"Error: Permission denied saving {self.filename}"
            return False
        except OSError as e:
            logger.warning(f"Could not save {self.filename}: {e}")
            if e.errno == errno.ENOSPC:  # No space left on device
                self.status_message = "Error: No space left on device"
            else:
                self.status_message = f"Error: Cannot save to {self.filename}"
            return False

        self.session.modified = False
        logger.debug(f"Saved {self.filename}")
        if announce:
            self.status_message = f"Saved to {self.filename}"
        self.save_stats()
        return True

    def _word_count_for(self, day: datetime.date) -> int:
        """Words of the open note, counted only toward the day it was opened on."""
        if self.note_day != day:
            return 0
        return self.session.word_count()

    def _write_stats(self, day: datetime.date, seconds: float) -> bool:
        stats = DailyStats(typing_seconds=int(seconds), word_count=self._word_count_for(day))
        if not self.stats_store.save(day, stats):
            self.status_message = f"Error: Cannot save stats to {self.stats_store.path_for(day)}"
            return False
        return True

    def save_stats(self) -> bool:
        """Persist today's typing seconds and word count."""
        self.tracker.checkpoint()
        self._last_stats_save = time.monotonic()
        return self._write_stats(self.tracker.day, self.tracker.total_seconds())

    def _on_rollover(self, day: datetime.date, seconds: float) -> None:
        """Write the finished day's record before the counter resets."""
        self._write_stats(day, seconds)

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Apply one key and act on any save/quit it requested."""
        if self.session.handle_key(key_event):
            self.autosave.arm()

        if self.session.save_requested:
            self.session.save_requested = False
            self.save(announce=True)
        if self.session.quit_requested:
            self.running = False

    def tick(self, now: Optional[float] = None) -> bool:
        """Periodic work between keys. Returns True if the screen may be stale."""
        now = time.monotonic() if now is None else now
        self.tracker.checkpoint()
        changed = False
        if self.autosave.due(now):
            logger.debug("Auto-saving")
            self.save()
            changed = True
        if now - self._last_stats_save >= EditorConstants.STATS_SAVE_INTERVAL:
            self.save_stats()
            self._last_stats_save = now
        return changed

    def _draw(self) -> None:
        session = self.session
        session.resize(self.terminal.height, self.terminal.width)
        cursor = session.cursor

        rows = session.buffer.lines[cursor.row_offset:cursor.row_offset + session.height]
        visible = [line[cursor.col_offset:cursor.col_offset + session.width] for line in rows]
        status = compose_status(session.word_count(), self.tracker.total_seconds(), session.width)

        in_command = session.mode == Mode.COMMAND
        if in_command or not session.status_message:
            command_text = session.modes.mode_label
        else:
            command_text = session.status_message

        cursor_y, cursor_x = cursor.screen_position
        self.terminal.update_frame(visible, cursor_y, cursor_x, status,
                                   command_text=command_text, command_cursor=in_command)

    def shutdown(self) -> None:
        """Flush the note and today's stats."""
        self.tracker.close()
        if self.session.modified or self.autosave.pending:
            self.save()
        self.save_stats()

    def run(self):
        """Run the main editor loop."""
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            self.terminal.setup()
            with self.terminal.term.cbreak():
                # Disable flow control AFTER entering cbreak mode
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    # Disable IXON/IXOFF in input flags (index 0) to allow Ctrl-S and Ctrl-Q
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError):
                    pass

                need_draw = True
                try:
                    while self.running:
                        if need_draw:
                            self._draw()
                            need_draw = False

                        ready, _, _ = select.select([0, self._resize_pipe_r], [], [],
                                                    EditorConstants.POLL_INTERVAL)

                        if self._resize_pipe_r in ready:
                            os.read(self._resize_pipe_r, 1024)
                            self.terminal.invalidate_frame()
                            need_draw = True
                        elif 0 in ready:
                            key_event = self.keyboard.get_key_event(timeout=0)
                            if key_event:
                                self.handle_key_event(key_event)
                                need_draw = True

                        if self.tick():
                            need_draw = True
                finally:
                    if old_settings:
                        try:
                            termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                        except (termios.error, OSError):
                            pass

        except KeyboardInterrupt:
            # Ctrl-C ends the session like :q
            pass
        finally:
            self.shutdown()
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
            if self.status_message and self.status_message.startswith("Error"):
                print(self.status_message, file=sys.stderr)
