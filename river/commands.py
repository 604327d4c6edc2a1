"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .session import EditorSession


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            session: The editing session the key belongs to
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(session, key_event)
        return False

    @abstractmethod
    def _move(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def __init__(self, cross_lines: bool = True):
        self.cross_lines = cross_lines

    def _move(self, session, key_event):
        session.cursor.step_left(self.cross_lines)


class RightCharCommand(MovementCommand):
    def __init__(self, cross_lines: bool = True):
        self.cross_lines = cross_lines

    def _move(self, session, key_event):
        session.cursor.step_right(self.cross_lines)


class UpLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move(0, -1)


class DownLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move(0, 1)


class BeginningOfLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.line_start()


class EndOfLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.line_end()


class PageUpCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move(0, -session.height)


class PageDownCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move(0, session.height)


class DocumentStartCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move_to(0, 0)


class LastLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move_to(len(session.buffer) - 1, 0)


class WordForwardCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move_to(*session.buffer.next_word_start(*session.cursor.position))


class WordBackwardCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move_to(*session.buffer.prev_word_start(*session.cursor.position))


class WordEndCommand(MovementCommand):
    def _move(self, session, key_event):
        session.cursor.move_to(*session.buffer.word_end(*session.cursor.position))


class SearchNextCommand(MovementCommand):
    def _move(self, session, key_event):
        session.search(forward=True)


class SearchPreviousCommand(MovementCommand):
    def _move(self, session, key_event):
        session.search(forward=False)


class EditCommand(EditorCommand):
    """Base class for editing commands.

    Every edit is reported to the typing tracker before it is applied.
    """

    def applies(self, session: 'EditorSession') -> bool:
        """Whether the edit has anything to do in the current state."""
        return True

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        if not self.applies(session):
            return False
        session.note_edit()
        self._edit(session, key_event)
        session.cursor.clamp()
        return True

    @abstractmethod
    def _edit(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, session, key_event):
        session.insert_char(key_event.value)


class TabCommand(EditCommand):
    def _edit(self, session, key_event):
        for _ in range(session.settings.tab_size):
            session.insert_char(' ')


class InsertNewlineCommand(EditCommand):
    def _edit(self, session, key_event):
        row, col = session.cursor.position
        session.buffer.split_line(row, col)
        session.cursor.move_to(row + 1, 0)


class BackspaceCommand(EditCommand):
    def applies(self, session):
        return session.cursor.position != (0, 0)

    def _edit(self, session, key_event):
        row, col = session.cursor.position
        if col > 0:
            session.buffer.delete_char_before(row, col)
            session.cursor.move_to(row, col - 1)
        elif row > 0:
            join_col = session.buffer.join_line(row - 1)
            session.cursor.move_to(row - 1, join_col)


class DeleteCharCommand(EditCommand):
    """Delete key: remove the character under the cursor or join the next line."""

    def applies(self, session):
        row, col = session.cursor.position
        return (col < session.buffer.line_length(row)
                or row < len(session.buffer) - 1)

    def _edit(self, session, key_event):
        row, col = session.cursor.position
        if col < session.buffer.line_length(row):
            session.buffer.delete_char_at(row, col)
        else:
            session.buffer.join_line(row)


class DeleteUnderCursorCommand(EditCommand):
    """Vim ``x``: never joins lines."""

    def applies(self, session):
        row, col = session.cursor.position
        return col < session.buffer.line_length(row)

    def _edit(self, session, key_event):
        session.buffer.delete_char_at(*session.cursor.position)


class DeleteLineCommand(EditCommand):
    def _edit(self, session, key_event):
        row = session.cursor.row
        session.clipboard = [session.buffer.delete_line(row)]
        session.cursor.move_to(row, 0)


class YankLineCommand(EditorCommand):
    def execute(self, session, key_event) -> bool:
        session.clipboard = [session.buffer.line_text(session.cursor.row)]
        return False


class PasteAfterCommand(EditCommand):
    def applies(self, session):
        return bool(session.clipboard)

    def _edit(self, session, key_event):
        row = session.cursor.row
        for i, line in enumerate(session.clipboard):
            session.buffer.insert_line(row + 1 + i, line)
        session.cursor.move_to(row + 1, 0)


class PasteBeforeCommand(EditCommand):
    def applies(self, session):
        return bool(session.clipboard)

    def _edit(self, session, key_event):
        row = session.cursor.row
        for i, line in enumerate(session.clipboard):
            session.buffer.insert_line(row + i, line)
        session.cursor.move_to(row, 0)


class OperatorCommand(EditorCommand):
    """Two-key operator such as ``dd`` or ``yy``.

    The first press only arms the operator; the action runs when the same
    key is pressed again straight away.
    """

    def __init__(self, key: str, action: EditorCommand):
        self.key = key
        self.action = action

    def execute(self, session, key_event) -> bool:
        modes = session.modes
        if modes.pending_operator == self.key:
            modes.pending_operator = None
            return self.action.execute(session, key_event)
        modes.pending_operator = self.key
        return False


class EnterInsertCommand(EditorCommand):
    """Normal-mode ``i``/``I``/``a``/``A``."""

    def __init__(self, where: str = 'i'):
        self.where = where

    def execute(self, session, key_event) -> bool:
        from .modes import Mode
        session.modes.set_mode(session, Mode.INSERT)
        cursor = session.cursor
        if self.where == 'a':
            if cursor.col < session.buffer.line_length(cursor.row):
                cursor.col += 1
        elif self.where == 'A':
            cursor.line_end()
        elif self.where == 'I':
            cursor.line_start()
        return False


class OpenLineBelowCommand(EditCommand):
    def _edit(self, session, key_event):
        from .modes import Mode
        session.modes.set_mode(session, Mode.INSERT)
        row = session.cursor.row
        session.buffer.insert_line(row + 1, "")
        session.cursor.move_to(row + 1, 0)


class OpenLineAboveCommand(EditCommand):
    def _edit(self, session, key_event):
        from .modes import Mode
        session.modes.set_mode(session, Mode.INSERT)
        row = session.cursor.row
        session.buffer.insert_line(row, "")
        session.cursor.move_to(row, 0)


class EscapeToNormalCommand(EditorCommand):
    def execute(self, session, key_event) -> bool:
        from .modes import Mode
        session.modes.set_mode(session, Mode.NORMAL)
        return False


class EnterCommandLineCommand(EditorCommand):
    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def execute(self, session, key_event) -> bool:
        session.modes.enter_command_line(session, self.prefix)
        return False


class CommandLineInputCommand(EditorCommand):
    def execute(self, session, key_event) -> bool:
        session.modes.command_buffer += key_event.value
        return False


class CommandLineBackspaceCommand(EditorCommand):
    def execute(self, session, key_event) -> bool:
        from .modes import Mode
        modes = session.modes
        modes.command_buffer = modes.command_buffer[:-1]
        if not modes.command_buffer:
            modes.set_mode(session, Mode.NORMAL)
        return False


class CommandLineCancelCommand(EditorCommand):
    def execute(self, session, key_event) -> bool:
        from .modes import Mode
        session.modes.command_buffer = ""
        session.modes.set_mode(session, Mode.NORMAL)
        return False


class CommandLineExecuteCommand(EditorCommand):
    def execute(self, session, key_event) -> bool:
        session.modes.execute_command_line(session)
        return False


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(session, key_event)
        return False

    @abstractmethod
    def _execute_system(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, session, key_event):
        session.quit_requested = True


class SaveCommand(SystemCommand):
    def _execute_system(self, session, key_event):
        session.save_requested = True


class KeyMap:
    """Maps key combinations to commands for one input mode."""

    def __init__(self, fallback: Optional[EditorCommand] = None):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        # Runs for printable keys that have no explicit binding
        self.fallback = fallback

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def lookup(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Command for a key event, or None when the key is unbound."""
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None and key_event.is_printable:
            return self.fallback
        return command
