"""Input modes and the key bindings active in each of them.

With vim bindings disabled there is a single mode (INSERT) driven by the
standard keymap. With vim bindings enabled the editor moves between
NORMAL, INSERT and COMMAND, and each mode has its own keymap.
"""

from enum import Enum
from typing import Optional, TYPE_CHECKING

from .keyboard import KeyType
from .commands import (
    KeyMap,
    LeftCharCommand, RightCharCommand, UpLineCommand, DownLineCommand,
    BeginningOfLineCommand, EndOfLineCommand, PageUpCommand, PageDownCommand,
    DocumentStartCommand, LastLineCommand,
    WordForwardCommand, WordBackwardCommand, WordEndCommand,
    SearchNextCommand, SearchPreviousCommand,
    InsertTextCommand, TabCommand, InsertNewlineCommand, BackspaceCommand,
    DeleteCharCommand, DeleteUnderCursorCommand, DeleteLineCommand,
    YankLineCommand, PasteAfterCommand, PasteBeforeCommand, OperatorCommand,
    EnterInsertCommand, OpenLineBelowCommand, OpenLineAboveCommand,
    EscapeToNormalCommand, EnterCommandLineCommand,
    CommandLineInputCommand, CommandLineBackspaceCommand,
    CommandLineCancelCommand, CommandLineExecuteCommand,
    QuitCommand, SaveCommand,
)

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .session import EditorSession


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


def _register_arrows(keymap: KeyMap, cross_lines: bool):
    keymap.register((KeyType.SPECIAL, 'left'), LeftCharCommand(cross_lines))
    keymap.register((KeyType.SPECIAL, 'right'), RightCharCommand(cross_lines))
    keymap.register((KeyType.SPECIAL, 'up'), UpLineCommand())
    keymap.register((KeyType.SPECIAL, 'down'), DownLineCommand())
    keymap.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
    keymap.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
    keymap.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
    keymap.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())


def _register_editing(keymap: KeyMap):
    keymap.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
    keymap.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
    keymap.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
    keymap.register((KeyType.SPECIAL, 'tab'), TabCommand())


def build_standard_keymap() -> KeyMap:
    """Plain editing: arrows move, printable keys insert, Ctrl+S/Ctrl+Q save and quit."""
    keymap = KeyMap(fallback=InsertTextCommand())
    _register_arrows(keymap, cross_lines=True)
    _register_editing(keymap)
    keymap.register((KeyType.CTRL, 's'), SaveCommand())
    keymap.register((KeyType.CTRL, 'q'), QuitCommand())
    return keymap


def build_insert_keymap() -> KeyMap:
    keymap = KeyMap(fallback=InsertTextCommand())
    _register_arrows(keymap, cross_lines=True)
    _register_editing(keymap)
    keymap.register((KeyType.SPECIAL, 'escape'), EscapeToNormalCommand())
    return keymap


def build_normal_keymap() -> KeyMap:
    keymap = KeyMap()
    _register_arrows(keymap, cross_lines=False)

    bindings = {
        'h': LeftCharCommand(cross_lines=False),
        'l': RightCharCommand(cross_lines=False),
        'k': UpLineCommand(),
        'j': DownLineCommand(),
        '0': BeginningOfLineCommand(),
        '$': EndOfLineCommand(),
        'g': DocumentStartCommand(),
        'G': LastLineCommand(),
        'w': WordForwardCommand(),
        'b': WordBackwardCommand(),
        'e': WordEndCommand(),
        'n': SearchNextCommand(),
        'N': SearchPreviousCommand(),
        'x': DeleteUnderCursorCommand(),
        'd': OperatorCommand('d', DeleteLineCommand()),
        'y': OperatorCommand('y', YankLineCommand()),
        'p': PasteAfterCommand(),
        'P': PasteBeforeCommand(),
        'i': EnterInsertCommand('i'),
        'I': EnterInsertCommand('I'),
        'a': EnterInsertCommand('a'),
        'A': EnterInsertCommand('A'),
        'o': OpenLineBelowCommand(),
        'O': OpenLineAboveCommand(),
        ':': EnterCommandLineCommand(),
        '/': EnterCommandLineCommand('/'),
    }
    for key, command in bindings.items():
        keymap.register((KeyType.REGULAR, key), command)

    keymap.register((KeyType.CTRL, 'q'), QuitCommand())
    return keymap


def build_command_keymap() -> KeyMap:
    keymap = KeyMap(fallback=CommandLineInputCommand())
    keymap.register((KeyType.SPECIAL, 'enter'), CommandLineExecuteCommand())
    keymap.register((KeyType.SPECIAL, 'backspace'), CommandLineBackspaceCommand())
    keymap.register((KeyType.SPECIAL, 'escape'), CommandLineCancelCommand())
    return keymap


class ModeStateMachine:
    """Tracks the current mode and routes key events to its keymap."""

    def __init__(self, vim_bindings: bool = False, initial_mode: Mode = Mode.INSERT):
        self.vim_bindings = vim_bindings
        self.mode = initial_mode if vim_bindings else Mode.INSERT
        self.command_buffer = ""
        self.pending_operator: Optional[str] = None

        if vim_bindings:
            self._keymaps = {
                Mode.NORMAL: build_normal_keymap(),
                Mode.INSERT: build_insert_keymap(),
                Mode.COMMAND: build_command_keymap(),
            }
        else:
            self._keymaps = {Mode.INSERT: build_standard_keymap()}

    @property
    def mode_label(self) -> str:
        """Text for the command row, empty without vim bindings."""
        if not self.vim_bindings:
            return ""
        if self.mode == Mode.COMMAND:
            if self.command_buffer.startswith('/'):
                return self.command_buffer
            return ':' + self.command_buffer
        return f"-- {self.mode.name} --"

    def set_mode(self, session: 'EditorSession', mode: Mode) -> None:
        if not self.vim_bindings:
            return
        self.mode = mode
        self.pending_operator = None
        session.cursor.allow_past_end = mode == Mode.INSERT
        session.cursor.clamp()

    def enter_command_line(self, session: 'EditorSession', prefix: str = "") -> None:
        self.command_buffer = prefix
        self.set_mode(session, Mode.COMMAND)

    def handle(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Dispatch a key in the current mode.

        Returns:
            True if the document was modified
        """
        command = self._keymaps[self.mode].lookup(key_event)
        pending_before = self.pending_operator
        modified = command.execute(session, key_event) if command else False
        # Any key other than the operator's second press cancels it
        if self.pending_operator is not None and self.pending_operator == pending_before:
            self.pending_operator = None
        return modified

    def execute_command_line(self, session: 'EditorSession') -> None:
        """Run the command typed after ``:`` or ``/`` and return to NORMAL."""
        text = self.command_buffer
        if text.startswith('/'):
            term = text[1:]
            if term:
                session.last_search = term
                session.search(forward=True)
        else:
            command = text.strip()
            if command == 'q':
                session.quit_requested = True
            elif command == 'w':
                session.save_requested = True
            elif command in ('wq', 'x'):
                session.save_requested = True
                session.quit_requested = True
            elif command:
                session.status_message = f"Not an editor command: {command}"
        self.command_buffer = ""
        self.set_mode(session, Mode.NORMAL)
