"""River - a distraction-free daily-notes editor for the terminal."""

from .buffer import TextBuffer
from .cursor import CursorViewport
from .session import EditorSession
from .modes import Mode, ModeStateMachine
from .typing_session import TypingSessionTracker
from .wrap import WordWrapEngine, wrap_text

__all__ = [
    'TextBuffer',
    'CursorViewport',
    'EditorSession',
    'Mode',
    'ModeStateMachine',
    'TypingSessionTracker',
    'WordWrapEngine',
    'wrap_text',
]
