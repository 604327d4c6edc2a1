"""Constants and configuration defaults for the river editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Writing goal
    WORD_GOAL = 500  # Daily target shown in the status bar
    WARNING_WORDS = 375  # Three quarters of the goal turns the bar yellow

    # Word wrap
    WRAP_MARGIN = 5  # Columns kept free at the right edge
    WRAP_LOOKBACK = 20  # How far back to look for a space before hard-breaking

    # Main loop timing (seconds)
    POLL_INTERVAL = 0.05  # Key polling timeout; the loop ticks at least this often
    AUTOSAVE_DELAY = 1.0  # Save this long after the last edit
    STATS_SAVE_INTERVAL = 10.0  # Persist typing statistics this often

    # Screen layout
    STATUS_ROWS = 2  # Status bar plus command line at the bottom
    MIN_PROGRESS_BAR = 10  # Narrowest progress bar drawn in the status line

    # Daily notes
    NOTE_SUFFIX = ".md"
    STATS_PREFIX = ".stats-"
    STATS_SUFFIX = ".toml"
    DATE_FORMAT = "%Y-%m-%d"
    HEADER_DATE_FORMAT = "%A, %B %d, %Y"
    STATS_HISTORY_DAYS = 30

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
