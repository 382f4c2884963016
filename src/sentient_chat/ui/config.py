"""Display constants for the TUI and the log-level scale shared with the
console logger.
"""


class LogLevel:
    """Severity thresholds for the debug channel.

    Components report with the strings "debug", "info", "warning" and
    "error"; the log panel and the console logger compare them as the
    numbers below. A sink shows an entry when its level is at or above the
    sink's threshold, so DEBUG shows everything and ERROR only failures.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _by_name = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Upper-case label used in log lines, e.g. 'WARNING'."""
        for label, value in cls._by_name.items():
            if value == level:
                return label.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a channel or --log-level string; unknown values mean DEBUG."""
        return cls._by_name.get(level_str.lower(), cls.DEBUG)

    @classmethod
    def passes(cls, level: str, threshold: int) -> bool:
        """True if a channel entry at `level` should be shown at `threshold`."""
        return cls.from_string(level) >= threshold


APP_TITLE = "Sentient AI Assistant"
APP_TAGLINE = "Powered by Sentient Foundation"

INPUT_PLACEHOLDER = "Ask about DeFi strategies, staking, yield farming..."

# Chat display configuration
MESSAGE_TIME_FORMAT = "%H:%M"
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Typing indicator animation
TYPING_FRAME_INTERVAL = 0.4  # Seconds between animation frames
TYPING_MAX_DOTS = 3
