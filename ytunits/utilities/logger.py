import logging
import sys
from typing import Optional

from ytunits.utilities.configure import YTConfig, configuration_callbacks

ytLogger = logging.getLogger("ytunits")

_ytunits_sh: Optional[logging.StreamHandler] = None

ufstring = "%(name)-3s: [%(levelname)-9s] %(asctime)s %(message)s"
cfstring = "%(name)-3s: [%(levelname)-18s] %(asctime)s %(message)s"

# ANSI colour per minimal level, checked from the most severe down
_level_colors = (
    (40, "\x1b[31m"),  # red
    (30, "\x1b[33m"),  # yellow
    (20, "\x1b[32m"),  # green
    (10, "\x1b[35m"),  # pink
    (0, "\x1b[0m"),
)


def set_log_level(level):
    """
    Select which minimal logging level should be displayed.

    Parameters
    ----------
    level: int or str
        Possible values by increasing level:
        0 or "notset"
        1 or "all"
        10 or "debug"
        20 or "info"
        30 or "warning"
        40 or "error"
        50 or "critical"
    """
    if isinstance(level, str):
        level = level.upper()
        if level == "ALL":  # non-standard alias
            level = 1
    ytLogger.setLevel(level)
    ytLogger.debug("Set log level to %s", level)


class DuplicateFilter(logging.Filter):
    """A filter that removes duplicated successive log entries."""

    last_log = None

    def filter(self, record):
        current_log = (record.module, record.levelno, record.msg, record.args)
        if current_log == self.last_log:
            return False
        self.last_log = current_log
        return True


ytLogger.addFilter(DuplicateFilter())


class ColoredFormatter(logging.Formatter):
    """Formatter painting the level name of each record."""

    def __init__(self):
        super().__init__(cfstring)

    def format(self, record):
        color = next(c for level, c in _level_colors if record.levelno >= level)
        plain = record.levelname
        record.levelname = f"{color}{plain}\x1b[0m"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def colorize_logging():
    if _ytunits_sh is not None:
        _ytunits_sh.setFormatter(ColoredFormatter())


def uncolorize_logging():
    if _ytunits_sh is not None:
        _ytunits_sh.setFormatter(logging.Formatter(ufstring))


def disable_stream_logging():
    global _ytunits_sh
    if _ytunits_sh is not None:
        ytLogger.removeHandler(_ytunits_sh)
        _ytunits_sh = None
    ytLogger.addHandler(logging.NullHandler())


def _runtime_configuration(ytcfg: YTConfig) -> None:
    # only run this at the end of ytunits.__init__, once ytcfg exists
    global _ytunits_sh

    if ytcfg.get("ytunits", "suppress_stream_logging"):
        disable_stream_logging()
        return

    if ytcfg.get("ytunits", "stdout_stream_logging"):
        stream = sys.stdout
    else:
        stream = sys.stderr
    if _ytunits_sh is not None:
        ytLogger.removeHandler(_ytunits_sh)
    _ytunits_sh = logging.StreamHandler(stream=stream)
    _ytunits_sh.setFormatter(logging.Formatter(ufstring))
    ytLogger.addHandler(_ytunits_sh)
    ytLogger.setLevel(min(max(ytcfg.get("ytunits", "log_level"), 0), 50))
    ytLogger.propagate = False

    if ytcfg.get("ytunits", "colored_logs"):
        colorize_logging()


configuration_callbacks.append(_runtime_configuration)
