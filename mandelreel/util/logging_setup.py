"""
Loggers used across mandelreel.

Session and CLI records go to the "mandelreel" logger. Per-frame chatter
(render start/done, zoom steps) goes to its "mandelreel.frames" child, which
has its own level so a long zoom can stay quiet at INFO while frame records
are still available at DEBUG. frame_logger() prefixes those records with the
frame id; bands rendered on worker threads show up under their "band_N"
thread name.
"""

import logging
import logging.handlers
from typing import Optional, Union

PACKAGE_LOGGER = "mandelreel"
FRAMES_LOGGER = PACKAGE_LOGGER + ".frames"

LOG_FORMAT = "%(asctime)s.%(msecs)03dZ %(threadName)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


class FrameLogAdapter(logging.LoggerAdapter):
    """Prefixes each message with "[Frame <id>]"."""

    def process(self, msg, kwargs):
        return f"[Frame {self.extra['frame_id']}] {msg}", kwargs


def frame_logger(frame_id: Union[int, str]) -> FrameLogAdapter:
    return FrameLogAdapter(get_logger(FRAMES_LOGGER), {"frame_id": frame_id})


def configure_logging(
    level: int = logging.INFO,
    *,
    frame_level: Optional[int] = None,
    console: bool = True,
    log_file: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backups: int = 5,
) -> logging.Logger:
    """
    Send mandelreel records to stderr and/or a rotating log file.

    frame_level sets the frames logger separately (defaults to level).
    Handlers installed by an earlier call are closed and replaced, so
    calling this again reconfigures rather than duplicating output.
    """
    package = get_logger()
    for handler in package.handlers[:]:
        package.removeHandler(handler)
        handler.close()

    package.setLevel(level)
    package.propagate = False
    get_logger(FRAMES_LOGGER).setLevel(level if frame_level is None else frame_level)

    handlers = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
        )
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        # no handler level: the two logger levels do the filtering
        handler.setFormatter(formatter)
        package.addHandler(handler)
    return package
