import logging
import os
import sys

logger = logging.getLogger(__name__)


def configure_logging(level=None):
    """Attach a stderr handler to the ``madlang`` logger.

    The level comes from *level*, else from ``MADLANG_LOGLEVEL``, else
    WARNING. Unknown level names fall back to WARNING. The handler is only
    added once per process.
    """
    name = (level or os.environ.get("MADLANG_LOGLEVEL") or "WARNING").upper()
    value = getattr(logging, name, None)
    if not isinstance(value, int):
        value = logging.WARNING

    root = logging.getLogger("madlang")
    root.setLevel(value)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        root.addHandler(handler)
    return root


class Reporter:
    """Renders diagnostics and applies the termination policy.

    In batch mode (the default) every reported error ends the process with
    exit status 1. In interactive mode the error is only rendered and the
    caller carries on with the next input.
    """

    def __init__(self, interactive=False, stream=None):
        self.interactive = interactive
        self.stream = stream

    def format(self, error):
        if error.lineno is None:
            lines = [f"Error: {error}"]
        else:
            lines = [f"[line {error.lineno}] Error: {error}"]
        if error.line:
            lines.append(f"    {error.line}")
            if error.column:
                lines.append("    " + " " * (error.column - 1) + "^")
        return "\n".join(lines)

    def report(self, error):
        logger.debug("reporting %s: %s", type(error).__name__, error)
        print(self.format(error), file=self.stream or sys.stderr)
        if not self.interactive:
            raise SystemExit(1)
