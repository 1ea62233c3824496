"""Log handler setup for the command line.

Diagnostics go to stderr as ``[level] message``. The access log goes to
stdout: what the server does with requests is the program's output.
"""

import logging
import sys


class _LevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.levelname_lower = record.levelname.lower().replace("warning", "warn")
        return super().format(record)


def configure_logging(level: str = "info") -> None:
    """Install the stderr and stdout handlers on the ``staticroute`` loggers."""
    root = logging.getLogger("staticroute")
    root.setLevel(level.upper())
    root.handlers.clear()

    diagnostics = logging.StreamHandler(sys.stderr)
    diagnostics.setFormatter(_LevelFormatter("[%(levelname_lower)s] %(message)s"))
    root.addHandler(diagnostics)

    access = logging.getLogger("staticroute.access")
    access.setLevel(logging.INFO)
    access.propagate = False
    access.handlers.clear()
    requests = logging.StreamHandler(sys.stdout)
    requests.setFormatter(logging.Formatter("%(message)s"))
    access.addHandler(requests)
