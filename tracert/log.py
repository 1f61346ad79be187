# tracert/log.py
import logging

from rich.console import Console
from rich.logging import RichHandler

FORMAT = "%(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """Send diagnostics to stderr through rich; stdout is left to the hop table."""
    logging.basicConfig(
        level=level.upper(),
        format=FORMAT,
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=False,
            )
        ],
        force=True,
    )
