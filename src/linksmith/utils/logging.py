"""structlog setup for command-line runs.

Library code only calls ``structlog.get_logger``; the CLI decides where
log lines go and how verbose they are. Logs go to stderr so stdout stays
free for command output (including JSON).
"""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for a CLI run.

    Args:
        verbose: Emit info-level events; otherwise warnings and above
    """
    level = logging.INFO if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
