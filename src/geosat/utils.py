"""
utils.py

Small helpers shared by the command line tools.

- `safe_log_exception(msg, exc, **ctx)` : log a failure with context
- `configure_logging(verbose)` : console logging setup for entry points
"""

from typing import Any
import sys
import logging

from geosat.config import LOGGING

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
    """Log `exc` with `msg` and key=value context.

    If logging itself fails, a compact line is written to `sys.stderr`.
    """
    try:
        if ctx:
            ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
            logger.error('%s | %s | %s', msg, exc, ctx_s, exc_info=exc)
        else:
            logger.error('%s | %s', msg, exc, exc_info=exc)
    except Exception:
        sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; debug level when `verbose`."""
    logging.basicConfig(
        level=LOGGING['verbose_level'] if verbose else LOGGING['level'],
        format=LOGGING['format'],
        handlers=[logging.StreamHandler(sys.stderr)],
    )
