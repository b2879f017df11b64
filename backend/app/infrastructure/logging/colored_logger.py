"""Colored request logger: one ANSI-colored console line per HTTP request.

Color scheme:
    Green: 2xx
    Cyan: 3xx
    Yellow: 4xx
    Red: 5xx / unhandled errors
    Gray: timing
"""

import logging


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


def status_color(status_code: int) -> str:
    if status_code >= 500:
        return _Colors.RED
    if status_code >= 400:
        return _Colors.YELLOW
    if status_code >= 300:
        return _Colors.CYAN
    return _Colors.GREEN


class RequestLogger:
    """Writes access lines to the ``app.requests`` logger.

    Usage:
        log = RequestLogger()
        log.request("GET", "/api/v1/articles", 200, 12.4)
    """

    def __init__(self, name: str = "app.requests"):
        self._logger = logging.getLogger(name)

    def request(self, method: str, path: str, status_code: int, elapsed_ms: float) -> None:
        color = status_color(status_code)
        formatted = (
            f"{_Colors.BOLD}{method:<6}{_Colors.RESET} {path} "
            f"{color}{status_code}{_Colors.RESET} "
            f"{_Colors.GRAY}{elapsed_ms:.1f}ms{_Colors.RESET}"
        )
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self._logger.log(level, formatted)

    def failure(self, method: str, path: str, error: Exception, elapsed_ms: float) -> None:
        """Log a request that escaped every exception handler."""
        self._logger.error(
            f"{_Colors.RED}{_Colors.BOLD}{method:<6} {path} FAILED{_Colors.RESET} "
            f"{_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET} "
            f"{_Colors.GRAY}{elapsed_ms:.1f}ms{_Colors.RESET}"
        )
