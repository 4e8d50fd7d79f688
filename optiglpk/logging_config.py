"""
Logging setup for scripts using optiglpk

The library itself only creates module loggers; handlers are configured
here, by the application.
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts using optiglpk"""
    fmt = "%(asctime)s %(levelname)s | %(name)s | %(message)s"
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=lvl, format=fmt)


__all__ = ["setup_logging"]
