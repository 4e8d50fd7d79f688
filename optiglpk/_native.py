"""
Access to the GLPK engine through swiglpk
"""
import logging
import os
import sys
import threading
from contextlib import contextmanager

try:
    import swiglpk as glpk
except ImportError as e:
    raise ImportError(
        f"Failed to import the GLPK binding: {e}\n\n"
        f"optiglpk drives GLPK through the 'swiglpk' package, which ships\n"
        f"the GLPK library itself. Install it with:\n"
        f"  python -m pip install swiglpk\n"
    ) from e

logger = logging.getLogger(__name__)

MIN_GLPK_VERSION = (4, 52)

_init_lock = threading.Lock()
_output_lock = threading.RLock()
_initialized = False
_version = None


def _parse_version(text):
    """Return (major, minor) from a GLPK version string such as '5.0'"""
    parts = str(text).split('.')
    try:
        return int(parts[0]), int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        return None


def ensure_initialized():
    """
    Check the GLPK library once per process.

    Subsequent calls return immediately. Raises RuntimeError when the
    library is older than the MathProg/tee API this package relies on.

    Returns
    -------
    str
        GLPK version string
    """
    global _initialized, _version

    with _init_lock:
        if _initialized:
            return _version

        version = glpk.glp_version()
        parsed = _parse_version(version)
        if parsed is None or parsed < MIN_GLPK_VERSION:
            raise RuntimeError(
                f"GLPK {version} is not supported; optiglpk requires GLPK >= "
                f"{MIN_GLPK_VERSION[0]}.{MIN_GLPK_VERSION[1]}"
            )

        logger.debug("Using GLPK %s", version)
        _version = version
        _initialized = True
        return _version


@contextmanager
def redirect_engine_output(path):
    """
    Send GLPK terminal output to a file instead of the process stdout.

    GLPK writes to the C-level stdout, so file descriptor 1 itself is
    pointed at ``path`` for the duration of the block. The file is
    truncated. Redirection is process-wide; blocks in different threads
    run one at a time.

    Parameters
    ----------
    path : str
        File receiving the output
    """
    with _output_lock:
        if sys.stdout is not None:
            sys.stdout.flush()
        saved = os.dup(1)
        try:
            with open(path, "wb") as f:
                os.dup2(f.fileno(), 1)
                try:
                    yield
                finally:
                    os.dup2(saved, 1)
        finally:
            os.close(saved)


__all__ = ["glpk", "ensure_initialized", "redirect_engine_output"]
