"""location.py - Caller source location and stack capture.

Both helpers count frames relative to their own caller: ``skip=0`` names the
function that called ``resolve_caller()`` (or ``format_stack()``), ``skip=1``
its caller, and so on. The logger computes the skip for each public entry
point in one place so that the resolved frame is always the application's
call site, not a cloudslog wrapper.
"""

import sys
import traceback
from typing import Optional

from .entry import SourceLocation


def _frame(skip: int):
    # +2 steps over _frame itself and the public helper that called it.
    try:
        return sys._getframe(skip + 2)
    except ValueError:
        return None


def _function_name(frame) -> str:
    code = frame.f_code
    name = getattr(code, "co_qualname", code.co_name)
    if not name:
        return ""
    module = frame.f_globals.get("__name__")
    return f"{module}.{name}" if module else name


def resolve_caller(skip: int = 0) -> Optional[SourceLocation]:
    """Return the source location ``skip`` frames above the caller.

    Args:
        skip: Number of additional frames to step over. 0 is the function
            that called ``resolve_caller()``.

    Returns:
        A SourceLocation, or None if the stack is not that deep. The function
        name is best effort and may be empty; file and line always come from
        the frame itself.

    Example:
        >>> def where():
        ...     return resolve_caller(1)
        >>> loc = where()   # the location of this line
    """
    frame = _frame(skip)
    if frame is None:
        return None
    return SourceLocation(
        file=frame.f_code.co_filename,
        line=frame.f_lineno,
        function=_function_name(frame),
    )


def format_stack(skip: int = 0) -> str:
    """Return a Python traceback for the stack above the caller.

    The text starts with ``Traceback (most recent call last):`` so that Error
    Reporting recognises the entry as a reported error. When an exception is
    being handled, the result is still a single traceback: the frames above
    the handler, then the exception's own frames, then the exception line.

    Args:
        skip: Frames to omit from the innermost end, counted as in
            ``resolve_caller()``.
    """
    frame = _frame(skip)
    exc_type, exc, tb = sys.exc_info()

    outer = frame
    if exc is not None and tb is not None and frame is not None and tb.tb_frame is frame:
        # The traceback starts at the handling frame; don't list it twice.
        outer = frame.f_back

    lines = ["Traceback (most recent call last):\n"]
    if outer is not None:
        lines.extend(traceback.format_stack(outer))
    if exc is not None:
        lines.extend(traceback.format_tb(tb))
        lines.extend(traceback.format_exception_only(exc_type, exc))
    return "".join(lines).rstrip("\n")
