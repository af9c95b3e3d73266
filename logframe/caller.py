"""Resolve the name of the code that called the facade entry point."""

from __future__ import annotations

import inspect
import traceback
from types import CodeType, FrameType

from .errors import CallerNotFoundError

_LOCALS_MARKER = ".<locals>"


def resolve_caller_name(entry_point: CodeType) -> str:
    """
    Return the owning class name of the frame that called ``entry_point``.

    The stack is walked from the current frame outward. The first frame
    running ``entry_point`` marks the facade call; the first frame after it
    that is not also ``entry_point`` is the caller.

    Raises:
        CallerNotFoundError: If ``entry_point`` is not on the stack.
    """
    frame = inspect.currentframe()
    caller = None
    try:
        while frame is not None:
            if frame.f_code is entry_point:
                caller = frame.f_back
                while caller is not None and caller.f_code is entry_point:
                    caller = caller.f_back
                if caller is not None:
                    return owner_name(caller)
                break
            frame = frame.f_back
    finally:
        # Break reference cycles through the frame objects
        del frame
        del caller

    raise CallerNotFoundError(
        f"unable to locate the caller of {entry_point.co_qualname} in the calling stack",
        detail=traceback.format_stack(),
    )


def owner_name(frame: FrameType) -> str:
    """
    Name of the class owning ``frame``'s code, or its module outside a class.

    ``Foo.method`` and ``Foo.method.<locals>.helper`` both belong to ``Foo``;
    a class body frame belongs to the class being defined.
    """
    module = frame.f_globals.get("__name__", "")
    f_locals = frame.f_locals
    if "__module__" in f_locals and "__qualname__" in f_locals:
        return _join(module, f_locals["__qualname__"])

    owner = frame.f_code.co_qualname.rpartition(".")[0]
    while owner.endswith(_LOCALS_MARKER):
        # Drop the enclosing function along with its <locals> scope
        owner = owner[: -len(_LOCALS_MARKER)].rpartition(".")[0]
    return _join(module, owner)


def _join(module: str, qualname: str) -> str:
    if not qualname:
        return module
    if not module:
        return qualname
    return f"{module}.{qualname}"
