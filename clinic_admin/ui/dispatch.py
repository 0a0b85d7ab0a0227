"""Hand results from worker threads back to the Tk main loop.

Views run blocking service calls on daemon threads and must touch
widgets only from the UI thread.  ``dispatch_to_ui`` schedules the
follow-up with ``widget.after(0, ...)`` and tolerates the view being
torn down in the meantime, either before scheduling (``after`` raises
``TclError`` on a destroyed widget, ``RuntimeError`` once the main loop
is gone) or before the callback runs.
"""

from __future__ import annotations

import tkinter as tk
from typing import Any, Callable, Protocol

from clinic_admin.logger import StructuredLogger


class _Schedulable(Protocol):
    def after(self, ms: int, func: Callable[..., Any], *args: Any) -> str: ...


def dispatch_to_ui(
    widget: _Schedulable,
    callback: Callable[..., None],
    *args: Any,
    is_alive: Callable[[], bool],
    logger: StructuredLogger,
) -> bool:
    """Run ``callback(*args)`` on the UI thread while ``is_alive()`` holds.

    Returns ``False`` when nothing was scheduled.
    """
    if not is_alive():
        return False

    def _run() -> None:
        if is_alive():
            callback(*args)

    try:
        widget.after(0, _run)
    except (RuntimeError, tk.TclError) as exc:
        logger.debug("View gone before dispatch: %s", exc)
        return False
    return True
