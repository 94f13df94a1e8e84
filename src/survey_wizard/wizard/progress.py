from __future__ import annotations

import math
from typing import Any


EMPTY_DISPLAY = "—"


def calc_progress(index: int, total: int) -> int:
    """Percentage of the survey reached when standing on ``index``.

    Rounds half up like the browser's ``Math.round``; Python's ``round``
    would send 12.5 to 12.
    """
    return int(math.floor((index + 1) / total * 100 + 0.5))


def display_value(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_DISPLAY
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
