from __future__ import annotations

import re

from constrained_axes.errors import AxisConfigError


_ID_RE = re.compile(r"^([xy])([2-9]|[1-9][0-9]+)?$")
_NAME_RE = re.compile(r"^([xy])axis([2-9]|[1-9][0-9]+)?$")


def is_axis_id(value: str) -> bool:
    return isinstance(value, str) and _ID_RE.match(value) is not None


def is_axis_name(value: str) -> bool:
    return isinstance(value, str) and _NAME_RE.match(value) is not None


def id2name(axis_id: str) -> str:
    """``"x2"`` -> ``"xaxis2"``."""
    m = _ID_RE.match(axis_id) if isinstance(axis_id, str) else None
    if m is None:
        raise AxisConfigError(f"invalid axis id: {axis_id!r}")
    letter, num = m.groups()
    return f"{letter}axis{num or ''}"


def name2id(axis_name: str) -> str:
    """``"yaxis3"`` -> ``"y3"``."""
    m = _NAME_RE.match(axis_name) if isinstance(axis_name, str) else None
    if m is None:
        raise AxisConfigError(f"invalid axis name: {axis_name!r}")
    letter, num = m.groups()
    return f"{letter}{num or ''}"


def normalize_axis_name(key: str) -> str:
    """Accept either an id or a full name and return the full name."""
    if is_axis_name(key):
        return key
    return id2name(key)


def letter_of(axis_name_or_id: str) -> str:
    return axis_name_or_id[0]
