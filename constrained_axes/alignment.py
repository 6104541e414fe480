from __future__ import annotations

from constrained_axes.errors import AxisConfigError


# Fractional position along an axis, measured from the bottom/left edge.
FROM_BL: dict[str, float] = {
    "left": 0.0,
    "center": 0.5,
    "right": 1.0,
    "bottom": 0.0,
    "middle": 0.5,
    "top": 1.0,
}

# Same anchors measured from the top/left, for pixel-space callers.
FROM_TL: dict[str, float] = {
    "left": 0.0,
    "center": 0.5,
    "right": 1.0,
    "bottom": 1.0,
    "middle": 0.5,
    "top": 0.0,
}

X_ANCHORS = ("left", "center", "right")
Y_ANCHORS = ("bottom", "middle", "top")


def anchor_fraction(name: str) -> float:
    try:
        return FROM_BL[name]
    except KeyError:
        raise AxisConfigError(f"unknown anchor: {name!r}") from None


def anchors_for_letter(letter: str) -> tuple[str, ...]:
    if letter == "x":
        return X_ANCHORS
    if letter == "y":
        return Y_ANCHORS
    raise AxisConfigError(f"unknown axis letter: {letter!r}")


def default_anchor(letter: str) -> str:
    return "center" if letter == "x" else "middle"
