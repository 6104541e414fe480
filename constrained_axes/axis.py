from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Sequence

import math

from constrained_axes.alignment import default_anchor
from constrained_axes.axis_ids import letter_of
from constrained_axes.errors import AxisScaleError


AxisType = Literal["linear", "log"]
ConstrainMode = Literal["range", "domain"]


@dataclass(frozen=True)
class PlotArea:
    width: float
    height: float
    left: float = 0.0
    top: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("plot area width/height must be > 0")


@dataclass(frozen=True)
class PadCandidate:
    """A data value (linearized units) that needs ``pad`` pixels of clearance."""

    val: float
    pad: float = 0.0


@dataclass
class AxisInput:
    """User-facing echo of the last domain/range the layout applied."""

    domain: tuple[float, float]
    range: tuple[float, float]


class ShrinkState(Enum):
    FRESH = "fresh"
    PROVISIONAL = "provisional"


@dataclass
class Axis:
    name: str
    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)
    type: AxisType = "linear"
    constrain: ConstrainMode = "range"
    constraintoward: str | None = None
    autorange: bool = False
    min_pads: Sequence[PadCandidate] = field(default_factory=list)
    max_pads: Sequence[PadCandidate] = field(default_factory=list)
    shrink_state: ShrinkState = ShrinkState.FRESH

    input_domain: tuple[float, float] | None = None
    input_range: tuple[float, float] | None = None
    user_input: AxisInput | None = None

    _offset: float = 0.0
    _length: float = 0.0
    _m: float = 0.0
    _b: float = 0.0

    def __post_init__(self) -> None:
        self.domain = (float(self.domain[0]), float(self.domain[1]))
        self.range = (float(self.range[0]), float(self.range[1]))
        if self.constraintoward is None:
            self.constraintoward = default_anchor(self.letter)
        if self.user_input is None:
            self.user_input = AxisInput(domain=self.domain, range=self.range)

    @property
    def letter(self) -> str:
        return letter_of(self.name)

    @property
    def scale(self) -> float:
        return self._m

    def r2l(self, value: float) -> float:
        if self.type == "log":
            return math.log10(value) if value > 0 else math.nan
        return float(value)

    def l2r(self, value: float) -> float:
        if self.type == "log":
            return 10.0**value
        return float(value)

    def linear_range(self) -> tuple[float, float]:
        return (self.r2l(self.range[0]), self.r2l(self.range[1]))

    def l2p(self, value: float) -> float:
        return self._b + value * self._m

    def p2l(self, px: float) -> float:
        return (px - self._b) / self._m

    def set_domain(self, domain: tuple[float, float]) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        assert self.user_input is not None
        self.user_input.domain = self.domain

    def set_range(self, rng: tuple[float, float]) -> None:
        self.range = (float(rng[0]), float(rng[1]))
        assert self.user_input is not None
        self.user_input.range = self.range

    def capture_inputs(self) -> None:
        # Snapshots live for one layout pass; see AxisLayout.start_pass.
        if self.input_domain is None:
            self.input_domain = self.domain
        if self.input_range is None:
            self.input_range = self.range

    def clear_inputs(self) -> None:
        self.input_domain = None
        self.input_range = None

    def consume_shrink_state(self) -> ShrinkState:
        state = self.shrink_state
        self.shrink_state = ShrinkState.FRESH
        return state

    def set_scale(self, area: PlotArea) -> None:
        l0, l1 = self.linear_range()
        d0, d1 = self.domain
        if self.letter == "y":
            self._offset = area.top + (1.0 - d1) * area.height
            self._length = area.height * (d1 - d0)
            span = l0 - l1
            anchor = l1
        else:
            self._offset = area.left + d0 * area.width
            self._length = area.width * (d1 - d0)
            span = l1 - l0
            anchor = l0
        if span == 0 or not math.isfinite(span):
            raise AxisScaleError(f"{self.name}: degenerate range {self.range}")
        self._m = self._length / span
        self._b = -self._m * anchor
        if not math.isfinite(self._m) or not math.isfinite(self._b):
            raise AxisScaleError(f"{self.name}: non-finite scale for domain {self.domain} range {self.range}")
