from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np

from constrained_axes.axis import Axis, PlotArea, ShrinkState
from constrained_axes.axis_ids import normalize_axis_name
from constrained_axes.numerical import ALMOST_EQUAL


ConstraintGroup = Mapping[str, float]


@dataclass
class AxisLayout:
    """Axis records for one figure plus the groups that tie their scales."""

    plot_area: PlotArea
    axes: dict[str, Axis] = field(default_factory=dict)
    constraint_groups: list[ConstraintGroup] = field(default_factory=list)

    def add_axis(self, axis: Axis) -> Axis:
        self.axes[axis.name] = axis
        return axis

    def get_axis(self, axis_id: str) -> Axis:
        return self.axes[normalize_axis_name(axis_id)]

    def start_pass(self) -> None:
        """Begin a new layout pass: the next enforcement re-snapshots inputs."""
        for axis in self.axes.values():
            axis.clear_inputs()

    def mark_provisionally_shrunk(self, axis_id: str) -> None:
        self.get_axis(axis_id).shrink_state = ShrinkState.PROVISIONAL

    def constraint_residuals(self, groups: Sequence[ConstraintGroup] | None = None) -> list[float]:
        """Ratio of largest to smallest normalized scale, per group.

        1.0 means the group is exactly satisfied. Groups with fewer than two
        members always report 1.0.
        """
        out: list[float] = []
        for group in self.constraint_groups if groups is None else groups:
            if len(group) < 2:
                out.append(1.0)
                continue
            scales = []
            for axis_id, weight in group.items():
                axis = self.get_axis(axis_id)
                axis.set_scale(self.plot_area)
                scales.append(abs(axis.scale) / float(weight))
            arr = np.asarray(scales, dtype=np.float64)
            out.append(float(np.max(arr) / np.min(arr)))
        return out

    def is_satisfied(self, groups: Sequence[ConstraintGroup] | None = None) -> bool:
        return all(r * ALMOST_EQUAL < 1.0 for r in self.constraint_residuals(groups))
