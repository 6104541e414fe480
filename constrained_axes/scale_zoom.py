from __future__ import annotations

from constrained_axes.axis import Axis


def scale_zoom(axis: Axis, factor: float, center_fraction: float = 0.5) -> None:
    """Multiply the linearized span of ``axis.range`` by ``factor``.

    The point at ``center_fraction`` of the current range stays put, so
    ``factor > 1`` zooms out and divides ``|scale|`` by ``factor`` once the
    scale is recomputed. The domain is untouched.
    """
    l0, l1 = axis.linear_range()
    center = l0 + (l1 - l0) * center_fraction
    axis.set_range(
        (
            axis.l2r(center + (l0 - center) * factor),
            axis.l2r(center + (l1 - center) * factor),
        )
    )
