from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence
import logging
import math

import numpy as np

from constrained_axes.alignment import anchor_fraction
from constrained_axes.axis import Axis, PadCandidate, PlotArea, ShrinkState
from constrained_axes.layout import AxisLayout, ConstraintGroup
from constrained_axes.numerical import ALMOST_EQUAL
from constrained_axes.scale_zoom import scale_zoom


LOGGER = logging.getLogger(__name__)


class DomainRegime(Enum):
    RANGE_ONLY = "range_only"
    DOMAIN_ONLY = "domain_only"
    DOMAIN_WITH_REPAIR = "domain_with_repair"


@dataclass(frozen=True)
class RegimeDecision:
    regime: DomainRegime
    factor: float
    restore_range: bool = False


def choose_domain_regime(
    factor: float,
    *,
    domain_shrunk: float,
    range_shrunk: float,
    autorange: bool,
) -> RegimeDecision:
    """Decide how a ``constrain="domain"`` axis absorbs a scale ``factor``.

    ``domain_shrunk`` and ``range_shrunk`` are the current widths relative to
    the pass snapshots. A factor the domain cannot deliver on its own (the
    range was zoomed in further than the domain can compensate) falls back to
    a range zoom from the full input domain.
    """
    factor /= domain_shrunk
    if factor * range_shrunk < 1:
        return RegimeDecision(DomainRegime.RANGE_ONLY, factor)

    restore = range_shrunk < 1
    if restore:
        factor *= range_shrunk
    regime = DomainRegime.DOMAIN_WITH_REPAIR if autorange else DomainRegime.DOMAIN_ONLY
    return RegimeDecision(regime, factor, restore_range=restore)


def update_domain(axis: Axis, factor: float) -> None:
    """Shrink (``factor > 1``) or grow the input domain toward its anchor."""
    axis.capture_inputs()
    assert axis.input_domain is not None
    d0, d1 = axis.input_domain
    center = d0 + (d1 - d0) * anchor_fraction(axis.constraintoward or "center")
    axis.set_domain((center + (d0 - center) / factor, center + (d1 - center) / factor))


def repair_autorange_padding(axis: Axis, factor: float, area: PlotArea) -> float:
    """Re-fit autorange padding to the scale the domain resize will produce.

    Returns ``factor`` corrected for however much the range widened. This is
    a single correction step: very uneven padding on the two ends can leave
    the range a little off-center compared to a continuous recalculation.
    """
    l0, l1 = axis.linear_range()
    range_min = min(l0, l1)
    range_max = max(l0, l1)
    center = (range_min + range_max) / 2
    half_range = range_max - center
    # Padding that would need more than the whole shrunk span is unreachable.
    outer_min = center - half_range * factor
    outer_max = center + half_range * factor

    update_domain(axis, factor)
    axis.set_scale(area)
    m = abs(axis.scale)

    range_min = _widen_bound(axis.min_pads, m, range_min, outer_min, sign=-1.0)
    range_max = _widen_bound(axis.max_pads, m, range_max, outer_max, sign=1.0)

    if l0 < l1:
        axis.set_range((axis.l2r(range_min), axis.l2r(range_max)))
    else:
        axis.set_range((axis.l2r(range_max), axis.l2r(range_min)))

    domain_expand = (range_max - range_min) / (2 * half_range)
    return factor / domain_expand


def _widen_bound(
    candidates: Sequence[PadCandidate],
    m: float,
    bound: float,
    outer: float,
    *,
    sign: float,
) -> float:
    if not candidates:
        return bound
    vals = np.asarray([c.val for c in candidates], dtype=np.float64)
    pads = np.asarray([c.pad for c in candidates], dtype=np.float64)
    implied = vals + sign * pads / m
    if sign < 0:
        usable = implied[(implied > outer) & (implied < bound)]
        return float(np.min(usable)) if usable.size else bound
    usable = implied[(implied < outer) & (implied > bound)]
    return float(np.max(usable)) if usable.size else bound


def enforce_axis_constraints(layout: AxisLayout, groups: Sequence[ConstraintGroup] | None = None) -> None:
    """Bring every constraint group to a common normalized scale.

    Axes are mutated in place. Input snapshots are taken on first use and
    kept until ``layout.start_pass()``; calling this twice in a row is a
    no-op the second time.
    """
    for index, group in enumerate(layout.constraint_groups if groups is None else groups):
        _enforce_group(layout, group, index)


def _enforce_group(layout: AxisLayout, group: ConstraintGroup, index: int) -> None:
    area = layout.plot_area
    min_scale = math.inf
    max_scale = 0.0
    # Usually equals min_scale. Axes an autorange step just shrank are left
    # out, since their current scale is provisional.
    match_scale = math.inf
    norm_scales: dict[str, float] = {}
    axes: dict[str, Axis] = {}

    for axis_id, weight in group.items():
        axis = layout.get_axis(axis_id)
        axes[axis_id] = axis
        axis.capture_inputs()
        axis.set_scale(area)

        # abs: inverted axes satisfy the constraint too
        norm = abs(axis.scale) / weight
        norm_scales[axis_id] = norm
        min_scale = min(min_scale, norm)
        max_scale = max(max_scale, norm)
        if axis.consume_shrink_state() is ShrinkState.FRESH:
            match_scale = min(match_scale, norm)

    if min_scale > ALMOST_EQUAL * max_scale:
        LOGGER.debug("constraint group %d satisfied (scale %.6g)", index, max_scale)
        return

    if math.isinf(match_scale):
        LOGGER.warning("constraint group %d has only provisionally shrunk axes; matching smallest scale", index)
        match_scale = min_scale

    LOGGER.debug(
        "constraint group %d: scales %.6g..%.6g, matching %.6g",
        index,
        min_scale,
        max_scale,
        match_scale,
    )

    for axis_id, axis in axes.items():
        norm = norm_scales[axis_id]
        # domain axes are always redone in case constraintoward changed
        if norm == match_scale and axis.constrain != "domain":
            continue
        factor = norm / match_scale
        if axis.constrain == "range":
            LOGGER.debug("%s: range zoom by %.6g", axis.name, factor)
            scale_zoom(axis, factor)
        else:
            _constrain_domain(axis, factor, area)
        axis.set_scale(area)


def _constrain_domain(axis: Axis, factor: float, area: PlotArea) -> None:
    assert axis.input_domain is not None and axis.input_range is not None
    in_d0, in_d1 = axis.input_domain
    d0, d1 = axis.domain
    domain_shrunk = (d1 - d0) / (in_d1 - in_d0)

    l0, l1 = axis.linear_range()
    in_l0 = axis.r2l(axis.input_range[0])
    in_l1 = axis.r2l(axis.input_range[1])
    range_shrunk = (l1 - l0) / (in_l1 - in_l0)

    decision = choose_domain_regime(
        factor,
        domain_shrunk=domain_shrunk,
        range_shrunk=range_shrunk,
        autorange=axis.autorange,
    )
    LOGGER.debug(
        "%s: %s with factor %.6g (domain x%.6g, range x%.6g)",
        axis.name,
        decision.regime.value,
        decision.factor,
        domain_shrunk,
        range_shrunk,
    )

    if decision.regime is DomainRegime.RANGE_ONLY:
        axis.set_domain(axis.input_domain)
        scale_zoom(axis, decision.factor)
        return

    if decision.restore_range:
        axis.set_range(axis.input_range)

    factor = decision.factor
    if decision.regime is DomainRegime.DOMAIN_WITH_REPAIR:
        factor = repair_autorange_padding(axis, factor, area)
    update_domain(axis, factor)
