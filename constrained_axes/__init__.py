from constrained_axes.axis import Axis, AxisInput, PadCandidate, PlotArea, ShrinkState
from constrained_axes.config import dump_layout, load_layout
from constrained_axes.constraints import (
    DomainRegime,
    RegimeDecision,
    choose_domain_regime,
    enforce_axis_constraints,
    update_domain,
)
from constrained_axes.errors import AxisConfigError, AxisScaleError
from constrained_axes.layout import AxisLayout
from constrained_axes.scale_zoom import scale_zoom

__all__ = [
    "Axis",
    "AxisConfigError",
    "AxisInput",
    "AxisLayout",
    "AxisScaleError",
    "DomainRegime",
    "PadCandidate",
    "PlotArea",
    "RegimeDecision",
    "ShrinkState",
    "choose_domain_regime",
    "dump_layout",
    "enforce_axis_constraints",
    "load_layout",
    "scale_zoom",
    "update_domain",
]
