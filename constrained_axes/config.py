from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping
import json
import math
import tomllib

from constrained_axes.alignment import anchors_for_letter
from constrained_axes.axis import Axis, PadCandidate, PlotArea
from constrained_axes.axis_ids import letter_of, name2id, normalize_axis_name
from constrained_axes.errors import AxisConfigError
from constrained_axes.layout import AxisLayout


_AXIS_TYPES = ("linear", "log")
_CONSTRAIN_MODES = ("range", "domain")


def load_layout(source: str | Path | Mapping[str, Any]) -> AxisLayout:
    if isinstance(source, Mapping):
        return layout_from_dict(source)
    path = Path(source)
    try:
        if path.suffix == ".toml":
            with path.open("rb") as fh:
                payload = tomllib.load(fh)
        else:
            payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise AxisConfigError(f"{path}: {exc}") from exc
    return layout_from_dict(payload)


def layout_from_dict(payload: Mapping[str, Any]) -> AxisLayout:
    if not isinstance(payload, Mapping):
        raise AxisConfigError("layout must be an object")
    layout = AxisLayout(plot_area=_parse_plot_area(payload.get("plot_area")))

    axes_raw = payload.get("axes")
    if not isinstance(axes_raw, Mapping) or not axes_raw:
        raise AxisConfigError("`axes` must be a non-empty object")
    for key, spec in axes_raw.items():
        name = normalize_axis_name(str(key))
        if name in layout.axes:
            raise AxisConfigError(f"axis `{name}` defined twice")
        layout.add_axis(_parse_axis(name, spec))

    groups_raw = payload.get("constraint_groups", [])
    if not isinstance(groups_raw, list):
        raise AxisConfigError("`constraint_groups` must be a list")
    seen: dict[str, int] = {}
    for index, group in enumerate(groups_raw):
        layout.constraint_groups.append(_parse_group(layout, group, index, seen))
    return layout


def dump_layout(layout: AxisLayout) -> dict[str, Any]:
    axes: dict[str, Any] = {}
    for name, axis in layout.axes.items():
        axes[name] = {
            "domain": list(axis.domain),
            "range": list(axis.range),
            "scale": axis.scale,
        }
    return {"axes": axes}


def _parse_plot_area(raw: Any) -> PlotArea:
    if not isinstance(raw, Mapping):
        raise AxisConfigError("`plot_area` must be an object with width and height")
    try:
        return PlotArea(
            width=float(raw["width"]),
            height=float(raw["height"]),
            left=float(raw.get("left", 0.0)),
            top=float(raw.get("top", 0.0)),
        )
    except KeyError as exc:
        raise AxisConfigError(f"plot_area missing {exc.args[0]}") from None
    except (TypeError, ValueError) as exc:
        raise AxisConfigError(f"invalid plot_area: {exc}") from None


def _parse_pair(raw: Any, label: str) -> tuple[float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise AxisConfigError(f"{label} must be a two-element list")
    try:
        a, b = float(raw[0]), float(raw[1])
    except (TypeError, ValueError):
        raise AxisConfigError(f"{label} must be numeric") from None
    if not (math.isfinite(a) and math.isfinite(b)):
        raise AxisConfigError(f"{label} must be finite")
    return (a, b)


def _parse_pads(raw: Any, label: str) -> list[PadCandidate]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise AxisConfigError(f"{label} must be a list")
    out: list[PadCandidate] = []
    for item in raw:
        if not isinstance(item, Mapping) or "val" not in item:
            raise AxisConfigError(f"{label} entries need a `val`")
        out.append(PadCandidate(val=float(item["val"]), pad=float(item.get("pad", 0.0))))
    return out


def _parse_axis(name: str, spec: Any) -> Axis:
    if not isinstance(spec, Mapping):
        raise AxisConfigError(f"{name}: axis must be an object")
    letter = letter_of(name)

    domain = _parse_pair(spec.get("domain", [0.0, 1.0]), f"{name}.domain")
    if not (0.0 <= domain[0] < domain[1] <= 1.0):
        raise AxisConfigError(f"{name}.domain must be increasing within [0, 1]")

    axis_type = spec.get("type", "linear")
    if axis_type not in _AXIS_TYPES:
        raise AxisConfigError(f"{name}.type must be one of {_AXIS_TYPES}")

    rng = _parse_pair(spec.get("range", [0.0, 1.0]), f"{name}.range")
    if rng[0] == rng[1]:
        raise AxisConfigError(f"{name}.range endpoints must differ")
    if axis_type == "log" and (rng[0] <= 0 or rng[1] <= 0):
        raise AxisConfigError(f"{name}.range must be positive on a log axis")

    constrain = spec.get("constrain", "range")
    if constrain not in _CONSTRAIN_MODES:
        raise AxisConfigError(f"{name}.constrain must be one of {_CONSTRAIN_MODES}")

    autorange = spec.get("autorange", False)
    if not isinstance(autorange, bool):
        raise AxisConfigError(f"{name}.autorange must be true or false")

    toward = spec.get("constraintoward")
    if toward is not None and toward not in anchors_for_letter(letter):
        raise AxisConfigError(f"{name}.constraintoward must be one of {anchors_for_letter(letter)}")

    return Axis(
        name=name,
        domain=domain,
        range=rng,
        type=axis_type,
        constrain=constrain,
        constraintoward=toward,
        autorange=autorange,
        min_pads=_parse_pads(spec.get("min_pads"), f"{name}.min_pads"),
        max_pads=_parse_pads(spec.get("max_pads"), f"{name}.max_pads"),
    )


def _parse_group(layout: AxisLayout, raw: Any, index: int, seen: dict[str, int]) -> dict[str, float]:
    if not isinstance(raw, Mapping):
        raise AxisConfigError(f"constraint_groups[{index}] must be an object")
    group: dict[str, float] = {}
    for key, weight in raw.items():
        name = normalize_axis_name(str(key))
        if name not in layout.axes:
            raise AxisConfigError(f"constraint_groups[{index}] names unknown axis `{key}`")
        if name in seen:
            raise AxisConfigError(f"axis `{name}` is in constraint groups {seen[name]} and {index}")
        try:
            value = float(weight)
        except (TypeError, ValueError):
            raise AxisConfigError(f"constraint_groups[{index}].{key} weight must be numeric") from None
        if not math.isfinite(value) or value <= 0:
            raise AxisConfigError(f"constraint_groups[{index}].{key} weight must be > 0")
        seen[name] = index
        group[name2id(name)] = value
    return group
