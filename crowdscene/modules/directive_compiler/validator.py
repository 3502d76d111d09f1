"""
#WHERE
    Called by session.py and main.py through compile_and_validate(), and
    directly by anything that receives a plan from an external planner.

#WHAT
    Admission gate for scene plans.  Fills missing fields with defaults,
    coerces junk to defaults and clamps every numeric field into its safe
    range, so no plan source can request unbounded instance counts or
    degenerate geometry.

#INPUT
    ScenePlan from any source (rules compiler, external planner payload).

#OUTPUT
    New, non-empty ScenePlan whose every ObjectSpec is fully populated
    and in range.  The input plan is never mutated.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Optional

from crowdscene.shared import constants as C
from crowdscene.shared.vocabulary import (
    DEFAULT_ENTRY, MaterialKind, Motion, Shape,
    get_material_by_name, get_motion_by_name, get_shape_by_name,
)
from .compiler import compile_directive
from .models import ObjectSpec, ScenePlan

log = logging.getLogger(__name__)


def _finite(value: Any, default: float) -> float:
    """*value* as a finite float, or *default* for None/NaN/inf/non-numeric."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _clamp(value: Any, default: float, bounds: tuple[float, float]) -> float:
    lo, hi = bounds
    return min(max(_finite(value, default), lo), hi)


def _clamp_count(value: Any) -> int:
    lo, hi = C.COUNT_RANGE
    # ints are clamped exactly; float() overflows past ~1e308
    if isinstance(value, int) and not isinstance(value, bool):
        return min(max(value, lo), hi)
    return int(min(max(int(_finite(value, C.DEFAULT_COUNT)), lo), hi))


def _resolve_shape(value: Any) -> Optional[Shape]:
    if isinstance(value, Shape):
        return value
    return get_shape_by_name(value) if value is not None else None


def _resolve_material(value: Any) -> MaterialKind:
    if isinstance(value, MaterialKind):
        return value
    found = get_material_by_name(value) if value is not None else None
    return found or MaterialKind(C.DEFAULT_MATERIAL)


def _resolve_motion(value: Any) -> Motion:
    if isinstance(value, Motion):
        return value
    found = get_motion_by_name(value) if value is not None else None
    return found or Motion(C.DEFAULT_MOTION)


def validate_spec(spec: ObjectSpec) -> Optional[ObjectSpec]:
    """Return a fully populated, clamped copy of *spec*, or None if its shape is unknown."""
    shape = _resolve_shape(spec.shape)
    if shape is None:
        log.warning("Dropping plan entry with unknown shape %r", spec.shape)
        return None

    color = spec.color if isinstance(spec.color, str) and spec.color.strip() else C.DEFAULT_COLOR
    validated = ObjectSpec(
        shape=shape,
        count=_clamp_count(spec.count),
        color=color.strip(),
        material=_resolve_material(spec.material),
        size=_clamp(spec.size, C.DEFAULT_SIZE, C.SIZE_RANGE),
        metalness=_clamp(spec.metalness, C.DEFAULT_METALNESS, C.METALNESS_RANGE),
        roughness=_clamp(spec.roughness, C.DEFAULT_ROUGHNESS, C.ROUGHNESS_RANGE),
        motion=_resolve_motion(spec.motion),
        radius=_clamp(spec.radius, C.DEFAULT_RADIUS, C.RADIUS_RANGE),
    )
    if validated != spec:
        log.debug("Validated %s entry: %s -> %s", shape.value, spec, validated)
    return validated


def validate_plan(plan: ScenePlan) -> ScenePlan:
    """Admit *plan*: every entry populated and clamped, never empty."""
    objects: List[ObjectSpec] = []
    for spec in plan.objects:
        validated = validate_spec(spec)
        if validated is not None:
            objects.append(validated)

    if not objects:
        log.info("Plan has no usable entries — substituting default entry")
        objects.append(ObjectSpec(**DEFAULT_ENTRY))
    return ScenePlan(objects=tuple(objects))


def compile_and_validate(
    text: str,
    planner: Callable[[str], ScenePlan] = compile_directive,
) -> ScenePlan:
    """Directive text → admitted ScenePlan.

    *planner* is the replaceable first stage (rules compiler by default, or
    an ExternalPlanner); validation always runs after it.
    """
    return validate_plan(planner(text))
