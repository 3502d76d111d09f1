"""
#WHERE
    Used by session.py (once per published plan entry), motion_evaluator
    (initial frame states) and tests.

#WHAT
    Procedural instance layout.  Each instance of a plan entry gets a fixed
    angle offset, base height, speed factor and jittered radius that are
    pure functions of (instance index, seed); re-deriving a layout for the
    same entry is idempotent, and the per-entry seed makes different entries
    interleave around the centerpiece instead of stacking.

#INPUT
    Validated ObjectSpec, integer seed (entry_seed(entry_index)).

#OUTPUT
    Tuple of InstanceLayout, one per instance (length == spec.count).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from crowdscene.shared import constants as C
from crowdscene.modules.directive_compiler.models import ObjectSpec, ScenePlan

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class InstanceLayout:
    index: int
    angle_offset: float       # radians
    base_height: float        # metres
    speed_factor: float
    effective_radius: float   # metres

    def nominal_position(self) -> Tuple[float, float, float]:
        """Resting point on the layout circle at the instance's own angle."""
        return (
            float(np.cos(self.angle_offset) * self.effective_radius),
            self.base_height,
            float(np.sin(self.angle_offset) * self.effective_radius),
        )


LayoutKey = Tuple[int, float, int]


def entry_seed(entry_index: int) -> int:
    """Seed assigned to the plan entry at *entry_index*."""
    return entry_index * C.SEED_STRIDE + C.SEED_OFFSET


def layout_key(spec: ObjectSpec, seed: int) -> LayoutKey:
    """Everything a layout depends on; equal keys mean the layout can be reused."""
    return (int(spec.count), float(spec.radius if spec.radius is not None else C.DEFAULT_RADIUS), int(seed))


def pseudo_random_unit(index, seed: int):
    """Deterministic hash of (index, seed) in [-1, 1]. Accepts scalars or arrays."""
    return np.sin(np.asarray(index, dtype=np.float64) * C.HASH_FREQUENCY + seed)


def generate_layout(spec: ObjectSpec, seed: int) -> Tuple[InstanceLayout, ...]:
    count = int(spec.count)
    if count <= 0:
        log.warning("generate_layout called with count=%d — no instances", count)
        return ()

    # The validator already floors radius; floor again for plans that bypassed it.
    radius = max(
        float(spec.radius if spec.radius is not None else C.DEFAULT_RADIUS),
        C.RADIUS_RANGE[0],
    )

    idx = np.arange(count)
    angles = ((idx + seed) / count) * 2.0 * np.pi
    heights = (pseudo_random_unit(idx, seed) * 0.5 + 0.5) * C.HEIGHT_SPAN + C.HEIGHT_FLOOR
    speeds = C.SPEED_BASE + (idx % C.SPEED_PERIOD) * C.SPEED_STEP
    radii = radius * (C.RADIUS_JITTER_BASE + (idx % C.RADIUS_JITTER_PERIOD) * C.RADIUS_JITTER_STEP)

    return tuple(
        InstanceLayout(
            index=int(i),
            angle_offset=float(angles[i]),
            base_height=float(heights[i]),
            speed_factor=float(speeds[i]),
            effective_radius=float(radii[i]),
        )
        for i in range(count)
    )


def generate_plan_layouts(plan: ScenePlan) -> Tuple[Tuple[InstanceLayout, ...], ...]:
    """One layout tuple per plan entry, seeded by entry position."""
    return tuple(
        generate_layout(spec, entry_seed(i)) for i, spec in enumerate(plan.objects)
    )
