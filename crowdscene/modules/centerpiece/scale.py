"""
#WHERE
    Used by session.py (once per model load or plan change), main.py and tests.

#WHAT
    Fits the centerpiece model to a presentation context's display height.
    When the asset is missing or degenerate the caller gets identity scale
    and a placeholder column sized to the desired height instead.

#INPUT
    Measured bounding height (or raw vertices), PresentationContext.

#OUTPUT
    Uniform scale factor; CenterpiecePlacement for the renderer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from crowdscene.shared import constants as C

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PresentationContext:
    name: str
    desired_height: float          # metres
    asset: str = C.CENTERPIECE_ASSET
    marker_target: Optional[str] = None


WEB = PresentationContext("web", C.WEB_TOWER_HEIGHT)
AR  = PresentationContext("ar", C.AR_TOWER_HEIGHT, marker_target=C.MARKER_TARGET)

CONTEXTS = {ctx.name: ctx for ctx in (WEB, AR)}


@dataclass(slots=True, frozen=True)
class CenterpieceAsset:
    """What the external asset loader reports back."""
    ready: bool = False
    measured_height: float = 0.0


@dataclass(slots=True, frozen=True)
class CenterpiecePlacement:
    placeholder: bool
    scale: Tuple[float, float, float]
    color: Optional[str] = None
    metalness: Optional[float] = None
    roughness: Optional[float] = None


def solve_scale(measured_height: float, desired_height: float) -> float:
    """Uniform scale that makes a model *measured_height* tall appear *desired_height* tall."""
    if measured_height is None or not math.isfinite(measured_height) or measured_height <= 0:
        return 1.0
    return desired_height / measured_height


def measure_height(vertices) -> float:
    """Y extent of an (N, 3) vertex array; 0.0 for empty input."""
    v = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    if v.size == 0:
        return 0.0
    return float(np.ptp(v[:, 1]))


def place_centerpiece(
    asset: Optional[CenterpieceAsset],
    context: PresentationContext = WEB,
) -> CenterpiecePlacement:
    if asset is None or not asset.ready:
        log.info("Centerpiece '%s' unavailable — using placeholder (%.3f m)",
                 context.asset, context.desired_height)
        fp = C.PLACEHOLDER_FOOTPRINT
        return CenterpiecePlacement(
            placeholder=True,
            scale=(fp, context.desired_height, fp),
            color=C.PLACEHOLDER_COLOR, metalness=0.1, roughness=0.8,
        )

    s = solve_scale(asset.measured_height, context.desired_height)
    log.debug("Centerpiece scale %.4f (measured %.3f → %.3f m)",
              s, asset.measured_height, context.desired_height)
    return CenterpiecePlacement(placeholder=False, scale=(s, s, s))
