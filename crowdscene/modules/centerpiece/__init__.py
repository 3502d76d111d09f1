"""
#WHERE
    Imported by session.py, main.py and tests.

#WHAT
    Centerpiece Scale Solver: fits the fixed centerpiece model to the
    display height of the active presentation context (web or AR).

#INPUT
    Measured model height / vertices, PresentationContext.

#OUTPUT
    Scale factor and CenterpiecePlacement.
"""

from .scale import (
    AR,
    CONTEXTS,
    WEB,
    CenterpieceAsset,
    CenterpiecePlacement,
    PresentationContext,
    measure_height,
    place_centerpiece,
    solve_scale,
)

__all__ = [
    "AR",
    "CONTEXTS",
    "WEB",
    "CenterpieceAsset",
    "CenterpiecePlacement",
    "PresentationContext",
    "measure_height",
    "place_centerpiece",
    "solve_scale",
]
