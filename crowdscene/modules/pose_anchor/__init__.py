"""AR pose anchoring: tracked marker plane → scene ground plane."""

from .anchor import (
    GROUND_PLANE_ROTATION,
    AnchorPose,
    PoseAnchor,
    anchor_points,
    ground_plane_transform,
)

__all__ = [
    "GROUND_PLANE_ROTATION",
    "AnchorPose",
    "PoseAnchor",
    "anchor_points",
    "ground_plane_transform",
]
