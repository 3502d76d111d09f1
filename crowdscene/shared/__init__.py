"""
#WHERE
    Imported by every crowdscene module and by tests.

#WHAT
    Shared vocabulary (shapes, materials, motions, keyword tables).

#INPUT
    None (constant registries).

#OUTPUT
    SHAPES registry, enums, DEFAULT_ENTRY, lookup helpers.
"""

from .vocabulary import (
    # Categories
    SHAPES,
    Shape,
    ShapeDefinition,
    KeywordRule,
    DEFAULT_ENTRY,
    SHAPE_ALIASES,
    get_shape_by_name,
    get_shape_names,

    # Surface / animation
    MaterialKind,
    Motion,
    get_material_by_name,
    get_motion_by_name,
)

__all__ = [
    "SHAPES",
    "Shape",
    "ShapeDefinition",
    "KeywordRule",
    "DEFAULT_ENTRY",
    "SHAPE_ALIASES",
    "get_shape_by_name",
    "get_shape_names",
    "MaterialKind",
    "Motion",
    "get_material_by_name",
    "get_motion_by_name",
]
