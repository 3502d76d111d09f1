"""
#WHERE
    Imported by shared/__init__.py → re-exported to the directive compiler,
    validator, payload bridge, mesh descriptors and tests.

#WHAT
    Single source of truth for shape categories, their directive keywords,
    implicit counts, per-shape defaults and keyword override tables, plus the
    material and motion vocabularies.

#INPUT
    None (constant registries).

#OUTPUT
    SHAPES dict; Shape/MaterialKind/Motion enums; ShapeDefinition and
    KeywordRule dataclasses; lookup helpers.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Optional


class Shape(Enum):
    SPHERE      = "sphere"
    BOX         = "box"
    TORUS       = "torus"
    ICOSAHEDRON = "icosahedron"


class MaterialKind(Enum):
    STANDARD = "standard"
    BASIC    = "basic"
    TOON     = "toon"


class Motion(Enum):
    ORBIT = "orbit"
    FLOAT = "float"
    NONE  = "none"


@dataclass(slots=True, frozen=True)
class KeywordRule:
    """If *keyword* occurs in the directive, the field takes *value*."""
    keyword: str
    value: Any


@dataclass(slots=True)
class ShapeDefinition:
    """Single shape entry: how to spot it in a directive and what it looks like."""
    shape: Shape
    stem: str                                   # presence keyword
    count_keywords: list[str]                   # "<n> <kw>" forms
    implicit_count: int
    defaults: dict[str, Any]                    = field(default_factory=dict)
    overrides: dict[str, list[KeywordRule]]     = field(default_factory=dict)

    def resolve(self, field_name: str, text: str) -> Any:
        """First override whose keyword occurs in *text*, else the default."""
        for rule in self.overrides.get(field_name, ()):
            if rule.keyword in text:
                return rule.value
        return self.defaults[field_name]


# Iteration order is the plan order.
SHAPES: dict[Shape, ShapeDefinition] = {
    Shape.SPHERE: ShapeDefinition(
        Shape.SPHERE, "sphere", ["spheres", "sphere"], 5,
        defaults={
            "color": "#9cf", "material": MaterialKind.STANDARD,
            "metalness": 0.2, "roughness": 0.6, "motion": Motion.NONE,
            "size": 0.06, "radius": 1.2,
        },
        overrides={
            "color":     [KeywordRule("red", "tomato"), KeywordRule("blue", "skyblue")],
            "metalness": [KeywordRule("metal", 0.9)],
            "roughness": [KeywordRule("metal", 0.1)],
            "motion":    [KeywordRule("orbit", Motion.ORBIT), KeywordRule("float", Motion.FLOAT)],
            "radius":    [KeywordRule("close", 0.5)],
        },
    ),
    Shape.BOX: ShapeDefinition(
        Shape.BOX, "box", ["boxes", "box"], 10,
        defaults={
            "color": "#ff9", "material": MaterialKind.STANDARD,
            "metalness": 0.1, "roughness": 0.8, "motion": Motion.ORBIT,
            "size": 0.08, "radius": 1.0,
        },
        overrides={
            "color":    [KeywordRule("blue", "deepskyblue")],
            "material": [KeywordRule("toon", MaterialKind.TOON)],
            "motion":   [KeywordRule("float", Motion.FLOAT)],
        },
    ),
    Shape.TORUS: ShapeDefinition(
        Shape.TORUS, "torus", ["torus", "tori"], 3,
        defaults={
            "color": "#faf", "material": MaterialKind.STANDARD,
            "metalness": 0.5, "roughness": 0.5, "motion": Motion.ORBIT,
            "size": 0.12, "radius": 1.4,
        },
        overrides={
            "color":     [KeywordRule("gold", "#d4af37")],
            "metalness": [KeywordRule("gold", 1.0)],
            "roughness": [KeywordRule("gold", 0.2)],
        },
    ),
    Shape.ICOSAHEDRON: ShapeDefinition(
        Shape.ICOSAHEDRON, "icosa", ["icosahedrons", "icosahedron", "icosahedra", "icosa"], 6,
        defaults={
            "color": "#aaf", "material": MaterialKind.STANDARD,
            "metalness": 0.2, "roughness": 0.7, "motion": Motion.FLOAT,
            "size": 0.09, "radius": 0.9,
        },
    ),
}


# Substituted when a directive names no known shape.
DEFAULT_ENTRY: dict[str, Any] = {
    "shape": Shape.SPHERE, "count": 10, "color": "#9cf",
    "material": MaterialKind.STANDARD, "metalness": 0.2, "roughness": 0.7,
    "motion": Motion.ORBIT, "size": 0.06, "radius": 1.2,
}


SHAPE_ALIASES: dict[str, Shape] = {
    "sphere": Shape.SPHERE, "ball": Shape.SPHERE,
    "box": Shape.BOX, "cube": Shape.BOX,
    "torus": Shape.TORUS, "ring": Shape.TORUS,
    "icosahedron": Shape.ICOSAHEDRON, "icosa": Shape.ICOSAHEDRON,
}


def get_shape_by_name(name: str) -> Optional[Shape]:
    """Resolve a shape name or alias (case-insensitive)."""
    return SHAPE_ALIASES.get(str(name).strip().lower())


def get_material_by_name(name: str) -> Optional[MaterialKind]:
    kw = str(name).strip().lower()
    return next((m for m in MaterialKind if m.value == kw), None)


def get_motion_by_name(name: str) -> Optional[Motion]:
    kw = str(name).strip().lower()
    return next((m for m in Motion if m.value == kw), None)


def get_shape_names() -> list[str]:
    return [s.value for s in SHAPES]
