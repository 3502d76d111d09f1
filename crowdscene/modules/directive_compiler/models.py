"""
#WHERE
    Used by compiler.py, validator.py, payload.py, descriptors.py, the
    layout generator, session.py and tests.

#WHAT
    Plan data model: one ObjectSpec per decorative-object category and the
    ordered, immutable ScenePlan that carries them.

#INPUT
    Shape / material / motion enums and numeric parameters.

#OUTPUT
    ObjectSpec and ScenePlan dataclass instances; JSON-compatible dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from crowdscene.shared.vocabulary import MaterialKind, Motion, Shape


@dataclass(slots=True, frozen=True)
class ObjectSpec:
    """One category of decorative object.

    Optional fields are ``None`` until the validator fills them in; only a
    validated spec is guaranteed to have every field set and in range.
    Specs built by plan_from_payload() may still carry the payload's raw
    values until validate_plan() coerces them.
    """
    shape: Shape
    count: int
    color: Optional[str]              = None
    material: Optional[MaterialKind]  = None
    size: Optional[float]             = None
    metalness: Optional[float]        = None
    roughness: Optional[float]        = None
    motion: Optional[Motion]          = None
    radius: Optional[float]           = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shape": self.shape.value,
            "count": self.count,
            "color": self.color,
            "material": self.material.value if self.material else None,
            "size": self.size,
            "metalness": self.metalness,
            "roughness": self.roughness,
            "motion": self.motion.value if self.motion else None,
            "radius": self.radius,
        }


@dataclass(slots=True, frozen=True)
class ScenePlan:
    """Ordered sequence of ObjectSpec. Order fixes seed assignment."""
    objects: Tuple[ObjectSpec, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    @property
    def total_instances(self) -> int:
        return sum(int(o.count) for o in self.objects)

    def to_dict(self) -> Dict[str, Any]:
        return {"objects": [o.to_dict() for o in self.objects]}
