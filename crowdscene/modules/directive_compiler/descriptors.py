"""Renderer-facing mesh descriptors.

The renderer is external; it builds one mesh per instance from the
geometry and material arguments described here, so the shape → geometry
mapping stays next to the plan vocabulary instead of inside each renderer.

Geometry argument conventions (three.js-style constructors):
    box          [width, height, depth]
    sphere       [radius, width_segments, height_segments]
    torus        [radius, tube, radial_segments, tubular_segments]
    icosahedron  [radius, detail]
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from crowdscene.shared.vocabulary import MaterialKind, Shape
from .models import ObjectSpec


@dataclass(slots=True, frozen=True)
class MeshDescriptor:
    geometry: str
    geometry_args: Tuple[float, ...]
    material: str
    material_props: Dict[str, Any] = field(default_factory=dict)
    cast_shadow: bool = True
    receive_shadow: bool = True


def geometry_args(shape: Shape, size: float) -> Tuple[float, ...]:
    if shape is Shape.BOX:
        return (size, size, size)
    if shape is Shape.TORUS:
        return (size * 0.6, size * 0.25, 16, 64)
    if shape is Shape.ICOSAHEDRON:
        return (size, 0)
    return (size * 0.5, 32, 32)


def describe_mesh(spec: ObjectSpec) -> MeshDescriptor:
    """Mesh arguments for one instance of a *validated* spec."""
    props: Dict[str, Any] = {"color": spec.color}
    # basic materials are unlit and ignore PBR terms
    if spec.material is not MaterialKind.BASIC:
        props["metalness"] = spec.metalness
        props["roughness"] = spec.roughness
    return MeshDescriptor(
        geometry=spec.shape.value,
        geometry_args=geometry_args(spec.shape, spec.size),
        material=spec.material.value,
        material_props=props,
    )
