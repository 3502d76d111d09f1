"""
#WHERE
    Imported by session.py, main.py and tests.

#WHAT
    Directive Compiler: turns free-form directive text into a validated
    ScenePlan.  Two stages: a replaceable planner (rules compiler or an
    external JSON backend) followed by the mandatory validation gate.

#INPUT
    Directive text, or an external plan payload.

#OUTPUT
    ScenePlan of ObjectSpec entries; MeshDescriptor per entry for renderers.
"""

from .models import ObjectSpec, ScenePlan
from .compiler import DirectiveCompiler, compile_directive
from .validator import compile_and_validate, validate_plan, validate_spec
from .payload import ExternalPlanner, PlanPayloadError, plan_from_payload
from .descriptors import MeshDescriptor, describe_mesh

__all__ = [
    "ObjectSpec",
    "ScenePlan",
    "DirectiveCompiler",
    "compile_directive",
    "compile_and_validate",
    "validate_plan",
    "validate_spec",
    "ExternalPlanner",
    "PlanPayloadError",
    "plan_from_payload",
    "MeshDescriptor",
    "describe_mesh",
]
