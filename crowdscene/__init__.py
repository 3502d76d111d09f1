"""Directive-driven procedural crowd around a fixed centerpiece.

Pipeline: directive text → ScenePlan (compiler + validator) → per-instance
layouts → per-frame motion.  Rendering, tracking and asset loading are
external; see crowdscene.session.SceneSession.

Usage:
    from crowdscene import SceneSession, compile_and_validate

    plan = compile_and_validate("20 red spheres orbit, 5 gold torus")
    session = SceneSession()
    session.apply("add 10 blue boxes floating")
    state = session.tick()             # once per rendered frame
"""

from crowdscene.modules.directive_compiler import compile_and_validate
from crowdscene.session import SceneSession, SceneState, SessionConfig

__version__ = "0.1.0"

__all__ = [
    "compile_and_validate",
    "SceneSession",
    "SceneState",
    "SessionConfig",
]
