"""
#WHERE
    Used by session.py when an external planner backend is configured, and
    by main.py (--plan-json) to load a plan written by another tool.

#WHAT
    Bridge for plans produced outside the rules compiler (e.g. a language
    model service returning JSON).  ExternalPlanner wraps any
    ``text -> JSON text`` backend and falls back to DirectiveCompiler when
    the backend fails or returns garbage.

#INPUT
    JSON string or dict shaped like ``{"objects": [{"shape": ..., ...}]}``.

#OUTPUT
    Unvalidated ScenePlan; callers must still pass it through validate_plan().
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from crowdscene.shared.vocabulary import get_shape_by_name
from .compiler import DirectiveCompiler
from .models import ObjectSpec, ScenePlan

log = logging.getLogger(__name__)

_SPEC_FIELDS = ("color", "material", "size", "metalness", "roughness", "motion", "radius")


class PlanPayloadError(ValueError):
    """Payload is not a JSON object with an ``objects`` list."""


def _safe_json_loads(text: str) -> Optional[dict]:
    """Parse *text* as JSON, tolerating prose or code fences around the object."""
    text = text.strip()
    start, end = text.find("{"), text.rfind("}")
    if start < 0 or end <= start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _entry_to_spec(index: int, entry: Any) -> Optional[ObjectSpec]:
    if not isinstance(entry, dict):
        log.warning("Plan entry %d is not an object — skipped", index)
        return None
    shape = get_shape_by_name(entry.get("shape", ""))
    if shape is None:
        log.warning("Plan entry %d has unknown shape %r — skipped", index, entry.get("shape"))
        return None
    count = entry.get("count")
    if count is None or isinstance(count, (bool, dict, list)):
        log.warning("Plan entry %d (%s) has no usable count — skipped", index, shape.value)
        return None
    # Enum-typed fields stay raw here; validate_plan() resolves or defaults them.
    extras = {name: entry.get(name) for name in _SPEC_FIELDS}
    return ObjectSpec(shape=shape, count=count, **extras)


def plan_from_payload(payload: str | Dict[str, Any]) -> ScenePlan:
    """Build an unvalidated ScenePlan from an external planner's output.

    Raises:
        PlanPayloadError: payload is not JSON or lacks an ``objects`` list.
    """
    data = _safe_json_loads(payload) if isinstance(payload, str) else payload
    if not isinstance(data, dict):
        raise PlanPayloadError("plan payload is not a JSON object")
    entries = data.get("objects")
    if not isinstance(entries, list):
        raise PlanPayloadError("plan payload has no 'objects' list")

    objects: List[ObjectSpec] = []
    for i, entry in enumerate(entries):
        spec = _entry_to_spec(i, entry)
        if spec is not None:
            objects.append(spec)
    return ScenePlan(objects=tuple(objects))


class ExternalPlanner:
    """Adapter for an external ``text -> JSON`` planning backend.

    Interface contract: ``compile(text) -> ScenePlan``, identical to
    DirectiveCompiler so the two are interchangeable inside SceneSession.
    """

    def __init__(self, backend: Callable[[str], str], fallback: bool = True) -> None:
        self._backend = backend
        self._fallback_compiler = DirectiveCompiler() if fallback else None

    def __call__(self, text: str) -> ScenePlan:
        return self.compile(text)

    def compile(self, text: str) -> ScenePlan:
        """Ask the backend for a plan; fall back to rules on failure."""
        try:
            raw = self._backend(text)
        except Exception as exc:
            log.warning("External planner failed: %s — falling back", exc)
            return self._do_fallback(text)

        try:
            plan = plan_from_payload(raw)
        except PlanPayloadError as exc:
            log.warning("External planner output rejected (%s) — falling back", exc)
            return self._do_fallback(text)

        if not plan.objects:
            log.warning("External planner returned no usable entries — falling back")
            return self._do_fallback(text)
        log.info("External planner: %d entries", len(plan.objects))
        return plan

    def _do_fallback(self, text: str) -> ScenePlan:
        if self._fallback_compiler is not None:
            return self._fallback_compiler.compile(text)
        return ScenePlan()
