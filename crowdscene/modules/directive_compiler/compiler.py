from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern

from crowdscene.shared.constants import MAX_DIRECTIVE_COUNT
from crowdscene.shared.vocabulary import DEFAULT_ENTRY, SHAPES, Shape, ShapeDefinition
from .models import ObjectSpec, ScenePlan

log = logging.getLogger(__name__)

_FIELDS = ("color", "material", "metalness", "roughness", "motion", "size", "radius")


class DirectiveCompiler:
    """Rules-based directive → ScenePlan compiler. Never fails.

    Stateless after construction: the same text always yields an equal plan.
    """

    def __init__(self) -> None:
        # "<n> [up to three modifier words] <keyword>", longest keyword first
        # so plural forms win. Punctuation ends the modifier run.
        self._count_patterns: Dict[Shape, Pattern] = {
            shape: re.compile(
                r"(\d+)\s+(?:[a-z]+\s+){0,3}?(?:"
                + "|".join(re.escape(kw) for kw in sorted(d.count_keywords, key=len, reverse=True))
                + r")"
            )
            for shape, d in SHAPES.items()
        }

    def compile(self, text: str) -> ScenePlan:
        lower = (text or "").lower()
        objects: List[ObjectSpec] = []
        for shape, definition in SHAPES.items():
            count = self._count_for(shape, definition, lower)
            if not count:
                continue
            objects.append(self._build_spec(definition, count, lower))

        if not objects:
            log.debug("No shape recognised in %r, using default entry", text)
            objects.append(ObjectSpec(**DEFAULT_ENTRY))

        return ScenePlan(objects=tuple(objects))

    def _count_for(self, shape: Shape, definition: ShapeDefinition, text: str) -> int:
        """Explicit count, else implicit count if the stem is mentioned, else 0."""
        explicit = self._explicit_count(shape, text)
        if explicit:
            return explicit
        return definition.implicit_count if definition.stem in text else 0

    def _explicit_count(self, shape: Shape, text: str) -> Optional[int]:
        m = self._count_patterns[shape].search(text)
        if not m:
            return None
        return min(int(m.group(1)), MAX_DIRECTIVE_COUNT)

    @staticmethod
    def _build_spec(definition: ShapeDefinition, count: int, text: str) -> ObjectSpec:
        values = {name: definition.resolve(name, text) for name in _FIELDS}
        return ObjectSpec(shape=definition.shape, count=count, **values)


_DEFAULT_COMPILER = DirectiveCompiler()


def compile_directive(text: str) -> ScenePlan:
    return _DEFAULT_COMPILER.compile(text)
