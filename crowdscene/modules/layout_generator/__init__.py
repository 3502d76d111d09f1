"""
Instance Layout Generator
=========================
Deterministic per-instance placement for each ScenePlan entry.

Example:
    from crowdscene.modules.layout_generator import generate_layout, entry_seed

    layouts = generate_layout(plan.objects[0], entry_seed(0))
"""

from .layout import (
    InstanceLayout,
    LayoutKey,
    entry_seed,
    generate_layout,
    generate_plan_layouts,
    layout_key,
    pseudo_random_unit,
)

__all__ = [
    "InstanceLayout",
    "LayoutKey",
    "entry_seed",
    "generate_layout",
    "generate_plan_layouts",
    "layout_key",
    "pseudo_random_unit",
]
