"""Pure functions over the module registry and an enabled map.

Nothing here mutates its inputs. The toggle helpers return *patches*
(id -> bool) for the caller to merge into its own map.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Mapping, Optional

from .registry import ModuleRegistry
from .types import EnabledMap, GroupState, ModuleGroup, ModuleLeaf, ModuleNode


def as_node_list(nodes) -> List[ModuleNode]:
    """Coerce registry-ish input into a list of nodes.

    A ``ModuleRegistry`` yields its top-level nodes. ``None`` and other
    non-sequence values become ``[]``; a single node becomes a one-item list.
    """
    if isinstance(nodes, ModuleRegistry):
        nodes = nodes.nodes
    if isinstance(nodes, (list, tuple)):
        return [node for node in nodes if isinstance(node, (ModuleLeaf, ModuleGroup))]
    if isinstance(nodes, (ModuleLeaf, ModuleGroup)):
        return [nodes]
    return []


def is_enabled(enabled: Optional[Mapping[str, bool]], node_id: str) -> bool:
    if not enabled:
        return True
    return enabled.get(node_id) is not False


def flatten_ids(nodes) -> List[str]:
    ids: List[str] = []
    for node in as_node_list(nodes):
        ids.append(node.id)
        if isinstance(node, ModuleGroup):
            ids.extend(child.id for child in node.children)
    return ids


def compute_default_map(nodes) -> EnabledMap:
    enabled: EnabledMap = {}
    for node in as_node_list(nodes):
        enabled[node.id] = node.default_enabled is not False
        if isinstance(node, ModuleGroup):
            for child in node.children:
                enabled[child.id] = child.default_enabled is not False
    return enabled


def enabled_modules(nodes, enabled: Optional[Mapping[str, bool]]) -> List[ModuleNode]:
    """Return the nodes to render, in registry order.

    Disabled leaves are dropped. A group stays when its own flag is on *or*
    any child is still on, and only its enabled children are kept.
    """
    visible: List[ModuleNode] = []
    for node in as_node_list(nodes):
        if not isinstance(node, ModuleGroup):
            if is_enabled(enabled, node.id):
                visible.append(node)
            continue
        kids = tuple(child for child in node.children if is_enabled(enabled, child.id))
        if is_enabled(enabled, node.id) or kids:
            visible.append(replace(node, children=kids))
    return visible


def group_state(group: ModuleGroup, enabled: Optional[Mapping[str, bool]]) -> GroupState:
    child_count = len(group.children)
    on_count = sum(1 for child in group.children if is_enabled(enabled, child.id))
    if child_count > 0 and on_count == child_count:
        return GroupState.ON
    if on_count == 0:
        return GroupState.OFF
    return GroupState.PARTIAL


def group_toggle_patch(group: ModuleGroup, next_on: bool) -> EnabledMap:
    patch: EnabledMap = {group.id: bool(next_on)}
    for child in group.children:
        patch[child.id] = bool(next_on)
    return patch


def child_toggle_patch(
    group: ModuleGroup,
    child_id: str,
    value: bool,
    prev: Optional[Mapping[str, bool]],
) -> EnabledMap:
    """Patch for a single child edit, with the group flag recomputed.

    The group flag caches "every child is on"; the partial state is never
    written, only derived by :func:`group_state`.
    """
    value = bool(value)
    on_count = 0
    for child in group.children:
        current = value if child.id == child_id else is_enabled(prev, child.id)
        if current:
            on_count += 1
    return {child_id: value, group.id: on_count == len(group.children)}


__all__ = [
    "as_node_list",
    "is_enabled",
    "flatten_ids",
    "compute_default_map",
    "enabled_modules",
    "group_state",
    "group_toggle_patch",
    "child_toggle_patch",
]
