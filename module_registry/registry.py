# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Built-in registry
# [NAV-20] Validation
# [NAV-30] ModuleRegistry
# [NAV-40] JSON loading
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .types import ModuleGroup, ModuleLeaf, ModuleNode, NodeKind, RegistryConfigError

logger = logging.getLogger("navdeck.registry")


# === [NAV-10] Built-in registry ===============================================
# Ids are persisted in user flag files; never rename a shipped id.
# "Settings" is rendered by the sidebar footer and is not toggleable.
MODULES: Tuple[ModuleNode, ...] = (
    ModuleLeaf("dashboard", "Dashboard", "/dashboard", icon="view-grid"),
    ModuleLeaf("landing-pages", "Landing Pages", "/landing-pages", icon="text-html"),
    ModuleLeaf("forms", "Forms", "/forms", icon="document-edit"),
    ModuleLeaf("ai-agents", "AI Agents", "/ai-agents", icon="system-run"),
    ModuleGroup(
        "contacts",
        "Contacts",
        href="/contact",
        icon="system-users",
        children=(
            ModuleLeaf("all-contacts", "All Contacts", "/contact", icon="view-list-details"),
            ModuleLeaf("contacts-segmentation", "Segmentation", "/contact/segmentation", icon="view-filter"),
            ModuleLeaf("contacts-profiles", "Profiles", "/contact/profiles", icon="user-identity"),
        ),
    ),
    ModuleGroup(
        "data",
        "Data",
        href="/data",
        icon="server-database",
        children=(
            ModuleLeaf("data-table", "Data Table", "/data-tables", icon="x-office-spreadsheet"),
            ModuleLeaf("table-attributes", "Table Attributes", "/data/table-attributes", icon="configure"),
        ),
    ),
    ModuleLeaf("reports", "Reports", "/reports", icon="office-chart-bar"),
)


# === [NAV-20] Validation ======================================================
def validate_registry(nodes: Sequence[ModuleNode]) -> None:
    """Fail fast on structural problems; lookups downstream key by id."""
    if not isinstance(nodes, (list, tuple)):
        raise RegistryConfigError("registry must be a sequence of module nodes")
    seen: Dict[str, str] = {}

    def _claim(node_id: str, where: str) -> None:
        if not isinstance(node_id, str) or not node_id.strip():
            raise RegistryConfigError(f"empty module id in {where}")
        if node_id in seen:
            raise RegistryConfigError(
                f"duplicate module id '{node_id}' ({seen[node_id]} and {where})"
            )
        seen[node_id] = where

    for index, node in enumerate(nodes):
        if isinstance(node, ModuleLeaf):
            _claim(node.id, f"modules[{index}]")
        elif isinstance(node, ModuleGroup):
            _claim(node.id, f"modules[{index}]")
            for child_index, child in enumerate(node.children):
                where = f"{node.id}.children[{child_index}]"
                if isinstance(child, ModuleGroup):
                    raise RegistryConfigError(f"nested group '{child.id}' in {node.id}")
                if not isinstance(child, ModuleLeaf):
                    raise RegistryConfigError(f"{where} is not a module leaf")
                _claim(child.id, where)
        else:
            raise RegistryConfigError(f"modules[{index}] is not a module node")


# === [NAV-30] ModuleRegistry ==================================================
class ModuleRegistry:
    """Validated, read-only, ordered set of navigation nodes."""

    def __init__(self, nodes: Sequence[ModuleNode] = MODULES) -> None:
        validate_registry(nodes)
        self._nodes: Tuple[ModuleNode, ...] = tuple(nodes)
        self._index: Dict[str, ModuleNode] = {}
        self._parents: Dict[str, ModuleGroup] = {}
        for node in self._nodes:
            self._index[node.id] = node
            if isinstance(node, ModuleGroup):
                for child in node.children:
                    self._index[child.id] = child
                    self._parents[child.id] = node

    @property
    def nodes(self) -> Tuple[ModuleNode, ...]:
        return self._nodes

    def __iter__(self) -> Iterator[ModuleNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def get(self, node_id: str) -> Optional[ModuleNode]:
        return self._index.get(node_id)

    def group(self, group_id: str) -> Optional[ModuleGroup]:
        node = self._index.get(group_id)
        return node if isinstance(node, ModuleGroup) else None

    def parent_of(self, child_id: str) -> Optional[ModuleGroup]:
        return self._parents.get(child_id)

    def groups(self) -> List[ModuleGroup]:
        return [node for node in self._nodes if isinstance(node, ModuleGroup)]


_DEFAULT_REGISTRY: Optional[ModuleRegistry] = None


def get_default_registry() -> ModuleRegistry:
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = ModuleRegistry(MODULES)
    return _DEFAULT_REGISTRY


# === [NAV-40] JSON loading ====================================================
def registry_from_dict(data: Any) -> ModuleRegistry:
    if not isinstance(data, dict):
        raise RegistryConfigError("registry payload not a dict")
    raw_modules = data.get("modules")
    if not isinstance(raw_modules, list):
        raise RegistryConfigError("registry payload missing 'modules' list")
    nodes = [_node_from_dict(raw, f"modules[{index}]") for index, raw in enumerate(raw_modules)]
    return ModuleRegistry(nodes)


def load_registry(path: Path) -> ModuleRegistry:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RegistryConfigError(f"cannot read registry {path}: {exc}") from exc
    registry = registry_from_dict(data)
    logger.info("loaded module registry from %s (%d top-level nodes)", path, len(registry))
    return registry


def registry_to_dict(registry: ModuleRegistry) -> Dict[str, Any]:
    return {"modules": [_node_to_dict(node) for node in registry]}


def _node_from_dict(raw: Any, where: str) -> ModuleNode:
    if not isinstance(raw, dict):
        raise RegistryConfigError(f"{where} not a dict")
    kind = raw.get("kind") or (NodeKind.GROUP.value if "children" in raw else NodeKind.LEAF.value)
    node_id = _required_str(raw, "id", where)
    label = _required_str(raw, "label", where)
    icon = _optional_str(raw.get("icon"))
    default_enabled = raw.get("default_enabled", True)
    if not isinstance(default_enabled, bool):
        raise RegistryConfigError(f"{where}.default_enabled must be a bool")
    if kind == NodeKind.LEAF.value:
        return ModuleLeaf(
            id=node_id,
            label=label,
            href=_required_str(raw, "href", where),
            icon=icon,
            default_enabled=default_enabled,
        )
    if kind == NodeKind.GROUP.value:
        raw_children = raw.get("children") or []
        if not isinstance(raw_children, list):
            raise RegistryConfigError(f"{where}.children must be a list")
        children = []
        for child_index, child in enumerate(raw_children):
            child_where = f"{where}.children[{child_index}]"
            if isinstance(child, dict) and child.get("kind") == NodeKind.GROUP.value:
                raise RegistryConfigError(f"nested group in {child_where}")
            children.append(_node_from_dict(child, child_where))
        return ModuleGroup(
            id=node_id,
            label=label,
            children=tuple(children),
            href=_optional_str(raw.get("href")),
            icon=icon,
            default_enabled=default_enabled,
        )
    raise RegistryConfigError(f"{where}.kind '{kind}' is not leaf or group")


def _node_to_dict(node: ModuleNode) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "kind": node.kind.value,
        "id": node.id,
        "label": node.label,
        "href": node.href,
        "icon": node.icon,
        "default_enabled": node.default_enabled,
    }
    if isinstance(node, ModuleGroup):
        payload["children"] = [_node_to_dict(child) for child in node.children]
    return payload


def _required_str(raw: Dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise RegistryConfigError(f"{where}.{key} must be a non-empty string")
    return value.strip()


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# === [NAV-99] End =============================================================
__all__ = [
    "MODULES",
    "ModuleRegistry",
    "get_default_registry",
    "validate_registry",
    "registry_from_dict",
    "registry_to_dict",
    "load_registry",
]
