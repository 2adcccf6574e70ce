from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from module_registry.types import ModuleGroup, ModuleLeaf, ModuleNode

SETTINGS_ROUTE = "/settings"
SETTINGS_LABEL = "Settings"


@dataclass(frozen=True)
class NavChild:
    id: str
    label: str
    href: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    href: Optional[str] = None
    icon: Optional[str] = None
    children: Tuple[NavChild, ...] = ()

    @property
    def is_group(self) -> bool:
        return bool(self.children)


def _sort_key(label: str) -> Tuple[str, str]:
    return (label.casefold(), label)


def build_nav_items(nodes: Iterable[ModuleNode]) -> List[NavItem]:
    """Turn filtered nodes into sidebar items, sorted by label at both levels."""
    items: List[NavItem] = []
    for node in nodes:
        if isinstance(node, ModuleGroup):
            children = tuple(
                sorted(
                    (NavChild(c.id, c.label, c.href, c.icon) for c in node.children),
                    key=lambda child: _sort_key(child.label),
                )
            )
            items.append(NavItem(node.id, node.label, node.href, node.icon, children))
        elif isinstance(node, ModuleLeaf):
            items.append(NavItem(node.id, node.label, node.href, node.icon))
    items.sort(key=lambda item: _sort_key(item.label))
    return items


def is_route_active(current_route: Optional[str], href: Optional[str]) -> bool:
    if not current_route or not href:
        return False
    return current_route.startswith(href)


def active_parent_id(items: Iterable[NavItem], current_route: Optional[str]) -> Optional[str]:
    for item in items:
        if any(is_route_active(current_route, child.href) for child in item.children):
            return item.id
    return None


def route_label(items: Iterable[NavItem], route: str) -> str:
    if route == SETTINGS_ROUTE:
        return SETTINGS_LABEL
    best: Optional[Tuple[int, str]] = None
    for item in items:
        candidates = [(item.href, item.label)] + [(c.href, c.label) for c in item.children]
        for href, label in candidates:
            if href and is_route_active(route, href) and (best is None or len(href) > best[0]):
                best = (len(href), label)
    return best[1] if best else route
