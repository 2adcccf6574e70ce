from app_ui.navigation import (
    SETTINGS_ROUTE,
    active_parent_id,
    build_nav_items,
    is_route_active,
    route_label,
)
from module_registry.registry import MODULES
from module_registry.visibility import enabled_modules


def test_nav_items_sorted_by_label() -> None:
    items = build_nav_items(enabled_modules(MODULES, {}))
    assert [item.label for item in items] == [
        "AI Agents",
        "Contacts",
        "Dashboard",
        "Data",
        "Forms",
        "Landing Pages",
        "Reports",
    ]
    contacts = next(item for item in items if item.id == "contacts")
    assert [child.label for child in contacts.children] == ["All Contacts", "Profiles", "Segmentation"]
    assert contacts.is_group


def test_nav_items_follow_filter() -> None:
    items = build_nav_items(enabled_modules(MODULES, {"data": False, "data-table": False, "reports": False}))
    ids = [item.id for item in items]
    assert "reports" not in ids
    data = next(item for item in items if item.id == "data")
    assert [child.id for child in data.children] == ["table-attributes"]


def test_route_prefix_matching() -> None:
    assert is_route_active("/contact/segmentation/42", "/contact/segmentation")
    assert not is_route_active("/contact", "/contact/segmentation")
    assert not is_route_active("", "/contact")
    assert not is_route_active("/contact", None)


def test_active_parent_by_child_route() -> None:
    items = build_nav_items(enabled_modules(MODULES, {}))
    assert active_parent_id(items, "/contact/profiles") == "contacts"
    assert active_parent_id(items, "/data/table-attributes") == "data"
    assert active_parent_id(items, "/reports") is None
    assert active_parent_id(items, None) is None


def test_route_label_prefers_longest_match() -> None:
    items = build_nav_items(MODULES)
    assert route_label(items, "/contact/segmentation") == "Segmentation"
    assert route_label(items, "/reports") == "Reports"
    assert route_label(items, SETTINGS_ROUTE) == "Settings"
    assert route_label(items, "/nowhere") == "/nowhere"
