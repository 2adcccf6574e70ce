import logging

from app_ui.module_flags import ModuleFlags, load_workspace_flags
from app_ui import config as ui_config
from module_registry.registry import MODULES, ModuleRegistry
from module_registry.types import GroupState, ModuleGroup
from module_registry.visibility import compute_default_map


def _flags(**kwargs) -> ModuleFlags:
    return ModuleFlags(ModuleRegistry(MODULES), **kwargs)


def _visible_group(flags: ModuleFlags, group_id: str):
    for node in flags.visible_modules():
        if node.id == group_id:
            return node
    return None


def test_map_materialized_from_defaults() -> None:
    flags = _flags()
    assert flags.map == compute_default_map(MODULES)


def test_overrides_merge_over_defaults() -> None:
    flags = ModuleFlags(ModuleRegistry(MODULES), {"forms": False, "legacy": True, "bad": "no"})
    assert flags.map["forms"] is False
    assert flags.map["legacy"] is True
    assert "bad" not in flags.map


def test_leaf_toggle_is_a_plain_write() -> None:
    flags = _flags()
    flags.set_enabled("table-attributes", False)
    assert flags.map["table-attributes"] is False
    assert flags.map["data"] is True


def test_child_toggle_scenario_data_group() -> None:
    flags = _flags()
    flags.set_child_enabled("data", "table-attributes", False)

    assert flags.map["table-attributes"] is False
    assert flags.map["data"] is False
    assert flags.group_state("data") is GroupState.PARTIAL
    group = _visible_group(flags, "data")
    assert group is not None
    assert [child.id for child in group.children] == ["data-table"]


def test_child_toggle_back_on_restores_group_flag() -> None:
    flags = _flags()
    flags.set_child_enabled("data", "table-attributes", False)
    flags.set_child_enabled("data", "table-attributes", True)
    assert flags.map["data"] is True
    assert flags.group_state("data") is GroupState.ON


def test_last_child_off_goes_straight_to_off() -> None:
    flags = _flags()
    flags.set_child_enabled("data", "data-table", False)
    assert flags.group_state("data") is GroupState.PARTIAL
    flags.set_child_enabled("data", "table-attributes", False)
    assert flags.group_state("data") is GroupState.OFF
    assert _visible_group(flags, "data") is None


def test_group_off_scenario_contacts() -> None:
    flags = _flags()
    flags.set_group_enabled("contacts", False)

    for node_id in ("contacts", "all-contacts", "contacts-segmentation", "contacts-profiles"):
        assert flags.map[node_id] is False
    assert _visible_group(flags, "contacts") is None
    assert flags.group_state("contacts") is GroupState.OFF


def test_group_on_is_idempotent() -> None:
    flags = _flags()
    flags.set_group_enabled("contacts", False)
    flags.set_group_enabled("contacts", True)
    once = flags.map
    flags.set_group_enabled("contacts", True)
    assert flags.map == once
    assert all(once[node_id] for node_id in ("contacts", "all-contacts", "contacts-segmentation", "contacts-profiles"))


def test_toggle_group_from_partial_turns_everything_on() -> None:
    flags = _flags()
    flags.set_child_enabled("contacts", "contacts-profiles", False)
    assert flags.toggle_group("contacts") is True
    assert flags.group_state("contacts") is GroupState.ON
    assert flags.toggle_group("contacts") is False
    assert flags.group_state("contacts") is GroupState.OFF


def test_unknown_ids_are_stored_without_error() -> None:
    flags = _flags()
    flags.set_enabled("mystery", False)
    flags.set_group_enabled("not-a-group", False)
    flags.set_child_enabled("not-a-group", "orphan", False)
    assert flags.map["mystery"] is False
    assert flags.map["not-a-group"] is False
    assert flags.map["orphan"] is False
    assert flags.group_state("not-a-group") is GroupState.OFF


def test_child_edit_with_foreign_child_leaves_groups_alone() -> None:
    flags = _flags()
    flags.set_child_enabled("data", "reports", False)
    flags.set_child_enabled("data", "all-contacts", False)
    assert flags.map["reports"] is False
    assert flags.map["all-contacts"] is False
    assert flags.map["data"] is True
    assert flags.map["contacts"] is True
    assert flags.group_state("data") is GroupState.ON
    assert flags.group_state("contacts") is GroupState.PARTIAL


def test_set_enabled_many_accepts_mapping_and_callable() -> None:
    flags = _flags()
    flags.set_enabled_many({"forms": False, "reports": False})
    assert flags.map["forms"] is False and flags.map["reports"] is False
    flags.set_enabled_many(lambda prev: {"forms": not prev["forms"]})
    assert flags.map["forms"] is True


def test_reset_restores_defaults() -> None:
    flags = _flags()
    flags.set_group_enabled("contacts", False)
    flags.set_child_enabled("data", "data-table", False)
    flags.set_enabled("dashboard", False)
    flags.set_enabled("mystery", True)
    flags.reset()
    assert flags.map == compute_default_map(MODULES)


def test_save_hook_and_listeners_run_once_per_change() -> None:
    saved = []
    seen = []
    flags = _flags(save=lambda enabled: saved.append(dict(enabled)))
    flags.subscribe(lambda enabled: seen.append(enabled))

    flags.set_group_enabled("data", False)
    assert len(saved) == 1
    assert saved[0]["data"] is False and saved[0]["data-table"] is False
    assert len(seen) == 1

    flags.set_group_enabled("data", False)
    assert len(saved) == 1


def test_unsubscribe_stops_notifications() -> None:
    seen = []
    flags = _flags()
    token = flags.subscribe(lambda enabled: seen.append(enabled))
    flags.unsubscribe(token)
    flags.set_enabled("forms", False)
    assert seen == []


def test_save_failure_is_logged_not_raised(caplog, monkeypatch) -> None:
    def _broken_save(_enabled):
        raise OSError("disk full")

    flags = _flags(save=_broken_save)
    monkeypatch.setattr(logging.getLogger("navdeck"), "propagate", True)
    with caplog.at_level(logging.WARNING, logger="navdeck.flags"):
        flags.set_enabled("forms", False)
    assert flags.map["forms"] is False
    assert "save failed" in caplog.text


def test_listener_error_does_not_block_others() -> None:
    seen = []

    def _boom(_enabled):
        raise RuntimeError("boom")

    flags = _flags()
    flags.subscribe(_boom)
    flags.subscribe(lambda enabled: seen.append(enabled["forms"]))
    flags.set_enabled("forms", False)
    assert seen == [False]


def test_workspace_flags_round_trip(data_dirs) -> None:
    registry = ModuleRegistry(MODULES)
    flags = load_workspace_flags(registry, "acme")
    flags.set_child_enabled("data", "table-attributes", False)

    assert ui_config.load_module_flags("acme")["table-attributes"] is False

    reloaded = load_workspace_flags(registry, "acme")
    assert reloaded.map == flags.map
    assert reloaded.group_state("data") is GroupState.PARTIAL

    other = load_workspace_flags(registry, "other")
    assert other.map == compute_default_map(MODULES)


def test_empty_group_registry() -> None:
    flags = ModuleFlags(ModuleRegistry([ModuleGroup("empty", "Empty")]))
    assert flags.group_state("empty") is GroupState.OFF
    assert [node.id for node in flags.visible_modules()] == ["empty"]
