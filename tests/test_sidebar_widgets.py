from app_ui.main import MainWindow
from app_ui.module_flags import ModuleFlags
from app_ui.navigation import SETTINGS_ROUTE
from app_ui.screens.settings import SettingsScreen
from app_ui.screens.sidebar_modules import SidebarModuleTab
from app_ui.widgets.left_navigation import COLLAPSED_WIDTH, EXPANDED_WIDTH, LeftNavigationBar
from app_ui.widgets.switches import ToggleSwitch, TriStateSwitch
from module_registry.registry import MODULES, ModuleRegistry
from module_registry.types import GroupState


def _flags() -> ModuleFlags:
    return ModuleFlags(ModuleRegistry(MODULES))


def test_tri_state_switch_requests_next_value(qapp) -> None:
    requested = []
    switch = TriStateSwitch(GroupState.ON)
    switch.toggle_requested.connect(requested.append)
    switch.click()
    switch.set_state(GroupState.PARTIAL)
    switch.click()
    switch.set_state(GroupState.OFF)
    switch.click()
    assert requested == [False, True, True]


def test_toggle_switch_is_checkable(qapp) -> None:
    switch = ToggleSwitch(True, label="Toggle Forms")
    switch.click()
    assert switch.isChecked() is False
    assert switch.accessibleName() == "Toggle Forms"


def test_settings_tab_child_switch_updates_group(qapp) -> None:
    flags = _flags()
    tab = SidebarModuleTab(flags)

    tab.leaf_switch("table-attributes").click()

    assert flags.map["table-attributes"] is False
    assert flags.map["data"] is False
    assert tab.group_switch("data").state() is GroupState.PARTIAL


def test_settings_tab_group_switch_cascades(qapp) -> None:
    flags = _flags()
    tab = SidebarModuleTab(flags)

    tab.group_switch("contacts").click()

    assert flags.group_state("contacts") is GroupState.OFF
    for child_id in ("all-contacts", "contacts-segmentation", "contacts-profiles"):
        assert tab.leaf_switch(child_id).isChecked() is False

    tab.group_switch("contacts").click()
    assert flags.group_state("contacts") is GroupState.ON
    assert tab.leaf_switch("contacts-profiles").isChecked() is True


def test_settings_tab_leaf_switch_and_reset(qapp) -> None:
    flags = _flags()
    tab = SidebarModuleTab(flags)

    tab.leaf_switch("forms").click()
    assert flags.map["forms"] is False

    tab.reset_button.click()
    assert flags.map["forms"] is True
    assert tab.leaf_switch("forms").isChecked() is True


def test_settings_tab_lists_disabled_modules(qapp) -> None:
    flags = _flags()
    flags.set_group_enabled("data", False)
    tab = SidebarModuleTab(flags)
    assert tab.leaf_switch("data-table") is not None
    assert tab.leaf_switch("data-table").isChecked() is False
    assert tab.group_switch("data").state() is GroupState.OFF


def test_sidebar_follows_flags(qapp) -> None:
    flags = _flags()
    bar = LeftNavigationBar(flags)
    assert bar.item_ids() == ["ai-agents", "contacts", "dashboard", "data", "forms", "landing-pages", "reports"]

    flags.set_group_enabled("contacts", False)
    flags.set_enabled("reports", False)
    assert "contacts" not in bar.item_ids()
    assert "reports" not in bar.item_ids()
    assert bar.button("contacts") is None


def test_sidebar_collapse_and_flyout(qapp) -> None:
    flags = _flags()
    changes = []
    bar = LeftNavigationBar(flags)
    bar.collapsed_changed.connect(changes.append)
    assert bar.maximumWidth() == EXPANDED_WIDTH

    bar.toggle_collapsed()
    assert bar.is_collapsed() is True
    assert bar.maximumWidth() == COLLAPSED_WIDTH
    assert changes == [True]

    menu = bar.flyout_menu("data")
    labels = [action.text() for action in menu.actions() if not action.isSeparator()]
    assert labels == ["Data Table", "Table Attributes"]


def test_sidebar_flyout_navigates(qapp) -> None:
    flags = _flags()
    routes = []
    bar = LeftNavigationBar(flags, collapsed=True)
    bar.route_selected.connect(routes.append)

    actions = [a for a in bar.flyout_menu("contacts").actions() if not a.isSeparator()]
    profiles = next(a for a in actions if a.text() == "Profiles")
    profiles.trigger()

    assert routes == ["/contact/profiles"]
    assert bar.current_route() == "/contact/profiles"
    assert bar.open_group_id() == "contacts"


def test_sidebar_expanded_group_opens_for_active_route(qapp) -> None:
    flags = _flags()
    bar = LeftNavigationBar(flags, current_route="/data/table-attributes")
    assert bar.open_group_id() == "data"
    assert bar.button("table-attributes") is not None
    assert bar.button("table-attributes").property("active") is True
    assert bar.button("all-contacts") is None

    bar.button("contacts").click()
    assert bar.open_group_id() == "contacts"
    assert bar.button("all-contacts") is not None


def test_sidebar_settings_footer_always_present(qapp) -> None:
    flags = _flags()
    for node_id in flags.map:
        flags.set_enabled(node_id, False)
    routes = []
    bar = LeftNavigationBar(flags)
    bar.route_selected.connect(routes.append)
    assert bar.item_ids() == []
    bar.settings_button.click()
    assert routes == [SETTINGS_ROUTE]


def test_settings_screen_hosts_sidebar_tab(qapp) -> None:
    screen = SettingsScreen(_flags(), workspace_id="acme")
    assert screen.tabs.count() == 1
    assert screen.tabs.tabText(0) == "Sidebar"
    assert isinstance(screen.sidebar_tab, SidebarModuleTab)


def test_main_window_routes_and_persists_collapse(qapp, data_dirs) -> None:
    from app_ui import config as ui_config

    window = MainWindow(_flags(), workspace_id="acme")
    assert window.current_route() == "/dashboard"

    window.sidebar.settings_button.click()
    assert window.current_route() == SETTINGS_ROUTE
    assert isinstance(window.stacked.currentWidget(), SettingsScreen)

    window.show_route("/reports")
    assert window.sidebar.current_route() == "/reports"

    window.sidebar.toggle_collapsed()
    assert ui_config.get_sidebar_collapsed() is True
