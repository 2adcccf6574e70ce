# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Pages
# [NAV-20] MainWindow
# [NAV-90] Entry point
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from PyQt6 import QtWidgets

from diagnostics.logging_setup import configure_logging
from module_registry import ModuleRegistry, load_registry

from . import config as ui_config
from .module_flags import ModuleFlags, load_workspace_flags
from .navigation import SETTINGS_ROUTE, build_nav_items, route_label
from .screens.settings import SettingsScreen
from .widgets.left_navigation import LeftNavigationBar

logger = logging.getLogger("navdeck.ui")

DEFAULT_ROUTE = "/dashboard"


# === [NAV-10] Pages ===========================================================
class PlaceholderPage(QtWidgets.QWidget):
    """Stand-in for a module page; the module screens live elsewhere."""

    def __init__(self, title: str, route: str, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        heading = QtWidgets.QLabel(title)
        heading.setStyleSheet("font-size: 20px; font-weight: bold;")
        layout.addWidget(heading)
        path = QtWidgets.QLabel(route)
        path.setStyleSheet("color: #888;")
        layout.addWidget(path)
        layout.addStretch()


# === [NAV-20] MainWindow ======================================================
class MainWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        flags: ModuleFlags,
        *,
        workspace_id: str,
        collapsed: bool = False,
        initial_route: str = DEFAULT_ROUTE,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Navdeck")
        self.resize(1100, 700)
        self.flags = flags
        self.workspace_id = workspace_id
        self._pages: Dict[str, QtWidgets.QWidget] = {}
        self._all_items = build_nav_items(flags.registry.nodes)

        central = QtWidgets.QWidget()
        layout = QtWidgets.QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.sidebar = LeftNavigationBar(flags, collapsed=collapsed, current_route=initial_route)
        self.sidebar.route_selected.connect(self.show_route)
        self.sidebar.collapsed_changed.connect(ui_config.set_sidebar_collapsed)
        layout.addWidget(self.sidebar)

        self.stacked = QtWidgets.QStackedWidget()
        layout.addWidget(self.stacked, 1)
        self.setCentralWidget(central)

        self.show_route(initial_route)

    def show_route(self, route: str) -> None:
        page = self._pages.get(route)
        if page is None:
            page = self._make_page(route)
            self._pages[route] = page
            self.stacked.addWidget(page)
        self.stacked.setCurrentWidget(page)
        if self.sidebar.current_route() != route:
            self.sidebar.set_current_route(route)
        logger.info("route %s", route)

    def current_route(self) -> str:
        return self.sidebar.current_route()

    def _make_page(self, route: str) -> QtWidgets.QWidget:
        if route == SETTINGS_ROUTE:
            return SettingsScreen(self.flags, workspace_id=self.workspace_id)
        return PlaceholderPage(route_label(self._all_items, route), route)


# === [NAV-90] Entry point =====================================================
def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Workspace navigation shell.")
    parser.add_argument("--workspace", help="Workspace id whose module flags to load")
    parser.add_argument("--registry", help="Path to a JSON module registry")
    parser.add_argument("--route", default=DEFAULT_ROUTE, help="Initial route")
    parser.add_argument("--reset-modules", action="store_true", help="Reset module flags before start")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    config = ui_config.load_ui_config()
    workspace_id = ui_config.safe_workspace_id(args.workspace or config.get("workspace_id"))

    registry: ModuleRegistry
    if args.registry:
        registry = load_registry(Path(args.registry))
    else:
        registry = ui_config.resolve_registry(config)

    flags = load_workspace_flags(registry, workspace_id)
    if args.reset_modules:
        flags.reset()

    app = QtWidgets.QApplication(sys.argv[:1])
    window = MainWindow(
        flags,
        workspace_id=workspace_id,
        collapsed=bool(config.get("sidebar_collapsed", False)),
        initial_route=args.route,
    )
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())


# === [NAV-99] End =============================================================
