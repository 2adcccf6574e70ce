# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] LeftNavigationBar (ctor / public API)
# [NAV-20] Rebuild (expanded list / collapsed rail)
# [NAV-30] Handlers
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from module_registry.types import EnabledMap

from ..module_flags import ModuleFlags
from ..navigation import (
    SETTINGS_LABEL,
    SETTINGS_ROUTE,
    NavItem,
    active_parent_id,
    build_nav_items,
    is_route_active,
)

logger = logging.getLogger("navdeck.ui")

ACTIVE_BG = "#009966"
COLLAPSED_WIDTH = 56
EXPANDED_WIDTH = 220

_ACTIVE_STYLE = f"QToolButton {{ background: {ACTIVE_BG}; color: white; border-radius: 6px; }}"
_IDLE_STYLE = "QToolButton { border-radius: 6px; } QToolButton:hover { background: rgba(0, 0, 0, 0.06); }"


# === [NAV-10] LeftNavigationBar (ctor / public API) ===========================
class LeftNavigationBar(QtWidgets.QFrame):
    """Sidebar built from the enabled modules.

    Expanded mode lists labels with inline groups; collapsed mode shows an
    icon rail where groups open a flyout menu. Settings is a fixed footer.
    """

    route_selected = QtCore.pyqtSignal(str)
    collapsed_changed = QtCore.pyqtSignal(bool)

    def __init__(
        self,
        flags: ModuleFlags,
        *,
        collapsed: bool = False,
        current_route: str = "",
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("LeftNavigationBar")
        self._flags = flags
        self._collapsed = bool(collapsed)
        self._current_route = current_route
        self._items: List[NavItem] = []
        self._open_group: Optional[str] = None
        self._buttons: Dict[str, QtWidgets.QToolButton] = {}
        self._flyouts: Dict[str, QtWidgets.QMenu] = {}

        root = QtWidgets.QVBoxLayout(self)
        root.setContentsMargins(6, 8, 6, 8)
        root.setSpacing(4)

        self.collapse_button = QtWidgets.QToolButton()
        self.collapse_button.clicked.connect(self.toggle_collapsed)
        root.addWidget(self.collapse_button, 0, QtCore.Qt.AlignmentFlag.AlignRight)

        self._items_host = QtWidgets.QWidget()
        self._items_layout = QtWidgets.QVBoxLayout(self._items_host)
        self._items_layout.setContentsMargins(0, 0, 0, 0)
        self._items_layout.setSpacing(2)
        root.addWidget(self._items_host)
        root.addStretch()

        self.settings_button = self._make_button(SETTINGS_LABEL, "preferences-system")
        self.settings_button.clicked.connect(lambda: self._navigate(SETTINGS_ROUTE))
        root.addWidget(self.settings_button)

        token = flags.subscribe(self._on_flags_changed)
        self.destroyed.connect(lambda *_: flags.unsubscribe(token))
        self._reload_items()

    def is_collapsed(self) -> bool:
        return self._collapsed

    def set_collapsed(self, collapsed: bool) -> None:
        collapsed = bool(collapsed)
        if collapsed == self._collapsed:
            return
        self._collapsed = collapsed
        self._rebuild()
        self.collapsed_changed.emit(collapsed)

    def toggle_collapsed(self) -> None:
        self.set_collapsed(not self._collapsed)

    def current_route(self) -> str:
        return self._current_route

    def set_current_route(self, route: str) -> None:
        self._current_route = route or ""
        self._open_group = active_parent_id(self._items, self._current_route)
        self._rebuild()

    def items(self) -> List[NavItem]:
        return list(self._items)

    def item_ids(self) -> List[str]:
        return [item.id for item in self._items]

    def open_group_id(self) -> Optional[str]:
        return self._open_group

    def button(self, node_id: str) -> Optional[QtWidgets.QToolButton]:
        return self._buttons.get(node_id)

    def flyout_menu(self, group_id: str) -> Optional[QtWidgets.QMenu]:
        return self._flyouts.get(group_id)

    # === [NAV-20] Rebuild (expanded list / collapsed rail) ====================
    def _reload_items(self) -> None:
        self._items = build_nav_items(self._flags.visible_modules())
        self._open_group = active_parent_id(self._items, self._current_route)
        self._rebuild()

    def _rebuild(self) -> None:
        while self._items_layout.count():
            entry = self._items_layout.takeAt(0)
            widget = entry.widget()
            if widget is not None:
                widget.hide()
                widget.deleteLater()
        self._buttons.clear()
        self._flyouts.clear()

        self.setFixedWidth(COLLAPSED_WIDTH if self._collapsed else EXPANDED_WIDTH)
        self.collapse_button.setText("»" if self._collapsed else "«")
        self.collapse_button.setToolTip("Expand sidebar" if self._collapsed else "Collapse sidebar")
        self._apply_mode(self.settings_button, SETTINGS_LABEL)
        self._style_active(self.settings_button, is_route_active(self._current_route, SETTINGS_ROUTE))

        for item in self._items:
            if item.is_group:
                self._add_group(item)
            else:
                self._add_leaf(item)

    def _add_leaf(self, item: NavItem) -> None:
        button = self._make_button(item.label, item.icon)
        self._apply_mode(button, item.label)
        self._style_active(button, is_route_active(self._current_route, item.href))
        if item.href:
            button.clicked.connect(lambda _=False, href=item.href: self._navigate(href))
        self._items_layout.addWidget(button)
        self._buttons[item.id] = button

    def _add_group(self, item: NavItem) -> None:
        child_active = any(is_route_active(self._current_route, c.href) for c in item.children)
        leaf_active = is_route_active(self._current_route, item.href)
        button = self._make_button(item.label, item.icon)
        self._apply_mode(button, item.label)
        self._style_active(button, child_active or leaf_active)
        self._buttons[item.id] = button

        if self._collapsed:
            menu = QtWidgets.QMenu(button)
            menu.addSection(item.label)
            for child in item.children:
                action = menu.addAction(_nav_icon(child.icon), child.label)
                action.triggered.connect(lambda _=False, href=child.href: self._navigate(href))
            button.setMenu(menu)
            button.setPopupMode(QtWidgets.QToolButton.ToolButtonPopupMode.InstantPopup)
            self._flyouts[item.id] = menu
            self._items_layout.addWidget(button)
            return

        is_open = self._open_group == item.id
        button.setArrowType(QtCore.Qt.ArrowType.DownArrow if is_open else QtCore.Qt.ArrowType.RightArrow)
        button.clicked.connect(lambda _=False, gid=item.id: self._toggle_group(gid))
        self._items_layout.addWidget(button)
        if not is_open:
            return
        for child in item.children:
            child_button = self._make_button(child.label, child.icon)
            self._apply_mode(child_button, child.label)
            self._style_active(child_button, is_route_active(self._current_route, child.href))
            child_button.clicked.connect(lambda _=False, href=child.href: self._navigate(href))
            wrapper = QtWidgets.QWidget()
            wrapper_layout = QtWidgets.QHBoxLayout(wrapper)
            wrapper_layout.setContentsMargins(18, 0, 0, 0)
            wrapper_layout.addWidget(child_button)
            self._items_layout.addWidget(wrapper)
            self._buttons[child.id] = child_button

    def _make_button(self, label: str, icon_name: Optional[str]) -> QtWidgets.QToolButton:
        button = QtWidgets.QToolButton()
        button.setIcon(_nav_icon(icon_name))
        button.setIconSize(QtCore.QSize(18, 18))
        button.setAutoRaise(True)
        button.setSizePolicy(QtWidgets.QSizePolicy.Policy.Expanding, QtWidgets.QSizePolicy.Policy.Fixed)
        button.setProperty("nav_label", label)
        return button

    def _apply_mode(self, button: QtWidgets.QToolButton, label: str) -> None:
        if self._collapsed:
            if button.icon().isNull():
                button.setToolButtonStyle(QtCore.Qt.ToolButtonStyle.ToolButtonTextOnly)
                button.setText(label[:1].upper())
            else:
                button.setToolButtonStyle(QtCore.Qt.ToolButtonStyle.ToolButtonIconOnly)
                button.setText("")
            button.setToolTip(label)
        else:
            button.setToolButtonStyle(QtCore.Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
            button.setText(label)
            button.setToolTip("")

    def _style_active(self, button: QtWidgets.QToolButton, active: bool) -> None:
        button.setProperty("active", bool(active))
        button.setStyleSheet(_ACTIVE_STYLE if active else _IDLE_STYLE)

    # === [NAV-30] Handlers ====================================================
    def _toggle_group(self, group_id: str) -> None:
        self._open_group = None if self._open_group == group_id else group_id
        self._rebuild()

    def _navigate(self, href: str) -> None:
        logger.debug("navigate %s", href)
        self._current_route = href
        self._open_group = active_parent_id(self._items, href) or self._open_group
        self._rebuild()
        self.route_selected.emit(href)

    def _on_flags_changed(self, _enabled: EnabledMap) -> None:
        self._reload_items()


def _nav_icon(icon_name: Optional[str]) -> QtGui.QIcon:
    if not icon_name:
        return QtGui.QIcon()
    return QtGui.QIcon.fromTheme(icon_name)


# === [NAV-99] End =============================================================
__all__ = ["LeftNavigationBar", "COLLAPSED_WIDTH", "EXPANDED_WIDTH"]
