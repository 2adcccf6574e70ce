from __future__ import annotations

import logging
from typing import Dict, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from module_registry.types import EnabledMap, ModuleGroup, ModuleLeaf

from ..module_flags import ModuleFlags
from ..widgets.switches import ToggleSwitch, TriStateSwitch

logger = logging.getLogger("navdeck.ui")


class SidebarModuleTab(QtWidgets.QWidget):
    """Settings editor for which modules appear in the left navigation.

    Every registry node gets a row, including disabled ones; group children
    are always listed under their group. Changes apply instantly.
    """

    def __init__(self, flags: ModuleFlags, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._flags = flags
        self._leaf_switches: Dict[str, ToggleSwitch] = {}
        self._group_switches: Dict[str, TriStateSwitch] = {}

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        intro = QtWidgets.QFrame()
        intro.setFrameShape(QtWidgets.QFrame.Shape.StyledPanel)
        intro_layout = QtWidgets.QVBoxLayout(intro)
        title = QtWidgets.QLabel("Sidebar")
        title.setStyleSheet("font-size: 15px; font-weight: bold;")
        hint = QtWidgets.QLabel("Enable/disable modules in the left navigation. Changes apply instantly.")
        hint.setWordWrap(True)
        hint.setStyleSheet("color: #666;")
        intro_layout.addWidget(title)
        intro_layout.addWidget(hint)
        layout.addWidget(intro)

        header = QtWidgets.QHBoxLayout()
        modules_label = QtWidgets.QLabel("Modules")
        modules_label.setStyleSheet("font-weight: bold;")
        header.addWidget(modules_label)
        header.addStretch()
        self.reset_button = QtWidgets.QPushButton("Reset to defaults")
        self.reset_button.clicked.connect(self._on_reset)
        header.addWidget(self.reset_button)
        layout.addLayout(header)

        rows = QtWidgets.QWidget()
        rows_layout = QtWidgets.QVBoxLayout(rows)
        rows_layout.setContentsMargins(0, 0, 0, 0)
        rows_layout.setSpacing(8)
        for node in flags.registry:
            if isinstance(node, ModuleGroup):
                rows_layout.addWidget(self._group_row(node))
            else:
                rows_layout.addWidget(self._leaf_row(node, on_toggle=self._leaf_handler(node.id)))
        rows_layout.addStretch()

        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QtWidgets.QFrame.Shape.NoFrame)
        scroll.setWidget(rows)
        layout.addWidget(scroll, 1)

        token = flags.subscribe(self._on_flags_changed)
        self.destroyed.connect(lambda *_: flags.unsubscribe(token))
        self.refresh()

    # --- accessors
    def leaf_switch(self, node_id: str) -> Optional[ToggleSwitch]:
        return self._leaf_switches.get(node_id)

    def group_switch(self, group_id: str) -> Optional[TriStateSwitch]:
        return self._group_switches.get(group_id)

    # --- rows
    def _leaf_row(self, leaf: ModuleLeaf, *, on_toggle, indent: int = 0) -> QtWidgets.QWidget:
        row = QtWidgets.QFrame()
        row.setFrameShape(QtWidgets.QFrame.Shape.StyledPanel)
        layout = QtWidgets.QHBoxLayout(row)
        layout.setContentsMargins(8 + indent, 6, 8, 6)
        icon = _icon_label(leaf.icon)
        if icon is not None:
            layout.addWidget(icon)
        text = QtWidgets.QVBoxLayout()
        text.setSpacing(0)
        name = QtWidgets.QLabel(leaf.label)
        route = QtWidgets.QLabel(leaf.href)
        route.setStyleSheet("color: #888; font-size: 11px;")
        text.addWidget(name)
        text.addWidget(route)
        layout.addLayout(text)
        layout.addStretch()
        switch = ToggleSwitch(self._flags.is_enabled(leaf.id), label=f"Toggle {leaf.label}")
        switch.toggled.connect(on_toggle)
        layout.addWidget(switch)
        self._leaf_switches[leaf.id] = switch
        return row

    def _group_row(self, group: ModuleGroup) -> QtWidgets.QWidget:
        box = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(box)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        parent_row = QtWidgets.QHBoxLayout()
        parent_row.setContentsMargins(8, 6, 8, 6)
        icon = _icon_label(group.icon)
        if icon is not None:
            parent_row.addWidget(icon)
        label = QtWidgets.QLabel(group.label)
        label.setStyleSheet("font-weight: bold;")
        parent_row.addWidget(label)
        parent_row.addStretch()
        switch = TriStateSwitch(self._flags.group_state(group.id), label=f"Toggle {group.label}")
        switch.toggle_requested.connect(lambda on, gid=group.id: self._flags.set_group_enabled(gid, on))
        parent_row.addWidget(switch)
        self._group_switches[group.id] = switch
        layout.addLayout(parent_row)

        for child in group.children:
            layout.addWidget(
                self._leaf_row(child, on_toggle=self._child_handler(group.id, child.id), indent=20)
            )
        return box

    def _leaf_handler(self, node_id: str):
        def _handler(value: bool) -> None:
            self._flags.set_enabled(node_id, value)

        return _handler

    def _child_handler(self, group_id: str, child_id: str):
        def _handler(value: bool) -> None:
            self._flags.set_child_enabled(group_id, child_id, value)

        return _handler

    # --- state sync
    def refresh(self) -> None:
        for node_id, switch in self._leaf_switches.items():
            switch.blockSignals(True)
            try:
                switch.setChecked(self._flags.is_enabled(node_id))
            finally:
                switch.blockSignals(False)
        for group_id, switch in self._group_switches.items():
            switch.set_state(self._flags.group_state(group_id))

    def _on_flags_changed(self, _enabled: EnabledMap) -> None:
        self.refresh()

    def _on_reset(self) -> None:
        logger.info("sidebar modules reset requested")
        self._flags.reset()


def _icon_label(icon_name: Optional[str]) -> Optional[QtWidgets.QLabel]:
    if not icon_name:
        return None
    icon = QtGui.QIcon.fromTheme(icon_name)
    if icon.isNull():
        return None
    label = QtWidgets.QLabel()
    label.setPixmap(icon.pixmap(QtCore.QSize(16, 16)))
    return label
