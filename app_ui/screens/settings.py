from __future__ import annotations

from typing import Optional

from PyQt6 import QtWidgets

from ..module_flags import ModuleFlags
from .sidebar_modules import SidebarModuleTab


class SettingsScreen(QtWidgets.QWidget):
    """Tabbed settings host."""

    def __init__(
        self,
        flags: ModuleFlags,
        *,
        workspace_id: str,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)

        title = QtWidgets.QLabel("Settings")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(title)
        subtitle = QtWidgets.QLabel(f"Workspace: {workspace_id}")
        subtitle.setStyleSheet("color: #666;")
        layout.addWidget(subtitle)

        self.tabs = QtWidgets.QTabWidget()
        self.sidebar_tab = SidebarModuleTab(flags)
        self.tabs.addTab(self.sidebar_tab, "Sidebar")
        layout.addWidget(self.tabs, 1)
