from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture()
def qapp():
    from PyQt6 import QtWidgets

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


@pytest.fixture()
def data_dirs(tmp_path, monkeypatch):
    from app_ui import config as ui_config

    monkeypatch.setattr(ui_config, "CONFIG_PATH", tmp_path / "roaming" / "ui_config.json")
    monkeypatch.setattr(ui_config, "WORKSPACES_ROOT", tmp_path / "workspaces")
    return tmp_path
