# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] UI config loading (defaults/roaming)
# [NAV-20] Module flag persistence (per workspace)
# [NAV-30] Registry selection
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from module_registry import ModuleRegistry, get_default_registry, load_registry

logger = logging.getLogger("navdeck.config")

CONFIG_PATH = Path("data/roaming/ui_config.json")
WORKSPACES_ROOT = Path("data/workspaces")
DEFAULT_WORKSPACE_ID = "default"
_DEFAULT_UI_CONFIG = {
    "workspace_id": DEFAULT_WORKSPACE_ID,
    "sidebar_collapsed": False,
    "registry_path": None,
}


# === [NAV-10] UI config loading (defaults/roaming) ============================
def load_ui_config() -> Dict:
    path = CONFIG_PATH
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_DEFAULT_UI_CONFIG, indent=2), encoding="utf-8")
        return _DEFAULT_UI_CONFIG.copy()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("unreadable ui config at %s; using defaults", path)
        return _DEFAULT_UI_CONFIG.copy()
    if not isinstance(data, dict):
        return _DEFAULT_UI_CONFIG.copy()
    for key, value in _DEFAULT_UI_CONFIG.items():
        data.setdefault(key, value)
    return data


def save_ui_config(data: Dict) -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2), encoding="utf-8")


def get_sidebar_collapsed() -> bool:
    return bool(load_ui_config().get("sidebar_collapsed", False))


def set_sidebar_collapsed(collapsed: bool) -> None:
    config = load_ui_config()
    config["sidebar_collapsed"] = bool(collapsed)
    try:
        save_ui_config(config)
    except OSError as exc:
        logger.warning("could not persist sidebar state: %s", exc)


def get_workspace_id() -> str:
    return safe_workspace_id(load_ui_config().get("workspace_id"))


# === [NAV-20] Module flag persistence (per workspace) =========================
def safe_workspace_id(workspace_id) -> str:
    if not isinstance(workspace_id, str):
        return DEFAULT_WORKSPACE_ID
    cleaned = workspace_id.strip().replace("/", "_").replace("\\", "_")
    if cleaned in ("", ".", ".."):
        return DEFAULT_WORKSPACE_ID
    return cleaned


def flags_path(workspace_id: str) -> Path:
    return WORKSPACES_ROOT / safe_workspace_id(workspace_id) / "modules" / "flags.json"


def load_module_flags(workspace_id: str) -> Dict[str, bool]:
    """Read persisted overrides; non-bool values are dropped."""
    path = flags_path(workspace_id)
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("unreadable module flags at %s; ignoring", path)
        return {}
    if not isinstance(raw, dict):
        return {}
    return {str(key): value for key, value in raw.items() if isinstance(value, bool)}


def save_module_flags(workspace_id: str, enabled: Mapping[str, bool]) -> None:
    path = flags_path(workspace_id)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {str(key): bool(value) for key, value in enabled.items()}
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def flags_saver(workspace_id: str) -> Callable[[Mapping[str, bool]], None]:
    def _save(enabled: Mapping[str, bool]) -> None:
        save_module_flags(workspace_id, enabled)

    return _save


# === [NAV-30] Registry selection ==============================================
def resolve_registry(config: Optional[Dict] = None) -> ModuleRegistry:
    """Built-in registry unless ``registry_path`` points at a JSON registry."""
    config = config if config is not None else load_ui_config()
    raw_path = config.get("registry_path")
    if isinstance(raw_path, str) and raw_path.strip():
        return load_registry(Path(raw_path.strip()))
    return get_default_registry()


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "WORKSPACES_ROOT",
    "DEFAULT_WORKSPACE_ID",
    "load_ui_config",
    "save_ui_config",
    "get_sidebar_collapsed",
    "set_sidebar_collapsed",
    "get_workspace_id",
    "safe_workspace_id",
    "flags_path",
    "load_module_flags",
    "save_module_flags",
    "flags_saver",
    "resolve_registry",
]
