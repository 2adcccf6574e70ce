from __future__ import annotations

import logging
import uuid
from typing import Callable, Dict, List, Mapping, Optional, Union

from module_registry import ModuleRegistry
from module_registry.types import EnabledMap, GroupState, ModuleNode
from module_registry.visibility import (
    child_toggle_patch,
    compute_default_map,
    enabled_modules,
    group_state,
    group_toggle_patch,
    is_enabled,
)

from . import config as ui_config

logger = logging.getLogger("navdeck.flags")

Patch = Union[Mapping[str, bool], Callable[[EnabledMap], Mapping[str, bool]]]
SaveHook = Callable[[Mapping[str, bool]], None]
Listener = Callable[[EnabledMap], None]


class ModuleFlags:
    """Owns the enabled map shared by the sidebar and the settings editor.

    The map is materialized from the registry defaults on construction, so
    every registry id has an explicit entry. Each mutation is applied in one
    step, then handed to the ``save`` hook and to subscribed listeners.
    """

    def __init__(
        self,
        registry: ModuleRegistry,
        overrides: Optional[Mapping[str, bool]] = None,
        *,
        save: Optional[SaveHook] = None,
    ) -> None:
        self._registry = registry
        self._map: EnabledMap = compute_default_map(registry)
        if overrides:
            for key, value in overrides.items():
                if isinstance(value, bool):
                    self._map[str(key)] = value
        self._save = save
        self._listeners: Dict[str, Listener] = {}

    @property
    def registry(self) -> ModuleRegistry:
        return self._registry

    @property
    def map(self) -> EnabledMap:
        return dict(self._map)

    def is_enabled(self, node_id: str) -> bool:
        return is_enabled(self._map, node_id)

    def group_state(self, group_id: str) -> GroupState:
        group = self._registry.group(group_id)
        if group is None:
            return GroupState.ON if self.is_enabled(group_id) else GroupState.OFF
        return group_state(group, self._map)

    def visible_modules(self) -> List[ModuleNode]:
        return enabled_modules(self._registry, self._map)

    # --- mutations
    def set_enabled(self, node_id: str, value: bool) -> None:
        """Write a single flag; no cascade to parent or children."""
        self._commit({node_id: bool(value)}, reason="set")

    def set_enabled_many(self, patch: Patch) -> None:
        resolved = patch(dict(self._map)) if callable(patch) else patch
        self._commit({str(k): bool(v) for k, v in (resolved or {}).items()}, reason="bulk")

    def set_group_enabled(self, group_id: str, on: bool) -> None:
        group = self._registry.group(group_id)
        if group is None:
            self.set_enabled(group_id, on)
            return
        self._commit(group_toggle_patch(group, on), reason="group")

    def toggle_group(self, group_id: str) -> bool:
        """Group switch click: ``on`` turns everything off, otherwise on."""
        next_on = self.group_state(group_id) is not GroupState.ON
        self.set_group_enabled(group_id, next_on)
        return next_on

    def set_child_enabled(self, group_id: str, child_id: str, value: bool) -> None:
        """Child switch: write the child, then recompute its group flag.

        Ids that are not a child of ``group_id`` are a plain write.
        """
        group = self._registry.group(group_id)
        if group is None or self._registry.parent_of(child_id) is not group:
            self.set_enabled(child_id, value)
            return
        self.set_enabled_many(lambda prev: child_toggle_patch(group, child_id, value, prev))

    def reset(self) -> None:
        self._map = compute_default_map(self._registry)
        logger.info("module flags reset to registry defaults")
        self._after_change()

    # --- listeners
    def subscribe(self, listener: Listener) -> str:
        token = str(uuid.uuid4())
        self._listeners[token] = listener
        return token

    def unsubscribe(self, token: str) -> None:
        self._listeners.pop(token, None)

    def _commit(self, patch: Mapping[str, bool], *, reason: str) -> None:
        changed = {key: value for key, value in patch.items() if self._map.get(key) is not value}
        if not changed:
            return
        self._map.update(changed)
        logger.debug("module flags %s: %s", reason, changed)
        self._after_change()

    def _after_change(self) -> None:
        snapshot = dict(self._map)
        if self._save is not None:
            try:
                self._save(snapshot)
            except Exception as exc:
                logger.warning("module flags save failed: %s", exc)
        for listener in list(self._listeners.values()):
            try:
                listener(dict(snapshot))
            except Exception as exc:
                logger.error("module flags listener error: %s", exc)


def load_workspace_flags(registry: ModuleRegistry, workspace_id: str) -> ModuleFlags:
    overrides = ui_config.load_module_flags(workspace_id)
    logger.info("loaded %d module flag overrides for workspace %s", len(overrides), workspace_id)
    return ModuleFlags(registry, overrides, save=ui_config.flags_saver(workspace_id))
