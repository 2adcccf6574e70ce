from .registry import MODULES, ModuleRegistry, get_default_registry, load_registry, validate_registry
from .types import EnabledMap, GroupState, ModuleGroup, ModuleLeaf, ModuleNode, NodeKind, RegistryConfigError
from .visibility import compute_default_map, enabled_modules, flatten_ids, group_state, is_enabled

__all__ = [
    "MODULES",
    "ModuleRegistry",
    "get_default_registry",
    "load_registry",
    "validate_registry",
    "EnabledMap",
    "GroupState",
    "ModuleGroup",
    "ModuleLeaf",
    "ModuleNode",
    "NodeKind",
    "RegistryConfigError",
    "compute_default_map",
    "enabled_modules",
    "flatten_ids",
    "group_state",
    "is_enabled",
]
