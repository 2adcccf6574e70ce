from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Union


class NodeKind(str, Enum):
    LEAF = "leaf"
    GROUP = "group"


class GroupState(str, Enum):
    ON = "on"
    OFF = "off"
    PARTIAL = "partial"


class RegistryConfigError(ValueError):
    """Raised when a module registry violates its structural invariants."""


@dataclass(frozen=True)
class ModuleLeaf:
    id: str
    label: str
    href: str
    icon: Optional[str] = None
    default_enabled: bool = True

    kind: ClassVar[NodeKind] = NodeKind.LEAF


@dataclass(frozen=True)
class ModuleGroup:
    id: str
    label: str
    children: Tuple[ModuleLeaf, ...] = ()
    href: Optional[str] = None
    icon: Optional[str] = None
    default_enabled: bool = True

    kind: ClassVar[NodeKind] = NodeKind.GROUP


ModuleNode = Union[ModuleLeaf, ModuleGroup]

# Overrides only: a missing key reads as enabled.
EnabledMap = Dict[str, bool]
