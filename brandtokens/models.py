"""Core data models shared across brandtokens components."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

COLOR_TYPE = "COLOR"
ALIAS_TYPE = "VARIABLE_ALIAS"


@dataclass(frozen=True)
class RGBA:
    """Normalized color with channels in the 0..1 range."""

    r: float
    g: float
    b: float
    a: Optional[float] = None


@dataclass(frozen=True)
class RawColor:
    """Literal mode value. ``color`` is an RGBA for COLOR variables."""

    color: Any


@dataclass(frozen=True)
class AliasReference:
    """Mode value pointing at another variable by identifier."""

    id: str


Value = Union[RawColor, AliasReference]


def is_alias(value: Optional[Value]) -> bool:
    return isinstance(value, AliasReference)


@dataclass(frozen=True)
class Mode:
    mode_id: str
    name: str


@dataclass
class Collection:
    """Named set of modes grouping variables."""

    id: str
    name: str
    modes: List[Mode] = field(default_factory=list)

    def mode_name(self, mode_id: str) -> Optional[str]:
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode.name
        return None

    def find_mode(self, fragment: str) -> Optional[Mode]:
        """Return the first mode whose name contains ``fragment``, ignoring case."""
        needle = fragment.lower()
        for mode in self.modes:
            if needle in mode.name.lower():
                return mode
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "modes": [{"modeId": mode.mode_id, "name": mode.name} for mode in self.modes],
        }


@dataclass
class Variable:
    """Design variable with one value per mode of its collection."""

    id: str
    name: str
    resolved_type: str
    collection_id: Optional[str]
    values_by_mode: Dict[str, Value] = field(default_factory=dict)

    @property
    def is_color(self) -> bool:
        return self.resolved_type == COLOR_TYPE


@dataclass(frozen=True)
class ModeBinding:
    """Pairs a token collection mode with the primitive mode used to resolve it."""

    mode_id: str
    primitive_mode_id: str


@dataclass
class BrandConfig:
    name: str
    light: Optional[ModeBinding] = None
    dark: Optional[ModeBinding] = None

    def bindings(self) -> Iterator[Tuple[str, ModeBinding]]:
        """Yield ``(mode_type, binding)`` for each configured side, light first."""
        if self.light is not None and self.light.mode_id:
            yield "light", self.light
        if self.dark is not None and self.dark.mode_id:
            yield "dark", self.dark


@dataclass
class ExportConfig:
    """Collections and brands selected for one export run."""

    token_collection_id: str
    primitive_collection_id: str
    brands: List[BrandConfig] = field(default_factory=list)
    lang: str = "en"


@dataclass(frozen=True)
class ColorResult:
    """Resolved hex value plus the provenance of the primitive that supplied it."""

    hex: str
    primitive_name: str

    def to_dict(self) -> Dict[str, str]:
        return {"hex": self.hex, "primitiveName": self.primitive_name}


@dataclass
class TokenObject:
    name: str
    path: str
    modes: Dict[str, Dict[str, ColorResult]] = field(default_factory=dict)
    type: str = field(default="token", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "path": self.path,
            "modes": {
                brand: {mode: result.to_dict() for mode, result in results.items()}
                for brand, results in self.modes.items()
            },
        }


@dataclass
class GroupObject:
    name: str
    children: List["TreeNode"] = field(default_factory=list)
    type: str = field(default="group", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
        }


TreeNode = Union[GroupObject, TokenObject]


@dataclass
class ExportDocument:
    metadata: Dict[str, Any]
    tokens: List[TreeNode] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "tokens": [node.to_dict() for node in self.tokens],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
