"""Name normalisation, color encoding and export metadata helpers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Dict, List, Mapping, Optional

from .models import RGBA

EXPORT_VERSION = "1.0.0"
GENERATOR_NAME = "Multibrand Token Exporter"
FALLBACK_HEX = "#000000"

_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"^\d+$")


@dataclass(frozen=True)
class VariablePath:
    """Folder names and leaf token name parsed from a variable name."""

    folders: List[str]
    filename: str


def sanitize_name(name: str) -> str:
    """Replace whitespace and slashes with hyphens and lowercase the result."""
    return _WHITESPACE.sub("-", name).replace("/", "-").lower()


def to_kebab_case(name: str) -> str:
    return _WHITESPACE.sub("-", name).replace("/", "-").lower()


def sanitize_folder_name(name: str) -> str:
    """Strip whitespace and slashes from a folder name, preserving case."""
    return _WHITESPACE.sub("", name).replace("/", "")


def _to_hex(channel: float) -> str:
    # Half-up rounding, matching the exported files produced by the plugin.
    return format(int(math.floor(channel * 255 + 0.5)), "02x")


def rgba_to_hex(color: RGBA) -> str:
    """Encode a normalized color as ``#RRGGBB``, or ``#RRGGBBAA`` when translucent."""
    digits = _to_hex(color.r) + _to_hex(color.g) + _to_hex(color.b)
    if color.a is not None and color.a < 1:
        digits += _to_hex(color.a)
    return f"#{digits}".upper()


def parse_color_value(value: Any) -> str:
    """Return the hex for an RGBA-like value, or black when it is not a color."""
    if isinstance(value, RGBA):
        return rgba_to_hex(value)
    if isinstance(value, Mapping) and "r" in value:
        return rgba_to_hex(
            RGBA(
                r=float(value.get("r", 0)),
                g=float(value.get("g", 0)),
                b=float(value.get("b", 0)),
                a=_optional_float(value.get("a")),
            )
        )
    return FALLBACK_HEX


def parse_variable_path(full_name: str) -> VariablePath:
    """Split a ``/``-delimited variable name into folders and a kebab-case leaf.

    A purely numeric leaf is prefixed with its parent segment, so
    ``Colors/Gray/50`` yields the leaf ``gray-50``.
    """
    parts = full_name.split("/")
    folders = [sanitize_folder_name(part) for part in parts[:-1]]
    leaf = parts[-1]
    filename = to_kebab_case(leaf)
    if _DIGITS.match(leaf) and len(parts) > 1:
        filename = f"{to_kebab_case(parts[-2])}-{leaf}"
    return VariablePath(folders=folders, filename=filename)


def create_export_metadata(now: datetime | None = None) -> Dict[str, Any]:
    moment = now or datetime.now(UTC)
    return {
        "exportedAt": moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "timestamp": int(moment.timestamp() * 1000),
        "version": EXPORT_VERSION,
        "generator": GENERATOR_NAME,
    }


def _optional_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


__all__ = [
    "EXPORT_VERSION",
    "FALLBACK_HEX",
    "GENERATOR_NAME",
    "VariablePath",
    "create_export_metadata",
    "parse_color_value",
    "parse_variable_path",
    "rgba_to_hex",
    "sanitize_folder_name",
    "sanitize_name",
    "to_kebab_case",
]
