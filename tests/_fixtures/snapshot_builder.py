"""Helper utilities for constructing variable snapshots in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from brandtokens.source import InMemoryVariableSource, parse_snapshot


def rgba(r: float, g: float, b: float, a: float | None = None) -> Dict[str, float]:
    color = {"r": r, "g": g, "b": b}
    if a is not None:
        color["a"] = a
    return color


def alias(variable_id: str) -> Dict[str, str]:
    return {"type": "VARIABLE_ALIAS", "id": variable_id}


class SnapshotBuilder:
    """Accumulates collections and variables in the host's JSON shape."""

    def __init__(self) -> None:
        self.collections: List[Dict[str, Any]] = []
        self.variables: List[Dict[str, Any]] = []

    def collection(self, collection_id: str, name: str, modes: Sequence[Tuple[str, str]]) -> "SnapshotBuilder":
        self.collections.append(
            {
                "id": collection_id,
                "name": name,
                "modes": [{"modeId": mode_id, "name": mode_name} for mode_id, mode_name in modes],
            }
        )
        return self

    def variable(
        self,
        variable_id: str,
        name: str,
        collection_id: str,
        values: Mapping[str, Any],
        *,
        resolved_type: str = "COLOR",
    ) -> "SnapshotBuilder":
        self.variables.append(
            {
                "id": variable_id,
                "name": name,
                "resolvedType": resolved_type,
                "variableCollectionId": collection_id,
                "valuesByMode": dict(values),
            }
        )
        return self

    def payload(self) -> Dict[str, Any]:
        return {"collections": self.collections, "variables": self.variables}

    def source(self) -> InMemoryVariableSource:
        return parse_snapshot(self.payload())

    def write(self, path: Path) -> Path:
        """Write the snapshot as JSON and return its path."""
        path.write_text(json.dumps(self.payload(), indent=2), encoding="utf-8")
        return path


__all__ = ["SnapshotBuilder", "alias", "rgba"]
