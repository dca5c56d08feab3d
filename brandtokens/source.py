"""Read-only access to variables and collections supplied by the host."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from .errors import SourceError
from .logging import get_logger
from .models import ALIAS_TYPE, RGBA, AliasReference, Collection, Mode, RawColor, Value, Variable

logger = get_logger("source")


class VariableSource(Protocol):
    """Lookup interface the exporter and resolver depend on."""

    def get_local_variable_collections(self) -> List[Collection]:
        ...

    def get_local_variables(self) -> List[Variable]:
        ...

    def get_variable_by_id(self, variable_id: str) -> Optional[Variable]:
        ...

    def get_collection_by_id(self, collection_id: str) -> Optional[Collection]:
        ...


class InMemoryVariableSource:
    """VariableSource backed by lists held in memory, preserving their order."""

    def __init__(
        self,
        collections: Iterable[Collection] = (),
        variables: Iterable[Variable] = (),
    ) -> None:
        self._collections: Dict[str, Collection] = {}
        self._variables: Dict[str, Variable] = {}
        for collection in collections:
            self.add_collection(collection)
        for variable in variables:
            self.add_variable(variable)

    def add_collection(self, collection: Collection) -> None:
        self._collections[collection.id] = collection

    def add_variable(self, variable: Variable) -> None:
        self._variables[variable.id] = variable

    def get_local_variable_collections(self) -> List[Collection]:
        return list(self._collections.values())

    def get_local_variables(self) -> List[Variable]:
        return list(self._variables.values())

    def get_variable_by_id(self, variable_id: str) -> Optional[Variable]:
        return self._variables.get(variable_id)

    def get_collection_by_id(self, collection_id: str) -> Optional[Collection]:
        return self._collections.get(collection_id)


def load_source(path: Path) -> InMemoryVariableSource:
    """Load a JSON snapshot of local collections and variables."""
    path = path.expanduser()
    if not path.exists():
        raise SourceError(f"Variable snapshot not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SourceError(f"Failed to parse {path.name}: {exc}") from exc
    source = parse_snapshot(payload)
    logger.debug(
        "Loaded %d collections and %d variables from %s",
        len(source.get_local_variable_collections()),
        len(source.get_local_variables()),
        path,
    )
    return source


def parse_snapshot(payload: Any) -> InMemoryVariableSource:
    if not isinstance(payload, Mapping):
        raise SourceError("Variable snapshot must contain a mapping at the root")
    collections = [_parse_collection(item) for item in _as_list(payload.get("collections"), "collections")]
    variables = [_parse_variable(item) for item in _as_list(payload.get("variables"), "variables")]
    return InMemoryVariableSource(collections, variables)


def parse_value(raw: Any, variable_id: str | None = None) -> Value:
    """Convert a host mode value into a RawColor or AliasReference."""
    owner = f" in variable {variable_id!r}" if variable_id else ""
    if isinstance(raw, Mapping):
        if raw.get("type") == ALIAS_TYPE:
            alias_id = raw.get("id")
            if not isinstance(alias_id, str) or not alias_id:
                raise SourceError(f"Alias value{owner} is missing its target id")
            return AliasReference(id=alias_id)
        if all(channel in raw for channel in ("r", "g", "b")):
            alpha = raw.get("a")
            try:
                color = RGBA(
                    r=float(raw["r"]),
                    g=float(raw["g"]),
                    b=float(raw["b"]),
                    a=float(alpha) if alpha is not None else None,
                )
            except (TypeError, ValueError) as exc:
                raise SourceError(f"Invalid color channel{owner}: {dict(raw)!r}") from exc
            return RawColor(color)
    return RawColor(raw)


def _parse_collection(item: Any) -> Collection:
    data = _as_mapping(item, "collection")
    modes = [
        Mode(
            mode_id=_require_str(_as_mapping(mode, "mode"), "modeId"),
            name=_require_str(_as_mapping(mode, "mode"), "name"),
        )
        for mode in _as_list(data.get("modes"), "modes")
    ]
    return Collection(id=_require_str(data, "id"), name=_require_str(data, "name"), modes=modes)


def _parse_variable(item: Any) -> Variable:
    data = _as_mapping(item, "variable")
    values = data.get("valuesByMode") or {}
    if not isinstance(values, Mapping):
        raise SourceError(f"valuesByMode of variable {data.get('id')!r} must be a mapping")
    collection_id = data.get("variableCollectionId")
    return Variable(
        id=_require_str(data, "id"),
        name=_require_str(data, "name"),
        resolved_type=_require_str(data, "resolvedType"),
        collection_id=collection_id if isinstance(collection_id, str) else None,
        values_by_mode={str(mode_id): parse_value(value, data.get("id")) for mode_id, value in values.items()},
    )


def _as_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SourceError(f"Each {label} entry must be a mapping")
    return value


def _as_list(value: Any, label: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SourceError(f"'{label}' must be a list")
    return value


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise SourceError(f"Missing required string field '{key}'")
    return value


__all__ = [
    "InMemoryVariableSource",
    "VariableSource",
    "load_source",
    "parse_snapshot",
    "parse_value",
]
