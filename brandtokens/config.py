"""Export configuration loading (YAML or JSON)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError
from .messages import DEFAULT_LANG
from .models import BrandConfig, ExportConfig, ModeBinding


def load_config(config_path: Path) -> ExportConfig:
    """Load an export configuration from disk."""
    config_path = config_path.expanduser()
    if not config_path.exists():
        raise ConfigError(f"Export configuration not found: {config_path}")

    text = config_path.read_text(encoding="utf-8")
    if not text.strip():
        raise ConfigError(f"{config_path.name} is empty")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {config_path.name}: {exc}") from exc
    return parse_export_config(data)


def parse_export_config(data: Any) -> ExportConfig:
    """Build an ExportConfig from the mapping the UI sends with an export request."""
    if not isinstance(data, Mapping):
        raise ConfigError("Export configuration must contain a mapping at the root")

    token_collection_id = _as_str(data.get("tokenCollectionId"))
    primitive_collection_id = _as_str(data.get("primitiveCollectionId"))
    if not token_collection_id or not primitive_collection_id:
        raise ConfigError("tokenCollectionId and primitiveCollectionId are required")

    brands_data = data.get("brands")
    if brands_data is None:
        brands_data = []
    if not isinstance(brands_data, list):
        raise ConfigError("brands must be a list")

    brands: List[BrandConfig] = []
    for index, entry in enumerate(brands_data):
        brand_data = _as_dict(entry)
        name = _as_str(brand_data.get("name"))
        if not name:
            raise ConfigError(f"Brand #{index + 1} is missing a name")
        brands.append(
            BrandConfig(
                name=name,
                light=_parse_binding(brand_data.get("light")),
                dark=_parse_binding(brand_data.get("dark")),
            )
        )

    return ExportConfig(
        token_collection_id=token_collection_id,
        primitive_collection_id=primitive_collection_id,
        brands=brands,
        lang=_as_str(data.get("lang")) or DEFAULT_LANG,
    )


def _parse_binding(value: Any) -> Optional[ModeBinding]:
    binding = _as_dict(value)
    mode_id = _as_str(binding.get("modeId"))
    if not mode_id:
        return None
    return ModeBinding(mode_id=mode_id, primitive_mode_id=_as_str(binding.get("primitiveModeId")) or "")


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


__all__ = ["load_config", "parse_export_config"]
