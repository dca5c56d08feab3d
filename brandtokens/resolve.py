"""Alias resolution from semantic tokens down to primitive colors."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .errors import CircularAliasError
from .logging import get_logger
from .models import AliasReference, BrandConfig, ColorResult, Mode, RawColor, Variable, is_alias
from .source import VariableSource
from .utils import parse_color_value

SENTINEL_HEX = "#FF00FF"
RAW_PROVENANCE = "Raw"
UNRESOLVED_PROVENANCE = "Unresolved"
FALLBACK_MODE_LABEL = "fallback"


def _fallback_result(primitive_name: str) -> ColorResult:
    return ColorResult(hex=SENTINEL_HEX, primitive_name=primitive_name)


class ColorResolver:
    """Resolves token variables to hex colors against a read-only VariableSource.

    Resolution never raises for broken references or mode mismatches; those
    degrade to the magenta sentinel with a provenance string describing what
    was missing. Only a circular alias chain raises.
    """

    def __init__(self, source: VariableSource) -> None:
        self.source = source
        self.logger = get_logger("resolve")

    def resolve_color(
        self,
        variable: Variable,
        mode_id: str,
        primitive_mode_id: str,
        brand_mode_type: Optional[str] = None,
        *,
        _chain: Tuple[Variable, ...] = (),
    ) -> ColorResult:
        """Resolve ``variable`` at ``mode_id``, following its alias into the primitives."""
        if any(seen.id == variable.id for seen in _chain):
            raise CircularAliasError([seen.name for seen in _chain] + [variable.name])

        value = variable.values_by_mode.get(mode_id)
        if not isinstance(value, AliasReference):
            color = value.color if isinstance(value, RawColor) else None
            return ColorResult(hex=parse_color_value(color), primitive_name=RAW_PROVENANCE)

        primitive = self.source.get_variable_by_id(value.id)
        if primitive is None:
            self.logger.debug("Alias target %s of %s not found", value.id, variable.name)
            return _fallback_result(UNRESOLVED_PROVENANCE)

        direct = self._resolve_raw(primitive, primitive_mode_id)
        if direct is not None:
            return direct

        if brand_mode_type:
            matching = self._find_matching_mode(primitive, brand_mode_type)
            if matching is not None:
                mode_result = self._resolve_raw(primitive, matching.mode_id, matching.name)
                if mode_result is not None:
                    return mode_result

                if is_alias(primitive.values_by_mode.get(matching.mode_id)):
                    nested = self.resolve_color(
                        primitive,
                        matching.mode_id,
                        matching.mode_id,
                        brand_mode_type,
                        _chain=_chain + (variable,),
                    )
                    return ColorResult(
                        hex=nested.hex,
                        primitive_name=f"{primitive.name} → {nested.primitive_name}",
                    )

        first_mode = next(iter(primitive.values_by_mode), None)
        if first_mode is not None:
            fallback = self._resolve_raw(primitive, first_mode, FALLBACK_MODE_LABEL)
            if fallback is not None:
                return fallback

        self.logger.debug("No usable value for %s via %s", variable.name, primitive.name)
        return _fallback_result(f"{UNRESOLVED_PROVENANCE}: {primitive.name}")

    def resolve_brand_colors(self, variable: Variable, brand: BrandConfig) -> Dict[str, ColorResult]:
        """Resolve each configured light/dark binding of ``brand`` for ``variable``."""
        results: Dict[str, ColorResult] = {}
        for mode_type, binding in brand.bindings():
            results[mode_type] = self.resolve_color(
                variable, binding.mode_id, binding.primitive_mode_id, mode_type
            )
        return results

    def _resolve_raw(
        self, variable: Variable, mode_id: str, mode_name: Optional[str] = None
    ) -> Optional[ColorResult]:
        value = variable.values_by_mode.get(mode_id)
        # A null mode value counts as absent so resolution moves to the next tier.
        if not isinstance(value, RawColor) or value.color is None:
            return None
        suffix = f" ({mode_name})" if mode_name else ""
        return ColorResult(hex=parse_color_value(value.color), primitive_name=f"{variable.name}{suffix}")

    def _find_matching_mode(self, variable: Variable, brand_mode_type: str) -> Optional[Mode]:
        if not variable.collection_id:
            return None
        try:
            collection = self.source.get_collection_by_id(variable.collection_id)
        except Exception as exc:  # host lookups may fail; treat as no match
            self.logger.warning("Error accessing variable collection %s: %s", variable.collection_id, exc)
            return None
        if collection is None:
            return None
        return collection.find_mode(brand_mode_type)


def resolve_color(
    source: VariableSource,
    variable: Variable,
    mode_id: str,
    primitive_mode_id: str,
    brand_mode_type: Optional[str] = None,
) -> ColorResult:
    return ColorResolver(source).resolve_color(variable, mode_id, primitive_mode_id, brand_mode_type)


def resolve_brand_colors(
    source: VariableSource, variable: Variable, brand: BrandConfig
) -> Dict[str, ColorResult]:
    return ColorResolver(source).resolve_brand_colors(variable, brand)


__all__ = [
    "ColorResolver",
    "SENTINEL_HEX",
    "resolve_brand_colors",
    "resolve_color",
]
