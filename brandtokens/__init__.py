"""Multi-brand color token export: alias resolution and nested tree assembly."""

from .errors import (
    BrandTokensError,
    CircularAliasError,
    CollectionsNotFoundError,
    ConfigError,
    SourceError,
)
from .exporter import ExportHost, FileHost, RecordingHost, TokenExporter, export_tokens
from .models import (
    RGBA,
    AliasReference,
    BrandConfig,
    Collection,
    ColorResult,
    ExportConfig,
    ExportDocument,
    GroupObject,
    Mode,
    ModeBinding,
    RawColor,
    TokenObject,
    Variable,
)
from .resolve import ColorResolver, resolve_brand_colors, resolve_color
from .source import InMemoryVariableSource, VariableSource, load_source
from .tree import insert_token_into_tree, sort_tokens_alphabetically, upsert_group
from .utils import parse_variable_path, rgba_to_hex

__version__ = "1.0.0"

__all__ = [
    "AliasReference",
    "BrandConfig",
    "BrandTokensError",
    "CircularAliasError",
    "Collection",
    "CollectionsNotFoundError",
    "ColorResolver",
    "ColorResult",
    "ConfigError",
    "ExportConfig",
    "ExportDocument",
    "ExportHost",
    "FileHost",
    "GroupObject",
    "InMemoryVariableSource",
    "Mode",
    "ModeBinding",
    "RGBA",
    "RawColor",
    "RecordingHost",
    "SourceError",
    "TokenExporter",
    "TokenObject",
    "Variable",
    "VariableSource",
    "export_tokens",
    "insert_token_into_tree",
    "load_source",
    "parse_variable_path",
    "resolve_brand_colors",
    "resolve_color",
    "rgba_to_hex",
    "sort_tokens_alphabetically",
    "upsert_group",
]
