"""Export pipeline turning token variables into a sorted, brand-resolved tree."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, TextIO, Tuple

from .config import parse_export_config
from .errors import CollectionsNotFoundError
from .logging import get_logger
from .messages import DEFAULT_LANG, translate
from .models import BrandConfig, Collection, ExportConfig, ExportDocument, TokenObject, TreeNode, Variable
from .resolve import ColorResolver
from .source import VariableSource
from .tree import insert_token_into_tree, sort_tokens_alphabetically
from .utils import create_export_metadata, parse_variable_path

DOWNLOAD_MESSAGE = "download-json"
INIT_DATA_MESSAGE = "init-data"


class ExportHost(Protocol):
    """Transport back to whoever requested the export."""

    def post_message(self, message: Mapping[str, Any]) -> None:
        ...

    def notify(self, text: str) -> None:
        ...


class RecordingHost:
    """Host that keeps posted messages and notifications in memory."""

    def __init__(self) -> None:
        self.messages: List[Dict[str, Any]] = []
        self.notifications: List[str] = []

    def post_message(self, message: Mapping[str, Any]) -> None:
        self.messages.append(dict(message))

    def notify(self, text: str) -> None:
        self.notifications.append(text)

    def last_document(self) -> Optional[ExportDocument]:
        for message in reversed(self.messages):
            if message.get("type") == DOWNLOAD_MESSAGE:
                return message.get("data")
        return None


class FileHost:
    """Host that writes exported documents as JSON to a file or stream."""

    def __init__(self, output: Path | None = None, stream: TextIO | None = None) -> None:
        self.output = output
        self.stream = stream or sys.stdout
        self.written: Optional[Path] = None
        self.logger = get_logger("host")

    def post_message(self, message: Mapping[str, Any]) -> None:
        if message.get("type") != DOWNLOAD_MESSAGE:
            self.logger.debug("Ignoring host message of type %s", message.get("type"))
            return
        document = message["data"]
        text = document.to_json() if isinstance(document, ExportDocument) else str(document)
        if self.output is None:
            self.stream.write(text + "\n")
            return
        self.output.parent.mkdir(parents=True, exist_ok=True)
        self.output.write_text(text + "\n", encoding="utf-8")
        self.written = self.output

    def notify(self, text: str) -> None:
        self.logger.info(text)


class TokenExporter:
    """Coordinates collection validation, color resolution and tree assembly."""

    def __init__(
        self,
        source: VariableSource,
        host: ExportHost,
        resolver: ColorResolver | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.source = source
        self.host = host
        self.resolver = resolver or ColorResolver(source)
        self.clock = clock
        self.lang = DEFAULT_LANG
        self.logger = get_logger("exporter")

    def export_tokens(self, config: ExportConfig) -> None:
        """Build the export document for ``config`` and post it to the host."""
        lang = config.lang or DEFAULT_LANG
        self.host.notify(translate("analyzing", lang))
        document = self.build_document(config)
        self.host.post_message({"type": DOWNLOAD_MESSAGE, "data": document})
        self.host.notify(translate("export_finished", lang))

    def build_document(self, config: ExportConfig) -> ExportDocument:
        tokens, variables = self._validate_and_get_variables(
            config.token_collection_id, config.primitive_collection_id
        )
        self._check_brand_modes(tokens, config.brands)
        self.logger.info(
            "Exporting %d variables for %d brands", len(variables), len(config.brands)
        )
        root = self._process_variables(variables, config.brands)
        now = self.clock() if self.clock is not None else None
        return ExportDocument(
            metadata=create_export_metadata(now),
            tokens=sort_tokens_alphabetically(root),
        )

    def list_collections(self) -> List[Dict[str, Any]]:
        return [collection.to_dict() for collection in self.source.get_local_variable_collections()]

    def handle_message(self, message: Mapping[str, Any]) -> None:
        """Route an ``init`` or ``export`` request from the UI, reporting failures as notifications."""
        kind = message.get("type")
        if kind == "init":
            lang = message.get("lang")
            if isinstance(lang, str) and lang:
                self.lang = lang
            try:
                collections = self.list_collections()
            except Exception as exc:  # host boundary: report, never crash the session
                self.logger.error("Error during initialization: %s", exc)
                self.host.notify(translate("init_error", self.lang) + str(exc))
                return
            self.host.post_message({"type": INIT_DATA_MESSAGE, "collections": collections})
        elif kind == "export":
            try:
                self.export_tokens(parse_export_config(message.get("config")))
            except Exception as exc:  # host boundary: report, never crash the session
                self.logger.error("Error during export: %s", exc)
                self.host.notify(translate("export_error", self.lang) + str(exc))
        else:
            self.logger.debug("Ignoring message of type %s", kind)

    def _validate_and_get_variables(
        self, token_collection_id: str, primitive_collection_id: str
    ) -> Tuple[Collection, List[Variable]]:
        collections = self.source.get_local_variable_collections()
        primitives, tokens = _find_collections(collections, primitive_collection_id, token_collection_id)
        if primitives is None or tokens is None:
            raise CollectionsNotFoundError()
        self.logger.debug("Token collection %s, primitive collection %s", tokens.name, primitives.name)
        variables = [
            variable
            for variable in self.source.get_local_variables()
            if variable.collection_id == token_collection_id
        ]
        return tokens, variables

    def _check_brand_modes(self, tokens: Collection, brands: Sequence[BrandConfig]) -> None:
        for brand in brands:
            for mode_type, binding in brand.bindings():
                mode_name = tokens.mode_name(binding.mode_id)
                if mode_name is None:
                    self.logger.warning(
                        "Brand %s %s mode %s is not a mode of %s; its tokens will resolve as raw black",
                        brand.name,
                        mode_type,
                        binding.mode_id,
                        tokens.name,
                    )
                else:
                    self.logger.debug("Brand %s %s uses mode %s", brand.name, mode_type, mode_name)

    def _process_variables(
        self, variables: Sequence[Variable], brands: Sequence[BrandConfig]
    ) -> List[TreeNode]:
        root: List[TreeNode] = []
        for variable in variables:
            if not variable.is_color:
                continue
            path = parse_variable_path(variable.name)
            token = self._create_token_object(variable, path.filename, brands)
            insert_token_into_tree(root, path.folders, token)
        return root

    def _create_token_object(
        self, variable: Variable, filename: str, brands: Sequence[BrandConfig]
    ) -> TokenObject:
        token = TokenObject(name=filename, path=variable.name)
        for brand in brands:
            token.modes[brand.name] = self.resolver.resolve_brand_colors(variable, brand)
        return token


def _find_collections(
    collections: Sequence[Collection], primitive_id: str, token_id: str
) -> Tuple[Optional[Collection], Optional[Collection]]:
    by_id = {collection.id: collection for collection in collections}
    return by_id.get(primitive_id), by_id.get(token_id)


def export_tokens(source: VariableSource, config: ExportConfig, host: ExportHost) -> None:
    TokenExporter(source, host).export_tokens(config)


__all__ = [
    "ExportHost",
    "FileHost",
    "RecordingHost",
    "TokenExporter",
    "export_tokens",
]
