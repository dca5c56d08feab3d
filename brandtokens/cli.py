"""CLI entrypoints for brandtokens commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import load_config
from .errors import BrandTokensError, CollectionsNotFoundError, ConfigError, SourceError
from .exporter import FileHost, TokenExporter
from .logging import configure_logging
from .models import ExportConfig
from .source import VariableSource, load_source
from .utils import sanitize_name


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands suppress defaults so flags given before the command survive.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also append log records to this file.",
    )


def _add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        help="Path to a JSON snapshot of local variables and collections.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brandtokens",
        description="Export multi-brand color tokens as a nested, sorted JSON tree.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export",
        help="Resolve token colors per brand and write the export document.",
    )
    _add_logging_options(export_parser, suppress_default=True)
    _add_source_argument(export_parser)
    export_parser.add_argument(
        "-c",
        "--config",
        required=True,
        help="Export configuration (YAML or JSON) naming collections and brands.",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File or directory to write to (defaults to stdout).",
    )

    collections_parser = subparsers.add_parser(
        "collections",
        help="List variable collections and their modes.",
    )
    _add_logging_options(collections_parser, suppress_default=True)
    _add_source_argument(collections_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve export requests over HTTP.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    _add_source_argument(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for brandtokens commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        source = load_source(Path(args.source))
    except SourceError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "export":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        output = _resolve_output(args.output, source, config)
        host = FileHost(output=output)
        try:
            TokenExporter(source, host).export_tokens(config)
        except CollectionsNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except BrandTokensError as exc:
            parser.exit(1, f"brandtokens export failed: {exc}\nRun with --verbose for more details.\n")
        if host.written is not None:
            print(f"Tokens exported to {_relativize(host.written)}", file=sys.stderr)
    elif args.command == "collections":
        exporter = TokenExporter(source, FileHost())
        print(json.dumps(exporter.list_collections(), indent=2, ensure_ascii=False))
    elif args.command == "serve":
        from .service import run_service

        run_service(source, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _resolve_output(
    output: str | None, source: VariableSource, config: ExportConfig
) -> Path | None:
    if output is None:
        return None
    path = Path(output).expanduser()
    if not path.is_dir():
        return path
    collection = source.get_collection_by_id(config.token_collection_id)
    stem = sanitize_name(collection.name) if collection is not None else "tokens"
    return path / f"{stem}.json"


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
