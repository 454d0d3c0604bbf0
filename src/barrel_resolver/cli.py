"""Command line interface: transform one barrel file or a whole directory."""

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Sequence

from barrel_resolver.config import get_settings
from barrel_resolver.core import LoaderOptions, SourceReadError
from barrel_resolver.logging import configure_logging, get_logger
from barrel_resolver.services import BarrelLoader, BatchProcessor, LocalFileSystem

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="barrel-resolver",
        description="Resolve barrel re-exports and regenerate minimal export statements.",
    )
    p.add_argument("path", help="Barrel file to transform, or a directory to scan")
    p.add_argument("--sort", action="store_true", help="Sort exports by source and name")
    p.add_argument(
        "--no-remove-duplicates",
        action="store_true",
        help="Don't remove duplicate exports",
    )
    p.add_argument(
        "--resolve-barrel",
        action="store_true",
        help="Resolve re-export chains through nested barrel files",
    )
    p.add_argument(
        "--convert-namespace",
        action="store_true",
        help="Convert `export *` from leaf modules to named exports",
    )
    p.add_argument("--json", action="store_true", help="Print resolved entries as JSON")
    p.add_argument(
        "--write",
        action="store_true",
        help="Rewrite files in place instead of printing",
    )
    p.add_argument("--workers", type=int, default=None, help="Worker processes for directories")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return p


def options_from_args(args: argparse.Namespace) -> LoaderOptions:
    defaults = get_settings().loader_options()
    return LoaderOptions(
        remove_duplicates=defaults.remove_duplicates and not args.no_remove_duplicates,
        sort=defaults.sort or args.sort,
        resolve_barrel_exports=defaults.resolve_barrel_exports or args.resolve_barrel,
        convert_namespace_to_named=(
            defaults.convert_namespace_to_named or args.convert_namespace
        ),
    )


def _run_file(path: str, options: LoaderOptions, args: argparse.Namespace) -> int:
    file_system = LocalFileSystem()
    loader = BarrelLoader(options=options, file_system=file_system)

    try:
        source = file_system.read_file(path)
    except SourceReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result, entries = loader.transform(source, path)

    if args.json:
        payload = [
            {
                "specifier": e.specifier,
                "source": e.source,
                "kind": e.kind.value,
                "alias": e.alias,
                "is_type_only": e.is_type_only,
                "line": e.origin_line,
            }
            for e in entries
        ]
        print(json.dumps({"count": len(payload), "exports": payload}, indent=2))
        return 0

    if args.write:
        if result != source:
            file_system.write_file(path, result)
            print(f"Rewrote {path}", file=sys.stderr)
        return 0

    sys.stdout.write(result)
    return 0


def _run_directory(path: str, options: LoaderOptions, args: argparse.Namespace) -> int:
    processor = BatchProcessor(
        options,
        max_workers=args.workers,
        log_level="DEBUG" if args.verbose else None,
    )
    results = asyncio.run(processor.process_directory(path, write=args.write))

    if args.json:
        print(
            json.dumps(
                {
                    "count": len(results),
                    "files": [
                        {
                            "path": r.relative_path,
                            "changed": r.changed,
                            "exports": r.export_count,
                            "written": r.written,
                            "error": r.error,
                        }
                        for r in results
                    ],
                },
                indent=2,
            )
        )
    else:
        for r in results:
            if r.error:
                status = f"error: {r.error}"
            elif r.written:
                status = "rewritten"
            elif r.changed:
                status = "would change"
            else:
                status = "unchanged"
            print(f"{r.relative_path}\t{r.export_count} exports\t{status}")

    return 1 if any(r.error for r in results) else 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    options = options_from_args(args)
    path = os.path.abspath(args.path)
    logger.debug("cli_started", path=path, options=str(options))

    if os.path.isdir(path):
        return _run_directory(path, options, args)
    return _run_file(path, options, args)


if __name__ == "__main__":
    sys.exit(main())
