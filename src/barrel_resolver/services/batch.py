"""Batch processing of every barrel file under a directory."""

import asyncio
import multiprocessing
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace
from functools import partial
from pathlib import Path

from barrel_resolver.config import get_settings
from barrel_resolver.core import LoaderOptions, SourceReadError
from barrel_resolver.logging import configure_logging, get_logger
from barrel_resolver.services.file_system import LocalFileSystem
from barrel_resolver.services.loader import BarrelLoader

logger = get_logger(__name__)

# Directories to always skip
SKIP_DIRECTORIES = frozenset({
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    ".next",
    ".turbo",
    ".cache",
    "coverage",
    "build",
    "dist",
    "out",
    ".idea",
    ".vscode",
})


@dataclass(frozen=True, slots=True)
class DiscoveredFile:
    """A barrel file discovered for processing."""

    relative_path: str
    absolute_path: str


@dataclass(frozen=True, slots=True)
class BatchFileResult:
    """Outcome of processing one barrel file."""

    relative_path: str
    changed: bool
    export_count: int
    written: bool = False
    error: str | None = None
    # Regenerated source, only set when it differs from the file on disk
    content: str | None = None


def discover_barrel_files(
    root_path: str, barrel_file_names: frozenset[str] | None = None
) -> list[DiscoveredFile]:
    """
    Walk a directory tree and discover barrel files.

    Respects SKIP_DIRECTORIES. Returns files sorted by path.
    """
    names = barrel_file_names or get_settings().barrel_file_names

    root = Path(root_path).resolve()
    if not root.is_dir():
        raise ValueError(f"Root path is not a directory: {root_path}")

    discovered: list[DiscoveredFile] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Filter out directories we should skip (in-place modification)
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRECTORIES]

        for filename in filenames:
            if filename not in names:
                continue
            abs_path = Path(dirpath) / filename
            discovered.append(
                DiscoveredFile(
                    relative_path=str(abs_path.relative_to(root)),
                    absolute_path=str(abs_path),
                )
            )

    # Sort by path for deterministic processing
    discovered.sort(key=lambda f: f.relative_path)

    logger.info(
        "barrel_files_discovered",
        root_path=str(root),
        file_count=len(discovered),
    )

    return discovered


def _process_file_in_process(
    absolute_path: str,
    relative_path: str,
    options: LoaderOptions,
) -> BatchFileResult:
    """
    Process a single barrel file (runs in a separate process).

    Builds its own loader, so every file gets its own resolution
    context and nothing is shared between workers. Workers only read;
    the new content travels back in the result.
    """
    file_system = LocalFileSystem()
    loader = BarrelLoader(options=options, file_system=file_system)

    try:
        source = file_system.read_file(absolute_path)
        transformed, entries = loader.transform(source, absolute_path)
    except SourceReadError as e:
        return BatchFileResult(
            relative_path=relative_path,
            changed=False,
            export_count=0,
            error=str(e),
        )

    changed = transformed != source
    return BatchFileResult(
        relative_path=relative_path,
        changed=changed,
        export_count=len(entries),
        content=transformed if changed else None,
    )


class BatchProcessor:
    """
    Processes every barrel file under a root directory.

    Files are independent, so they are handed to a process pool; one
    failing file is reported in its result and never aborts the batch.
    Rewrites happen in this process after every worker has finished,
    so no worker reads a barrel while it is being rewritten.
    """

    def __init__(
        self,
        options: LoaderOptions,
        max_workers: int | None = None,
        log_level: str | None = None,
    ) -> None:
        settings = get_settings()
        self._options = options
        self._max_workers = max_workers or settings.worker_count
        self._log_level = log_level or settings.log_level
        self._start_method = settings.worker_start_method

    async def process_directory(self, root_path: str, write: bool = False) -> list[BatchFileResult]:
        """Process all barrel files under ``root_path``."""
        files = discover_barrel_files(root_path)
        if not files:
            return []

        loop = asyncio.get_running_loop()
        with ProcessPoolExecutor(
            max_workers=self._max_workers,
            mp_context=multiprocessing.get_context(self._start_method),
            initializer=configure_logging,
            initargs=(self._log_level,),
        ) as executor:
            tasks = [
                loop.run_in_executor(
                    executor,
                    partial(
                        _process_file_in_process,
                        f.absolute_path,
                        f.relative_path,
                        self._options,
                    ),
                )
                for f in files
            ]
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: list[BatchFileResult] = []
        for discovered, outcome in zip(files, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "barrel_processing_failed",
                    path=discovered.relative_path,
                    error=str(outcome),
                )
                results.append(
                    BatchFileResult(
                        relative_path=discovered.relative_path,
                        changed=False,
                        export_count=0,
                        error=str(outcome),
                    )
                )
            else:
                results.append(outcome)

        if write:
            results = [
                self._write_result(discovered, result)
                for discovered, result in zip(files, results)
            ]

        logger.info(
            "batch_completed",
            root_path=root_path,
            files=len(results),
            changed=sum(1 for r in results if r.changed),
            failed=sum(1 for r in results if r.error),
        )
        return results

    def _write_result(self, discovered: DiscoveredFile, result: BatchFileResult) -> BatchFileResult:
        if result.content is None:
            return result

        try:
            LocalFileSystem().write_file(discovered.absolute_path, result.content)
        except OSError as e:
            return replace(result, error=f"Cannot write {discovered.absolute_path}: {e}")

        logger.debug("barrel_written", path=discovered.relative_path)
        return replace(result, written=True)
