"""Barrel transformation endpoints."""

import os

from fastapi import APIRouter, HTTPException, status

from barrel_resolver.api.dependencies import AppSettings, DefaultOptions
from barrel_resolver.api.schemas import (
    BatchFileResponse,
    DirectoryRequest,
    DirectoryResponse,
    ErrorResponse,
    ExportEntryResponse,
    ExportsResponse,
    TransformRequest,
    TransformResponse,
)
from barrel_resolver.logging import get_logger
from barrel_resolver.services import BarrelLoader, BatchProcessor, InMemoryFileSystem

logger = get_logger(__name__)

router = APIRouter(prefix="/barrels", tags=["barrels"])


def _build_loader(
    request: TransformRequest, defaults: DefaultOptions, settings: AppSettings
) -> tuple[BarrelLoader, InMemoryFileSystem]:
    file_system = InMemoryFileSystem(request.files)
    if not file_system.exists(request.entry_path):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"entry_path not found in files: {request.entry_path}",
        )
    loader = BarrelLoader(
        options=request.options.to_options(defaults),
        file_system=file_system,
        settings=settings,
    )
    return loader, file_system


@router.post(
    "/transform",
    response_model=TransformResponse,
    responses={404: {"model": ErrorResponse}},
)
async def transform_barrel(
    request: TransformRequest,
    defaults: DefaultOptions,
    settings: AppSettings,
) -> TransformResponse:
    """
    Transform a barrel module.

    Relative re-exports are resolved against the other modules in
    `files`. Modules that are not barrel files by name come back
    unchanged.
    """
    loader, file_system = _build_loader(request, defaults, settings)
    source = file_system.read_file(request.entry_path)
    content, entries = loader.transform(source, request.entry_path)

    logger.info(
        "barrel_transform_requested",
        entry_path=request.entry_path,
        files=len(request.files),
        exports=len(entries),
    )

    return TransformResponse(
        content=content,
        changed=content != source,
        exports=[ExportEntryResponse.from_entry(e) for e in entries],
    )


@router.post(
    "/exports",
    response_model=ExportsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_exports(
    request: TransformRequest,
    defaults: DefaultOptions,
    settings: AppSettings,
) -> ExportsResponse:
    """Resolve a module's re-exports without regenerating its source."""
    loader, file_system = _build_loader(request, defaults, settings)
    source = file_system.read_file(request.entry_path)
    entries = loader.collect_exports(source, request.entry_path)

    return ExportsResponse(
        exports=[ExportEntryResponse.from_entry(e) for e in entries],
        total=len(entries),
    )


@router.post(
    "/directory",
    response_model=DirectoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def process_directory(
    request: DirectoryRequest,
    defaults: DefaultOptions,
    settings: AppSettings,
) -> DirectoryResponse:
    """
    Report what transforming every barrel file under a directory would change.

    Files on disk are not modified.
    """
    if not os.path.isdir(request.path):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Directory not found: {request.path}",
        )

    processor = BatchProcessor(
        request.options.to_options(defaults), max_workers=settings.worker_count
    )
    results = await processor.process_directory(request.path, write=False)

    return DirectoryResponse(
        files=[
            BatchFileResponse(
                relative_path=r.relative_path,
                changed=r.changed,
                export_count=r.export_count,
                error=r.error,
            )
            for r in results
        ],
        total_files=len(results),
        changed_files=sum(1 for r in results if r.changed),
    )
