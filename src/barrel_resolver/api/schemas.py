"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field

from barrel_resolver.core import ExportEntry, ExportKind, LoaderOptions


# ============== Request Schemas ==============


class LoaderOptionsSchema(BaseModel):
    """Stage toggles; omitted fields fall back to server settings."""

    remove_duplicates: bool | None = Field(None, description="Remove duplicate exports")
    sort: bool | None = Field(None, description="Sort exports by source then name")
    resolve_barrel_exports: bool | None = Field(
        None, description="Follow re-export chains through nested barrels"
    )
    convert_namespace_to_named: bool | None = Field(
        None, description="Expand `export *` from leaf modules into named lists"
    )

    def to_options(self, defaults: LoaderOptions) -> LoaderOptions:
        return LoaderOptions(
            remove_duplicates=(
                self.remove_duplicates
                if self.remove_duplicates is not None
                else defaults.remove_duplicates
            ),
            sort=self.sort if self.sort is not None else defaults.sort,
            resolve_barrel_exports=(
                self.resolve_barrel_exports
                if self.resolve_barrel_exports is not None
                else defaults.resolve_barrel_exports
            ),
            convert_namespace_to_named=(
                self.convert_namespace_to_named
                if self.convert_namespace_to_named is not None
                else defaults.convert_namespace_to_named
            ),
        )


class TransformRequest(BaseModel):
    """A barrel module plus the modules it may re-export from."""

    entry_path: str = Field(
        ...,
        description="Path of the barrel module within `files`",
        examples=["src/components/index.ts"],
    )
    files: dict[str, str] = Field(
        ...,
        description="Module contents keyed by path",
        min_length=1,
    )
    options: LoaderOptionsSchema = Field(default_factory=LoaderOptionsSchema)


class DirectoryRequest(BaseModel):
    """Request to process every barrel file under a directory."""

    path: str = Field(
        ...,
        description="Absolute path to the directory to scan",
        examples=["/home/user/projects/my-app/src"],
    )
    options: LoaderOptionsSchema = Field(default_factory=LoaderOptionsSchema)


# ============== Response Schemas ==============


class ExportEntryResponse(BaseModel):
    """One resolved export entry."""

    specifier: str
    source: str
    kind: ExportKind
    alias: str | None = None
    exported_name: str
    is_type_only: bool
    origin_line: int

    @classmethod
    def from_entry(cls, entry: ExportEntry) -> "ExportEntryResponse":
        return cls(
            specifier=entry.specifier,
            source=entry.source,
            kind=entry.kind,
            alias=entry.alias,
            exported_name=entry.exported_name,
            is_type_only=entry.is_type_only,
            origin_line=entry.origin_line,
        )


class TransformResponse(BaseModel):
    """Result of transforming one barrel module."""

    content: str
    changed: bool
    exports: list[ExportEntryResponse]


class ExportsResponse(BaseModel):
    """Resolved entries of one barrel module."""

    exports: list[ExportEntryResponse]
    total: int


class BatchFileResponse(BaseModel):
    """Outcome for one barrel file of a directory run."""

    relative_path: str
    changed: bool
    export_count: int
    error: str | None = None


class DirectoryResponse(BaseModel):
    """Outcome of a directory run."""

    files: list[BatchFileResponse]
    total_files: int
    changed_files: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str
