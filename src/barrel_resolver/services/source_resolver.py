"""Locates the module file an import specifier refers to."""

import os

from barrel_resolver.core.models import RELATIVE_MARKER
from barrel_resolver.services.file_system import FileSystem

# Priority order; the first existing candidate wins
SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".mts",
    ".cjs",
    ".d.ts",
)

# TypeScript ESM imports name the emitted file ("./a.js") while the
# source on disk is "./a.ts"
_EMITTED_TO_SOURCE: dict[str, tuple[str, ...]] = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}

INDEX_BASENAME = "index"


class SourceResolver:
    """
    Resolves relative import specifiers to concrete file paths.

    Non-relative (package) specifiers are never resolved; callers treat
    them as opaque leaves.
    """

    def __init__(
        self,
        file_system: FileSystem,
        extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
    ) -> None:
        self._fs = file_system
        self._extensions = extensions

    def resolve(self, specifier: str, from_directory: str) -> str | None:
        """
        Resolve a specifier relative to a directory.

        Args:
            specifier: Import path as written, e.g. "./Button".
            from_directory: Directory of the importing module.

        Returns:
            Normalized path of the first existing candidate, or None.
        """
        if not specifier.startswith(RELATIVE_MARKER):
            return None

        base = os.path.normpath(os.path.join(from_directory, specifier))
        for candidate in self.candidates(base):
            if self._fs.exists(candidate):
                return candidate
        return None

    def candidates(self, base: str) -> list[str]:
        """List candidate paths for a normalized base path, in priority order."""
        extension = self._recognized_extension(base)
        if extension:
            stem = base[: -len(extension)]
            return [base] + [stem + ext for ext in _EMITTED_TO_SOURCE.get(extension, ())]

        index = os.path.join(base, INDEX_BASENAME)
        return [base + ext for ext in self._extensions] + [
            index + ext for ext in self._extensions
        ]

    def _recognized_extension(self, path: str) -> str | None:
        # Longest match first so ".d.ts" wins over ".ts"
        for extension in sorted(self._extensions, key=len, reverse=True):
            if path.endswith(extension):
                return extension
        return None
