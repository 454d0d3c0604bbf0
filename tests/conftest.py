"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from barrel_resolver.config import Settings
from barrel_resolver.parsers import DeclarationScanner
from barrel_resolver.services import InMemoryFileSystem


@pytest.fixture(scope="session")
def scanner() -> DeclarationScanner:
    """Shared declaration scanner (tests run single-threaded)."""
    return DeclarationScanner()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only, ignoring the environment's .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def component_library() -> InMemoryFileSystem:
    """
    A small component library with two levels of barrels.

    /app/src/index.ts re-exports a components barrel, a leaf utils
    module and a type-declarations module.
    """
    return InMemoryFileSystem(
        {
            "/app/src/index.ts": (
                "/**\n"
                " * Public API\n"
                " */\n"
                'export * from "./components";\n'
                'export * from "./utils";\n'
                'export * from "./model.types";\n'
            ),
            "/app/src/components/index.ts": (
                'export { Button } from "./Button";\n'
                'export { default as Card } from "./Card";\n'
                'export type { CardProps } from "./Card";\n'
                'export * as icons from "./icons";\n'
                'export { default } from "./Layout";\n'
            ),
            "/app/src/components/Button.tsx": "export const Button = () => null;\n",
            "/app/src/components/Card.tsx": (
                "export interface CardProps { title: string }\n"
                "export default function Card(props: CardProps) { return null; }\n"
            ),
            "/app/src/components/icons.ts": "export const Star = 1;\nexport const Heart = 2;\n",
            "/app/src/components/Layout.tsx": "export default function Layout() { return null; }\n",
            "/app/src/utils.ts": (
                "export function formatDate(d: Date): string { return d.toISOString(); }\n"
                "export type DateLike = Date | string;\n"
                "export default formatDate;\n"
            ),
            "/app/src/model.types.ts": (
                "export interface User { id: Id }\n"
                "export type Id = string;\n"
                "export enum Role { Admin, Guest }\n"
            ),
        }
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An on-disk project with barrels, a leaf and a vendored node_modules."""
    src = tmp_path / "src"
    (src / "components").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)

    (src / "index.ts").write_text(
        'export { Card } from "./components";\n'
        'export { Button } from "./components";\n'
        'export { Button } from "./components";\n',
        encoding="utf-8",
    )
    (src / "components" / "index.ts").write_text(
        'export { Button } from "./Button";\n'
        'export { Card } from "./Card";\n',
        encoding="utf-8",
    )
    (src / "components" / "Button.ts").write_text("export const Button = 1;\n", encoding="utf-8")
    (src / "components" / "Card.ts").write_text("export const Card = 2;\n", encoding="utf-8")
    (tmp_path / "node_modules" / "lib" / "index.js").write_text(
        'export * from "./impl";\n', encoding="utf-8"
    )
    return tmp_path
