"""Parsers for re-export statements and directly declared exports."""

from barrel_resolver.parsers.declaration_scanner import DeclarationScanner
from barrel_resolver.parsers.export_parser import ExportParser, is_barrel, parse_exports

__all__ = [
    "DeclarationScanner",
    "ExportParser",
    "is_barrel",
    "parse_exports",
]
