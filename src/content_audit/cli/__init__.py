"""Command-line interface package for the content audit tooling."""

from .app import AuditReport, build_parser, create_service, main, render_table, run

__all__ = [
    "AuditReport",
    "build_parser",
    "create_service",
    "main",
    "render_table",
    "run",
]
