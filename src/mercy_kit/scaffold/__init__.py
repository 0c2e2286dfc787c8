"""Scaffold subsystem -- new integration projects from templates."""

from mercy_kit.scaffold.generator import (
    build_manifest,
    build_metadata,
    generate_integration,
    render_integration_source,
    resolve_answers,
)

__all__ = [
    "build_manifest",
    "build_metadata",
    "generate_integration",
    "render_integration_source",
    "resolve_answers",
]
