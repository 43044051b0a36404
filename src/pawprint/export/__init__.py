"""Export layer — static output generation.

Maps rendered routes to files, packages the SPA fallback shell, copies
assets, writes the sitemap, and keeps the build manifest that decides
whether the export succeeded.
"""

from pawprint.export.fallback import build_fallback
from pawprint.export.manifest import BuildIssue, BuildManifest, BuildOutcome, ExportedFile
from pawprint.export.mapper import OutputEntry, OutputMapper, OutputRegistry, check_collisions
from pawprint.export.static import StaticExporter

__all__ = [
    "BuildIssue",
    "BuildManifest",
    "BuildOutcome",
    "ExportedFile",
    "OutputEntry",
    "OutputMapper",
    "OutputRegistry",
    "StaticExporter",
    "build_fallback",
    "check_collisions",
]
