"""Authored content loading: identifiers, export documents, load errors."""

from dialogue_engine.resources.identifier import ArticyId, NOBODY, hash_id
from dialogue_engine.resources.errors import ArticyLoadError, DiagnosticCollector, LoadDiagnostic
from dialogue_engine.resources.document import (
    DocumentReader,
    ExportDocument,
    Model,
    Package,
    VariableDecl,
    VariableGroup,
)

__all__ = [
    "ArticyId",
    "NOBODY",
    "hash_id",
    "ArticyLoadError",
    "DiagnosticCollector",
    "LoadDiagnostic",
    "DocumentReader",
    "ExportDocument",
    "Model",
    "Package",
    "VariableDecl",
    "VariableGroup",
]
