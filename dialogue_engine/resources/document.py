"""
Reader for articy:draft JSON exports.

Validates the raw export with jsonschema and turns it into typed records.
Only models of default packages are validated in depth; other packages
are skipped without looking at their models.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import jsonschema

from dialogue_engine.resources.errors import DiagnosticCollector

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

logger = logging.getLogger(__name__)

Pin = tuple[str, ...]


@dataclass(frozen=True)
class Model:
    """One exported object: a dialogue, a flow node, a character, ..."""
    type: str
    properties: dict[str, Any]

    @property
    def id(self) -> str:
        return self.properties["Id"]

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    @property
    def input_pins(self) -> tuple[Pin, ...]:
        return _pins(self.properties.get("InputPins"))

    @property
    def output_pins(self) -> tuple[Pin, ...]:
        return _pins(self.properties.get("OutputPins"))


@dataclass
class Package:
    is_default: bool
    models: list[Model] = field(default_factory=list)


@dataclass(frozen=True)
class VariableDecl:
    name: str
    type: str
    value: str


@dataclass
class VariableGroup:
    namespace: str
    variables: list[VariableDecl] = field(default_factory=list)


@dataclass
class ExportDocument:
    packages: list[Package] = field(default_factory=list)
    global_variables: list[VariableGroup] = field(default_factory=list)

    def default_models(self) -> list[Model]:
        """Models of every package flagged as default, in document order."""
        return [m for p in self.packages if p.is_default for m in p.models]


def _pins(raw: Optional[list[dict[str, Any]]]) -> tuple[Pin, ...]:
    pins = []
    for pin in raw or []:
        connections = pin.get("Connections") or []
        pins.append(tuple(c["Target"] for c in connections))
    return tuple(pins)


def _error_path(error: jsonschema.ValidationError) -> str:
    return "/" + "/".join(str(p) for p in error.absolute_path)


class DocumentReader:
    """
    Decodes and validates export documents.

    Problems are reported to a DiagnosticCollector; the reader itself
    never raises for bad content.
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._export_validator = self._validator(schema_dir / "export.schema.json")
        self._model_validator = self._validator(schema_dir / "model.schema.json")

    @staticmethod
    def _validator(path: Path) -> jsonschema.protocols.Validator:
        with open(path, "r", encoding="utf-8") as f:
            schema = json.load(f)
        cls = jsonschema.validators.validator_for(schema)
        cls.check_schema(schema)
        return cls(schema)

    def read_file(self, path: str | Path, diagnostics: DiagnosticCollector) -> Optional[ExportDocument]:
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            diagnostics.add(f"cannot read export file {path}: {e.strerror or e}")
            return None
        return self.read_text(text, diagnostics)

    def read_text(self, text: str, diagnostics: DiagnosticCollector) -> Optional[ExportDocument]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            diagnostics.add(f"malformed JSON at line {e.lineno} column {e.colno}: {e.msg}")
            return None
        return self.read(data, diagnostics)

    def read(self, data: Any, diagnostics: DiagnosticCollector) -> Optional[ExportDocument]:
        """Validate a decoded document and build typed records."""
        errors = sorted(self._export_validator.iter_errors(data), key=_error_path)
        for error in errors:
            diagnostics.add(f"invalid export document: {error.message}", text=_error_path(error))
        if errors:
            return None

        document = ExportDocument()
        for package_index, raw_package in enumerate(data["Packages"]):
            package = Package(is_default=raw_package["IsDefaultPackage"])
            document.packages.append(package)
            if not package.is_default:
                logger.debug("Skipping non-default package %d", package_index)
                continue

            for model_index, raw_model in enumerate(raw_package["Models"]):
                model_errors = list(self._model_validator.iter_errors(raw_model))
                if model_errors:
                    properties = raw_model.get("Properties")
                    node_id = properties.get("Id") if isinstance(properties, dict) else None
                    for error in model_errors:
                        path = f"/Packages/{package_index}/Models/{model_index}{_error_path(error)}"
                        diagnostics.add(
                            f"invalid model: {error.message}",
                            node_id=node_id if isinstance(node_id, str) else None,
                            text=path.rstrip("/"),
                        )
                    continue
                package.models.append(Model(raw_model["Type"], raw_model["Properties"]))

        for raw_group in data.get("GlobalVariables", []):
            group = VariableGroup(raw_group["Namespace"])
            for raw_variable in raw_group["Variables"]:
                group.variables.append(
                    VariableDecl(raw_variable["Variable"], raw_variable["Type"], raw_variable["Value"])
                )
            document.global_variables.append(group)

        return document
