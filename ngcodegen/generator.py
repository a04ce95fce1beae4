"""Wire one Angular client generation run together.

Builds the options, feature flags and collaborators once, then exposes the
supporting-file plan, the template-file plan and the post-processed
operation/model bundles the rendering stage consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .config import GeneratorOptions
from .gen_logging import get_logger
from .metadata import Model, Operation
from .naming import TypeScriptNaming
from .postprocess import OperationAndModelPostProcessor
from .schema_parser import parse_model, parse_operation
from .semver import resolve_features
from .type_resolver import SchemaTypeResolver, TypeTable

logger = get_logger(__name__)

GENERATOR_NAME = "typescript-angular"
GENERATOR_HELP = "Generates a TypeScript Angular (2.x - 8.x) client library."

# Path item keys that hold operations
_OPERATION_KEYS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Service for operations without tags
DEFAULT_TAG = "default"


@dataclass(frozen=True)
class SupportingFile:
    """A template rendered once per run into ``folder/destination``."""

    template: str
    folder: str
    destination: str

    @property
    def path(self) -> str:
        return f"{self.folder}/{self.destination}" if self.folder else self.destination


class AngularClientGenerator:
    """Angular client generator for a single run."""

    name = GENERATOR_NAME
    help = GENERATOR_HELP

    def __init__(
        self,
        options: GeneratorOptions | None = None,
        naming: TypeScriptNaming | None = None,
        table: TypeTable | None = None,
    ) -> None:
        self.options = options or GeneratorOptions()
        self.flags = resolve_features(self.options.ng_version)
        self.naming = naming or TypeScriptNaming()
        self.types = SchemaTypeResolver(table, model_namer=self.naming.to_model_name)
        self.postprocessor = OperationAndModelPostProcessor(self.flags, self.types, self.naming)

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any] | None = None) -> AngularClientGenerator:
        return cls(GeneratorOptions.from_properties(properties))

    @property
    def index_directory(self) -> str:
        """Folder holding index.ts and friends: the parent of the model package."""
        package = self.naming.model_package
        return package[: package.rfind(".")].replace(".", "/") if "." in package else ""

    def model_template_files(self) -> dict[str, str]:
        return {"model.mustache": ".ts"}

    def api_template_files(self) -> dict[str, str]:
        files = {"api.service.mustache": ".ts"}
        if self.options.with_interfaces:
            files["apiInterface.mustache"] = "Interface.ts"
        return files

    def supporting_files(self) -> list[SupportingFile]:
        index = self.index_directory
        files = [
            SupportingFile("models.mustache", self.naming.model_package.replace(".", "/"), "models.ts"),
            SupportingFile("apis.mustache", self.naming.api_package.replace(".", "/"), "api.ts"),
            SupportingFile("index.mustache", index, "index.ts"),
            SupportingFile("api.module.mustache", index, "api.module.ts"),
            SupportingFile("configuration.mustache", index, "configuration.ts"),
            SupportingFile("variables.mustache", index, "variables.ts"),
            SupportingFile("encoder.mustache", index, "encoder.ts"),
            SupportingFile("gitignore", "", ".gitignore"),
            SupportingFile("npmignore", "", ".npmignore"),
            SupportingFile("git_push.sh.mustache", "", "git_push.sh"),
        ]
        if self.flags.emit_rxjs_operators:
            files.append(SupportingFile("rxjs-operators.mustache", index, "rxjs-operators.ts"))

        if self.options.generates_package:
            files.extend([
                SupportingFile("README.mustache", index, "README.md"),
                SupportingFile("package.mustache", index, "package.json"),
                SupportingFile("typings.mustache", index, "typings.json"),
                SupportingFile("tsconfig.mustache", index, "tsconfig.json"),
            ])
            if self.flags.use_ng_packagr:
                files.append(SupportingFile("ng-package.mustache", index, "ng-package.json"))
        return files

    def template_properties(self) -> dict[str, Any]:
        """Options, package metadata and flags merged for the templates."""
        props = self.options.as_properties()
        props.update(self.flags.as_properties())
        return props

    def operation_bundle(self, tag: str, operations: list[Operation]) -> dict[str, Any]:
        """Group the operations of one tag into a service bundle with deduplicated imports."""
        names = sorted({name for op in operations for name in op.imports})
        return {
            "classname": self.naming.to_api_name(tag),
            "operations": operations,
            "imports": [{"import": self.naming.to_model_import(name)} for name in names],
        }

    def process_operations(self, bundle: dict[str, Any]) -> dict[str, Any]:
        return self.postprocessor.process_operations(bundle)

    def process_models(self, bundle: dict[str, Any]) -> dict[str, Any]:
        return self.postprocessor.process_models(bundle)

    def build_context(
        self,
        operations_by_tag: Mapping[str, list[Operation]],
        models: Iterable[Model],
    ) -> dict[str, Any]:
        """Post-process a whole run, in collection order."""
        apis = [
            self.process_operations(self.operation_bundle(tag, ops))
            for tag, ops in operations_by_tag.items()
        ]
        model_bundle = self.process_models({"models": [{"model": m} for m in models]})
        supporting = self.supporting_files()
        logger.debug(
            "%d services, %d models, %d supporting files",
            len(apis), len(model_bundle["models"]), len(supporting),
        )
        return {
            "apis": apis,
            "models": model_bundle["models"],
            "supportingFiles": supporting,
            "apiTemplateFiles": self.api_template_files(),
            "modelTemplateFiles": self.model_template_files(),
            "properties": self.template_properties(),
        }

    def parse_document(
        self, document: Mapping[str, Any],
    ) -> tuple[dict[str, list[Operation]], list[Model]]:
        """Operations grouped by first tag, and component models, in path order."""
        operations_by_tag: dict[str, list[Operation]] = {}
        for path, item in document.get("paths", {}).items():
            for method in _OPERATION_KEYS:
                if method not in item:
                    continue
                op = item[method]
                tag = (op.get("tags") or [DEFAULT_TAG])[0]
                operation = parse_operation(document, method, path, op, self.types, self.naming)
                operations_by_tag.setdefault(tag, []).append(operation)

        schemas = document.get("components", {}).get("schemas", {})
        models = [parse_model(name, schema, self.types, self.naming) for name, schema in schemas.items()]
        return operations_by_tag, models

    def from_openapi(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Post-process a decoded OpenAPI document in one go."""
        operations_by_tag, models = self.parse_document(document)
        return self.build_context(operations_by_tag, models)
