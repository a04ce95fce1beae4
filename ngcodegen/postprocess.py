"""Post-process operation and model metadata for the Angular templates.

Runs after the base generator has built the initial metadata:
- operations get their client method expression and a template-string path
- operation imports and the service bundle get file names
- models get their additional-properties type and a self-free import list

Bundles are mutated in place and returned.
"""

from __future__ import annotations

from typing import Any, Callable

from .gen_logging import get_logger
from .metadata import Model, Operation, Parameter
from .methods import to_client_method
from .naming import TypeScriptNaming
from .path_compiler import CompiledPath, compile_path
from .schema import MapSchema, ObjectSchema
from .semver import FeatureFlags
from .type_resolver import SchemaTypeResolver

logger = get_logger(__name__)

PathCompiler = Callable[[str, Callable[[str], str]], CompiledPath]


def _identity(name: str) -> str:
    return name


class OperationAndModelPostProcessor:
    """Applies naming, type and path rewriting to one run's metadata.

    Collaborators are injected; ``flags`` is computed once per run and only
    read here.
    """

    def __init__(
        self,
        flags: FeatureFlags,
        types: SchemaTypeResolver,
        naming: TypeScriptNaming,
        path_compiler: PathCompiler = compile_path,
        import_filename: Callable[[str], str] = _identity,
    ) -> None:
        self.flags = flags
        self.types = types
        self.naming = naming
        self._compile_path = path_compiler
        self._import_filename = import_filename

    def process_operations(self, bundle: dict[str, Any]) -> dict[str, Any]:
        """Rewrite every operation of a service bundle.

        ``bundle`` holds ``classname``, ``operations`` and ``imports``
        (a list of ``{"import": ...}`` dicts). Either every operation is
        rewritten or, on error, none is.
        """
        operations: list[Operation] = bundle["operations"]

        rewritten: list[tuple[str, CompiledPath]] = []
        for op in operations:
            method = to_client_method(op.http_method, self.flags.use_http_client)
            rewritten.append((method, self._compile_path(op.path, self.naming.to_var_name)))

        for op, (method, compiled) in zip(operations, rewritten):
            if op.raw_path is None:
                op.raw_path = op.path
            op.http_method = method
            op.path = compiled.path
            for param in op.parameters:
                self.process_parameter(param)

        bundle["apiFilename"] = self.naming.api_filename_from_classname(bundle["classname"])

        for im in bundle.get("imports", []):
            im["filename"] = self._import_filename(im["import"])
            im["classname"] = self.naming.model_name_from_model_filename(im["filename"])

        return bundle

    def process_parameter(self, parameter: Parameter) -> None:
        parameter.data_type = self.types.apply_local_type_mapping(parameter.data_type)

    def process_models(self, bundle: dict[str, Any]) -> dict[str, Any]:
        """Attach ``tsImports`` to each ``{"model": Model}`` entry of ``bundle["models"]``."""
        for entry in bundle["models"]:
            model: Model = entry["model"]
            self.add_additional_properties_type(model)
            entry["tsImports"] = self.to_ts_imports(model)
        return bundle

    def add_additional_properties_type(self, model: Model) -> None:
        """Record the value type of a map model and import it when it is a model."""
        schema = model.schema
        if not isinstance(schema, MapSchema):
            return
        if schema.has_explicit_properties:
            model.additional_properties_type = self.types.resolve(schema.value_schema)
            for name in self.types.referenced_models(schema.value_schema):
                if name not in model.imports:
                    model.imports.append(name)
        elif schema.allows_any:
            model.additional_properties_type = self.types.resolve(ObjectSchema())

    def to_ts_imports(self, model: Model) -> list[dict[str, str]]:
        """Import entries of ``model`` without the model itself, first-seen order."""
        ts_imports: list[dict[str, str]] = []
        seen: set[str] = set()
        for im in model.imports:
            if im == model.classname:
                logger.debug("dropping self import of %s", model.classname)
                continue
            if im in seen:
                continue
            seen.add(im)
            ts_imports.append({"classname": im, "filename": self._import_filename(im)})
        return ts_imports
