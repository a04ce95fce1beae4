"""TypeScript naming conventions for the Angular client.

Turns OpenAPI identifiers into TypeScript variable, model and service names,
and derives the file names those declarations live in.

Examples:
  to_var_name("pet_id")           -> petId
  to_api_name("pet")              -> PetService
  to_api_filename("petStore")     -> petStore.service
  to_model_import("Pet")          -> model/Pet
  build_operation_id("get", "/pets/{id}") -> petsIdGet
"""

from __future__ import annotations

import re

API_SUFFIX = "Service"
API_FILE_SUFFIX = ".service"

# Words that cannot be used as identifiers in the generated services
RESERVED_WORDS: frozenset[str] = frozenset({
    "abstract", "await", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "debugger", "default", "delete", "do",
    "double", "else", "enum", "export", "extends", "false", "final",
    "finally", "float", "for", "function", "goto", "if", "implements",
    "import", "in", "instanceof", "int", "interface", "let", "long", "native",
    "new", "null", "package", "private", "protected", "public", "return",
    "short", "static", "super", "switch", "synchronized", "this", "throw",
    "transient", "true", "try", "typeof", "var", "void", "volatile", "while",
    "with", "yield",
    # local variables used inside the generated service methods
    "varlocalpath", "queryparameters", "headerparams", "formparams",
    "useformdata", "varlocaldeferred", "requestoptions",
})

# Word separators: underscores and anything but (Unicode) letters, digits and $
_WORD_SPLIT = re.compile(r"(?:[^\w$]|_)+")


def initial_caps(name: str) -> str:
    """Upper-case the first character, leave the rest alone."""
    return name[:1].upper() + name[1:]


def camelize(word: str, lower_first: bool = False) -> str:
    """Join the words of ``word`` in PascalCase (or camelCase with ``lower_first``).

    Existing inner capitals are kept: ``pet_store`` and ``petStore`` both
    become ``PetStore``.
    """
    parts = [p for p in _WORD_SPLIT.split(word) if p]
    result = "".join(initial_caps(p) for p in parts)
    if lower_first:
        result = result[:1].lower() + result[1:]
    return result


def _sanitize(name: str) -> str:
    """Replace characters that are not valid in a TypeScript identifier."""
    return re.sub(r"[^\w$]", "_", name)


def _is_reserved(name: str) -> bool:
    return name.lower() in RESERVED_WORDS


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


class TypeScriptNaming:
    """Naming conventions for one generation run.

    ``model_package`` and ``api_package`` are the folders models and
    services are written to; imports are expressed relative to them.
    """

    def __init__(self, model_package: str = "model", api_package: str = "api") -> None:
        self.model_package = model_package
        self.api_package = api_package

    # -- variables and models ------------------------------------------------

    def to_var_name(self, name: str) -> str:
        """Parameter/property name as a TypeScript variable."""
        name = _sanitize(name)
        # CONSTANT_STYLE names are kept as they are
        if re.fullmatch(r"[A-Z_]+", name):
            return name
        if not name.strip("_"):
            return name
        var_name = camelize(name, lower_first=True)
        if _is_reserved(var_name) or var_name[:1].isdigit():
            var_name = f"_{var_name}"
        return var_name

    def to_model_name(self, name: str) -> str:
        """Class name of a generated model."""
        model_name = camelize(_sanitize(name))
        if _is_reserved(model_name) or model_name[:1].isdigit():
            model_name = f"Model{model_name}"
        return model_name

    def to_model_filename(self, name: str) -> str:
        return camelize(self.to_model_name(name), lower_first=True)

    def to_model_import(self, name: str) -> str:
        return f"{self.model_package}/{name}"

    def model_name_from_model_filename(self, filename: str) -> str:
        """Class name of the model stored at ``filename`` (``model/pet`` -> ``Pet``)."""
        prefix = f"{self.model_package}/"
        if filename.startswith(prefix):
            filename = filename[len(prefix):]
        return camelize(filename)

    # -- services --------------------------------------------------------------

    def to_api_name(self, name: str) -> str:
        if not name:
            return f"Default{API_SUFFIX}"
        return initial_caps(name) + API_SUFFIX

    def to_api_filename(self, name: str) -> str:
        if not name:
            return f"default{API_FILE_SUFFIX}"
        return camelize(name, lower_first=True) + API_FILE_SUFFIX

    def to_api_import(self, name: str) -> str:
        return f"{self.api_package}/{self.to_api_filename(name)}"

    def api_filename_from_classname(self, classname: str) -> str:
        """File name of the service class ``classname``.

        Inverse of :meth:`to_api_name` followed by :meth:`to_api_filename`.
        """
        name = classname
        if name.endswith(API_SUFFIX):
            name = name[: -len(API_SUFFIX)]
        return self.to_api_filename(name)


def build_operation_id(method: str, path: str) -> str:
    """Build an operation id for operations that do not declare one.

    Each path segment is camelized, placeholder braces are dropped and
    the HTTP method is appended: ``GET /pets/{petId}`` -> ``petsPetIdGet``.
    """
    raw = path.replace("{", "").replace("}", "")
    parts = [p for p in raw.split("/") if p]
    if not parts:
        parts = ["root"]
    words = [camelize(_camel_to_snake(p)) for p in parts]
    words.append(camelize(method.lower()))
    return camelize("".join(words), lower_first=True)
