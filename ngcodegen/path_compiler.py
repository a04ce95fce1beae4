"""Rewrite OpenAPI path templates into TypeScript template-string bodies.

    /pets/{pet_id}/photos  ->  /pets/${encodeURIComponent(String(petId))}/photos

The rewrite is lexical: every ``{name}`` is a placeholder whether or not the
operation declares a parameter called ``name``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .errors import PathTemplateError
from .gen_logging import get_logger

logger = get_logger(__name__)

OPEN_PLACEHOLDER = "${encodeURIComponent(String("
CLOSE_PLACEHOLDER = "))}"


@dataclass(frozen=True)
class CompiledPath:
    """The rewritten path and the variable names it interpolates, left to right."""

    path: str
    variables: tuple[str, ...]


def compile_path(path: str, name_transform: Callable[[str], str]) -> CompiledPath:
    """Replace each ``{name}`` in ``path`` with an encoded interpolation.

    A ``{`` inside an open placeholder is kept as part of the name. A ``}``
    without an open placeholder, an empty ``{}``, or a placeholder left open
    at the end of the path, raises :class:`PathTemplateError`.
    """
    output: list[str] = []
    name: list[str] = []
    variables: list[str] = []
    inside = False
    opened_at = 0

    for position, char in enumerate(path):
        if inside:
            if char == "}":
                if not name:
                    raise PathTemplateError(path, opened_at, "Empty placeholder")
                var_name = name_transform("".join(name))
                output.append(var_name)
                output.append(CLOSE_PLACEHOLDER)
                variables.append(var_name)
                inside = False
            else:
                name.append(char)
        elif char == "{":
            output.append(OPEN_PLACEHOLDER)
            name = []
            inside = True
            opened_at = position
        elif char == "}":
            raise PathTemplateError(path, position, "Closing brace without placeholder")
        else:
            output.append(char)

    if inside:
        raise PathTemplateError(path, opened_at, "Unterminated placeholder")

    compiled = CompiledPath("".join(output), tuple(variables))
    logger.debug("path %s -> %s", path, compiled.path)
    return compiled
