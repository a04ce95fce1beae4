"""Operation and model metadata produced by the base generator.

Post-processing fills in the derived fields (client method, rewritten path,
import lists); the upstream fields are never removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .schema import Schema


@dataclass
class Parameter:
    raw_name: str
    encoded_name: str
    data_type: str
    location: str = "query"
    required: bool = False


@dataclass
class Operation:
    http_method: str
    path: str
    operation_id: str
    parameters: list[Parameter] = field(default_factory=list)
    # Model class names referenced by parameters, body and response
    imports: list[str] = field(default_factory=list)
    return_type: str | None = None
    # Untouched upstream path, kept next to the rewritten one
    raw_path: str | None = None


@dataclass
class Model:
    name: str
    classname: str
    schema: Schema
    imports: list[str] = field(default_factory=list)
    additional_properties_type: str | None = None
    vendor_extensions: dict[str, Any] = field(default_factory=dict)
