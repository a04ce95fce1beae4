"""Generator options.

Built once per run from the additional-properties mapping the surrounding
CLI collects, then passed by reference to every component. Nothing mutates
it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .errors import ConfigError
from .gen_logging import get_logger

logger = get_logger(__name__)

NPM_NAME = "npmName"
NPM_VERSION = "npmVersion"
NPM_REPOSITORY = "npmRepository"
SNAPSHOT = "snapshot"
WITH_INTERFACES = "withInterfaces"
NG_VERSION = "ngVersion"

DEFAULT_NPM_VERSION = "1.0.0"
SNAPSHOT_SUFFIX_FORMAT = "%Y%m%d%H%M"

# (option, description, default) as shown by the CLI
CLI_OPTIONS: tuple[tuple[str, str, str | None], ...] = (
    (NPM_NAME, "The name under which you want to publish generated npm package", None),
    (NPM_VERSION, "The version of your npm package", None),
    (NPM_REPOSITORY, "Use this property to set an url your private npmRepo in the package.json", None),
    (SNAPSHOT, "When setting this property to true the version will be suffixed with -SNAPSHOT.yyyyMMddHHmm", "false"),
    (WITH_INTERFACES, "Setting this property to true will generate interfaces next to the default class implementations.", "false"),
    (NG_VERSION, "The version of Angular. Default is '6.0.0'", None),
)

_KNOWN_KEYS = {NPM_NAME, NPM_VERSION, NPM_REPOSITORY, SNAPSHOT, WITH_INTERFACES, NG_VERSION}


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigError(f"Option {key} must be a boolean, got {value!r}")


def _to_optional_str(key: str, value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (dict, list, tuple, set)):
        raise ConfigError(f"Option {key} must be a string, got {value!r}")
    return str(value)


@dataclass(frozen=True)
class GeneratorOptions:
    """Options recognised by the Angular client generator."""

    npm_name: str | None = None
    npm_version: str = DEFAULT_NPM_VERSION
    npm_repository: str | None = None
    snapshot: bool = False
    with_interfaces: bool = False
    ng_version: str | None = None
    # Time the run started, used for the snapshot suffix
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_properties(
        cls, properties: Mapping[str, Any] | None = None, now: datetime | None = None,
    ) -> GeneratorOptions:
        """Read options from an additional-properties mapping."""
        props = dict(properties or {})
        npm_version = _to_optional_str(NPM_VERSION, props.get(NPM_VERSION))
        options = cls(
            npm_name=_to_optional_str(NPM_NAME, props.get(NPM_NAME)),
            npm_version=npm_version or DEFAULT_NPM_VERSION,
            npm_repository=_to_optional_str(NPM_REPOSITORY, props.get(NPM_REPOSITORY)),
            snapshot=_to_bool(SNAPSHOT, props.get(SNAPSHOT, False)),
            with_interfaces=_to_bool(WITH_INTERFACES, props.get(WITH_INTERFACES, False)),
            ng_version=_to_optional_str(NG_VERSION, props.get(NG_VERSION)),
            started_at=now or datetime.now(timezone.utc),
            extra=MappingProxyType({k: v for k, v in props.items() if k not in _KNOWN_KEYS}),
        )
        if options.snapshot and not options.npm_name:
            logger.warning("%s is set but %s is not; no package metadata is generated", SNAPSHOT, NPM_NAME)
        return options

    @property
    def generates_package(self) -> bool:
        return bool(self.npm_name)

    @property
    def effective_npm_version(self) -> str:
        """``npmVersion``, with the snapshot suffix when ``snapshot`` is on."""
        if not self.snapshot:
            return self.npm_version
        stamp = self.started_at.astimezone(timezone.utc).strftime(SNAPSHOT_SUFFIX_FORMAT)
        return f"{self.npm_version}-SNAPSHOT.{stamp}"

    def as_properties(self) -> dict[str, Any]:
        """Options under their additional-properties names."""
        props: dict[str, Any] = dict(self.extra)
        props[SNAPSHOT] = self.snapshot
        props[WITH_INTERFACES] = self.with_interfaces
        if self.generates_package:
            props[NPM_NAME] = self.npm_name
            props[NPM_VERSION] = self.effective_npm_version
            if self.npm_repository is not None:
                props[NPM_REPOSITORY] = self.npm_repository
        return props
