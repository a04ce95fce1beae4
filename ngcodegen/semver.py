"""Angular version handling.

Parses the configured ``ngVersion`` and turns it into the feature flags the
templates switch on. Each flag is an independent threshold check, so a
recent version satisfies every older threshold at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, NamedTuple

from .errors import VersionError
from .gen_logging import get_logger

logger = get_logger(__name__)

DEFAULT_NG_VERSION = "6.0.0"

_COMPONENT = re.compile(r"\d+")


class SemVer(NamedTuple):
    """A (major, minor, patch) triple; tuple ordering is the version ordering."""

    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> SemVer:
        """Parse ``"8"``, ``"4.3"`` or ``"6.0.0"``; missing parts are 0."""
        if not isinstance(text, str):
            raise VersionError(str(text), "expected a string")
        tokens = text.strip().split(".")
        if len(tokens) > 3:
            raise VersionError(text, "more than three components")
        for token in tokens:
            if not _COMPONENT.fullmatch(token):
                raise VersionError(text, f"component {token!r} is not a non-negative integer")
        return cls(*(int(t) for t in tokens))

    def at_least(self, other: SemVer | str) -> bool:
        if isinstance(other, str):
            other = SemVer.parse(other)
        return self >= other

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# Feature flag -> minimum Angular version
_THRESHOLDS: dict[str, str] = {
    "useNgPackagr": "8.0.0",
    "useRxJS6": "6.0.0",
    "injectionTokenTyped": "4.0.0",
    "useHttpClient": "4.3.0",
}


@dataclass(frozen=True)
class FeatureFlags:
    """Flags derived once per run from the Angular version."""

    ng_version: SemVer
    use_ng_packagr: bool
    use_rxjs6: bool
    injection_token_typed: bool
    use_http_client: bool
    use_http_client_package: bool
    emit_rxjs_operators: bool

    @property
    def injection_token(self) -> str:
        return "InjectionToken" if self.injection_token_typed else "OpaqueToken"

    def as_properties(self) -> dict[str, Any]:
        """Flags under the names the templates use."""
        return {
            "ngVersion": str(self.ng_version),
            "useNgPackagr": self.use_ng_packagr,
            "useRxJS6": self.use_rxjs6,
            "injectionToken": self.injection_token,
            "injectionTokenTyped": self.injection_token_typed,
            "useHttpClient": self.use_http_client,
            "useHttpClientPackage": self.use_http_client_package,
        }


def resolve_features(version: str | None = None) -> FeatureFlags:
    """Compute the feature flags for ``version`` (or the default baseline)."""
    if version is None:
        ng_version = SemVer.parse(DEFAULT_NG_VERSION)
        logger.info("generating code for Angular %s ...", ng_version)
        logger.info("  (you can select the angular version by setting the additionalProperty ngVersion)")
    else:
        ng_version = SemVer.parse(version)

    reached = {flag: ng_version.at_least(threshold) for flag, threshold in _THRESHOLDS.items()}
    flags = FeatureFlags(
        ng_version=ng_version,
        use_ng_packagr=reached["useNgPackagr"],
        use_rxjs6=reached["useRxJS6"],
        injection_token_typed=reached["injectionTokenTyped"],
        use_http_client=reached["useHttpClient"],
        use_http_client_package=reached["useHttpClient"] and not reached["useNgPackagr"],
        # pre-HttpClient Angular needs the rxjs operator imports shipped as a file
        emit_rxjs_operators=not reached["useHttpClient"],
    )
    logger.debug("feature flags for Angular %s: %s", ng_version, flags.as_properties())
    return flags
