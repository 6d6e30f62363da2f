"""Adapter configuration.

AdapterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

_FALSY = frozenset({"", "0", "false", "no", "off"})

DEBUG_TAG = "fauxify"


@dataclass(frozen=True, slots=True)
class AdapterConfig:
    """Adapter configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AdapterConfig(debug=True, strict_routes=True)
    """

    # Authorization
    disable_authorization: bool = False
    strict_version_prefix: bool = False  # Only ``v<digits>`` counts as a version segment

    # Diagnostics
    debug: bool = False

    # Routes
    strict_routes: bool = False  # Raise on malformed routes instead of dropping them

    # Plugins
    plugin_timeout: float | None = None  # Seconds; None waits forever

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AdapterConfig":
        """Build a config from process environment flags.

        ``DISABLE_KEYCLOAK`` turns authorization off for every route.
        ``DEBUG`` enables tracing when it is ``*`` or names ``fauxify``.
        """
        env = os.environ if environ is None else environ
        disable = env.get("DISABLE_KEYCLOAK", "").strip().lower() not in _FALSY
        return cls(disable_authorization=disable, debug=_debug_enabled(env.get("DEBUG", "")))


def _debug_enabled(value: str) -> bool:
    value = value.strip()
    if value == "*":
        return True
    names = value.replace(",", " ").split()
    return any(name == "*" or DEBUG_TAG in name for name in names)
