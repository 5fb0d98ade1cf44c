"""Environment variable adapter for default fields.

Purpose
-------
Let operators stamp deployment metadata (service name, region, build id) onto
every entry without code changes, by reading prefixed environment variables
into a default-fields layer.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so only relevant keys are captured.
* Strips ``<PREFIX>_FIELD__`` and lower-cases the remainder to form the key.
* Supports ``__`` as a nesting delimiter inside a field
  (``HTTP__PORT`` → ``{"http": {"port": ...}}``).
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
"""

from __future__ import annotations

import os
from typing import Mapping

from ..domain.fields import Fields
from ..observability import log_debug

FIELD_MARKER = "FIELD__"


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('billing-api')
    'BILLING_API'
    """

    return slug.replace("-", "_").upper()


class EnvFieldsLoader:
    """Load ``<PREFIX>_FIELD__<NAME>`` environment variables as a fields layer."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = environ if environ is not None else os.environ

    def load(self, prefix: str) -> Fields:
        """Return the default fields declared for *prefix*.

        Examples
        --------
        >>> env = {
        ...     'BILLING_FIELD__SERVICE': 'billing',
        ...     'BILLING_FIELD__REPLICA': '3',
        ...     'BILLING_FIELD__HTTP__TLS': 'true',
        ...     'OTHER_FIELD__SERVICE': 'ignored',
        ... }
        >>> fields = EnvFieldsLoader(environ=env).load('BILLING')
        >>> fields['service'], fields['replica'], fields['http']
        ('billing', 3, {'tls': True})
        """

        base = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        marker = f"{base}{FIELD_MARKER}"
        collected = Fields()
        for key, value in self._environ.items():
            if not key.startswith(marker):
                continue
            stripped = key[len(marker) :]
            if not stripped:
                continue
            assign_nested(collected, stripped, coerce_scalar(value))
        log_debug("env_fields_loaded", prefix=prefix, keys=collected.names())
        return collected


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``__`` as a nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'HTTP__PORT', 8080)
    >>> data
    {'http': {'port': 8080}}
    """

    parts = key.lower().split("__")
    cursor = target
    for part in parts[:-1]:
        child = cursor.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Cannot override scalar with mapping for key {key}")
        cursor = child
    cursor[parts[-1]] = value


def coerce_scalar(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> coerce_scalar('true'), coerce_scalar('10'), coerce_scalar('3.5'), coerce_scalar('hello'), coerce_scalar('none')
    (True, 10, 3.5, 'hello', None)
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value
