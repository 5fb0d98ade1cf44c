"""Field layers and the copy-on-append chain that defers flattening.

Purpose
-------
Keep the cost of annotating an entry proportional to the annotation itself.
Each ``with_*`` call on an entry appends one small layer instead of copying a
growing dictionary; the layers are only collapsed once a handler actually
needs them.

Contents
--------
* :class:`Fields` – flat ``str`` → value mapping with sorted ``names()``.
* :class:`FieldChain` – immutable ordered tuple of layers with ``merged()``.
* :data:`EMPTY_CHAIN` – canonical chain without layers.

System Role
-----------
Entries own a :class:`FieldChain`; the registry owns the default-fields chain
every new entry starts from. Precedence is "last layer wins", the same rule the
layered configuration merge uses, but flat: nested mappings are values, not
branches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping


class Fields(dict[str, Any]):
    """Flat mapping of entry-level data used for structured logging.

    Examples
    --------
    >>> fields = Fields({"b": 2, "a": 1})
    >>> fields.names()
    ['a', 'b']
    >>> fields.get("missing") is None
    True
    """

    def names(self) -> list[str]:
        """Return field names sorted ascending for deterministic rendering."""

        return sorted(self)

    def get(self, name: str, default: Any = None) -> Any:  # type: ignore[override]
        """Return the value stored under *name* or *default* (``None``)."""

        return super().get(name, default)


@dataclass(frozen=True, slots=True)
class FieldChain:
    """Ordered sequence of :class:`Fields` layers, never mutated in place.

    Why
    ----
    Entries are values. Two entries derived from the same base share the
    base's layers, so layers must never change after they join a chain.

    What
    ----
    :meth:`append` returns a new chain holding a private copy of the layer;
    :meth:`merged` collapses all layers with last-writer-wins semantics.

    Examples
    --------
    >>> base = FieldChain().append({"a": 1})
    >>> child = base.append({"a": 2, "b": 3})
    >>> dict(child.merged()), dict(base.merged())
    ({'a': 2, 'b': 3}, {'a': 1})
    """

    layers: tuple[Fields, ...] = ()

    def append(self, layer: Mapping[str, Any]) -> FieldChain:
        """Return a new chain with *layer* copied onto the end."""

        return FieldChain((*self.layers, Fields(layer)))

    def merged(self) -> Fields:
        """Collapse all layers into a single fresh :class:`Fields` mapping.

        Pure and idempotent: the layers are read, never written, and each call
        returns a new mapping unrelated to layer boundaries.
        """

        result = Fields()
        for layer in self.layers:
            result.update(layer)
        return result

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[Fields]:
        return iter(self.layers)


EMPTY_CHAIN = FieldChain()
