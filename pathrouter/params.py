"""Named route parameters captured from a request path."""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class RouteParams:
    """A mapping of route parameter names to the values captured from the path."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def set(self, name: str, value: str) -> None:
        """Set (or replace) the parameter ``name``."""
        self._values[str(name)] = str(value)

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it was not captured."""
        return self._values.get(name)

    def has(self, name: str) -> bool:
        """Tell whether ``name`` was captured."""
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteParams):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"RouteParams({self._values!r})"

    def names(self) -> Iterator[str]:
        """Iterate over the parameter names."""
        return iter(self._values.keys())

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate over ``(name, value)`` pairs."""
        return iter(self._values.items())

    def extend(self, other: RouteParams) -> None:
        """Copy every entry of ``other`` into this map, replacing equal names."""
        for name, value in other.items():
            self.set(name, value)