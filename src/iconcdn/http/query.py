"""Immutable query string parameters.

Parameters are forwarded opaquely to the icon resolver; only ``download``
is interpreted by the service itself.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    A repeated key keeps its last value (``?a=1&a=2`` reads as ``a=2``).
    ``__getitem__`` returns that value.
    """

    _data: dict[str, list[str]]
    _raw: bytes

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][-1]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the last value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[-1]
        return default

    def to_dict(self) -> dict[str, str]:
        """Last value per key, as a plain dict for the resolver."""
        return {key: values[-1] for key, values in self._data.items() if values}

    @property
    def wants_download(self) -> bool:
        """True only for ``download=1`` or ``download=true``.

        String equality, not truthiness: ``download=yes`` is ignored.
        """
        return self.get("download") in ("1", "true")
