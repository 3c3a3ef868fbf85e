"""Immutable, case-insensitive HTTP request headers.

Stores raw byte pairs from the ASGI scope; decodes on access.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, str]) -> "Headers":
        """Build headers from string pairs (tests and the test client)."""
        return cls(
            tuple((k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in pairs.items())
        )

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def mentions(self, key: str, token: str) -> bool:
        """True if header *key* is present and contains *token* verbatim.

        Case-sensitive substring match, so ``no-cache`` inside
        ``max-age=0, no-cache`` counts but ``No-Cache`` does not.
        """
        value = self.get(key)
        return value is not None and token in value
