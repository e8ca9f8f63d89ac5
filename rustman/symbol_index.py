"""Read-only access to a rustdoc symbol index."""

from typing import Any, TypeVar

from rustman.decode_item import decode_item
from rustman.errors import IndexFormatError, InvalidIdError, KindMismatchError
from rustman.item_model import Item

K = TypeVar("K")


class SymbolIndex:
    """Looks up items and canonical paths by identifier.

    Items are decoded from the raw JSON on every lookup, so a malformed item
    only fails the render that touches it and the index itself never changes
    after construction.
    """

    def __init__(
        self,
        index: dict[str, dict[str, Any]],
        paths: dict[str, list[str]],
        root: str,
        *,
        crate_version: str | None = None,
        format_version: int | None = None,
    ) -> None:
        """Wrap raw index entries and canonical paths."""
        self._index = index
        self._paths = paths
        self.root = root
        self.crate_version = crate_version
        self.format_version = format_version

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SymbolIndex":
        """Build an index from deserialized rustdoc JSON."""
        if "index" not in data or "root" not in data:
            msg = "not a rustdoc JSON document (missing 'index' or 'root')"
            raise IndexFormatError(msg)
        paths = {
            str(k): list(v.get("path") or [])
            for k, v in (data.get("paths") or {}).items()
        }
        return cls(
            {str(k): v for k, v in data["index"].items()},
            paths,
            str(data["root"]),
            crate_version=data.get("crate_version"),
            format_version=data.get("format_version"),
        )

    def __contains__(self, item_id: object) -> bool:
        return str(item_id) in self._index

    def lookup(self, item_id: str) -> Item:
        """Return the item for an identifier; a missing id means a corrupt index."""
        raw = self._index.get(str(item_id))
        if raw is None:
            raise InvalidIdError(str(item_id))
        return decode_item(raw)

    def lookup_kind(self, item_id: str, kind: type[K]) -> tuple[Item, K]:
        """Return an item whose payload must be of `kind`."""
        item = self.lookup(item_id)
        if not isinstance(item.inner, kind):
            msg = (
                f"expected {kind.__name__} for {item.name or item_id}, "
                f"found {type(item.inner).__name__}"
            )
            raise KindMismatchError(msg)
        return item, item.inner

    def path_of(self, item_id: str | None) -> str | None:
        """Return the canonical `::`-joined path, if the index has one."""
        if item_id is None:
            return None
        parts = self._paths.get(str(item_id))
        if not parts:
            return None
        return "::".join(parts)
