"""Exceptions raised while loading or rendering a symbol index."""


class RenderError(Exception):
    """Base class for failures that abort rendering of a single item."""


class InvalidIdError(RenderError):
    """An identifier referenced by the index is missing from it."""

    def __init__(self, item_id: str) -> None:
        """Record the missing identifier."""
        super().__init__(f"invalid identifier: {item_id}")
        self.item_id = item_id


class KindMismatchError(RenderError):
    """An item's payload is not the kind its context requires."""


class IndexFormatError(RenderError):
    """The rustdoc JSON has a shape the loader cannot decode."""
