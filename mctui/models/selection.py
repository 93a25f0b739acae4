from dataclasses import dataclass


@dataclass(frozen=True)
class SelectionCursor:
    """
    Index of the highlighted item in the visible instance list.

    index is None exactly when there is nothing to select. Every method
    takes the current size of the visible list and returns a new cursor.
    """

    index: int | None = None

    @classmethod
    def first(cls, size: int) -> "SelectionCursor":
        return cls(0 if size > 0 else None)

    def advance(self, size: int) -> "SelectionCursor":
        """Move down one item, wrapping from the last item to the first."""
        if size <= 0:
            return self
        if self.index is None or self.index >= size - 1:
            return SelectionCursor(0)
        return SelectionCursor(self.index + 1)

    def retreat(self, size: int) -> "SelectionCursor":
        """Move up one item, wrapping from the first item to the last."""
        if size <= 0:
            return self
        if self.index is None:
            return SelectionCursor(0)
        if self.index == 0:
            return SelectionCursor(size - 1)
        return SelectionCursor(self.index - 1)

    def revalidate(self, size: int) -> "SelectionCursor":
        """Keep the index if it still points into a list of this size, else go to the first item."""
        if self.index is not None and 0 <= self.index < size:
            return self
        return SelectionCursor.first(size)

    def reset(self, size: int) -> "SelectionCursor":
        return SelectionCursor.first(size)
