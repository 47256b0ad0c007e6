"""Error types raised by Collection operations."""


class CollectionError(Exception):
    pass


class OutOfBoundsError(CollectionError, IndexError):
    """Raised by get/set when the index is outside [0, size)."""

    def __init__(self, op: str, index, size: int):
        self.op = op
        self.index = index
        self.size = size
        super().__init__(f"{op}: Index out of bounds (index={index}, size={size})")


class EmptiedCollectionError(CollectionError, RuntimeError):
    """Raised when a Collection is used after its buffer was moved out."""

    def __init__(self, op: str):
        self.op = op
        super().__init__(f"{op}: Collection was moved from and no longer owns a buffer")
