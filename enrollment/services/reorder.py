"""Turn a reposition gesture into dense ``1..N`` order values."""

from typing import Sequence, TypeVar

T = TypeVar("T")


def move(sequence: Sequence[T], source_index: int, destination_index: int) -> list[T]:
    """Remove the item at *source_index* and reinsert it at *destination_index*."""
    size = len(sequence)
    if not 0 <= source_index < size:
        raise IndexError(f"source_index {source_index} out of range for {size} items")
    if not 0 <= destination_index < size:
        raise IndexError(f"destination_index {destination_index} out of range for {size} items")

    items = list(sequence)
    item = items.pop(source_index)
    items.insert(destination_index, item)
    return items


def dense_orders(ids: Sequence[int]) -> list[tuple[int, int]]:
    """Pair each id with its 1-based position in *ids*."""
    return [(definition_id, position + 1) for position, definition_id in enumerate(ids)]
