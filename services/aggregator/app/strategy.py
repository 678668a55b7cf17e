from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")


def first_non_empty(primary: Sequence[T], secondary: Sequence[T]) -> Sequence[T]:
    """Primary results when there are any, otherwise the secondary. Never merged."""
    return primary if primary else secondary


async def with_fallback(
    primary: Callable[[], Awaitable[Sequence[T]]],
    secondary: Callable[[], Awaitable[Sequence[T]]],
) -> Sequence[T]:
    """Await ``secondary`` only when ``primary`` comes back empty."""
    first = await primary()
    if first:
        return first
    return first_non_empty(first, await secondary())
