from __future__ import annotations

from itertools import islice
from .types import *
from .errors import OutOfRange, check_index
from .extensions.terminal import TerminalAccessor


class Sequence(Generic[T]):
    """
    an immutable, fixed-length ordered container.
    the data function runs once, on first access, and its result is frozen.
    suffixes made by without_first() share that frozen storage.
    """

    def __init__(self, data_func: DataFunc[T], _storage: Optional[Tuple[T, ...]] = None, _offset: int = 0):
        self._data_func = data_func
        self._storage = _storage
        self._offset = _offset
        self.to = TerminalAccessor(self)

    # --- storage ---

    def _elements(self) -> Tuple[T, ...]:
        """the frozen backing tuple (shared with suffixes)"""
        if self._storage is None:
            self._storage = tuple(self._data_func())
        return self._storage

    def _get_data(self) -> List[T]:
        """the visible elements as a fresh list"""
        return list(self._elements()[self._offset:])

    # --- contract ---

    def length(self) -> int:
        return len(self._elements()) - self._offset

    def at(self, index: Index) -> T:
        """element at index, raising OutOfRange outside [0, length)"""
        index = check_index(index, self.length())
        return self._elements()[self._offset + index]

    def head(self) -> T:
        """first element"""
        return self.at(0)

    def without_first(self) -> 'Sequence[T]':
        """this sequence with its first element removed, in o(1)"""
        if self.length() == 0:
            raise OutOfRange(0, 0)
        return Sequence(self._data_func, self._elements(), self._offset + 1)

    @property
    def offset(self) -> int:
        """how many elements of the original storage precede this view"""
        return self._offset

    # --- python protocol ---

    def __len__(self) -> int:
        return self.length()

    def __iter__(self) -> Iterator[T]:
        return islice(self._elements(), self._offset, None)

    def __getitem__(self, index: Index) -> T:
        return self.at(index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sequence): return NotImplemented
        if self is other: return True
        if self.length() != other.length(): return False
        return all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        n = self.length()
        preview = ", ".join(repr(x) for x in islice(self, 5))
        if n > 5: preview += ", ..."
        return f"Sequence([{preview}], length={n})"


# --- construction ---

def from_iterable(data: Iterable[T]) -> Sequence[T]:
    """freeze an iterable; it is consumed once, on first access"""
    return Sequence(lambda: list(data))


def from_range(start: int, count: int) -> Sequence[int]:
    """count consecutive ints from start"""
    return Sequence(lambda: range(start, start + count))


def repeat(item: T, count: int) -> Sequence[T]:
    return Sequence(lambda: (item,) * count)


def empty() -> Sequence[Any]:
    return Sequence(tuple)


def generate(generator_func: Callable[[], T], count: int) -> Sequence[T]:
    """count elements, one call of generator_func each, made on first access"""
    return Sequence(lambda: [generator_func() for _ in range(count)])


seq = from_iterable
