"""
A set that can hold Python objects even if those objects are not hashable.
Uniqueness is determined by deep structural equality, not by identity or ``__hash__``.
"""

from collections.abc import MutableSet
from collections.abc import Set as AbstractSet
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from .canonical import canonicalize, find_representative, NOT_FOUND
from .equality import deep_equal, EqualityOptions

T = TypeVar('T')


class IdentityHash:
    """Wraps an object so that it hashes and compares by identity.

    The wrapper holds a reference to the object, so its ``id()`` stays valid for as long as the wrapper is stored.

    """
    __slots__ = ('obj',)

    def __init__(self, obj):
        self.obj = obj

    def __hash__(self):
        return id(self.obj)

    def __eq__(self, other):
        if not isinstance(other, IdentityHash):
            return False
        return self.obj is other.obj

    def __repr__(self):
        return f"{self.__class__.__name__}({self.obj!r})"


class DeepEqualSet(MutableSet, Generic[T]):
    """A set that holds at most one element per class of deep-equal values

    The first element added from an equivalence class is kept as its representative; adding a deep-equal element later
    is a no-op. Every operation compares against the current contents of the stored elements, so there is no index to
    go stale if a stored element is mutated.

    """
    def __init__(self, elements: Iterable[T] = (), options: Optional[EqualityOptions] = None):
        """Initializes the set.

        Args:
            elements: Initial elements, added in order with :meth:`add`.
            options: Optional equality options. If omitted and :obj:`elements` is another :class:`DeepEqualSet`, its
                options are inherited.

        """
        if options is None and isinstance(elements, DeepEqualSet):
            options = elements.options
        self.options: Optional[EqualityOptions] = options
        self._elements: Dict[IdentityHash, None] = {}
        for element in elements:
            self.add(element)

    def _from_iterable(self, it: Iterable[Any]) -> "DeepEqualSet":
        # used by the set operator mixins (``|``, ``&``, ``-``, ``^``)
        return self.__class__(it, options=self.options)

    def add(self, value: T) -> "DeepEqualSet[T]":
        """Adds :obj:`value` unless a deep-equal element is already present. Returns this set."""
        self._elements[IdentityHash(canonicalize(self, value, self.options))] = None
        return self

    def has(self, value: Any) -> bool:
        return value in self

    def delete(self, value: Any) -> bool:
        """Removes the element deep-equal to :obj:`value`.

        Returns:
            bool: :const:`True` if an element was removed, or :const:`False` if there was none.

        """
        key = IdentityHash(canonicalize(self, value, self.options))
        if key in self._elements:
            del self._elements[key]
            return True
        return False

    def discard(self, value: Any):
        self.delete(value)

    def clear(self):
        self._elements.clear()

    def merge(self, other: Iterable[T]) -> "DeepEqualSet[T]":
        """Adds every element of :obj:`other`, in order. Sets never conflict. Returns this set."""
        for element in list(other):
            self.add(element)
        return self

    def copy(self) -> "DeepEqualSet[T]":
        """Returns a shallow copy of this set; the elements themselves are shared."""
        return self.__class__(self)

    def to_json(self) -> List[T]:
        """Returns the elements of this set in insertion order, for JSON serialization."""
        return list(self)

    def __contains__(self, x) -> bool:
        return find_representative(self, x, self.options) is not NOT_FOUND

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        for key in self._elements:
            yield key.obj

    def __eq__(self, other):
        if not isinstance(other, AbstractSet):
            return NotImplemented
        return deep_equal(self, other, self.options)

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self)!r})"
