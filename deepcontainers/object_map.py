"""
A mapping whose keys can be arbitrary, even unhashable, Python objects.
Keys are matched by deep structural equality, not by identity or ``__hash__``.
"""

import logging
from collections.abc import ItemsView, Mapping, MutableMapping, ValuesView
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union

from .canonical import canonicalize, find_representative, NOT_FOUND
from .equality import deep_equal, EqualityOptions
from .merge import is_mergeable, merged_copy, MergeConflict
from .object_set import IdentityHash

log = logging.getLogger(__name__)

K = TypeVar('K')
V = TypeVar('V')

PairSource = Union[Mapping, Iterable[Tuple[Any, Any]]]


def iter_pairs(items: PairSource) -> Iterator[Tuple[Any, Any]]:
    """Iterates over the key/value pairs of either a mapping or an iterable of pairs."""
    if isinstance(items, Mapping):
        yield from items.items()
    else:
        for key, value in items:
            yield key, value


class DeepEqualItemsView(ItemsView):
    def __iter__(self):
        for key, value in self._mapping._entries.items():
            yield key.obj, value


class DeepEqualValuesView(ValuesView):
    def __iter__(self):
        yield from self._mapping._entries.values()


class DeepEqualMap(MutableMapping, Generic[K, V]):
    """A mapping that holds at most one key per class of deep-equal keys

    The first key inserted from an equivalence class is kept as its representative. Setting a deep-equal key later only
    replaces the associated value. Every operation compares against the current contents of the stored keys; there is
    no hash index, so mutating a stored key never leaves the map with a stale index.

    Examples:

        >>> from deepcontainers import DeepEqualMap
        >>> m = DeepEqualMap([({"name": "Leandro", "age": 29}, "first value loses")])
        >>> m.set({"age": 29, "name": "Leandro"}, "second value wins")
        DeepEqualMap([({'name': 'Leandro', 'age': 29}, 'second value wins')])
        >>> len(m)
        1

    """
    def __init__(self, items: PairSource = (), options: Optional[EqualityOptions] = None):
        """Initializes the map.

        Args:
            items: Initial entries, either a mapping or an iterable of ``(key, value)`` pairs. They are inserted in
                order with :meth:`set`, so for deep-equal keys the first key and the last value win.
            options: Optional equality options. If omitted and :obj:`items` is another :class:`DeepEqualMap`, its
                options are inherited.

        """
        if options is None and isinstance(items, DeepEqualMap):
            options = items.options
        self.options: Optional[EqualityOptions] = options
        self._entries: Dict[IdentityHash, V] = {}
        for key, value in iter_pairs(items):
            self.set(key, value)

    def _find(self, key: Any) -> Optional[IdentityHash]:
        representative = find_representative(self, key, self.options)
        if representative is NOT_FOUND:
            return None
        return IdentityHash(representative)

    def set(self, key: K, value: V) -> "DeepEqualMap[K, V]":
        """Associates :obj:`value` with :obj:`key`, keeping the existing representative if there is one.

        Returns:
            DeepEqualMap: This map, to allow chaining.

        """
        self._entries[IdentityHash(canonicalize(self, key, self.options))] = value
        return self

    def has(self, key: Any) -> bool:
        return key in self

    def delete(self, key: Any) -> bool:
        """Removes the entry whose key is deep-equal to :obj:`key`.

        Returns:
            bool: :const:`True` if an entry was removed, or :const:`False` if there was none.

        """
        entry = self._find(key)
        if entry is None:
            return False
        del self._entries[entry]
        return True

    def merge(self, other: PairSource) -> "DeepEqualMap[K, V]":
        """Merges the entries of :obj:`other` into this map, in the iteration order of :obj:`other`.

        For each key of :obj:`other`:

        * if this map has no deep-equal key, the entry is appended;
        * if the existing value is :class:`deepcontainers.merge.Mergeable`, it is replaced by a merged copy of itself;
        * otherwise a :class:`deepcontainers.merge.MergeConflict` is raised.

        A conflict aborts the merge. Entries merged before the conflicting key stay merged.

        Args:
            other: A mapping or an iterable of ``(key, value)`` pairs.

        Returns:
            DeepEqualMap: This map.

        Raises:
            MergeConflict: If a key exists in both and the existing value is not mergeable, or cannot merge the
                incoming value.

        """
        for key, other_value in list(iter_pairs(other)):
            entry = self._find(key)
            if entry is None:
                self._entries[IdentityHash(key)] = other_value
                continue
            this_value = self._entries[entry]
            if not is_mergeable(this_value):
                log.debug(f"Cannot merge {other_value!r} into the non-mergeable value {this_value!r} for key {key!r}")
                raise MergeConflict(key, this_value, other_value)
            try:
                self._entries[entry] = merged_copy(this_value, other_value)
            except TypeError as e:
                log.debug(f"{e!s} while merging {other_value!r} into {this_value!r} for key {key!r}")
                raise MergeConflict(key, this_value, other_value) from e
        return self

    def copy(self) -> "DeepEqualMap[K, V]":
        """Returns a shallow copy of this map; keys and values are shared."""
        return self.__class__(self)

    def to_json(self) -> List[List[Any]]:
        """Returns the ``[key, value]`` pairs of this map in insertion order, for JSON serialization."""
        return [[key, value] for key, value in self.items()]

    def items(self) -> ItemsView:
        return DeepEqualItemsView(self)

    def values(self) -> ValuesView:
        return DeepEqualValuesView(self)

    def clear(self):
        self._entries.clear()

    def __getitem__(self, key: Any) -> V:
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        return self._entries[entry]

    def __setitem__(self, key: K, value: V):
        self.set(key, value)

    def __delitem__(self, key: Any):
        if not self.delete(key):
            raise KeyError(key)

    def __contains__(self, key) -> bool:
        return self._find(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        for entry in self._entries:
            yield entry.obj

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return deep_equal(self, other, self.options)

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self.items())!r})"
