"""Recursive merging of container values.

When :meth:`deepcontainers.DeepEqualMap.merge` finds that a key already has a value, it can only reconcile the two
values if the existing one is :class:`Mergeable`: that is, if it has a ``merge(other)`` method returning the merged
object, and if its class can be called with an existing instance to construct a copy. :class:`DeepEqualMap` and
:class:`DeepEqualSet` both satisfy this, as can any user-defined type. Any other collision is a
:class:`MergeConflict`.

"""

import logging
from typing import Any, TypeVar

from typing_extensions import Protocol, runtime_checkable

from .json import dumps

log = logging.getLogger(__name__)

M = TypeVar('M', bound='Mergeable')


@runtime_checkable
class Mergeable(Protocol):
    """A protocol for values that can be recursively merged with another value."""

    def merge(self, other):
        """Merges :obj:`other` into this object and returns this object."""
        ...


def is_mergeable(value: Any) -> bool:
    return isinstance(value, Mergeable) and callable(getattr(value, "merge", None))


def merged_copy(value: M, other: Any) -> M:
    """Returns a copy of :obj:`value` (constructed with ``type(value)(value)``) with :obj:`other` merged into it.

    :obj:`value` itself is left unmodified.

    """
    log.debug(f"Recursively merging {other!r} into a copy of {value!r}")
    return type(value)(value).merge(other)


def describe(value: Any) -> str:
    """Renders a value for a diagnostic message as compact JSON, or with :func:`repr` if it has no JSON form."""
    try:
        return dumps(value, separators=(',', ':'))
    except (TypeError, ValueError):
        return repr(value)


class MergeConflict(ValueError):
    """Raised when a merge reaches a key whose existing value is present and cannot be merged."""

    def __init__(self, key: Any, this_value: Any, other_value: Any):
        """Initializes the error.

        Args:
            key: The key at which the conflict occurred.
            this_value: The value already associated with the key in the receiving map.
            other_value: The value associated with the key in the map being merged in.

        """
        super().__init__(
            f"Merge conflict: Key: {describe(key)} This Value: {describe(this_value)} "
            f"Other Value: {describe(other_value)}"
        )
        self.key: Any = key
        self.this_value: Any = this_value
        self.other_value: Any = other_value
