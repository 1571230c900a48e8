"""Resolution of a candidate key to the canonical representative of its equivalence class.

Every container operation routes its argument through :func:`canonicalize` before touching storage, which is what
guarantees that a container holds at most one representative per equivalence class of deep-equal values.

"""

from typing import Any, Iterable, Optional, TypeVar, Union

from .equality import deep_equal, EqualityOptions

K = TypeVar('K')


class _NotFound:
    def __repr__(self):
        return "NOT_FOUND"


NOT_FOUND = _NotFound()
"""Sentinel returned by :func:`find_representative` when no existing key matches."""


def find_representative(
        existing: Iterable[K],
        candidate: Any,
        options: Optional[EqualityOptions] = None
) -> Union[K, _NotFound]:
    """Returns the first key in :obj:`existing` that is deep-equal to :obj:`candidate`, or :data:`NOT_FOUND`."""
    for key in existing:
        if deep_equal(candidate, key, options):
            return key
    return NOT_FOUND


def canonicalize(existing: Iterable[K], candidate: K, options: Optional[EqualityOptions] = None) -> K:
    """Returns the canonical representative for :obj:`candidate`.

    Args:
        existing: The keys already present in a collection, in insertion order.
        candidate: The key being looked up or inserted.
        options: Optional equality options.

    Returns:
        The first key of :obj:`existing` that is deep-equal to :obj:`candidate`, or :obj:`candidate` itself if there is
        none (meaning that the candidate would become a new representative).

    """
    representative = find_representative(existing, candidate, options)
    if representative is NOT_FOUND:
        return candidate
    return representative
