"""JSON serialization of deep-equality containers.

Containers do not stringify themselves; they expose a ``to_json()`` projection hook (an ordered list of ``[key, value]``
pairs for maps and an ordered list of elements for sets). The encoder in this module plugs that hook into the standard
:mod:`json` machinery, so nested containers are projected recursively::

    >>> from deepcontainers import DeepEqualMap
    >>> from deepcontainers.json import dumps
    >>> dumps(DeepEqualMap([({"name": "Leandro", "age": 29}, "a value")]))
    '[[{"name": "Leandro", "age": 29}, "a value"]]'

"""

import json
from typing import Any


def has_projection(obj) -> bool:
    """Returns whether :obj:`obj` exposes a callable ``to_json`` projection hook."""
    return callable(getattr(obj, 'to_json', None))


def to_json(obj: Any) -> Any:
    """Returns the JSON projection of :obj:`obj` if it has one, and :obj:`obj` itself otherwise.

    Only the outermost object is projected; nested containers are projected by :class:`DeepEqualJSONEncoder` during
    encoding.

    """
    if has_projection(obj):
        return obj.to_json()
    return obj


class DeepEqualJSONEncoder(json.JSONEncoder):
    """A :class:`json.JSONEncoder` that serializes any object with a ``to_json()`` hook through that hook."""

    def default(self, o):
        if has_projection(o):
            return o.to_json()
        return super().default(o)


def dumps(obj: Any, **kwargs) -> str:
    """Equivalent to :func:`json.dumps`, but defaulting to :class:`DeepEqualJSONEncoder`."""
    kwargs.setdefault('cls', DeepEqualJSONEncoder)
    return json.dumps(obj, **kwargs)
