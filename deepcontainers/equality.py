"""Deep structural equality between arbitrary Python values.

Two values are deep-equal if they belong to the same category (mapping, set, sequence, object, or scalar) and their
contents are recursively deep-equal:

* Mappings are equal if they have the same number of entries and every key/value pair of one can be paired with a
  distinct, deep-equal key/value pair of the other. The order of the entries is irrelevant.
* Sets are equal if they have the same size and every element of one can be paired with a distinct, deep-equal element
  of the other.
* Sequences (other than strings and byte strings, which are scalars) are equal if they have the same length and their
  items are pairwise deep-equal, in order.
* Dataclass instances and plain objects without a custom ``__eq__`` are equal if they are instances of the same class
  and their fields are deep-equal.
* Everything else is compared with ``==``.

Comparing cyclic structures does not terminate normally; it will eventually raise :exc:`RecursionError`.

"""

import dataclasses
import inspect
from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from typing import Any, Dict, Optional

STRING_TYPES = (str, bytes, bytearray)


class EqualityOptions:
    """A class for passing options to :func:`deep_equal` and to the containers that use it"""

    def __init__(self, *, strict: bool = False, **kwargs):
        """Initializes the options. All keyword values will be set as attributes of this class.

        Options not specified will default to :const:`False`.

        """
        self.strict: bool = strict
        """Whether scalars must also have exactly the same type, and sequences the same container type.

        When :const:`False`, ``1``, ``1.0``, and ``True`` are all deep-equal, as are ``[1, 2]`` and ``(1, 2)``.

        """
        for attr, value in kwargs.items():
            setattr(self, attr, value)

    def __getattr__(self, item):
        """Default all undefined options to :const:`False`"""
        if item.startswith('__'):
            raise AttributeError(item)
        return False

    def __repr__(self):
        return f"{self.__class__.__name__}({', '.join(f'{k}={v!r}' for k, v in vars(self).items())})"


DEFAULT_OPTIONS = EqualityOptions()


def is_sequence(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, STRING_TYPES)


def _is_code_object(value) -> bool:
    return isinstance(value, type) or inspect.isroutine(value) or inspect.ismodule(value)


def object_fields(value) -> Optional[Dict[str, Any]]:
    """Returns the fields by which a non-container object is compared, or :const:`None` if it is a scalar.

    Dataclass instances are compared by their :func:`dataclasses.fields`. Instances of classes that keep an instance
    ``__dict__`` and do not override ``__eq__`` are compared by :func:`vars`. Every other object is a scalar.

    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    elif type(value).__eq__ is object.__eq__ and hasattr(value, "__dict__") and not _is_code_object(value):
        return vars(value)
    return None


def _mappings_equal(a: Mapping, b: Mapping, options: EqualityOptions) -> bool:
    if len(a) != len(b):
        return False
    # each entry of b may only be matched once
    b_items = list(b.items())
    for a_key, a_value in a.items():
        for i, (b_key, b_value) in enumerate(b_items):
            if deep_equal(a_key, b_key, options) and deep_equal(a_value, b_value, options):
                del b_items[i]
                break
        else:
            return False
    return True


def _sets_equal(a: AbstractSet, b: AbstractSet, options: EqualityOptions) -> bool:
    if len(a) != len(b):
        return False
    b_elements = list(b)
    for a_element in a:
        for i, b_element in enumerate(b_elements):
            if deep_equal(a_element, b_element, options):
                del b_elements[i]
                break
        else:
            return False
    return True


def _sequences_equal(a: Sequence, b: Sequence, options: EqualityOptions) -> bool:
    if options.strict and type(a) is not type(b):
        return False
    if len(a) != len(b):
        return False
    return all(deep_equal(i, j, options) for i, j in zip(a, b))


def deep_equal(a: Any, b: Any, options: Optional[EqualityOptions] = None) -> bool:
    """Tests whether two values are structurally equal.

    Args:
        a: The first value.
        b: The second value.
        options: Optional equality options. If omitted, the non-strict defaults are used.

    Returns:
        bool: Whether :obj:`a` and :obj:`b` are deep-equal.

    """
    if options is None:
        options = DEFAULT_OPTIONS
    if a is b:
        # identity implies equality, as in ``[nan] == [nan]`` when both lists hold the same object
        return True
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        return isinstance(a, Mapping) and isinstance(b, Mapping) and _mappings_equal(a, b, options)
    elif isinstance(a, AbstractSet) or isinstance(b, AbstractSet):
        return isinstance(a, AbstractSet) and isinstance(b, AbstractSet) and _sets_equal(a, b, options)
    elif is_sequence(a) or is_sequence(b):
        return is_sequence(a) and is_sequence(b) and _sequences_equal(a, b, options)
    a_fields = object_fields(a)
    b_fields = object_fields(b)
    if a_fields is not None or b_fields is not None:
        return type(a) is type(b) and a_fields is not None and b_fields is not None \
            and _mappings_equal(a_fields, b_fields, options)
    if options.strict and type(a) is not type(b):
        return False
    return bool(a == b)
