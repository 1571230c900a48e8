from .canonical import canonicalize
from .equality import deep_equal, EqualityOptions
from .merge import Mergeable, MergeConflict
from .object_map import DeepEqualMap
from .object_set import DeepEqualSet

from .version import __version__, VERSION_STRING
from . import canonical, equality, json, merge, object_map, object_set, yaml

import inspect

Map = DeepEqualMap
Set = DeepEqualSet

# The container classes should really be in the top-level `deepcontainers` module.
# They are separated into submodules solely for making the Python file sizes more manageable.
# So the following code loops over those submodules and reassigns the classes exported here to the top-level module.
SUBMODULES_TO_SUBSUME = (merge, object_map, object_set)
for module_to_subsume in SUBMODULES_TO_SUBSUME:
    for name, obj in inspect.getmembers(module_to_subsume, inspect.isclass):
        if obj.__module__ == module_to_subsume.__name__ and name in globals():
            obj.__module__ = 'deepcontainers'
    del module_to_subsume

del inspect, SUBMODULES_TO_SUBSUME, name, obj
