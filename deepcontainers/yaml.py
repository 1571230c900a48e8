"""YAML serialization of deep-equality containers.

Importing this module (which :mod:`deepcontainers` does automatically) registers representers with PyYAML's
:class:`yaml.Dumper` and :class:`yaml.SafeDumper`, so that :func:`yaml.dump` and :func:`yaml.safe_dump` emit a
:class:`deepcontainers.DeepEqualMap` as a sequence of ``[key, value]`` pairs and a :class:`deepcontainers.DeepEqualSet`
as a sequence of elements: the same shapes as the JSON projection.

"""

from typing import Any, IO, Optional

import yaml

from .object_map import DeepEqualMap
from .object_set import DeepEqualSet


def represent_projection(dumper: yaml.representer.BaseRepresenter, data: Any) -> yaml.Node:
    return dumper.represent_list(data.to_json())


def register_representers(dumper: type):
    """Registers the container representers with the given PyYAML dumper class and its subclasses."""
    for container_type in (DeepEqualMap, DeepEqualSet):
        yaml.add_multi_representer(container_type, represent_projection, Dumper=dumper)


register_representers(yaml.Dumper)
register_representers(yaml.SafeDumper)


def dump(obj: Any, stream: Optional[IO] = None, **kwargs) -> Optional[str]:
    """Equivalent to :func:`yaml.safe_dump`; returns the document as a string if :obj:`stream` is :const:`None`."""
    return yaml.safe_dump(obj, stream, **kwargs)
