"""The :mod:`tabgen.extras` submodule contains builders that produce command models
from existing descriptions of a command line: `argparse` parsers, annotated dataclasses,
and YAML documents."""

from ._argparse import model_from_parser
from ._dataclasses import model_from_dataclass
from ._serialization import from_yaml, to_yaml

__all__ = [
    "model_from_parser",
    "model_from_dataclass",
    "from_yaml",
    "to_yaml",
]
