"""The :mod:`tabgen.conf` submodule contains helpers for attaching completion-specific
configuration to dataclass fields via [PEP 593](https://peps.python.org/pep-0593/)
runtime annotations. They are only read by
:func:`tabgen.extras.model_from_dataclass`.
"""

from ._confstruct import arg, subcommand

__all__ = [
    "arg",
    "subcommand",
]
