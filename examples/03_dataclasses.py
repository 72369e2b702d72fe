"""Dataclasses can be converted to command models. Fields become options, and fields
annotated with a union over dataclasses become subcommands.

Usage:
`tabgen 03_dataclasses.Git -n git-demo`
`source git-demo_completion`
`git-demo [TAB][TAB]`
"""

import dataclasses
import enum
import pathlib
from typing import Optional, Union

from typing_extensions import Annotated

import tabgen


class Color(enum.Enum):
    AUTO = enum.auto()
    ALWAYS = enum.auto()
    NEVER = enum.auto()


@dataclasses.dataclass(frozen=True)
class Checkout:
    """Checkout a branch."""

    branch: str
    force: Annotated[bool, tabgen.conf.arg(aliases=["-f"])] = False


@dataclasses.dataclass(frozen=True)
class Commit:
    """Commit changes."""

    message: Annotated[str, tabgen.conf.arg(aliases=["-m"])]
    all: bool = False
    template: Optional[pathlib.Path] = None


@dataclasses.dataclass(frozen=True)
class Git:
    """A tiny version control system."""

    cmd: Union[
        Checkout,
        Annotated[Commit, tabgen.conf.subcommand("ci")],
    ]
    color: Color = Color.AUTO


if __name__ == "__main__":
    model = tabgen.extras.model_from_dataclass(Git)
    print(tabgen.extras.to_yaml(model), end="")
