import dataclasses
import enum
import pathlib
from typing import Optional, Union

import pytest
from typing_extensions import Annotated, Literal

import tabgen
from tabgen import CommandNode, OptionSpec


class TimeUnit(enum.Enum):
    DAYS = enum.auto()
    HOURS = enum.auto()


@dataclasses.dataclass
class TreeNode:
    child: Optional["TreeNode"] = None


def test_options_from_fields() -> None:
    @dataclasses.dataclass
    class Sleep:
        """Wait for a while.

        Longer description, which shouldn't be used."""

        timeout: Annotated[int, tabgen.conf.arg(aliases=["-t"])]
        unit: TimeUnit = TimeUnit.DAYS
        level: Literal["low", "high"] = "low"
        log_file: Optional[pathlib.Path] = None
        dry_run: bool = False

    assert tabgen.extras.model_from_dataclass(Sleep) == CommandNode(
        "sleep",
        options=(
            OptionSpec.argument("-t", "--timeout"),
            OptionSpec.argument("--unit", choices=["DAYS", "HOURS"]),
            OptionSpec.argument("--level", choices=["low", "high"]),
            OptionSpec.argument("--log-file", is_file=True),
            OptionSpec.flag("--dry-run"),
        ),
        description="Wait for a while.",
    )


def test_arg_overrides() -> None:
    @dataclasses.dataclass
    class Copy:
        source: Annotated[str, tabgen.conf.arg(name="src", complete="file")]
        target: Annotated[pathlib.Path, tabgen.conf.arg(name="-o", complete="none")]
        level: Annotated[
            Literal["low", "high"], tabgen.conf.arg(aliases=["-l", "-L"])
        ] = "low"

    model = tabgen.extras.model_from_dataclass(Copy, name="cp")
    assert model.name == "cp"
    assert model.description is None
    assert model.options == (
        OptionSpec.argument("--src", is_file=True),
        OptionSpec.argument("-o"),
        OptionSpec.argument("-l", "-L", "--level", choices=["low", "high"]),
    )


def test_subcommands() -> None:
    @dataclasses.dataclass
    class Checkout:
        """Check out a branch."""

        branch: str
        force: bool = False

    @dataclasses.dataclass
    class Commit:
        message: Annotated[str, tabgen.conf.arg(aliases=["-m"])]
        all: bool = False

    @dataclasses.dataclass
    class Git:
        """Version control."""

        command: Union[
            Checkout,
            Annotated[
                Commit, tabgen.conf.subcommand("ci", description="Record changes.")
            ],
        ]
        verbose: bool = False

    model = tabgen.extras.model_from_dataclass(Git)
    assert model == CommandNode(
        "git",
        options=(OptionSpec.flag("--verbose"),),
        subcommands={
            "checkout": CommandNode(
                "checkout",
                options=(OptionSpec.argument("--branch"), OptionSpec.flag("--force")),
                description="Check out a branch.",
            ),
            "ci": CommandNode(
                "ci",
                options=(
                    OptionSpec.argument("-m", "--message"),
                    OptionSpec.flag("--all"),
                ),
                description="Record changes.",
            ),
        },
        description="Version control.",
    )
    assert list(model.subcommands) == ["checkout", "ci"]


def test_nested_dataclass_is_a_subcommand() -> None:
    @dataclasses.dataclass
    class ServerConfig:
        port: int = 8080

    @dataclasses.dataclass
    class TopLevel:
        server: ServerConfig

    model = tabgen.extras.model_from_dataclass(TopLevel)
    assert model.name == "top-level"
    assert list(model.subcommands) == ["server-config"]
    assert model.subcommands["server-config"].options == (
        OptionSpec.argument("--port"),
    )


def test_recursive_dataclass() -> None:
    with pytest.raises(tabgen.InvalidCommandModelError):
        tabgen.extras.model_from_dataclass(TreeNode)


def test_not_a_dataclass() -> None:
    class NotADataclass:
        x: int = 3

    with pytest.raises(tabgen.InvalidArgumentError):
        tabgen.extras.model_from_dataclass(NotADataclass)
    with pytest.raises(tabgen.InvalidArgumentError):
        tabgen.extras.model_from_dataclass(TreeNode())  # type: ignore


def test_generate_from_dataclass() -> None:
    @dataclasses.dataclass
    class Sleep:
        unit: TimeUnit = TimeUnit.DAYS

    script = tabgen.generate(
        ["sleep"], tabgen.extras.model_from_dataclass(Sleep), "1.0"
    )
    assert "    --unit)\n" in script
    assert "compgen -W 'DAYS HOURS'" in script


def test_bad_arg_configuration() -> None:
    with pytest.raises(AssertionError):
        tabgen.conf.arg(aliases=["t"])
    with pytest.raises(AssertionError):
        tabgen.conf.arg(complete="directory")  # type: ignore
