import dataclasses
from typing import Any, Optional, Sequence, Tuple

from typing_extensions import Literal


@dataclasses.dataclass(frozen=True)
class _ArgConfiguration:
    name: Optional[str]
    aliases: Optional[Tuple[str, ...]]
    complete: Optional[Literal["file", "none"]]


@dataclasses.dataclass(frozen=True)
class _SubcommandConfiguration:
    name: Optional[str]
    description: Optional[str]


def arg(
    *,
    name: Optional[str] = None,
    aliases: Optional[Sequence[str]] = None,
    complete: Optional[Literal["file", "none"]] = None,
) -> Any:
    """Returns a metadata object for configuring how a dataclass field is completed,
    via `typing.Annotated`.
    ```python
    timeout: Annotated[int, tabgen.conf.arg(aliases=["-t"])] = 5
    ```

    Arguments:
        name: A new name for the option. `--` is prepended unless the name already
            starts with a hyphen.
        aliases: Additional names for the option. All strings in the sequence should
            start with a hyphen (-).
        complete: `"file"` to complete the option's value with filenames, `"none"` to
            offer nothing. By default this is inferred from the field type.

    Returns:
        Object to attach via `typing.Annotated[]`.
    """
    if aliases is not None:
        for alias in aliases:
            assert alias.startswith("-"), "Argument alias needs to start with a hyphen!"
    assert complete in (None, "file", "none"), f"Unknown completion kind: {complete}"

    return _ArgConfiguration(
        name=name,
        aliases=tuple(aliases) if aliases is not None else None,
        complete=complete,
    )


def subcommand(
    name: Optional[str] = None,
    *,
    description: Optional[str] = None,
) -> Any:
    """Returns a metadata object for configuring subcommands with `typing.Annotated`.

    By default, a dataclass used as a subcommand is named after its class (for example
    `Sub2Child1` becomes `sub2-child1`) and described by its docstring. Annotating the
    type overrides either:

    ```python
    @dataclasses.dataclass
    class TopLevel:
        command: Union[
            Annotated[Checkout, tabgen.conf.subcommand("co")],
            Annotated[Commit, tabgen.conf.subcommand(description="Record changes")],
        ]
    ```
    """
    return _SubcommandConfiguration(name=name, description=description)
