"""Read-only command model consumed by the completion script generator.

Models are built once (by hand, or by one of the builders in `tabgen.extras`) and are
never mutated afterwards; helpers that "modify" a node return a new one."""

from __future__ import annotations

import dataclasses
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple


@dataclasses.dataclass(frozen=True)
class OptionSpec:
    """One declared option of a command.

    Attributes:
        names: Aliases for the option, for example `("-t", "--timeout")`.
        takes_argument: Whether the option consumes the following word. `False` for
            pure flags.
        choices: Closed set of values to offer when completing the option's argument.
        is_file: Request filename completion for the argument. Ignored when `choices`
            is set.
    """

    names: Tuple[str, ...]
    takes_argument: bool = False
    choices: Optional[Tuple[str, ...]] = None
    is_file: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(self.names))
        if self.choices is not None:
            object.__setattr__(self, "choices", tuple(str(c) for c in self.choices))

    @staticmethod
    def flag(*names: str) -> OptionSpec:
        return OptionSpec(names=names, takes_argument=False)

    @staticmethod
    def argument(
        *names: str,
        choices: Optional[Sequence[str]] = None,
        is_file: bool = False,
    ) -> OptionSpec:
        return OptionSpec(
            names=names,
            takes_argument=True,
            choices=None if choices is None else tuple(choices),
            is_file=is_file,
        )


@dataclasses.dataclass(frozen=True)
class CommandNode:
    """A command or subcommand: a name, its options, and its nested subcommands.

    Subcommands are keyed by the name users type to select them. Declaration order of
    both options and subcommands is preserved, and determines the order of everything
    in the generated script."""

    name: str
    options: Tuple[OptionSpec, ...] = ()
    subcommands: Mapping[str, CommandNode] = dataclasses.field(default_factory=dict)
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "subcommands", dict(self.subcommands))

    def with_subcommand(self, name: str, node: CommandNode) -> CommandNode:
        """Returns a copy of this node with one more subcommand."""
        subcommands: Dict[str, CommandNode] = dict(self.subcommands)
        subcommands[name] = node
        return dataclasses.replace(self, subcommands=subcommands)

    def walk(self) -> Iterator[Tuple[Tuple[str, ...], CommandNode]]:
        """Yields `(path, node)` for this node and every node below it, root first,
        depth first, in declaration order. `path` holds command names from the root,
        using subcommand keys below it."""
        stack = [((self.name,), self)]
        while len(stack) > 0:
            path, node = stack.pop()
            yield path, node
            for name, child in reversed(list(node.subcommands.items())):
                stack.append((path + (name,), child))
