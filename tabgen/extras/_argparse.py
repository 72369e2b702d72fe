"""Command models from `argparse` parsers."""

from __future__ import annotations

import argparse
import logging
import pathlib
from typing import Dict, List, Optional, Set

from .._errors import InvalidArgumentError
from .._model import CommandNode, OptionSpec

log = logging.getLogger(__name__)


def _get_public_subcommands(action: argparse._SubParsersAction) -> Set[str]:
    """Get all the publicly-visible subcommands for a given subparser action. Parsers
    added with `help=argparse.SUPPRESS` are hidden, along with their aliases."""
    hidden_parsers = {
        id(action.choices[i.dest])
        for i in action._get_subactions()
        if i.help == argparse.SUPPRESS
    }
    return {k for k, v in action.choices.items() if id(v) not in hidden_parsers}


def _is_file_action(action: argparse.Action) -> bool:
    # `.complete = "file"` follows the convention used by shtab.
    if getattr(action, "complete", None) == "file":
        return True
    typ = action.type
    if isinstance(typ, argparse.FileType):
        return True
    return isinstance(typ, type) and issubclass(typ, pathlib.PurePath)


def _option_from_action(action: argparse.Action) -> OptionSpec:
    if action.nargs == 0:
        return OptionSpec.flag(*action.option_strings)
    return OptionSpec.argument(
        *action.option_strings,
        choices=None if action.choices is None else [str(c) for c in action.choices],
        is_file=_is_file_action(action),
    )


def _node_from_parser(
    parser: argparse.ArgumentParser, name: str, description: Optional[str]
) -> CommandNode:
    options: List[OptionSpec] = []
    for action in parser._get_optional_actions():
        if action.help == argparse.SUPPRESS:
            log.debug("skip:option:%s", action.option_strings)
            continue
        options.append(_option_from_action(action))

    subcommands: Dict[str, CommandNode] = {}
    for action in parser._get_positional_actions():
        if not isinstance(action, argparse._SubParsersAction):
            continue
        public_cmds = _get_public_subcommands(action)
        help_from_parser = {
            id(action.choices[i.dest]): i.help for i in action._get_subactions()
        }
        for cmd, subparser in action.choices.items():
            if cmd not in public_cmds:
                log.debug("skip:subcommand:%s", cmd)
                continue
            log.debug("subcommand:%s", cmd)
            subcommands[cmd] = _node_from_parser(
                subparser,
                cmd,
                help_from_parser.get(id(subparser)) or subparser.description,
            )

    return CommandNode(
        name=name,
        options=tuple(options),
        subcommands=subcommands,
        description=description,
    )


def model_from_parser(
    parser: argparse.ArgumentParser, name: Optional[str] = None
) -> CommandNode:
    """Build a command model from an `argparse.ArgumentParser`, including all of its
    (publicly listed) subparsers.

    Actions that take no values become flags. Values are completed from `choices` when
    set, and with filenames when the action's `type` is a path or
    `argparse.FileType`.

    Args:
        parser: Parser to convert.
        name: Name of the root command. Defaults to `parser.prog`.

    Returns:
        The command model.
    """
    if not isinstance(parser, argparse.ArgumentParser):
        raise InvalidArgumentError(f"Expected an ArgumentParser, but got {parser!r}")
    return _node_from_parser(
        parser, name if name is not None else parser.prog, parser.description
    )
