"""Partitioning of a command's options into flags and argument-taking options."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from typing_extensions import Literal

from . import _strings
from ._errors import DuplicateOptionError, InvalidCommandModelError
from ._model import CommandNode, OptionSpec

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CompletionPolicy:
    """How the argument of an option should be completed."""

    kind: Literal["enumerated", "filename", "free_text"]
    candidates: Tuple[str, ...] = ()

    @staticmethod
    def enumerated(candidates: Sequence[str]) -> CompletionPolicy:
        return CompletionPolicy("enumerated", tuple(candidates))

    @staticmethod
    def filename() -> CompletionPolicy:
        return CompletionPolicy("filename")

    @staticmethod
    def free_text() -> CompletionPolicy:
        return CompletionPolicy("free_text")


@dataclasses.dataclass(frozen=True)
class OptionClassification:
    flag_tokens: Tuple[str, ...]
    arg_tokens: Tuple[str, ...]
    policy_from_token: Dict[str, CompletionPolicy]


def policy_from_option(option: OptionSpec) -> CompletionPolicy:
    # A closed candidate set takes precedence over filename completion.
    if option.choices:
        return CompletionPolicy.enumerated(option.choices)
    if option.is_file:
        return CompletionPolicy.filename()
    return CompletionPolicy.free_text()


def _check_option(option: OptionSpec, command_path: Tuple[str, ...]) -> None:
    where = " ".join(command_path)
    if len(option.names) == 0:
        raise InvalidCommandModelError(f"An option of command {where!r} has no names")
    for alias in option.names:
        if not alias.startswith("-") or _strings.has_whitespace(alias):
            raise InvalidCommandModelError(
                f"Option alias {alias!r} of command {where!r} should start with a"
                " hyphen and contain no whitespace"
            )
    for choice in option.choices or ():
        if choice == "" or _strings.has_whitespace(choice):
            raise InvalidCommandModelError(
                f"Choice {choice!r} of option {option.names[0]!r} on command {where!r}"
                " can't be offered as a completion candidate"
            )


def classify(
    node: CommandNode, command_path: Optional[Sequence[str]] = None
) -> OptionClassification:
    """Sort every option alias of `node` into flag tokens or argument tokens, and
    record how each argument token's value is completed.

    `command_path` is only used for error messages; it defaults to the node's name."""
    path = tuple(command_path) if command_path is not None else (node.name,)

    seen: Set[str] = set()
    flag_tokens: List[str] = []
    arg_tokens: List[str] = []
    policy_from_token: Dict[str, CompletionPolicy] = {}

    for option in node.options:
        _check_option(option, path)
        policy = policy_from_option(option) if option.takes_argument else None
        for alias in option.names:
            if alias in seen:
                raise DuplicateOptionError(path, alias)
            seen.add(alias)

            if policy is None:
                flag_tokens.append(alias)
            else:
                arg_tokens.append(alias)
                policy_from_token[alias] = policy

    log.debug(
        "classified:%s: flags=%s args=%s", " ".join(path), flag_tokens, arg_tokens
    )
    return OptionClassification(
        flag_tokens=tuple(flag_tokens),
        arg_tokens=tuple(arg_tokens),
        policy_from_token=policy_from_token,
    )
