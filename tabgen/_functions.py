"""Per-command completion functions.

Generation happens in two steps. `build_function_specs()` walks the command model and
produces one `FunctionSpec` record per node, performing all validation.
`render_function()` turns a record into bash source and can't fail."""

from __future__ import annotations

import dataclasses
import logging
from string import Template
from typing import Dict, List, Optional, Tuple

from . import _strings
from ._classify import CompletionPolicy, classify
from ._errors import InvalidCommandModelError
from ._model import CommandNode

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ValueBranch:
    """A `case` arm for completing the value of one or more argument options."""

    tokens: Tuple[str, ...]
    policy: CompletionPolicy


@dataclasses.dataclass(frozen=True)
class FunctionSpec:
    """Everything needed to render the completion function of one command node."""

    identifier: str
    command_path: Tuple[str, ...]
    description: Optional[str]
    flag_tokens: Tuple[str, ...]
    arg_tokens: Tuple[str, ...]
    subcommand_names: Tuple[str, ...]
    value_branches: Tuple[ValueBranch, ...]
    # (subcommand name, function name) pairs, used for dispatch.
    subcommand_functions: Tuple[Tuple[str, str], ...]

    def function_name(self, prefix: str) -> str:
        return f"{prefix}_{self.identifier}"


def _value_branches(
    arg_tokens: Tuple[str, ...], policy_from_token: Dict[str, CompletionPolicy]
) -> Tuple[ValueBranch, ...]:
    """Group argument tokens that share a completion policy into one branch, in order
    of first appearance."""
    tokens_from_policy: Dict[CompletionPolicy, List[str]] = {}
    for token in arg_tokens:
        tokens_from_policy.setdefault(policy_from_token[token], []).append(token)
    return tuple(
        ValueBranch(tokens=tuple(tokens), policy=policy)
        for policy, tokens in tokens_from_policy.items()
    )


def _check_subcommand_name(name: str, parent_path: Tuple[str, ...]) -> None:
    if name == "" or _strings.has_whitespace(name):
        raise InvalidCommandModelError(
            f"Subcommand name {name!r} of command {' '.join(parent_path)!r} must be"
            " non-empty and contain no whitespace"
        )


def build_function_specs(model: CommandNode, prefix: str) -> List[FunctionSpec]:
    """Returns one `FunctionSpec` per node of `model`, root first, depth first."""
    if _strings.wordify(model.name) == "":
        raise InvalidCommandModelError(
            f"Root command name {model.name!r} can't be used to name shell functions"
        )

    specs: List[FunctionSpec] = []

    for path, node in model.walk():
        identifier = _strings.sanitize(path)

        for name in node.subcommands:
            _check_subcommand_name(name, path)

        classification = classify(node, path)
        log.debug("function:%s:%s", identifier, list(node.subcommands))
        specs.append(
            FunctionSpec(
                identifier=identifier,
                command_path=path,
                description=node.description,
                flag_tokens=classification.flag_tokens,
                arg_tokens=classification.arg_tokens,
                subcommand_names=tuple(node.subcommands),
                value_branches=_value_branches(
                    classification.arg_tokens, classification.policy_from_token
                ),
                subcommand_functions=tuple(
                    (name, f"{prefix}_{_strings.sanitize(path + (name,))}")
                    for name in node.subcommands
                ),
            )
        )

    return specs


_FUNCTION_TEMPLATE = Template(
    """\
# Generates completions for the options and subcommands of the `${command}` command.${description}
function ${function_name}() {
  local CURR_WORD="$${COMP_WORDS[COMP_CWORD]}"
  local PREV_WORD="$${COMP_WORDS[COMP_CWORD-1]}"

  local COMMANDS=${commands}
  local FLAG_OPTS=${flag_opts}
  local ARG_OPTS=${arg_opts}
${value_case}
  mapfile -t COMPREPLY < <(compgen -W "$${FLAG_OPTS} $${ARG_OPTS} $${COMMANDS}" -- "$${CURR_WORD}")
}
"""
)

_BRANCH_TEMPLATE = Template(
    """\
    ${pattern})
${body}
      return 0
      ;;
"""
)


def _render_branch_body(policy: CompletionPolicy) -> str:
    if policy.kind == "enumerated":
        return (
            "      mapfile -t COMPREPLY < <(compgen -W "
            + _strings.compgen_wordlist(policy.candidates)
            + ' -- "${CURR_WORD}")'
        )
    elif policy.kind == "filename":
        return (
            "      compopt -o filenames 2>/dev/null\n"
            '      mapfile -t COMPREPLY < <(compgen -f -- "${CURR_WORD}")'
        )
    else:
        assert policy.kind == "free_text"
        return "      COMPREPLY=()"


def render_function(spec: FunctionSpec, prefix: str) -> str:
    value_case = ""
    if len(spec.value_branches) > 0:
        value_case = (
            '\n  case "${PREV_WORD}" in\n'
            + "".join(
                _BRANCH_TEMPLATE.substitute(
                    pattern=_strings.case_pattern(branch.tokens),
                    body=_render_branch_body(branch.policy),
                )
                for branch in spec.value_branches
            )
            + "  esac\n"
        )

    return _FUNCTION_TEMPLATE.substitute(
        command=_strings.comment_text(" ".join(spec.command_path)),
        description=(
            ""
            if not spec.description
            else "\n# " + _strings.comment_text(spec.description)
        ),
        function_name=spec.function_name(prefix),
        commands=_strings.compgen_wordlist(spec.subcommand_names),
        flag_opts=_strings.compgen_wordlist(spec.flag_tokens),
        arg_opts=_strings.compgen_wordlist(spec.arg_tokens),
        value_case=value_case,
    )
