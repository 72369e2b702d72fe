"""Entry function and `complete` registration of a completion script."""

from __future__ import annotations

from string import Template
from typing import Sequence

from . import _strings
from ._functions import FunctionSpec

_ENTRY_TEMPLATE = Template(
    """\
# Bash completion entry point function.
# ${entry_name} finds which commands and subcommands have been specified
# on the command line and delegates to the appropriate function
# to generate possible options and subcommands for the last specified subcommand.
function ${entry_name}() {
  local active="${root_function}"
  local word_index
  for (( word_index = 1; word_index < COMP_CWORD; word_index++ )); do
    local word="$${COMP_WORDS[word_index]}"
    case "$${active}" in
${tables}      *)
        break
        ;;
    esac
  done

  "$${active}"
  return $$?
}
"""
)

_TABLE_TEMPLATE = Template(
    """\
      ${function_name})
        case "$${word}" in
${arms}          *)
            break
            ;;
        esac
        ;;
"""
)

_REGISTRATION_TEMPLATE = Template(
    """\
# Define a completion specification (a compspec) for the
# ${commands} command${plural}.
# Uses the bash `complete` builtin to specify that shell function
# `${entry_name}` is responsible for generating possible completions for the
# current word on the command line.
# The `-o default` option means that if the function generated no matches, the
# default Bash completions and the Readline default filename completions are performed.
complete -F ${entry_name} -o default ${aliases}
"""
)


def entry_function_name(prefix: str, root_spec: FunctionSpec) -> str:
    return f"{prefix}_complete_{root_spec.identifier}"


def render_entry_function(specs: Sequence[FunctionSpec], prefix: str) -> str:
    """Render the dispatch function. `specs[0]` must describe the root command.

    Words after the command name are consumed while they name a subcommand of the
    currently active command; the first word that doesn't stops the walk."""
    tables = []
    for spec in specs:
        # Commands without subcommands fall through to the `*) break` arm.
        if len(spec.subcommand_functions) == 0:
            continue
        arms = "".join(
            f"          {_strings.case_pattern([name])})\n"
            f'            active="{function_name}"\n'
            "            ;;\n"
            for name, function_name in spec.subcommand_functions
        )
        tables.append(
            _TABLE_TEMPLATE.substitute(
                function_name=spec.function_name(prefix), arms=arms
            )
        )

    return _ENTRY_TEMPLATE.substitute(
        entry_name=entry_function_name(prefix, specs[0]),
        root_function=specs[0].function_name(prefix),
        tables="".join(tables),
    )


def render_registration(
    aliases: Sequence[str], root_spec: FunctionSpec, prefix: str
) -> str:
    commands = [f"`{_strings.comment_text(alias)}`" for alias in aliases]
    if len(commands) <= 2:
        commands_text = " and ".join(commands)
    else:
        commands_text = ", ".join(commands[:-1]) + ", and " + commands[-1]
    return _REGISTRATION_TEMPLATE.substitute(
        commands=commands_text,
        plural="s" if len(commands) > 1 else "",
        entry_name=entry_function_name(prefix, root_spec),
        aliases=_strings.quote_words(aliases),
    )
