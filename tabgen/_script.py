"""Assembly of complete bash completion scripts."""

from __future__ import annotations

import logging
from string import Template
from typing import List, Sequence, Tuple, Union

from . import _dispatch, _functions, _strings
from ._errors import InvalidArgumentError
from ._model import CommandNode
from ._version import __version__

log = logging.getLogger(__name__)

DEFAULT_PREFIX = "_tabgen"

# References:
# - https://www.gnu.org/software/bash/manual/html_node/Programmable-Completion.html
# - https://www.gnu.org/software/bash/manual/html_node/The-Shopt-Builtin.html
_HEADER_TEMPLATE = Template(
    """\
#!/usr/bin/env bash
#
# ${command} Bash Completion
# ${underline}
#
# Bash completion support for the `${command}` command,
# generated by tabgen ${version}.
#
# Installation
# ------------
#
# 1. Place this file in a `bash-completion.d` folder:
#
#   * /etc/bash-completion.d
#   * /usr/local/etc/bash-completion.d
#   * ~/bash-completion.d
#
# 2. Open a new bash console, and type `${command} [TAB][TAB]`
#
# Documentation
# -------------
# The script is called by bash whenever [TAB] or [TAB][TAB] is pressed after
# '${command} (..)'. By reading entered command line parameters,
# it determines possible bash completions and writes them to the COMPREPLY variable.
# Bash then completes the user input if only one entry is listed in the variable or
# shows the options if more than one is listed in COMPREPLY.
#

# Enable programmable completion facilities.
shopt -s progcomp
"""
)


def default_aliases(name: str) -> Tuple[str, str, str]:
    """Names a command is registered under by default: `name`, `name.sh`, and
    `name.bash`."""
    return (name, name + ".sh", name + ".bash")


def _normalize_aliases(aliases: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(aliases, str):
        aliases = (aliases,)
    if aliases is None or len(aliases) == 0:
        raise InvalidArgumentError("At least one command alias is required")

    out: List[str] = []
    for alias in aliases:
        if not isinstance(alias, str) or alias == "" or _strings.has_whitespace(alias):
            raise InvalidArgumentError(f"Invalid command alias: {alias!r}")
        if alias not in out:
            out.append(alias)
    return out


def generate(
    aliases: Union[str, Sequence[str]],
    model: CommandNode,
    version: str = __version__,
    *,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """Returns a bash completion script for a command model.

    Args:
        aliases: Names the root command is invoked as. All of them are bound to the
            same completion function.
        model: Command model to generate completions for.
        version: Version or provenance string, shown in the header comment.
        prefix: Prepended to generated function names to avoid clashes.

    Returns:
        The script. Nothing is returned if any input is invalid; an exception is
        raised instead.
    """
    alias_list = _normalize_aliases(aliases)
    if not isinstance(model, CommandNode):
        raise InvalidArgumentError(f"Expected a CommandNode, but got {model!r}")
    if not _strings.is_identifier(prefix):
        raise InvalidArgumentError(
            f"Function prefix {prefix!r} is not a valid shell identifier"
        )

    # Validation happens here; nothing below can fail.
    specs = _functions.build_function_specs(model, prefix)
    log.debug("generating %d functions for %s", len(specs), alias_list)

    command = _strings.comment_text(alias_list[0])
    parts = [
        _HEADER_TEMPLATE.substitute(
            command=command,
            underline="=" * (len(command) + len(" Bash Completion")),
            version=_strings.comment_text(version),
        )
    ]
    parts.extend(_functions.render_function(spec, prefix) for spec in specs)
    parts.append(_dispatch.render_entry_function(specs, prefix))
    parts.append(_dispatch.render_registration(alias_list, specs[0], prefix))
    return "\n".join(parts)
