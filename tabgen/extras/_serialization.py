"""Human-readable YAML serialization for command models."""

from __future__ import annotations

from typing import IO, Any, Dict, List, Tuple, Union

import yaml

from .._errors import InvalidCommandModelError
from .._model import CommandNode, OptionSpec


def _fail(path: Tuple[str, ...], message: str) -> InvalidCommandModelError:
    where = " ".join(path) if len(path) > 0 else "<root>"
    return InvalidCommandModelError(f"Invalid command model at {where!r}: {message}")


def _string_list(value: Any, path: Tuple[str, ...], key: str) -> List[str]:
    if not isinstance(value, list) or not all(
        isinstance(x, (str, int, float, bool)) for x in value
    ):
        raise _fail(path, f"`{key}` should be a list of strings")
    return [str(x) for x in value]


def _option_from_dict(data: Any, path: Tuple[str, ...]) -> OptionSpec:
    if not isinstance(data, dict):
        raise _fail(path, f"expected an option mapping, but got {data!r}")
    unknown = set(data.keys()) - {"names", "takes_argument", "choices", "file"}
    if len(unknown) > 0:
        raise _fail(path, f"unknown option keys {sorted(unknown)}")

    names = _string_list(data.get("names"), path, "names")
    choices = (
        _string_list(data["choices"], path, "choices") if "choices" in data else None
    )
    is_file = bool(data.get("file", False))
    takes_argument = bool(data.get("takes_argument", choices is not None or is_file))
    return OptionSpec(
        names=tuple(names),
        takes_argument=takes_argument,
        choices=None if choices is None else tuple(choices),
        is_file=is_file,
    )


def _node_from_dict(data: Any, name: str, path: Tuple[str, ...]) -> CommandNode:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise _fail(path, f"expected a command mapping, but got {data!r}")
    allowed = {"description", "options", "subcommands"}
    if len(path) == 1:
        allowed.add("name")
    unknown = set(data.keys()) - allowed
    if len(unknown) > 0:
        raise _fail(path, f"unknown command keys {sorted(unknown)}")

    options_data = data.get("options") or []
    if not isinstance(options_data, list):
        raise _fail(path, "`options` should be a list")
    subcommands_data = data.get("subcommands") or {}
    if not isinstance(subcommands_data, dict):
        raise _fail(path, "`subcommands` should be a mapping")

    description = data.get("description")
    return CommandNode(
        name=name,
        options=tuple(_option_from_dict(o, path) for o in options_data),
        subcommands={
            str(sub_name): _node_from_dict(
                sub_data, str(sub_name), path + (str(sub_name),)
            )
            for sub_name, sub_data in subcommands_data.items()
        },
        description=None if description is None else str(description),
    )


def from_yaml(stream: Union[str, IO[str], bytes, IO[bytes]]) -> CommandNode:
    """Load a command model from a YAML (or JSON) document.

    ```yaml
    name: demo
    options:
      - names: [-h, --help]
      - names: [-u, --time-unit]
        choices: [DAYS, HOURS]
    subcommands:
      sub1:
        options:
          - names: [--num]
            takes_argument: true
    ```

    `takes_argument` defaults to true for options with `choices` or `file: true`.
    Subcommands are named by their mapping key, and can't carry a `name` of their own.
    """
    data = yaml.safe_load(stream)
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise _fail((), "the document should be a mapping with a string `name`")
    return _node_from_dict(data, data["name"], (data["name"],))


def _node_to_dict(node: CommandNode, include_name: bool) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if include_name:
        out["name"] = node.name
    if node.description is not None:
        out["description"] = node.description
    if len(node.options) > 0:
        options = []
        for option in node.options:
            option_dict: Dict[str, Any] = {"names": list(option.names)}
            if option.choices is not None:
                option_dict["choices"] = list(option.choices)
            if option.is_file:
                option_dict["file"] = True
            if option.takes_argument != (option.choices is not None or option.is_file):
                option_dict["takes_argument"] = option.takes_argument
            options.append(option_dict)
        out["options"] = options
    if len(node.subcommands) > 0:
        out["subcommands"] = {
            sub_name: _node_to_dict(sub_node, include_name=False)
            for sub_name, sub_node in node.subcommands.items()
        }
    return out


def to_yaml(model: CommandNode) -> str:
    """Serialize a command model to a YAML string, readable by :func:`from_yaml`."""
    return yaml.safe_dump(
        _node_to_dict(model, include_name=True),
        sort_keys=False,
        default_flow_style=None,
    )
