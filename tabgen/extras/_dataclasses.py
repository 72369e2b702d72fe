"""Command models from annotated dataclasses."""

from __future__ import annotations

import dataclasses
import enum
import inspect
import logging
import pathlib
import sys
from typing import Any, Dict, List, Optional, Tuple, Type, Union

import docstring_parser
from typing_extensions import Annotated, Literal, get_args, get_origin, get_type_hints

from .. import _strings
from .._errors import InvalidArgumentError, InvalidCommandModelError
from .._model import CommandNode, OptionSpec
from ..conf._confstruct import _ArgConfiguration, _SubcommandConfiguration

log = logging.getLogger(__name__)

_UNION_ORIGINS: Tuple[Any, ...] = (Union,)
if sys.version_info >= (3, 10):
    import types

    _UNION_ORIGINS = (Union, types.UnionType)


def _unwrap_annotated(typ: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """Returns the type stripped of `Annotated[]`, and the attached metadata."""
    if get_origin(typ) is Annotated:
        args = get_args(typ)
        return args[0], tuple(args[1:])
    return typ, ()


def _union_members(typ: Any) -> Tuple[Any, ...]:
    if get_origin(typ) in _UNION_ORIGINS:
        return get_args(typ)
    return (typ,)


def _unwrap_optional(typ: Any) -> Any:
    members = [m for m in _union_members(typ) if m is not type(None)]
    if len(members) == 1:
        return members[0]
    return typ


def _is_dataclass_type(typ: Any) -> bool:
    return isinstance(typ, type) and dataclasses.is_dataclass(typ)


def _subcommand_types(typ: Any) -> Tuple[Any, ...]:
    """If `typ` is a dataclass or a union over dataclasses, returns each (possibly
    annotated) dataclass type. Otherwise, returns an empty tuple."""
    members = [m for m in _union_members(typ) if m is not type(None)]
    if len(members) > 0 and all(
        _is_dataclass_type(_unwrap_annotated(m)[0]) for m in members
    ):
        return tuple(members)
    return ()


def _description_from_docstring(cls: Type) -> Optional[str]:
    docstring = inspect.getdoc(cls)
    # Dataclasses without a docstring get their signature as `__doc__`.
    if docstring is None or docstring.startswith(cls.__name__ + "("):
        return None
    return docstring_parser.parse(docstring).short_description


def _choices_from_type(typ: Any) -> Optional[Tuple[str, ...]]:
    if isinstance(typ, type) and issubclass(typ, enum.Enum):
        return tuple(member.name for member in typ)
    if get_origin(typ) is Literal:
        return tuple(
            value.name if isinstance(value, enum.Enum) else str(value)
            for value in get_args(typ)
        )
    return None


def _option_from_field(
    field_name: str, typ: Any, markers: Tuple[Any, ...]
) -> OptionSpec:
    confs = [m for m in markers if isinstance(m, _ArgConfiguration)]
    name: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    complete: Optional[str] = None
    for conf in confs:
        name = conf.name if conf.name is not None else name
        aliases = conf.aliases if conf.aliases is not None else aliases
        complete = conf.complete if conf.complete is not None else complete

    if name is None:
        name = "--" + field_name.replace("_", "-")
    elif not name.startswith("-"):
        name = "--" + name
    names = aliases + (name,)

    if typ is bool:
        return OptionSpec.flag(*names)

    if complete == "file":
        return OptionSpec.argument(*names, is_file=True)
    if complete == "none":
        return OptionSpec.argument(*names)

    is_file = isinstance(typ, type) and issubclass(typ, pathlib.PurePath)
    return OptionSpec.argument(*names, choices=_choices_from_type(typ), is_file=is_file)


def _node_from_dataclass(
    cls: Type,
    name: str,
    description: Optional[str],
    parents: Tuple[Type, ...],
) -> CommandNode:
    if cls in parents:
        raise InvalidCommandModelError(
            f"{cls.__name__} contains itself as a subcommand; command models must be"
            " trees"
        )

    hints: Dict[str, Any] = get_type_hints(cls, include_extras=True)
    options: List[OptionSpec] = []
    subcommands: Dict[str, CommandNode] = {}

    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        typ, markers = _unwrap_annotated(hints[field.name])
        typ = _unwrap_optional(typ)

        sub_types = _subcommand_types(typ)
        if len(sub_types) == 0:
            options.append(_option_from_field(field.name, typ, markers))
            continue

        for sub_type in sub_types:
            sub_cls, sub_markers = _unwrap_annotated(sub_type)
            sub_name: Optional[str] = None
            sub_description: Optional[str] = None
            for conf in sub_markers:
                if isinstance(conf, _SubcommandConfiguration):
                    sub_name = conf.name if conf.name is not None else sub_name
                    sub_description = (
                        conf.description
                        if conf.description is not None
                        else sub_description
                    )
            if sub_name is None:
                sub_name = _strings.hyphen_separated_from_camel_case(sub_cls.__name__)

            log.debug("subcommand:%s:%s", name, sub_name)
            subcommands[sub_name] = _node_from_dataclass(
                sub_cls, sub_name, sub_description, parents + (cls,)
            )

    return CommandNode(
        name=name,
        options=tuple(options),
        subcommands=subcommands,
        description=(
            description if description is not None else _description_from_docstring(cls)
        ),
    )


def model_from_dataclass(cls: Type, name: Optional[str] = None) -> CommandNode:
    """Build a command model from a dataclass type.

    Each field becomes a `--field-name` option: `bool` fields are flags, `Enum` and
    `Literal` fields offer their values, and `pathlib` paths complete filenames. Fields
    annotated with a dataclass, or a union over dataclasses, become subcommands. Use
    :func:`tabgen.conf.arg` and :func:`tabgen.conf.subcommand` to adjust names.

    Args:
        cls: Dataclass type describing the root command.
        name: Name of the root command. Defaults to the hyphenated class name.

    Returns:
        The command model.
    """
    if not _is_dataclass_type(cls):
        raise InvalidArgumentError(f"Expected a dataclass type, but got {cls!r}")
    if name is None:
        name = _strings.hyphen_separated_from_camel_case(cls.__name__)
    return _node_from_dataclass(cls, name, None, parents=())
