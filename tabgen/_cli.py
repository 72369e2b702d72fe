"""Command-line front end: resolves a command model, then writes its completion
script."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import pathlib
import sys
import tempfile
from importlib import import_module
from typing import Any, List, Optional, Sequence, Tuple

import termcolor
import yaml

from . import _script
from ._errors import InvalidArgumentError, TabgenError
from ._model import CommandNode
from ._version import __version__
from .extras import from_yaml, model_from_dataclass, model_from_parser

log = logging.getLogger(__name__)

MODEL_FILE_SUFFIXES = (".yaml", ".yml", ".json")


def get_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabgen",
        description="Generates a bash completion script for the specified command"
        " model.",
    )
    parser.add_argument(
        "target",
        help="importable command model (`package.module.attribute`: a CommandNode, an"
        " ArgumentParser, a dataclass type, or a function returning one of these), or"
        " a path to a .yaml/.yml/.json model file",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "-n",
        "--name",
        help="name of the command to create a completion script for; defaults to the"
        " name of the root command in the model",
    )
    parser.add_argument(
        "-o",
        "--completion-script",
        type=pathlib.Path,
        help="path of the completion script file to generate; defaults to"
        " '<name>_completion' in the current directory",
    )
    parser.add_argument(
        "-w",
        "--write-command-script",
        action="store_true",
        help="write a '<name>' sample command script to the same directory as the"
        " completion script",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="overwrite existing script files",
    )
    parser.add_argument(
        "--prefix",
        default=_script.DEFAULT_PREFIX,
        help="prepended to generated functions to avoid clashes",
    )
    parser.add_argument(
        "--verbose",
        dest="loglevel",
        action="store_const",
        default=logging.INFO,
        const=logging.DEBUG,
        help="log debug information",
    )
    return parser


def model_from_object(obj: Any) -> CommandNode:
    """Convert any supported object to a command model. Functions are called once, and
    their output converted."""
    if isinstance(obj, CommandNode):
        return obj
    if isinstance(obj, argparse.ArgumentParser):
        return model_from_parser(obj)
    if isinstance(obj, type) and dataclasses.is_dataclass(obj):
        return model_from_dataclass(obj)
    if callable(obj) and not isinstance(obj, type):
        try:
            out = obj()
        except Exception as e:
            raise InvalidArgumentError(f"Can't instantiate {obj!r}: {e}") from e
        if callable(out) and not isinstance(out, type):
            raise InvalidArgumentError(
                f"{obj!r} returned {out!r}, which is not a command model"
            )
        return model_from_object(out)
    raise InvalidArgumentError(f"Can't build a command model from {obj!r}")


def resolve_target(target: str) -> Tuple[CommandNode, Optional[str]]:
    """Returns the command model for `target`, and the name of the module it was
    imported from (None for model files)."""
    if target.endswith(MODEL_FILE_SUFFIXES):
        log.debug("loading model file %s", target)
        with open(target, "r", encoding="utf-8") as f:
            return from_yaml(f), None

    if "." not in target:
        raise InvalidArgumentError(
            f"Expected `package.module.attribute` or a model file, but got {target!r}"
        )
    module_name, attribute = target.rsplit(".", 1)
    if sys.path and sys.path[0] and os.curdir not in sys.path:
        # not blank so not searching curdir
        sys.path.insert(1, os.curdir)
    try:
        module = import_module(module_name)
    except ImportError:
        raise
    except Exception as e:
        raise InvalidArgumentError(f"Can't import {module_name!r}: {e}") from e
    return model_from_object(getattr(module, attribute)), module_name


def command_script(module_name: str) -> str:
    return (
        "#!/usr/bin/env bash\n"
        "\n"
        f'exec "${{PYTHON:-python3}}" -m {module_name} "$@"\n'
    )


def write_scripts(scripts: Sequence[Tuple[pathlib.Path, str, bool]]) -> None:
    """Write each `(path, text, executable)` script. Every file is written under a
    temporary name first, and nothing is moved into place until all of them have been
    written."""
    staged: List[Tuple[str, pathlib.Path]] = []
    try:
        for path, text, executable in scripts:
            fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            staged.append((temp_name, path))
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
            os.chmod(temp_name, 0o755 if executable else 0o644)
    except BaseException:
        for temp_name, _ in staged:
            os.unlink(temp_name)
        raise

    for i, (temp_name, path) in enumerate(staged):
        try:
            os.replace(temp_name, path)
        except BaseException:
            for remaining, _ in staged[i:]:
                os.unlink(remaining)
            raise
        log.info("wrote %s", path)


def _print_error(parser: argparse.ArgumentParser, message: str) -> None:
    sys.stderr.write(termcolor.colored(message, "red", attrs=["bold"]) + "\n")
    parser.print_usage(sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = get_main_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.loglevel)
    log.debug(args)

    try:
        model, module_name = resolve_target(args.target)
        if args.name is not None:
            model = dataclasses.replace(model, name=args.name)
        name: str = model.name

        completion_script: pathlib.Path = (
            args.completion_script
            if args.completion_script is not None
            else pathlib.Path(f"{name}_completion")
        )
        outputs = [completion_script]
        if args.write_command_script:
            if module_name is None:
                raise InvalidArgumentError(
                    "--write-command-script needs an importable target, not a model"
                    " file"
                )
            outputs.append(completion_script.parent / name)

        # Check everything before writing anything.
        for path in outputs:
            if path.exists() and not args.force:
                raise FileExistsError(f"{path} exists. Specify -f to overwrite.")

        scripts = [
            (
                completion_script,
                _script.generate(
                    _script.default_aliases(name), model, prefix=args.prefix
                ),
                False,
            )
        ]
        if module_name is not None and args.write_command_script:
            scripts.append((outputs[1], command_script(module_name), True))
        write_scripts(scripts)
    except (TabgenError, ImportError, AttributeError, OSError, yaml.YAMLError) as e:
        _print_error(parser, str(e))
        return 1

    return 0


def entrypoint() -> None:
    sys.exit(main())
