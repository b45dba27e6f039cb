"""Command-line argument parsing for the compiler driver."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Sequence, TextIO

_OPT_LEVEL = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d+)")

_HELP = """
Usage: orbc [options] file...

Files can be .orb or object files.

Options:
  -c         Only process and compile, but do not link.
  -emit-llvm Print the LLVM representation into a .ll file.
  -I<dir>    Add directory <dir> to import search paths.
  -o <file>  Place the binary output into <file>.
  -O<num>    Set the optimization level. -O0, -O1, -O2, and -O3 are valid.
"""


class ArgsError(ValueError):
    """Raised when the command line is invalid; holds every message found."""

    def __init__(self, *messages: str) -> None:
        self.messages = list(messages)
        super().__init__("\n".join(messages))


@dataclass
class ProgramArgs:
    inputs_src: list[str] = field(default_factory=list)
    inputs_other: list[str] = field(default_factory=list)
    import_paths: list[str] = field(default_factory=list)
    output_bin: str = ""
    output_llvm: str | None = None
    link: bool = True
    opt_level: int | None = None


def _parse_opt_level(arg: str) -> int:
    match = _OPT_LEVEL.fullmatch(arg[2:])
    if match is None:
        raise ArgsError("Bad optimization level specified.")
    sign, digits = match.groups()
    level = int(digits)
    if (sign == "-" and level != 0) or level > 3:
        raise ArgsError("Bad optimization level specified.")
    return level


def parse_args(argv: Sequence[str]) -> ProgramArgs:
    """Parse the arguments (without the program name) into ProgramArgs."""
    args = ProgramArgs()
    emit_llvm = False

    it = iter(argv)
    for arg in it:
        if arg == "-c":
            args.link = False
        elif arg == "-emit-llvm":
            emit_llvm = True
        elif arg == "-o":
            try:
                args.output_bin = next(it)
            except StopIteration:
                raise ArgsError("Argument to -o must be specified.") from None
        elif arg.startswith("-O"):
            level = _parse_opt_level(arg)
            if args.opt_level is not None:
                raise ArgsError("Multiple optimization levels specified.")
            args.opt_level = level
        elif arg.startswith("-I"):
            import_path = arg[2:]
            if not import_path:
                raise ArgsError("Empty import path specified.")
            args.import_paths.append(import_path)
        elif PurePath(arg).suffix == ".orb":
            args.inputs_src.append(arg)
        else:
            if not os.path.exists(arg):
                raise ArgsError(f"Nonexistent file '{arg}'.")
            args.inputs_other.append(arg)

    if not args.inputs_src:
        problems = []
        if not args.inputs_other:
            problems.append("No input files specified.")
        if not args.link:
            problems.append("No source input files specified when linking disabled.")
        if emit_llvm:
            problems.append("No source input files specified when emitting LLVM output requested.")
        if problems:
            raise ArgsError(*problems)

    if not args.link and args.inputs_other:
        raise ArgsError("Only source input files may be specified when linking disabled.")

    first_input = args.inputs_src[0] if args.inputs_src else args.inputs_other[0]
    first_stem = PurePath(first_input).stem
    windows = os.name == "nt"

    if not args.output_bin:
        if args.link:
            args.output_bin = first_stem + (".exe" if windows else "")
        else:
            args.output_bin = first_stem + (".obj" if windows else ".o")

    if emit_llvm:
        args.output_llvm = first_stem + ".ll"

    return args


def print_help(out: TextIO | None = None) -> None:
    """Write the usage text."""
    (sys.stdout if out is None else out).write(_HELP)