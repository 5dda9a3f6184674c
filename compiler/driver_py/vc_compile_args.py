"""
The compile configuration produced by the argument front-end.

CompileArgs is built once per invocation from a CompileArgsDraft that the
recognized options fill in, and is handed downstream read-only.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple


class CompilationMode(Enum):
    STANDARD = auto()          # source -> final compiled artifact
    PARTIAL = auto()           # -quick: source -> partial artifact
    PARTIAL_TO_FINAL = auto()  # -vio2vo: partial artifact -> final artifact


class GlobOutputKind(Enum):
    NONE = auto()
    MULTI_FILE = auto()
    SINGLE_FILE = auto()


@dataclass(frozen=True)
class GlobOutput:
    """
    Destination of the symbol/location dump.

    Only SINGLE_FILE carries a path.
    """
    kind: GlobOutputKind
    path: Optional[str] = None

    @staticmethod
    def none() -> 'GlobOutput':
        return GlobOutput(GlobOutputKind.NONE)

    @staticmethod
    def multi_file() -> 'GlobOutput':
        return GlobOutput(GlobOutputKind.MULTI_FILE)

    @staticmethod
    def single_file(path: str) -> 'GlobOutput':
        return GlobOutput(GlobOutputKind.SINGLE_FILE, path)

    def describe(self) -> str:
        if self.kind is GlobOutputKind.SINGLE_FILE:
            return f"single file '{self.path}'"
        if self.kind is GlobOutputKind.NONE:
            return "disabled"
        return "one file per source"


@dataclass(frozen=True)
class CompileEntry:
    path: str
    verbose: bool


@dataclass(frozen=True)
class VioTask:
    task_ids: Tuple[int, ...]
    task_file: str


@dataclass(frozen=True)
class CompileArgs:
    """
    Attributes:
        compilation_mode:       STANDARD unless -quick or -vio2vo was given.
        compile_list:           Files to compile, in encounter order, each with its verbosity.
        output_name:            Value of the last -o, if any.
        vio_checking:           True if -schedule-vio-checking was given.
        vio_tasks:              One entry per -check-vio-tasks, in encounter order.
        vio_files:              Files collected by the -schedule-* options, in encounter order.
        vio_files_concurrency:  Worker count for the external scheduler; 0 means unset.
        echo_all:               Default verbosity for files added through bare tokens.
        output_state_file:      Value of the last -outputstate, if any (deprecated).
        glob_output:            Glob dump destination.
    """
    compilation_mode: CompilationMode = CompilationMode.STANDARD

    compile_list: Tuple[CompileEntry, ...] = ()
    output_name: Optional[str] = None

    vio_checking: bool = False
    vio_tasks: Tuple[VioTask, ...] = ()
    vio_files: Tuple[str, ...] = ()
    vio_files_concurrency: int = 0

    echo_all: bool = False

    output_state_file: Optional[str] = None
    glob_output: GlobOutput = GlobOutput.multi_file()


DEFAULT_COMPILE_ARGS = CompileArgs()


@dataclass
class CompileArgsDraft:
    """
    Working copy of CompileArgs during the scan.

    Option handlers update it in place and list fields grow by append;
    `freeze()` produces the read-only CompileArgs once, at finalize time.
    """
    compilation_mode: CompilationMode = CompilationMode.STANDARD

    compile_list: List[CompileEntry] = field(default_factory=list)
    output_name: Optional[str] = None

    vio_checking: bool = False
    vio_tasks: List[VioTask] = field(default_factory=list)
    vio_files: List[str] = field(default_factory=list)
    vio_files_concurrency: int = 0

    echo_all: bool = False

    output_state_file: Optional[str] = None
    glob_output: GlobOutput = GlobOutput.multi_file()

    def freeze(self) -> CompileArgs:
        return CompileArgs(
            compilation_mode=self.compilation_mode,
            compile_list=tuple(self.compile_list),
            output_name=self.output_name,
            vio_checking=self.vio_checking,
            vio_tasks=tuple(self.vio_tasks),
            vio_files=tuple(self.vio_files),
            vio_files_concurrency=self.vio_files_concurrency,
            echo_all=self.echo_all,
            output_state_file=self.output_state_file,
            glob_output=self.glob_output,
        )


def format_compile_args(args: CompileArgs) -> str:
    lines = [f"mode: {args.compilation_mode.name.lower()}"]

    lines.append("compile:")
    if args.compile_list:
        for entry in args.compile_list:
            flag = " (verbose)" if entry.verbose else ""
            lines.append(f"  {entry.path}{flag}")
    else:
        lines.append("  <none>")

    lines.append(f"output: {args.output_name or '<default>'}")

    if args.vio_checking or args.vio_files or args.vio_tasks:
        lines.append(f"vio checking: {'yes' if args.vio_checking else 'no'}")
        lines.append(f"vio workers: {args.vio_files_concurrency or '<unset>'}")
        for f in args.vio_files:
            lines.append(f"  vio file {f}")
        for task in args.vio_tasks:
            ids = ",".join(str(i) for i in task.task_ids)
            lines.append(f"  vio tasks {ids} in {task.task_file}")

    if args.output_state_file is not None:
        lines.append(f"output state: {args.output_state_file}")
    lines.append(f"glob: {args.glob_output.describe()}")
    return "\n".join(lines)
