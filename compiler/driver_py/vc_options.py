#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import re
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from vc_compile_args import (
    CompilationMode,
    CompileArgsDraft,
    CompileEntry,
    GlobOutput,
    VioTask,
)
from vc_context import CompilationContext
from vc_cursor import ArgCursor
from vc_errors import MalformedNumberError, ModeConflictError, UnknownOptionError
from vc_internal_error import ICELocation, InternalCompilerError
from vc_logger import log_debug, log_stage
from vc_paths import is_option_like, make_explicit
from vc_warnings import DEPRECATED_OPTION, DEPRECATED_OUTPUTSTATE, warn


OptionHandler = Callable[[CompileArgsDraft, ArgCursor, CompilationContext], CompileArgsDraft]


# --- Helpers shared with the finalizer ---

def add_compile(opts: CompileArgsDraft, path: str, verbose: bool | None = None) -> CompileArgsDraft:
    """
    Append `path` to the compile list, made explicit.

    `verbose` defaults to the current echo flag.
    """
    if is_option_like(path):
        raise UnknownOptionError(path)
    if verbose is None:
        verbose = opts.echo_all
    opts.compile_list.append(CompileEntry(make_explicit(path), verbose))
    return opts


def add_vio_file(opts: CompileArgsDraft, path: str) -> CompileArgsDraft:
    opts.vio_files.append(path)
    return opts


def add_vio_task(opts: CompileArgsDraft, task: VioTask) -> CompileArgsDraft:
    opts.vio_tasks.append(task)
    return opts


def set_compilation_mode(opts: CompileArgsDraft, mode: CompilationMode) -> CompileArgsDraft:
    """
    Leave STANDARD for `mode`.

    Re-requesting the current mode is accepted; any other change once a
    non-default mode is set is a usage error.
    """
    current = opts.compilation_mode
    if current is CompilationMode.STANDARD:
        opts.compilation_mode = mode
    elif current is not mode:
        raise ModeConflictError(current, mode)
    return opts


# --- Numeric arguments ---

# 63-bit range accepted for worker counts and task ids
INT_BITS = 63
MAX_INT = (1 << (INT_BITS - 1)) - 1
MIN_INT = -(1 << (INT_BITS - 1))

_INT_LITERAL_RE = re.compile(
    r"(?P<sign>[-+]?)(?P<prefix>0[xXoObBuU])?(?P<digits>[0-9a-fA-F][0-9a-fA-F_]*)\Z"
)
_PREFIX_BASES = {"x": 16, "o": 8, "b": 2, "u": 10}


def _wrap_int(value: int) -> int:
    return ((value - MIN_INT) % (1 << INT_BITS)) + MIN_INT


def parse_int_literal(text: str) -> int:
    """
    Parse an integer literal the way build tools expect it to be read.

    Accepts an optional sign, a 0x/0o/0b/0u base prefix and '_' separators
    after the first digit. No whitespace. Signed decimals must fit the
    63-bit range; prefixed literals may use the full unsigned range and
    wrap around. Raises ValueError otherwise.
    """
    m = _INT_LITERAL_RE.match(text)
    if m is None:
        raise ValueError(f"invalid integer literal: {text!r}")
    prefix = m.group("prefix")
    base = _PREFIX_BASES[prefix[1].lower()] if prefix else 10
    magnitude = int(m.group("digits").replace("_", ""), base)
    negative = m.group("sign") == "-"
    if prefix:
        if magnitude >= 1 << INT_BITS:
            raise ValueError(f"integer literal out of range: {text!r}")
    elif magnitude > (-MIN_INT if negative else MAX_INT):
        raise ValueError(f"integer literal out of range: {text!r}")
    return _wrap_int(-magnitude if negative else magnitude)


def split_task_list(value: str) -> List[str]:
    """
    Split on ',' ignoring one leading and one trailing separator.

    Empty items anywhere else are kept, so they fail integer parsing.
    """
    items = value.split(",")
    if items and items[0] == "":
        items = items[1:]
    if items and items[-1] == "":
        items = items[:-1]
    return items


def parse_worker_count(option: str, value: str) -> int:
    try:
        return parse_int_literal(value)
    except ValueError:
        raise MalformedNumberError(
            "ARG-0030",
            f"The first argument of {option} must be the number",
            option=option,
            value=value,
            hints=[
                "of concurrent workers to be used (a positive integer).",
                "Generated makefiles should be called setting the J variable",
                "like in 'make vio2vo J=3'",
            ],
        ) from None


def parse_task_list(option: str, value: str) -> Tuple[int, ...]:
    """Parse '1,2,3' into (1, 2, 3)."""
    ids = []
    for item in split_task_list(value):
        try:
            ids.append(parse_int_literal(item))
        except ValueError:
            raise MalformedNumberError(
                "ARG-0040",
                f"Option {option} expects a comma-separated list of integers",
                option=option,
                value=value,
                hints=["followed by a list of files"],
            ) from None
    return tuple(ids)


# --- Option handlers ---

def _opt_deprecated_noop(opts, cursor, context):
    warn(context, DEPRECATED_OPTION, cursor.option)
    return opts


def _opt_image(opts, cursor, context):
    warn(context, DEPRECATED_OPTION, cursor.option)
    cursor.take_next()
    return opts


def _opt_verbose(opts, cursor, context):
    opts.echo_all = True
    return opts


def _opt_output(opts, cursor, context):
    opts.output_name = cursor.take_next()
    return opts


def _opt_quick(opts, cursor, context):
    return set_compilation_mode(opts, CompilationMode.PARTIAL)


def _opt_check_vio_tasks(opts, cursor, context):
    task_ids = parse_task_list(cursor.option, cursor.take_next())
    task_file = cursor.take_next()
    return add_vio_task(opts, VioTask(task_ids, task_file))


def _collect_vio_files(opts, cursor):
    opts.vio_files_concurrency = parse_worker_count(cursor.option, cursor.take_next())
    opts = add_vio_file(opts, cursor.take_next())
    for path in cursor.collect_run():
        opts = add_vio_file(opts, path)
    return opts


def _opt_schedule_vio_checking(opts, cursor, context):
    opts.vio_checking = True
    return _collect_vio_files(opts, cursor)


def _opt_schedule_vio2vo(opts, cursor, context):
    return _collect_vio_files(opts, cursor)


def _opt_vio2vo(opts, cursor, context):
    opts = add_compile(opts, cursor.take_next(), verbose=False)
    return set_compilation_mode(opts, CompilationMode.PARTIAL_TO_FINAL)


def _opt_outputstate(opts, cursor, context):
    warn(context, DEPRECATED_OUTPUTSTATE)
    opts.output_state_file = cursor.take_next()
    return opts


def _opt_no_glob(opts, cursor, context):
    opts.glob_output = GlobOutput.none()
    return opts


def _opt_dump_glob(opts, cursor, context):
    opts.glob_output = GlobOutput.single_file(cursor.take_next())
    return opts


OPTION_HANDLERS: Dict[str, OptionHandler] = {
    # Deprecated options
    "-opt": _opt_deprecated_noop,
    "-byte": _opt_deprecated_noop,
    "-image": _opt_image,
    # Verbose == echo mode
    "-verbose": _opt_verbose,
    # Output filename
    "-o": _opt_output,
    # Partial compilation
    "-quick": _opt_quick,
    "-check-vio-tasks": _opt_check_vio_tasks,
    "-schedule-vio-checking": _opt_schedule_vio_checking,
    "-schedule-vio2vo": _opt_schedule_vio2vo,
    "-vio2vo": _opt_vio2vo,
    "-outputstate": _opt_outputstate,
    # Glob options
    "-no-glob": _opt_no_glob,
    "-noglob": _opt_no_glob,
    "-dump-glob": _opt_dump_glob,
}


def interpret_option(
    opts: CompileArgsDraft,
    cursor: ArgCursor,
    context: CompilationContext,
    extras: List[str],
) -> CompileArgsDraft:
    """
    Consume one token from `cursor` and return the next configuration.

    Tokens that are not options are appended to `extras`.
    """
    token = cursor.take_option()
    handler = OPTION_HANDLERS.get(token)
    if handler is None:
        if is_option_like(token):
            raise UnknownOptionError(token)
        extras.append(token)
        return opts

    new_opts = handler(opts, cursor, context)
    if not isinstance(new_opts, CompileArgsDraft):
        raise InternalCompilerError(
            f"[ICE-0010] handler for {token} returned {type(new_opts).__name__}",
            ICELocation(position=cursor.option_position, token=token),
        )
    return new_opts


def scan_args(
    tokens: Sequence[str],
    context: CompilationContext,
    opts: Optional[CompileArgsDraft] = None,
) -> Tuple[CompileArgsDraft, List[str]]:
    """
    Run the option interpreter over the whole token list.

    Returns the draft configuration reached and the deferred extras, both
    in encounter order. Usage errors propagate as UsageError.
    """
    log_stage(context, "Scanning", f"{len(tokens)} argument(s)")
    if opts is None:
        opts = CompileArgsDraft()
    cursor = ArgCursor(tokens)
    extras: List[str] = []
    while not cursor.at_end():
        opts = interpret_option(opts, cursor, context, extras)
    log_debug(context, f"Deferred {len(extras)} extra argument(s)")
    return opts, extras
