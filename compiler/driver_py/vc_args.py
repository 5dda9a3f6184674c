"""
Command-line argument front-end for the compiler driver.

parse_compile_args turns the raw argument list into a finalized
CompileArgs, or terminates the process:

  - exit status 1 (EXIT_USAGE) for a malformed invocation,
  - exit status 129 (EXIT_ANOMALY) for a failure of the front-end itself.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import Sequence

from vc_compile_args import CompileArgs, format_compile_args
from vc_context import CompilationContext
from vc_errors import UsageError
from vc_finalize import finalize_compile_args
from vc_internal_error import InternalCompilerError
from vc_logger import log_debug, log_error
from vc_options import scan_args

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ANOMALY = 129


def report_usage_error(context: CompilationContext, err: UsageError) -> None:
    for line in err.to_diagnostic().lines():
        log_error(context, line)


def report_internal_error(context: CompilationContext, err: Exception) -> None:
    if not isinstance(err, InternalCompilerError):
        err = InternalCompilerError(f"{type(err).__name__}: {err}")
    log_error(context, err.format())


def parse_compile_args(argv: Sequence[str], context: CompilationContext | None = None) -> CompileArgs:
    """
    Scan and finalize `argv` (program name excluded).

    Never returns on error: raises SystemExit with EXIT_USAGE or
    EXIT_ANOMALY after reporting.
    """
    context = context or CompilationContext.default()
    try:
        opts, extras = scan_args(list(argv), context)
        args = finalize_compile_args(opts, extras, context)
    except UsageError as e:
        report_usage_error(context, e)
        raise SystemExit(EXIT_USAGE)
    except Exception as e:
        report_internal_error(context, e)
        raise SystemExit(EXIT_ANOMALY)
    log_debug(context, "Compile configuration:\n" + format_compile_args(args))
    return args
