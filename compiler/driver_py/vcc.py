#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
from typing import Callable, Optional, Sequence

from vc_args import EXIT_OK, parse_compile_args
from vc_compile_args import CompileArgs, format_compile_args
from vc_context import CompilationContext
from vc_logger import log_info

Pipeline = Callable[[CompileArgs, CompilationContext], int]


def describe_pipeline(args: CompileArgs, context: CompilationContext) -> int:
    """Stand-in pipeline: report what would be compiled."""
    log_info(context, format_compile_args(args))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None, pipeline: Optional[Pipeline] = None) -> None:
    context = CompilationContext.from_env()
    if argv is None:
        argv = sys.argv[1:]
    pipeline = pipeline or describe_pipeline

    try:
        args = parse_compile_args(argv, context)
        rc = pipeline(args, context)
    # Handle Ctrl-C gracefully
    except KeyboardInterrupt:
        rc = 130
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
