#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import Optional, Sequence

from vc_compile_args import CompileArgs, CompileArgsDraft
from vc_context import CompilationContext
from vc_diagnostics import Diagnostic
from vc_internal_error import ICELocation, InternalCompilerError
from vc_logger import log_error, log_stage
from vc_options import add_compile
from vc_paths import is_option_like


def check_output_name_consistency(args: CompileArgs) -> Optional[Diagnostic]:
    """
    -o names a single artifact, so it cannot go with several files.

    The problem is reported but the configuration is still usable;
    rejecting it is left to the compilation pipeline.
    """
    if args.output_name is not None and len(args.compile_list) > 1:
        return Diagnostic(
            kind="error",
            message="option -o is not valid when more than one",
            code="ARG-0060",
            option="-o",
            hints=["files have to be compiled"],
        )
    return None


def finalize_compile_args(
    opts: CompileArgsDraft,
    extras: Sequence[str],
    context: CompilationContext,
) -> CompileArgs:
    """
    Fold the deferred extras into the compile list, freeze and validate.

    Every extra takes the echo flag as it stands after the whole scan,
    not as it stood at the extra's position.
    """
    log_stage(context, "Finalizing", "configuration")
    for extra in extras:
        if is_option_like(extra):
            raise InternalCompilerError(
                f"[ICE-0020] option-like token deferred as a file: {extra}",
                ICELocation(position=None, token=extra),
            )
        opts = add_compile(opts, extra)

    args = opts.freeze()
    diag = check_output_name_consistency(args)
    if diag is not None:
        for line in diag.lines():
            log_error(context, line)
    return args
