"""
Logging utilities for the driver front-end.

This module provides logging functions that respect the CompilationContext
logging level and format.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from vc_context import CompilationContext, LogLevel


def log(context: CompilationContext, log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context logging level admits it.

    Args:
        context:    The compilation context containing logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        print("No context provided for logging.", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        return
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    if context.log_level >= log_level:
        print(f"{prefix}{message}", file=sys.stderr)

def log_error(context: CompilationContext, message: str) -> None:
    """Log an error-level message if logging level is ERROR or higher."""
    log(context, LogLevel.ERROR, message)

def log_warning(context: CompilationContext, message: str) -> None:
    """Log a warning-level message if logging level is WARNING or higher."""
    log(context, LogLevel.WARNING, message)

def log_info(context: CompilationContext, message: str) -> None:
    """Log an info-level message if logging level is INFO or higher."""
    log(context, LogLevel.INFO, message)


def log_debug(context: CompilationContext, message: str) -> None:
    """Log a debug-level message if logging level is DEBUG or higher."""
    log(context, LogLevel.DEBUG, message)

def log_stage(context: CompilationContext, stage: str, detail: Optional[str] = None) -> None:
    """
    Log the start of a front-end stage.

    Args:
        context: The compilation context containing logging flags.
        stage: The name of the stage (e.g., "Scanning", "Finalizing").
        detail: Optional short description of what is being processed.
    """
    if detail:
        log(context, LogLevel.INFO, f"{stage} {detail}")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
