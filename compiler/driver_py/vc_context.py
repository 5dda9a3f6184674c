"""
Front-end context for cross-cutting driver options.

This module defines the CompilationContext dataclass which holds options
that affect how the argument front-end reports what it finds (logging
level, log format, warning state). It is distinct from CompileArgs, which
is what the front-end produces.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Mapping, Optional, Set


class LogLevel(IntEnum):
    """Hierarchical logging levels for the driver front-end."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (VCC_VERBOSITY=1)
    DEBUG = 30      # Detailed diagnostic information (VCC_VERBOSITY=3)


@dataclass
class WarningState:
    """
    Per-invocation warning bookkeeping.

    disabled : warning names or categories that must not be printed
    enabled  : warning names explicitly switched back on
    emitted  : names of `once` warnings already printed
    """
    disabled: Set[str] = field(default_factory=set)
    enabled: Set[str] = field(default_factory=set)
    emitted: Set[str] = field(default_factory=set)

    def apply_spec(self, spec: str) -> None:
        """
        Apply a comma-separated list like "-deprecated,+deprecated-option".

        A leading '-' silences, a leading '+' (or none) re-enables. For the
        same item the last mention wins; a name switched on explicitly stays
        on even when its category is silenced.
        """
        for item in spec.split(","):
            item = item.strip()
            if not item:
                continue
            if item.startswith("-"):
                self.disabled.add(item[1:])
                self.enabled.discard(item[1:])
            else:
                name = item.lstrip("+")
                self.disabled.discard(name)
                self.enabled.add(name)

    def is_enabled(self, name: str, category: str) -> bool:
        if name in self.enabled:
            return True
        return name not in self.disabled and category not in self.disabled


_TRUTHY = {"1", "true", "yes", "on"}


def _level_from_verbosity(raw: Optional[str]) -> LogLevel:
    try:
        verbosity = int(raw) if raw else 0
    except ValueError:
        return LogLevel.WARNING
    if verbosity >= 3:
        return LogLevel.DEBUG
    if verbosity >= 1:
        return LogLevel.INFO
    return LogLevel.WARNING


@dataclass
class CompilationContext:
    """
    Holds cross-cutting options of the argument front-end.

    Attributes:
        log_rich_format:    If True, emit logs in rich format: timestamps and levels.
        log_level:          Current logging level.
        warnings:           Disabled warnings and warnings already emitted once.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    warnings: WarningState = field(default_factory=WarningState)

    @staticmethod
    def default() -> 'CompilationContext':
        """Create a CompilationContext with default settings."""
        return CompilationContext(log_level=LogLevel.WARNING)

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> 'CompilationContext':
        """
        Build a context from VCC_VERBOSITY, VCC_LOG_RICH and VCC_WARNINGS.

        Unset or malformed variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        warnings = WarningState()
        warnings.apply_spec(env.get("VCC_WARNINGS", ""))
        return CompilationContext(
            log_rich_format=env.get("VCC_LOG_RICH", "").strip().lower() in _TRUTHY,
            log_level=_level_from_verbosity(env.get("VCC_VERBOSITY")),
            warnings=warnings,
        )
