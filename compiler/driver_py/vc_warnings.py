#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

# vc_warnings.py
from __future__ import annotations

from dataclasses import dataclass

from vc_context import CompilationContext
from vc_logger import log_warning


@dataclass(frozen=True)
class CompilerWarning:
    """
    A named, categorized warning.

    `template` is formatted with the positional arguments given to `warn`.
    When `once` is set, the warning is printed at most once per context.
    """
    name: str
    category: str
    template: str
    once: bool = False

    def format(self, *args: object) -> str:
        return f"warning: {self.template.format(*args)} [{self.name},{self.category}]"


DEPRECATED_OPTION = CompilerWarning(
    name="deprecated-option",
    category="deprecated",
    template="Option {0} is a noop and deprecated",
)

DEPRECATED_OUTPUTSTATE = CompilerWarning(
    name="deprecated-outputstate",
    category="deprecated",
    template="The outputstate option is deprecated and discouraged.",
    once=True,
)


def warn(context: CompilationContext | None, warning: CompilerWarning, *args: object) -> bool:
    """
    Print `warning` through the context logger unless silenced.

    Returns True if the warning was printed.
    """
    if context is None:
        log_warning(context, warning.format(*args))
        return True
    state = context.warnings
    if not state.is_enabled(warning.name, warning.category):
        return False
    if warning.once:
        if warning.name in state.emitted:
            return False
        state.emitted.add(warning.name)
    log_warning(context, warning.format(*args))
    return True
