#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

# vc_internal_error.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ICELocation:
    # 1-based position in the argument list
    position: Optional[int]
    token: Optional[str]


class InternalCompilerError(RuntimeError):
    """
    ICE = front-end bug / violated scan invariant.
    Not for user mistakes (those are UsageErrors).
    """

    def __init__(self, message: str, loc: ICELocation | None = None):
        super().__init__(message)
        self.message = message
        self.loc = loc

    def format(self) -> str:
        message = self.message
        if not "[ICE-" in message:
            message = f"[ICE-9999] {message}"
        if self.loc and self.loc.position is not None:
            if self.loc.token is not None:
                return f"argument {self.loc.position} ({self.loc.token!r}): internal compiler error: {message}"
            return f"argument {self.loc.position}: internal compiler error: {message}"
        return f"internal compiler error: {message}"
