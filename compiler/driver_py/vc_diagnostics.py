#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from typing import List, Optional


DIAGNOSTIC_CODE_FAMILIES = {
    "ARG": [
        "ARG-0010",  # missing argument after option
        "ARG-0020",  # unknown option
        "ARG-0030",  # malformed worker count
        "ARG-0040",  # malformed task id list
        "ARG-0050",  # exclusive compilation modes
        "ARG-0060",  # -o with more than one file (reported, not fatal)
    ],
    # ICE codes are internal compiler errors raised as exceptions,
    # not user-facing diagnostics; they are excluded from this registry.
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    code: Optional[str] = None

    # Option token the diagnostic is about, if any
    option: Optional[str] = None

    # Remediation lines printed after the header
    hints: List[str] = field(default_factory=list)

    # Return the one-line header; hints are printed at the call site
    def format(self) -> str:
        code = f"[{self.code}] " if self.code else ""
        return f"{self.kind}: {code}{self.message}"

    def lines(self) -> List[str]:
        return [self.format(), *self.hints]


def is_registered_code(code: str) -> bool:
    family = code.split("-", 1)[0]
    return code in DIAGNOSTIC_CODE_FAMILIES.get(family, [])
