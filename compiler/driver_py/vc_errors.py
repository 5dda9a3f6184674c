#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

# vc_errors.py
from __future__ import annotations

from typing import List, Sequence

from vc_diagnostics import Diagnostic


HELP_HINT = "See -help for the syntax of supported options"


class UsageError(Exception):
    """
    A malformed invocation: the command line itself is wrong.

    Always fatal. Raised during the scan and turned into exit status 1
    by parse_compile_args.
    """

    code = "ARG-0000"

    def __init__(self, message: str, option: str | None = None, hints: Sequence[str] = ()):
        super().__init__(message)
        self.message = message
        self.option = option
        self.hints: List[str] = list(hints)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            kind="error",
            message=self.message,
            code=self.code,
            option=self.option,
            hints=list(self.hints),
        )


class MissingArgumentError(UsageError):
    """Raised when an option needs one more token and the input is exhausted."""

    code = "ARG-0010"

    def __init__(self, option: str):
        super().__init__(
            f"extra argument expected after option {option}",
            option=option,
            hints=[HELP_HINT],
        )


class UnknownOptionError(UsageError):
    """Raised for an option-looking token that is not in the dispatch table."""

    code = "ARG-0020"

    def __init__(self, token: str):
        super().__init__(f"Unknown option {token}", option=token, hints=[HELP_HINT])


class MalformedNumberError(UsageError):
    """Raised when a numeric option argument does not parse."""

    def __init__(self, code: str, message: str, option: str, value: str, hints: Sequence[str] = ()):
        super().__init__(message, option=option, hints=hints)
        self.code = code
        self.value = value


class ModeConflictError(UsageError):
    """Raised when two different non-default compilation modes are requested."""

    code = "ARG-0050"

    def __init__(self, current, requested):
        super().__init__(
            "Options -quick and -vio2vo are exclusive",
            hints=[
                f"compilation mode already set to {current.name.lower()}, "
                f"cannot switch to {requested.name.lower()}",
            ],
        )
        self.current = current
        self.requested = requested
