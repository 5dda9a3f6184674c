#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from vc_context import CompilationContext, LogLevel


@pytest.fixture
def context() -> CompilationContext:
    """Context that prints warnings and errors, like a default invocation."""
    return CompilationContext.default()


@pytest.fixture
def quiet_context() -> CompilationContext:
    return CompilationContext(log_level=LogLevel.SILENT)


def parse_exit_code(fn, *args, **kwargs) -> int:
    with pytest.raises(SystemExit) as exc:
        fn(*args, **kwargs)
    return exc.value.code
