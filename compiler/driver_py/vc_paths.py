#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import os

OPTION_PREFIX = "-"


def is_option_like(token: str) -> bool:
    """True for a non-empty token starting with the option prefix."""
    return len(token) > 0 and token[0] == OPTION_PREFIX


def is_implicit(path: str) -> bool:
    """
    True if `path` is neither absolute nor explicitly relative.

    'foo.v' and 'dir/foo.v' are implicit; '/x/foo.v', './foo.v' and
    '../foo.v' are not.
    """
    if os.path.isabs(path):
        return False
    for prefix in (os.curdir + os.sep, os.pardir + os.sep):
        if path.startswith(prefix):
            return False
    return True


def make_explicit(path: str) -> str:
    """
    Prefix an implicit path with the current directory.

    A bare 'foo.v' becomes './foo.v' so that downstream load-path logic
    never reads it as a logical module name.
    """
    if is_implicit(path):
        return os.path.join(os.curdir, path)
    return path
