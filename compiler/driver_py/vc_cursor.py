#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import Callable, List, Optional, Sequence

from vc_errors import MissingArgumentError
from vc_paths import is_option_like


class ArgCursor:
    """
    Mutable cursor over the not-yet-consumed argument tokens.

    The interpreter pulls one option with `take_option()`; the option's
    handler then pulls its arguments with `take_next()`, which reports a
    missing argument against that option.
    """

    def __init__(self, tokens: Sequence[str]):
        self._tokens: List[str] = list(tokens)
        self._pos = 0
        self.option: Optional[str] = None
        # 1-based position of `option` in the original token list
        self.option_position: Optional[int] = None

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def take_option(self) -> str:
        """Consume the next token as the option currently being interpreted."""
        if self.at_end():
            raise IndexError("take_option() on an exhausted cursor")
        token = self._tokens[self._pos]
        self._pos += 1
        self.option = token
        self.option_position = self._pos
        return token

    def take_next(self) -> str:
        """Consume and return the next token, or fail naming the current option."""
        if self.at_end():
            raise MissingArgumentError(self.option or "")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def peek_next(self) -> Optional[str]:
        if self.at_end():
            return None
        return self._tokens[self._pos]

    def collect_run(self, predicate: Optional[Callable[[str], bool]] = None) -> List[str]:
        """
        Consume tokens while the lookahead satisfies `predicate`.

        The default predicate stops at the first token that looks like an
        option. An empty token also stops the run.
        """
        if predicate is None:
            predicate = is_argument_like
        run: List[str] = []
        while True:
            token = self.peek_next()
            if token is None or not predicate(token):
                return run
            run.append(self.take_next())


def is_argument_like(token: str) -> bool:
    return len(token) > 0 and not is_option_like(token)
