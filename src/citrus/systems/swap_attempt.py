from typing import Iterator, Optional


class SwapAttempt:
    """A player swap driven one suspension point at a time.

    ``steps`` is a generator that applies a stage, yields the pacing key of
    that stage and, once resumed, checks its operation token before touching
    the session again.
    """

    def __init__(self, token: int, src: int, dst: int, steps: Iterator[str]):
        self.token = token
        self.src = src
        self.dst = dst
        self._steps = steps
        self.pending_kind: Optional[str] = None
        self.done = False

    def step(self) -> bool:
        """Resume the attempt; return True while it has more stages to run."""
        if self.done:
            return False
        try:
            self.pending_kind = next(self._steps)
        except StopIteration:
            self.pending_kind = None
            self.done = True
            return False
        return True

    def __repr__(self) -> str:
        return f"SwapAttempt(token={self.token}, src={self.src}, dst={self.dst}, done={self.done})"
