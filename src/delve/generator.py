"""
Step pipeline for dungeon generation.

A step is any callable taking a DungeonState and returning a new one. Steps
report failure by raising a GenerationError; the pipeline never sees a
partially built state from a failed step.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .exceptions import GenerationError, RetryBudgetExceeded
from .layout import DungeonState
from .rng import RandomSource

logger = logging.getLogger(__name__)

Step = Callable[[DungeonState], DungeonState]

DEFAULT_MAX_RETRIES = 1000


def step_name(step: Callable) -> str:
    """Readable name for logs; sees through functools.partial and wrappers."""
    inner = getattr(step, "func", None) or getattr(step, "step", None)
    if inner is not None:
        return step_name(inner)
    return getattr(step, "__name__", repr(step))


class RetryableStep:
    """Reattempt a step against the same input state until it succeeds.

    Raises RetryBudgetExceeded after ``max_retries`` failed attempts. Only
    GenerationError counts as a failed attempt; anything else propagates at
    once.
    """

    def __init__(self, step: Step, max_retries: int = DEFAULT_MAX_RETRIES) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.step = step
        self.max_retries = max_retries

    def __call__(self, state: DungeonState) -> DungeonState:
        last_error: Optional[GenerationError] = None
        attempts = 0
        while attempts < self.max_retries:
            attempts += 1
            try:
                result = self.step(state)
            except GenerationError as e:
                last_error = e
                continue
            if attempts > 1:
                logger.debug("%s succeeded after %d attempts", step_name(self), attempts)
            return result
        assert last_error is not None
        logger.warning("%s failed %d times: %s", step_name(self), attempts, last_error)
        raise RetryBudgetExceeded(last_error, attempts) from last_error

    def __repr__(self) -> str:
        return f"RetryableStep({step_name(self.step)}, max_retries={self.max_retries})"


class DungeonGenerator:
    """Ordered list of generation steps folded over an empty state.

    Usage:
      dungeon = (
          DungeonGenerator(seed=7)
          .add_retryable_step(add_room)
          .add_retryable_step(place_player_spawn)
          .generate()
      )
    """

    def __init__(self, seed: Optional[int] = None, max_retries: int = DEFAULT_MAX_RETRIES) -> None:
        self.seed = seed
        self.max_retries = max_retries
        self._steps: List[Step] = []

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    def add_step(self, step: Step) -> "DungeonGenerator":
        self._steps.append(step)
        return self

    def add_retryable_step(self, step: Step, max_retries: Optional[int] = None) -> "DungeonGenerator":
        self._steps.append(RetryableStep(step, max_retries if max_retries is not None else self.max_retries))
        return self

    def generate(self, rng: Optional[RandomSource] = None) -> DungeonState:
        """Run every step in order and return the final state.

        The first unrecovered GenerationError aborts the run and propagates to
        the caller.
        """
        if rng is None:
            rng = RandomSource(self.seed)
        state = DungeonState.empty(rng)
        logger.debug("Running %d generation steps with %r", len(self._steps), rng)
        for index, step in enumerate(self._steps):
            try:
                state = step(state)
            except GenerationError as e:
                logger.info("Generation aborted at step %d (%s): %s", index, step_name(step), e)
                raise
            logger.debug(
                "Step %d (%s) ok: rooms=%d corridors=%d spawns=%d",
                index,
                step_name(step),
                len(state.rooms),
                len(state.corridors),
                len(state.spawns),
            )
        logger.info(
            "Generated dungeon: rooms=%d corridors=%d spawns=%d",
            len(state.rooms),
            len(state.corridors),
            len(state.spawns),
        )
        return state


__all__ = ["Step", "RetryableStep", "DungeonGenerator", "DEFAULT_MAX_RETRIES", "step_name"]
