"""Game configuration and presentation pacing hints."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from citrus.components.candy_types import DEFAULT_CANDY_TYPES, CandyType
from citrus.components.cascade_stage import StageKind
from citrus.constants import (
    BOARD_SIZE,
    INITIAL_MOVES,
    MIN_CANDY_TYPES,
    TARGET_SCORE_BASE,
    TARGET_SCORE_INCREMENT,
)

LEVEL_UP = 'level_up'


@dataclass(frozen=True, slots=True)
class PacingConfig:
    """Seconds to hold each stage on screen, for normal and reduced motion.

    These are scheduling hints only; nothing in the engine waits on them.
    """
    normal: Mapping[str, float] = field(default_factory=lambda: {
        StageKind.SWAP.value: 0.22,
        StageKind.REVERT.value: 0.20,
        StageKind.MATCHED.value: 0.18,
        StageKind.CLEARED.value: 0.12,
        StageKind.REFILLED.value: 0.14,
        LEVEL_UP: 0.45,
    })
    reduced: Mapping[str, float] = field(default_factory=lambda: {
        StageKind.SWAP.value: 0.08,
        StageKind.REVERT.value: 0.09,
        StageKind.MATCHED.value: 0.07,
        StageKind.CLEARED.value: 0.05,
        StageKind.REFILLED.value: 0.05,
        LEVEL_UP: 0.10,
    })

    def delay_for(self, kind: str, *, reduced_motion: bool = False) -> float:
        table = self.reduced if reduced_motion else self.normal
        return float(table.get(kind, 0.0))


@dataclass(frozen=True, slots=True)
class GameConfig:
    board_size: int = BOARD_SIZE
    candy_types: Dict[str, CandyType] = field(default_factory=lambda: dict(DEFAULT_CANDY_TYPES))
    initial_moves: int = INITIAL_MOVES
    target_base: int = TARGET_SCORE_BASE
    target_increment: int = TARGET_SCORE_INCREMENT
    max_cascade_depth: Optional[int] = None
    seed: Optional[int] = None
    log_level: str = "WARNING"
    pacing: PacingConfig = field(default_factory=PacingConfig)

    def __post_init__(self) -> None:
        if self.board_size < 3:
            raise ValueError(f"board_size must be >= 3, got {self.board_size}")
        if len(self.candy_types) < MIN_CANDY_TYPES:
            raise ValueError(
                f"at least {MIN_CANDY_TYPES} candy types are required, got {len(self.candy_types)}"
            )
        if self.initial_moves < 1:
            raise ValueError(f"initial_moves must be >= 1, got {self.initial_moves}")
        if self.target_base < 1 or self.target_increment < 0:
            raise ValueError("target score parameters must be positive")
        if self.max_cascade_depth is not None and self.max_cascade_depth < 1:
            raise ValueError(f"max_cascade_depth must be >= 1, got {self.max_cascade_depth}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GameConfig":
        """Build a config from ``CITRUS_*`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        for key, name in (
            ("CITRUS_BOARD_SIZE", "board_size"),
            ("CITRUS_INITIAL_MOVES", "initial_moves"),
            ("CITRUS_SEED", "seed"),
        ):
            raw = env.get(key)
            if raw is None or raw == "":
                continue
            try:
                kwargs[name] = int(raw)
            except ValueError as exc:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
        level = env.get("CITRUS_LOG_LEVEL")
        if level:
            kwargs["log_level"] = level.upper()
        return cls(**kwargs)
