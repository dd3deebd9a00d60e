from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Iterator

from esper import World

from citrus.components.cascade_stage import CascadeStage, StageKind
from citrus.components.game_state import GameState, TurnPhase
from citrus.config import LEVEL_UP, GameConfig
from citrus.engine.grid import swap
from citrus.engine.matches import find_matches
from citrus.engine.resolver import iter_cascade
from citrus.events.bus import (
    EventBus,
    EVENT_ACTIVATION_IGNORED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STAGE,
    EVENT_CELL_ACTIVATE,
    EVENT_CELL_DESELECTED,
    EVENT_CELL_SELECTED,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_INVALID_FEEDBACK,
    EVENT_LEVEL_COMPLETED,
    EVENT_MOVE_SPENT,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PHASE_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_SWAP_REVERTED,
    EVENT_SWAP_STARTED,
    EVENT_TICK,
)
from citrus.state.transitions import (
    Activation,
    add_score,
    new_game_state,
    next_level_state,
    reduce_activation,
    settled_phase,
    spend_move,
    with_grid,
)
from citrus.systems.swap_attempt import SwapAttempt
from citrus.utils.world_resources import (
    get_candy_registry,
    get_game_state,
    get_or_create_settings,
    get_session_entity,
)

logger = logging.getLogger(__name__)


class TurnSystem:
    """Sequences player actions over the session GameState.

    Flow for an adjacent second activation:
      - tentative swap (ANIMATING_SWAP), suspension point;
      - no match: swap back (ANIMATING_REVERT), suspension point, idle, move kept;
      - match: spend a move (RESOLVING_CASCADE) and commit every cascade stage,
        one suspension point each; a cascade over the depth limit is logged
        and the turn settles on the last refilled grid;
      - once settled: level transition if the target is reached, otherwise
        GAME_OVER when out of moves, otherwise idle.
    Each attempt holds the operation token taken when it began and stops
    mutating as soon as a newer attempt or a new game has replaced it.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or GameConfig()
        self._rng = rng or getattr(world, "random", None) or random.Random(self.config.seed)
        self._session_entity = get_session_entity(world)
        self._op_token = 0
        self._elapsed = 0.0
        self.pending: SwapAttempt | None = None
        self.event_bus.subscribe(EVENT_CELL_ACTIVATE, self.on_cell_activate)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def op_token(self) -> int:
        return self._op_token

    @property
    def busy(self) -> bool:
        return self.pending is not None or self.state.busy

    def _token_types(self) -> list[str]:
        return get_candy_registry(self.world).spawnable_types()

    def _stale(self, token: int) -> bool:
        return token != self._op_token

    def _commit(self, new_state: GameState) -> None:
        previous = self.state
        self.world.add_component(self._session_entity, new_state)
        if previous.phase is not new_state.phase:
            self.event_bus.emit(EVENT_PHASE_CHANGED, previous=previous.phase, new=new_state.phase)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_cell_activate(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            return
        self.activate(index)

    def on_new_game_request(self, sender, **kwargs):
        self.new_game()

    def on_tick(self, sender, **kwargs):
        attempt = self.pending
        if attempt is None:
            return
        try:
            self._elapsed += float(kwargs.get('dt', 0.0))
        except (TypeError, ValueError):
            return
        reduced = get_or_create_settings(self.world).reduced_motion
        while self.pending is attempt and attempt.pending_kind is not None:
            delay = self.config.pacing.delay_for(attempt.pending_kind, reduced_motion=reduced)
            if self._elapsed < delay:
                return
            self._elapsed -= delay
            self.advance()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def activate(self, index: int) -> Activation:
        """Handle a player activating the cell at ``index``."""
        state = self.state
        next_state, outcome = reduce_activation(state, index)
        if outcome is Activation.IGNORED_BUSY:
            logger.debug("activate:ignored busy index=%s phase=%s", index, state.phase.name)
            self.event_bus.emit(EVENT_ACTIVATION_IGNORED, index=index, reason='busy')
        elif outcome is Activation.IGNORED_NO_MOVES:
            logger.debug("activate:ignored no moves index=%s", index)
            self.event_bus.emit(EVENT_ACTIVATION_IGNORED, index=index, reason='no_moves')
        elif outcome is Activation.SELECT:
            self._commit(next_state)
            logger.debug("select:first index=%s", index)
            self.event_bus.emit(EVENT_CELL_SELECTED, index=index)
        elif outcome is Activation.DESELECT:
            self._commit(next_state)
            logger.debug("select:clear index=%s", index)
            self.event_bus.emit(EVENT_CELL_DESELECTED, index=index, reason='reselect')
        elif outcome is Activation.RESELECT:
            previous = state.selection
            self._commit(next_state)
            logger.debug("select:nonAdjacent from=%s to=%s", previous, index)
            self.event_bus.emit(EVENT_CELL_SELECTED, index=index)
            self.event_bus.emit(EVENT_INVALID_FEEDBACK, indices=(previous, index), reason='not_adjacent')
        else:
            src = state.selection
            self._commit(next_state)
            self.event_bus.emit(EVENT_CELL_DESELECTED, index=src, reason='swap')
            self.begin_swap(src, index)
        return outcome

    def begin_swap(self, src: int, dst: int) -> SwapAttempt:
        """Start a swap attempt under a fresh operation token.

        The tentative swap is applied before returning; later stages run on
        ``advance``/``settle`` or on ticks.
        """
        self._op_token += 1
        token = self._op_token
        attempt = SwapAttempt(token, src, dst, self._swap_steps(token, src, dst))
        self.pending = attempt
        self._elapsed = 0.0
        attempt.step()
        return attempt

    def advance(self) -> bool:
        """Run the pending attempt up to its next suspension point."""
        attempt = self.pending
        if attempt is None:
            return False
        running = attempt.step()
        if not running and self.pending is attempt:
            self.pending = None
        return running

    def settle(self) -> GameState:
        """Drain the pending attempt without any pacing."""
        while self.advance():
            pass
        return self.state

    def new_game(self) -> GameState:
        """Reinitialise the whole session; any attempt in flight becomes stale."""
        self._op_token += 1
        self.pending = None
        self._elapsed = 0.0
        state = new_game_state(self.config, self._token_types(), self._rng)
        self._commit(state)
        logger.debug("game:new moves=%s target=%s", state.moves_left, state.target_score)
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            level=state.level,
            target_score=state.target_score,
            moves_left=state.moves_left,
        )
        return state

    # ------------------------------------------------------------------
    # Attempt body
    # ------------------------------------------------------------------

    def _emit_stage(self, stage: CascadeStage, token: int) -> None:
        self.event_bus.emit(EVENT_CASCADE_STAGE, stage=stage, op_token=token)

    def _swap_steps(self, token: int, src: int, dst: int) -> Iterator[str]:
        state = self.state
        swapped = swap(state.grid, src, dst)
        self._commit(replace(state, grid=swapped, selection=None, phase=TurnPhase.ANIMATING_SWAP))
        logger.debug("swap:tentative from=%s to=%s op=%s", src, dst, token)
        self.event_bus.emit(EVENT_SWAP_STARTED, src=src, dst=dst, op_token=token)
        self._emit_stage(CascadeStage(StageKind.SWAP, swapped), token)
        yield StageKind.SWAP.value
        if self._stale(token):
            return

        matched = find_matches(swapped).matched
        logger.debug("swap:matchCheck op=%s matched=%s", token, len(matched))
        if not matched:
            reverted = swap(swapped, src, dst)
            self._commit(with_grid(self.state, reverted, TurnPhase.ANIMATING_REVERT))
            logger.debug("swap:revert from=%s to=%s op=%s", src, dst, token)
            self.event_bus.emit(EVENT_INVALID_FEEDBACK, indices=(src, dst), reason='no_match')
            self.event_bus.emit(EVENT_SWAP_REVERTED, src=src, dst=dst, op_token=token)
            self._emit_stage(CascadeStage(StageKind.REVERT, reverted), token)
            yield StageKind.REVERT.value
            if self._stale(token):
                return
            self._commit(replace(self.state, phase=TurnPhase.IDLE_NO_SELECTION))
            return

        spent = spend_move(self.state)
        self._commit(replace(spent, phase=TurnPhase.RESOLVING_CASCADE))
        logger.debug("swap:validMoveResolve op=%s moves_left=%s", token, spent.moves_left)
        self.event_bus.emit(EVENT_MOVE_SPENT, moves_left=spent.moves_left)

        gained = 0
        depth = 0
        stages = iter_cascade(
            swapped,
            self._token_types(),
            self._rng,
            max_depth=self.config.max_cascade_depth,
        )
        try:
            for stage in stages:
                next_state = with_grid(self.state, stage.grid)
                if stage.points:
                    next_state = add_score(next_state, stage.points)
                    gained += stage.points
                self._commit(next_state)
                depth = stage.depth
                self._emit_stage(stage, token)
                if stage.points:
                    self.event_bus.emit(EVENT_SCORE_CHANGED, score=next_state.score, delta=stage.points)
                yield stage.kind.value
                if self._stale(token):
                    return
        except RuntimeError as exc:
            # Depth limit hit: keep the last refilled grid and end the turn normally.
            logger.warning("cascade:limit op=%s depth=%s error=%s", token, depth, exc)
        logger.debug("cascade:complete op=%s depth=%s gained=%s", token, depth, gained)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth, gained=gained, op_token=token)
        yield from self._settle_steps(token)

    def _settle_steps(self, token: int) -> Iterator[str]:
        state = self.state
        phase = settled_phase(state)
        if phase is not TurnPhase.LEVEL_TRANSITION:
            self._commit(replace(state, phase=phase))
            if phase is TurnPhase.GAME_OVER:
                logger.debug("game:over score=%s level=%s", state.score, state.level)
                self.event_bus.emit(EVENT_GAME_OVER, score=state.score, level=state.level)
            return

        self._commit(replace(state, phase=TurnPhase.LEVEL_TRANSITION))
        logger.debug("level:complete level=%s score=%s", state.level, state.score)
        self.event_bus.emit(
            EVENT_LEVEL_COMPLETED,
            level=state.level,
            next_level=state.level + 1,
            score=state.score,
        )
        yield LEVEL_UP
        if self._stale(token):
            return
        upcoming = next_level_state(self.state, self.config, self._token_types(), self._rng)
        self._commit(upcoming)
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            level=upcoming.level,
            target_score=upcoming.target_score,
            moves_left=upcoming.moves_left,
        )
