"""Substitution executor for the Rotation Timer application."""

import logging

from ..models import GameState, SubstitutionPlan
from .notification_service import AudioCue, play_safely
from .player_registry import PlayerRegistry

logger = logging.getLogger(__name__)


def execute_substitution(
    plan: SubstitutionPlan,
    registry: PlayerRegistry,
    game_state: GameState,
    audio: AudioCue,
) -> int:
    """
    Apply a plan at round expiry.

    Clears every ``just_subbed`` marker, swaps each (out, in) pair, counts
    down every player's sit-out rounds, restarts the round clock and plays
    the substitution sound.

    Args:
        plan: Plan computed for this round boundary
        registry: Roster to mutate
        game_state: Round/game state; its round clock is reset
        audio: Sound collaborator, failures are ignored

    Returns:
        Number of swaps performed
    """
    registry.clear_just_subbed()

    swaps = 0
    for player_out, player_in in plan.pairs():
        out = registry.get(player_out.id)
        incoming = registry.get(player_in.id)
        if out is None or incoming is None:
            continue
        out.is_active = False
        out.just_subbed = True
        incoming.is_active = True
        incoming.last_sub_time = game_state.game_elapsed_seconds
        swaps += 1

    registry.decrement_sit_outs()
    game_state.reset_round_clock()

    logger.info(
        "Substitution at %ss: %d swap(s) ON %s OFF %s",
        game_state.game_elapsed_seconds,
        swaps,
        plan.in_ids,
        plan.out_ids,
    )
    play_safely(audio)
    return swaps
