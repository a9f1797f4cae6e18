"""
Rotation planner for the Rotation Timer application.

Pure functions that decide who comes off and who goes on at the next round
boundary. Nothing here mutates players; the same inputs always produce the
same plan.

The ranking rules compare players pairwise and only let a key decide when
the gap is large enough to matter for the configured round length, falling
back to the next key otherwise:

* players out: most playtime first, then longest since coming on;
* players in: furthest under the fair-share target first, then least
  playtime, then longest since last coming on.

Players who have been on for ``MANDATORY_ROTATION_ROUNDS`` rounds in a row
come off before anyone else.
"""
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from ..models import Player, SubstitutionPlan
from ..utils import ACTIVE_SLOT_COUNT, MANDATORY_ROTATION_ROUNDS


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def target_play_time_seconds(
    game_elapsed_seconds: int,
    roster_size: int,
    active_slot_count: int = ACTIVE_SLOT_COUNT,
) -> float:
    """
    Fair per-player share of the time played so far.

    Args:
        game_elapsed_seconds: Current game clock value
        roster_size: Number of players on the roster
        active_slot_count: Players on the field at once

    Returns:
        Target playtime in seconds
    """
    if roster_size <= 0:
        return 0.0
    target_minutes = game_elapsed_seconds / 60 * active_slot_count / roster_size
    return target_minutes * 60


def seconds_under_target(player: Player, target_seconds: float) -> float:
    return max(0.0, target_seconds - player.play_time_seconds)


def mandatory_rotation_seconds(round_duration_seconds: int) -> int:
    """Continuous time on the field after which a player must come off."""
    return MANDATORY_ROTATION_ROUNDS * round_duration_seconds


def must_sub_out(
    active: Iterable[Player],
    game_elapsed_seconds: int,
    round_duration_seconds: int,
) -> List[Player]:
    """
    Active players over the continuous-play limit, longest stint first.
    """
    limit = mandatory_rotation_seconds(round_duration_seconds)
    overdue = [
        p for p in active
        if game_elapsed_seconds - p.last_sub_time >= limit
    ]
    overdue.sort(key=lambda p: p.last_sub_time)
    return overdue


def rank_players_out(active: Iterable[Player], round_duration_seconds: int) -> List[Player]:
    """
    Order active players by how strongly they should come off.

    Args:
        active: Candidates (already on the field)
        round_duration_seconds: Configured round length

    Returns:
        Candidates, strongest case for substitution first
    """
    threshold = max(15, round_duration_seconds / 4)

    def compare(a: Player, b: Player) -> int:
        diff = b.play_time_seconds - a.play_time_seconds
        if abs(diff) > threshold:
            return _sign(diff)
        return _sign(a.last_sub_time - b.last_sub_time)

    return sorted(active, key=cmp_to_key(compare))


def rank_reserves(
    reserves: Iterable[Player],
    target_seconds: float,
    round_duration_seconds: int,
) -> List[Player]:
    """
    Order eligible reserves by how strongly they should come on.

    Args:
        reserves: Eligible reserves
        target_seconds: Fair-share target from :func:`target_play_time_seconds`
        round_duration_seconds: Configured round length

    Returns:
        Reserves, highest priority first
    """
    deficit_threshold = max(30, round_duration_seconds / 2)
    playtime_threshold = max(10, round_duration_seconds / 4)

    def compare(a: Player, b: Player) -> int:
        deficit_diff = seconds_under_target(b, target_seconds) - seconds_under_target(a, target_seconds)
        if abs(deficit_diff) > deficit_threshold:
            return _sign(deficit_diff)
        playtime_diff = a.play_time_seconds - b.play_time_seconds
        if abs(playtime_diff) > playtime_threshold:
            return _sign(playtime_diff)
        return _sign(a.last_sub_time - b.last_sub_time)

    return sorted(reserves, key=cmp_to_key(compare))


def substitution_count(
    mandatory: int,
    substitutions_per_round: int,
    available: int,
    active: int,
) -> int:
    """
    Number of swaps for the next round.

    Mandatory rotations may exceed ``substitutions_per_round`` but the count
    never exceeds the number of available reserves or active players, so
    every player going off has a replacement. Plans pair players positionally,
    so when more players are overdue than there are reserves, the ones with
    the longest stints come off now and the rest stay overdue for the next
    round.
    """
    count = max(mandatory, min(substitutions_per_round, available, active))
    if count == 0 and available > 0 and active > 0:
        count = 1
    return min(count, available, active)


def compute_plan(
    active: Iterable[Player],
    reserves: Iterable[Player],
    game_elapsed_seconds: int,
    round_duration_seconds: int,
    substitutions_per_round: int,
    roster_size: int,
    active_slot_count: int = ACTIVE_SLOT_COUNT,
) -> SubstitutionPlan:
    """
    Compute the substitution plan for the next round boundary.

    Args:
        active: Players on the field
        reserves: Players off the field; only eligible ones are considered
        game_elapsed_seconds: Current game clock value
        round_duration_seconds: Configured round length
        substitutions_per_round: Target number of swaps
        roster_size: Number of players on the roster
        active_slot_count: Players on the field at once, for the fair share

    Returns:
        New SubstitutionPlan
    """
    active = [p for p in active if p.is_active and not p.excluded]
    available = [p for p in reserves if not p.is_active and p.can_play()]

    target = target_play_time_seconds(game_elapsed_seconds, roster_size, active_slot_count)

    mandatory = must_sub_out(active, game_elapsed_seconds, round_duration_seconds)
    mandatory_ids = {p.id for p in mandatory}
    should = rank_players_out(
        [p for p in active if p.id not in mandatory_ids], round_duration_seconds
    )
    by_priority = rank_reserves(available, target, round_duration_seconds)

    count = substitution_count(
        len(mandatory), substitutions_per_round, len(by_priority), len(active)
    )

    players_out = (mandatory + should)[:count]
    players_in = by_priority[:count]
    return SubstitutionPlan(players_in=players_in, players_out=players_out)


def plan_changed(previous: Optional[SubstitutionPlan], current: SubstitutionPlan) -> bool:
    """
    Change predicate used to skip redundant refreshes and notifications.

    Returns:
        True unless both plans have the same in/out id sequences
    """
    if previous is None:
        return True
    return previous != current


def describe_plan(plan: SubstitutionPlan) -> Tuple[str, str]:
    """Return comma-joined (on, off) names for display and notifications."""
    on = ", ".join(p.name for p in plan.players_in)
    off = ", ".join(p.name for p in plan.players_out)
    return on, off
