"""
Seed placement and round-1 slot assignment.
"""
import logging
import math
from typing import List, Optional

from .errors import DuplicateEntrant, InvalidConfiguration
from .models import BYE

logger = logging.getLogger(__name__)

# Practical ceiling on seeded positions, not a mathematical one
MAX_SEEDS = 32


def is_power_of_two(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 2 and value & (value - 1) == 0


def calculate_draw_size(num_entrants: int) -> int:
    """Calculate the draw size (next power of 2, at least 2)."""
    if num_entrants <= 2:
        return 2
    return 2 ** math.ceil(math.log2(num_entrants))


def calculate_byes(num_entrants: int, draw_size: Optional[int] = None) -> int:
    """Calculate number of byes needed."""
    if draw_size is None:
        draw_size = calculate_draw_size(num_entrants)
    return draw_size - num_entrants


def seed_position_table(draw_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order.
    Seed i (0-based) is placed at 1-indexed position table[i].

    For 8 slots: [1, 8, 4, 5, 2, 7, 3, 6]
    """
    if not is_power_of_two(draw_size):
        raise InvalidConfiguration(f"Draw size must be a power of two >= 2, got {draw_size!r}")
    if draw_size == 2:
        return [1, 2]

    result = []
    for position in seed_position_table(draw_size // 2):
        result.extend([position, draw_size + 1 - position])
    return result


def effective_seed_count(requested: int, draw_size: int, num_entrants: int) -> int:
    return min(requested, MAX_SEEDS, draw_size, num_entrants)


def validate_entrants(ranked_entrants: List) -> None:
    if not ranked_entrants:
        raise InvalidConfiguration("At least one entrant is required")
    seen = set()
    for entrant_id in ranked_entrants:
        try:
            hash(entrant_id)
        except TypeError:
            raise InvalidConfiguration(f"{entrant_id!r} is not a valid entrant id") from None
        if entrant_id is None or isinstance(entrant_id, bool) or entrant_id == BYE:
            raise InvalidConfiguration(f"{entrant_id!r} is not a valid entrant id")
        if entrant_id in seen:
            raise DuplicateEntrant(entrant_id)
        seen.add(entrant_id)


def assign_slots(draw_size: int, seed_count: int, ranked_entrants: List) -> List:
    """
    Place ranked entrants (strongest first) into the round-1 slots of a draw.

    Seeds go to their fixed positions, byes are handed to seeds first (in seed
    order) and then to the next-ranked unseeded entrants, and the remaining
    entrants fill the open slots in rank order. Returns a list of length
    ``draw_size`` holding entrant ids and ``BYE``.
    """
    if not is_power_of_two(draw_size):
        raise InvalidConfiguration(f"Draw size must be a power of two >= 2, got {draw_size!r}")
    if not isinstance(seed_count, int) or isinstance(seed_count, bool) or seed_count < 0:
        raise InvalidConfiguration(f"Seed count must be a non-negative integer, got {seed_count!r}")
    validate_entrants(ranked_entrants)

    num_entrants = len(ranked_entrants)
    byes = draw_size - num_entrants
    if byes < 0:
        raise InvalidConfiguration(
            f"{num_entrants} entrants do not fit in a draw of {draw_size}")

    seeds_total = effective_seed_count(seed_count, draw_size, num_entrants)
    seeds = list(ranked_entrants[:seeds_total])
    rest = list(ranked_entrants[seeds_total:])
    order = [position - 1 for position in seed_position_table(draw_size)]

    slots = [None] * draw_size
    for i, entrant_id in enumerate(seeds):
        slots[order[i]] = entrant_id
    seed_slots = set(order[:seeds_total])

    assigned = _give_byes_to_seeds(slots, seeds, order, seed_slots, byes)
    if assigned < byes:
        assigned += _give_byes_to_unseeded(slots, rest, order, byes - assigned)

    # Fill remaining with rest
    placed = set(entrant_id for entrant_id in slots if entrant_id is not None and entrant_id != BYE)
    remaining = iter(entrant_id for entrant_id in rest if entrant_id not in placed)
    for index in range(draw_size):
        if slots[index] is None:
            slots[index] = next(remaining, BYE)

    logger.debug(f"Assigned {draw_size} slots with {seeds_total} seeds and {byes} byes: {slots}")
    return slots


def _give_byes_to_seeds(slots, seeds, order, seed_slots, byes) -> int:
    """
    Mark the sibling of each seed as BYE, in seed order, while byes remain.

    An occupied sibling is moved to the first empty non-seed slot. Only when no
    such slot is left is it swapped with the first placed non-seed entrant that
    is not another seed's sibling; the swap grants no bye. Starting from
    ``assign_slots`` an empty slot is always available and every seed is still
    on its own slot, so the last two cases only arise for hand-built arrays.
    """
    where = {entrant_id: index for index, entrant_id in enumerate(slots)
             if entrant_id is not None and entrant_id != BYE}
    empty_cursor = 0
    reserved = set()
    assigned = 0
    for i, entrant_id in enumerate(seeds):
        if assigned >= byes:
            break
        seed_slot = order[i]
        sibling = seed_slot ^ 1
        current = where[entrant_id]
        if current != seed_slot:
            # Moved off its position as an earlier seed's sibling; take it back
            displaced = slots[seed_slot]
            slots[current], slots[seed_slot] = displaced, entrant_id
            where[entrant_id] = seed_slot
            if displaced is None:
                empty_cursor = min(empty_cursor, current)
            elif displaced != BYE:
                where[displaced] = current

        occupant = slots[sibling]
        if occupant is None:
            slots[sibling] = BYE
            assigned += 1
        elif occupant != BYE:
            # Slots never empty again here, so the search resumes where it stopped
            while empty_cursor < len(slots) and (slots[empty_cursor] is not None or empty_cursor in seed_slots):
                empty_cursor += 1
            if empty_cursor < len(slots):
                logger.debug(f"Moving {occupant!r} from slot {sibling} to {empty_cursor} to give seed {i + 1} a bye")
                slots[empty_cursor] = occupant
                where[occupant] = empty_cursor
                slots[sibling] = BYE
                assigned += 1
            else:
                swap_index = next(
                    (k for k in range(len(slots))
                     if slots[k] is not None and slots[k] != BYE
                     and k not in seed_slots and k not in reserved and k != sibling),
                    None)
                if swap_index is not None:
                    logger.debug(f"Swapping {occupant!r} at slot {sibling} with {slots[swap_index]!r} at slot {swap_index}")
                    other = slots[swap_index]
                    slots[sibling], slots[swap_index] = other, occupant
                    where[other], where[occupant] = sibling, swap_index
        reserved.add(sibling)
    return assigned


def _give_byes_to_unseeded(slots, rest, order, byes) -> int:
    """
    Hand leftover byes to unseeded entrants in rank order, each taking the first
    pair in table order whose two slots are still empty.
    """
    assigned = 0
    cursor = 0
    for entrant_id in rest:
        if assigned >= byes:
            break
        # A pair with a filled slot stays filled, so skipped pairs are never revisited
        while cursor < len(order) and not (slots[order[cursor]] is None and slots[order[cursor] ^ 1] is None):
            cursor += 1
        if cursor == len(order):
            break
        desired = order[cursor]
        slots[desired] = entrant_id
        slots[desired ^ 1] = BYE
        assigned += 1
    return assigned
