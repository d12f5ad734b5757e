"""Character catalog and roster bookkeeping."""

import logging

from app.schemas.game_engine import (
    Character,
    CharacterKind,
    MovementProfile,
    MovementStyle,
    Position,
    Side,
    SideState,
)

logger = logging.getLogger(__name__)

# Static movement profiles per kind. New kinds only need an entry here.
CHARACTER_PROFILES: dict[CharacterKind, MovementProfile] = {
    CharacterKind.PAWN: MovementProfile(
        move_range=1, style=MovementStyle.ORTHOGONAL, sweeps=False
    ),
    CharacterKind.HERO1: MovementProfile(move_range=2, style=MovementStyle.ORTHOGONAL),
    CharacterKind.HERO2: MovementProfile(move_range=2, style=MovementStyle.DIAGONAL),
}


def get_profile(kind: CharacterKind) -> MovementProfile:
    return CHARACTER_PROFILES[kind]


def parse_kind(raw: str | None) -> CharacterKind | None:
    """Map a raw kind string to a known CharacterKind, or None if unknown."""
    if raw is None:
        return None
    try:
        kind = CharacterKind(raw)
    except ValueError:
        return None
    return kind if kind in CHARACTER_PROFILES else None


def create_character(kind: CharacterKind, side: Side, position: Position) -> Character:
    return Character(
        character_id=f"{side.value}_{kind.value}_{position.x}",
        kind=kind,
        side=side,
        position=position,
    )


def find_character(side_state: SideState, kind: CharacterKind) -> Character | None:
    """Find the first live character of the given kind, in deployment order."""
    return next((c for c in side_state.characters if c.kind == kind), None)


def remove_character(side_state: SideState, character_id: str) -> Character | None:
    """Remove a character from the roster and decrement the remaining count.

    Returns:
        The removed character, or None if it was not in the roster.
    """
    removed = next(
        (c for c in side_state.characters if c.character_id == character_id), None
    )
    if removed is None:
        logger.debug("Character %s not in roster, nothing removed", character_id)
        return None

    side_state.characters = [
        c for c in side_state.characters if c.character_id != character_id
    ]
    side_state.remaining_count -= 1
    logger.debug(
        "Removed %s from side %s, remaining=%d",
        character_id,
        removed.side.value,
        side_state.remaining_count,
    )
    return removed
