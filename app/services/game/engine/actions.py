"""Game action types - explicit user inputs separated from game state."""

import logging
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from app.schemas.game_engine import CharacterSpec, Side

logger = logging.getLogger(__name__)


def _read_slot(entry: Any) -> CharacterSpec | None:
    """Read one deployment slot; unreadable entries become malformed specs."""
    if entry is None or isinstance(entry, CharacterSpec):
        return entry
    try:
        return CharacterSpec.model_validate(entry)
    except ValidationError:
        logger.debug("Malformed deployment slot: %r", entry)
        return CharacterSpec(malformed=True)


class DeployAction(BaseModel):
    """A side places its ordered roster on its home row.

    Only the overall shape (side, a list of slots) can reject the action.
    Individual slots that cannot be read are kept in place as malformed specs
    and skipped during deployment.
    """

    action_type: Literal["deploy"] = "deploy"
    side: Side
    characters: list[CharacterSpec | None] = Field(
        default_factory=list,
        description="Ordered slots; entry i goes to column i of the home row",
    )

    @field_validator("characters", mode="before")
    @classmethod
    def read_slots(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [_read_slot(entry) for entry in value]


class MoveAction(BaseModel):
    """The side whose turn it is moves one of its characters."""

    action_type: Literal["move"] = "move"
    kind: str = Field(..., description="Kind of the character to move, e.g. 'Hero2'")
    direction: str = Field(..., description="Direction token, e.g. 'Forward' or 'FR'")
    side: Side | None = Field(
        None, description="Side the requester claims to be; checked against the turn"
    )


# Union type for all game actions
GameAction = Annotated[
    DeployAction | MoveAction,
    Field(discriminator="action_type"),
]
