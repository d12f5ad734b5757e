from typing import Annotated

from fastapi import Depends

from app.services.game.match import MatchService, get_match_service

CurrentMatch = Annotated[MatchService, Depends(get_match_service)]
