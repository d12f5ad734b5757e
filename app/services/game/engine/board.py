"""Board geometry and cell occupancy helpers."""

from app.schemas.game_engine import BOARD_SIZE, Character, Position

Board = list[list[Character | None]]


def is_on_board(pos: Position) -> bool:
    return 0 <= pos.x < BOARD_SIZE and 0 <= pos.y < BOARD_SIZE


def occupant_at(board: Board, pos: Position) -> Character | None:
    """Return the character at a position, or None for empty or off-board cells."""
    if not is_on_board(pos):
        return None
    return board[pos.y][pos.x]


def place(board: Board, pos: Position, character: Character) -> None:
    board[pos.y][pos.x] = character


def clear(board: Board, pos: Position) -> None:
    board[pos.y][pos.x] = None


def offset(pos: Position, dx: int, dy: int, steps: int = 1) -> Position:
    return Position(x=pos.x + dx * steps, y=pos.y + dy * steps)
