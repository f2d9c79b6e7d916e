from app.models.tournament import Tournament
from app.models.game import Game

__all__ = [
    "Tournament",
    "Game",
]
