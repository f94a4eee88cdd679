from .game import GameState, MazeGame
from .layouts import CLASSIC_LAYOUT

__all__ = ["CLASSIC_LAYOUT", "GameState", "MazeGame"]
