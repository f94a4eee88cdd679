from .evader import RandomWalkEvader
from .pursuer import PursuerAgent
from .team import PursuerTeam

__all__ = ["PursuerAgent", "PursuerTeam", "RandomWalkEvader"]
