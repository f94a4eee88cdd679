from .graph import MazeGraph, MazeNode
from .planner import PathPlanner

__all__ = ["MazeGraph", "MazeNode", "PathPlanner"]
