from .belief import BeliefState, BeliefTracker
from .protocol import Environment, ObservableEnvironment

__all__ = ["BeliefState", "BeliefTracker", "Environment", "ObservableEnvironment"]
