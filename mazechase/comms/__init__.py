from .messenger import Messenger, Sighting

__all__ = ["Messenger", "Sighting"]
