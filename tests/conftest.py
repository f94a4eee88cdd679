import pytest

from mazechase import MazeConfig, MazeGame


@pytest.fixture
def make_game():
    def _make(layout: str | None = None, **cfg) -> MazeGame:
        config = MazeConfig(**cfg)
        if layout is None:
            return MazeGame(config=config)
        return MazeGame(layout, config)

    return _make
