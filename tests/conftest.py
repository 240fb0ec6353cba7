"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from canhao.episodes.ids import IdGenerator
from canhao.episodes.models import Episode


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int = 1) -> None:
        self.now += millis


@pytest.fixture
def clock() -> FakeClock:
    """Frozen millisecond clock."""
    return FakeClock()


@pytest.fixture
def id_generator(clock: FakeClock) -> IdGenerator:
    """Strict id generator driven by the frozen clock."""
    return IdGenerator(monotonic=True, clock=clock)


@pytest.fixture
def sample_episodes() -> list[Episode]:
    """A few episodes with distinct ids."""
    return [
        Episode(id=1, title="Pilot", description="The first one"),
        Episode(id=2, title="Guests", description="Interview with friends"),
        Episode(id=3, title="", description="Untitled bonus"),
    ]


@pytest.fixture
def sample_config_dict() -> dict:
    """Configuration as it would appear in config.yaml."""
    return {
        "version": "1",
        "log_level": "INFO",
        "store_filename": "episodes.tsv",
        "export_filename": "backup.txt",
        "strict_ids": True,
        "background_saves": False,
    }


@pytest.fixture
def store_file(tmp_path: Path) -> Path:
    """Path for a private store inside a temp data dir."""
    return tmp_path / "data" / "episodes.tsv"
