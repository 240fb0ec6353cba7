"""Episode records, the in-memory list and the command façade."""

from canhao.episodes.ids import IdGenerator
from canhao.episodes.models import Episode
from canhao.episodes.store import EpisodeStore

__all__ = ["Episode", "EpisodeStore", "IdGenerator"]
