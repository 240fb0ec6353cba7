"""Episode persistence: private store, export/import files and the save queue."""

from canhao.storage.repository import EpisodeRepository
from canhao.storage.writer import SaveQueue

__all__ = ["EpisodeRepository", "SaveQueue"]
