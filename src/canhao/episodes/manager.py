"""Command façade over the episode store and its persistence.

This is the whole contract a front end needs: render ``episodes``, listen via
``subscribe`` and call ``add``, ``delete``, ``export`` and ``import_``.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from canhao.config.manager import ConfigManager
from canhao.config.schema import GlobalConfig
from canhao.episodes.ids import IdGenerator
from canhao.episodes.models import Episode
from canhao.episodes.store import EpisodeStore, Observer, Snapshot
from canhao.storage.repository import EpisodeRepository
from canhao.storage.writer import SaveQueue

logger = logging.getLogger(__name__)


class EpisodeManager:
    """Coordinate the in-memory list with the private store.

    Every mutation goes to the store first; a store observer then hands the
    new snapshot to the save queue, so callers never wait for the disk.

    Example:
        >>> with EpisodeManager.from_config(GlobalConfig()) as manager:
        ...     episode = manager.add("Pilot", "Our first show")
        ...     manager.export(Path("canhao_podcast_backup.txt"))
        1
    """

    def __init__(
        self,
        repository: EpisodeRepository,
        store: EpisodeStore | None = None,
        save_queue: SaveQueue[Snapshot] | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            repository: Persistence adapter for the private store and backups
            store: In-memory list (a new one sharing the repository's id generator if None)
            save_queue: Writer for the private store (background queue if None)
        """
        self.repository = repository
        self.store = store or EpisodeStore(id_generator=repository.id_generator)
        self.save_queue = save_queue or SaveQueue(repository.save)
        self._unsubscribe_saves: Callable[[], None] | None = None

    @classmethod
    def from_config(
        cls,
        config: GlobalConfig,
        config_manager: ConfigManager | None = None,
    ) -> "EpisodeManager":
        """Build a loaded manager from configuration."""
        config_manager = config_manager or ConfigManager()
        store_file = config_manager.resolve_store_file(config)

        id_generator = IdGenerator(monotonic=config.strict_ids)
        repository = EpisodeRepository(store_file, id_generator)
        save_queue: SaveQueue[Snapshot] = SaveQueue(
            repository.save, synchronous=not config.background_saves
        )

        manager = cls(repository, save_queue=save_queue)
        manager.load()
        return manager

    @property
    def episodes(self) -> Snapshot:
        return self.store.episodes

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a render observer on the store."""
        return self.store.subscribe(observer)

    def load(self) -> Snapshot:
        """Populate the store from the private store and start autosaving.

        The observer is attached after loading so startup never rewrites
        the file it just read.
        """
        if self._unsubscribe_saves is not None:
            self._unsubscribe_saves()
            self._unsubscribe_saves = None

        self.store.replace_all(self.repository.load())
        self._unsubscribe_saves = self.store.subscribe(self.save_queue.submit)
        return self.store.episodes

    def add(self, title: str, description: str) -> Episode:
        return self.store.add(title, description)

    def delete(self, episode_id: int) -> bool:
        return self.store.delete(episode_id)

    def export(self, path: Path) -> int:
        """Export the current list to ``path``.

        Returns:
            Number of exported episodes
        """
        return self.repository.export_to(path, self.store.episodes)

    def import_(self, path: Path) -> list[Episode]:
        """Replace the list with the contents of an export file.

        An import that yields nothing leaves the current list untouched.

        Returns:
            The imported episodes (empty if nothing was read)
        """
        return self.apply_import(self.read_backup(path))

    def read_backup(self, path: Path) -> list[Episode]:
        """Parse an export file without touching the current list."""
        return self.repository.import_from(path)

    def apply_import(self, imported: list[Episode]) -> list[Episode]:
        """Replace the list with episodes returned by :meth:`read_backup`.

        An empty batch is ignored.
        """
        if not imported:
            logger.info("Nothing imported, keeping current list")
            return []

        self.store.replace_all(imported)
        return imported

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for pending saves. See :meth:`SaveQueue.flush`."""
        return self.save_queue.flush(timeout)

    def close(self) -> None:
        if self._unsubscribe_saves is not None:
            self._unsubscribe_saves()
            self._unsubscribe_saves = None
        self.save_queue.close()

    def __enter__(self) -> "EpisodeManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
