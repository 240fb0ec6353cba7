"""In-memory episode list with change notification."""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator

from canhao.episodes.ids import IdGenerator
from canhao.episodes.models import Episode

logger = logging.getLogger(__name__)

Snapshot = tuple[Episode, ...]
Observer = Callable[[Snapshot], None]


class EpisodeStore:
    """Owns the ordered episode list for the lifetime of a session.

    Insertion order is display order. Every change is pushed synchronously
    to subscribed observers as an immutable snapshot, which is how the
    persistence layer and any front end learn about it.

    Example:
        >>> store = EpisodeStore()
        >>> unsubscribe = store.subscribe(lambda eps: print(len(eps)))
        >>> episode = store.add("Pilot", "First episode")
        1
        >>> store.delete(episode.id)
        0
        True
    """

    def __init__(
        self,
        episodes: Iterable[Episode] = (),
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._episodes: list[Episode] = list(episodes)
        self._observers: list[Observer] = []
        self._lock = threading.RLock()
        self.id_generator = id_generator or IdGenerator()
        self.id_generator.observe(ep.id for ep in self._episodes)

    @property
    def episodes(self) -> Snapshot:
        """Current list, in display order."""
        with self._lock:
            return tuple(self._episodes)

    def __len__(self) -> int:
        return len(self.episodes)

    def __iter__(self) -> Iterator[Episode]:
        return iter(self.episodes)

    def get(self, episode_id: int) -> Episode | None:
        """Return the first episode with ``episode_id``, or None."""
        for episode in self.episodes:
            if episode.id == episode_id:
                return episode
        return None

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a change observer.

        Args:
            observer: Called with the new snapshot after each change

        Returns:
            A callable that removes the observer again
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def replace_all(self, episodes: Iterable[Episode]) -> None:
        """Replace the whole list (after load or import). No validation."""
        with self._lock:
            self._episodes = list(episodes)
            self.id_generator.observe(ep.id for ep in self._episodes)
            snapshot = tuple(self._episodes)
        self._notify(snapshot)

    def add(self, title: str, description: str) -> Episode:
        """Append a new episode with a freshly generated id.

        Args:
            title: Episode title, may be empty
            description: Episode description, may be empty

        Returns:
            The created Episode
        """
        episode = Episode(
            id=self.id_generator.next_id(),
            title=title,
            description=description,
        )
        with self._lock:
            self._episodes.append(episode)
            snapshot = tuple(self._episodes)
        logger.debug(f"Added episode {episode.id}")
        self._notify(snapshot)
        return episode

    def delete(self, episode_id: int) -> bool:
        """Remove the first episode with ``episode_id``.

        Returns:
            True if an episode was removed, False if none matched
        """
        with self._lock:
            for index, episode in enumerate(self._episodes):
                if episode.id == episode_id:
                    del self._episodes[index]
                    snapshot = tuple(self._episodes)
                    break
            else:
                logger.debug(f"Delete ignored, no episode with id {episode_id}")
                return False

        logger.debug(f"Deleted episode {episode_id}")
        self._notify(snapshot)
        return True

    def _notify(self, snapshot: Snapshot) -> None:
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                observer(snapshot)
            except Exception:
                logger.exception(f"Episode observer {observer!r} failed")
