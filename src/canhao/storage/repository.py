"""File persistence for the episode list.

Handles:
- Loading and saving the private store (full-file snapshots)
- Exporting to and importing from a user-chosen text file

Read-side problems (missing file, unreadable file, malformed lines) degrade
to empty or partial results and are only logged. Write-side problems raise
StorageWriteError.
"""

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from canhao.episodes.ids import IdGenerator
from canhao.episodes.models import Episode
from canhao.utils.errors import StorageWriteError

from .codec import (
    decode_export_line,
    decode_store_line,
    encode_export_line,
    encode_store_line,
)

logger = logging.getLogger(__name__)


class EpisodeRepository:
    """Convert between the in-memory episode list and its on-disk forms.

    Example:
        >>> repo = EpisodeRepository(Path("~/.local/share/canhao/episodes.tsv"))
        >>> episodes = repo.load()
        >>> repo.save(episodes)
        >>> repo.export_to(Path("backup.txt"), episodes)
        2
    """

    def __init__(self, store_file: Path, id_generator: IdGenerator | None = None) -> None:
        """Initialize the repository.

        Args:
            store_file: Path of the private store file
            id_generator: Source of replacement and import ids
        """
        self.store_file = store_file
        self.id_generator = id_generator or IdGenerator()

    def load(self) -> list[Episode]:
        """Load the private store.

        Returns:
            Stored episodes in order; empty if the file is missing or unreadable
        """
        if not self.store_file.exists():
            logger.debug(f"No episode store at {self.store_file}")
            return []

        try:
            # Split on LF only; a raw CR inside a field is field text
            text = self.store_file.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read episode store {self.store_file}: {e}")
            return []

        episodes: list[Episode] = []
        for line_number, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue

            episode = decode_store_line(line, self.id_generator.next_id)
            if episode is None:
                logger.debug(f"Skipping malformed line {line_number} in {self.store_file}")
                continue
            episodes.append(episode)

        self.id_generator.observe(ep.id for ep in episodes)
        logger.debug(f"Loaded {len(episodes)} episode(s) from {self.store_file}")
        return episodes

    def save(self, episodes: Iterable[Episode]) -> None:
        """Overwrite the private store with ``episodes``.

        Raises:
            StorageWriteError: If the file cannot be written
        """
        content = "".join(encode_store_line(ep) for ep in episodes)

        try:
            self.store_file.parent.mkdir(parents=True, exist_ok=True)
            self._write_file_atomic(self.store_file, content)
        except OSError as e:
            raise StorageWriteError(
                f"Failed to save episodes to {self.store_file}: {e}"
            ) from e

        logger.debug(f"Saved episode store {self.store_file}")

    def export_to(self, path: Path, episodes: Iterable[Episode]) -> int:
        """Write ``episodes`` in the export format.

        Args:
            path: Destination chosen by the user
            episodes: Episodes in display order

        Returns:
            Number of exported episodes

        Raises:
            StorageWriteError: If the file cannot be written
        """
        lines = [encode_export_line(ep) for ep in episodes]

        try:
            # Written in place so the destination keeps its mode, links or device
            with path.open("w", encoding="utf-8", newline="\n") as f:
                f.write("".join(lines))
        except OSError as e:
            raise StorageWriteError(f"Failed to export episodes to {path}: {e}") from e

        logger.info(f"Exported {len(lines)} episode(s) to {path}")
        return len(lines)

    def import_from(self, path: Path) -> list[Episode]:
        """Read episodes from an export file.

        Blank and empty lines are skipped. Every episode gets a new id.

        Args:
            path: Source chosen by the user

        Returns:
            Parsed episodes; empty if the file cannot be opened or read
        """
        pairs: list[tuple[str, str]] = []

        try:
            with path.open("r", encoding="utf-8") as f:
                for line in f:
                    pair = decode_export_line(line)
                    if pair is not None:
                        pairs.append(pair)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not import episodes from {path}: {e}")
            return []

        ids = self.id_generator.reserve(len(pairs))
        episodes = [
            Episode(id=episode_id, title=title, description=description)
            for episode_id, (title, description) in zip(ids, pairs)
        ]
        logger.info(f"Read {len(episodes)} episode(s) from {path}")
        return episodes

    def _write_file_atomic(self, file_path: Path, content: str) -> None:
        """Write file atomically: temp file, fsync, then rename over the target.

        Raises:
            OSError: If write or sync fails
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=file_path.parent, prefix=".tmp_", suffix=file_path.suffix
        )

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            Path(temp_path).replace(file_path)

            # Persist the rename; not every platform supports directory fsync
            try:
                dir_fd = os.open(file_path.parent, os.O_RDONLY)
                try:
                    os.fsync(dir_fd)
                finally:
                    os.close(dir_fd)
            except (OSError, AttributeError) as e:
                logger.debug(f"Directory fsync not supported: {e}")

        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise
