"""Line encodings for the private store and for export files.

Private store: one ``id<TAB>title<TAB>description`` line per episode. Field
text is percent-escaped for the four characters that would break the line
structure (``%``, TAB, LF, CR), so any title or description round-trips.
Decoding only recognises those four escapes; other ``%xx`` text is literal.

Export file: one ``title|||description`` line per episode. This format is
lossy on purpose: newlines become spaces and ``|||`` inside text becomes
``|``. It carries no ids.
"""

import re
from collections.abc import Callable

from canhao.episodes.models import Episode

FIELD_SEPARATOR = "\t"
EXPORT_SEPARATOR = "|||"

_ESCAPES = {"%": "%25", "\t": "%09", "\n": "%0A", "\r": "%0D"}
_UNESCAPES = {code: char for char, code in _ESCAPES.items()}
_ESCAPE_RE = re.compile("[%\t\n\r]")
_UNESCAPE_RE = re.compile("%(?:25|09|0[AaDd])")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_ID_RE = re.compile("[+-]?[0-9]+")


def escape_field(text: str) -> str:
    """Escape a title or description for the private store."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group()], text)


def unescape_field(text: str) -> str:
    """Reverse :func:`escape_field`."""
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES[m.group().upper()], text)


def encode_store_line(episode: Episode) -> str:
    """Encode one episode as a private store line, including the newline."""
    return (
        f"{episode.id}{FIELD_SEPARATOR}"
        f"{escape_field(episode.title)}{FIELD_SEPARATOR}"
        f"{escape_field(episode.description)}\n"
    )


def decode_store_line(line: str, id_factory: Callable[[], int]) -> Episode | None:
    """Decode a private store line.

    Args:
        line: Line text, with or without its trailing newline
        id_factory: Called for a replacement id when the stored one is not an integer

    Returns:
        The Episode, or None if the line has fewer than three fields
    """
    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) < 3:
        return None

    if _ID_RE.fullmatch(parts[0]):
        episode_id = int(parts[0])
    else:
        episode_id = id_factory()

    return Episode(
        id=episode_id,
        title=unescape_field(parts[1]),
        description=unescape_field(parts[2]),
    )


def normalize_export_field(text: str) -> str:
    """Flatten text for the export format (newlines to spaces, ``|||`` to ``|``)."""
    return _NEWLINE_RE.sub(" ", text).replace(EXPORT_SEPARATOR, "|")


def encode_export_line(episode: Episode) -> str:
    """Encode one episode as an export line, including the newline."""
    title = normalize_export_field(episode.title)
    description = normalize_export_field(episode.description)
    return f"{title}{EXPORT_SEPARATOR}{description}\n"


def decode_export_line(line: str) -> tuple[str, str] | None:
    """Decode an export line into ``(title, description)``.

    Only the first two segments are used; anything after a second
    separator is ignored.

    Returns:
        The stripped pair, or None when both parts are blank
    """
    parts = line.rstrip("\r\n").split(EXPORT_SEPARATOR)
    title = parts[0].strip()
    description = parts[1].strip() if len(parts) > 1 else ""

    if not title and not description:
        return None
    return title, description
