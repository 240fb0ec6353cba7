"""Tests for the Episode model."""

import pytest
from pydantic import ValidationError

from canhao.episodes.models import NO_DESCRIPTION, UNTITLED, Episode


class TestEpisode:
    """Tests for Episode."""

    def test_defaults_are_empty_text(self) -> None:
        """Title and description default to empty strings."""
        episode = Episode(id=5)
        assert episode.title == ""
        assert episode.description == ""

    def test_value_equality(self) -> None:
        """Episodes with equal fields are equal and hash the same."""
        a = Episode(id=1, title="A", description="B")
        b = Episode(id=1, title="A", description="B")
        assert a == b
        assert hash(a) == hash(b)
        assert a != Episode(id=2, title="A", description="B")

    def test_is_immutable(self) -> None:
        """Fields cannot be reassigned."""
        episode = Episode(id=1, title="A")
        with pytest.raises(ValidationError):
            episode.title = "changed"  # type: ignore[misc]

    def test_display_placeholders(self) -> None:
        """Blank fields render with placeholders."""
        episode = Episode(id=1, title="  ", description="")
        assert episode.display_title == UNTITLED
        assert episode.display_description == NO_DESCRIPTION
        assert episode.title == "  "

    def test_display_keeps_real_text(self) -> None:
        episode = Episode(id=1, title="Pilot", description="Intro")
        assert episode.display_title == "Pilot"
        assert episode.display_description == "Intro"
