"""Data model for a single episode record."""

from pydantic import BaseModel, ConfigDict

UNTITLED = "(untitled)"
NO_DESCRIPTION = "(no description)"


class Episode(BaseModel):
    """A user-entered episode: identifier, title and description.

    Frozen, so two episodes with the same fields compare (and hash) equal.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    description: str = ""

    @property
    def display_title(self) -> str:
        """Title for rendering, with a placeholder when blank."""
        return self.title if self.title.strip() else UNTITLED

    @property
    def display_description(self) -> str:
        """Description for rendering, with a placeholder when blank."""
        return self.description if self.description.strip() else NO_DESCRIPTION
