"""
Schema of the JSON filter description.

Keys follow the file format (Title, MoreThanPages, ...); the snake_case
attribute names are accepted as well.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from book_catalog.domain.utils import parse_release_date
from book_catalog.domain.value_objects import BookFilter


class FilterDocument(BaseModel):
    """
    A filter as stored on disk. Every field is optional.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = Field(default=None, alias="Title", description="Substring of the title")
    author: str | None = Field(default=None, alias="Author", description="Substring of the author name")
    genre: str | None = Field(default=None, alias="Genre", description="Substring of the genre name")
    publisher: str | None = Field(
        default=None, alias="Publisher", description="Substring of the publisher name"
    )
    more_than_pages: int | None = Field(
        default=None, alias="MoreThanPages", description="Exclusive lower bound on pages"
    )
    less_than_pages: int | None = Field(
        default=None, alias="LessThanPages", description="Exclusive upper bound on pages"
    )
    published_after: date | None = Field(
        default=None, alias="PublishedAfter", description="Exclusive lower bound on release date"
    )
    published_before: date | None = Field(
        default=None, alias="PublishedBefore", description="Exclusive upper bound on release date"
    )

    @field_validator("published_after", "published_before", mode="before")
    @classmethod
    def _parse_date(cls, value: object) -> object:
        # Accept the same date spellings as the input files, e.g. "2000-01-01T00:00:00"
        if isinstance(value, str):
            parsed = parse_release_date(value)
            if parsed is None:
                raise ValueError(f"invalid date: {value!r}")
            return parsed
        return value

    def to_domain(self) -> BookFilter:
        """Convert to the domain BookFilter value object."""
        return BookFilter(**self.model_dump())
