"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field


class BookDraft(BaseModel):
    """A book that has not been stored yet, so it has no id.

    An ``id`` sent by a client is ignored; the store assigns one.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(description="Title")
    author: str = Field(description="Author")


class Book(BaseModel):
    """Book entity representing a stored book.

    ``id`` is the primary key and never changes for the lifetime of the book.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(ge=0, description="Primary key")
    title: str = Field(description="Title")
    author: str = Field(description="Author")

    def __str__(self) -> str:
        return f"{self.title} by {self.author}"


class BookChange(BaseModel):
    """A partial update: only the fields that are not ``None`` are applied.

    HTML forms post the id back as a hidden field, so ``id`` may be present;
    when it is, it has to name the book being changed.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(default=None, ge=0)
    title: str | None = None
    author: str | None = None

    def is_empty(self) -> bool:
        return self.title is None and self.author is None


SEED_BOOKS: tuple[Book, ...] = (
    Book(id=1, title="Antigone", author="Sophocles"),
    Book(id=2, title="Beloved", author="Toni Morrison"),
    Book(id=3, title="Candide", author="Voltaire"),
)
