from pydantic import BaseModel, ConfigDict, Field, model_validator

from online_library.database.db import MAX_ID
from online_library.schemas.base import BaseSchema


class NamedRef(BaseSchema):
    """
    Reference to an author or genre inside a book payload.

    `{"id": 3}` attaches an existing row, `{"name": "..."}` creates a new one.
    """
    id: int | None = Field(None, ge=1, le=MAX_ID)
    name: str | None = Field(None, min_length=1)

    @model_validator(mode="after")
    def id_or_name(self):
        if self.id is None and self.name is None:
            raise ValueError("Either 'id' or 'name' must be provided")
        return self


class AuthorRef(NamedRef):
    pass


class GenreRef(NamedRef):
    pass


class BookCreate(BaseSchema):
    title: str = Field(..., min_length=1)
    authors: list[AuthorRef] = Field(default_factory=list)
    genres: list[GenreRef] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "The Master and Margarita",
                "authors": [{"name": "Mikhail Bulgakov"}],
                "genres": [{"id": 1}],
            }
        }
    )


class AuthorOut(BaseModel):
    """Author without its back-collection of books"""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class GenreOut(BaseModel):
    """Genre without its back-collection of books"""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class BookOut(BaseModel):
    """Schema for returning a book"""

    id: int
    title: str
    authors: list[AuthorOut] = []
    genres: list[GenreOut] = []

    model_config = ConfigDict(from_attributes=True)
