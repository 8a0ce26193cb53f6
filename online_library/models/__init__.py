from online_library.models.associations import book_authors, book_genres
from online_library.models.author import Author
from online_library.models.book import Book
from online_library.models.favorite import Favorite
from online_library.models.genre import Genre
from online_library.models.user import User
from online_library.database.db import Base

from sqlalchemy.schema import CreateTable


if __name__ == "__main__":
    for table in Base.metadata.sorted_tables:
        print(CreateTable(table))
