from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError

from online_library.models import Favorite, User
from online_library.services import favorite_service


def count_favorites(db_run):
    async def _count(session):
        return await session.scalar(select(func.count()).select_from(Favorite))

    return db_run(_count)


def test_favorites_require_authentication(client):
    assert client.get("/favorites").status_code == 401
    assert client.post("/favorites", json=1).status_code == 401
    assert client.delete("/favorites/1").status_code == 401


def test_list_favorites_empty(client, client_user):
    _, headers = client_user
    response = client.get("/favorites", headers=headers)
    assert response.status_code == 200
    assert response.json() == []


def test_add_and_list_favorites(client, client_user, make_book):
    _, headers = client_user
    book_id = make_book("Dune", authors=["Frank Herbert"], genres=["Sci-Fi"])
    make_book("Solaris")

    response = client.post("/favorites", json=book_id, headers=headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Book added to favorites"

    books = client.get("/favorites", headers=headers).json()
    assert len(books) == 1
    assert books[0]["id"] == book_id
    assert books[0]["title"] == "Dune"
    assert books[0]["authors"][0]["name"] == "Frank Herbert"


def test_favorites_are_per_user(client, make_user, make_book, auth_headers):
    book_id = make_book("Dune")
    alice = auth_headers(make_user("alice@example.com"), role="client")
    bob = auth_headers(make_user("bob@example.com"), role="client")

    assert client.post("/favorites", json=book_id, headers=alice).status_code == 200
    assert client.get("/favorites", headers=bob).json() == []
    assert client.post("/favorites", json=book_id, headers=bob).status_code == 200


def test_admin_can_use_favorites(client, make_user, make_book, auth_headers):
    book_id = make_book("Dune")
    headers = auth_headers(make_user("root@example.com", role="admin"), role="admin")
    assert client.post("/favorites", json=book_id, headers=headers).status_code == 200


def test_add_favorite_missing_book(client, client_user, db_run):
    _, headers = client_user
    response = client.post("/favorites", json=999, headers=headers)
    assert response.status_code == 404
    assert count_favorites(db_run) == 0


def test_add_favorite_twice(client, client_user, make_book, db_run):
    _, headers = client_user
    book_id = make_book("Dune")
    assert client.post("/favorites", json=book_id, headers=headers).status_code == 200

    response = client.post("/favorites", json=book_id, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Book is already in favorites"
    assert count_favorites(db_run) == 1


def test_add_favorite_body_must_be_integer(client, client_user):
    _, headers = client_user
    response = client.post("/favorites", json={"bookId": 1}, headers=headers)
    assert response.status_code == 422


def test_remove_favorite_never_added(client, client_user, make_book):
    _, headers = client_user
    book_id = make_book("Dune")
    response = client.delete(f"/favorites/{book_id}", headers=headers)
    assert response.status_code == 404


def test_remove_favorite(client, client_user, make_book, db_run):
    _, headers = client_user
    book_id = make_book("Dune")
    client.post("/favorites", json=book_id, headers=headers)

    response = client.delete(f"/favorites/{book_id}", headers=headers)
    assert response.status_code == 200
    assert response.text == "Book removed from favorites"
    assert client.get("/favorites", headers=headers).json() == []
    assert count_favorites(db_run) == 0
    # the book itself stays
    assert client.get(f"/books/{book_id}").status_code == 200


def test_favorites_unknown_user(client, make_book, auth_headers):
    book_id = make_book("Dune")
    headers = auth_headers(12345, role="client")
    assert client.post("/favorites", json=book_id, headers=headers).status_code == 401


def test_composite_key_rejects_duplicate_insert(db_run, make_user, make_book):
    user_id = make_user()
    book_id = make_book("Dune")

    async def insert_twice(session):
        await session.execute(insert(Favorite).values(user_id=user_id, book_id=book_id))
        try:
            await session.execute(insert(Favorite).values(user_id=user_id, book_id=book_id))
        except IntegrityError:
            await session.rollback()
            return True
        return False

    assert db_run(insert_twice) is True


def test_favorite_must_reference_existing_rows(db_run, make_book):
    book_id = make_book("Dune")

    async def insert_orphan(session):
        try:
            await session.execute(insert(Favorite).values(user_id=404, book_id=book_id))
        except IntegrityError:
            await session.rollback()
            return True
        return False

    assert db_run(insert_orphan) is True


def test_out_of_range_book_id(client, client_user):
    _, headers = client_user
    huge = 99999999999999999999
    assert client.post("/favorites", json=huge, headers=headers).status_code == 422
    assert client.delete(f"/favorites/{huge}", headers=headers).status_code == 422


def test_duplicate_missed_by_lookup_is_rejected_by_key(
    client, client_user, make_book, db_run, monkeypatch
):
    _, headers = client_user
    book_id = make_book("Dune")
    assert client.post("/favorites", json=book_id, headers=headers).status_code == 200

    async def no_favorite(db, user_id, book_id):
        return None

    # simulate a concurrent insert landing between the lookup and the commit
    monkeypatch.setattr(favorite_service, "get_favorite", no_favorite)

    response = client.post("/favorites", json=book_id, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Book is already in favorites"
    assert count_favorites(db_run) == 1


def test_user_role_outside_closed_set_is_rejected(db_run):
    async def insert_manager(session):
        try:
            await session.execute(
                insert(User).values(email="m@example.com", password_hash="x", role="manager")
            )
        except IntegrityError:
            await session.rollback()
            return True
        return False

    assert db_run(insert_manager) is True


def test_user_email_is_unique_in_database(db_run, make_user):
    make_user("same@example.com")

    async def insert_duplicate(session):
        try:
            await session.execute(
                insert(User).values(email="same@example.com", password_hash="x")
            )
        except IntegrityError:
            await session.rollback()
            return True
        return False

    assert db_run(insert_duplicate) is True
