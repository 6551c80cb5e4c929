"""Tests for genre endpoints: dedup on create, guarded delete, joined detail."""

import pytest


# --- helpers ---

def _id_from_redirect(resp) -> int:
    assert resp.status_code == 303, resp.text
    return int(resp.headers["location"].rsplit("/", 1)[-1])


async def _create_genre(client, name="Fantasy") -> int:
    return _id_from_redirect(await client.post("/catalog/genre/create", json={"name": name}))


async def _create_book(client, title="Dune", genre_id=None) -> int:
    resp = await client.post(
        "/catalog/book/create",
        json={"title": title, "summary": f"Summary of {title}", "genre_id": genre_id},
    )
    return _id_from_redirect(resp)


# --- create ---

@pytest.mark.asyncio
async def test_create_genre_redirects_to_identity_url(client):
    resp = await client.post("/catalog/genre/create", json={"name": "Fantasy"})
    assert resp.status_code == 303
    genre_id = int(resp.headers["location"].rsplit("/", 1)[-1])
    assert resp.headers["location"] == f"/catalog/genre/{genre_id}"

    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.status_code == 200
    assert resp.json()["genre"]["name"] == "Fantasy"


@pytest.mark.asyncio
async def test_create_reuses_case_insensitive_match(client):
    first = await _create_genre(client, "Fantasy")
    second = await _create_genre(client, "fantasy")
    assert second == first

    resp = await client.get("/catalog/genres")
    genres = resp.json()["genre_list"]
    assert len(genres) == 1
    assert genres[0]["name"] == "Fantasy"


@pytest.mark.asyncio
async def test_create_reuses_accent_insensitive_match(client):
    first = await _create_genre(client, "Ciencia Ficción")
    second = await _create_genre(client, "CIENCIA FICCION")
    assert second == first


@pytest.mark.asyncio
async def test_create_distinct_names_get_distinct_ids(client):
    first = await _create_genre(client, "Sci-Fi")
    second = await _create_genre(client, "Sci Fi")
    assert first != second

    resp = await client.get("/catalog/genres")
    assert len(resp.json()["genre_list"]) == 2


@pytest.mark.asyncio
async def test_create_too_short_name_rerenders_form(client):
    resp = await client.post("/catalog/genre/create", json={"name": "  ab  "})
    assert resp.status_code == 422
    body = resp.json()
    assert body["view"] == "genre_form"
    assert body["genre"]["name"] == "ab"
    assert body["errors"] == [{"field": "name", "msg": "Genre must contain at least 3 characters"}]

    resp = await client.get("/catalog/genres")
    assert resp.json()["genre_list"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["&", "<>", " '\" "])
async def test_create_short_name_with_escapable_chars_is_rejected(client, name):
    resp = await client.post("/catalog/genre/create", json={"name": name})
    assert resp.status_code == 422
    assert resp.json()["errors"] == [{"field": "name", "msg": "Genre must contain at least 3 characters"}]

    resp = await client.get("/catalog/genres")
    assert resp.json()["genre_list"] == []


@pytest.mark.asyncio
async def test_create_escapes_name(client):
    genre_id = await _create_genre(client, "  Sword & Sorcery ")
    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.json()["genre"]["name"] == "Sword &amp; Sorcery"


@pytest.mark.asyncio
async def test_create_form(client):
    resp = await client.get("/catalog/genre/create")
    assert resp.status_code == 200
    assert resp.json() == {"view": "genre_form", "title": "Create Genre", "genre": None, "errors": []}


# --- list / detail ---

@pytest.mark.asyncio
async def test_list_sorted_by_name(client):
    for name in ("Romance", "Fantasy", "Horror"):
        await _create_genre(client, name)
    resp = await client.get("/catalog/genres")
    assert [g["name"] for g in resp.json()["genre_list"]] == ["Fantasy", "Horror", "Romance"]


@pytest.mark.asyncio
async def test_detail_includes_books_sorted_by_title(client):
    genre_id = await _create_genre(client, "Science Fiction")
    await _create_book(client, "Hyperion", genre_id)
    await _create_book(client, "Dune", genre_id)
    await _create_book(client, "Unrelated")

    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["view"] == "genre_detail"
    assert [b["title"] for b in body["genre_books"]] == ["Dune", "Hyperion"]
    assert set(body["genre_books"][0]) == {"id", "title", "summary", "url"}


@pytest.mark.asyncio
async def test_detail_not_found(client):
    resp = await client.get("/catalog/genre/9999")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Genre not found"}


# --- delete ---

@pytest.mark.asyncio
async def test_delete_confirmation_lists_dependents(client):
    genre_id = await _create_genre(client)
    await _create_book(client, "The Hobbit", genre_id)

    resp = await client.get(f"/catalog/genre/{genre_id}/delete")
    assert resp.status_code == 200
    body = resp.json()
    assert body["view"] == "genre_delete"
    assert [b["title"] for b in body["genre_books"]] == ["The Hobbit"]


@pytest.mark.asyncio
async def test_delete_confirmation_not_found(client):
    resp = await client.get("/catalog/genre/9999/delete")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_unreferenced_genre(client):
    genre_id = await _create_genre(client)
    resp = await client.post(f"/catalog/genre/{genre_id}/delete", json={"genre_id": genre_id})
    assert resp.status_code == 303
    assert resp.headers["location"] == "/catalog/genres"

    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_without_body_uses_path_id(client):
    genre_id = await _create_genre(client)
    resp = await client.post(f"/catalog/genre/{genre_id}/delete")
    assert resp.status_code == 303


@pytest.mark.asyncio
async def test_delete_blocked_by_books(client):
    genre_id = await _create_genre(client)
    await _create_book(client, "The Silmarillion", genre_id)
    await _create_book(client, "The Hobbit", genre_id)

    resp = await client.post(f"/catalog/genre/{genre_id}/delete", json={"genre_id": genre_id})
    assert resp.status_code == 409
    body = resp.json()
    assert body["view"] == "genre_delete"
    assert [b["title"] for b in body["genre_books"]] == ["The Hobbit", "The Silmarillion"]

    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_delete_mismatched_body_id(client):
    genre_id = await _create_genre(client, "Fantasy")
    other_id = await _create_genre(client, "Horror")
    resp = await client.post(f"/catalog/genre/{genre_id}/delete", json={"genre_id": other_id})
    assert resp.status_code == 400

    resp = await client.get(f"/catalog/genre/{other_id}")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_delete_not_found(client):
    resp = await client.post("/catalog/genre/9999/delete", json={"genre_id": 9999})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_dedup_then_guarded_delete_scenario(client):
    g1 = await _create_genre(client, "Fantasy")
    assert await _create_genre(client, "fantasy") == g1

    book_id = await _create_book(client, "Dune", g1)
    resp = await client.post(f"/catalog/genre/{g1}/delete", json={"genre_id": g1})
    assert resp.status_code == 409
    assert [b["title"] for b in resp.json()["genre_books"]] == ["Dune"]

    # Reassign the book away from the genre
    resp = await client.post(
        f"/catalog/book/{book_id}/update",
        json={"title": "Dune", "summary": "Summary of Dune", "genre_id": None},
    )
    assert resp.status_code == 303

    resp = await client.post(f"/catalog/genre/{g1}/delete", json={"genre_id": g1})
    assert resp.status_code == 303
    resp = await client.get(f"/catalog/genre/{g1}")
    assert resp.status_code == 404


# --- update ---

@pytest.mark.asyncio
async def test_update_form(client):
    genre_id = await _create_genre(client, "Fantasy")
    resp = await client.get(f"/catalog/genre/{genre_id}/update")
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Update Genre"
    assert body["genre"] == {"id": genre_id, "name": "Fantasy"}


@pytest.mark.asyncio
async def test_update_form_not_found(client):
    resp = await client.get("/catalog/genre/9999/update")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_genre(client):
    genre_id = await _create_genre(client, "Fantsy")
    resp = await client.post(f"/catalog/genre/{genre_id}/update", json={"name": "Fantasy"})
    assert resp.status_code == 303
    assert resp.headers["location"] == f"/catalog/genre/{genre_id}"

    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.json()["genre"]["name"] == "Fantasy"


@pytest.mark.asyncio
async def test_update_case_only_change(client):
    genre_id = await _create_genre(client, "fantasy")
    resp = await client.post(f"/catalog/genre/{genre_id}/update", json={"name": "Fantasy"})
    assert resp.status_code == 303


@pytest.mark.asyncio
async def test_update_validation_error(client):
    genre_id = await _create_genre(client, "Fantasy")
    resp = await client.post(f"/catalog/genre/{genre_id}/update", json={"name": "x"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["genre"] == {"id": genre_id, "name": "x"}
    assert body["errors"][0]["field"] == "name"

    resp = await client.get(f"/catalog/genre/{genre_id}")
    assert resp.json()["genre"]["name"] == "Fantasy"


@pytest.mark.asyncio
async def test_update_onto_existing_name_is_rejected(client):
    await _create_genre(client, "Fantasy")
    horror_id = await _create_genre(client, "Horror")
    resp = await client.post(f"/catalog/genre/{horror_id}/update", json={"name": "FANTASY"})
    assert resp.status_code == 422
    assert resp.json()["errors"] == [{"field": "name", "msg": "A genre with this name already exists"}]


@pytest.mark.asyncio
async def test_update_not_found(client):
    resp = await client.post("/catalog/genre/9999/update", json={"name": "Fantasy"})
    assert resp.status_code == 404
