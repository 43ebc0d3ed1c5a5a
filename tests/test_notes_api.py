"""
Notes API tests
"""
import io

import pytest
from fastapi import UploadFile
from httpx import AsyncClient
from sqlalchemy import func, select

from app.api.notes import read_images
from app.config import settings
from app.core.exceptions import ValidationException
from app.models.note import Note, NoteImage


async def _count_notes(session_factory) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(Note))
        return result.scalar()


class TestCreateAndList:
    """Test note creation and listing."""

    @pytest.mark.asyncio
    async def test_create_without_images(self, client: AsyncClient, make_user, create_note):
        headers = await make_user()
        note = await create_note(headers)

        assert note["title"] == "Groceries"
        assert note["content"] == "milk,eggs"
        assert note["imageUrls"] == []
        assert note["createdAt"] and note["updatedAt"]

    @pytest.mark.asyncio
    async def test_images_keep_upload_order(self, client: AsyncClient, make_user, create_note, uploader):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"first"), ("b.png", b"second")])

        assert note["imageUrls"] == uploader.uploaded
        assert len(note["imageUrls"]) == 2

        listed = (await client.get("/api/notes", headers=headers)).json()
        assert listed[0]["imageUrls"] == uploader.uploaded

        first = uploader.root / uploader.extract_public_id(note["imageUrls"][0])
        assert first.read_bytes() == b"first"

    @pytest.mark.asyncio
    async def test_url_with_comma_survives_storage(self, client: AsyncClient, make_user, session_factory):
        headers = await make_user()
        note = (await client.post("/api/notes", data={"title": "t", "content": ""}, headers=headers)).json()

        async with session_factory() as session:
            row = await session.get(Note, note["id"])
            row.image_urls = ["https://cdn.example/a,b.png", "https://cdn.example/c.png"]
            await session.commit()

        listed = (await client.get("/api/notes", headers=headers)).json()
        assert listed[0]["imageUrls"] == ["https://cdn.example/a,b.png", "https://cdn.example/c.png"]

    @pytest.mark.asyncio
    async def test_list_newest_first_and_only_own(self, client: AsyncClient, make_user, create_note):
        alice = await make_user("alice")
        bob = await make_user("bob")
        await create_note(alice, title="first")
        await create_note(alice, title="second")
        await create_note(bob, title="bob's")

        listed = (await client.get("/api/notes", headers=alice)).json()
        assert [n["title"] for n in listed] == ["second", "first"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   ", "x" * 256])
    async def test_invalid_title_writes_nothing(
        self, client: AsyncClient, make_user, session_factory, uploader, title
    ):
        headers = await make_user()
        response = await client.post(
            "/api/notes",
            data={"title": title, "content": "c"},
            files=[("images", ("a.png", b"data", "image/png"))],
            headers=headers,
        )
        assert response.status_code == 400
        assert await _count_notes(session_factory) == 0
        assert uploader.uploaded == []

    @pytest.mark.asyncio
    async def test_upload_failure_is_generic_upstream_error(
        self, client: AsyncClient, make_user, session_factory, uploader
    ):
        headers = await make_user()
        uploader.fail_uploads = True
        response = await client.post(
            "/api/notes",
            data={"title": "t", "content": "c"},
            files=[("images", ("a.png", b"data", "image/png"))],
            headers=headers,
        )
        assert response.status_code == 502
        assert response.json()["error"] == "Failed to upload images"
        assert await _count_notes(session_factory) == 0


class TestUpdateAndDelete:
    """Test owner-only update and delete."""

    @pytest.mark.asyncio
    async def test_update_title_and_content(self, client: AsyncClient, make_user, create_note):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1")])

        response = await client.put(
            f"/api/notes/{note['id']}",
            json={"title": "Shopping", "content": "bread"},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Shopping"
        assert data["content"] == "bread"
        assert data["imageUrls"] == note["imageUrls"]

    @pytest.mark.asyncio
    async def test_update_blank_title(self, client: AsyncClient, make_user, create_note):
        headers = await make_user()
        note = await create_note(headers)
        response = await client.put(f"/api/notes/{note['id']}", json={"title": " ", "content": ""}, headers=headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_note(self, client: AsyncClient, make_user):
        headers = await make_user()
        response = await client.put("/api/notes/does-not-exist", json={"title": "t"}, headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Note not found"

    @pytest.mark.asyncio
    async def test_delete_removes_note_and_remote_images(
        self, client: AsyncClient, make_user, create_note, uploader
    ):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1"), ("b.png", b"2")])

        response = await client.delete(f"/api/notes/{note['id']}", headers=headers)
        assert response.status_code == 204

        assert uploader.deleted == note["imageUrls"]
        assert list(uploader.root.iterdir()) == []
        assert (await client.get("/api/notes", headers=headers)).json() == []

    @pytest.mark.asyncio
    async def test_delete_removes_legacy_images(
        self, client: AsyncClient, make_user, create_note, session_factory
    ):
        headers = await make_user()
        note = await create_note(headers)

        async with session_factory() as session:
            image = NoteImage(note_id=note["id"], image_name="old.png", image_type="image/png", image_data=b"PNG")
            session.add(image)
            await session.commit()
            image_id = image.id
        assert (await client.get(f"/api/images/{image_id}")).status_code == 200

        response = await client.delete(f"/api/notes/{note['id']}", headers=headers)
        assert response.status_code == 204

        assert (await client.get(f"/api/images/{image_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_survives_media_host_outage(
        self, client: AsyncClient, make_user, create_note, uploader
    ):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1")])
        uploader.fail_deletes = True

        response = await client.delete(f"/api/notes/{note['id']}", headers=headers)
        assert response.status_code == 204
        assert (await client.get("/api/notes", headers=headers)).json() == []


class TestImages:
    """Test adding and removing images on an owned note."""

    @pytest.mark.asyncio
    async def test_add_images_appends(self, client: AsyncClient, make_user, create_note, uploader):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1")])

        response = await client.post(
            f"/api/notes/{note['id']}/images",
            files=[("images", ("b.png", b"2", "image/png")), ("images", ("c.png", b"3", "image/png"))],
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == note["id"]
        assert data["message"] == "Images added successfully"
        assert data["imageUrls"][0] == note["imageUrls"][0]
        assert data["imageUrls"] == uploader.uploaded

    @pytest.mark.asyncio
    async def test_remove_image(self, client: AsyncClient, make_user, create_note, uploader):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1"), ("b.png", b"2"), ("c.png", b"3")])
        first, middle, last = note["imageUrls"]

        response = await client.request(
            "DELETE",
            f"/api/notes/{note['id']}/images",
            json={"imageUrl": middle},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["imageUrls"] == [first, last]
        assert response.json()["message"] == "Image deleted successfully"
        assert uploader.deleted == [middle]

    @pytest.mark.asyncio
    async def test_remove_image_not_in_note(self, client: AsyncClient, make_user, create_note, uploader):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1")])

        response = await client.request(
            "DELETE",
            f"/api/notes/{note['id']}/images",
            json={"imageUrl": "https://elsewhere/x.png"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "IMAGE_NOT_IN_NOTE"
        assert uploader.deleted == []

    @pytest.mark.asyncio
    async def test_remove_image_despite_media_host_outage(
        self, client: AsyncClient, make_user, create_note, uploader
    ):
        headers = await make_user()
        note = await create_note(headers, images=[("a.png", b"1")])
        uploader.fail_deletes = True

        response = await client.request(
            "DELETE",
            f"/api/notes/{note['id']}/images",
            json={"imageUrl": note["imageUrls"][0]},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["imageUrls"] == []


class TestOwnershipGate:
    """A non-owner is denied on every owner operation."""

    @pytest.mark.asyncio
    async def test_non_owner_is_denied(self, client: AsyncClient, make_user, create_note):
        alice = await make_user("alice")
        mallory = await make_user("mallory")
        note = await create_note(alice, images=[("a.png", b"1")])
        note_id = note["id"]

        responses = [
            await client.put(f"/api/notes/{note_id}", json={"title": "x", "content": "y"}, headers=mallory),
            await client.delete(f"/api/notes/{note_id}", headers=mallory),
            await client.post(
                f"/api/notes/{note_id}/images",
                files=[("images", ("b.png", b"2", "image/png"))],
                headers=mallory,
            ),
            await client.request(
                "DELETE",
                f"/api/notes/{note_id}/images",
                json={"imageUrl": note["imageUrls"][0]},
                headers=mallory,
            ),
            await client.post(f"/api/notes/{note_id}/share", json={"accessLevel": "VIEWER"}, headers=mallory),
            await client.get(f"/api/notes/{note_id}/shares", headers=mallory),
        ]
        for response in responses:
            assert response.status_code == 403, response.request.url
            assert response.json()["code"] == "ACCESS_DENIED"

        listed = (await client.get("/api/notes", headers=alice)).json()
        assert listed[0]["title"] == "Groceries"
        assert listed[0]["imageUrls"] == note["imageUrls"]


class TestReadImages:
    """Test multipart upload reading."""

    @pytest.mark.asyncio
    async def test_oversized_upload_is_rejected_before_reading(self):
        body = io.BytesIO(b"0123456789")
        upload = UploadFile(file=body, size=10, filename="big.png")

        with pytest.raises(ValidationException):
            await read_images([upload], max_size=4)
        assert body.tell() == 0

    @pytest.mark.asyncio
    async def test_upload_within_limit_is_read(self):
        upload = UploadFile(file=io.BytesIO(b"0123"), size=4, filename="ok.png")

        payloads = await read_images([upload], max_size=4)
        assert payloads[0].data == b"0123"
        assert payloads[0].filename == "ok.png"

    @pytest.mark.asyncio
    async def test_oversized_upload_through_api(self, client: AsyncClient, make_user, uploader, monkeypatch):
        headers = await make_user()
        monkeypatch.setattr(settings, "max_upload_size", 4)
        response = await client.post(
            "/api/notes",
            data={"title": "t", "content": "c"},
            files=[("images", ("big.png", b"0123456789", "image/png"))],
            headers=headers,
        )
        assert response.status_code == 400
        assert uploader.uploaded == []
