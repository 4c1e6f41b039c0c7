"""Tests for folder endpoints: create, list, get, verify password, settings, downloads, delete."""

import pytest

from helpers import JPEG_BYTES


def _create(client, headers, name="Trip", **extra):
    resp = client.post("/api/folders", json={"name": name, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def _upload(client, headers, folder_id=None, filename="p.jpg"):
    form = {"folder_id": folder_id} if folder_id else {}
    resp = client.post(
        "/api/photos",
        data=form,
        files={"image": (filename, JPEG_BYTES, "image/jpeg")},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def _delete(client, headers, folder_id, password=None):
    body = {"password": password} if password is not None else None
    return client.request("DELETE", f"/api/folders/{folder_id}", json=body, headers=headers)


class TestCreateFolder:

    def test_create_unprotected(self, client, alice):
        resp = client.post("/api/folders", json={"name": "Trip"}, headers=alice)
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Trip"
        assert body["data"]["is_protected"] is False
        assert body["data"]["photo_count"] == 0

    def test_create_protected_never_echoes_password(self, client, alice):
        resp = client.post("/api/folders", json={"name": "Private", "password": "pw123"}, headers=alice)
        assert resp.status_code == 201
        assert resp.json()["data"]["is_protected"] is True
        assert "pw123" not in resp.text
        assert "secret_hash" not in resp.text

    def test_secret_is_accepted_as_password(self, client, alice):
        folder = _create(client, alice, "Private", secret="pw123")
        assert folder["is_protected"] is True

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_is_400(self, client, alice, name):
        resp = client.post("/api/folders", json={"name": name}, headers=alice)
        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"

    def test_missing_name_is_400(self, client, alice):
        resp = client.post("/api/folders", json={}, headers=alice)
        assert resp.status_code == 400

    def test_duplicate_name_is_400(self, client, alice):
        _create(client, alice, "Trip")
        resp = client.post("/api/folders", json={"name": "Trip"}, headers=alice)
        assert resp.status_code == 400
        assert "already exists" in resp.json()["error"]


class TestListAndGet:

    def test_list_shows_own_folders_with_photo_counts(self, client, alice, bob):
        trip = _create(client, alice, "Trip")
        _create(client, alice, "Empty")
        _create(client, bob, "Bobs")
        _upload(client, alice, trip["id"])
        _upload(client, alice, trip["id"])

        body = client.get("/api/folders", headers=alice).json()
        assert body["success"] is True
        assert body["count"] == 2
        counts = {f["name"]: f["photo_count"] for f in body["data"]}
        assert counts == {"Trip": 2, "Empty": 0}

    def test_get_own_folder(self, client, alice):
        folder = _create(client, alice, "Trip", password="pw123")
        resp = client.get(f"/api/folders/{folder['id']}", headers=alice)
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == folder["id"]

    def test_get_other_users_folder_is_403(self, client, alice, bob):
        folder = _create(client, alice, "Trip")
        resp = client.get(f"/api/folders/{folder['id']}", headers=bob)
        assert resp.status_code == 403
        assert resp.json()["code"] == "FORBIDDEN"

    def test_get_missing_folder_is_404(self, client, alice):
        resp = client.get("/api/folders/does-not-exist", headers=alice)
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Folder not found", "code": "FOLDER_NOT_FOUND"}


class TestVerifyPassword:

    def test_correct_password(self, client, alice):
        folder = _create(client, alice, "Private", password="pw123")
        resp = client.post(f"/api/folders/{folder['id']}/verify", json={"password": "pw123"}, headers=alice)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Password verified successfully"}

    def test_wrong_password_is_401(self, client, alice):
        folder = _create(client, alice, "Private", password="pw123")
        resp = client.post(f"/api/folders/{folder['id']}/verify", json={"password": "nope"}, headers=alice)
        assert resp.status_code == 401
        assert resp.json()["error"] == "Incorrect password"

    def test_unprotected_folder_is_400(self, client, alice):
        folder = _create(client, alice, "Open")
        resp = client.post(f"/api/folders/{folder['id']}/verify", json={"password": "pw"}, headers=alice)
        assert resp.status_code == 400
        assert resp.json()["code"] == "FOLDER_NOT_PROTECTED"

    def test_missing_password_is_400(self, client, alice):
        folder = _create(client, alice, "Private", password="pw123")
        resp = client.post(f"/api/folders/{folder['id']}/verify", json={}, headers=alice)
        assert resp.status_code == 400

    def test_missing_folder_is_404(self, client, alice):
        resp = client.post("/api/folders/nope/verify", json={"password": "pw"}, headers=alice)
        assert resp.status_code == 404

    def test_other_user_is_403_even_with_correct_password(self, client, alice, bob):
        folder = _create(client, alice, "Private", password="pw123")
        resp = client.post(f"/api/folders/{folder['id']}/verify", json={"password": "pw123"}, headers=bob)
        assert resp.status_code == 403


class TestDeleteFolder:

    def test_protected_folder_lifecycle(self, client, alice, bob, storage):
        folder = _create(client, alice, "R", password="pw123")
        photos = [_upload(client, alice, folder["id"], f"p{i}.jpg") for i in range(2)]

        resp = _delete(client, bob, folder["id"], "pw123")
        assert resp.status_code == 403

        resp = _delete(client, alice, folder["id"], "wrong")
        assert resp.status_code == 401
        assert client.get(f"/api/folders/{folder['id']}", headers=alice).status_code == 200

        resp = _delete(client, alice, folder["id"])
        assert resp.status_code == 400
        assert resp.json()["code"] == "SECRET_REQUIRED"
        assert storage.removed == []

        resp = _delete(client, alice, folder["id"], "pw123")
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Folder and all associated photos deleted successfully"

        assert client.get(f"/api/folders/{folder['id']}", headers=alice).status_code == 404
        for photo in photos:
            assert client.get(f"/api/photos/{photo['id']}", headers=alice).status_code == 404
        assert sorted(storage.removed) == sorted(p["storage_path"] for p in photos)

    def test_unprotected_delete_survives_storage_failure(self, client, alice, storage):
        folder = _create(client, alice, "Q")
        photo = _upload(client, alice, folder["id"])
        storage.fail_removals = True

        resp = _delete(client, alice, folder["id"])
        assert resp.status_code == 200
        assert storage.removed == [photo["storage_path"]]
        assert client.get(f"/api/photos/{photo['id']}", headers=alice).status_code == 404

    def test_delete_keeps_unfiled_photos(self, client, alice):
        folder = _create(client, alice, "Q")
        _upload(client, alice, folder["id"])
        unfiled = _upload(client, alice)

        assert _delete(client, alice, folder["id"]).status_code == 200
        remaining = client.get("/api/photos", headers=alice).json()
        assert [p["id"] for p in remaining["data"]] == [unfiled["id"]]

    def test_delete_missing_folder_is_404(self, client, alice):
        assert _delete(client, alice, "nope").status_code == 404

    def test_second_delete_is_404(self, client, alice):
        folder = _create(client, alice, "Q")
        assert _delete(client, alice, folder["id"]).status_code == 200
        assert _delete(client, alice, folder["id"]).status_code == 404

    def test_delete_without_token_is_401(self, client, alice):
        folder = _create(client, alice, "Q")
        assert _delete(client, {}, folder["id"]).status_code == 401


def _settings(client, headers, folder_id, **changes):
    return client.put(f"/api/folders/{folder_id}/settings", json=changes, headers=headers)


class TestFolderSettings:

    def test_defaults(self, client, alice):
        folder = _create(client, alice)
        resp = client.get(f"/api/folders/{folder['id']}/settings", headers=alice)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["allow_download"] is False
        assert data["allow_client_selection"] is False
        assert data["download_count"] == 0
        assert data["watermark_settings"] == {
            "enabled": False,
            "text": "COPYRIGHT",
            "opacity": 50,
            "position": "center",
            "font_size": 80,
        }

    def test_partial_watermark_update_keeps_other_fields(self, client, alice):
        folder = _create(client, alice)
        resp = _settings(client, alice, folder["id"], watermark_settings={"enabled": True, "opacity": 30})
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Folder settings updated successfully"
        watermark = body["data"]["watermark_settings"]
        assert watermark["enabled"] is True
        assert watermark["opacity"] == 30
        assert watermark["text"] == "COPYRIGHT"

        resp = _settings(client, alice, folder["id"], allow_download=True)
        data = resp.json()["data"]
        assert data["allow_download"] is True
        assert data["watermark_settings"]["opacity"] == 30

    def test_other_user_is_403(self, client, alice, bob):
        folder = _create(client, alice)
        assert client.get(f"/api/folders/{folder['id']}/settings", headers=bob).status_code == 403
        resp = _settings(client, bob, folder["id"], allow_download=True)
        assert resp.status_code == 403
        resp = client.get(f"/api/folders/{folder['id']}/settings", headers=alice)
        assert resp.json()["data"]["allow_download"] is False

    def test_missing_folder_is_404(self, client, alice):
        assert client.get("/api/folders/nope/settings", headers=alice).status_code == 404
        assert _settings(client, alice, "nope", allow_download=True).status_code == 404

    def test_without_token_is_401(self, client, alice):
        folder = _create(client, alice)
        assert client.get(f"/api/folders/{folder['id']}/settings").status_code == 401

    @pytest.mark.parametrize("watermark", [
        {"opacity": 101},
        {"position": "top"},
        {"font_size": 10},
        {"text": ""},
        {"colour": "red"},
    ])
    def test_invalid_watermark_is_400(self, client, alice, watermark):
        folder = _create(client, alice)
        resp = _settings(client, alice, folder["id"], watermark_settings=watermark)
        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"


class TestDownloadTracking:

    def _download(self, client, folder_id, password=None):
        body = {"password": password} if password is not None else None
        return client.post(f"/api/folders/{folder_id}/download", json=body)

    def test_disabled_by_default(self, client, alice):
        folder = _create(client, alice)
        assert self._download(client, folder["id"]).status_code == 403

    def test_counts_without_login(self, client, alice):
        folder = _create(client, alice)
        _settings(client, alice, folder["id"], allow_download=True)

        assert self._download(client, folder["id"]).json()["data"] == {"download_count": 1}
        assert self._download(client, folder["id"]).json()["data"] == {"download_count": 2}

        resp = client.get(f"/api/folders/{folder['id']}/settings", headers=alice)
        assert resp.json()["data"]["download_count"] == 2

    def test_protected_folder_needs_password(self, client, alice):
        folder = _create(client, alice, "Private", password="pw123")
        _settings(client, alice, folder["id"], allow_download=True)

        resp = self._download(client, folder["id"])
        assert resp.status_code == 400
        assert resp.json()["code"] == "SECRET_REQUIRED"
        assert self._download(client, folder["id"], "wrong").status_code == 401
        assert self._download(client, folder["id"], "pw123").status_code == 200

    def test_missing_folder_is_404(self, client):
        assert self._download(client, "nope").status_code == 404
