import pytest

from app.models.artwork import Artwork, UserUpload


pytestmark = pytest.mark.asyncio


async def test_upload_list_get(client, create_user, upload_artwork, uploads_tmpdir):
    await create_user("20250101", name="Alice")

    art = await upload_artwork("20250101", title="Sketch1", prompt="pencil study")
    assert art["title"] == "Sketch1"
    assert art["artist"] == "Alice"
    assert art["artistId"] == "20250101"
    assert art["inShowcase"] is True
    assert art["isAIGenerated"] is False
    assert art["desc"] == "Student Submission"
    assert art["image"].startswith("/uploads/")

    # File landed in the uploads directory
    stored = uploads_tmpdir / art["image"].rsplit("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG fake image bytes"

    # Upload history row recorded
    assert await UserUpload.filter(user_id="20250101", artwork_id=art["id"]).exists()

    list_resp = await client.get("/api/gallery")
    assert list_resp.status_code == 200
    assert [a["id"] for a in list_resp.json()["data"]] == [art["id"]]

    one = await client.get(f"/api/gallery/{art['id']}")
    assert one.status_code == 200
    assert one.json()["data"]["prompt"] == "pencil study"

    # Same router under the compatibility prefix
    compat = await client.get(f"/api/artwork/{art['id']}")
    assert compat.status_code == 200

    missing = await client.get("/api/gallery/nope")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


async def test_upload_requires_image_and_known_user(client, create_user):
    await create_user("20250101")

    no_file = await client.post("/api/gallery/upload", data={"user": "20250101"})
    assert no_file.status_code == 400

    files = {"image": ("a.png", b"data", "image/png")}
    no_user = await client.post("/api/gallery/upload", files=files)
    assert no_user.status_code == 401

    unknown = await client.post("/api/gallery/upload", data={"user": "20259999"}, files=files)
    assert unknown.status_code == 404


async def test_upload_can_opt_out_of_showcase(client, create_user, upload_artwork):
    await create_user("20250101")
    hidden = await upload_artwork("20250101", title="Private", addToGallery="false")
    assert hidden["inShowcase"] is False
    shown = await upload_artwork("20250101", title="Public", addToGallery="true")
    assert shown["inShowcase"] is True


async def test_list_is_most_recent_first(client, create_user, upload_artwork):
    await create_user("20250101")
    first = await upload_artwork("20250101", title="First")
    second = await upload_artwork("20250101", title="Second")

    data = (await client.get("/api/gallery")).json()["data"]
    assert [a["id"] for a in data] == [second["id"], first["id"]]


async def test_student_showcase_scenario(client, upload_artwork):
    reg = await client.post(
        "/api/register",
        json={"userId": "20250101", "password": "pw123456", "name": "Alice", "role": "student"},
    )
    assert reg.status_code == 200
    await client.post(
        "/api/register",
        json={"userId": "20250102", "password": "pw123456", "name": "Bob", "role": "student"},
    )
    login = await client.post("/api/login", json={"userId": "20250101", "password": "pw123456"})
    assert login.status_code == 200

    art = await upload_artwork("20250101", title="Sketch1")
    listing = (await client.get("/api/gallery")).json()["data"]
    assert any(a["title"] == "Sketch1" and a["artistId"] == "20250101" for a in listing)

    forbidden = await client.put(f"/api/gallery/{art['id']}", json={"inShowcase": False, "user": "20250102"})
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"

    ok = await client.put(f"/api/gallery/{art['id']}", json={"inShowcase": False, "user": "20250101"})
    assert ok.status_code == 200
    assert ok.json()["data"]["inShowcase"] is False
    # Other fields untouched
    assert ok.json()["data"]["title"] == "Sketch1"

    public = (await client.get("/api/gallery", params={"inShowcase": "true"})).json()["data"]
    assert all(a["id"] != art["id"] for a in public)

    # Still listed for its owner
    mine = (await client.get("/api/gallery", params={"artistId": "20250101"})).json()["data"]
    assert [a["id"] for a in mine] == [art["id"]]


async def test_update_is_partial(client, create_user, upload_artwork):
    await create_user("20250101")
    art = await upload_artwork("20250101", title="Orig", prompt="p1", desc="d1")

    resp = await client.put(f"/api/gallery/{art['id']}", json={"title": "New", "user": "20250101"})
    data = resp.json()["data"]
    assert data["title"] == "New"
    assert data["prompt"] == "p1"
    assert data["desc"] == "d1"
    assert data["inShowcase"] is True

    resp = await client.put(f"/api/gallery/{art['id']}", json={"desc": "", "user": "20250101"})
    assert resp.json()["data"]["desc"] == ""
    assert resp.json()["data"]["title"] == "New"


async def test_admin_can_update_and_delete_any_artwork(client, create_user, upload_artwork):
    await create_user("20250101")
    await create_user("admin", role="admin")
    art = await upload_artwork("20250101", title="Mine")

    upd = await client.put(f"/api/gallery/{art['id']}", json={"title": "Moderated", "user": "admin"})
    assert upd.status_code == 200
    assert upd.json()["data"]["title"] == "Moderated"

    resp = await client.request("DELETE", f"/api/gallery/{art['id']}", json={"user": "admin"})
    assert resp.status_code == 200
    assert resp.json()["data"]["deleted"] is True
    assert not await Artwork.filter(id=art["id"]).exists()
    assert not await UserUpload.filter(artwork_id=art["id"]).exists()


async def test_delete_permissions(client, create_user, upload_artwork):
    await create_user("20250101")
    await create_user("20250102")
    await create_user("1234567", role="teacher")
    art = await upload_artwork("20250101")

    anonymous = await client.request("DELETE", f"/api/gallery/{art['id']}")
    assert anonymous.status_code == 401

    other = await client.request("DELETE", f"/api/gallery/{art['id']}", json={"user": "20250102"})
    assert other.status_code == 403

    # Teachers are not owners either
    teacher = await client.request("DELETE", f"/api/gallery/{art['id']}", json={"user": "1234567"})
    assert teacher.status_code == 403

    # Caller id in the query string works too
    owner = await client.delete(f"/api/artwork/{art['id']}", params={"user": "20250101"})
    assert owner.status_code == 200

    again = await client.request("DELETE", f"/api/gallery/{art['id']}", json={"user": "20250101"})
    assert again.status_code == 404


async def test_artist_name_is_a_snapshot(client, create_user, upload_artwork):
    await create_user("20250101", name="Alice")
    art = await upload_artwork("20250101")

    await client.put("/api/user/20250101", json={"name": "Alicia", "currentUserId": "20250101"})

    data = (await client.get(f"/api/gallery/{art['id']}")).json()["data"]
    assert data["artist"] == "Alice"


async def test_legacy_artwork_ownership(client, create_user):
    await create_user("20250101", name="Alice")
    await create_user("20250102")
    await Artwork.create(id="legacy1", title="Old", artist="student_20250101", image="/uploads/old.png")
    await Artwork.create(id="orphan1", title="Orphan", artist="Someone", image="/uploads/x.png")

    works = (await client.get("/api/works", params={"userId": "20250101"})).json()["data"]
    assert [w["id"] for w in works] == ["legacy1"]
    assert works[0]["artistId"] == "20250101"
    assert works[0]["artist"] == "Alice"

    all_works = (await client.get("/api/works")).json()["data"]
    assert {w["id"] for w in all_works} == {"legacy1", "orphan1"}

    other = await client.put("/api/gallery/legacy1", json={"title": "x", "user": "20250102"})
    assert other.status_code == 403
    owner = await client.put("/api/gallery/legacy1", json={"title": "Renamed", "user": "20250101"})
    assert owner.status_code == 200

    # No identifiable owner: nobody but an admin
    orphan = await client.put("/api/gallery/orphan1", json={"title": "x", "user": "20250101"})
    assert orphan.status_code == 403
