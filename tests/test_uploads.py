import pytest

from formapi.config import config
from formapi.forms import contact_form
from formapi.main import app
from formapi.objectstore import get_minio_client
from formapi.schema import generate_schema


class FakeMinio:
    def __init__(self, fail=False):
        self.fail = fail
        self.objects = {}

    def put_object(self, bucket_name, object_name, data, length, content_type):
        if self.fail:
            raise ConnectionError("minio unreachable")
        self.objects[(bucket_name, object_name)] = (data.read(), length, content_type)


@pytest.fixture()
def fake_minio():
    fake = FakeMinio()
    app.dependency_overrides[get_minio_client] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


def test_upload_image_returns_object_for_image_field(client, fake_minio):
    res = client.post("/api/upload", files={"file": ("my avatar.png", b"\x89PNG data", "image/png")})
    assert res.status_code == 201
    body = res.json()
    assert body["filename"] == "my_avatar.png"
    assert body["content_type"] == "image/png"
    assert body["size"] == 9
    assert body["url"].startswith(f"http://{config.MINIO_ENDPOINT}/{config.MINIO_BUCKET}/")

    [(bucket, name)] = fake_minio.objects
    assert bucket == config.MINIO_BUCKET
    assert name.endswith("_my_avatar.png")


def test_uploaded_image_is_stored_as_blob(client, fake_minio, contact_values):
    avatar = client.post("/api/upload", files={"file": ("a.jpg", b"jpeg", "image/jpeg")}).json()
    contact_values["avatar"] = avatar
    res = client.post("/api/validate", json={"values": contact_values, "schema": generate_schema(contact_form)})
    assert res.status_code == 200

    record = client.get(f"/api/records/{res.json()['record_id']}").json()
    assert record["values"]["avatar"] == avatar


def test_disallowed_extension_is_rejected(client, fake_minio):
    res = client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert res.status_code == 400
    assert res.json()["detail"] == "File type not allowed"
    assert fake_minio.objects == {}


def test_storage_failure_returns_500(client, fake_minio):
    fake_minio.fail = True
    res = client.post("/api/upload", files={"file": ("a.png", b"png", "image/png")})
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to store file"
