import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError
from urllib3.exceptions import MaxRetryError

from devevent.core.media.storage import (
    CloudinaryMediaStorage,
    ImageUpload,
    LocalMediaStorage,
    build_media_storage,
)
from devevent.errors import MediaUploadError

pytestmark = pytest.mark.unit


@pytest.fixture()
def image():
    return ImageUpload(data=b"image-bytes", filename="Poster.JPG", content_type="image/jpeg")


def test_image_extension():
    assert ImageUpload(b"x", "a.b.PNG").extension == "png"
    assert ImageUpload(b"x", "noext").extension == ""


def test_local_storage_writes_file(tmp_path, image):
    url = LocalMediaStorage(tmp_path).upload(image, "DevEvent")
    assert url.startswith("/uploads/DevEvent/")
    assert url.endswith(".jpg")
    name = url.rsplit("/", 1)[1]
    assert (tmp_path / "DevEvent" / name).read_bytes() == b"image-bytes"


def test_local_storage_sanitizes_folder(tmp_path, image):
    url = LocalMediaStorage(tmp_path).upload(image, "../../etc")
    assert ".." not in url
    assert url.startswith("/uploads/etc/")


def test_local_storage_failure_raises_media_error(tmp_path, image):
    blocker = tmp_path / "DevEvent"
    blocker.write_text("not a directory")
    with pytest.raises(MediaUploadError):
        LocalMediaStorage(tmp_path).upload(image, "DevEvent")


def test_cloudinary_upload_goes_through_sdk(monkeypatch, image):
    captured = {}

    def fake_upload(file, **options):
        captured["data"] = file.read()
        captured["options"] = options
        return {"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/DevEvent/a.jpg"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    backend = CloudinaryMediaStorage("demo", "key", "shh", timeout=12)
    url = backend.upload(image, "DevEvent")

    assert url == "https://res.cloudinary.com/demo/image/upload/v1/DevEvent/a.jpg"
    assert captured["data"] == b"image-bytes"
    options = captured["options"]
    assert options["folder"] == "DevEvent"
    assert options["resource_type"] == "image"
    assert options["cloud_name"] == "demo"
    assert options["api_key"] == "key"
    assert options["api_secret"] == "shh"
    assert options["timeout"] == 12


@pytest.mark.parametrize(
    "failure",
    [
        CloudinaryError("Invalid image file"),
        MaxRetryError(None, "https://api.cloudinary.com", "connection refused"),
        TimeoutError("timed out"),
    ],
)
def test_cloudinary_errors_raise_media_error(monkeypatch, image, failure):
    def fake_upload(file, **options):
        raise failure

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    with pytest.raises(MediaUploadError):
        CloudinaryMediaStorage("demo", "key", "shh").upload(image, "DevEvent")


@pytest.mark.parametrize("result", [{"public_id": "x"}, {"secure_url": ""}, None])
def test_cloudinary_result_without_url_is_failure(monkeypatch, image, result):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda file, **options: result)
    with pytest.raises(MediaUploadError):
        CloudinaryMediaStorage("demo", "key", "shh").upload(image, "DevEvent")


def test_build_media_storage_selects_backend(tmp_path):
    local = build_media_storage({"MEDIA_BACKEND": "local", "UPLOAD_FOLDER": str(tmp_path)})
    assert isinstance(local, LocalMediaStorage)

    cloud = build_media_storage(
        {
            "MEDIA_BACKEND": "cloudinary",
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "shh",
            "MEDIA_UPLOAD_TIMEOUT_SECONDS": "5",
        }
    )
    assert isinstance(cloud, CloudinaryMediaStorage)
    assert cloud.timeout == 5


@pytest.mark.integration
def test_uploaded_files_are_served(app, client):
    local = LocalMediaStorage(app.config["UPLOAD_FOLDER"])
    url = local.upload(ImageUpload(b"served-bytes", "pic.png"), "DevEvent")
    resp = client.get(url)
    assert resp.status_code == 200
    assert resp.data == b"served-bytes"
    resp.close()


@pytest.mark.integration
def test_missing_upload_is_404(client):
    assert client.get("/uploads/DevEvent/missing.png").status_code == 404


def test_cloudinary_failure_is_logged_with_arguments(monkeypatch, image, caplog):
    def fake_upload(file, **options):
        raise CloudinaryError("Invalid image file")

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    with caplog.at_level("ERROR", logger="devevent.core.media.storage"):
        with pytest.raises(MediaUploadError):
            CloudinaryMediaStorage("demo", "key", "shh").upload(image, "DevEvent")

    (record,) = [r for r in caplog.records if r.name == "devevent.core.media.storage"]
    assert record.msg == "Cloudinary upload failed for %s: %s"
    assert record.args[0] == "Poster.JPG"
    assert "Invalid image file" in record.getMessage()
