"""
Tests for the storage node: content store, metadata database and HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from internet15.api_server import app, content_disposition
from internet15.backends.local import ContentStore
from internet15.backends.metadata_db import FileMetadataDB
from internet15.core.content_addressing import calculate_hash, is_content_hash, verify_content

HELLO = b"Hello, Internet 1.5"
HELLO_HASH = calculate_hash(HELLO)


class TestContentAddressing:
    """Test content hashing."""

    def test_same_data_same_hash(self):
        assert calculate_hash(b"Test data 1") == calculate_hash(b"Test data 1")
        assert calculate_hash(b"Test data 1") != calculate_hash(b"Test data 2")

    def test_known_digest(self):
        assert calculate_hash(b"") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_is_content_hash(self):
        assert is_content_hash(HELLO_HASH)
        assert not is_content_hash("../etc/passwd")
        assert not is_content_hash(HELLO_HASH.upper())
        assert not is_content_hash("")

    def test_verify_content(self):
        assert verify_content(HELLO, HELLO_HASH)
        assert not verify_content(b"tampered", HELLO_HASH)


class TestContentStore:
    """Test ContentStore."""

    def test_store_and_retrieve(self, tmp_path):
        store = ContentStore(tmp_path)

        content_hash = store.store(HELLO)

        assert content_hash == HELLO_HASH
        assert (tmp_path / f"{HELLO_HASH}.dat").read_bytes() == HELLO
        assert store.retrieve(content_hash) == HELLO
        assert store.exists(content_hash)

    def test_duplicate_kept_once(self, tmp_path):
        store = ContentStore(tmp_path)

        first = store.store(HELLO)
        second = store.store(HELLO)

        assert first == second
        assert store.list_hashes() == [HELLO_HASH]

    def test_missing_content(self, tmp_path):
        store = ContentStore(tmp_path)

        assert store.retrieve(calculate_hash(b"never stored")) is None
        assert not store.exists(calculate_hash(b"never stored"))

    def test_malformed_hash_rejected(self, tmp_path):
        store = ContentStore(tmp_path / "blobs")
        (tmp_path / "secret.dat").write_bytes(b"secret")

        assert store.retrieve("../secret") is None
        assert not store.exists("../secret")

    def test_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "data"
        ContentStore(path)
        assert path.is_dir()


class TestFileMetadataDB:
    """Test FileMetadataDB."""

    def test_record_and_list(self, tmp_path):
        db = FileMetadataDB(tmp_path / "file_metadata.db")

        first = db.record_file("file1.txt", "text/plain", 5, HELLO_HASH)
        second = db.record_file("file2.jpg", "image/jpeg", 1024, calculate_hash(b"jpg"))

        files = db.list_files()

        assert [f.filename for f in files] == ["file1.txt", "file2.jpg"]
        assert files[0] == first
        assert files[1] == second
        assert first.id < second.id
        assert first.uploaded_at > 0

    def test_get_by_hash_returns_latest(self, tmp_path):
        db = FileMetadataDB(tmp_path / "file_metadata.db")

        db.record_file("old.txt", "text/plain", 5, HELLO_HASH)
        db.record_file("new.txt", "text/plain", 5, HELLO_HASH)

        assert db.get_by_hash(HELLO_HASH).filename == "new.txt"
        assert db.get_by_hash(calculate_hash(b"other")) is None

    def test_initialize_is_idempotent(self, tmp_path):
        path = tmp_path / "file_metadata.db"
        FileMetadataDB(path).record_file("a.txt", "text/plain", 1, HELLO_HASH)

        # Reopening keeps existing rows
        assert len(FileMetadataDB(path).list_files()) == 1


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "data"))
    monkeypatch.setenv("METADATA_DB", str(tmp_path / "file_metadata.db"))
    monkeypatch.setenv("MAX_FILE_SIZE", "1024")

    with TestClient(app) as test_client:
        yield test_client


class TestStorageNodeAPI:
    """Test the storage node HTTP API."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_upload_then_download(self, client):
        response = client.post(
            "/upload",
            files={"file": ("test.txt", HELLO, "text/plain")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["hash"] == HELLO_HASH
        assert body["filename"] == "test.txt"
        assert body["size"] == len(HELLO)
        assert body["message"] == f"Stored with hash: {HELLO_HASH}"

        download = client.get(f"/download/{HELLO_HASH}")
        assert download.status_code == 200
        assert download.content == HELLO
        assert download.headers["content-type"].startswith("text/plain")

    def test_gateway_path(self, client):
        client.post("/upload", files={"file": ("test.txt", HELLO, "text/plain")})

        response = client.get(f"/ipfs/{HELLO_HASH}")

        assert response.status_code == 200
        assert response.content == HELLO

    def test_download_missing(self, client):
        response = client.get(f"/download/{calculate_hash(b'missing')}")

        assert response.status_code == 404
        assert response.json()["detail"] == "File not found"

    def test_download_malformed_hash(self, client):
        response = client.get("/ipfs/not-a-hash")
        assert response.status_code == 404

    def test_upload_too_large(self, client):
        response = client.post(
            "/upload",
            files={"file": ("big.bin", b"x" * 2048, "application/octet-stream")},
        )

        assert response.status_code == 413

    def test_list_files(self, client):
        client.post("/upload", files={"file": ("file1.txt", b"one", "text/plain")})
        client.post("/upload", files={"file": ("file2.jpg", b"two", "image/jpeg")})

        response = client.get("/files")

        assert response.status_code == 200
        files = response.json()
        assert [f["filename"] for f in files] == ["file1.txt", "file2.jpg"]
        assert files[1]["file_type"] == "image/jpeg"
        assert files[0]["content_hash"] == calculate_hash(b"one")

    def test_non_ascii_filename_download(self, client):
        response = client.post(
            "/upload",
            files={"file": ("报告.txt", b"data", "text/plain")},
        )
        assert response.status_code == 200
        content_hash = response.json()["hash"]

        for path in (f"/download/{content_hash}", f"/ipfs/{content_hash}"):
            download = client.get(path)

            assert download.status_code == 200
            assert download.content == b"data"
            assert "filename*=UTF-8''%E6%8A%A5%E5%91%8A.txt" in download.headers["content-disposition"]

    def test_health_counts_distinct_files(self, client):
        client.post("/upload", files={"file": ("a.txt", HELLO, "text/plain")})
        client.post("/upload", files={"file": ("b.txt", HELLO, "text/plain")})

        body = client.get("/health").json()

        assert body["stored_files"] == 1
        assert body["uploads_since_start"] == 2


class TestContentDisposition:
    """Test the attachment header builder."""

    def test_ascii_name(self):
        assert content_disposition("test.txt") == (
            "attachment; filename=\"test.txt\"; filename*=UTF-8''test.txt"
        )

    def test_non_ascii_name_encodes_to_latin1(self):
        header = content_disposition("报告.txt")

        header.encode("latin-1")
        assert 'filename="__.txt"' in header
        assert "filename*=UTF-8''%E6%8A%A5%E5%91%8A.txt" in header

    def test_quotes_and_newlines_neutralised(self):
        header = content_disposition('evil".txt\r\nX-Injected: 1')

        assert "\r" not in header
        assert "\n" not in header
        assert 'filename="evil_.txt__X-Injected: 1"' in header
        assert "%22" in header and "%0D%0A" in header
