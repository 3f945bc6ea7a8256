from __future__ import annotations

import io
import threading
from pathlib import Path

from storefront.errors import NO_FILE, ErrorKind
from storefront.uploads import IncomingFile, UploadHandler


def test_receive_writes_full_stream_under_generated_name(tmp_path: Path) -> None:
    handler = UploadHandler(tmp_path / "uploads", clock=lambda: 1_700_000_000.123)
    payload = b"\x89PNG" + b"\x00" * 4096

    result = handler.receive(IncomingFile(filename="front door.png", stream=io.BytesIO(payload)))

    assert result.ok
    stored = result.value
    assert stored.name.startswith("1700000000123-")
    assert stored.name.endswith(".png")
    assert stored.url == f"/uploads/{stored.name}"
    assert stored.size == len(payload)
    assert stored.path.read_bytes() == payload


def test_receive_creates_directory_idempotently(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "uploads"
    handler = UploadHandler(target)

    handler.ensure_directory()
    handler.ensure_directory()
    result = handler.receive(IncomingFile(filename="a.jpg", stream=io.BytesIO(b"a")))

    assert result.ok
    assert target.is_dir()


def test_receive_without_file_is_no_file_error(tmp_path: Path) -> None:
    handler = UploadHandler(tmp_path)

    missing = handler.receive(None)
    unnamed = handler.receive(IncomingFile(filename="", stream=io.BytesIO(b"x")))

    assert missing.error.kind is ErrorKind.VALIDATION
    assert missing.error.reason == NO_FILE
    assert unnamed.error.reason == NO_FILE


def test_unsafe_extension_is_dropped(tmp_path: Path) -> None:
    handler = UploadHandler(tmp_path)

    assert "." not in handler.generate_name("archive.tar.g z")
    assert handler.generate_name("../../etc/passwd").count("/") == 0
    assert handler.generate_name("photo.JPG").endswith(".JPG")


def test_same_instant_uploads_get_distinct_names(tmp_path: Path) -> None:
    handler = UploadHandler(tmp_path, clock=lambda: 1_700_000_000.0)
    barrier = threading.Barrier(8)
    names: list[str] = []
    lock = threading.Lock()

    def upload(index: int) -> None:
        barrier.wait()
        result = handler.receive(IncomingFile(filename="img.jpg", stream=io.BytesIO(str(index).encode())))
        with lock:
            names.append(result.value.name)

    threads = [threading.Thread(target=upload, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(set(names)) == 8
    assert sorted(path.name for path in tmp_path.iterdir()) == sorted(names)
    contents = sorted((tmp_path / name).read_bytes() for name in names)
    assert contents == sorted(str(i).encode() for i in range(8))


def test_name_collision_regenerates_instead_of_overwriting(tmp_path: Path, monkeypatch) -> None:
    handler = UploadHandler(tmp_path, clock=lambda: 1.0)
    (tmp_path / "1000-aaaa.jpg").write_bytes(b"original")
    generated = iter(["aaaa", "bbbb"])
    monkeypatch.setattr("storefront.uploads.secrets.token_hex", lambda _n: next(generated))

    result = handler.receive(IncomingFile(filename="new.jpg", stream=io.BytesIO(b"new")))

    assert result.value.name == "1000-bbbb.jpg"
    assert (tmp_path / "1000-aaaa.jpg").read_bytes() == b"original"
    assert (tmp_path / "1000-bbbb.jpg").read_bytes() == b"new"
