"""
Tests for blob storage in CampusShare Server

Covers stored-name generation, the extension allow-list, streaming size
enforcement and best-effort deletion.
"""

import asyncio
import io
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from starlette.datastructures import UploadFile

from errors import UnsupportedType, PayloadTooLarge, NotFound
from file_storage import (
    GenerateStoredName, ValidateFileType, FormatFileSize,
    StoreUpload, GetStoredFile, DeleteStoredFile, ALLOWED_EXTENSIONS
)


def _Upload(name, content, declare_size=True):
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        size=len(content) if declare_size else None
    )


def test_stored_name_keeps_extension_only():
    name = GenerateStoredName("Lecture 1 - Intro.PDF")

    assert name.endswith(".pdf")
    assert "Lecture" not in name
    timestamp, random_part = name[:-len(".pdf")].split("-")
    assert timestamp.isdigit() and random_part.isdigit()


def test_stored_names_do_not_collide():
    names = {GenerateStoredName("notes.txt") for _ in range(1000)}
    assert len(names) == 1000


def test_allowed_extensions():
    for extension in ALLOWED_EXTENSIONS:
        assert ValidateFileType(f"file.{extension}") == extension
    assert ValidateFileType("Slides.PPTX") == "pptx"


@pytest.mark.parametrize("name", ["virus.exe", "script.sh", "noextension", "archive.tar.gz", "pdf"])
def test_rejected_extensions(name):
    with pytest.raises(UnsupportedType):
        ValidateFileType(name)


def test_format_file_size():
    assert FormatFileSize(0) == "0.00 KB"
    assert FormatFileSize(1536) == "1.50 KB"
    assert FormatFileSize(10 * 1024 * 1024) == "10240.00 KB"


def test_store_upload_writes_blob(upload_dir):
    blob = asyncio.run(StoreUpload(_Upload("notes.pdf", b"hello world"), str(upload_dir)))

    assert blob.stored_path.parent == upload_dir
    assert blob.stored_path.read_bytes() == b"hello world"
    assert blob.size_bytes == 11
    assert blob.filetype == "pdf"
    assert blob.original_name == "notes.pdf"


def test_store_upload_rejects_type_before_writing(upload_dir):
    with pytest.raises(UnsupportedType):
        asyncio.run(StoreUpload(_Upload("setup.exe", b"MZ"), str(upload_dir)))

    assert list(upload_dir.iterdir()) == []


def test_store_upload_rejects_declared_oversize(upload_dir):
    with pytest.raises(PayloadTooLarge):
        asyncio.run(StoreUpload(_Upload("big.pdf", b"x" * 101), str(upload_dir), max_size=100))

    assert list(upload_dir.iterdir()) == []


def test_store_upload_rejects_streamed_oversize(upload_dir):
    """Size is enforced while streaming when no size was declared"""
    content = b"x" * (3 * 64 * 1024)
    with pytest.raises(PayloadTooLarge):
        asyncio.run(StoreUpload(_Upload("big.zip", content, declare_size=False), str(upload_dir),
                                max_size=100 * 1024))

    assert list(upload_dir.iterdir()) == []


def test_store_upload_accepts_exact_limit(upload_dir):
    blob = asyncio.run(StoreUpload(_Upload("exact.txt", b"x" * 100), str(upload_dir), max_size=100))
    assert blob.size_bytes == 100


def test_get_stored_file(upload_dir):
    stored = upload_dir / "123-456.pdf"
    stored.write_bytes(b"data")

    assert GetStoredFile(str(stored)) == stored.resolve()

    with pytest.raises(NotFound):
        GetStoredFile(str(upload_dir / "missing.pdf"))

    with pytest.raises(NotFound):
        GetStoredFile(str(upload_dir))


def test_delete_stored_file_is_best_effort(upload_dir):
    stored = upload_dir / "123-456.pdf"
    stored.write_bytes(b"data")

    assert DeleteStoredFile(stored) is True
    assert not stored.exists()

    # Already gone is not an error
    assert DeleteStoredFile(stored) is True


def test_delete_stored_file_failure_is_logged(upload_dir, caplog):
    """A directory cannot be unlinked; the failure is reported, not raised"""
    directory = upload_dir / "not-a-file"
    directory.mkdir()

    assert DeleteStoredFile(directory) is False
    assert "Failed to delete stored file" in caplog.text
