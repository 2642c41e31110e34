"""Tests for the attachment store."""

import pytest

from paytrack.database.attachments import DEFAULT_MAX_BYTES, AttachmentStore
from paytrack.domain.entities import AttachmentSlot
from paytrack.domain.errors import AttachmentIOError, NotFoundError, ValidationError


@pytest.fixture
def fixed_store(uploads_dir):
    """Store whose clock always returns the same millisecond."""
    return AttachmentStore(uploads_dir, clock=lambda: 1705312800000)


def test_creates_uploads_directory(tmp_path):
    target = tmp_path / "nested" / "uploads"

    store = AttachmentStore(target)

    assert target.is_dir()
    assert store.uploads_dir == target.resolve()
    assert store.max_bytes == DEFAULT_MAX_BYTES == 10 * 1024 * 1024


def test_save_names_file_by_slot_and_timestamp(fixed_store):
    stored = fixed_store.save(b"%PDF", "invoice.pdf", AttachmentSlot.RECEIPT)

    assert stored == "receipt-1705312800000-invoice.pdf"
    assert (fixed_store.uploads_dir / stored).read_bytes() == b"%PDF"


def test_save_accepts_slot_value(fixed_store):
    assert fixed_store.save(b"x", "form.pdf", "request").startswith("request-1705312800000-")


def test_save_same_millisecond_never_collides(fixed_store):
    first = fixed_store.save(b"first", "invoice.pdf", AttachmentSlot.RECEIPT)
    second = fixed_store.save(b"second", "invoice.pdf", AttachmentSlot.RECEIPT)
    third = fixed_store.save(b"third", "invoice.pdf", AttachmentSlot.RECEIPT)

    assert first == "receipt-1705312800000-invoice.pdf"
    assert second == "receipt-1705312800000-1-invoice.pdf"
    assert third == "receipt-1705312800000-2-invoice.pdf"
    assert fixed_store.read(first) == b"first"
    assert fixed_store.read(second) == b"second"
    assert fixed_store.read(third) == b"third"


def test_save_keeps_only_final_path_component(fixed_store):
    stored = fixed_store.save(b"x", "../../etc/passwd", AttachmentSlot.RECEIPT)
    assert stored == "receipt-1705312800000-passwd"

    stored = fixed_store.save(b"x", "C:\\Users\\me\\scan.png", AttachmentSlot.REQUEST)
    assert stored == "request-1705312800000-scan.png"


@pytest.mark.parametrize("name", ["", "   ", "/", "..", "dir/.."])
def test_save_rejects_empty_name(fixed_store, name):
    with pytest.raises(ValidationError) as excinfo:
        fixed_store.save(b"x", name, AttachmentSlot.RECEIPT)
    assert excinfo.value.field == "receipt"


def test_save_rejects_oversized_upload(uploads_dir):
    store = AttachmentStore(uploads_dir, max_bytes=4)

    with pytest.raises(ValidationError, match="exceeds"):
        store.save(b"12345", "big.bin", AttachmentSlot.REQUEST)

    assert list(store.uploads_dir.iterdir()) == []


def test_save_io_failure_raises_attachment_io_error(fixed_store):
    fixed_store.uploads_dir.chmod(0o500)
    try:
        writable_check = fixed_store.uploads_dir / "writable_check"
        try:
            writable_check.touch()
        except PermissionError:
            pass
        else:
            writable_check.unlink()
            pytest.skip("directory permissions are not enforced for this user")

        with pytest.raises(AttachmentIOError):
            fixed_store.save(b"x", "invoice.pdf", AttachmentSlot.RECEIPT)
    finally:
        fixed_store.uploads_dir.chmod(0o700)


class _FailingWriter:
    def __init__(self, fh):
        self._fh = fh

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._fh.close()

    def write(self, data):
        self._fh.write(data[:1])
        raise OSError(28, "No space left on device")


def test_save_write_failure_removes_partial_file(fixed_store, monkeypatch):
    real_open = open
    monkeypatch.setattr(
        "paytrack.database.attachments.open",
        lambda path, mode: _FailingWriter(real_open(path, mode)),
        raising=False,
    )

    with pytest.raises(AttachmentIOError, match="No space left"):
        fixed_store.save(b"%PDF-1.4", "invoice.pdf", AttachmentSlot.RECEIPT)

    assert list(fixed_store.uploads_dir.iterdir()) == []


def test_resolve_rejects_escaping_names(attachments):
    with pytest.raises(ValidationError):
        attachments.resolve("../outside.txt")
    with pytest.raises(ValidationError):
        attachments.resolve("sub/dir.txt")


def test_read_and_exists(attachments):
    stored = attachments.save(b"data", "note.txt", AttachmentSlot.RECEIPT)

    assert attachments.exists(stored)
    assert attachments.read(stored) == b"data"
    assert not attachments.exists("receipt-0-missing.txt")
    with pytest.raises(NotFoundError, match="not found"):
        attachments.read("receipt-0-missing.txt")


def test_delete_removes_file(attachments):
    stored = attachments.save(b"data", "note.txt", AttachmentSlot.RECEIPT)

    assert attachments.delete(stored) is True
    assert not attachments.exists(stored)


def test_delete_absent_file_succeeds(attachments):
    assert attachments.delete("receipt-0-never-existed.txt") is True


def test_delete_failure_is_reported_not_raised(attachments):
    assert attachments.delete("../escape.txt") is False
