import io
import re

import pytest

from docextract.config import Settings
from docextract.core.exceptions import FileTooLargeError
from docextract.services.upload_storage import UploadStorage, make_temp_name


class TestTempNames:
    def test_name_format(self):
        assert re.fullmatch(r"\d{13}-\d{1,10}\.pdf", make_temp_name("Scan 01.PDF"))

    def test_no_extension(self):
        assert re.fullmatch(r"\d{13}-\d{1,10}", make_temp_name("README"))
        assert re.fullmatch(r"\d{13}-\d{1,10}", make_temp_name(None))

    def test_names_do_not_collide(self):
        names = {make_temp_name("a.png") for _ in range(200)}
        assert len(names) == 200


class TestUploadStorage:
    def test_save_creates_directory(self, tmp_path):
        storage = UploadStorage(tmp_path / "nested" / "uploads", max_bytes=100, chunk_size=4)
        destination = storage.path_for("a.png")

        written = storage.save(io.BytesIO(b"0123456789"), destination)

        assert written == 10
        assert destination.read_bytes() == b"0123456789"

    def test_save_enforces_limit(self, tmp_path):
        storage = UploadStorage(tmp_path, max_bytes=2 * 1024 * 1024, chunk_size=1024 * 1024)
        destination = storage.path_for("big.png")

        with pytest.raises(FileTooLargeError) as exc_info:
            storage.save(io.BytesIO(b"x" * (2 * 1024 * 1024 + 1)), destination)

        assert exc_info.value.message == "File size is too large. Max limit is 2MB."
        assert exc_info.value.status_code == 400

    def test_delete_is_idempotent(self, tmp_path):
        storage = UploadStorage(tmp_path, max_bytes=100)
        path = tmp_path / "gone.png"
        path.write_bytes(b"x")

        storage.delete(path)
        storage.delete(path)

        assert not path.exists()


class TestDefaultLimit:
    def test_default_limit_is_20mb(self, tmp_path):
        settings = Settings(upload_dir=tmp_path)

        assert settings.max_file_size_mb == 20
        assert settings.max_file_size_bytes == 20 * 1024 * 1024

    def test_default_limit_message(self, tmp_path):
        settings = Settings(upload_dir=tmp_path)
        storage = UploadStorage(tmp_path, max_bytes=settings.max_file_size_bytes)
        destination = storage.path_for("scan.pdf")

        with pytest.raises(FileTooLargeError) as exc_info:
            storage.save(io.BytesIO(b"x" * (settings.max_file_size_bytes + 1)), destination)

        assert exc_info.value.message == "File size is too large. Max limit is 20MB."
