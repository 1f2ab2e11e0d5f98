"""Uploaded workbooks are deleted whatever the import outcome."""

import pytest

from ledger_kernel.exceptions import UnsupportedFileTypeError

from ledger_ingestion.domain.types import ErrorKind, ImportStatus
from ledger_ingestion.services.import_service import LedgerImportService
from ledger_ingestion.services.upload import import_uploaded_workbook, staged_upload


@pytest.fixture
def import_service(session, deterministic_clock):
    return LedgerImportService(session, clock=deterministic_clock)


class TestStagedUpload:
    def test_file_removed_after_block(self, tmp_path):
        path = tmp_path / "upload.xlsx"
        path.write_bytes(b"x")

        with staged_upload(path) as staged:
            assert staged.exists()

        assert not path.exists()

    def test_file_removed_when_block_raises(self, tmp_path):
        path = tmp_path / "upload.xlsx"
        path.write_bytes(b"x")

        with pytest.raises(RuntimeError):
            with staged_upload(path):
                raise RuntimeError("boom")

        assert not path.exists()

    def test_unsupported_suffix_is_rejected_and_removed(self, tmp_path):
        path = tmp_path / "upload.csv"
        path.write_text("a,b\n")

        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            with staged_upload(path):
                pytest.fail("block must not run")

        assert exc_info.value.code == "UNSUPPORTED_FILE_TYPE"
        assert not path.exists()

    def test_suffix_check_ignores_case(self, tmp_path):
        path = tmp_path / "UPLOAD.XLSX"
        path.write_bytes(b"x")

        with staged_upload(path) as staged:
            assert staged == path

    def test_missing_file_is_not_an_error_on_cleanup(self, tmp_path):
        with staged_upload(tmp_path / "gone.xlsx"):
            pass


class TestImportUploadedWorkbook:
    def test_successful_import_deletes_upload(self, import_service, write_workbook, test_actor_id):
        path = write_workbook([
            ["101-001-001-001-01", "Caja"],
            ["Segmento SEG-1"],
            ["31/Jul/2025", "Egresos", 1, "ACME", "R", 10],
        ])

        result = import_uploaded_workbook(import_service, path, test_actor_id)

        assert result.status == ImportStatus.COMPLETED
        assert result.movements_created == 1
        assert not path.exists()

    def test_aborted_import_deletes_upload(self, import_service, write_workbook, test_actor_id):
        path = write_workbook([["101-001-001-001-01", "Caja"]], company="")

        result = import_uploaded_workbook(import_service, path, test_actor_id)

        assert result.errors[0].kind == ErrorKind.MISSING_COMPANY
        assert not path.exists()

    def test_unreadable_upload_deletes_upload(self, import_service, tmp_path, test_actor_id):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip archive")

        result = import_uploaded_workbook(import_service, path, test_actor_id)

        assert result.status == ImportStatus.ABORTED
        assert result.errors[0].kind == ErrorKind.MALFORMED_WORKBOOK
        assert not path.exists()
