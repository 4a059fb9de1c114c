"""Tests for export routing and fallbacks."""
import os

from draftkit.export_options import ExportOptions
from draftkit.exporter import FAILED_MESSAGE, DocumentExporter
from draftkit.print_preview import PrintPreviewExporter

TEXT_DOC = "# Notes\n\nJust text."
IMAGE_DOC = "# Trip\n\n![Beach](beach.png)"


def preview(tmp_path, opens=True):
    return PrintPreviewExporter(
        output_dir=str(tmp_path / "html"),
        opener=lambda url: opens,
        image_probe=lambda src: True,
    )


def blocked_dir(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    return str(blocker)


class TestRouting:
    def test_text_document_downloads(self, tmp_path):
        exporter = DocumentExporter(str(tmp_path / "out"), print_preview=preview(tmp_path))
        result = exporter.export(TEXT_DOC, ExportOptions(title="My Notes"))

        assert result.status == "download"
        assert result.is_download
        assert result.pdf_path == str(tmp_path / "out" / "my-notes.pdf")
        with open(result.pdf_path, "rb") as f:
            assert f.read().startswith(b"%PDF-1.4")

    def test_image_document_prints(self, tmp_path):
        exporter = DocumentExporter(str(tmp_path / "out"), print_preview=preview(tmp_path))
        result = exporter.export(IMAGE_DOC, ExportOptions(title="Trip"))

        assert result.is_print
        assert os.path.exists(result.html_path)
        assert not os.path.exists(tmp_path / "out" / "trip.pdf")

    def test_image_document_falls_back_to_download(self, tmp_path):
        exporter = DocumentExporter(str(tmp_path / "out"), print_preview=preview(tmp_path, opens=False))
        result = exporter.export(IMAGE_DOC, ExportOptions(title="Trip"))

        assert result.status == "download"
        assert os.path.exists(result.pdf_path)

    def test_text_document_falls_back_to_print(self, tmp_path):
        exporter = DocumentExporter(blocked_dir(tmp_path), print_preview=preview(tmp_path))
        assert exporter.export(TEXT_DOC).status == "print"

    def test_both_paths_fail(self, tmp_path):
        exporter = DocumentExporter(blocked_dir(tmp_path), print_preview=preview(tmp_path, opens=False))
        result = exporter.export(TEXT_DOC)

        assert result.is_failed
        assert result.status_message == FAILED_MESSAGE

    def test_crashing_print_preview_falls_back_to_download(self, tmp_path):
        def crash(url):
            raise RuntimeError("no display")

        exporter = DocumentExporter(
            str(tmp_path / "out"),
            print_preview=PrintPreviewExporter(
                output_dir=str(tmp_path / "html"), opener=crash, image_probe=lambda src: True
            ),
        )
        result = exporter.export(IMAGE_DOC, ExportOptions(title="Trip"))

        assert result.status == "download"
        assert os.path.exists(result.pdf_path)

    def test_unencodable_page_falls_back_to_download(self, tmp_path):
        exporter = DocumentExporter(str(tmp_path / "out"), print_preview=preview(tmp_path))
        result = exporter.export("caf\ud800\n![a](b.png)", ExportOptions(title="Cafe"))

        assert result.status == "download"
        assert os.path.exists(result.pdf_path)

    def test_default_title_file_name(self, tmp_path):
        exporter = DocumentExporter(str(tmp_path), print_preview=preview(tmp_path))
        assert exporter.download_pdf("", ExportOptions()) == str(tmp_path / "draft-export.pdf")

    def test_download_failure_returns_none(self, tmp_path):
        exporter = DocumentExporter(blocked_dir(tmp_path), print_preview=preview(tmp_path))
        assert exporter.download_pdf(TEXT_DOC, ExportOptions()) is None


def test_progress_reported(tmp_path):
    steps = []
    exporter = DocumentExporter(
        str(tmp_path),
        print_preview=preview(tmp_path),
        progress_callback=lambda p, d: steps.append(p),
    )
    exporter.export(TEXT_DOC)

    assert steps[0] == 0.05
    assert steps[-1] == 1.0
