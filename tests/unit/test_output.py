"""Unit tests for download_artifact()."""

import pytest

from resumetyp.contexts.rendering import output
from resumetyp.contexts.rendering.output import download_artifact


@pytest.mark.unit
def test_writes_bytes(tmp_path):
    path = download_artifact(b"%PDF-1.7", filename="cv.pdf", output_dir=tmp_path)
    assert path == tmp_path / "cv.pdf"
    assert path.read_bytes() == b"%PDF-1.7"


@pytest.mark.unit
def test_default_filename(tmp_path):
    path = download_artifact(b"%PDF", output_dir=tmp_path)
    assert path.name == "resume.pdf"


@pytest.mark.unit
def test_text_payload_encoded_as_utf8(tmp_path):
    path = download_artifact("<svg>é</svg>", filename="resume.svg", output_dir=tmp_path)
    assert path.read_bytes() == "<svg>é</svg>".encode("utf-8")


@pytest.mark.unit
def test_directory_parts_in_filename_ignored(tmp_path):
    path = download_artifact(b"x", filename="../../escape.pdf", output_dir=tmp_path)
    assert path == tmp_path / "escape.pdf"


@pytest.mark.unit
def test_overwrites_and_leaves_no_partial_files(tmp_path):
    download_artifact(b"old", output_dir=tmp_path)
    download_artifact(b"new", output_dir=tmp_path)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["resume.pdf"]
    assert (tmp_path / "resume.pdf").read_bytes() == b"new"


@pytest.mark.unit
def test_creates_missing_directory(tmp_path):
    path = download_artifact(b"x", output_dir=tmp_path / "nested" / "dir")
    assert path.exists()


@pytest.mark.unit
def test_default_directory_is_dated(tmp_path, monkeypatch):
    monkeypatch.setattr(output, "RESULTS_PATH", tmp_path)
    monkeypatch.setattr(output, "today", lambda: "2026-01-02")
    path = download_artifact(b"x")
    assert path == tmp_path / "2026-01-02" / "resume.pdf"


@pytest.mark.unit
def test_failed_write_removes_partial_file(tmp_path, monkeypatch):
    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(output.os, "replace", broken_replace)
    with pytest.raises(OSError, match="disk full"):
        download_artifact(b"x", output_dir=tmp_path)
    assert list(tmp_path.iterdir()) == []
