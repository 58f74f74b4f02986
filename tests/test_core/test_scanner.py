"""
Tests for mediashrink.core.scanner module.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from mediashrink.core.classifier import Classifier
from mediashrink.core.config import MediaTypes
from mediashrink.core.errors import ErrorKind, NotAFileError, NotFoundError, ScanIOError, UnsupportedTypeError
from mediashrink.core.models import MediaType
from mediashrink.core.scanner import Scanner, scan_one, scan_tree
from tests.test_utils.fixtures import create_test_directory_structure


@pytest.mark.unit
class TestScanTree:
    """Tests for recursive scanning."""

    def test_includes_only_media(self, source_dir):
        (source_dir / "a.png").write_bytes(b"p" * 100)
        (source_dir / "b.mp4").write_bytes(b"v" * 300)
        (source_dir / "c.txt").write_bytes(b"t" * 50)
        (source_dir / "noext").write_bytes(b"n")

        files = scan_tree(source_dir)

        assert [f.relative_name for f in files] == ["a.png", "b.mp4"]
        assert [f.media_type for f in files] == [MediaType.IMAGE, MediaType.VIDEO]

    def test_sizes_match_disk(self, source_dir):
        (source_dir / "a.jpg").write_bytes(b"x" * 1234)
        (source_dir / "b.webm").write_bytes(b"")

        files = scan_tree(source_dir)

        for descriptor in files:
            assert descriptor.size == os.path.getsize(descriptor.path)

    def test_recursive_relative_names(self, source_dir):
        create_test_directory_structure(
            source_dir, ["top.gif", "sub/inner.mov", "sub/deeper/x.BMP", "sub/notes.md", "empty/"]
        )

        files = scan_tree(source_dir)

        names = [f.relative_name for f in files]
        # Top-down: a directory's own files come before its subdirectories
        assert names == [
            "top.gif",
            str(Path("sub") / "inner.mov"),
            str(Path("sub") / "deeper" / "x.BMP"),
        ]

    def test_descriptor_fields(self, source_dir):
        (source_dir / "IMG.JPG").write_bytes(b"x" * 10)

        (descriptor,) = scan_tree(source_dir)

        assert descriptor.path.is_absolute()
        assert descriptor.path == (source_dir / "IMG.JPG").absolute()
        assert descriptor.extension == "jpg"
        assert descriptor.media_type is MediaType.IMAGE
        assert descriptor.size == 10

    def test_case_insensitive_extensions(self, source_dir):
        (source_dir / "IMG.JPG").touch()
        (source_dir / "img.jpg").touch()

        files = scan_tree(source_dir)

        assert len(files) == 2
        assert all(f.media_type is MediaType.IMAGE for f in files)

    def test_deterministic_order(self, source_dir):
        for name in ["c.png", "a.png", "b.png"]:
            (source_dir / name).touch()

        assert [f.relative_name for f in scan_tree(source_dir)] == ["a.png", "b.png", "c.png"]

    def test_empty_directory(self, source_dir):
        assert scan_tree(source_dir) == []

    def test_missing_root(self, temp_dir):
        with pytest.raises(ScanIOError) as exc_info:
            scan_tree(temp_dir / "missing")

        assert exc_info.value.kind is ErrorKind.IO_ERROR

    def test_root_is_file(self, sample_video):
        with pytest.raises(ScanIOError):
            scan_tree(sample_video)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlinks_skipped(self, source_dir, temp_dir):
        outside = temp_dir / "outside"
        outside.mkdir()
        (outside / "linked.png").touch()
        (source_dir / "real.png").touch()
        try:
            os.symlink(outside / "linked.png", source_dir / "file_link.png")
            os.symlink(outside, source_dir / "dir_link", target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks")

        files = scan_tree(source_dir)

        assert [f.relative_name for f in files] == ["real.png"]

    def test_metadata_failure_aborts_scan(self, source_dir):
        (source_dir / "a.png").touch()
        (source_dir / "b.png").touch()

        with patch.object(Path, "lstat", side_effect=FileNotFoundError("gone")):
            with pytest.raises(ScanIOError, match="metadata"):
                scan_tree(source_dir)

    def test_walk_failure_aborts_scan(self, source_dir):
        def _failing_walk(top, onerror=None, followlinks=False):
            onerror(PermissionError(13, "denied", str(top)))
            return iter(())

        with patch("mediashrink.core.scanner.os.walk", side_effect=_failing_walk):
            with pytest.raises(ScanIOError) as exc_info:
                scan_tree(source_dir)

        assert isinstance(exc_info.value.cause, PermissionError)

    def test_custom_classifier(self, source_dir):
        (source_dir / "a.png").touch()
        (source_dir / "b.tiff").touch()
        scanner = Scanner(Classifier(MediaTypes(images={"tiff"}, videos=set())))

        assert [f.relative_name for f in scanner.scan_tree(source_dir)] == ["b.tiff"]


@pytest.mark.unit
class TestScanOne:
    """Tests for single-file scanning."""

    def test_image(self, sample_image_png):
        descriptor = scan_one(sample_image_png)

        assert descriptor.relative_name == "test_image.png"
        assert descriptor.media_type is MediaType.IMAGE
        assert descriptor.extension == "png"
        assert descriptor.size == sample_image_png.stat().st_size

    def test_video(self, sample_video):
        descriptor = scan_one(str(sample_video))

        assert descriptor.media_type is MediaType.VIDEO
        assert descriptor.size == 2048

    def test_not_found(self, temp_dir):
        with pytest.raises(NotFoundError) as exc_info:
            scan_one(temp_dir / "nope.png")

        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert exc_info.value.path == temp_dir / "nope.png"

    def test_directory(self, source_dir):
        with pytest.raises(NotAFileError) as exc_info:
            scan_one(source_dir)

        assert exc_info.value.kind is ErrorKind.NOT_A_FILE

    def test_unsupported(self, temp_dir):
        path = temp_dir / "notes.txt"
        path.write_text("hello")

        with pytest.raises(UnsupportedTypeError) as exc_info:
            scan_one(path)

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_TYPE
