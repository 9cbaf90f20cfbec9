"""Tests for package stage -- output tree, file copies, and zip archives."""

import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from catalog_packager.errors import ArchiveError, CopyError
from catalog_packager.models import MediaKind, freeze_collection
from catalog_packager.stages.package import (
    create_output_dir,
    create_zip,
    move_file,
    package_collection,
)
from catalog_packager.stages.scan import build_media_file


@pytest.fixture
def source_dir(tmp_path):
    src = tmp_path / "files" / "SKU1"
    src.mkdir(parents=True)
    (src / "1 Song.wav").write_bytes(b"RIFF-song")
    (src / "2 Other.mp3").write_bytes(b"ID3-other")
    (src / "cover.jpg").write_bytes(b"JPEG")
    return src


@pytest.fixture
def media_files(source_dir):
    artists = {"SKU1": "DJ X"}
    return tuple(
        build_media_file(source_dir / name, "SKU1", kind, artists)
        for name, kind in [
            ("1 Song.wav", MediaKind.AUDIO),
            ("2 Other.mp3", MediaKind.AUDIO),
            ("cover.jpg", MediaKind.IMAGE),
        ]
    )


@pytest.fixture
def output_dir(tmp_path):
    return create_output_dir(tmp_path, "files-data-test")


class TestCreateOutputDir:
    def test_creates_subfolders(self, tmp_path):
        out = create_output_dir(tmp_path, "files-data-x")
        assert out == tmp_path / "files-data-x"
        assert (out / "EP").is_dir()
        assert (out / "wav").is_dir()

    def test_existing_is_tolerated(self, tmp_path):
        create_output_dir(tmp_path, "files-data-x")
        out = create_output_dir(tmp_path, "files-data-x")
        assert (out / "EP").is_dir()


class TestMoveFile:
    def test_audio_uses_slug_name(self, output_dir, media_files):
        dest = move_file(output_dir, media_files[0])
        assert dest == output_dir / "wav" / "SKU1" / "DJ-X---1-Song---SKU1.wav"
        assert dest.read_bytes() == b"RIFF-song"

    def test_image_keeps_name(self, output_dir, media_files):
        dest = move_file(output_dir, media_files[2])
        assert dest == output_dir / "wav" / "SKU1" / "cover.jpg"

    def test_source_untouched(self, output_dir, media_files):
        move_file(output_dir, media_files[0])
        assert media_files[0].path.exists()
        assert media_files[0].path.read_bytes() == b"RIFF-song"

    def test_existing_destination_dir_ok(self, output_dir, media_files):
        (output_dir / "wav" / "SKU1").mkdir(parents=True)
        move_file(output_dir, media_files[0])
        move_file(output_dir, media_files[1])
        assert len(list((output_dir / "wav" / "SKU1").iterdir())) == 2

    def test_missing_source_raises_copy_error(self, output_dir, media_files):
        media_files[0].path.unlink()
        with pytest.raises(CopyError) as exc_info:
            move_file(output_dir, media_files[0])
        assert exc_info.value.sku == "SKU1"
        assert exc_info.value.path == media_files[0].path


class TestCreateZip:
    def test_entries_in_order_with_canonical_names(self, output_dir, media_files):
        zip_path = create_zip(output_dir, "SKU1", media_files)
        assert zip_path == output_dir / "EP" / "SKU1.zip"
        with zipfile.ZipFile(zip_path) as zf:
            assert zf.namelist() == [
                "DJ X - 1 Song - SKU1.wav",
                "DJ X - 2 Other - SKU1.mp3",
                "cover.jpg",
            ]
            assert zf.read("cover.jpg") == b"JPEG"

    def test_deflated(self, output_dir, media_files):
        zip_path = create_zip(output_dir, "SKU1", media_files)
        with zipfile.ZipFile(zip_path) as zf:
            assert all(i.compress_type == zipfile.ZIP_DEFLATED for i in zf.infolist())

    def test_missing_entry_aborts_archive(self, output_dir, media_files):
        media_files[1].path.unlink()
        with pytest.raises(ArchiveError) as exc_info:
            create_zip(output_dir, "SKU1", media_files)
        assert exc_info.value.sku == "SKU1"
        assert exc_info.value.path == media_files[1].path
        assert not (output_dir / "EP" / "SKU1.zip").exists()


class TestPackageCollection:
    def test_copies_before_zipping(self, output_dir, media_files):
        calls = []
        collection = freeze_collection({"SKU1": media_files})
        with patch(
            "catalog_packager.stages.package.move_file",
            side_effect=lambda root, f: calls.append(("copy", f.name)),
        ), patch(
            "catalog_packager.stages.package.create_zip",
            side_effect=lambda root, sku, files: calls.append(("zip", sku)) or Path(sku),
        ):
            package_collection(output_dir, collection)
        assert calls == [
            ("copy", "1 Song.wav"),
            ("copy", "2 Other.mp3"),
            ("copy", "cover.jpg"),
            ("zip", "SKU1"),
        ]

    def test_writes_outputs(self, output_dir, media_files):
        archives = package_collection(output_dir, freeze_collection({"SKU1": media_files}))
        assert archives == [output_dir / "EP" / "SKU1.zip"]
        assert (output_dir / "wav" / "SKU1" / "DJ-X---2-Other---SKU1.mp3").exists()
