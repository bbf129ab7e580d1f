# ABOUTME: Tests for flat JSON persistence of the dataset and chart configuration
# ABOUTME: Validates file format, directory creation and non-fatal public mirroring

from unittest.mock import patch

from villain_timeline.persistence import ensure_directories, mirror_to_public, read_json, write_json


class TestWriteJson:
    """Test JSON file writing."""

    def test_pretty_printed_with_trailing_newline(self, tmp_path):
        path = write_json(tmp_path / "villains.json", {"series": "Test", "stats": {"totalVillains": 0}})

        assert path.read_text(encoding="utf-8") == '{\n  "series": "Test",\n  "stats": {\n    "totalVillains": 0\n  }\n}\n'

    def test_non_ascii_kept_verbatim(self, tmp_path):
        path = write_json(tmp_path / "villains.json", {"name": "Señor Suerte"})

        assert "Señor Suerte" in path.read_text(encoding="utf-8")

    def test_creates_parent_directory(self, tmp_path):
        path = write_json(tmp_path / "nested" / "data" / "chart-config.json", {"data": []})

        assert path.exists()

    def test_read_back(self, tmp_path):
        payload = {"villains": [{"id": "vulture", "appearances": [2, 7]}]}
        path = write_json(tmp_path / "villains.json", payload)

        assert read_json(path) == payload


class TestEnsureDirectories:
    def test_creates_missing(self, tmp_path):
        data_dir = tmp_path / "data"
        public_dir = tmp_path / "public" / "data"

        ensure_directories(data_dir, public_dir)

        assert data_dir.is_dir()
        assert public_dir.is_dir()

    def test_existing_directory_untouched(self, tmp_path):
        (tmp_path / "keep.txt").write_text("x")

        ensure_directories(tmp_path)

        assert (tmp_path / "keep.txt").read_text() == "x"


class TestMirrorToPublic:
    """Test copying outputs into the public data directory."""

    def test_copies_files(self, tmp_path):
        villains = write_json(tmp_path / "data" / "villains.json", {"villains": []})
        chart = write_json(tmp_path / "data" / "chart-config.json", {"data": []})
        public_dir = tmp_path / "public" / "data"

        copied = mirror_to_public([villains, chart], public_dir)

        assert copied == [public_dir / "villains.json", public_dir / "chart-config.json"]
        assert read_json(public_dir / "villains.json") == {"villains": []}

    def test_missing_source_is_skipped(self, tmp_path):
        existing = write_json(tmp_path / "data" / "villains.json", {"villains": []})
        missing = tmp_path / "data" / "chart-config.json"

        copied = mirror_to_public([missing, existing], tmp_path / "public")

        assert copied == [tmp_path / "public" / "villains.json"]

    def test_unwritable_public_dir_is_not_fatal(self, tmp_path):
        villains = write_json(tmp_path / "villains.json", {"villains": []})

        with patch("villain_timeline.persistence.json_store.ensure_directories", side_effect=PermissionError("denied")):
            copied = mirror_to_public([villains], tmp_path / "public")

        assert copied == []
