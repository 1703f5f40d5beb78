"""
Tests for the offset-border command line entry point.
"""

import json

import fitz
import pytest

from offset_border.cli import build_parser, main
from offset_border.settings import SETTINGS_KEY


@pytest.fixture
def scene_file(tmp_path):
    path = tmp_path / "scene.json"
    path.write_text(json.dumps({
        "name": "Page 1",
        "selection": ["a", "b"],
        "children": [
            {"id": "a", "type": "RECTANGLE", "name": "A", "x": 0, "y": 0, "width": 100, "height": 50},
            {"id": "b", "type": "RECTANGLE", "name": "B", "x": 300, "y": 0, "width": 50, "height": 100},
        ],
    }), encoding="utf-8")
    return path


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "settings.json"


class TestCli:
    """Tests for main()."""

    def test_main_when_apply_then_writes_grouped_scene(self, scene_file, settings_file, tmp_path):
        # Arrange
        output = tmp_path / "bordered.json"

        # Act
        code = main(["apply", str(scene_file), "--settings", str(settings_file), "--output", str(output)])

        # Assert
        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert [c["type"] for c in data["children"]] == ["GROUP", "GROUP"]
        assert data["children"][0]["name"] == "A + border"
        assert len(data["selection"]) == 2

    def test_main_when_no_output_then_overwrites_scene(self, scene_file, settings_file):
        main(["apply", str(scene_file), "--settings", str(settings_file)])

        data = json.loads(scene_file.read_text(encoding="utf-8"))
        assert data["children"][0]["type"] == "GROUP"

    def test_main_when_master_with_pdf_then_renders_pages(self, scene_file, settings_file, tmp_path):
        pdf_path = tmp_path / "pages.pdf"
        preview_path = tmp_path / "preview.png"

        code = main([
            "master", str(scene_file),
            "--settings", str(settings_file),
            "--pdf", str(pdf_path),
            "--preview", str(preview_path),
            "--chunk-size", "1",
        ])

        assert code == 0
        with fitz.open(pdf_path) as pdf:
            assert pdf.page_count == 1
        assert preview_path.exists()

    def test_main_when_config_save_message_then_persists(self, scene_file, settings_file, capsys):
        message = json.dumps({"type": "save", "settings": {"gap": 12}})

        code = main(["config", str(scene_file), "--settings", str(settings_file), "--message", message])

        assert code == 0
        saved = json.loads(settings_file.read_text(encoding="utf-8"))
        assert saved[SETTINGS_KEY]["gap"] == 12
        printed = json.loads(capsys.readouterr().out.strip())
        assert printed["type"] == "load"

    def test_main_when_config_message_invalid_then_returns_error(self, scene_file, settings_file):
        code = main(["config", str(scene_file), "--settings", str(settings_file), "--message", "{oops"])
        assert code == 1

    def test_main_when_scene_missing_then_returns_error(self, tmp_path, settings_file):
        code = main(["apply", str(tmp_path / "missing.json"), "--settings", str(settings_file)])
        assert code == 1

    def test_main_when_scene_field_not_numeric_then_returns_error(self, tmp_path, settings_file, caplog):
        scene = tmp_path / "bad.json"
        scene.write_text(json.dumps({"children": [
            {"type": "RECTANGLE", "width": 10, "height": 10, "strokeWeight": "thick"},
        ]}), encoding="utf-8")

        code = main(["apply", str(scene), "--settings", str(settings_file)])

        assert code == 1
        assert "Cannot load scene" in caplog.text

    def test_main_when_chunk_size_zero_then_exits(self, scene_file):
        with pytest.raises(SystemExit):
            main(["apply", str(scene_file), "--chunk-size", "0"])

    def test_parser_when_unknown_command_then_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["explode", "scene.json"])
