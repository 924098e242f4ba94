"""Tests for the command line tool."""

import json

from design_engine.main import main, parse_override


class TestCli:
    def test_writes_scene_json(self, tmp_path):
        html = tmp_path / "page.html"
        html.write_text("<h1>Title</h1><p class='lead'>Body</p>")
        css = tmp_path / "page.css"
        css.write_text(".lead { color: red }")
        output = tmp_path / "scene.json"

        code = main([str(html), "--css", str(css), "--output", str(output),
                     "--config", str(tmp_path / "config.json")])

        assert code == 0
        scene = json.loads(output.read_text())
        root = scene["nodes"][0]
        assert root["name"] == "HTML to Design"
        assert [child["characters"] for child in root["children"]] == ["Title", "Body"]
        assert root["children"][1]["fills"][0]["color"] == {"r": 1.0, "g": 0.0, "b": 0.0}
        assert scene["selection"] == [root["id"]]

    def test_prints_to_stdout(self, tmp_path, capsys):
        html = tmp_path / "page.html"
        html.write_text("<p>Hi</p>")
        assert main([str(html), "--config", str(tmp_path / "config.json")]) == 0
        scene = json.loads(capsys.readouterr().out)
        assert scene["nodes"][0]["children"][0]["characters"] == "Hi"

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "absent.html")]) == 1

    def test_set_overrides_config(self, tmp_path):
        html = tmp_path / "page.html"
        html.write_text("<p>Hi</p>")
        output = tmp_path / "scene.json"

        code = main([str(html), "--output", str(output), "--config", str(tmp_path / "config.json"),
                     "--set", "root_frame.name=Imported", "--set", "root_frame.padding=4"])

        assert code == 0
        root = json.loads(output.read_text())["nodes"][0]
        assert root["name"] == "Imported"
        assert root["padding"] == [4, 4, 4, 4]

    def test_write_config_without_input(self, tmp_path):
        path = tmp_path / "conf" / "config.json"
        assert main(["--config", str(path), "--write-config", "--set", "layout.stack_gap=30"]) == 0

        saved = json.loads(path.read_text())
        assert saved["layout"]["stack_gap"] == 30
        assert saved["fonts"]["family"] == "Inter"

    def test_invalid_override(self, tmp_path):
        assert main(["--config", str(tmp_path / "c.json"), "--write-config", "--set", "no-equals"]) == 1
        assert not (tmp_path / "c.json").exists()


class TestParseOverride:
    def test_json_values(self):
        assert parse_override("layout.stack_gap=30") == ("layout.stack_gap", 30)
        assert parse_override("flag=true") == ("flag", True)

    def test_plain_strings(self):
        assert parse_override("fonts.family=Roboto Mono") == ("fonts.family", "Roboto Mono")
