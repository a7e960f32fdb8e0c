"""
Tests: CLI entry points (extract / check / demo).

Run with:
    pytest part450_portal/tests/test_cli.py -v
"""

import importlib
import json

import pytest
from part450_portal.main import check_file, cli, run


class TestCli:
    def test_demo_report(self):
        report = run("")
        assert report.passed is True
        assert report.score == 100

    def test_extract_file(self, tmp_path):
        path = tmp_path / "mission.txt"
        path.write_text("MISSION OBJECTIVE\nLand.\n", encoding="utf-8")
        report = run(str(path))
        assert report.score == 0
        assert "missionObjective" in {i.field.value for i in report.issues}

    def test_check_json(self, tmp_path):
        path = tmp_path / "fields.json"
        path.write_text(json.dumps({"launchSite": "Kennedy Space Center"}), encoding="utf-8")
        report = check_file(str(path))
        assert "launchSite" not in {i.field.value for i in report.issues}

    def test_check_rejects_non_object(self, tmp_path):
        path = tmp_path / "fields.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            check_file(str(path))

    def test_cli_dispatch(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr("part450_portal.main.run", lambda path="": calls.append(("run", path)))
        monkeypatch.setattr("part450_portal.main.check_file", lambda path: calls.append(("check", path)))
        cli(["prog"])
        cli(["prog", "extract", "m.txt"])
        cli(["prog", "check", "f.json"])
        assert calls == [("run", ""), ("run", "m.txt"), ("check", "f.json")]

    def test_module_entry_point_uses_cli(self):
        module = importlib.import_module("part450_portal.__main__")
        assert module.cli is cli
