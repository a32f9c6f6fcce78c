# tests/auditor/test_cli.py
import json

import pytest

from a11y_auditor.cli import main
from a11y_auditor.managers.config_manager import config_manager
from a11y_auditor.utils.path_utils import PathUtils


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(
        "<header></header><main><h1>T</h1><h3>S</h3><button></button>"
        "<p style='color:#eeeeee'>vaag</p></main><footer></footer>",
        encoding="utf-8",
    )
    return path


def test_no_arguments_prints_help(capsys):
    assert main([]) == 0
    assert "a11y-audit" in capsys.readouterr().out


def test_run_text_output(page, capsys):
    exit_code = main(["run", str(page), "--no-progress"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Interactive element missing accessible name" in out
    assert "Skipped heading level" in out
    assert "Low contrast text" in out
    assert "1 file(s) audited" in out


def test_bare_file_defaults_to_run(page, capsys):
    assert main([str(page)]) == 0
    assert "file(s) audited" in capsys.readouterr().out


def test_run_json_with_category(page, capsys):
    """Met --category wordt alleen die categorie uitgevoerd."""
    exit_code = main(["run", str(page), "--category", "structure", "--format", "json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)[str(page)]
    assert payload["structure"]["ran"] is True
    assert payload["aria"] == {"ran": False, "issues": []}
    codes = [i["code"] for i in payload["structure"]["issues"]]
    assert codes == ["SKIPPED_HEADING_LEVEL", "MISSING_LANDMARK", "MISSING_LANDMARK"]


def test_run_with_ignore(page, capsys):
    main(["run", str(page), "--format", "json", "--ignore", "MISSING_LANDMARK,LOW_CONTRAST"])
    payload = json.loads(capsys.readouterr().out)[str(page)]

    assert payload["contrast"] == {"ran": True, "issues": []}
    assert all(i["code"] != "MISSING_LANDMARK" for i in payload["structure"]["issues"])


def test_run_export(page, tmp_path, capsys):
    target = tmp_path / "out.csv"
    assert main(["run", str(page), "--export", str(target)]) == 0
    assert target.exists()
    assert "Results exported" in capsys.readouterr().out


def test_run_export_bad_format(page, tmp_path, capsys):
    assert main(["run", str(page), "--export", str(tmp_path / "out.txt")]) == 1
    assert "Export failed" in capsys.readouterr().err


def test_missing_file_returns_error(tmp_path, capsys):
    assert main(["run", str(tmp_path / "missing.html")]) == 1
    assert "Could not audit" in capsys.readouterr().err


def test_invalid_category_is_rejected(page):
    assert main(["run", str(page), "--category", "layout"]) == 2


def test_codes_lists_every_category(capsys):
    assert main(["codes"]) == 0
    out = capsys.readouterr().out
    for code in ("MISSING_ALT", "SKIPPED_HEADING_LEVEL", "LOW_CONTRAST"):
        assert code in out


def test_config_prints_json(capsys):
    assert main(["config"]) == 0
    assert "audit" in json.loads(capsys.readouterr().out)


@pytest.fixture
def user_settings(tmp_path, monkeypatch):
    """Leidt de gebruikersinstellingen om naar een tijdelijke map."""
    user_file = tmp_path / "home" / "settings.json"
    monkeypatch.setattr(PathUtils, 'get_user_settings_file', staticmethod(lambda: user_file))
    config_manager.reset()

    yield user_file

    monkeypatch.undo()
    config_manager.reset()


def test_config_list_is_the_default(user_settings, capsys):
    assert main(["config", "list"]) == 0
    assert json.loads(capsys.readouterr().out)["audit"]["panel_selector"] == "#accessibility-sidebar"


def test_config_set_persists_user_override(user_settings, page, capsys):
    """'config set' past de waarde aan en bewaart die in het gebruikersbestand."""
    assert main(["config", "set", "audit.image_alt_severity", "warning"]) == 0
    assert "Config updated: audit.image_alt_severity = warning" in capsys.readouterr().out

    assert json.loads(user_settings.read_text()) == {"audit": {"image_alt_severity": "warning"}}
    assert config_manager.audit_settings().image_alt_severity.value == "warning"

    # Een volgende sessie leest de override opnieuw in
    config_manager.reset()
    assert config_manager.get_nested("audit.image_alt_severity") == "warning"


def test_config_set_rejects_path_through_scalar(user_settings, capsys):
    assert main(["config", "set", "debug.level.deeper", "x"]) == 1
    assert "Failed to set" in capsys.readouterr().err
    assert not user_settings.exists()


def test_config_reset_removes_user_overrides(user_settings, capsys):
    main(["config", "set", "styles.default_background", "#000000"])
    assert user_settings.exists()

    assert main(["config", "reset"]) == 0
    assert not user_settings.exists()
    assert config_manager.get_nested("styles.default_background") == "#ffffff"

    assert main(["config", "reset"]) == 0
    assert "nothing to reset" in capsys.readouterr().out
