import json

from typer.testing import CliRunner

from dicer.cli import app

runner = CliRunner()


def test_cli_check_lists_tokens():
    r = runner.invoke(app, ["check", "hello %1 %[2.-$]"])
    assert r.exit_code == 0, r.output
    lines = r.stdout.splitlines()
    assert lines[0] == "Tokens:"
    assert "- literal 'hello '" in lines
    assert "- char 7: reference %1" in lines
    assert "- char 10: dice %[2.-$] index=2 ops='.-$'" in lines
    assert lines[-1] == "OK: 4 tokens"
    assert "appended" not in r.stdout


def test_cli_check_notes_auto_append():
    r = runner.invoke(app, ["check", "100%% plain"])
    assert r.exit_code == 0, r.output
    assert "Note: no reference found, %1 appended" in r.stdout
    assert "- char 13: reference %1" in r.stdout


def test_cli_check_unterminated():
    r = runner.invoke(app, ["check", "xhello %[1 world"])
    assert r.exit_code == 2
    assert "char 8: dicer expression missing closing ]" in r.output


def test_cli_check_json():
    r = runner.invoke(app, ["check", "hello", "--format", "json"])
    assert r.exit_code == 0
    payload = json.loads(r.stdout)
    assert payload["ok"] is True
    assert payload["auto_append"] is True
    assert payload["tokens"] == [
        {"kind": "literal", "text": "hello "},
        {"kind": "reference", "index": 1, "position": 7},
    ]


def test_cli_check_json_dice_operations():
    r = runner.invoke(app, ["check", "%[1/2,-1]", "--format", "json"])
    assert r.exit_code == 0
    payload = json.loads(r.stdout)
    assert payload["auto_append"] is False
    assert payload["tokens"][0]["operations"] == [
        {"delimiter": "/", "selector": "2"},
        {"delimiter": ",", "selector": "-1"},
    ]


def test_cli_check_json_failure():
    r = runner.invoke(app, ["check", "%[", "--format", "json"])
    assert r.exit_code == 2
    payload = json.loads(r.stdout)
    assert payload["error_count"] == 1
    assert payload["errors"][0]["position"] == 1
    assert payload["tokens"] == []
