"""
Tests for the typer CLI.
"""

import json

from typer.testing import CliRunner

from structnav import __version__
from structnav.main import app

runner = CliRunner()


def _invoke(*args, **kwargs):
    return runner.invoke(app, [str(a) for a in args], **kwargs)


class TestScopeCli:

    def test_select_prints_scope_text(self, ts_file):
        result = _invoke("scope", "select", ts_file, "--line", 14, "--column", 4)
        assert result.exit_code == 0
        assert result.stdout.startswith("function helper(x: number) {")

    def test_select_json(self, ts_file):
        result = _invoke("scope", "select", ts_file, "--line", 8, "--json")
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["scope"]["name"] == "area"
        assert payload["scope"]["kind"] == "function"

    def test_select_not_found(self, ts_file):
        result = _invoke("scope", "select", ts_file, "--line", 3)
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["status"] == "error"
        assert payload["code"] == "NOT_FOUND"

    def test_list_machine_mode(self, py_file):
        result = _invoke("scope", "list", py_file, "--target", "function")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "function\tgreet\t6-8",
            "function\tshout\t10-11",
            "function\tadd\t14-15",
        ]

    def test_list_rejects_unknown_target(self, py_file):
        result = _invoke("scope", "list", py_file, "--target", "module")
        assert result.exit_code != 0

    def test_list_human_mode(self, py_file):
        result = _invoke("--human", "scope", "list", py_file)
        assert result.exit_code == 0
        assert "Greeter" in result.stdout

    def test_next_and_previous(self, ts_file):
        result = _invoke("scope", "next", ts_file, "--line", 0)
        assert result.stdout.strip() == "4:0"
        result = _invoke("scope", "previous", ts_file, "--line", 12, "--target", "function")
        assert result.stdout.strip() == "7:0"

    def test_wrap_from_config(self, ts_file):
        _invoke("config", "set", "navigation.wrap_around", "false")
        result = _invoke("scope", "next", ts_file, "--line", 13, "--target", "function")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["message"] == "No more function scopes found."

        result = _invoke("scope", "next", ts_file, "--line", 13, "--target", "function", "--wrap")
        assert result.stdout.strip() == "5:0"

    def test_delete_with_yes(self, ts_file, isolated_project):
        result = _invoke("scope", "delete", ts_file, "--line", 14, "--column", 4, "--yes")
        assert result.exit_code == 0
        assert result.stdout.strip() == "Function 'helper' deleted successfully!"
        assert "function helper" not in ts_file.read_text()
        assert list((isolated_project / ".structnav" / "backups").iterdir())

    def test_delete_declined(self, ts_file):
        original = ts_file.read_text()
        result = _invoke("scope", "delete", ts_file, "--line", 14, input="n\n")
        assert result.exit_code == 1
        assert ts_file.read_text() == original

    def test_delete_confirmed(self, ts_file):
        result = _invoke("scope", "delete", ts_file, "--line", 14, input="y\n")
        assert result.exit_code == 0
        assert "function helper" not in ts_file.read_text()

    def test_delete_without_prompt_when_configured(self, ts_file):
        _invoke("config", "set", "editing.confirm_before_deleting", "false")
        result = _invoke("scope", "delete", ts_file, "--line", 14)
        assert result.exit_code == 0
        assert "function helper" not in ts_file.read_text()

    def test_delete_dry_run(self, ts_file):
        original = ts_file.read_text()
        result = _invoke("scope", "delete", ts_file, "--line", 14, "--dry-run")
        assert result.exit_code == 0
        assert "function helper" not in result.stdout
        assert "enum Color {" in result.stdout
        assert ts_file.read_text() == original


class TestBracketCli:

    def test_select(self, ts_file):
        result = _invoke("bracket", "select", ts_file, "--line", 20, "--column", 2, "--json")
        payload = json.loads(result.stdout)
        assert payload["text"] == "\n  Red,\n  Green,\n"
        assert payload["used_next_pair"] is False

    def test_delete(self, ts_file):
        result = _invoke("bracket", "delete", ts_file, "--line", 20, "--column", 2, "--yes")
        assert result.exit_code == 0
        assert "enum Color {}" in ts_file.read_text()


class TestSexpCli:

    def test_forward(self, isolated_project):
        path = isolated_project / "expr.txt"
        path.write_text("(a (b) c)")
        result = _invoke("sexp", "forward", path)
        assert result.stdout.strip() == "0:9"

    def test_mark_and_expand(self, isolated_project):
        path = isolated_project / "expr.txt"
        path.write_text("(a (b) c)")
        assert _invoke("sexp", "mark", path, "--column", 3).stdout.strip() == "(b)"
        result = _invoke("sexp", "expand", path, "--column", 3, "--end-column", 6)
        assert result.stdout.strip() == "(a (b) c)"

    def test_transpose_writes_file(self, isolated_project):
        path = isolated_project / "expr.txt"
        path.write_text("(a) (b)")
        result = _invoke("sexp", "transpose", path)
        assert result.exit_code == 0
        assert path.read_text() == "(b) (a)"

    def test_up_without_sibling(self, isolated_project):
        path = isolated_project / "expr.txt"
        path.write_text("f(x, y)")
        result = _invoke("sexp", "up", path, "--column", 2)
        assert result.exit_code == 1
        assert json.loads(result.stdout)["code"] == "NO_SIBLING"
        assert path.read_text() == "f(x, y)"

    def test_down_dry_run(self, isolated_project):
        path = isolated_project / "expr.txt"
        path.write_text("f(x, y)")
        result = _invoke("sexp", "down", path, "--column", 2, "--dry-run")
        assert result.stdout == "f(y, x)"
        assert path.read_text() == "f(x, y)"


class TestConfigCli:

    def test_show_key(self, isolated_project):
        result = _invoke("config", "show", "navigation.wrap_around")
        assert result.stdout.strip() == "true"

    def test_show_all_json(self, isolated_project):
        result = _invoke("config", "show")
        payload = json.loads(result.stdout)
        assert payload["editing"]["backup_enabled"] is True

    def test_set_extension_override(self, isolated_project):
        result = _invoke("config", "set", "languages.extensions", '{".rs": "rust"}')
        assert result.exit_code == 0
        path = isolated_project / "main.rs"
        path.write_text("fn main() {\n    run();\n}\n")
        payload = json.loads(_invoke("scope", "select", path, "--line", 1, "--json").stdout)
        assert payload["scope"]["name"] == "main"

    def test_unknown_key(self, isolated_project):
        result = _invoke("config", "show", "no.such.key")
        assert result.exit_code == 1


def test_version():
    result = _invoke("version")
    assert result.exit_code == 0
    assert result.stdout.strip() == f"structnav v{__version__}"
