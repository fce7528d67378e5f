"""Tests for cli/main.py - Command line interface."""

import io
import json

import pytest

from cli.main import json_depth, load_json_argument, main, render_diff, validate_path
from core.errors import LimitError

DOCUMENT = '{\n  // port to listen on\n  "port": 8080,\n  "host": "localhost"\n}\n'


@pytest.fixture
def doc(tmp_project):
    """Write the sample document into the temporary project."""
    path = tmp_project / "config.jsonc"
    path.write_text(DOCUMENT)
    return path


class TestJsonArguments:
    """Tests for json_depth() and load_json_argument()."""

    def test_depth(self):
        assert json_depth(1) == 0
        assert json_depth({"a": [1]}) == 2
        assert json_depth([[], {"a": {"b": 1}}]) == 3

    def test_size_limit(self):
        with pytest.raises(LimitError):
            load_json_argument('"abcdef"', max_size=3, max_depth=10)

    def test_depth_limit(self):
        with pytest.raises(LimitError):
            load_json_argument("[[[1]]]", max_size=100, max_depth=2)

    def test_within_limits(self):
        assert load_json_argument('{"a": [1]}', max_size=100, max_depth=2) == {"a": [1]}


class TestValidatePath:
    """Tests for validate_path()."""

    def test_inside_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert validate_path("a/b.json", False) == (tmp_path / "a" / "b.json").resolve()

    def test_traversal_rejected(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(LimitError):
            validate_path("../outside.json", False)

    def test_traversal_allowed(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert validate_path("../outside.json", True) == (tmp_path.parent / "outside.json").resolve()


class TestRenderDiff:
    """Tests for render_diff()."""

    def test_unified_diff(self):
        diff = render_diff('{\n  "a": 1\n}', '{\n  "a": 2\n}', "x.json")
        assert diff.startswith("--- a/x.json\n+++ b/x.json\n")
        assert '-  "a": 1\n' in diff
        assert '+  "a": 2\n' in diff


class TestCommands:
    """End-to-end command tests."""

    def test_parse(self, doc, capsys):
        assert main(["parse", "config.jsonc"]) == 0
        assert json.loads(capsys.readouterr().out) == {"port": 8080, "host": "localhost"}

    def test_get(self, doc, capsys):
        assert main(["get", "config.jsonc", "port"]) == 0
        assert capsys.readouterr().out.strip() == "8080"

    def test_get_missing(self, doc, capsys):
        assert main(["get", "config.jsonc", "nope"]) == 1
        assert "Not found" in capsys.readouterr().err

    def test_set_writes_file(self, doc, capsys):
        assert main(["set", "config.jsonc", "port", "9090"]) == 0
        assert '"port": 9090' in doc.read_text()
        assert "// port to listen on" in doc.read_text()
        assert '+  "port": 9090,' in capsys.readouterr().out

    def test_set_dry_run(self, doc, capsys):
        assert main(["set", "config.jsonc", "port", "9090", "--dry-run"]) == 0
        assert doc.read_text() == DOCUMENT
        assert "dry-run" in capsys.readouterr().out

    def test_no_changes(self, doc, capsys):
        assert main(["set", "config.jsonc", "port", "8080"]) == 0
        assert capsys.readouterr().out.strip() == "No changes"

    def test_invalid_json_value(self, doc, capsys):
        assert main(["set", "config.jsonc", "port", "{oops"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_remove(self, doc):
        assert main(["remove", "config.jsonc", "port"]) == 0
        assert doc.read_text() == '{\n  "host": "localhost"\n}\n'

    def test_merge_and_modify(self, doc):
        assert main(["merge", "config.jsonc", '{"debug": true}']) == 0
        assert '"debug": true' in doc.read_text()
        assert main(["modify", "config.jsonc", '{"debug": false}']) == 0
        assert doc.read_text() == '{\n  "debug": false\n}\n'

    def test_merge_requires_object(self, doc, capsys):
        assert main(["merge", "config.jsonc", "[1]"]) == 1
        assert "requires a JSON object" in capsys.readouterr().err

    def test_rename_and_move(self, doc):
        assert main(["rename", "config.jsonc", "host", "hostname"]) == 0
        assert main(["move", "config.jsonc", "hostname", "server.hostname"]) == 0
        text = doc.read_text()
        assert '"server": {"hostname":"localhost"}' in text
        assert '"host"' not in text

    def test_sort(self, doc):
        assert main(["sort", "config.jsonc"]) == 0
        assert doc.read_text() == '{\n  "host": "localhost",\n  // port to listen on\n  "port": 8080\n}\n'

    def test_format_uses_project_config(self, doc):
        doc.write_text('{"a":1}')
        assert main(["format", "config.jsonc"]) == 0
        assert doc.read_text() == '{\n    "a": 1\n}'

    def test_format_tabs(self, doc):
        doc.write_text('{"a":1}')
        assert main(["format", "config.jsonc", "--tabs"]) == 0
        assert doc.read_text() == '{\n\t"a": 1\n}'

    def test_comment_get_and_set(self, doc, capsys):
        assert main(["comment", "config.jsonc", "port"]) == 0
        assert capsys.readouterr().out.strip() == "port to listen on"

        assert main(["comment", "config.jsonc", "host", "server name", "--trailing"]) == 0
        assert '"host": "localhost" // server name' in doc.read_text()

    def test_comment_missing(self, doc, capsys):
        assert main(["comment", "config.jsonc", "host"]) == 0
        assert capsys.readouterr().out.strip() == "(no comment)"

    def test_uncomment(self, doc):
        assert main(["uncomment", "config.jsonc", "port"]) == 0
        assert "port to listen on" not in doc.read_text()

    def test_stdin_to_stdout(self, tmp_project, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b'{ "a": 1 }')))
        assert main(["set", "-", "a", "2"]) == 0
        assert capsys.readouterr().out == '{ "a": 2 }'

    def test_crlf_preserved(self, doc):
        doc.write_bytes(b'{\r\n  "a": 1\r\n}')
        assert main(["set", "config.jsonc", "b", "2"]) == 0
        assert doc.read_bytes() == b'{\r\n  "a": 1,\r\n  "b": 2\r\n}'

    def test_file_size_limit(self, doc, capsys):
        assert main(["parse", "config.jsonc", "--max-file-size", "10"]) == 1
        assert "File too large" in capsys.readouterr().err
        assert main(["parse", "config.jsonc", "--max-file-size", "10", "--no-file-size-limit"]) == 0

    def test_path_traversal_rejected(self, doc, capsys):
        assert main(["parse", "../config.jsonc"]) == 1
        assert "Path traversal" in capsys.readouterr().err

    def test_malformed_document(self, doc, capsys):
        doc.write_text('{"a": ')
        assert main(["remove", "config.jsonc", "a"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_missing_file(self, tmp_project, capsys):
        assert main(["parse", "absent.jsonc"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("jsonc-edit ")
