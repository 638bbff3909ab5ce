"""Tests for the prefer-bind command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from prefer_bind import __version__
from prefer_bind.cli import EXIT_CONFIG_ERROR, EXIT_FINDINGS, EXIT_OK, app

runner = CliRunner()

FLAGGED = "signal.addEventListener('abort', () => controller.abort());\n"
SHORT_LIVED = "arr.map(() => obj.transform());\n"


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PREFER_BIND_DEBUG", raising=False)
    (tmp_path / "src").mkdir()
    return tmp_path


class TestCheck:
    def test_clean_project(self, project):
        (project / "src" / "a.js").write_text("controller.abort.bind(controller);\n")
        result = runner.invoke(app, ["check", "src"])
        assert result.exit_code == EXIT_OK
        assert "problem" not in result.output

    def test_findings_reported(self, project):
        (project / "src" / "a.js").write_text(FLAGGED)
        result = runner.invoke(app, ["check", "src"])
        assert result.exit_code == EXIT_FINDINGS
        assert "a.js:1:34  warning  Prefer 'controller.abort.bind(controller)'" in result.output
        assert "prefer-bind" in result.output
        assert "1 problem in 1 files" in result.output

    def test_json_output(self, project):
        (project / "src" / "a.js").write_text(FLAGGED)
        result = runner.invoke(app, ["check", "src", "--format", "json"])
        payload = json.loads(result.stdout)
        assert payload["finding_count"] == 1
        finding = payload["reports"][0]["findings"][0]
        assert finding["replacement"] == "controller.abort.bind(controller)"
        assert finding["fix"] is None

    def test_all_contexts_flag(self, project):
        (project / "src" / "a.js").write_text(SHORT_LIVED)
        assert runner.invoke(app, ["check", "src"]).exit_code == EXIT_OK
        result = runner.invoke(app, ["check", "src", "--all-contexts"])
        assert result.exit_code == EXIT_FINDINGS

    def test_context_option_replaces_defaults(self, project):
        (project / "src" / "a.js").write_text("myCustomHandler(() => obj.method());\n" + FLAGGED)
        result = runner.invoke(app, ["check", "src", "--context", "myCustomHandler", "-f", "json"])
        payload = json.loads(result.stdout)
        assert [f["replacement"] for f in payload["reports"][0]["findings"]] == [
            "obj.method.bind(obj)"
        ]

    def test_include_async_flag(self, project):
        (project / "src" / "a.js").write_text("setTimeout(async () => obj.method(), 100);\n")
        assert runner.invoke(app, ["check", "src"]).exit_code == EXIT_OK
        assert runner.invoke(app, ["check", "src", "--include-async"]).exit_code == EXIT_FINDINGS

    def test_parse_error_is_a_problem(self, project):
        (project / "src" / "a.js").write_text("setTimeout(() => obj.m(), \n")
        result = runner.invoke(app, ["check", "src"])
        assert result.exit_code == EXIT_FINDINGS
        assert "Syntax error" in result.output


class TestConfiguration:
    def test_pyproject_discovered(self, project):
        (project / "pyproject.toml").write_text("[tool.prefer-bind]\nonlyInLongLivedContexts = false\n")
        (project / "src" / "a.js").write_text(SHORT_LIVED)
        assert runner.invoke(app, ["check", "src"]).exit_code == EXIT_FINDINGS

    def test_flag_overrides_file(self, project):
        (project / "pyproject.toml").write_text("[tool.prefer-bind]\nonlyInLongLivedContexts = false\n")
        (project / "src" / "a.js").write_text(SHORT_LIVED)
        assert runner.invoke(app, ["check", "src", "--only-long-lived"]).exit_code == EXIT_OK

    def test_explicit_json_config(self, project):
        (project / "opts.json").write_text('{"longLivedContexts": ["map"]}')
        (project / "src" / "a.js").write_text(SHORT_LIVED)
        result = runner.invoke(app, ["check", "src", "--config", "opts.json"])
        assert result.exit_code == EXIT_FINDINGS

    def test_malformed_config(self, project):
        (project / "pyproject.toml").write_text('[tool.prefer-bind]\nlongLivedContexts = "on"\n')
        (project / "src" / "a.js").write_text(FLAGGED)
        result = runner.invoke(app, ["check", "src"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Configuration error" in result.output
        assert "longLivedContexts" in result.output


class TestFixing:
    def test_diff_output(self, project):
        (project / "src" / "a.js").write_text("setTimeout(() => obj.method(a, b), 1000);\n")
        result = runner.invoke(app, ["check", "src", "--diff"])
        assert "-setTimeout(() => obj.method(a, b), 1000);" in result.output
        assert "+setTimeout(obj.method.bind(obj), 1000, a, b);" in result.output
        assert (project / "src" / "a.js").read_text() == "setTimeout(() => obj.method(a, b), 1000);\n"

    def test_write_applies_suggestions(self, project):
        target = project / "src" / "a.js"
        target.write_text(FLAGGED)
        result = runner.invoke(app, ["check", "src", "--write"])
        assert result.exit_code == EXIT_OK
        assert target.read_text() == "signal.addEventListener('abort', controller.abort.bind(controller));\n"
        assert runner.invoke(app, ["check", "src"]).exit_code == EXIT_OK

    def test_write_keeps_crlf_line_endings(self, project):
        target = project / "src" / "a.js"
        target.write_bytes(b"// head\r\nel.on('x', () => obj.m());\r\nfoo();\r\n")
        result = runner.invoke(app, ["check", "src", "--write"])
        assert result.exit_code == EXIT_OK
        assert target.read_bytes() == b"// head\r\nel.on('x', obj.m.bind(obj));\r\nfoo();\r\n"

    def test_diff_keeps_crlf_line_endings(self, project):
        (project / "src" / "a.js").write_bytes(b"el.on('x', () => obj.m());\r\n")
        result = runner.invoke(app, ["check", "src", "--diff"])
        assert b"+el.on('x', obj.m.bind(obj));\r\n" in result.stdout_bytes

    def test_json_includes_patches(self, project):
        (project / "src" / "a.js").write_text(FLAGGED)
        result = runner.invoke(app, ["check", "src", "--diff", "--format", "json"])
        payload = json.loads(result.stdout)
        assert payload["patches"][0]["applied"] == 1


class TestOtherCommands:
    def test_schema(self):
        result = runner.invoke(app, ["schema"])
        assert result.exit_code == 0
        assert "onlyInLongLivedContexts" in json.loads(result.stdout)["properties"]

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
