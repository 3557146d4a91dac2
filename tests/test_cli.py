import runpy
from pathlib import Path

from typer.testing import CliRunner

from logscribe import cli

runner = CliRunner()


def test_cli_runs_menu_and_exits(tmp_path):
    result = runner.invoke(cli.app, ["--base-dir", str(tmp_path)], input="3\n")

    assert result.exit_code == 0
    assert "Test Connection" in result.output
    assert "Goodbye!" in result.output
    assert (tmp_path / "config.json").exists()
    assert (tmp_path / "logs").is_dir()


def test_cli_reports_missing_logs(tmp_path):
    result = runner.invoke(cli.app, ["--base-dir", str(tmp_path)], input="2\n3\n")

    assert result.exit_code == 0
    assert "No .log files found" in result.output


def test_cli_rejects_missing_base_dir(tmp_path):
    result = runner.invoke(cli.app, ["--base-dir", str(tmp_path / "missing")])

    assert result.exit_code != 0


def test_cli_startup_failure_exits_with_code_one(tmp_path, monkeypatch):
    def broken_startup(self):
        raise cli.StartupError("cannot prepare folders")

    monkeypatch.setattr(cli.Workflow, "startup", broken_startup)

    result = runner.invoke(cli.app, ["--base-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "cannot prepare folders" in result.output


def test_standalone_script_forwards_to_cli_main():
    script = Path(__file__).resolve().parents[1] / "src" / "main.py"

    namespace = runpy.run_path(str(script), run_name="logscribe_script")

    assert namespace["main"] is cli.main
