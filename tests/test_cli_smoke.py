from typer.testing import CliRunner
from statscribe.cli.cli import app

def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("scan", "parse", "build", "init"):
        assert command in result.output
