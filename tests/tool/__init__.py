"""Test helpers for flux-loader tools."""

import pytest

from flux_loader.tool.flux_loader import main


def run_command(args: list[str], capsys: pytest.CaptureFixture[str]) -> str:
    """Run the command line tool in process and return stdout."""
    main(args)
    return capsys.readouterr().out
