"""Unit tests for console helpers."""

import pytest
from rich.console import Console
from stackctl.core.theme import get_theme
from stackctl.utils import formatting
from stackctl.utils.formatting import print_info, print_success


@pytest.fixture
def recorded(monkeypatch: pytest.MonkeyPatch) -> Console:
    console = Console(record=True, width=120, theme=get_theme())
    monkeypatch.setattr(formatting, "console", console)
    return console


class TestPlainMessages:
    """Tests for print_info and print_success."""

    def test_info_keeps_brackets(self, recorded: Console) -> None:
        """Bracketed text in a message is printed literally."""
        print_info("Models go to /data/[bold]models")
        assert "Models go to /data/[bold]models" in recorded.export_text()

    def test_success_keeps_brackets(self, recorded: Console) -> None:
        """Success messages are not parsed as markup either."""
        print_success("Wrote /opt/[info]/run.sh")
        assert "✓ Wrote /opt/[info]/run.sh" in recorded.export_text()
