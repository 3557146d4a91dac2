import io

import pytest
from rich.console import Console

from logscribe.console import RichConsolePort, parse_choice, read_choice, render_menu


@pytest.mark.parametrize(
    "raw, expected",
    [("1", 1), (" 3 ", 3), ("0", None), ("4", None), ("-1", None), ("two", None), ("", None), ("²", None)],
)
def test_parse_choice(raw, expected):
    assert parse_choice(raw, 3) == expected


def test_render_menu_and_read_choice(scripted_console):
    console = scripted_console(["2"])

    render_menu(console, "Main", ["Alpha", "Beta"])
    choice = read_choice(console, "Pick:", 2)

    assert choice == 2
    assert "  1. Alpha" in console.text
    assert "  2. Beta" in console.text
    assert console.prompts == ["Pick:"]


def test_rich_console_port_escapes_markup():
    buffer = io.StringIO()
    port = RichConsolePort(Console(file=buffer, force_terminal=False, width=120))

    port.print("[not markup]")
    port.error("failed [x]")
    port.success("done")

    output = buffer.getvalue()
    assert "[not markup]" in output
    assert "failed [x]" in output
    assert "done" in output
