"""Tests for relgit.output.console module."""

from __future__ import annotations

from relgit.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


def test_style_str() -> None:
    assert str(Style.INFO) == "info"
    assert str(Style.DIM) == "dim"


class TestMockConsole:
    def test_captures_styles(self) -> None:
        console = MockConsole()
        console.info("Checking plugins")
        console.print("git pull", Style.DIM)
        console.error("boom")

        assert console.messages == ["info: Checking plugins", "git pull", "error: boom"]
        assert console.has_error()
        assert console.count(Style.DIM) == 1

    def test_find(self) -> None:
        console = MockConsole()
        console.success("released demo 1.0.0")
        console.info("slow remote")

        assert len(console.find("released")) == 1
        assert console.find("missing") == []

    def test_text_joins_lines(self) -> None:
        console = MockConsole()
        console.header("Releasing demo")
        console.print("done")
        assert console.text == "Releasing demo\ndone"


def test_rich_console_does_not_parse_markup(capsys) -> None:
    console = RichConsole()
    console.info("Creating tag [1.0.0]")
    console.print("Release version [1.0.0].", Style.DIM)

    out = capsys.readouterr().out
    assert "[1.0.0]" in out
    assert "Release version [1.0.0]." in out


def test_consoles_satisfy_protocol() -> None:
    consoles: list[ConsoleProtocol] = [MockConsole(), RichConsole()]
    assert len(consoles) == 2
