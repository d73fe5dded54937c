"""Tests for the cell-buffered terminal surface."""

from unittest.mock import MagicMock, patch

import pytest

from keyviz.terminal import Style, TerminalInterface, keyboard_passthrough


def make_term(width=20, height=5):
    term = MagicMock()
    term.width = width
    term.height = height
    term.normal = "<N>"
    term.on_blue = "<B>"
    term.home = "<H>"
    term.clear = "<C>"
    term.move = lambda y, x: f"<M{y},{x}>"
    return term


@pytest.fixture
def surface():
    return TerminalInterface(make_term())


def test_size_comes_from_blessed(surface):
    assert surface.size() == (20, 5)


def test_out_of_bounds_cells_are_ignored(surface):
    surface.set_cell(-1, 0, "x")
    surface.set_cell(20, 0, "x")
    surface.set_cell(0, 5, "x")
    assert all(ch == ' ' for row in surface._cells for ch, _ in row)


def test_compose_line_switches_styles(surface):
    surface.set_cell(1, 0, "A", Style.HIGHLIGHT)
    surface.set_cell(2, 0, "B", Style.HIGHLIGHT)
    line = surface._compose_display_line(surface._cells[0])
    assert line == " <N><B>AB<N>" + " " * 17


def test_show_writes_only_changed_rows(surface, capsys):
    surface.show()
    first = capsys.readouterr().out
    assert first.startswith("<H><N><C>")
    for y in range(5):
        assert f"<M{y},0>" in first

    surface.set_cell(0, 3, "Z")
    surface.show()
    second = capsys.readouterr().out
    assert "<C>" not in second
    assert "<M3,0>Z" in second
    assert "<M0,0>" not in second


def test_clear_blanks_frame(surface, capsys):
    surface.set_cell(4, 1, "Q", Style.HIGHLIGHT)
    surface.clear()
    assert surface._cells[1][4] == (' ', Style.DEFAULT)


def test_sync_rereads_size_and_forces_repaint(surface, capsys):
    surface.show()
    capsys.readouterr()
    surface.term.width = 30
    surface.term.height = 8
    surface.sync()
    assert surface.size() == (30, 8)
    surface.show()
    out = capsys.readouterr().out
    assert "<C>" in out
    assert "<M7,0>" in out


def test_get_key_without_input_returns_none(surface):
    assert surface.get_key(timeout=0) is None


def test_get_key_uses_curtsies(surface):
    fake_input = MagicMock()
    fake_input.send.return_value = "<Ctrl-a>"
    surface._curtsies_input = fake_input
    assert surface.get_key(timeout=0) == "<Ctrl-a>"
    fake_input.send.assert_called_with(0.0)

    fake_input.send.return_value = None
    assert surface.get_key(timeout=0.5) is None


def test_cleanup_is_idempotent(surface, capsys):
    fake_input = MagicMock()
    surface._curtsies_input = fake_input
    surface.is_fullscreen = True
    surface.cleanup()
    surface.cleanup()
    fake_input.__exit__.assert_called_once_with(None, None, None)
    assert surface.is_fullscreen is False


def test_keyboard_passthrough_restores_settings():
    attrs = [0xFFFF, 0, 0, 0xFFFF, 0, 0, []]
    with patch('keyviz.terminal.termios.tcgetattr', return_value=attrs), \
            patch('keyviz.terminal.termios.tcsetattr') as mock_set:
        with keyboard_passthrough(stream=MagicMock()):
            applied = mock_set.call_args[0][2]
        restored = mock_set.call_args[0][2]
    import termios
    assert not applied[0] & termios.IXON
    assert not applied[3] & termios.ISIG
    assert restored is attrs


def test_keyboard_passthrough_tolerates_non_tty():
    import termios
    with patch('keyviz.terminal.termios.tcgetattr', side_effect=termios.error(25, "not a tty")), \
            patch('keyviz.terminal.termios.tcsetattr') as mock_set:
        with keyboard_passthrough(stream=MagicMock()):
            pass
    mock_set.assert_not_called()
