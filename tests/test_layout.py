"""Tests for the fixed keyboard geometry."""

from keyviz.layout import KEYBOARD_ROWS, KeyRegion, build_layout, log_capacity, separator_row


def test_nine_rows_in_scan_order():
    layout = build_layout()
    assert len(layout) == sum(len(row) for row in KEYBOARD_ROWS)
    assert sorted({k.y for k in layout}) == [0, 4, 8, 12, 16, 20, 24, 28, 32]
    # Row-then-left-to-right
    positions = [(k.y, k.x) for k in layout]
    assert positions == sorted(positions)


def test_first_row_geometry():
    layout = build_layout()
    assert layout[0] == KeyRegion("Esc", 0, 0, 5, 3)
    assert layout[1] == KeyRegion("F1", 6, 0, 4, 3)
    assert layout[2] == KeyRegion("F2", 11, 0, 4, 3)


def test_widths_and_gaps():
    layout = build_layout()
    for k in layout:
        assert k.width == len(k.label) + 2
        assert k.height == 3
    for a, b in zip(layout, layout[1:]):
        if a.y == b.y:
            assert b.x == a.x + a.width + 1
        else:
            assert b.x == 0


def test_last_row_is_arrow_cluster():
    layout = build_layout()
    assert [k.label for k in layout[-4:]] == ["Left", "Down", "Right", "Up"]
    assert layout[-1].y == 32


def test_duplicate_keys_share_identity():
    labels = [k.label for k in build_layout()]
    assert labels.count("Shift") == 2
    assert labels.count("Ctrl") == 2
    assert labels.count("Alt") == 2


def test_layout_is_stable():
    assert build_layout() == build_layout()


def test_separator_and_capacity():
    layout = build_layout()
    sep = separator_row(layout)
    assert sep == 35
    for height in (0, 20, 36, 37, 50):
        assert log_capacity(layout, height) == height - sep - 1
    assert log_capacity(layout, 36) == 0
    assert log_capacity(layout, 30) < 0
