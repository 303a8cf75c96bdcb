import time

from status_bar import render_status, render_title


def test_transient_message_wins_while_fresh():
    text = render_status(
        {"status_msg": "42%", "status_until": time.time() + 5, "reading": True}, 20
    )
    assert text == " 42%".ljust(20)


def test_expired_message_falls_back_to_mode_line():
    text = render_status(
        {
            "status_msg": "old",
            "status_until": time.time() - 1,
            "reading": False,
            "file_path": "/tmp/book.txt",
            "modified": True,
            "line": 3,
            "total_lines": 10,
            "percent": 25,
        },
        80,
    )
    assert text.startswith(" EDIT | book.txt* | line 3/10 | 25%")
    assert len(text) == 80


def test_reading_read_only_scratch():
    text = render_status({"reading": True, "read_only": True}, 60)
    assert text.startswith(" READ | [scratch] [ro] |")


def test_mode_line_is_truncated_to_width():
    assert len(render_status({"file_path": "x" * 200}, 30)) == 30


def test_title_includes_menu_when_it_fits():
    wide = render_title("/docs/a.md", 100)
    assert wide.startswith(" lectern | a.md")
    assert "Ctrl+R read" in wide
    narrow = render_title("/docs/a.md", 20)
    assert "Ctrl+R" not in narrow
    assert len(narrow) == 20
