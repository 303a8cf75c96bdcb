import curses
from types import SimpleNamespace

import pytest

import orchestrator as orch
from app_state import AppState
from reading_mode import InversionFlag, ReadingModeController


def _make_orchestrator(text="hello"):
    # skip __init__: no terminal in tests
    o = orch.Orchestrator.__new__(orch.Orchestrator)
    o.state = AppState(text, None, None, {})
    o.view = o.state.view
    o.view.resize(20, 100)
    o.reading = ReadingModeController(o.view, inversion=InversionFlag())
    o.status_msg = None
    o.status_msg_until = 0
    o.layout = SimpleNamespace(W=100)
    return o


def test_plain_keys_insert_text_when_not_reading():
    o = _make_orchestrator("")
    for ch in b"hi":
        o.handle_key(ch)
    assert o.view.text == "hi"


def test_reading_mode_suppresses_typing_but_not_ctrl_keys():
    o = _make_orchestrator("hello")
    o.handle_key(orch.CTRL_R)
    assert o.reading.active
    o.handle_key(ord("x"))
    o.handle_key(10)
    assert o.view.text == "hello"

    # Ctrl+O keeps its normal binding while reading
    o.handle_key(orch.CTRL_O)
    assert o.view.outline_visible is True

    o.handle_key(curses.KEY_F5)
    assert not o.reading.active
    o.handle_key(ord("x"))
    assert o.view.text == "xhello"


def test_q_leaves_reading_mode():
    o = _make_orchestrator()
    o.handle_key(orch.CTRL_R)
    o.handle_key(ord("q"))
    assert not o.reading.active
    assert o.view.chrome_visible is True


def test_hook_errors_reach_the_caller():
    o = _make_orchestrator()

    def boom():
        raise RuntimeError("bad hook")

    o.reading.add_hook("after_activate", boom)
    with pytest.raises(RuntimeError):
        o.handle_key(orch.CTRL_R)


def test_saving_scratch_buffer_reports_failure():
    o = _make_orchestrator()
    assert o._save() is False
    assert o.status_msg.startswith("Save failed")


def test_save_writes_document(tmp_path):
    from document_loader import DocumentLoader

    path = tmp_path / "doc.txt"
    o = _make_orchestrator()
    o.state = AppState("abc", str(path), DocumentLoader(str(path)), {})
    o.view = o.state.view
    o.view.insert_char("z")
    assert o._save() is True
    assert path.read_text() == "zabc\n"
    assert o.view.modified is False


def test_read_only_document_reports_typing():
    o = _make_orchestrator()
    o.view.read_only = True
    o.handle_key(ord("x"))
    assert o.view.text == "hello"
    assert o.status_msg == "Read-only document"
