import pytest


from main import _parse_args


@pytest.mark.parametrize(
    "args, action, reading, path",
    [
        ([], "run", False, None),
        (["book.txt"], "run", False, "book.txt"),
        (["-r", "book.txt"], "run", True, "book.txt"),
        (["book.txt", "-r"], "run", True, "book.txt"),
        (["-r"], "run", True, None),
        (["-v"], "version", False, None),
        (["-V", "x"], "version", False, None),
        (["-h"], "help", False, None),
        (["a.txt", "b.txt"], "usage_error", False, None),
        (["--bogus"], "usage_error", False, None),
    ],
)
def test_parse_args(args, action, reading, path):
    opts = _parse_args(args)
    assert opts.action == action
    assert opts.reading is reading
    assert opts.path == path
