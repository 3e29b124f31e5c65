import pytest

from irepl.textutils import (
    balanced_quotes,
    chars_count,
    insert_at_char_idx,
    is_multiline,
    new_lines_count,
    read_until_bytes,
    remove_at_char_idx,
    remove_comments,
    remove_main,
    split_args,
    stdout_and_stderr,
    strings_unique,
    unmatched_brackets,
)


def test_split_args():
    cmd = ':add crate --no-default --features "a b c"'
    assert split_args(cmd) == [":add", "crate", "--no-default", "--features", "a b c"]


def test_split_args_empty():
    assert split_args("") == []


def test_stdout_preferred_over_stderr():
    assert stdout_and_stderr(b"out", b"err") == "out"
    assert stdout_and_stderr(b"", b"err") == "err"


def test_stdout_invalid_utf8_is_empty():
    assert stdout_and_stderr(b"\xff\xfe", b"err") == ""


def test_remove_comments():
    code = "let a = 1; // note\n    // whole line\nlet b = \"x\";"
    assert remove_comments(code) == "let a = 1; \nlet b = \"x\";\n"


def test_remove_comments_keeps_quoted_slashes_text():
    result = remove_comments('let u = "a//b";')
    assert result.startswith('let u = "a')
    assert result.endswith('b";\n')


def test_remove_comments_empty():
    assert remove_comments("") == ""


def test_remove_main():
    assert remove_main("fn main() {\nlet a = 1;\n}\n") == "let a = 1;\n\n"


def test_remove_main_without_main():
    assert remove_main("let a = 1;") == "let a = 1;\n"


def test_remove_main_unclosed():
    script = "fn main() {\nlet a = 1;\n"
    assert remove_main(script) == script


def test_balanced_quotes():
    assert balanced_quotes("'a' \"b\"")
    assert not balanced_quotes("'a")


def test_insert_and_remove_round_trip():
    s = "héllo"
    inserted = insert_at_char_idx(s, 2, "X")
    assert inserted == "héXllo"
    restored, removed = remove_at_char_idx(inserted, 2)
    assert (restored, removed) == (s, "X")


def test_remove_out_of_range():
    assert remove_at_char_idx("ab", 5) == ("ab", None)


def test_counts():
    assert chars_count("héllo") == 5
    assert new_lines_count("a\nb\nc") == 2


def test_is_multiline():
    assert not is_multiline("a\nb")
    assert is_multiline("a\nb\nc")


def test_strings_unique_overlap():
    assert strings_unique("let a = pri", "println!") == "ntln!"


def test_strings_unique_no_overlap_after_word():
    assert strings_unique("abc", "xyz") == ""


def test_strings_unique_no_overlap_after_symbol():
    assert strings_unique("abc.", "xyz") == "xyz"


@pytest.mark.parametrize("code,expected", [
    ("fn main() {", True),
    ("foo(a[1])", False),
    ('let s = "{";', False),
    ("let c = '(';", False),
    ("f() // {", False),
    ("vec![1, 2", True),
])
def test_unmatched_brackets(code, expected):
    assert unmatched_brackets(code) is expected


class _ChunkReader:
    def __init__(self, chunks):
        self._chunks = list(chunks)

    def read(self, n):
        return self._chunks.pop(0) if self._chunks else b""


def test_read_until_bytes_stops_at_delim():
    reader = _ChunkReader([b"abc", b"\n>>> ", b"later"])
    assert read_until_bytes(reader, b">>> ") == b"abc\n>>> "
    assert reader.read(512) == b"later"


def test_read_until_bytes_reads_to_end():
    reader = _ChunkReader([b"abc", b"def"])
    assert read_until_bytes(reader, b"zzz") == b"abcdef"