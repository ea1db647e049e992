import io
import json

import pytest

import seqdiff


@pytest.fixture
def sources(tmp_path):
    old = tmp_path / 'old.txt'
    new = tmp_path / 'new.txt'
    old.write_text("abc\nc\n", encoding="utf-8")
    new.write_text("abc\nbcd\nc\n", encoding="utf-8")
    return str(old), str(new)


def run(argv):
    stream = io.StringIO()
    code = seqdiff.main(argv, stream)
    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    return code, lines


def test_records(sources):
    code, lines = run(list(sources))
    assert code == seqdiff.EXIT_DIFFERENT
    assert lines == [
        {"action": "Common", "old_index": 0, "new_index": 0, "data": "abc"},
        {"action": "Added", "old_index": None, "new_index": 1, "data": "bcd"},
        {"action": "Common", "old_index": 1, "new_index": 2, "data": "c"},
    ]


def test_edits(sources):
    code, lines = run(list(sources) + ["-f", "edits"])
    assert code == seqdiff.EXIT_DIFFERENT
    assert lines == [["INS", 1, ["bcd"]]]


def test_equal(sources):
    old, _ = sources
    code, lines = run([old, old])
    assert code == seqdiff.EXIT_EQUAL
    assert [line["action"] for line in lines] == ["Common", "Common"]


def test_ignore_case(tmp_path):
    old = tmp_path / 'old.txt'
    new = tmp_path / 'new.txt'
    old.write_text("Hello World", encoding="utf-8")
    new.write_text("hello world", encoding="utf-8")
    code, _ = run([str(old), str(new), "-g", "word"])
    assert code == seqdiff.EXIT_DIFFERENT
    code, _ = run([str(old), str(new), "-g", "word", "-i"])
    assert code == seqdiff.EXIT_EQUAL


def test_conffile(tmp_path, sources):
    conf = tmp_path / 'diff.json'
    conf.write_text('{\n  # only the changes\n  "output": "edits"\n}\n')
    code, lines = run(list(sources) + ["-c", str(conf)])
    assert lines == [["INS", 1, ["bcd"]]]
    code, lines = run(list(sources) + ["-c", str(conf), "-f", "records"])
    assert len(lines) == 3


def test_invalid_conffile(tmp_path, sources):
    conf = tmp_path / 'diff.json'
    conf.write_text('{"colour": true}')
    code, lines = run(list(sources) + ["-c", str(conf)])
    assert code == seqdiff.EXIT_TROUBLE
    assert lines == []


def test_missing_source(tmp_path, sources):
    code, lines = run([str(tmp_path / 'missing.txt'), sources[1]])
    assert code == seqdiff.EXIT_TROUBLE
    assert lines == []


@pytest.mark.parametrize('content', ['5', '[["a", "b"]]'])
@pytest.mark.parametrize('flags', [[], ["-f", "edits"]])
def test_conffile_not_an_object(tmp_path, sources, content, flags):
    conf = tmp_path / 'diff.json'
    conf.write_text(content)
    code, lines = run(list(sources) + ["-c", str(conf)] + flags)
    assert code == seqdiff.EXIT_TROUBLE
    assert lines == []
