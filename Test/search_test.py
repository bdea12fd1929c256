import os
import pytest
from textundo.search import buildIndex, findFiles, parseKeywords
from textundo.storage import StorageError


@pytest.fixture
def textDir(tmp_path):
    files = {
        "a.txt": "the quick brown fox",
        "b.txt": "jumps over the lazy dog",
        "c.txt": "nothing to see here",
        "d.md": "the fox, but not a text file",
    }
    for name, content in files.items():
        (tmp_path / name).write_text(content, encoding="utf-8")
    (tmp_path / "sub.txt").mkdir()
    (tmp_path / "sub.txt" / "e.txt").write_text("fox in a subdirectory", encoding="utf-8")
    return tmp_path


def _names(paths):
    return [os.path.basename(path) for path in paths]


class TestParseKeywords:

    def test_split(self):
        assert parseKeywords("fox,dog") == ["fox", "dog"]

    def test_strip_and_dedupe(self):
        assert parseKeywords(" fox , ,dog,fox,") == ["fox", "dog"]

    def test_empty(self):
        assert parseKeywords("") == []
        assert parseKeywords(" , ") == []


class TestFindFiles:

    def test_any_keyword(self, textDir):
        assert _names(findFiles(str(textDir), ["fox", "dog"])) == ["a.txt", "b.txt"]

    def test_single_keyword(self, textDir):
        assert _names(findFiles(str(textDir), ["lazy"])) == ["b.txt"]

    def test_no_match(self, textDir):
        assert findFiles(str(textDir), ["unicorn"]) == []

    def test_no_keywords(self, textDir):
        assert findFiles(str(textDir), []) == []

    def test_pattern(self, textDir):
        assert _names(findFiles(str(textDir), ["fox"], pattern="*.md")) == ["d.md"]

    def test_full_paths(self, textDir):
        assert findFiles(str(textDir), ["quick"]) == [os.path.join(str(textDir), "a.txt")]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(StorageError) as excinfo:
            findFiles(str(tmp_path / "nope"), ["fox"])
        assert excinfo.value.operation == "scan"

    def test_unreadable_file_skipped(self, textDir):
        (textDir / "bad.txt").write_bytes(b"fox \xff\xfe")
        assert _names(findFiles(str(textDir), ["fox"])) == ["a.txt"]


class TestBuildIndex:

    def test_index(self, textDir):
        index = buildIndex(str(textDir), ["fox", "the", "unicorn"])
        assert list(index) == ["fox", "the", "unicorn"]
        assert _names(index["fox"]) == ["a.txt"]
        assert _names(index["the"]) == ["a.txt", "b.txt"]
        assert index["unicorn"] == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(StorageError):
            buildIndex(str(tmp_path / "nope"), ["fox"])
