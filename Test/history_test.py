import pytest
from textundo.document import TextDocument
from textundo.history import (
    NOTHING_TO_REDO,
    NOTHING_TO_UNDO,
    REDONE,
    ROLLED_BACK,
    SAVED,
    UNDONE,
    History,
    HistoryError,
)
from textundo.storage import StorageError


class _FlakyDocument(TextDocument):

    failSave = False

    def save(self):
        if self.failSave:
            raise StorageError("store", self.path, "disk full")
        super().save()


@pytest.fixture
def doc(tmp_path):
    return TextDocument.open(str(tmp_path / "a.txt"))


def _read(path):
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _editWithHistory(history, doc, content):
    history.saveState(doc)
    doc.edit(content)
    doc.save()


class TestHistory:

    def test_empty(self):
        history = History()
        assert not history.canUndo()
        assert not history.canRedo()
        assert history.undoSnapshot() is None
        assert history.redoSnapshot() is None

    def test_saveState(self, doc):
        history = History()
        history.saveState(doc)
        assert history.canUndo()
        assert not history.canRedo()
        assert history.undoSnapshot() == doc.export()

    def test_undo_redo(self, doc):
        history = History()
        _editWithHistory(history, doc, "one")
        _editWithHistory(history, doc, "two")
        assert history.undo(doc)
        assert doc.content == "one"
        assert _read(doc.path) == "one"
        assert history.undo(doc)
        assert doc.content == ""
        assert history.redo(doc)
        assert doc.content == "one"
        assert history.redo(doc)
        assert doc.content == "two"
        assert _read(doc.path) == "two"

    def test_lifo_order(self, doc):
        history = History()
        states = [f"state {i}" for i in range(6)]
        exported = []
        for state in states:
            exported.append(doc.content)
            _editWithHistory(history, doc, state)
        for expected in reversed(exported):
            history.undo(doc)
            assert doc.content == expected

    def test_undo_redo_inverse(self, doc):
        history = History()
        for state in ["a", "b", "c"]:
            _editWithHistory(history, doc, state)
        history.undo(doc)
        before = doc.content
        history.undo(doc)
        history.redo(doc)
        assert doc.content == before

    def test_saveState_clears_redo(self, doc):
        history = History()
        _editWithHistory(history, doc, "one")
        _editWithHistory(history, doc, "two")
        history.undo(doc)
        history.undo(doc)
        assert len(history.redoStack) == 2
        history.saveState(doc)
        assert not history.canRedo()
        assert not history.redo(doc)

    def test_empty_undo_is_noop(self, doc):
        history = History()
        doc.edit("untouched")
        assert not history.undo(doc)
        assert not history.redo(doc)
        assert doc.content == "untouched"
        assert history.undoStack == []
        assert history.redoStack == []

    def test_empty_redo_keeps_undo(self, doc):
        history = History()
        _editWithHistory(history, doc, "one")
        undoStack = list(history.undoStack)
        assert not history.redo(doc)
        assert history.undoStack == undoStack
        assert doc.content == "one"

    def test_no_coalescing(self, doc):
        history = History()
        for i in range(5):
            _editWithHistory(history, doc, doc.content + "x")
        assert len(history.undoStack) == 5

    def test_maxDepth(self, doc):
        history = History(maxDepth=3)
        for state in ["a", "b", "c", "d", "e"]:
            _editWithHistory(history, doc, state)
        assert [s.content for s in history.undoStack] == ["b", "c", "d"]
        while history.undo(doc):
            pass
        assert doc.content == "b"
        assert len(history.redoStack) == 3
        assert [s.content for s in history.redoStack] == ["e", "d", "c"]

    def test_bad_maxDepth(self):
        with pytest.raises(ValueError):
            History(maxDepth=0)

    def test_bound_to_one_document(self, doc, tmp_path):
        history = History()
        history.saveState(doc)
        other = TextDocument.open(str(tmp_path / "b.txt"))
        with pytest.raises(HistoryError):
            history.saveState(other)
        with pytest.raises(HistoryError):
            history.undo(other)

    def test_monitor(self, doc):
        events = []
        history = History(monitor=lambda event, snapshot: events.append(event))
        history.undo(doc)
        history.redo(doc)
        _editWithHistory(history, doc, "one")
        history.undo(doc)
        history.redo(doc)
        assert events == [NOTHING_TO_UNDO, NOTHING_TO_REDO, SAVED, UNDONE, REDONE]

    def test_undo_apply_failure(self, tmp_path):
        doc = _FlakyDocument.open(str(tmp_path / "a.txt"))
        history = History()
        _editWithHistory(history, doc, "one")
        doc.failSave = True
        with pytest.raises(StorageError):
            history.undo(doc)
        # the popped snapshot is gone, the redo push has happened
        assert history.undoStack == []
        assert [s.content for s in history.redoStack] == ["one"]
        assert doc.content == ""

    def test_redo_apply_failure(self, tmp_path):
        doc = _FlakyDocument.open(str(tmp_path / "a.txt"))
        history = History()
        _editWithHistory(history, doc, "one")
        _editWithHistory(history, doc, "two")
        history.undo(doc)
        history.undo(doc)
        assert doc.content == ""
        doc.failSave = True
        with pytest.raises(StorageError):
            history.redo(doc)
        # the popped snapshot is gone, the undo push has happened
        assert [s.content for s in history.redoStack] == ["two"]
        assert [s.content for s in history.undoStack] == [""]
        assert doc.content == "one"
        assert _read(doc.path) == ""

    def test_changeSet(self, doc):
        history = History()
        with history.changeSet(doc):
            doc.edit("one")
        assert doc.content == "one"
        assert history.undoSnapshot().content == ""

    def test_changeSet_rollback(self, tmp_path):
        events = []
        doc = _FlakyDocument.open(str(tmp_path / "a.txt"))
        history = History(monitor=lambda event, snapshot: events.append(event))
        _editWithHistory(history, doc, "one")
        _editWithHistory(history, doc, "two")
        history.undo(doc)
        undoStack = list(history.undoStack)
        redoStack = list(history.redoStack)
        doc.failSave = True
        with pytest.raises(StorageError):
            with history.changeSet(doc):
                doc.edit("three")
                doc.save()
        assert doc.content == "one"
        assert history.undoStack == undoStack
        assert history.redoStack == redoStack
        assert events[-1] == ROLLED_BACK

    def test_clear(self, doc):
        history = History()
        _editWithHistory(history, doc, "one")
        history.undo(doc)
        history.clear()
        assert not history.canUndo()
        assert not history.canRedo()
