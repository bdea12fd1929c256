import logging

from .config import Settings
from .document import TextDocument
from .history import History


logger = logging.getLogger(__name__)


class EditorError(Exception):
    pass


class TextEditor:

    """An editing session on one text file at a time.

    Every change goes through the same sequence: record the current state in
    the history, modify the document, write it to disk. Undo and redo are
    always written to disk too, so after any successful operation the file
    on disk matches showContent().

    Opening a file records its content as the first undo checkpoint, so an
    undo right after opening leaves the content as it is.

    Operations other than openFile() and closeFile() raise EditorError when
    no file is open.
    """

    def __init__(self, settings=None, monitor=None):
        self.settings = settings if settings is not None else Settings()
        self.document = None
        self.history = None
        self._monitor = monitor

    def openFile(self, path):
        document = TextDocument.open(path, self.settings.encoding)
        history = History(maxDepth=self.settings.historyDepth, monitor=self._monitor)
        history.saveState(document)
        self.document = document
        self.history = history
        logger.info("opened %s", document.path)

    def closeFile(self):
        if self.document is not None:
            logger.info("closed %s", self.document.path)
        self.document = None
        self.history = None

    def isOpen(self):
        return self.document is not None

    def _ensureOpen(self):
        if self.document is None:
            raise EditorError("no file is open")

    def edit(self, newContent):
        """Replace the content of the open file and save it. If the save
        fails, the edit is rolled back and the StorageError propagates.
        """
        self._ensureOpen()
        with self.history.changeSet(self.document):
            self.document.edit(newContent)
            self.document.save()

    def undo(self):
        """Undo the last change. Returns False if there was nothing to undo."""
        self._ensureOpen()
        restored = self.history.undo(self.document)
        self.document.save()
        return restored

    def redo(self):
        """Redo the last undone change. Returns False if there was nothing to
        redo.
        """
        self._ensureOpen()
        restored = self.history.redo(self.document)
        self.document.save()
        return restored

    def showContent(self):
        self._ensureOpen()
        return self.document.content

    def canUndo(self):
        return self.history is not None and self.history.canUndo()

    def canRedo(self):
        return self.history is not None and self.history.canRedo()
