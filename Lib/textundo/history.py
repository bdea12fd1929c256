from contextlib import contextmanager
import logging


logger = logging.getLogger(__name__)


class HistoryError(Exception):
    pass


SAVED = "saved"
UNDONE = "undone"
REDONE = "redone"
ROLLED_BACK = "rolledBack"
NOTHING_TO_UNDO = "nothingToUndo"
NOTHING_TO_REDO = "nothingToRedo"


class History:

    """A History manages a stack of undo snapshots and a stack of redo
    snapshots for a single document. It never looks inside the snapshots; it
    only asks the document to export its state, and hands snapshots back to
    the document to apply.

    The state of the document is recorded with saveState(), which must be
    called *before* the document is modified: undo() then brings back exactly
    that state. Recording a new state discards the redo stack.

        >>> from textundo.document import TextDocument
        >>> doc = TextDocument("notes.txt", "first draft")
        >>> history = History()
        >>> history.saveState(doc)
        >>> history.canUndo(), history.canRedo()
        (True, False)
        >>> history.undoSnapshot().content
        'first draft'

    undo() and redo() return False, and change nothing, when their
    respective stack is empty. This is not considered an error.

    `maxDepth` limits the number of snapshots kept on each stack; when a stack
    is full the oldest snapshot is dropped. None means no limit.

    History() has an optional argument called `monitor`, which should be a
    callable taking two positional arguments: the event name (one of the
    module-level constants SAVED, UNDONE, REDONE, ROLLED_BACK,
    NOTHING_TO_UNDO and NOTHING_TO_REDO) and the snapshot involved, or None.
    This can be used to report progress to the user.
    """

    def __init__(self, maxDepth=None, monitor=None):
        if maxDepth is not None and maxDepth < 1:
            raise ValueError(f"maxDepth must be at least 1, got {maxDepth}")
        self.undoStack = []
        self.redoStack = []
        self.maxDepth = maxDepth
        self._document = None
        self._monitor = monitor

    def _bind(self, document):
        # The stacks only make sense for the document that produced them.
        if self._document is None:
            self._document = document
        elif self._document is not document:
            raise HistoryError(
                f"history belongs to {self._document.path!r}, not {document.path!r}")

    def _push(self, stack, snapshot):
        stack.append(snapshot)
        if self.maxDepth is not None and len(stack) > self.maxDepth:
            del stack[0]

    def _notify(self, event, snapshot=None):
        logger.info("%s: %s", event, snapshot.path if snapshot is not None else "-")
        if self._monitor is not None:
            self._monitor(event, snapshot)

    def saveState(self, document):
        """Push the current state of `document` onto the undo stack, and clear
        the redo stack.
        """
        self._bind(document)
        snapshot = document.export()
        self._push(self.undoStack, snapshot)
        self.redoStack = []
        self._notify(SAVED, snapshot)

    @contextmanager
    def changeSet(self, document):
        """Returns a context manager that records the state of `document` and
        then runs the body, which is expected to modify the document.

        If the body raises, the stacks are put back the way they were, the
        document's content is reset to the recorded state (in memory only),
        and the exception propagates.
        """
        self._bind(document)
        undoStack = list(self.undoStack)
        redoStack = list(self.redoStack)
        snapshot = document.export()
        self.saveState(document)
        try:
            yield
        except Exception:
            self.undoStack = undoStack
            self.redoStack = redoStack
            document.edit(snapshot.content)
            self._notify(ROLLED_BACK, snapshot)
            raise

    def canUndo(self):
        return bool(self.undoStack)

    def canRedo(self):
        return bool(self.redoStack)

    def undoSnapshot(self):
        """Return the snapshot undo() would restore, or None."""
        if self.undoStack:
            return self.undoStack[-1]
        else:
            return None  # empty undo stack

    def redoSnapshot(self):
        """Return the snapshot redo() would restore, or None."""
        if self.redoStack:
            return self.redoStack[-1]
        else:
            return None  # empty redo stack

    def undo(self, document):
        """Restore the snapshot on top of the undo stack, after saving the
        current state of `document` on the redo stack. Returns True if a
        snapshot was restored, False if the undo stack was empty.
        """
        return self._performUndo(document, self.undoStack, self.redoStack,
                                 UNDONE, NOTHING_TO_UNDO)

    def redo(self, document):
        """Restore the snapshot on top of the redo stack, after saving the
        current state of `document` on the undo stack. Returns True if a
        snapshot was restored, False if the redo stack was empty.
        """
        return self._performUndo(document, self.redoStack, self.undoStack,
                                 REDONE, NOTHING_TO_REDO)

    def _performUndo(self, document, popStack, pushStack, doneEvent, emptyEvent):
        self._bind(document)
        if not popStack:
            self._notify(emptyEvent)
            return False
        snapshot = popStack.pop()
        self._push(pushStack, document.export())
        # If apply() fails the popped snapshot is gone; the caller gets the error.
        document.apply(snapshot)
        self._notify(doneEvent, snapshot)
        return True

    def clear(self):
        self.undoStack = []
        self.redoStack = []
