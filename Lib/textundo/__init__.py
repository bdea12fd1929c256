"""# textundo

A small text editor with undo and redo, plus keyword search over a directory
of text files.

Undo is implemented with snapshots: before every change, the complete state
of the document (its path and its content) is captured in an immutable
Snapshot and pushed onto an undo stack. Undoing pops the most recent
snapshot, saves the current state on the redo stack, and restores the
document from the snapshot. Redo works the same way in the other direction.
A new edit clears the redo stack.

The History object that manages the stacks never looks inside the snapshots;
only the TextDocument knows how to produce and apply them.

The TextEditor ties it together, and writes every change to disk:

    >>> import os, tempfile
    >>> path = os.path.join(tempfile.mkdtemp(), "a.txt")
    >>> editor = TextEditor()
    >>> editor.openFile(path)  # the file is created if it doesn't exist
    >>> editor.edit("v1")
    >>> editor.edit("v2")
    >>> editor.undo()
    True
    >>> editor.showContent()
    'v1'
    >>> editor.redo()
    True
    >>> editor.showContent()
    'v2'
    >>> editor.redo()  # nothing left to redo
    False

The state of a document can also be exported to a file, in a compact binary
form or as XML, with the functions in the textundo.dump module. The
textundo.search module finds the text files in a directory that contain
given keywords.
"""

from .document import Snapshot, TextDocument
from .editor import EditorError, TextEditor
from .history import History, HistoryError
from .storage import StorageError

__all__ = [
    "EditorError",
    "History",
    "HistoryError",
    "Snapshot",
    "StorageError",
    "TextDocument",
    "TextEditor",
]

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "<unknown>"
