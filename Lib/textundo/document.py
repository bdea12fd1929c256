from dataclasses import dataclass
import logging

from .storage import loadText, storeText


logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    pass


@dataclass(frozen=True)
class Snapshot:

    """An immutable capture of a document's state: the path of the file and
    its full content. Snapshots are created by TextDocument.export() and
    consumed by TextDocument.apply(); nobody else needs to look inside.
    """

    path: str
    content: str


class TextDocument:

    """A text file held in memory.

    The content can be replaced freely with edit(), but is only written to
    disk by save() or apply(). The path is fixed for the lifetime of the
    object.
    """

    def __init__(self, path, content="", encoding="utf-8"):
        self._path = str(path)
        self.content = content
        self.encoding = encoding

    @classmethod
    def open(cls, path, encoding="utf-8"):
        """Load the document at `path`. If there is no such file, an empty one
        is created. Raises StorageError for any other I/O problem.
        """
        path = str(path)
        content, exists = loadText(path, encoding)
        if not exists:
            logger.info("creating empty file %s", path)
            storeText(path, "", encoding)
        return cls(path, content, encoding)

    @property
    def path(self):
        return self._path

    def __repr__(self):
        return f"{self.__class__.__name__}({self._path!r}, {len(self.content)} characters)"

    def edit(self, newContent):
        self.content = newContent

    def export(self):
        return Snapshot(self._path, self.content)

    def apply(self, snapshot):
        """Restore the state captured in `snapshot` and write it to disk.

        The in-memory content is replaced before the write happens, so when
        the write fails (StorageError) memory and disk disagree until the
        next successful save().
        """
        if snapshot.path != self._path:
            raise SnapshotError(
                f"snapshot of {snapshot.path!r} can't be applied to {self._path!r}")
        self.content = snapshot.content
        self.save()

    def save(self):
        storeText(self._path, self.content, self.encoding)
