import logging
import os
import shutil
import tempfile


logger = logging.getLogger(__name__)


class StorageError(OSError):

    """Raised when a file can't be read or written. The failing operation
    ("load", "store", ...) and the path are available as attributes, so the
    user can be told what to retry.
    """

    def __init__(self, operation, path, reason):
        super().__init__(f"{operation} failed for {path!r}: {reason}")
        self.operation = operation
        self.path = path
        self.reason = reason


def loadText(path, encoding="utf-8"):
    """Read the full text of `path`. Returns a (content, exists) tuple; a
    missing file gives ("", False) rather than an error.

    Newline translation is disabled, so the text comes back exactly as it was
    stored.
    """
    try:
        with open(path, encoding=encoding, newline="") as f:
            content = f.read()
    except FileNotFoundError:
        return "", False
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError("load", path, e) from e
    logger.debug("loaded %d characters from %s", len(content), path)
    return content, True


def storeText(path, content, encoding="utf-8"):
    """Write `content` to `path`, replacing whatever was there.

    The text is encoded before the file is touched, and an existing file is
    replaced in one step by renaming a fully written temporary file over
    it. When StorageError is raised, the file on disk is unchanged.
    """
    try:
        data = content.encode(encoding)
    except UnicodeEncodeError as e:
        raise StorageError("store", path, e) from e
    target = os.path.realpath(path)
    try:
        if not os.path.exists(target):
            with open(target, "wb") as f:
                f.write(data)
        else:
            _replaceFile(target, data)
    except OSError as e:
        raise StorageError("store", path, e) from e
    logger.debug("stored %d characters to %s", len(content), path)


def _replaceFile(target, data):
    fd, tempPath = tempfile.mkstemp(dir=os.path.dirname(target),
                                    prefix=".", suffix=".textundo-tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        shutil.copymode(target, tempPath)
        os.replace(tempPath, target)
    except OSError:
        os.unlink(tempPath)
        raise
