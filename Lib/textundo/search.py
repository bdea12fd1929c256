"""Keyword search over the text files in a directory.

Only files directly inside the directory are considered (no recursion), and
only those whose name matches the pattern, "*.txt" by default.
"""
import logging
import os
from fnmatch import fnmatch

from .storage import StorageError, loadText


logger = logging.getLogger(__name__)


def parseKeywords(text):
    """Split a comma-separated keyword list. Surrounding whitespace is
    stripped, empty entries and repeats are dropped.

        >>> parseKeywords("undo, redo,,undo ")
        ['undo', 'redo']
    """
    keywords = []
    for keyword in text.split(","):
        keyword = keyword.strip()
        if keyword and keyword not in keywords:
            keywords.append(keyword)
    return keywords


def _iterTexts(directory, pattern, encoding):
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise StorageError("scan", str(directory), e) from e
    for name in names:
        path = os.path.join(directory, name)
        if not fnmatch(name, pattern) or not os.path.isfile(path):
            continue
        try:
            content, exists = loadText(path, encoding)
        except StorageError as e:
            logger.warning("skipping %s: %s", path, e.reason)
            continue
        if exists:
            yield path, content


def findFiles(directory, keywords, pattern="*.txt", encoding="utf-8"):
    """Return the sorted paths of the files in `directory` that contain at
    least one of `keywords`.
    """
    return [path for path, content in _iterTexts(directory, pattern, encoding)
            if any(keyword in content for keyword in keywords)]


def buildIndex(directory, keywords, pattern="*.txt", encoding="utf-8"):
    """Map each keyword to the sorted paths of the files in `directory` that
    contain it. Every keyword gets an entry, empty if nothing matches.
    """
    index = {keyword: [] for keyword in keywords}
    for path, content in _iterTexts(directory, pattern, encoding):
        for keyword in index:
            if keyword in content:
                index[keyword].append(path)
    logger.info("indexed %d keywords in %s", len(index), directory)
    return index
