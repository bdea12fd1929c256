"""Export and import of a document's state, in two encodings:

- "binary": compact. The magic bytes b"TXUD" and a version byte, followed by
  the path and the content, each as a big-endian 32-bit byte count and UTF-8
  data.
- "xml": verbose, a <TextFile> element with <FilePath> and <Content>
  children.

The two encodings are independent of each other; loads() can tell them
apart, so the format argument is optional when decoding.
"""
import logging
import re
import struct
import xml.etree.ElementTree as ET

from .document import Snapshot
from .storage import StorageError


logger = logging.getLogger(__name__)


class SerializationError(ValueError):
    pass


BINARY = "binary"
XML = "xml"
FORMATS = (BINARY, XML)

MAGIC = b"TXUD"
VERSION = 1

_header = struct.Struct(">4sB")
_length = struct.Struct(">I")

# Characters outside the XML 1.0 Char production can't be stored in XML text.
_xmlIllegal = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _checkFormat(format):
    if format not in FORMATS:
        raise SerializationError(f"unknown format {format!r}, expected one of {FORMATS}")


def _encodeText(text):
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SerializationError(f"text can't be encoded as UTF-8: {e}") from e


def encodeBinary(snapshot):
    chunks = [_header.pack(MAGIC, VERSION)]
    for text in (snapshot.path, snapshot.content):
        data = _encodeText(text)
        chunks.append(_length.pack(len(data)))
        chunks.append(data)
    return b"".join(chunks)


def decodeBinary(data):
    if len(data) < _header.size:
        raise SerializationError("data too short for a binary dump")
    magic, version = _header.unpack_from(data)
    if magic != MAGIC:
        raise SerializationError(f"bad magic {magic!r}")
    if version != VERSION:
        raise SerializationError(f"unsupported binary dump version {version}")
    offset = _header.size
    fields = []
    for name in ("path", "content"):
        if offset + _length.size > len(data):
            raise SerializationError(f"truncated binary dump: missing {name} length")
        (size,) = _length.unpack_from(data, offset)
        offset += _length.size
        if offset + size > len(data):
            raise SerializationError(f"truncated binary dump: {name} is cut short")
        try:
            fields.append(data[offset:offset + size].decode("utf-8"))
        except UnicodeDecodeError as e:
            raise SerializationError(f"{name} is not valid UTF-8: {e}") from e
        offset += size
    if offset != len(data):
        raise SerializationError(f"{len(data) - offset} trailing bytes after binary dump")
    return Snapshot(*fields)


def encodeXML(snapshot):
    root = ET.Element("TextFile")
    for tag, text in (("FilePath", snapshot.path), ("Content", snapshot.content)):
        match = _xmlIllegal.search(text)
        if match is not None:
            raise SerializationError(
                f"{tag} contains character {match.group()!r} that XML can't represent")
        ET.SubElement(root, tag).text = text
    data = ET.tostring(root, encoding="utf-8", xml_declaration=True)
    # XML parsers turn a literal CR into LF; a character reference survives.
    return data.replace(b"\r", b"&#13;")


def decodeXML(data):
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise SerializationError(f"malformed XML dump: {e}") from e
    if root.tag != "TextFile":
        raise SerializationError(f"expected a <TextFile> element, found <{root.tag}>")
    fields = []
    for tag in ("FilePath", "Content"):
        element = root.find(tag)
        if element is None:
            raise SerializationError(f"<{tag}> element missing from XML dump")
        fields.append(element.text or "")
    return Snapshot(*fields)


def sniffFormat(data):
    if data.startswith(MAGIC):
        return BINARY
    if data.lstrip().startswith(b"<"):
        return XML
    raise SerializationError("data is neither a binary nor an XML dump")


def dumps(snapshot, format=BINARY):
    _checkFormat(format)
    if format == BINARY:
        return encodeBinary(snapshot)
    else:
        return encodeXML(snapshot)


def loads(data, format=None):
    if format is None:
        format = sniffFormat(data)
    _checkFormat(format)
    if format == BINARY:
        return decodeBinary(data)
    else:
        return decodeXML(data)


def writeDump(snapshot, outputPath, format=BINARY):
    data = dumps(snapshot, format)
    try:
        with open(outputPath, "wb") as f:
            f.write(data)
    except OSError as e:
        raise StorageError("dump", str(outputPath), e) from e
    logger.info("wrote %s dump of %s to %s", format, snapshot.path, outputPath)


def readDump(inputPath, format=None):
    try:
        with open(inputPath, "rb") as f:
            data = f.read()
    except OSError as e:
        raise StorageError("restore", str(inputPath), e) from e
    return loads(data, format)
