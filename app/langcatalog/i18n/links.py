"""Link sentinel detection.

A language payload is a link, not data, iff its first 6 characters (text)
or bytes (binary) are ``_link:``. Everything after the sentinel, up to the
end of the payload, is the target language name, exactly, with no trimming.
"""

from pathlib import Path
from typing import Optional, Union

from langcatalog.i18n.exceptions import LanguageDecodeError

LINK_SENTINEL = "_link:"
LINK_SENTINEL_BYTES = LINK_SENTINEL.encode("ascii")
SENTINEL_LENGTH = len(LINK_SENTINEL_BYTES)

# Longest '*.link' file read in directory-by-extension mode
LINK_FILE_LIMIT = 16


def split_link_str(text: str) -> Optional[str]:
    """Return the link target of a text payload, or None if it is not a link."""
    if text[:SENTINEL_LENGTH] == LINK_SENTINEL:
        return text[SENTINEL_LENGTH:]
    return None


def is_link_prefix(prefix: bytes) -> bool:
    """Check the first bytes of a payload against the sentinel."""
    return bytes(prefix[:SENTINEL_LENGTH]) == LINK_SENTINEL_BYTES


def decode_link_target(data: bytes) -> str:
    """Decode the bytes following the sentinel.

    Raises:
        LanguageDecodeError: If the target is not valid UTF-8.
    """
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise LanguageDecodeError(f"Link target is not valid UTF-8: {e}") from e


def split_link_bytes(data: bytes) -> Optional[str]:
    """Return the link target of a byte payload, or None if it is not a link.

    Payloads shorter than the sentinel are never links.

    Raises:
        LanguageDecodeError: If the link target is not valid UTF-8.
    """
    if len(data) < SENTINEL_LENGTH or not is_link_prefix(data):
        return None
    return decode_link_target(data[SENTINEL_LENGTH:])


def read_link_file(path: Union[str, Path], limit: int = LINK_FILE_LIMIT) -> Optional[str]:
    """Read a short '*.link' file and return its target.

    Only the first ``limit`` bytes are read. Files that do not start with
    the sentinel, or whose target is not valid UTF-8, are not links.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read(limit)
    try:
        return split_link_bytes(data)
    except LanguageDecodeError:
        return None
