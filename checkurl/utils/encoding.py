"""
Input Decoder - Reads the URL list file and normalizes its encoding
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)

# Byte-order marks checked in order; the UTF-8 mark is longest so it goes first
BOMS = [
    (b'\xef\xbb\xbf', 'utf-8-sig', 'UTF-8'),
    (b'\xff\xfe', 'utf-16', 'UTF-16LE'),
    (b'\xfe\xff', 'utf-16', 'UTF-16BE'),
]


class InputDecodeError(ValueError):
    """Raised when the input file cannot be decoded"""


def detect_encoding(data: bytes) -> Tuple[str, str]:
    """
    Detect the codec to use for raw file bytes

    Returns:
        (codec name for bytes.decode, human readable encoding name)
    """
    for bom, codec, name in BOMS:
        if data.startswith(bom):
            return codec, name
    return 'utf-8', 'UTF-8'


def decode_input(data: bytes) -> str:
    """Decode file bytes to text, honoring a leading byte-order mark"""
    codec, name = detect_encoding(data)

    try:
        text = data.decode(codec)
    except UnicodeDecodeError as e:
        raise InputDecodeError(f"Could not decode input as {name}: {e}") from e

    logger.info(f"Detected file encoding: {name}")
    return text


def split_urls(text: str) -> List[str]:
    """Split decoded text into trimmed, non-empty lines"""
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_urls(path: Union[str, Path]) -> List[str]:
    """
    Read the URL list from a file

    Args:
        path: Path to a UTF-8, UTF-16LE or UTF-16BE text file

    Returns:
        URLs in file order

    Raises:
        FileNotFoundError: if the file does not exist
        InputDecodeError: if the content cannot be decoded
    """
    data = Path(path).read_bytes()
    urls = split_urls(decode_input(data))
    logger.info(f"Read {len(urls)} URLs from file")
    return urls
