"""
Shared file utilities for entry providers.
"""

import gzip
import json
from pathlib import Path
from typing import IO, Any, Union

from .exceptions import ParseError, SourceValidationError

GZIP_MAGIC = b"\x1f\x8b"


def open_text_auto_decompress(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
) -> IO[str]:
    """
    Open a text file, transparently un-gzipping it.

    Gzip is detected by a .gz suffix or by the gzip magic bytes, so
    exported timing files compressed without the suffix still open.

    Raises:
        SourceValidationError: If the path does not exist or is not a file
    """
    path = Path(file_path)

    if not path.exists():
        raise SourceValidationError(
            "Entry file not found", source=str(path), reason="path does not exist"
        )
    if not path.is_file():
        raise SourceValidationError(
            "Entry source is not a file", source=str(path), reason="not a file"
        )

    if path.suffix.lower() == ".gz":
        return gzip.open(path, "rt", encoding=encoding)

    with open(path, "rb") as f:
        magic = f.read(2)
    if magic == GZIP_MAGIC:
        return gzip.open(path, "rt", encoding=encoding)

    return open(path, "r", encoding=encoding)


def is_line_delimited(file_path: Union[str, Path]) -> bool:
    """Check whether a path names an NDJSON / JSON Lines file."""
    suffixes = [s.lower() for s in Path(file_path).suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    return bool(suffixes) and suffixes[-1] in (".ndjson", ".jsonl")


def load_json_document(file_path: Union[str, Path]) -> Any:
    """
    Load a whole JSON document from a (possibly gzipped) file.

    Raises:
        SourceValidationError: If the file is missing
        ParseError: If the content is not valid JSON
    """
    with open_text_auto_decompress(file_path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Invalid JSON: {e.msg}", source=str(file_path), line_number=e.lineno
            ) from e
