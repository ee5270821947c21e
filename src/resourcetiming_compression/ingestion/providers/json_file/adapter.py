"""
JSON file entry provider.

Supported layouts:
- JSON array of entry objects
- JSON object with an "entries" array (e.g. a saved beacon)
- NDJSON / JSON Lines (.ndjson, .jsonl), one entry per line

Gzip-compressed files are detected automatically.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from ...base import EntryProvider, TimingRecord
from ...exceptions import ParseError, ValidationError
from ...file_utils import (
    is_line_delimited,
    load_json_document,
    open_text_auto_decompress,
)
from ...registry import ProviderRegistry

logger = logging.getLogger(__name__)


@ProviderRegistry.register("json_file")
class JSONFileProvider(EntryProvider):
    """
    Provider reading timing entries from a JSON export.

    Entries use the browser's camelCase keys ("name", "initiatorType",
    "startTime", ...) or the TimingRecord attribute names.

    Usage:
        provider = JSONFileProvider("page-timings.json")
        records = provider.provide()
    """

    def __init__(
        self,
        path: Union[str, Path],
        strict_validation: bool = False,
    ):
        """
        Initialize the provider.

        Args:
            path: Path to the JSON / NDJSON file (optionally gzipped)
            strict_validation: If True, raise on entries that cannot be
                converted instead of skipping them
        """
        self.path = Path(path)
        self.strict_validation = strict_validation

    @property
    def provider_name(self) -> str:
        return "json_file"

    def provide(self) -> list[TimingRecord]:
        """
        Read all entries from the file.

        Raises:
            SourceValidationError: If the file does not exist
            ParseError: If the file is not valid JSON, has an unexpected
                layout, or (strict mode) holds an invalid entry
        """
        if is_line_delimited(self.path):
            records = self._read_ndjson()
        else:
            records = self._read_document()

        logger.info(f"Loaded {len(records)} timing records from {self.path}")
        return records

    def _read_document(self) -> list[TimingRecord]:
        document = load_json_document(self.path)

        if isinstance(document, dict) and "entries" in document:
            entries = document["entries"]
        else:
            entries = document

        if not isinstance(entries, list):
            raise ParseError(
                f"Expected a list of entries, got {type(entries).__name__}",
                source=str(self.path),
            )

        records = []
        for index, entry in enumerate(entries):
            record = self._to_record(entry, index + 1, line_based=False)
            if record is not None:
                records.append(record)
        return records

    def _read_ndjson(self) -> list[TimingRecord]:
        records = []
        with open_text_auto_decompress(self.path) as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    entry = json.loads(line)
                except json.JSONDecodeError as e:
                    if self.strict_validation:
                        raise ParseError(
                            f"Invalid JSON: {e.msg}",
                            source=str(self.path),
                            line_number=line_number,
                        ) from e
                    logger.debug(f"Skipping invalid JSON at line {line_number}: {e}")
                    continue

                record = self._to_record(entry, line_number, line_based=True)
                if record is not None:
                    records.append(record)
        return records

    def _to_record(
        self, entry: Any, position: int, line_based: bool
    ) -> TimingRecord | None:
        """Convert one raw entry; returns None for skipped entries."""
        try:
            if not isinstance(entry, dict):
                raise ValidationError(
                    f"Entry must be an object, got {type(entry).__name__}"
                )
            return TimingRecord.from_dict(entry)
        except ValidationError as e:
            if self.strict_validation:
                if line_based:
                    raise ParseError(
                        f"Invalid entry: {e}",
                        source=str(self.path),
                        line_number=position,
                    ) from e
                raise ParseError(
                    f"Invalid entry #{position}: {e}", source=str(self.path)
                ) from e
            logger.debug(f"Skipping invalid entry {position} in {self.path}: {e}")
            return None
