"""
Custom exceptions for the compression module.
"""


class CompressionError(Exception):
    """
    Base exception for compression and decompression errors.
    """

    pass


class ReservedCharacterError(CompressionError):
    """
    Raised when a URL contains the reserved "|" separator.

    "|" both joins multiple records for one URL and marks a terminal
    leaf in the trie, so such a URL cannot be encoded unambiguously.

    Attributes:
        url: The rejected URL
        character: The reserved character found
    """

    def __init__(self, url: str, character: str = "|"):
        self.url = url
        self.character = character
        super().__init__(
            f"URL contains reserved character {character!r}: {url[:100]!r}"
        )


class DecodeError(CompressionError):
    """
    Raised when a compressed payload cannot be decoded.

    Attributes:
        message: Detailed error message
        key: URL or trie path where decoding failed (optional)
        content: The offending encoded text (optional)
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        content: str | None = None,
    ):
        self.message = message
        self.key = key
        self.content = content
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.key is not None:
            parts.append(f"key={self.key!r}")
        if self.content is not None:
            parts.append(f"content={self.content[:100]!r}")
        return " - ".join(parts)
