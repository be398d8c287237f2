"""Chunked streaming reads of JSON files."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterator, Optional, TextIO, Union
from .config import MapperConfig
from .parser import JSONParser

PathLike = Union[str, Path]

_STRING_SPECIAL = re.compile(r'["\\]')
_STRUCTURAL = re.compile(r'["{}\[\]]')
_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER_TAIL = re.compile(r"[0-9.eE+\-]*")


class DocumentScanner:
    """
    Incremental token scanner tracking where the top-level value ends.

    Chunks are fed in order; the scanner follows string and container
    boundaries across chunk edges. Top-level scalars other than strings
    cannot be delimited and complete only at end of input.
    """

    def __init__(self):
        self.depth = 0
        self.in_string = False
        self.escape = False
        self.started = False
        self.delimited = True
        self.consumed = 0
        self.end: Optional[int] = None

    @property
    def complete(self) -> bool:
        return self.end is not None

    def feed(self, chunk: str) -> Optional[int]:
        """
        Scan the next chunk.

        Returns:
            Absolute offset just past the top-level value once it is complete,
            otherwise None
        """
        if self.complete:
            return self.end

        pos = 0
        length = len(chunk)

        while pos < length:
            if not self.started:
                match = _WHITESPACE.match(chunk, pos)
                pos = match.end()
                if pos >= length:
                    break
                self.started = True
                first = chunk[pos]
                if first in "{[":
                    self.depth = 1
                elif first == '"':
                    self.in_string = True
                else:
                    self.delimited = False
                pos += 1
                continue

            if not self.delimited:
                break

            if self.in_string:
                if self.escape:
                    self.escape = False
                    pos += 1
                    continue
                match = _STRING_SPECIAL.search(chunk, pos)
                if match is None:
                    pos = length
                    break
                pos = match.end()
                if match.group() == "\\":
                    self.escape = True
                    continue
                self.in_string = False
                if self.depth == 0:
                    self.end = self.consumed + pos
                    break
                continue

            match = _STRUCTURAL.search(chunk, pos)
            if match is None:
                pos = length
                break
            pos = match.end()
            token = match.group()
            if token == '"':
                self.in_string = True
            elif token in "{[":
                self.depth += 1
            else:
                self.depth -= 1
                if self.depth == 0:
                    self.end = self.consumed + pos
                    break

        self.consumed += length
        return self.end


class StreamingReader:
    """
    Reads JSON documents from files in fixed-size chunks.

    ``read_tree`` scans the file incrementally to find the end of the
    top-level value before decoding it; ``iter_items`` decodes the elements
    of a top-level array one at a time without holding the whole array.
    """

    def __init__(self, config: Optional[MapperConfig] = None,
                 parser: Optional[JSONParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the streaming reader.

        Args:
            config: Mapper configuration (chunk size and encoding)
            parser: JSON parser used to decode scanned documents
            logger: Optional logger instance
        """
        self.config = config or MapperConfig()
        self.parser = parser or JSONParser(self.config)
        self.logger = logger or logging.getLogger(__name__)

    def read_tree(self, path: PathLike) -> Any:
        """
        Read the JSON document stored at ``path``.

        Raises:
            OSError: If the file cannot be opened or read
            ValueError: If the content is not a single valid JSON document
        """
        scanner = DocumentScanner()
        chunks = []
        chunk_count = 0

        with open(path, "r", encoding=self.config.encoding) as handle:
            for chunk in self._chunks(handle):
                chunk_count += 1
                chunks.append(chunk)
                if scanner.feed(chunk) is not None:
                    break

            document = "".join(chunks)
            if scanner.complete:
                self._ensure_trailing_whitespace(handle, document, scanner.end)
                document = document[:scanner.end]

        self.logger.debug(f"Scanned {path} in {chunk_count} chunks ({len(document)} chars)")
        return self.parser.parse(document)

    def iter_items(self, path: PathLike) -> Iterator[Any]:
        """
        Yield the elements of the top-level JSON array stored at ``path``.

        Raises:
            OSError: If the file cannot be opened or read
            ValueError: If the document is not a valid JSON array
        """
        decoder = self.parser.decoder

        with open(path, "r", encoding=self.config.encoding) as handle:
            chunks = self._chunks(handle)
            buffer = ""
            eof = False

            def fill() -> bool:
                nonlocal buffer, eof
                chunk = next(chunks, None)
                if chunk is None:
                    eof = True
                    return False
                buffer += chunk
                return True

            def skip_whitespace(pos: int) -> int:
                while True:
                    pos = _WHITESPACE.match(buffer, pos).end()
                    if pos < len(buffer) or not fill():
                        return pos

            pos = skip_whitespace(0)
            if pos >= len(buffer) or buffer[pos] != "[":
                raise json.JSONDecodeError("Expected top-level array", buffer, pos)
            pos = skip_whitespace(pos + 1)

            if pos < len(buffer) and buffer[pos] == "]":
                self._ensure_trailing_whitespace(handle, buffer, pos + 1)
                return

            count = 0
            while True:
                while True:
                    try:
                        item, end = decoder.raw_decode(buffer, pos)
                    except json.JSONDecodeError:
                        if not fill():
                            raise
                        continue
                    # a number at the buffer edge may continue in the next chunk
                    if _NUMBER_TAIL.match(buffer, end).end() >= len(buffer) and fill():
                        continue
                    break

                count += 1
                yield item

                pos = skip_whitespace(end)
                if pos >= len(buffer):
                    raise json.JSONDecodeError("Unterminated array", buffer, pos)
                if buffer[pos] == "]":
                    self._ensure_trailing_whitespace(handle, buffer, pos + 1)
                    break
                if buffer[pos] != ",":
                    raise json.JSONDecodeError("Expecting ',' delimiter", buffer, pos)
                pos = skip_whitespace(pos + 1)

                # drop consumed input
                buffer = buffer[pos:]
                pos = 0

        self.logger.debug(f"Streamed {count} items from {path}")

    def _chunks(self, handle: TextIO) -> Iterator[str]:
        while True:
            chunk = handle.read(self.config.stream_chunk_size)
            if not chunk:
                return
            yield chunk

    def _ensure_trailing_whitespace(self, handle: TextIO, document: str, end: int) -> None:
        """Raise if anything but whitespace follows the top-level value."""
        rest = document[end:]
        offset = end
        while True:
            if rest.strip(" \t\n\r"):
                raise json.JSONDecodeError("Extra data", document, offset)
            offset += len(rest)
            rest = handle.read(self.config.stream_chunk_size)
            if not rest:
                return
