"""
Load query definitions from template files.

A template file holds one or more blocks, each introduced by a line that
starts with the query id prefix:

    ID:ARTIST_BY_NAME
    SELECT id FROM artist WHERE name = ${name}

    ID:ARTIST_COUNT
    SELECT COUNT(*) FROM artist

The body of a block is every line after its marker up to the next marker or
end of file, with leading and trailing blank lines dropped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import Literal

from querymanager.engines.query.errors import DuplicateID, MalformedDefinition, TemplateIOError

_log = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

DuplicateIdPolicy = Literal["error", "last_wins"]


def list_template_files(location: str | PathLike[str]) -> list[Path]:
    """
    Return every file at *location*: the path itself if it is a file, or all
    files below it (recursively, sorted by name) if it is a directory.
    """
    p = Path(location)
    if not p.exists():
        raise TemplateIOError(str(p), "no such file or directory")
    if p.is_file():
        return [p]

    try:
        children = sorted(p.iterdir(), key=lambda c: c.name)
    except OSError as e:
        raise TemplateIOError(str(p), e.strerror or str(e)) from e

    files: list[Path] = []
    for child in children:
        if child.is_dir():
            files.extend(list_template_files(child))
        else:
            files.append(child)
    return files


def _is_blank(line: str) -> bool:
    return not line.strip()


def _trim_blank_lines(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and _is_blank(lines[start]):
        start += 1
    while end > start and _is_blank(lines[end - 1]):
        end -= 1
    return lines[start:end]


class DefinitionLoader:
    """Reads template files and splits them into ``(id, raw body)`` pairs."""

    def __init__(
        self,
        query_id_prefix: str = "ID:",
        *,
        trim_id_whitespace: bool = True,
        duplicate_id_policy: DuplicateIdPolicy = "error",
    ) -> None:
        if not query_id_prefix:
            raise ValueError("query_id_prefix must not be empty")
        self.query_id_prefix = query_id_prefix
        self.trim_id_whitespace = trim_id_whitespace
        self.duplicate_id_policy = duplicate_id_policy

    def _marker_id(self, line: str) -> str | None:
        if not line.startswith(self.query_id_prefix):
            return None
        qid = line[len(self.query_id_prefix) :]
        if self.trim_id_whitespace:
            qid = qid.strip()
        return qid

    def split(self, text: str, *, path: str | None = None) -> list[tuple[str, str]]:
        """Split the content of one file into ``(id, body)`` pairs, in file order."""
        blocks: list[tuple[str, list[str]]] = []
        preamble: list[str] = []

        for line_no, line in enumerate(_LINE_BREAK.split(text), start=1):
            qid = self._marker_id(line)
            if qid is None:
                if blocks:
                    blocks[-1][1].append(line)
                else:
                    preamble.append(line)
                continue
            if not qid.strip():
                raise MalformedDefinition(f"line {line_no}: query id marker without an id", path=path)
            blocks.append((qid, []))

        if any(not _is_blank(line) for line in preamble):
            if not blocks:
                raise MalformedDefinition(
                    f"no line starts with the query id prefix {self.query_id_prefix!r}",
                    path=path,
                )
            raise MalformedDefinition("content found before the first query id", path=path)

        return [(qid, "\n".join(_trim_blank_lines(lines))) for qid, lines in blocks]

    def read(self, path: str | PathLike[str]) -> str:
        try:
            # utf-8-sig so a BOM cannot hide a marker on the first line
            return Path(path).read_text(encoding="utf-8-sig")
        except OSError as e:
            raise TemplateIOError(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise TemplateIOError(str(path), f"not valid UTF-8 ({e.reason})") from e

    def load(self, files: Iterable[str | PathLike[str]]) -> dict[str, str]:
        """
        Read *files* in order and return a mapping of query id to raw body.

        Raises ``TemplateIOError``, ``MalformedDefinition`` or ``DuplicateID``.
        """
        definitions: dict[str, str] = {}
        origin: dict[str, str] = {}

        for f in files:
            path = str(f)
            _log.debug("Parsing query file %s", path)
            for qid, body in self.split(self.read(f), path=path):
                if qid in definitions:
                    if self.duplicate_id_policy == "error":
                        raise DuplicateID(qid, path=path)
                    _log.warning(
                        "Query id %s from %s replaced by definition in %s", qid, origin[qid], path
                    )
                definitions[qid] = body
                origin[qid] = path

        return definitions
