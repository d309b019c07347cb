# logstream.py
# fold raw process output chunks into display-ready log entries
#

from __future__ import annotations

from dataclasses import replace
from typing import List, Mapping, Sequence, Tuple, Union

from viralflow_gui.utils import LogEntry

Chunk = Union[LogEntry, Tuple[str, str], Mapping[str, str]]


def as_entry(chunk: Chunk) -> LogEntry:
    """LogEntry / (kind, text) / {"kind", "text"} -> LogEntry"""
    if isinstance(chunk, LogEntry):
        return chunk
    if isinstance(chunk, Mapping):
        return LogEntry(kind=chunk.get("kind", "stdout"), text=chunk.get("text") or "")
    kind, text = chunk
    return LogEntry(kind=kind, text=text or "")


def rewrite_line(current: str, part: str) -> str:
    """carriage return: drop everything after the last newline, then write part"""
    nl = current.rfind("\n")
    return current[: nl + 1] + part


class LogStreamReducer:
    """
    Keeps the log of one run. Chunks without a carriage return become new
    entries; a chunk with '\\r' continues the last entry and redraws its
    current line, so progress bars end up as a single line.
    """

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []

    @property
    def entries(self) -> Sequence[LogEntry]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        self._entries = []

    def apply(self, chunk: Chunk) -> List[LogEntry]:
        entry = as_entry(chunk)

        if not self._entries:
            self._entries.append(entry)
            return list(self._entries)

        text = entry.text.replace("\r\n", "\n")

        if "\r" not in text:
            self._entries.append(entry)
            return list(self._entries)

        parts = text.split("\r")
        # kind stays the one of the entry being continued
        current = self._entries[-1].text + parts[0]
        for part in parts[1:]:
            current = rewrite_line(current, part)

        self._entries[-1] = replace(self._entries[-1], text=current)
        return list(self._entries)
