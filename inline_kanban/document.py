"""
Markdown documents holding kanban blocks.

A board lives in a fenced code block:

    ```kanban
    columns: Todo, Doing, Done
    items:
      - [Todo] Something
    ```

This module finds those blocks and does the read-modify-write for an edit:
the block is parsed, edited, merged back into its own lines, and the file is
only written when the result differs from what is on disk.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .merger import merge_kanban_block
from .parser import parse_kanban_source
from .schema import KanbanBoard

logger = logging.getLogger(__name__)

FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})\s*([^\s`]*)")
FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})\s*$")
NEWLINE_RE = re.compile(r"\r?\n")

BoardEdit = Callable[[KanbanBoard], KanbanBoard]


class BlockNotFoundError(LookupError):
    """Raised when a document has no kanban block with the requested index."""
    pass


@dataclass
class BlockLocation:
    """Where a kanban block sits in its document (0-based line numbers)."""
    index: int
    start_line: int          # opening fence
    end_line: int            # closing fence, or len(lines) if never closed
    fence: str

    @property
    def content_slice(self) -> slice:
        return slice(self.start_line + 1, self.end_line)


def split_lines(text: str) -> Tuple[List[str], str, bool]:
    """Split text into lines, returning the newline style and whether it ended with one."""
    newline = "\r\n" if "\r\n" in text else "\n"
    trailing = text.endswith("\n")
    lines = NEWLINE_RE.split(text)
    if trailing:
        lines.pop()
    return lines, newline, trailing


def join_lines(lines: List[str], newline: str = "\n", trailing: bool = True) -> str:
    text = newline.join(lines)
    if trailing and lines:
        text += newline
    return text


def _closes(line: str, fence: str) -> bool:
    match = FENCE_CLOSE_RE.match(line)
    if not match:
        return False
    closing = match.group(1)
    return closing[0] == fence[0] and len(closing) >= len(fence)


def find_kanban_blocks(lines: List[str], language: str = "kanban") -> List[BlockLocation]:
    """Locate fenced blocks whose info string names `language`."""
    blocks: List[BlockLocation] = []
    wanted = language.strip().lower()
    i = 0
    while i < len(lines):
        match = FENCE_OPEN_RE.match(lines[i])
        if not match:
            i += 1
            continue
        fence, info = match.group(1), match.group(2)
        end = i + 1
        while end < len(lines) and not _closes(lines[end], fence):
            end += 1
        if info.lower() == wanted:
            blocks.append(BlockLocation(index=len(blocks), start_line=i, end_line=end, fence=fence))
        i = end + 1
    return blocks


class KanbanDocument:
    """A Markdown file on disk and the kanban blocks inside it."""

    def __init__(self, path, language: str = "kanban"):
        self.path = Path(path).expanduser()
        self.language = language

    def __repr__(self) -> str:
        return f"KanbanDocument({str(self.path)!r})"

    # ── Whole-document I/O ───────────────────────────────────

    def read(self) -> str:
        # newline="" keeps \r\n intact so untouched lines are written back as they were
        with open(self.path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def write(self, text: str) -> None:
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(text)

    # ── Blocks ───────────────────────────────────────────────

    def blocks(self, text: Optional[str] = None) -> List[BlockLocation]:
        lines, _, _ = split_lines(self.read() if text is None else text)
        return find_kanban_blocks(lines, self.language)

    def locate(self, lines: List[str], index: int) -> BlockLocation:
        blocks = find_kanban_blocks(lines, self.language)
        if not 0 <= index < len(blocks):
            raise BlockNotFoundError(
                f"{self.path} has {len(blocks)} {self.language} block(s); no block #{index}"
            )
        return blocks[index]

    def block_lines(self, index: int, text: Optional[str] = None) -> List[str]:
        lines, _, _ = split_lines(self.read() if text is None else text)
        return lines[self.locate(lines, index).content_slice]

    def board(self, index: int, text: Optional[str] = None) -> KanbanBoard:
        return parse_kanban_source("\n".join(self.block_lines(index, text)))

    def apply_edit(self, index: int, edit: BoardEdit) -> bool:
        """
        Read, parse block `index`, apply `edit`, merge and write.

        Returns True if the file was written, False if the edit left the
        text unchanged.
        """
        text = self.read()
        lines, newline, trailing = split_lines(text)
        location = self.locate(lines, index)
        original = lines[location.content_slice]

        board = parse_kanban_source("\n".join(original))
        merged = merge_kanban_block(original, edit(board))

        new_lines = lines[:location.start_line + 1] + merged + lines[location.end_line:]
        new_text = join_lines(new_lines, newline, trailing)
        if new_text == text:
            logger.debug(f"Edit to {self.path} block {index} left the text unchanged")
            return False

        self.write(new_text)
        logger.info(f"Updated {self.path} block {index}")
        return True
