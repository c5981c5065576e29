#!/usr/bin/env python3
"""
inline-kanban: work with kanban blocks inside Markdown files

Usage:
    inline-kanban show notes.md                       # print block 0
    inline-kanban show notes.md --block 1 --json      # board as JSON
    inline-kanban show notes.md --payloads            # drag payload after each column and card
    inline-kanban blocks notes.md                     # list kanban blocks
    inline-kanban move-card notes.md 0 2 1 0          # card (0,2) -> column 1, position 0
    inline-kanban move-card notes.md --payload '{"columnIndex":0,"itemIndex":2}' 1 0
    inline-kanban move-column notes.md 2 0            # column 2 becomes first
    inline-kanban format notes.md                     # rewrite block in place
    inline-kanban watch notes.md                      # re-print on every save

Exit status: 0 ok, 1 the edit could not be saved, 2 bad arguments.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .cache import PendingHighlight
from .config import Config
from .document import BlockNotFoundError
from .edit_queue import block_id
from .payload import CardDragPayload, ColumnDragPayload
from .schema import KanbanBoard
from .session import BoardSession
from .watcher import watch_document

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_USAGE = 2


class UsageError(Exception):
    """Raised for arguments that parse but do not make sense."""
    pass


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def render_board(board: KanbanBoard, highlight: Optional[PendingHighlight] = None,
                 column_offset: int = 0, payloads: bool = False) -> str:
    """
    Plain-text listing of a board; the highlighted card is marked with '*'.

    With payloads=True every column and card is followed by the drag payload
    that move-card / move-column --payload accept for it.
    """
    out = []
    for ci, column in enumerate(board.columns):
        if ci < column_offset:
            continue
        count = str(len(column.items))
        if column.wip_limit is not None:
            count = f"{count}/{column.wip_limit}"
        header = f"{ci}. {column.name} [{count}]"
        if column.is_over_limit():
            header += " over limit"
        if column.color:
            header += f" {column.color}"
        if payloads:
            header += f"  {ColumnDragPayload(ci).to_json()}"
        out.append(header)

        if not column.items:
            out.append("     (empty)")
        for ii, text in enumerate(column.items):
            first, *rest = text.split("\n")
            marked = highlight is not None and (highlight.column_index, highlight.item_index) == (ci, ii)
            entry = f"  {'*' if marked else ' '}{ii}. {first}"
            if payloads:
                entry += f"  {CardDragPayload(ci, ii).to_json()}"
            out.append(entry)
            out.extend(f"       {line}" for line in rest)
    return "\n".join(out)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Commands
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def _check_block(session: BoardSession, path: str, index: int) -> None:
    doc = session.document(path)
    if not doc.path.exists():
        raise UsageError(f"No such file: {doc.path}")
    found = len(doc.blocks())
    if not 0 <= index < found:
        raise UsageError(f"{doc.path} has {found} {doc.language} block(s); no block #{index}")


def _run_edit(session: BoardSession, make_task) -> int:
    """Run one queued edit to completion and map its outcome to an exit status."""

    async def runner():
        task = make_task()
        if task is None:
            return EXIT_USAGE
        result = await task
        await session.drain()
        return EXIT_WRITE_FAILED if result is None else EXIT_OK

    return asyncio.run(runner())


def cmd_show(session: BoardSession, args) -> int:
    _check_block(session, args.path, args.block)
    if args.from_column:
        session.scroll.remember(block_id(args.path, args.block), args.from_column)
    board, highlight, offset = session.snapshot(args.path, args.block)
    if args.json:
        print(json.dumps(board.to_dict(), indent=2))
    else:
        print(render_board(board, highlight, offset, payloads=args.payloads))
    return EXIT_OK


def cmd_blocks(session: BoardSession, args) -> int:
    doc = session.document(args.path)
    if not doc.path.exists():
        raise UsageError(f"No such file: {doc.path}")
    text = doc.read()
    for location in doc.blocks(text):
        board = doc.board(location.index, text)
        print(
            f"#{location.index}  lines {location.start_line + 1}-{location.end_line + 1}  "
            f"{len(board.columns)} columns, {board.total_items()} items"
        )
    return EXIT_OK


def cmd_move_card(session: BoardSession, args) -> int:
    _check_block(session, args.path, args.block)
    if args.payload is not None:
        if len(args.indices) != 2:
            raise UsageError("with --payload, give TO_COL TO_ITEM")
        to_column, to_item = args.indices
        status = _run_edit(session, lambda: session.drop_card(args.path, args.block, args.payload, to_column, to_item))
        if status == EXIT_USAGE:
            raise UsageError(f"Invalid card payload: {args.payload}")
    else:
        if len(args.indices) != 4:
            raise UsageError("give FROM_COL FROM_ITEM TO_COL TO_ITEM")
        from_column, from_item, to_column, to_item = args.indices
        status = _run_edit(
            session,
            lambda: session.move_card(args.path, args.block, from_column, from_item, to_column, to_item),
        )
    if status == EXIT_OK:
        board, highlight, offset = session.snapshot(args.path, args.block)
        print(render_board(board, highlight, offset))
    return status


def cmd_move_column(session: BoardSession, args) -> int:
    _check_block(session, args.path, args.block)
    if args.payload is not None:
        if len(args.indices) != 1:
            raise UsageError("with --payload, give TO")
        status = _run_edit(
            session, lambda: session.drop_column(args.path, args.block, args.payload, args.indices[0])
        )
        if status == EXIT_USAGE:
            raise UsageError(f"Invalid column payload: {args.payload}")
    else:
        if len(args.indices) != 2:
            raise UsageError("give FROM TO")
        from_index, to_index = args.indices
        status = _run_edit(session, lambda: session.move_column(args.path, args.block, from_index, to_index))
    if status == EXIT_OK:
        board, _, offset = session.snapshot(args.path, args.block)
        print(render_board(board, None, offset))
    return status


def cmd_format(session: BoardSession, args) -> int:
    _check_block(session, args.path, args.block)
    return _run_edit(session, lambda: session.format_block(args.path, args.block))


def cmd_watch(session: BoardSession, args) -> int:
    _check_block(session, args.path, args.block)
    key = block_id(args.path, args.block)
    session.scroll.remember(key, args.from_column)

    def reprint(_path: Path) -> None:
        try:
            board, highlight, offset = session.snapshot(args.path, args.block)
        except BlockNotFoundError as e:
            logger.warning(str(e))
            session.scroll.forget(key)
            return
        print(f"\n── {args.path} (block {args.block}) ──")
        print(render_board(board, highlight, offset))

    reprint(Path(args.path))
    watch_document(args.path, reprint, session.config.debounce_ms)
    return EXIT_OK


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Entry point
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="inline-kanban",
        description="Kanban boards in fenced Markdown blocks",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--config", default=None, help="Path to config.yaml")
    ap.add_argument("--notify-url", default=None, help="Webhook for write-failure notices")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = ap.add_subparsers(dest="command", required=True)

    def with_target(name: str, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("path", help="Markdown file")
        p.add_argument("--block", type=int, default=0, help="Which kanban block (default: 0)")
        return p

    p = with_target("show", "Print a board")
    p.add_argument("--json", action="store_true", help="Print the board as JSON")
    p.add_argument("--payloads", action="store_true", help="Print the drag payload of each column and card")
    p.add_argument("--from-column", type=int, default=0, help="Skip the first N columns")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("blocks", help="List the kanban blocks in a file")
    p.add_argument("path", help="Markdown file")
    p.set_defaults(func=cmd_blocks)

    p = with_target("move-card", "Move a card")
    p.add_argument("--payload", default=None, help='Card drag payload, e.g. {"columnIndex":0,"itemIndex":1}')
    p.add_argument("indices", type=int, nargs="+", help="FROM_COL FROM_ITEM TO_COL TO_ITEM (or TO_COL TO_ITEM)")
    p.set_defaults(func=cmd_move_card)

    p = with_target("move-column", "Move a column")
    p.add_argument("--payload", default=None, help='Column drag payload, e.g. {"columnIndex":2}')
    p.add_argument("indices", type=int, nargs="+", help="FROM TO (or TO)")
    p.set_defaults(func=cmd_move_column)

    p = with_target("format", "Rewrite a block through the merger")
    p.set_defaults(func=cmd_format)

    p = with_target("watch", "Re-print a board whenever the file changes")
    p.add_argument("--from-column", type=int, default=0, help="Skip the first N columns")
    p.set_defaults(func=cmd_watch)

    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    cfg = Config.load(args.config)
    if args.notify_url:
        cfg.notify_url = args.notify_url
    if args.log_level:
        cfg.log_level = args.log_level.upper()

    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s [inline-kanban] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    session = BoardSession(cfg)
    try:
        return args.func(session, args)
    except UsageError as e:
        print(f"inline-kanban: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
