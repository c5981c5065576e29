# Inline kanban: boards written as fenced blocks inside Markdown documents
#
# Components:
#   schema.py      - Data model (KanbanBoard, KanbanColumn, ColumnDefinition, KanbanItem)
#   grammar.py     - Line recognizers for headers, list entries, column and item notations
#   parser.py      - Block text -> KanbanBoard
#   resolver.py    - Declared vs. inferred columns, status-name selection
#   mutations.py   - Pure card/column moves
#   payload.py     - Drag payload decoding and validation
#   merger.py      - Format-preserving write-back of a board into its original block
#   document.py    - Fenced block location and whole-document read/write
#   edit_queue.py  - Per-block ordered read-modify-write queue
#   cache.py       - Pending highlight and scroll offset caches
#   notifier.py    - Write-failure notifications
#   config.py      - YAML configuration
#   watcher.py     - File watching (watchdog)
#   session.py     - Drops and moves turned into queued edits; owns the caches
#   cli.py         - Command-line entry point

__version__ = "0.3.0"
