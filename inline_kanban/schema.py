"""
Kanban board schema.

A board is parsed fresh from its block text every time. Edits never touch a
board in place: mutations clone first, so the board that was parsed from the
original text stays valid for the write-back merge.
"""
import copy
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

# Column used for items without a status and for boards with no columns at all
DEFAULT_COLUMN = "Uncategorized"

_UNSET = object()


def build_raw_name(name: str, wip_limit: Optional[int] = None, color: Optional[str] = None) -> str:
    """Render a column declaration that re-parses to the same name, WIP limit and color."""
    parts = [name]
    if wip_limit is not None:
        parts.append(f"({wip_limit})")
    if color:
        parts.append(f"{{{color}}}")
    return " ".join(parts)


@dataclass
class ColumnDefinition:
    """One column declaration token, split into its parts."""
    raw_name: str                    # as authored, suffixes included
    base_name: str                   # display name, suffixes stripped
    wip_limit: Optional[int] = None
    color: Optional[str] = None      # lower-case "#rgb" / "#rrggbb" / "#rrggbbaa"


@dataclass
class KanbanItem:
    """One item entry; only lives while a board is being assembled."""
    status: str
    text: str                        # continuation lines joined with "\n"


@dataclass
class KanbanColumn:
    """A board column and the text of its items, in order."""

    name: str
    raw_name: str
    status_name: str                 # token written in front of items on save
    wip_limit: Optional[int] = None
    color: Optional[str] = None
    items: List[str] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: ColumnDefinition) -> "KanbanColumn":
        name = definition.base_name or definition.raw_name
        return cls(
            name=name,
            raw_name=definition.raw_name,
            status_name=name,
            wip_limit=definition.wip_limit,
            color=definition.color,
        )

    @classmethod
    def build(
        cls,
        name: str,
        wip_limit: Optional[int] = None,
        color: Optional[str] = None,
        items: Optional[List[str]] = None,
    ) -> "KanbanColumn":
        """Create a column whose raw_name is derived from its parts."""
        name = name.strip()
        return cls(
            name=name,
            raw_name=build_raw_name(name, wip_limit, color),
            status_name=name,
            wip_limit=wip_limit,
            color=color,
            items=list(items or []),
        )

    def with_changes(self, name=_UNSET, wip_limit=_UNSET, color=_UNSET) -> "KanbanColumn":
        """
        Return a copy with name / WIP limit / color replaced.

        raw_name is rebuilt from the new parts so it keeps re-parsing to the
        same values. status_name follows the name unless the column was
        using its raw name as the item marker.
        """
        new_name = self.name if name is _UNSET else name.strip()
        new_limit = self.wip_limit if wip_limit is _UNSET else wip_limit
        new_color = self.color if color is _UNSET else color
        raw_name = build_raw_name(new_name, new_limit, new_color)
        status_name = raw_name if self.status_name == self.raw_name != self.name else new_name
        return KanbanColumn(
            name=new_name,
            raw_name=raw_name,
            status_name=status_name,
            wip_limit=new_limit,
            color=new_color,
            items=list(self.items),
        )

    def is_over_limit(self) -> bool:
        return self.wip_limit is not None and len(self.items) > self.wip_limit

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class KanbanBoard:
    """Ordered columns of a single kanban block."""

    columns: List[KanbanColumn] = field(default_factory=list)

    def clone(self) -> "KanbanBoard":
        return copy.deepcopy(self)

    def total_items(self) -> int:
        return sum(len(column.items) for column in self.columns)

    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def to_dict(self) -> Dict[str, Any]:
        return {"columns": [column.to_dict() for column in self.columns]}
