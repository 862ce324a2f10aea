"""Dataclasses describing statement tables, column mappings and canonical records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

Row = tuple[str, ...]
RawTable = tuple[Row, ...]


class SemanticField(str, Enum):
    """Target concepts a statement column may represent."""

    DATE = "date"
    DESCRIPTION = "description"
    DEBIT = "debit"
    CREDIT = "credit"
    PAYEE = "payee"
    REFERENCE = "reference"
    CHECK_NUMBER = "checkNumber"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def required(self) -> bool:
        return self in REQUIRED_FIELDS

    @classmethod
    def lookup(cls, name: str) -> SemanticField:
        """Resolve a field from its value or display name, case-insensitively."""
        key = "".join(name.split()).lower()
        for member in cls:
            if key in {member.value.lower(), "".join(member.display_name.split()).lower()}:
                return member
        raise ValueError(f"Unknown field '{name}'")


_DISPLAY_NAMES = {
    SemanticField.DATE: "Date",
    SemanticField.DESCRIPTION: "Description",
    SemanticField.DEBIT: "Debit",
    SemanticField.CREDIT: "Credit",
    SemanticField.PAYEE: "Payee",
    SemanticField.REFERENCE: "Reference",
    SemanticField.CHECK_NUMBER: "Check Number",
}

REQUIRED_FIELDS: tuple[SemanticField, ...] = (
    SemanticField.DATE,
    SemanticField.DEBIT,
    SemanticField.CREDIT,
)


@dataclass(frozen=True, slots=True)
class HeaderCell:
    """A non-empty header cell and the column it sits in."""

    index: int
    text: str


@dataclass(frozen=True, slots=True)
class HeaderRow:
    """The row naming the statement columns."""

    cells: tuple[HeaderCell, ...]

    @classmethod
    def from_cells(cls, row: Row) -> HeaderRow:
        """Keep trimmed, non-empty cells without shifting their column indices."""
        return cls(
            cells=tuple(
                HeaderCell(index=idx, text=cell.strip())
                for idx, cell in enumerate(row)
                if cell and cell.strip()
            )
        )

    def __iter__(self) -> Iterator[HeaderCell]:
        return iter(self.cells)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self.cells)

    def index_of(self, text: str) -> int | None:
        """Return the column index of the cell whose text equals ``text`` (case-insensitive)."""
        wanted = text.strip().lower()
        for cell in self.cells:
            if cell.text.lower() == wanted:
                return cell.index
        return None


@dataclass(frozen=True, slots=True)
class ColumnMatch:
    """A candidate association between a field and a column."""

    field: SemanticField
    column_index: int
    header: str


class ColumnMapping(Mapping[SemanticField, int]):
    """Immutable field -> column index mapping confirmed by the caller."""

    __slots__ = ("_data",)

    def __init__(self, entries: Mapping[SemanticField, int] | None = None) -> None:
        data: dict[SemanticField, int] = {}
        for key, index in (entries or {}).items():
            key = key if isinstance(key, SemanticField) else SemanticField.lookup(str(key))
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"Column index for {key.display_name} must be a non-negative integer")
            data[key] = index
        self._data = MappingProxyType(data)

    def __getitem__(self, key: SemanticField) -> int:
        return self._data[key]

    def __iter__(self) -> Iterator[SemanticField]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        inner = ", ".join(f"{key.value}={value}" for key, value in self._data.items())
        return f"ColumnMapping({inner})"

    def with_field(self, key: SemanticField, index: int) -> ColumnMapping:
        """Return a copy with ``key`` mapped to ``index``."""
        updated = dict(self._data)
        updated[key] = index
        return ColumnMapping(updated)

    def without_field(self, key: SemanticField) -> ColumnMapping:
        """Return a copy with ``key`` removed."""
        return ColumnMapping({k: v for k, v in self._data.items() if k is not key})

    def missing_required(self) -> list[SemanticField]:
        return [key for key in REQUIRED_FIELDS if key not in self._data]

    def conflicts(self) -> dict[int, tuple[SemanticField, ...]]:
        """Return column indices that serve more than one field."""
        by_index: dict[int, list[SemanticField]] = {}
        for key, index in self._data.items():
            by_index.setdefault(index, []).append(key)
        return {index: tuple(keys) for index, keys in by_index.items() if len(keys) > 1}


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """Normalized transaction shape written to the canonical CSV."""

    date: str
    amount: Decimal
    description: str = ""
    payee: str = ""
    reference: str = ""
    check_number: str = ""


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Records produced by a conversion plus aggregate skip counts."""

    records: tuple[CanonicalTransaction, ...]
    skipped: int
    skip_reasons: Counter[str] = field(default_factory=Counter)

    def __iter__(self) -> Iterator[CanonicalTransaction]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class PreparedTable:
    """A statement table split at its header, with column suggestions."""

    header_index: int
    header: HeaderRow
    rows: RawTable
    suggestions: Mapping[SemanticField, tuple[ColumnMatch, ...]]
