"""Property and debt aggregation.

Each inventory category is summarized independently: values are coerced to
integers, totalled, and grouped by owner (debtor for debts). The functions are
pure; composers turn the summaries into document nodes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from document_engine.formatting import NOT_SPECIFIED, RLM, SHEKEL, format_date, format_number

JOINT_OWNER = "שניהם"

_LEADING_INT = re.compile(r"^[-+]?\d+")


@dataclass(frozen=True, slots=True)
class CategorySpec:
    """Static wording for one inventory category."""

    key: str
    header: str
    collective_name: str
    default_description: str
    value_label: str = "שווי"
    is_debt: bool = False
    shows_purchase_date: bool = False


CATEGORY_SPECS: tuple[CategorySpec, ...] = (
    CategorySpec("apartments", "דירות", "הדירות", "דירת מגורים", shows_purchase_date=True),
    CategorySpec("vehicles", "רכבים", "הרכבים", "רכב", shows_purchase_date=True),
    CategorySpec("savings", "חסכונות", "החסכונות", "חשבון חיסכון", value_label="סכום"),
    CategorySpec("benefits", "תנאים סוציאליים", "התנאים הסוציאליים", "זכויות סוציאליות"),
    CategorySpec("properties", "רכוש כללי", "הרכוש הכללי", "רכוש"),
    CategorySpec("debts", "חובות", "החובות", "חוב", value_label="סכום", is_debt=True),
)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def coerce_int(value: Any) -> int:
    """Parse an inventory value as an integer.

    Thousands separators and surrounding whitespace are ignored and a leading
    integer prefix is accepted (``"3200000 ש״ח"`` -> 3200000). Anything else
    yields 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    text = str(value).replace(",", "").strip()
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def format_amount(value: Any) -> str:
    """Group a plain number; anything else is shown as entered."""
    cleaned = str(value).replace(",", "").strip()
    if cleaned.isdigit():
        return format_number(int(cleaned))
    return str(value)


def raw_value(item: Any) -> Any:
    """The value as entered (``value``, falling back to ``amount``)."""
    return _field(item, "value") or _field(item, "amount")


def item_owner(item: Any, is_debt: bool = False) -> str:
    if is_debt:
        owner = _field(item, "debtor") or _field(item, "owner")
    else:
        owner = _field(item, "owner")
    return str(owner) if owner else NOT_SPECIFIED


@dataclass(slots=True)
class OwnerGroup:
    owner: str
    total: int = 0
    count: int = 0

    def label(self, is_debt: bool) -> str:
        if is_debt:
            return "חוב משותף" if self.owner == JOINT_OWNER else f"חייב {self.owner}"
        return "בבעלות שניהם" if self.owner == JOINT_OWNER else f"בבעלות {self.owner}"

    def line(self, is_debt: bool) -> str:
        item_word = "פריט" if self.count == 1 else "פריטים"
        return f"{self.label(is_debt)}:{RLM} {format_number(self.total)} {SHEKEL} ({self.count} {item_word})"


@dataclass(slots=True)
class CategorySummary:
    spec: CategorySpec
    items: list[Any] = field(default_factory=list)
    total: int = 0
    groups: dict[str, OwnerGroup] = field(default_factory=dict)

    @property
    def needs_breakdown(self) -> bool:
        """A breakdown is shown unless everything is jointly owned."""
        return len(self.groups) > 1 or (len(self.groups) == 1 and JOINT_OWNER not in self.groups)

    def ordered_groups(self) -> list[OwnerGroup]:
        """Joint group first, the rest in first-seen order."""
        joint = [group for owner, group in self.groups.items() if owner == JOINT_OWNER]
        others = [group for owner, group in self.groups.items() if owner != JOINT_OWNER]
        return joint + others

    def total_line(self) -> str:
        verb = "עולים" if self.spec.is_debt else "עולה"
        return f"סך {self.spec.collective_name} {verb} לסך של {format_number(self.total)} {SHEKEL}"

    def breakdown_label(self) -> str:
        basis = "חייב" if self.spec.is_debt else "בעלות"
        return f"פירוט {self.spec.collective_name} לפי {basis}:{RLM}"

    def item_lines(self) -> list[str]:
        """One descriptive line per item, showing the value as entered."""
        lines = []
        for item in self.items:
            description = _field(item, "description") or self.spec.default_description
            purchase = ""
            if self.spec.shows_purchase_date and _field(item, "purchase_date"):
                purchase = f", נרכש/ה ביום:{RLM} {format_date(_field(item, 'purchase_date'))}"
            value = raw_value(item) or NOT_SPECIFIED
            owner = item_owner(item, self.spec.is_debt)
            if owner == NOT_SPECIFIED:
                owner_text = ""
            elif self.spec.is_debt:
                owner_text = f", חייב:{RLM} {owner}"
            else:
                owner_text = f", בבעלות:{RLM} {owner}"
            lines.append(
                f"{description}{purchase} - {self.spec.value_label}:{RLM} {value} {SHEKEL}{owner_text}"
            )
        return lines


def summarize_category(spec: CategorySpec, items: Iterable[Any]) -> CategorySummary:
    """Total a category and group it by owner.

    Invariant: the sum of group totals equals the category total.
    """
    summary = CategorySummary(spec=spec, items=list(items))
    for item in summary.items:
        value = coerce_int(raw_value(item))
        summary.total += value
        owner = item_owner(item, spec.is_debt)
        group = summary.groups.setdefault(owner, OwnerGroup(owner))
        group.total += value
        group.count += 1
    return summary


def aggregate_inventory(inventory: Any) -> list[CategorySummary]:
    """Summarize every non-empty category of an inventory, in fixed order."""
    summaries = []
    for spec in CATEGORY_SPECS:
        items = _field(inventory, spec.key) or []
        if items:
            summaries.append(summarize_category(spec, items))
    return summaries


def count_items(inventory: Any) -> int:
    return sum(len(_field(inventory, spec.key) or []) for spec in CATEGORY_SPECS)
