from __future__ import annotations

from enum import StrEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict


class RuleKind(StrEnum):
    NORMAL = "normal"
    WILDCARD = "wildcard"
    EXCEPTION = "exception"


class Rule(BaseModel):
    """One compiled line of the suffix list.

    ``dotted_name`` never carries the ``*.`` or ``!`` marker; ``kind``
    records which one the source line had.
    """

    model_config = ConfigDict(frozen=True)

    dotted_name: str
    kind: RuleKind = RuleKind.NORMAL
    authoritative: bool = False

    @property
    def source_form(self) -> str:
        """The rule as spelled in the list, marker included."""
        match self.kind:
            case RuleKind.WILDCARD:
                return f"*.{self.dotted_name}"
            case RuleKind.EXCEPTION:
                return f"!{self.dotted_name}"
            case RuleKind.NORMAL:
                return self.dotted_name

    @property
    def label_count(self) -> int:
        """Number of labels in the source form (the ``*`` counts as one)."""
        count = self.dotted_name.count(".") + 1
        if self.kind is RuleKind.WILDCARD:
            count += 1
        return count


class RuleTable(BaseModel):
    """Compiled rule index keyed by signature, tagged with its list release.

    Built once per update and never mutated afterwards; a newer list
    produces a new table.
    """

    model_config = ConfigDict(frozen=True)

    index: dict[str, tuple[Rule, ...]]
    release: str = ""

    @classmethod
    def empty(cls, release: str = "") -> RuleTable:
        return cls(index={}, release=release)

    @property
    def rule_count(self) -> int:
        return sum(len(rules) for rules in self.index.values())

    def rules_for(self, signature: str) -> tuple[Rule, ...]:
        return self.index.get(signature, ())

    def to_serializable(self) -> dict[str, Any]:
        """Plain ``{"index": ..., "release": ...}`` data, JSON-ready."""
        return self.model_dump(mode="json")

    @classmethod
    def from_serializable(cls, data: dict[str, Any]) -> RuleTable:
        return cls.model_validate(data)


class Subdomain(NamedTuple):
    """One right-anchored level of a query domain."""

    signature: str
    dotted: str


class SuffixMatch(NamedTuple):
    suffix: str
    authoritative: bool
    matched: bool
