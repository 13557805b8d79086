"""Hint model: severities, findings and per-source analysis results."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class HintType(Enum):
    """Severity of a hint, with its display symbol and sort priority."""
    INFO = ("i", 10)
    WARNING = ("!", 5)
    ERROR = ("X", 1)

    def __init__(self, symbol: str, priority: int):
        self.symbol = symbol
        self.priority = priority

    def with_message(self, message: str) -> "Hint":
        return Hint(self, message)


@dataclass(frozen=True)
class Hint:
    """
    A hint that the Netiquette might not have been respected at some point.

    Attributes:
        type: Severity of the hint
        message: Human-readable description of what was found
        reference: Section of the Netiquette the hint refers to
        context: Usually the text that caused the hint in the first place
    """
    type: HintType
    message: str
    reference: Optional[str] = None
    context: Optional[str] = None

    def ref(self, reference: Optional[str]) -> "Hint":
        return replace(self, reference=reference)

    def ctx(self, context: Optional[str]) -> "Hint":
        return replace(self, context=context)

    def to_dict(self) -> dict:
        """Convert to a dict for JSON serialization; unset fields are left out."""
        data = {"type": self.type.name, "message": self.message}
        if self.reference is not None:
            data["reference"] = self.reference
        if self.context is not None:
            data["context"] = self.context
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Hint":
        return cls(
            type=HintType[data["type"]],
            message=data["message"],
            reference=data.get("reference"),
            context=data.get("context"),
        )


@dataclass
class AnalysisResult:
    """Hints found for one source (usually an .eml file name)."""
    info: str
    hints: list[Hint] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"info": self.info, "hints": [h.to_dict() for h in self.hints]}

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        return cls(info=data["info"], hints=[Hint.from_dict(h) for h in data["hints"]])


def hint_sort_key(hint: Hint) -> tuple:
    # Hints without context sort before those with one
    return (
        hint.type.priority,
        hint.message,
        hint.context is not None,
        hint.context or "",
    )


def sorted_hints(hints: list[Hint]) -> list[Hint]:
    """Most severe first, then by message, then by context."""
    return sorted(hints, key=hint_sort_key)


def count_by_type(hints: list[Hint]) -> dict[HintType, int]:
    counts = {t: 0 for t in HintType}
    for h in hints:
        counts[h.type] += 1
    return counts
