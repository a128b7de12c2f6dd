from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

NOT_FOUND = "not-found"


class ExtractionState(str, Enum):
    INIT = "init"
    HARD_OVERRIDE = "hard-override"
    PULSE = "pulse"
    LABEL = "label"
    GENERIC = "generic"
    BODY_MAX = "body-max"
    RETRY = "retry"
    FOUND = "found"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class Target:
    name: str
    url: str


@dataclass(frozen=True)
class RawFragment:
    """Text captured from the page by one strategy."""

    text: str
    strategy: str
    tag_name: Optional[str] = None
    origin: Optional[str] = None  # selector or label phrase


@dataclass(frozen=True)
class ParsedAmount:
    amount: int
    text: str

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError(f"negative amount: {self.amount}")


@dataclass(frozen=True)
class StrategyOutcome:
    strategy: str
    parsed: Optional[ParsedAmount] = None

    @property
    def found(self) -> bool:
        return self.parsed is not None

    @classmethod
    def not_found(cls) -> "StrategyOutcome":
        return cls(strategy=NOT_FOUND)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ExtractionResult:
    target: str
    url: str
    currency: str
    strategy: str = NOT_FOUND
    amount: Optional[int] = None
    raw_text: Optional[str] = None
    error: Optional[str] = None
    fetched_at: str = field(default_factory=_utcnow_iso)

    @classmethod
    def from_outcome(cls, target: Target, outcome: StrategyOutcome, currency: str) -> "ExtractionResult":
        parsed = outcome.parsed
        return cls(
            target=target.name,
            url=target.url,
            currency=currency,
            strategy=outcome.strategy,
            amount=parsed.amount if parsed else None,
            raw_text=parsed.text if parsed else None,
        )

    @classmethod
    def from_error(cls, target: Target, error: str, currency: str) -> "ExtractionResult":
        return cls(target=target.name, url=target.url, currency=currency, error=error)

    def to_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "club": self.target,
            "amount": self.amount,
            "currency": self.currency,
            "url": self.url,
            "fetched_at": self.fetched_at,
            "debug": {"strategy": self.strategy, "raw": self.raw_text},
        }
        if self.error is not None:
            row["error"] = self.error
        return row
