"""Domain models for the reconstructed completion timeline"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Union


@dataclass(frozen=True)
class Named:
    """Member who published a display name"""
    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Anonymous:
    """Member without a display name, labelled by id"""
    member_id: int

    @property
    def label(self) -> str:
        return f"Anonymous#{self.member_id}"


DisplayName = Union[Named, Anonymous]


@dataclass(frozen=True, order=True)
class StarKey:
    """Composite (day, star) identifier, also the scoring bucket"""
    day: int
    star: int

    @property
    def label(self) -> str:
        return f"{self.day:02}-{self.star}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class CompletionEvent:
    """A star solved by a member, with time taken since it became available"""
    timestamp: datetime
    elapsed: timedelta
    member_label: str
    star_key: StarKey


@dataclass(frozen=True)
class ScoredEvent:
    """Completion event with the points it earned"""
    event: CompletionEvent
    score: int
