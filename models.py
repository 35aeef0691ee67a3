"""
Models Module - Typed in-memory records for the portfolio data
Records are immutable once loaded; derived aggregates are rebuilt per request.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Project:
    title: str
    year: Any = None
    image: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def field_values(self):
        """All field values in declaration order, extras last"""
        values = [self.title, self.year, self.image, self.description]
        values.extend(self.extra.values())
        return values


@dataclass(frozen=True)
class LineRecord:
    commit: str
    author: str
    date: Optional[datetime]
    time: str
    timezone: str
    datetime: datetime
    file: str
    line: Optional[float]
    depth: Optional[float]
    length: Optional[float]
    type: str


@dataclass(frozen=True)
class Commit:
    id: str
    url: str
    author: str
    date: Optional[datetime]
    time: str
    timezone: str
    datetime: datetime
    hour_frac: float
    total_lines: int

    @classmethod
    def from_lines(cls, commit_id, lines, url_base=''):
        """Build a commit from its line records, keeping them off the public fields"""
        first = lines[0]
        commit = cls(
            id=commit_id,
            url=url_base + commit_id,
            author=first.author,
            date=first.date,
            time=first.time,
            timezone=first.timezone,
            datetime=first.datetime,
            hour_frac=first.datetime.hour + first.datetime.minute / 60,
            total_lines=len(lines),
        )
        object.__setattr__(commit, '_lines', tuple(lines))
        return commit

    @property
    def lines(self) -> Tuple[LineRecord, ...]:
        return getattr(self, '_lines', ())

    def field_values(self):
        return list(asdict(self).values())


@dataclass(frozen=True)
class FileSummary:
    name: str
    lines: Tuple[LineRecord, ...] = field(repr=False)
    last_commit: datetime

    @property
    def line_count(self):
        return len(self.lines)

    @property
    def primary_type(self):
        """Most frequent line type, first seen wins ties"""
        counts = {}
        for line in self.lines:
            counts[line.type] = counts.get(line.type, 0) + 1
        if not counts:
            return None
        return max(counts, key=counts.get)

    def field_values(self):
        return [self.name, self.line_count, self.last_commit, self.primary_type]
