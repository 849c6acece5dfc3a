"""Rolling exercise completion history."""

from dataclasses import dataclass, field
from datetime import datetime

HISTORY_LIMIT = 50
RECENT_WINDOW = 5


@dataclass(frozen=True)
class CompletionRecord:
    """A single completed exercise."""

    exercise_id: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "exercise_id": self.exercise_id,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CompletionRecord":
        return cls(
            exercise_id=str(data["exercise_id"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class CompletionHistory:
    """Append-only sliding window of the most recent completions.

    Once ``limit`` entries are held, each append evicts the oldest one.
    """

    records: list[CompletionRecord] = field(default_factory=list)
    limit: int = HISTORY_LIMIT

    def __post_init__(self):
        if len(self.records) > self.limit:
            self.records = self.records[-self.limit:]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def append(self, exercise_id: str, timestamp: datetime | None = None) -> CompletionRecord:
        record = CompletionRecord(
            exercise_id=exercise_id,
            timestamp=timestamp or datetime.now(),
        )
        self.records.append(record)
        if len(self.records) > self.limit:
            del self.records[: len(self.records) - self.limit]
        return record

    def recent_ids(self, window: int = RECENT_WINDOW) -> set[str]:
        """Ids of the last ``window`` completions."""
        if window <= 0:
            return set()
        return {record.exercise_id for record in self.records[-window:]}

    def to_list(self) -> list[dict]:
        return [record.to_dict() for record in self.records]

    @classmethod
    def from_list(cls, data: list[dict], limit: int = HISTORY_LIMIT) -> "CompletionHistory":
        return cls(records=[CompletionRecord.from_dict(item) for item in data], limit=limit)
