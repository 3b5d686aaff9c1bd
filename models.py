from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass
class SearchQuery:
    keywords: str = ""
    location: str = ""
    min_salary: Optional[int] = None

    @staticmethod
    def parse_salary(text) -> Optional[int]:
        """Salary input as typed: blank or non-numeric means no minimum."""
        if text is None:
            return None
        text = str(text).strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None


@dataclass
class Page:
    total_count: int = 0
    jobs: list[dict] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: dict) -> "Page":
        """Build a Page from an API body shaped like {totalCount, jobs}."""
        if not isinstance(data, dict):
            data = {}
        try:
            total = int(data.get("totalCount") or 0)
        except (ValueError, TypeError):
            total = 0
        jobs = data.get("jobs")
        if not isinstance(jobs, list):
            jobs = []
        return cls(total_count=total, jobs=[j for j in jobs if isinstance(j, dict)])


@dataclass(frozen=True)
class Row:
    key: str  # fingerprint
    record: dict

    def get(self, name: str, default=None):
        return self.record.get(name, default)


@dataclass
class ApplicationPayload:
    title: Optional[str] = None
    company: Optional[str] = None
    salary: Optional[str] = None
    link: Optional[str] = None
    location: Optional[str] = None
    snippet: Optional[str] = None
    type: Optional[str] = None
    updated: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "ApplicationPayload":
        return cls(
            title=record.get("title"),
            company=record.get("company"),
            salary=record.get("salary"),
            link=record.get("link"),
            location=record.get("location"),
            snippet=record.get("snippet"),
            type=record.get("type"),
            updated=record.get("updated"),
        )

    def to_dict(self) -> dict:
        return asdict(self)
