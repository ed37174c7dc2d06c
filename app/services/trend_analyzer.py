"""
Trend analysis: turn a GitHub search page into an adoption/activity report.

Responsibility: Pure derivation (analyze) and markdown rendering (render_report).
No I/O; "now" is passed in so results are reproducible.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from app.core.config import DESCRIPTION_MAX_LENGTH
from app.schemas.search import Repository, SearchResult

VERY_RECENT_DAYS = 30
RECENT_DAYS = 90
TOP_LANGUAGES = 3


class AdoptionLevel(str, Enum):
    NICHE = "Niche"
    EMERGING = "Emerging"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"


class ActivityLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"


@dataclass
class RepositorySummary:
    """One formatted line group of the repository listing."""

    rank: int
    name: str
    stars: int
    forks: int
    language: str
    updated: str
    description: str
    url: str


@dataclass
class AdoptionAnalysis:
    total_count: int
    level: AdoptionLevel
    average_stars: int
    total_stars: int
    total_forks: int
    top_languages: list[tuple[str, int]] = field(default_factory=list)


@dataclass
class ActivityAnalysis:
    very_recent: int
    recent: int
    sample_size: int
    level: ActivityLevel

    @property
    def community_health(self) -> str:
        return "Strong" if self.level in (ActivityLevel.VERY_ACTIVE, ActivityLevel.ACTIVE) else "Moderate"


@dataclass
class TrendReport:
    """Everything we say about a technology. Adoption and activity are None when nothing was found."""

    term: str
    repositories: list[RepositorySummary]
    adoption: AdoptionAnalysis | None = None
    activity: ActivityAnalysis | None = None

    @property
    def is_empty(self) -> bool:
        return not self.repositories


def adoption_level(total_count: int) -> AdoptionLevel:
    if total_count > 50000:
        return AdoptionLevel.VERY_HIGH
    if total_count > 10000:
        return AdoptionLevel.HIGH
    if total_count > 1000:
        return AdoptionLevel.MODERATE
    if total_count > 100:
        return AdoptionLevel.EMERGING
    return AdoptionLevel.NICHE


def activity_level(very_recent_ratio: float, recent_ratio: float) -> ActivityLevel:
    if very_recent_ratio > 0.7:
        return ActivityLevel.VERY_ACTIVE
    if recent_ratio > 0.5:
        return ActivityLevel.ACTIVE
    if recent_ratio > 0.3:
        return ActivityLevel.MODERATE
    return ActivityLevel.LOW


def rank_languages(repositories: list[Repository], top: int = TOP_LANGUAGES) -> list[tuple[str, int]]:
    """Most common languages first; ties keep the order in which languages were first seen."""
    counts = Counter(repo.language for repo in repositories if repo.language)
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:top]


def truncate_description(description: str | None, limit: int = DESCRIPTION_MAX_LENGTH) -> str:
    text = description or "No description"
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _summarize(repositories: list[Repository]) -> list[RepositorySummary]:
    return [
        RepositorySummary(
            rank=i,
            name=repo.name,
            stars=repo.stargazers_count,
            forks=repo.forks_count,
            language=repo.language or "Unknown",
            updated=repo.updated_at.date().isoformat() if repo.updated_at else "Unknown",
            description=truncate_description(repo.description),
            url=repo.html_url,
        )
        for i, repo in enumerate(repositories, 1)
    ]


def _analyze_adoption(result: SearchResult) -> AdoptionAnalysis:
    items = result.items
    total_stars = sum(repo.stargazers_count for repo in items)
    total_forks = sum(repo.forks_count for repo in items)
    return AdoptionAnalysis(
        total_count=result.total_count,
        level=adoption_level(result.total_count),
        # half up, not banker's rounding
        average_stars=math.floor(total_stars / len(items) + 0.5),
        total_stars=total_stars,
        total_forks=total_forks,
        top_languages=rank_languages(items),
    )


def _analyze_activity(repositories: list[Repository], now: datetime) -> ActivityAnalysis:
    very_recent = 0
    recent = 0
    for repo in repositories:
        if repo.updated_at is None:
            continue
        days_ago = (now - _as_utc(repo.updated_at)).days
        if days_ago <= VERY_RECENT_DAYS:
            very_recent += 1
        if days_ago <= RECENT_DAYS:
            recent += 1
    size = len(repositories)
    return ActivityAnalysis(
        very_recent=very_recent,
        recent=recent,
        sample_size=size,
        level=activity_level(very_recent / size, recent / size),
    )


def analyze(result: SearchResult, term: str, now: datetime | None = None) -> TrendReport:
    """Derive adoption and activity signals from one search page."""
    if not result.items:
        return TrendReport(term=term, repositories=[])
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    return TrendReport(
        term=term,
        repositories=_summarize(result.items),
        adoption=_analyze_adoption(result),
        activity=_analyze_activity(result.items, now),
    )


def _render_repositories(summaries: list[RepositorySummary]) -> str:
    lines = [f"**Top {len(summaries)} Repositories:**"]
    for s in summaries:
        lines.append(f"**{s.rank}. {s.name}** ({s.stars:,} ⭐, {s.forks:,} 🍴)")
        lines.append(f"   Language: {s.language} | Updated: {s.updated}")
        lines.append(f"   Description: {s.description}")
        lines.append(f"   URL: {s.url}")
        lines.append("")
    return "\n".join(lines) + "\n"


def _render_adoption(adoption: AdoptionAnalysis) -> str:
    lines = [
        "**Technology Adoption Analysis:**",
        f"• Total repositories: {adoption.total_count:,}",
        f"• Adoption level: {adoption.level.value}",
        f"• Average stars (top repos): {adoption.average_stars:,}",
        f"• Total community engagement: {adoption.total_stars:,} stars, {adoption.total_forks:,} forks",
    ]
    if adoption.top_languages:
        ranked = ", ".join(f"{lang} ({count})" for lang, count in adoption.top_languages)
        lines.append(f"• Popular languages: {ranked}")
    return "\n".join(lines) + "\n\n"


def _render_activity(activity: ActivityAnalysis) -> str:
    lines = [
        "**Development Activity:**",
        f"• Recently updated ({VERY_RECENT_DAYS} days): {activity.very_recent}/{activity.sample_size} repositories",
        f"• Active projects ({RECENT_DAYS} days): {activity.recent}/{activity.sample_size} repositories",
        f"• Overall activity level: {activity.level.value}",
        f"• Community health: {activity.community_health} developer engagement",
    ]
    return "\n".join(lines) + "\n\n"


def render_report(report: TrendReport) -> str:
    """Markdown report: repositories, then adoption, then activity."""
    if report.is_empty:
        return f"**GitHub Technology Research for: {report.term}**\n\nNo relevant repositories found."
    parts = [f"**GitHub Technology Trends for: {report.term}**\n\n", _render_repositories(report.repositories)]
    if report.adoption:
        parts.append(_render_adoption(report.adoption))
    if report.activity:
        parts.append(_render_activity(report.activity))
    return "".join(parts)


def render_timeout_notice(term: str) -> str:
    return (
        f"**GitHub Technology Research for: {term}**\n\n"
        "Request timeout - GitHub may be experiencing high load. "
        "Technology data available but slower than expected."
    )
