"""
Unit tests for trend analysis and report rendering.
"""

import pytest

from app.schemas.search import SearchResult
from app.services.trend_analyzer import (
    ActivityLevel,
    AdoptionLevel,
    activity_level,
    adoption_level,
    analyze,
    rank_languages,
    render_report,
    render_timeout_notice,
    truncate_description,
)
from conftest import FIXED_NOW, repo


class TestAdoptionLevel:
    """Tests for adoption_level()."""

    @pytest.mark.parametrize(
        "total_count, expected",
        [
            (50001, AdoptionLevel.VERY_HIGH),
            (50000, AdoptionLevel.HIGH),
            (10001, AdoptionLevel.HIGH),
            (10000, AdoptionLevel.MODERATE),
            (1001, AdoptionLevel.MODERATE),
            (1000, AdoptionLevel.EMERGING),
            (101, AdoptionLevel.EMERGING),
            (100, AdoptionLevel.NICHE),
            (0, AdoptionLevel.NICHE),
        ],
    )
    def test_thresholds_are_exclusive(self, total_count: int, expected: AdoptionLevel) -> None:
        assert adoption_level(total_count) is expected


class TestActivityLevel:
    """Tests for activity_level() and the activity section of analyze()."""

    def test_ratio_thresholds(self) -> None:
        assert activity_level(0.8, 0.8) is ActivityLevel.VERY_ACTIVE
        assert activity_level(0.7, 0.7) is ActivityLevel.ACTIVE
        assert activity_level(0.0, 0.5) is ActivityLevel.MODERATE
        assert activity_level(0.0, 0.3) is ActivityLevel.LOW

    def test_exactly_seventy_percent_is_not_very_active(self) -> None:
        items = [repo(name=f"fresh{i}", days_ago=5) for i in range(7)]
        items += [repo(name=f"stale{i}", days_ago=400) for i in range(3)]
        report = analyze(SearchResult(total_count=10, items=items), "go", now=FIXED_NOW)
        assert report.activity.very_recent == 7
        assert report.activity.level is ActivityLevel.ACTIVE
        assert report.activity.community_health == "Strong"

    def test_windows_are_nested(self) -> None:
        items = [
            repo(name="a", days_ago=30),
            repo(name="b", days_ago=31),
            repo(name="c", days_ago=90),
            repo(name="d", days_ago=91),
            repo(name="e", days_ago=None),
        ]
        report = analyze(SearchResult(total_count=5, items=items), "go", now=FIXED_NOW)
        assert report.activity.very_recent == 1
        assert report.activity.recent == 3
        assert report.activity.sample_size == 5
        # recent ratio 0.6
        assert report.activity.level is ActivityLevel.ACTIVE

    def test_low_activity_gives_moderate_health(self) -> None:
        items = [repo(name=f"old{i}", days_ago=365) for i in range(4)]
        report = analyze(SearchResult(total_count=4, items=items), "go", now=FIXED_NOW)
        assert report.activity.level is ActivityLevel.LOW
        assert report.activity.community_health == "Moderate"


class TestAnalyze:
    """Tests for analyze() aggregates."""

    def test_reference_result(self) -> None:
        items = [
            repo(name="a", stars=100, language="Go"),
            repo(name="b", stars=200, language="Go"),
            repo(name="c", stars=300, language="Rust"),
        ]
        report = analyze(SearchResult(total_count=12000, items=items), "go", now=FIXED_NOW)
        assert report.adoption.level is AdoptionLevel.HIGH
        assert report.adoption.average_stars == 200
        assert report.adoption.top_languages[0] == ("Go", 2)
        assert "• Popular languages: Go (2), Rust (1)" in render_report(report)

    def test_totals(self) -> None:
        items = [repo(stars=1500, forks=20), repo(stars=500, forks=5)]
        report = analyze(SearchResult(total_count=2, items=items), "x", now=FIXED_NOW)
        assert report.adoption.total_stars == 2000
        assert report.adoption.total_forks == 25

    def test_average_rounds_half_up(self) -> None:
        items = [repo(stars=1), repo(stars=2)]
        report = analyze(SearchResult(total_count=2, items=items), "x", now=FIXED_NOW)
        assert report.adoption.average_stars == 2

    def test_empty_result_has_no_sections(self) -> None:
        report = analyze(SearchResult(total_count=0, items=[]), "x", now=FIXED_NOW)
        assert report.is_empty
        assert report.adoption is None
        assert report.activity is None


class TestRankLanguages:
    """Tests for rank_languages()."""

    def test_ties_keep_first_seen_order(self) -> None:
        items = [repo(language=lang) for lang in ["Rust", "Go", "Go", "Rust", "Python", "C"]]
        assert rank_languages(items) == [("Rust", 2), ("Go", 2), ("Python", 1)]

    def test_skips_missing_languages(self) -> None:
        items = [repo(language=None), repo(language=""), repo(language="Go")]
        assert rank_languages(items) == [("Go", 1)]


class TestTruncateDescription:
    """Tests for truncate_description()."""

    def test_long_description_is_cut_at_100(self) -> None:
        text = "x" * 150
        assert truncate_description(text) == "x" * 100 + "..."

    def test_exactly_100_is_kept(self) -> None:
        text = "y" * 100
        assert truncate_description(text) == text

    def test_missing_description(self) -> None:
        assert truncate_description(None) == "No description"


class TestRenderReport:
    """Tests for render_report()."""

    def test_sections_in_fixed_order(self) -> None:
        items = [repo(name="fastapi", stars=70000, forks=6000, language="Python", days_ago=2)]
        text = render_report(analyze(SearchResult(total_count=60000, items=items), "fastapi", now=FIXED_NOW))
        header = text.index("**GitHub Technology Trends for: fastapi**")
        listing = text.index("**Top 1 Repositories:**")
        adoption = text.index("**Technology Adoption Analysis:**")
        activity = text.index("**Development Activity:**")
        assert header < listing < adoption < activity

    def test_repository_lines(self) -> None:
        items = [repo(name="fastapi", stars=70000, forks=6000, language=None, days_ago=0, description="Fast")]
        text = render_report(analyze(SearchResult(total_count=1, items=items), "fastapi", now=FIXED_NOW))
        assert "**1. fastapi** (70,000 ⭐, 6,000 🍴)" in text
        assert "   Language: Unknown | Updated: 2026-10-18" in text
        assert "   Description: Fast" in text
        assert "   URL: https://github.com/example/fastapi" in text
        assert "• Total repositories: 1" in text
        assert "• Adoption level: Niche" in text
        assert "• Recently updated (30 days): 1/1 repositories" in text
        assert "• Overall activity level: Very Active" in text
        assert "• Community health: Strong developer engagement" in text

    def test_empty_result_renders_only_not_found(self) -> None:
        text = render_report(analyze(SearchResult(total_count=0, items=[]), "zzz", now=FIXED_NOW))
        assert text == "**GitHub Technology Research for: zzz**\n\nNo relevant repositories found."

    def test_timeout_notice(self) -> None:
        text = render_timeout_notice("vue")
        assert text.startswith("**GitHub Technology Research for: vue**")
        assert "Request timeout" in text
