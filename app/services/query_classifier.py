"""
Coarse in-domain check for incoming questions.

A query is in scope when any technology keyword appears as a substring of the
lower-cased text. No tokenization: "go" also matches "google" or "mongo".
"""

TECH_KEYWORDS: tuple[str, ...] = (
    "technology", "framework", "library", "software", "programming",
    "development", "developer", "code", "github", "open source",
    "javascript", "python", "react", "nodejs", "django", "flask",
    "vue", "angular", "typescript", "rust", "go", "kotlin",
    "adoption", "popular", "trending", "tools", "stack",
)


def is_in_scope(text: str) -> bool:
    """Return True if the text mentions any technology keyword (case-insensitive substring match)."""
    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in TECH_KEYWORDS)
