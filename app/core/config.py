"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# HTTP server
PORT: int = int(os.getenv("PORT", "8080").strip() or "8080")
SERVICE_URL: str = os.getenv("SERVICE_URL", "http://localhost:8080").strip() or "http://localhost:8080"

# CORS: only the Open Floor playground may call us from a browser
ALLOWED_ORIGIN: str = os.getenv("ALLOWED_ORIGIN", "https://openfloor.dev").strip()

# Agent identity (manifest)
SPEAKER_URI: str = (
    os.getenv("SPEAKER_URI", "tag:openfloor-research.com,2025:github-agent").strip()
    or "tag:openfloor-research.com,2025:github-agent"
)
AGENT_NAME: str = os.getenv("AGENT_NAME", "GitHub Technology Analyst").strip() or "GitHub Technology Analyst"
AGENT_ORGANIZATION: str = os.getenv("AGENT_ORGANIZATION", "OpenFloor Demo Corp").strip() or "OpenFloor Demo Corp"

# GitHub search API. Token is optional; unauthenticated search has a lower quota.
GITHUB_API_BASE: str = os.getenv("GITHUB_API_BASE", "https://api.github.com").strip() or "https://api.github.com"
GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "").strip()
GITHUB_USER_AGENT: str = "OpenFloor GitHub Research Agent"
GITHUB_ACCEPT: str = "application/vnd.github.v3+json"

# API timeouts (seconds)
GITHUB_API_TIMEOUT: float = float(os.getenv("GITHUB_API_TIMEOUT", "15.0").strip() or "15.0")

# Minimum spacing between outbound search calls (seconds)
SEARCH_MIN_INTERVAL_SECONDS: float = float(os.getenv("SEARCH_MIN_INTERVAL_SECONDS", "2.0").strip() or "2.0")
SEARCH_MAX_RESULTS: int = 5

# Report rendering
DESCRIPTION_MAX_LENGTH: int = 100
