"""
Domain errors raised while answering a technology query.

All of them are recovered inside the agent and turned into a reply utterance;
none is allowed to abort the other events of the same envelope.
"""


class MalformedQueryError(Exception):
    """Raised when an utterance carries no text tokens to research."""


class OutOfScopeQueryError(Exception):
    """Raised when the query text does not look like a technology question."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Not a technology query: {text!r}")


class SearchTransportError(Exception):
    """Raised when the search API answers with a non-success status or cannot be reached."""

    def __init__(self, status: int | None, message: str = "") -> None:
        self.status = status
        self.message = message or f"GitHub API error: {status}"
        super().__init__(self.message)


class SearchTimeoutError(Exception):
    """Raised when the search API does not answer before the configured deadline."""

    def __init__(self, term: str) -> None:
        self.term = term
        super().__init__(f"GitHub search timed out for {term!r}")
