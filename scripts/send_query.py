#!/usr/bin/env python3
"""
Send one technology question to a running agent and print its reply.

Builds an Open Floor envelope with a single utterance, POSTs it to the
agent endpoint, and prints the text of every utterance that comes back.

Run from project root:

    python scripts/send_query.py "react framework"
    python scripts/send_query.py --url http://localhost:8080 "rust web tools"
"""

import argparse
import sys
import uuid
from pathlib import Path

# Project root on path so "app" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import httpx

from app.schemas.envelope import Payload, UtteranceEvent, utterance_payload, utterance_text

CLI_SPEAKER_URI = "tag:openfloor-research.com,2025:cli"


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask the GitHub technology agent a question.")
    parser.add_argument("question", help="Technology question, e.g. 'django framework'.")
    parser.add_argument("--url", default="http://localhost:8080", help="Agent endpoint base URL.")
    parser.add_argument("--conversation", default=None, help="Conversation id (random when omitted).")
    args = parser.parse_args()

    payload = utterance_payload(args.question, args.conversation or str(uuid.uuid4()), CLI_SPEAKER_URI)
    response = httpx.post(f"{args.url.rstrip('/')}/", json=payload, timeout=90.0)
    if not response.is_success:
        print(f"Agent returned {response.status_code}: {response.text[:200]}", file=sys.stderr)
        sys.exit(1)

    reply = Payload.model_validate(response.json()).open_floor
    for event in reply.events:
        if isinstance(event, UtteranceEvent):
            print(utterance_text(event) or "")
            print()


if __name__ == "__main__":
    main()
