# Run from project root: streamlit run app/ui.py
# UI talks to the agent the way a floor manager would: POST / with an Open Floor envelope per question.

import os
import sys
import uuid
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import streamlit as st
import requests

from app.schemas.envelope import Payload, UtteranceEvent, utterance_payload, utterance_text

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8080")
UI_SPEAKER_URI = "tag:openfloor-research.com,2025:streamlit-console"

st.title("GitHub Technology Agent")

try:
    r = requests.get(f"{API_BASE}/health", timeout=10)
    if r.ok:
        caps = r.json().get("capabilities") or []
        st.caption(f"Agent is up. Capabilities: {', '.join(caps)}")
    else:
        st.caption("Could not reach agent health check.")
except requests.RequestException:
    st.caption("Agent not reachable — start the API first.")

# One conversation id per chat; the agent itself keeps no history
if "conversation_id" not in st.session_state:
    st.session_state.conversation_id = str(uuid.uuid4())
if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("New chat", key="new_chat"):
    st.session_state.conversation_id = str(uuid.uuid4())
    st.session_state.messages = []
    st.rerun()

for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

if prompt := st.chat_input("Ask about a framework, library or language (e.g. 'fastapi framework')"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    with st.chat_message("user"):
        st.markdown(prompt)
    with st.chat_message("assistant"):
        placeholder = st.empty()
        placeholder.caption("Searching GitHub...")
        payload = utterance_payload(prompt, st.session_state.conversation_id, UI_SPEAKER_URI)
        try:
            r = requests.post(f"{API_BASE}/", json=payload, timeout=90)
            if r.ok:
                reply = Payload.model_validate(r.json()).open_floor
                texts = [utterance_text(e) or "" for e in reply.events if isinstance(e, UtteranceEvent)]
                answer = "\n\n".join(texts) or "No answer."
                placeholder.markdown(answer)
            else:
                answer = f"Error: {r.status_code} — {r.text[:200]}"
                placeholder.error(answer)
        except requests.RequestException as e:
            answer = f"Connection failed: {e}"
            placeholder.error(answer)
    st.session_state.messages.append({"role": "assistant", "content": answer})
