"""Streamlit front end for chatting about a GitHub repository.

Run with: streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

import streamlit as st

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from common.constants import ASSISTANT_NAME, SUGGESTED_QUESTIONS  # noqa: E402
from common.logger import get_logger  # noqa: E402
from repo_chat import RepositoryChatApp  # noqa: E402
from repo_chat.errors import (  # noqa: E402
    CredentialError,
    InvalidUrl,
    RepoChatError,
    RepositoryFetchError,
    RequestFailed,
)
from repo_chat.overview import greeting, summarize_digest  # noqa: E402

logger = get_logger(__name__)

st.set_page_config(page_title=ASSISTANT_NAME, page_icon="🤖", layout="wide")

if "chat_app" not in st.session_state:
    st.session_state.chat_app = RepositoryChatApp.from_env()
if "messages" not in st.session_state:
    st.session_state.messages = []  # for UI display only

chat_app: RepositoryChatApp = st.session_state.chat_app


def credential_screen() -> None:
    st.header("🔑 Setup Required")
    st.markdown(
        "Enter your Groq API key to enable repository analysis. "
        "Get a free key from the [Groq Console](https://console.groq.com/keys)."
    )
    key = st.text_input("Groq API Key", type="password", placeholder="gsk_...")
    if st.button("Validate & Save", type="primary"):
        with st.spinner("Validating..."):
            try:
                chat_app.configure_credential(key)
            except CredentialError as e:
                st.error(str(e))
                return
        st.success("API key validated and saved successfully!")
        st.rerun()


def repository_form() -> None:
    url = st.text_input("GitHub Repository URL", placeholder="https://github.com/owner/repo")
    if st.button("Analyze Repository", type="primary"):
        with st.spinner("Analyzing repository..."):
            try:
                digest = chat_app.analyze(url)
            except InvalidUrl as e:
                st.error(str(e))
                return
            except RepositoryFetchError as e:
                st.error(f"Analysis Failed: {e}")
                return
        st.session_state.messages = [{"role": "assistant", "content": greeting(digest)}]
        st.rerun()


def send(message: str) -> str | None:
    """Ask the assistant; return an error message instead of raising."""
    try:
        reply = chat_app.ask(message)
    except CredentialError as e:
        chat_app.credentials.clear()
        return f"{e}. Please set up your API key again."
    except RequestFailed as e:
        logger.error(f"Chat request failed: {e}")
        return "Failed to send message. Please try again."
    except RepoChatError as e:
        return str(e)
    st.session_state.messages.append({"role": "user", "content": message})
    st.session_state.messages.append({"role": "assistant", "content": reply})
    return None


def chat_screen() -> None:
    digest = chat_app.digest
    with st.sidebar:
        st.header("📦 Repository")
        for line in summarize_digest(digest):
            st.markdown(f"- {line}")
        if st.button("Analyze Different Repository"):
            chat_app.start_over()
            st.session_state.messages = []
            st.session_state.chat_error = None
            st.rerun()

    st.subheader(f"Chat about {digest.reference.full_name}")
    if st.session_state.get("chat_error"):
        st.error(st.session_state.chat_error)
    for msg in st.session_state.messages:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])

    columns = st.columns(len(SUGGESTED_QUESTIONS))
    suggested = None
    for column, question in zip(columns, SUGGESTED_QUESTIONS):
        if column.button(question):
            suggested = question

    user_input = st.chat_input("Ask about the repository...") or suggested
    if user_input:
        with st.spinner("Thinking..."):
            st.session_state.chat_error = send(user_input)
        st.rerun()


st.title(f"🤖 {ASSISTANT_NAME}")
st.markdown("*Understand any GitHub repository through intelligent conversation*")

if not chat_app.has_credential():
    credential_screen()
elif not chat_app.has_repository:
    repository_form()
else:
    chat_screen()
