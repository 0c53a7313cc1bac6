"""Shared constants for repo-chat.

Values that come from the environment (API hosts, timeouts, the credential
file location) live in the env module instead:
    from common.env import env
    base_url = env.chat_api_base_url()
"""

# Chat completion request parameters
CHAT_MODEL = "llama3-8b-8192"
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000

# Key under which the chat API credential is persisted
CREDENTIAL_STORAGE_KEY = "groq_api_key"

FALLBACK_REPLY = "I apologize, but I couldn't generate a response. Please try again."

ASSISTANT_NAME = "GitHub Buddy AI"

GREETING_TEMPLATE = (
    "Hi! I've analyzed the repository \"{repo_name}\". You can ask me questions about "
    "the codebase, architecture, functionality, or anything else you'd like to "
    "understand. What would you like to know?"
)

SUGGESTED_QUESTIONS: tuple[str, ...] = (
    "What does this repository do?",
    "Explain the main architecture",
    "How do I get started?",
    "What are the key files to understand?",
)

USER_AGENT = "repo-chat/1.0"
