import os

from dotenv import load_dotenv

load_dotenv()

# Server
HOST = os.getenv("MEETNOTES_HOST", "127.0.0.1")
PORT = int(os.getenv("MEETNOTES_PORT", "8787"))
DEBUG_ENDPOINTS = os.getenv("MEETNOTES_DEBUG", "").lower() in ("1", "true", "yes")

# LLM
LLM_PROVIDER = os.getenv("MEETNOTES_LLM_PROVIDER", "groq")
LLM_TIMEOUT = float(os.getenv("MEETNOTES_LLM_TIMEOUT", "120"))
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
GROQ_MODEL = os.getenv("MEETNOTES_GROQ_MODEL", "llama3-8b-8192")
GROQ_URL = os.getenv("MEETNOTES_GROQ_URL", "https://api.groq.com/openai/v1/chat/completions")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
ANTHROPIC_MODEL = os.getenv("MEETNOTES_ANTHROPIC_MODEL", "claude-sonnet-4-5-20250929")

# Simulated latency for the offline collaborators (seconds)
TEMPLATE_DELAY = float(os.getenv("MEETNOTES_TEMPLATE_DELAY", "2.0"))
MAIL_DELAY = float(os.getenv("MEETNOTES_MAIL_DELAY", "1.5"))

# Email
DEFAULT_SENDER_NAME = "Meeting Organizer"
