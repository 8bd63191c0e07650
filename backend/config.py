"""Configuration management for the Earthy AI relay backend."""
import os
import logging
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
RESEND_API_KEY = os.getenv("RESEND_API_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
STRICT_CONFIG = os.getenv("STRICT_CONFIG", "false").lower() in {"1", "true", "yes"}

# CORS Configuration
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Model Configuration (pinned, never taken from the environment)
CHAT_MODEL = "llama-3.1-8b-instant"
CHAT_MAX_TOKENS = 150
CHAT_TEMPERATURE = 0.6

# Lead email Configuration
RESEND_API_URL = "https://api.resend.com/emails"
LEAD_FROM = os.getenv("LEAD_FROM", "Earthy AI <onboarding@resend.dev>")
LEAD_TO = os.getenv("LEAD_TO", "enquiries@example.com")

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def validate_config() -> List[str]:
    """Return the names of required settings that are not set."""
    missing = []
    if not GROQ_API_KEY:
        missing.append("GROQ_API_KEY")
    if not RESEND_API_KEY:
        missing.append("RESEND_API_KEY")
    return missing
