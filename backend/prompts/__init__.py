"""Prompt templates shipped with the relay backend."""
from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).parent
SYSTEM_PERSONA_FILE = "system_persona.txt"


@lru_cache(maxsize=None)
def load_system_prompt(filename: str = SYSTEM_PERSONA_FILE) -> str:
    """Read the operator-authored persona instruction sent as the system message."""
    return (PROMPTS_DIR / filename).read_text(encoding="utf-8").strip()


__all__ = ["load_system_prompt", "SYSTEM_PERSONA_FILE"]
