"""Runtime configuration read from the environment.

Values can be placed in a ``.env`` file next to the process; ``load_dotenv``
does not override variables that are already set.
"""

import os

from dotenv import load_dotenv

load_dotenv()

CLASSIFY_THRESHOLD = float(os.getenv("VOICETASKS_CLASSIFY_THRESHOLD", "0.6"))
SUGGEST_THRESHOLD = float(os.getenv("VOICETASKS_SUGGEST_THRESHOLD", "0.4"))
RESOLVE_THRESHOLD = float(os.getenv("VOICETASKS_RESOLVE_THRESHOLD", "0.5"))
REMINDER_SECONDS = int(os.getenv("VOICETASKS_REMINDER_SECONDS", "60"))
MAX_TRANSCRIPT_CHARS = int(os.getenv("VOICETASKS_MAX_TRANSCRIPT_CHARS", "500"))
LOG_LEVEL = os.getenv("VOICETASKS_LOG_LEVEL", "INFO")
