"""Settings read from the environment (read once, at import time)."""

import os
from typing import Optional

# Without a database URL, match states only live in the memory of the process.
DATABASE_URL: Optional[str] = os.getenv("CHESS_MATCH_DATABASE_URL") or None
SQL_ECHO: bool = os.getenv("CHESS_MATCH_SQL_ECHO", "0").lower() in {"1", "true", "yes"}
LOG_LEVEL: str = os.getenv("CHESS_MATCH_LOG_LEVEL", "INFO").upper()
