# config.py
from __future__ import annotations

import os


def _optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


# ======= Search =======
# "smaller" picks the primary column with the fewest rows left, "first" the
# leftmost one.
COLUMN_SELECTOR = os.getenv("DLX_COLUMN_SELECTOR", "smaller")
# Unset means enumerate every solution.
SOLUTION_LIMIT  = _optional_int(os.getenv("DLX_SOLUTION_LIMIT"))

# ======= Logging =======
LOG_LEVEL = os.getenv("DLX_LOG_LEVEL", "INFO").upper()

# ======= Viewer =======
NQUEENS_SIZE       = int(os.getenv("DLX_NQUEENS_SIZE", "8"))
CELL_SIZE          = int(os.getenv("DLX_CELL_SIZE", "64"))
MAX_VIEW_SOLUTIONS = int(os.getenv("DLX_MAX_VIEW_SOLUTIONS", "100"))


class CFG:
    COLUMN_SELECTOR = COLUMN_SELECTOR
    SOLUTION_LIMIT  = SOLUTION_LIMIT

    LOG_LEVEL = LOG_LEVEL

    NQUEENS_SIZE       = NQUEENS_SIZE
    CELL_SIZE          = CELL_SIZE
    MAX_VIEW_SOLUTIONS = MAX_VIEW_SOLUTIONS


__all__ = ["CFG"]
