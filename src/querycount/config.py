from __future__ import annotations

import os
from dataclasses import dataclass


QUERYCOUNT_LOG_LEVEL = os.environ.get("QUERYCOUNT_LOG_LEVEL", "WARNING")
QUERYCOUNT_STRICT = os.environ.get("QUERYCOUNT_STRICT", "0") not in ("", "0", "false", "no")


@dataclass
class CountOptions:
    """Policy knobs for count aggregation.

    strict:       raise per-record errors instead of dropping the record.
    queries_only: ignore records whose plan node is not flagged is_query.
    """

    strict: bool = QUERYCOUNT_STRICT
    queries_only: bool = False
