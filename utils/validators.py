"""
CSV structure validation.

Ensures an uploaded CSV has the required columns and parseable timestamps.
Amounts are not validated here: non-numeric amounts are coerced to 0 when the
graph is built.

Time Complexity: O(n) where n = number of rows
Memory: O(1) additional beyond the DataFrame
"""

from typing import Any, Optional

import pandas as pd

from utils.time_utils import parse_timestamp

REQUIRED_COLUMNS = [
    "sender_id",
    "receiver_id",
    "amount",
    "timestamp",
]

OPTIONAL_COLUMNS = [
    "transaction_id",
    "transaction_type",
]


def validate_csv(df: Any) -> Optional[str]:
    """
    Validate CSV structure. Returns error message if invalid, None if valid.

    Checks:
        1. All required columns present
        2. At least one row
        3. No null sender_id / receiver_id / timestamp values
        4. 'timestamp' is parseable
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        return f"Missing required columns: {', '.join(missing)}"

    if df.empty:
        return "CSV file is empty."

    key_cols = ["sender_id", "receiver_id", "timestamp"]
    null_cols = [col for col in key_cols if df[col].isnull().any()]
    if null_cols:
        return f"Null values found in columns: {', '.join(null_cols)}"

    # Parsed one value at a time, the same way the graph builder coerces them.
    bad = [v for v in df["timestamp"] if pd.isna(parse_timestamp(v))]
    if bad:
        return f"Column 'timestamp' has unparseable values, e.g. {bad[0]!r}."

    return None
