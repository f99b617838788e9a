"""Column statistics for ingested rows, computed with pandas."""

import logging
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)


def _scalar(value: Any) -> Any:
    """Convert numpy/pandas scalars to plain Python values (NaN becomes None)."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if hasattr(value, "item"):
        return value.item()
    return value


def rows_to_dataframe(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Build a DataFrame from row records; irregular rows leave gaps as NaN."""
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame.from_records(rows)


def summarize_rows(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Generate summary statistics for row records.

    Args:
        rows: Row records as returned by the ingestor

    Returns:
        Dictionary with row/column counts, dtypes, null counts and per-column statistics
    """
    df = rows_to_dataframe(rows)

    if df.empty:
        return {
            "total_rows": 0,
            "total_columns": len(df.columns),
            "column_names": [str(c) for c in df.columns],
            "message": "No data to analyze",
        }

    stats: Dict[str, Any] = {
        "total_rows": len(df),
        "total_columns": len(df.columns),
        "column_names": [str(c) for c in df.columns],
        "data_types": {str(k): str(v) for k, v in df.dtypes.items()},
        "null_counts": {str(k): int(v) for k, v in df.isnull().sum().items()},
        "non_null_counts": {str(k): int(v) for k, v in df.count().items()},
    }

    # Numeric column statistics
    numeric = df.select_dtypes(include=["number"])
    if len(numeric.columns) > 0:
        described = numeric.describe()
        stats["numeric_statistics"] = {
            str(col): {str(k): _scalar(v) for k, v in described[col].items()}
            for col in described.columns
        }

    # String column statistics
    string_columns = df.select_dtypes(include=["object"]).columns
    if len(string_columns) > 0:
        string_stats = {}
        for col in string_columns:
            counts = df[col].dropna().astype(str).value_counts()
            string_stats[str(col)] = {
                "unique_count": int(counts.size),
                "most_frequent": counts.index[0] if not counts.empty else None,
            }
        stats["string_statistics"] = string_stats

    logger.debug(f"Summarized {stats['total_rows']} rows x {stats['total_columns']} columns")
    return stats
