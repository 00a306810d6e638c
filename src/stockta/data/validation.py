"""
Bar integrity validation.

The indicator engine assumes well-formed bars: strictly increasing dates,
positive prices with low <= open, close <= high, and non-negative integral
volume. Malformed input is rejected eagerly when a BarSeries is built instead
of leaking NaN or nonsense levels into the indicators.
"""

import numpy as np
import pandas as pd

from stockta.utils import get_logger

logger = get_logger(__name__)

PRICE_COLUMNS = ("open", "high", "low", "close")
REQUIRED_COLUMNS = (*PRICE_COLUMNS, "volume")

# Rows listed per issue before the message is abbreviated
_MAX_REPORTED_ROWS = 5


class MalformedBarError(ValueError):
    """Raised when a bar series violates OHLCV integrity rules."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("Malformed bar series: " + "; ".join(issues))


def coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with the OHLCV columns as numbers; unparseable values become NaN."""
    numeric = df.copy()
    for col in REQUIRED_COLUMNS:
        if col in numeric.columns:
            numeric[col] = pd.to_numeric(numeric[col], errors="coerce")
    return numeric


def _describe(mask: pd.Series, message: str) -> str | None:
    """Summarize the rows selected by mask, or None when none are selected."""
    if not mask.any():
        return None
    rows = [str(label) for label in mask[mask].index[:_MAX_REPORTED_ROWS]]
    count = int(mask.sum())
    suffix = ", ..." if count > _MAX_REPORTED_ROWS else ""
    return f"{message} ({count} rows: {', '.join(rows)}{suffix})"


class BarValidator:
    """
    Validator for OHLCV integrity.

    Runs every check and collects human-readable issues, so a caller sees all
    problems with a series at once rather than the first one only.
    """

    def find_issues(self, df: pd.DataFrame) -> list[str]:
        """
        Check a bar frame indexed by date.

        Args:
            df: DataFrame with open, high, low, close, volume columns and a
                DatetimeIndex

        Returns:
            List of issue descriptions (empty when the frame is valid)
        """
        missing_cols = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_cols:
            return [f"Missing required columns: {missing_cols}"]

        if df.empty:
            return []

        df = coerce_numeric(df)
        values = df[list(REQUIRED_COLUMNS)]
        issues = [
            _describe(values.isna().any(axis=1), "NaN or non-numeric values"),
            _describe(np.isinf(values).any(axis=1), "Infinite values"),
            _describe(pd.Series(df.index.isna(), index=df.index), "Missing or unparseable dates"),
            *self._check_ohlc_integrity(df),
            *self._check_volume(df),
            self._check_dates(df),
        ]
        return [issue for issue in issues if issue is not None]

    def ensure_valid(self, df: pd.DataFrame) -> None:
        """
        Raise MalformedBarError when the frame has any integrity issue.

        Args:
            df: Bar frame to check

        Raises:
            MalformedBarError: If any check fails
        """
        issues = self.find_issues(df)
        if issues:
            logger.warning("malformed_bar_series", rows=len(df), issues=issues)
            raise MalformedBarError(issues)

    def _check_ohlc_integrity(self, df: pd.DataFrame) -> list[str | None]:
        """Check positivity and the low <= open, close <= high envelope."""
        return [
            _describe((df[list(PRICE_COLUMNS)] <= 0).any(axis=1), "Non-positive prices"),
            _describe(df["low"] > df["high"], "Low above high"),
            _describe(
                (df["open"] > df["high"]) | (df["open"] < df["low"]),
                "Open outside high-low range",
            ),
            _describe(
                (df["close"] > df["high"]) | (df["close"] < df["low"]),
                "Close outside high-low range",
            ),
        ]

    def _check_volume(self, df: pd.DataFrame) -> list[str | None]:
        volume = df["volume"]
        return [
            _describe(volume < 0, "Negative volume"),
            _describe(volume.notna() & (volume % 1 != 0), "Fractional volume"),
        ]

    def _check_dates(self, df: pd.DataFrame) -> str | None:
        """Dates must be unique and strictly increasing."""
        dates = df.index.to_series()
        not_increasing = dates.diff() <= pd.Timedelta(0)
        return _describe(not_increasing, "Dates not strictly increasing")
