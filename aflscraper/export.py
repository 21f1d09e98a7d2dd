"""
CSV export for scraped rows.
"""
from pathlib import Path

import pandas as pd

from aflscraper.config import settings
from aflscraper.models import Row


def rows_to_frame(rows: list[Row]) -> pd.DataFrame:
    """
    Build a DataFrame from row records.

    Columns keep first-seen order across all rows, so tables with different
    headers on one page line up; missing cells are left empty.
    """
    columns: list[str] = []
    for row in rows:
        for col in row:
            if col not in columns:
                columns.append(col)
    return pd.DataFrame(rows, columns=columns)


def to_csv(rows: list[Row], path: str | Path | None = None, name: str = 'scrape') -> str:
    """
    Export rows to CSV.

    Args:
        rows: Row records
        path: Output file (defaults to {exports_dir}/{name}.csv)
        name: File stem used when path is not given

    Returns:
        Path to output file
    """
    out_path = Path(path) if path else Path(settings.exports_dir) / f'{name}.csv'
    out_path.parent.mkdir(parents=True, exist_ok=True)
    rows_to_frame(rows).to_csv(out_path, index=False)
    return str(out_path)
