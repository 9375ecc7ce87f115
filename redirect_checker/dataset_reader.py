"""
1.0 Dataset Reader
Loads the legacy-URL -> expected-target spreadsheet.

Key features:
- Excel (.xlsx/.xls, first sheet) or CSV input via pandas
- No header inference: row 0 is returned as-is and dropped by the checker
- Empty cells normalized to None so short and blank rows look alike
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
CSV_EXTENSIONS = (".csv",)

# legacy URL, expected fragment
REQUIRED_COLUMNS = 2


@dataclass(frozen=True)
class RedirectionSpec:
    """One data row: a legacy URL and the fragment its redirect must contain."""
    old_url: str
    expected_new_url_contains: str


def read_dataset(path: str) -> List[List[Any]]:
    """
    2.0 Read every row of the input dataset, header row included.

    Args:
        path: Path to an Excel workbook or CSV file

    Returns:
        List of rows, each a list of cell values (None for empty cells)
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input dataset not found: {path}")

    extension = os.path.splitext(path)[1].lower()
    if extension in EXCEL_EXTENSIONS:
        df = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
    elif extension in CSV_EXTENSIONS:
        # python engine: rows wider than the header (notes column, trailing
        # comma) go through _leading_cells instead of raising ParserError
        df = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            engine="python",
            on_bad_lines=_leading_cells,
        )
    else:
        raise ValueError(f"Unsupported dataset format '{extension}' for {path}")

    # NaN -> None; pandas leaves NaN in object columns for blank cells
    rows = [
        [None if _is_blank(value) else value for value in row]
        for row in df.astype(object).values.tolist()
    ]
    logger.info(f"Loaded {len(rows)} rows (including header) from {path}")
    return rows


def _leading_cells(line: List[str]) -> List[str]:
    """Keep the URL and expected-fragment cells of an over-wide CSV row."""
    return line[:REQUIRED_COLUMNS]


def _is_blank(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-like cell values
        return False


def _cell_text(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or _is_blank(row[index]):
        return ""
    return str(row[index]).strip()


def iter_redirection_specs(dataset: Sequence[Sequence[Any]]) -> Iterator[Tuple[Sequence[Any], RedirectionSpec]]:
    """
    3.0 Yield (raw_row, RedirectionSpec) for each data row after the header.

    Missing cells come through as empty strings; deciding what to do with
    them is the checker's job.
    """
    for row in list(dataset)[1:]:
        row = list(row) if row is not None else []
        yield row, RedirectionSpec(
            old_url=_cell_text(row, 0),
            expected_new_url_contains=_cell_text(row, 1),
        )
