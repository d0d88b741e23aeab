import logging
import os
import sys

import pandas as pd

from table_model import Column, split_values
from table_view import text_width

log = logging.getLogger(__name__)


def _cell_text(v) -> str:
    if v is None:
        return ""
    try:
        if pd.isna(v):
            return ""
    except (TypeError, ValueError):
        # array-like cells
        pass
    return str(v)


class FileTypeHandler:
    """Loads a file into table columns and string rows."""

    MAX_COL_WIDTH = 40
    FRAME_TYPES = {".csv", ".tsv", ".parquet", ".xlsx"}
    DEFAULT_SEPARATOR = ","

    def __init__(self, path: str, separator: str | None = None):
        self.path = path
        self.separator = separator
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

    def load(self) -> tuple[list[Column], list[list[str]]]:
        if not os.path.exists(self.path):
            raise ValueError(f"No such file: {self.path}")

        if self.separator is None and self.ext in self.FRAME_TYPES:
            df = self._read_frame()
            log.info("loaded %s with shape %s", self.path, df.shape)
            return self.frame_to_table(df)

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ValueError(f"Cannot read {self.path}: {e}") from e
        log.info("loaded %s as delimited text", self.path)
        return self.text_to_table(text, self.separator or self.DEFAULT_SEPARATOR)

    def _read_frame(self) -> pd.DataFrame:
        try:
            if self.ext == ".csv":
                return pd.read_csv(self.path, dtype=str, keep_default_na=False)
            if self.ext == ".tsv":
                return pd.read_csv(
                    self.path, sep="\t", dtype=str, keep_default_na=False
                )
            if self.ext == ".parquet":
                self._ensure_parquet_engine()
                return pd.read_parquet(self.path)
            self._ensure_excel_engine()
            return pd.read_excel(self.path)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except pd.errors.ParserError as e:
            raise ValueError(f"Cannot parse {self.path}: {e}") from e

    # ---------- conversion ----------
    @classmethod
    def frame_to_table(cls, df: pd.DataFrame):
        titles = [str(c) for c in df.columns]
        rows = []
        for values in df.itertuples(index=False, name=None):
            rows.append([_cell_text(v) for v in values])
        return cls.columns_for(titles, rows), rows

    @classmethod
    def text_to_table(cls, text: str, separator: str):
        """First line holds the column titles, the rest are rows."""
        text = text.replace("\r\n", "\n").rstrip("\n")
        if not text:
            return [], []
        lines = split_values(text, separator)
        titles, rows = lines[0], lines[1:]
        return cls.columns_for(titles, rows), rows

    @classmethod
    def columns_for(cls, titles, rows) -> list[Column]:
        n = max([len(titles)] + [len(r) for r in rows])
        cols = []
        for i in range(n):
            title = titles[i] if i < len(titles) else ""
            max_len = text_width(title)
            for r in rows:
                if i < len(r):
                    max_len = max(max_len, text_width(r[i]))
            cols.append(Column(title, max(1, min(cls.MAX_COL_WIDTH, max_len))))
        return cols

    # ---------- engines ----------
    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        print("Parquet support requires pyarrow. Install via: pip install pyarrow")
        sys.exit(1)

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        print("XLSX support requires openpyxl. Install via: pip install openpyxl")
        sys.exit(1)
