import os
import sys
import logging

import pandas as pd

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    pass


class DocumentLoader:
    TABULAR_EXTS = {".csv", ".tsv", ".parquet", ".xlsx"}

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()
        # new files end with a newline once they have text
        self.trailing_newline = True

    @property
    def read_only(self) -> bool:
        return self.ext in self.TABULAR_EXTS

    def load(self) -> str:
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            return ""

        if self.ext in self.TABULAR_EXTS:
            return self._render_table(self._load_table())

        try:
            with open(self.path, "r", encoding="utf-8", errors="replace", newline="") as f:
                text = f.read()
        except OSError as exc:
            raise DocumentError(f"cannot read {self.path}: {exc}") from exc
        # one final newline lives outside the buffer; save() puts exactly it back
        self.trailing_newline = text.endswith("\n")
        if self.trailing_newline:
            text = text[:-1]
        logger.info("Loaded %s (%d chars)", self.path, len(text))
        return text

    def save(self, text: str) -> None:
        if self.read_only:
            raise DocumentError(f"{self.ext} documents are read-only")
        try:
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
                if text and self.trailing_newline:
                    f.write("\n")
        except OSError as exc:
            raise DocumentError(f"cannot write {self.path}: {exc}") from exc
        logger.info("Saved %s", self.path)

    # ---------- tabular ----------
    def _load_table(self) -> pd.DataFrame | dict[str, pd.DataFrame]:
        if self.ext == ".parquet":
            self._ensure_parquet_engine()
        elif self.ext == ".xlsx":
            self._ensure_excel_engine()
        try:
            if self.ext == ".csv":
                return pd.read_csv(self.path)
            if self.ext == ".tsv":
                return pd.read_csv(self.path, sep="\t")
            if self.ext == ".parquet":
                return pd.read_parquet(self.path)
            return pd.read_excel(self.path, sheet_name=None)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (pd.errors.ParserError, UnicodeDecodeError, ValueError, OSError) as exc:
            raise DocumentError(f"cannot read {self.path}: {exc}") from exc

    def _render_table(self, data) -> str:
        if isinstance(data, dict):
            parts = []
            for name, df in data.items():
                if not isinstance(df, pd.DataFrame):
                    continue
                parts.append(f"# {name}\n\n{self._frame_text(df)}")
            return "\n\n".join(parts)
        return self._frame_text(data)

    def _frame_text(self, df: pd.DataFrame) -> str:
        if df is None or df.shape[1] == 0:
            return ""
        return df.to_string(index=False)

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
