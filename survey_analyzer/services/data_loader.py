"""Spreadsheet loading into raw cell matrices."""

import csv
import io
import logging
from pathlib import Path
from typing import Any, List, Optional

import pandas as pd

from ..models.survey import Cell, CellMatrix
from ..utils.validators import validate_input_file

logger = logging.getLogger(__name__)


def _to_cell(value: Any) -> Cell:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, (str, int, float)):
        return value
    # numpy scalars, timestamps and other objects
    if hasattr(value, 'item'):
        value = value.item()
        if isinstance(value, (str, int, float)):
            return value
    return str(value)


def frame_to_matrix(df: pd.DataFrame) -> CellMatrix:
    """Convert a headerless DataFrame into rows of cells, trimming trailing blanks."""
    matrix: List[List[Cell]] = []
    for values in df.itertuples(index=False, name=None):
        row = [_to_cell(v) for v in values]
        while row and row[-1] is None:
            row.pop()
        matrix.append(row)
    return matrix


class DataLoader:
    """Handles loading of survey spreadsheets as raw cell matrices."""

    def __init__(self, settings=None):
        """Initialize data loader with settings."""
        self.settings = settings
        self.encoding = settings.data_encoding if settings else 'utf-8'

    def load_matrix(self, file_path: str, sheet_name: Optional[str] = None) -> CellMatrix:
        """
        Load a file as a matrix of cells.

        The whole file is read before parsing begins; nothing stays open once
        the matrix is returned.

        Args:
            file_path: Path to input file
            sheet_name: Specific sheet name for Excel files (first sheet by default)

        Returns:
            List of rows, each a list of str, number or None
        """
        is_valid, error_msg = validate_input_file(file_path)
        if not is_valid:
            raise ValueError(f"File validation failed: {error_msg}")

        file_ext = Path(file_path).suffix.lower()

        try:
            if file_ext == '.csv':
                df = self._load_delimited(file_path, ',')
            elif file_ext == '.tsv':
                df = self._load_delimited(file_path, '\t')
            elif file_ext == '.xlsx':
                df = self._load_excel(file_path, sheet_name)
            else:
                raise ValueError(f"Unsupported file format: {file_ext}")

        except Exception as e:
            logger.error(f"Failed to load data from {file_path}: {str(e)}")
            raise

        matrix = frame_to_matrix(df)
        logger.info(f"Loaded {len(matrix)} rows from {file_path}")
        return matrix

    def _decode(self, raw: bytes) -> str:
        """Decode file bytes trying each configured encoding."""
        encodings_to_try = self.settings.encoding_fallbacks if self.settings else [self.encoding, 'utf-8-sig', 'gb18030', 'latin-1']

        for encoding in encodings_to_try:
            try:
                text = raw.decode(encoding)
                logger.info(f"Successfully decoded file with {encoding} encoding")
                return text
            except UnicodeDecodeError:
                continue

        raise ValueError(f"Unable to decode file with any of the tried encodings: {encodings_to_try}")

    def _load_delimited(self, file_path: str, sep: str) -> pd.DataFrame:
        """Load CSV/TSV, allowing rows of differing length."""
        text = self._decode(Path(file_path).read_bytes())

        # pandas sizes columns from the first line, so size from the widest record
        width = max((len(record) for record in csv.reader(io.StringIO(text), delimiter=sep)), default=0)
        if width == 0:
            return pd.DataFrame()

        return pd.read_csv(
            io.StringIO(text),
            sep=sep,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            na_values=[''],
            skip_blank_lines=False
        )

    def _load_excel(self, file_path: str, sheet_name: Optional[str] = None) -> pd.DataFrame:
        """Load first (or named) sheet of an Excel file."""
        df = pd.read_excel(
            file_path,
            sheet_name=sheet_name if sheet_name else 0,
            header=None,
            dtype=object
        )
        logger.info(f"Successfully loaded Excel file")
        return df
