"""Curve sample loading from CSV and JSON files."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from .abstract_class import SampleSource
from .config import LoaderSettings
from .config import SampleFormat
from .models import CurveSamples

logger = logging.getLogger(__name__)

# Spreadsheet exports often start with a byte-order mark
SAMPLE_ENCODING = "utf-8-sig"


@dataclass(slots=True)
class SampleFormatError(ValueError):
    """Raised when a sample file cannot be parsed."""

    path: Path
    reason: str
    line: int | None = None

    def __str__(self) -> str:
        where = f"{self.path}:{self.line}" if self.line is not None else str(self.path)
        return f"{where}: {self.reason}"


class CSVSampleSource(SampleSource):
    """
    CSV file with one sample per row.

    A header row names the columns; only the configured x/y columns are read.
    y cells matching one of the gap tokens are read as gaps, e.g.::

        x,y
        0.0,1.5
        1.0,
        2.0,NaN
        3.0,2.25
    """

    def __init__(self, path: Path, settings: LoaderSettings | None = None):
        super().__init__(path)
        self.settings = settings or LoaderSettings()

    def load(self) -> CurveSamples:
        cfg = self.settings
        x_values: list[float] = []
        y_values: list[float | None] = []

        try:
            with self.path.open(newline="", encoding=SAMPLE_ENCODING) as f:
                reader = csv.DictReader(f, delimiter=cfg.delimiter)
                missing = [
                    col
                    for col in (cfg.x_column, cfg.y_column)
                    if col not in (reader.fieldnames or ())
                ]
                if missing:
                    raise SampleFormatError(
                        self.path, f"missing column(s): {', '.join(missing)}", 1
                    )

                for row in reader:
                    line = reader.line_num
                    x_cell, y_cell = row[cfg.x_column], row[cfg.y_column]
                    if cfg.is_gap(x_cell):
                        raise SampleFormatError(self.path, "x value must not be empty", line)
                    x_values.append(self._parse_number(x_cell, line))
                    y_values.append(
                        None if cfg.is_gap(y_cell) else self._parse_number(y_cell, line)
                    )
        except UnicodeDecodeError as exc:
            raise SampleFormatError(self.path, f"not UTF-8 text ({exc.reason})") from exc
        except csv.Error as exc:
            raise SampleFormatError(self.path, str(exc), reader.line_num) from exc

        samples = CurveSamples(x_values=x_values, y_values=y_values)
        logger.info(
            "Loaded %d samples (%d gaps) from %s", len(x_values), samples.gap_count, self.path
        )
        return samples

    def _parse_number(self, cell: str, line: int) -> float:
        try:
            return float(cell)
        except ValueError:
            raise SampleFormatError(self.path, f"not a number: {cell!r}", line) from None


class JSONSampleSource(SampleSource):
    """JSON document ``{"x_values": [...], "y_values": [...]}`` with null marking gaps."""

    def load(self) -> CurveSamples:
        try:
            document = self.path.read_text(encoding=SAMPLE_ENCODING)
        except UnicodeDecodeError as exc:
            raise SampleFormatError(self.path, f"not UTF-8 text ({exc.reason})") from exc

        samples = CurveSamples.model_validate_json(document)
        logger.info(
            "Loaded %d samples (%d gaps) from %s",
            len(samples.x_values),
            samples.gap_count,
            self.path,
        )
        return samples


_SUFFIX_FORMATS = {
    ".csv": SampleFormat.CSV,
    ".json": SampleFormat.JSON,
}


def detect_format(path: Path) -> SampleFormat:
    """Guess the sample format from the file suffix."""
    try:
        return _SUFFIX_FORMATS[Path(path).suffix.lower()]
    except KeyError:
        raise SampleFormatError(Path(path), "cannot detect sample format from suffix") from None


def open_sample_source(path: Path, settings: LoaderSettings | None = None) -> SampleSource:
    """
    Create the sample source for a file.

    Args:
        path: Sample file
        settings: Loader settings; an explicit ``format`` wins over the suffix

    Returns:
        CSVSampleSource or JSONSampleSource
    """
    settings = settings or LoaderSettings()
    sample_format = settings.format or detect_format(path)
    if sample_format is SampleFormat.JSON:
        return JSONSampleSource(path)
    return CSVSampleSource(path, settings)
