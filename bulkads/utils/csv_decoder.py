# bulkads/utils/csv_decoder.py

import csv
import re
from dataclasses import dataclass, field
from io import StringIO
from typing import Dict, List, Tuple

import pandas as pd

from .logger import Log


CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")


class CsvInputError(ValueError):
    """The upload cannot be turned into CSV rows at all."""


@dataclass
class ParsedCsv:
    headers: List[str]
    rows: List[Dict[str, str]]
    delimiter: str
    encoding: str
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    empty_rows: int = 0


def _decode(raw: bytes) -> Tuple[str, str]:
    """
    Try UTF-8 (strict), then UTF-16LE, then Windows-1252, then UTF-8 with
    replacement characters. UTF-16 is only attempted when the bytes carry a
    UTF-16 BOM or NUL bytes, since almost any even-length input "decodes".
    """
    looks_utf16 = raw[:2] in UTF16_BOMS or b"\x00" in raw

    if raw[:2] in UTF16_BOMS:
        try:
            return raw.decode("utf-16"), "utf-16"
        except UnicodeDecodeError:
            pass

    try:
        text = raw.decode("utf-8")
        if "\x00" not in text:
            return text, "utf-8"
    except UnicodeDecodeError:
        text = None

    if looks_utf16 and len(raw) % 2 == 0:
        try:
            return raw.decode("utf-16-le"), "utf-16-le"
        except UnicodeDecodeError:
            pass

    if text is not None:
        return text, "utf-8"

    try:
        return raw.decode("cp1252"), "windows-1252"
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace"), "utf-8-lossy"


def decode_csv_bytes(raw: bytes) -> Dict[str, object]:
    """Decode an upload and strip BOMs, NUL bytes and control characters."""
    text, encoding = _decode(raw or b"")
    issues = []

    if text.startswith("\ufeff"):
        issues.append("Removed byte order mark")
    text = text.replace("\ufeff", "")

    nulls = text.count("\x00")
    if nulls:
        issues.append(f"Removed {nulls} null bytes")

    text, removed = CONTROL_CHARS_RE.subn("", text)
    if removed - nulls > 0:
        issues.append(f"Removed {removed - nulls} control characters")

    if encoding != "utf-8":
        issues.append(f"File decoded as {encoding}")

    return {"text": text, "encoding": encoding, "issues": issues}


def detect_delimiter(text: str) -> str:
    return "\t" if "\t" in text else ","


def parse_csv_rows(text: str, delimiter: str = None) -> Tuple[List[str], List[Dict[str, str]], List[str], int]:
    """
    Parse CSV text into (headers, rows, warnings, empty_rows). Every value
    is kept as a string so IDs are never coerced to floats. Malformed lines
    are skipped with a warning; a file pandas cannot read at all raises
    CsvInputError.
    """
    if not text or not text.strip():
        raise CsvInputError("CSV file is empty or has no valid data")

    delimiter = delimiter or detect_delimiter(text)
    warnings = []

    def skip_bad_line(fields):
        warnings.append(f"Skipped malformed line with {len(fields)} fields: {delimiter.join(fields)[:80]}")
        return None

    try:
        df = pd.read_csv(
            StringIO(text),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=skip_bad_line,
        )
    except pd.errors.EmptyDataError:
        raise CsvInputError("CSV file is empty or has no valid data")
    except (pd.errors.ParserError, csv.Error) as e:
        Log.error(f"[csv_decoder.py][parse_csv_rows] CSV parsing failed: {e}")
        raise CsvInputError(f"CSV parsing failed: {e}")

    df.columns = [str(column).strip() for column in df.columns]
    df = df.fillna("")

    rows = []
    empty_rows = 0
    for row in df.to_dict(orient="records"):
        cleaned = {key: str(value).strip() for key, value in row.items()}
        if any(cleaned.values()):
            rows.append(cleaned)
        else:
            empty_rows += 1

    return list(df.columns), rows, warnings, empty_rows


def read_csv_upload(raw: bytes) -> ParsedCsv:
    """Decode, clean and parse an uploaded CSV/TSV file."""
    decoded = decode_csv_bytes(raw)
    text = decoded["text"]
    delimiter = detect_delimiter(text)
    headers, rows, warnings, empty_rows = parse_csv_rows(text, delimiter)

    if not rows:
        raise CsvInputError("CSV file is empty or has no valid data")

    return ParsedCsv(
        headers=headers,
        rows=rows,
        delimiter=delimiter,
        encoding=decoded["encoding"],
        issues=decoded["issues"],
        warnings=warnings,
        empty_rows=empty_rows,
    )
