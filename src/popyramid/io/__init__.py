"""src/popyramid/io/__init__.py"""
from .detect import (
    detect_format,
    detect_format_from_headers,
    is_eurostat_format,
)
from .writers import ensure_parent_dir, read_json, write_csv, write_json
from .readers import (
    CSV_READER,
    EXCEL_READER,
    RawTable,
    TabularReader,
    get_reader,
    read_csv_headers,
    read_csv_table,
    read_excel_headers,
    read_excel_table,
    sniff_delimiter,
)

__all__ = [
    "detect_format",
    "detect_format_from_headers",
    "is_eurostat_format",
    "CSV_READER",
    "EXCEL_READER",
    "RawTable",
    "TabularReader",
    "get_reader",
    "read_csv_headers",
    "read_csv_table",
    "read_excel_headers",
    "read_excel_table",
    "sniff_delimiter",
    "ensure_parent_dir",
    "read_json",
    "write_csv",
    "write_json",
]
