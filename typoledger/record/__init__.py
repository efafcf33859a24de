"""Reading and writing the durable correction record."""

from typoledger.record.formatting import (
    format_live_line,
    format_record_line,
    needs_qualified_form,
    serialize_entries,
)
from typoledger.record.parsing import RecordReader, is_count_token, parse_record_line, parse_records

__all__ = [
    "RecordReader",
    "format_live_line",
    "format_record_line",
    "is_count_token",
    "needs_qualified_form",
    "parse_record_line",
    "parse_records",
    "serialize_entries",
]
