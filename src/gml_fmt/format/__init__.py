from gml_fmt.format.formatter import IGNORE_PRAGMA, format_snippet, format_source, is_ignored

__all__ = ["IGNORE_PRAGMA", "format_snippet", "format_source", "is_ignored"]
