from gml_fmt.config.model import LangConfig
from gml_fmt.errors.base import GmlFmtError
from gml_fmt.format import format_snippet, format_source

__all__ = ["GmlFmtError", "LangConfig", "format_snippet", "format_source"]
