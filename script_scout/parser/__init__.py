"""script_scout.parser: разбор HTML-страниц и исходного кода JavaScript."""

from .html_parser import ParsedPage, ScriptTag, parse_html
from .js_parser import iter_nodes, parse_script

__all__ = ["ParsedPage", "ScriptTag", "parse_html", "iter_nodes", "parse_script"]
