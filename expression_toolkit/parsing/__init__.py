"""Parsers that build expression trees from text."""

from .source import Source, parse_number
from .stack_parser import parse
from .bracket_parser import BracketParser, ParseMode, parse_prefix, parse_postfix

__all__ = ['Source', 'parse', 'BracketParser', 'ParseMode', 'parse_prefix', 'parse_postfix', 'parse_number']
