"""Fully bracketed prefix/postfix parser.

``(+ x 2)`` in prefix mode and ``(x 2 +)`` in postfix mode both build
``x + 2``. Every operation lives in its own bracket group, the operation
symbol sits at the designated end of the group (first slot for prefix, last
slot for postfix) and its operand count is checked against the operation
table. Errors carry 1-based positions.

Groups are parsed recursively, so nesting deeper than the interpreter's
recursion limit raises ``RecursionError`` instead of a ``ParseError``.
"""

from enum import Enum
from typing import List, Optional

from .source import Source, parse_number
from ..errors import (
  ParseError, TokenError, OperationError, ArgumentsError, ArgumentsCountError, EndOfFileError
)
from ..expression_tree.core.node import Node, ConstantNode, OperationNode, VARIABLES
from ..expression_tree.core.operators import is_operator_symbol, get_operator_spec
from ..logging_system import LogLevel, log_debug, log_info


class ParseMode(Enum):
  PREFIX = 'prefix'
  POSTFIX = 'postfix'



class _Element:
  """One slot of a bracket group: a parsed node or a raw word."""

  __slots__ = ('node', 'text', 'start')

  def __init__(self, node: Optional[Node], text: str, start: int):
    self.node = node
    self.text = text
    self.start = start

  @property
  def is_raw(self) -> bool:
    return self.node is None

  @property
  def is_operation(self) -> bool:
    return self.node is None and is_operator_symbol(self.text)


class BracketParser:

  def __init__(self, mode: ParseMode = ParseMode.PREFIX):
    self.mode = ParseMode(mode)

  def parse(self, expression: str) -> Node:
    source = Source(expression)
    try:
      result = self._parse_expression(source)
      token = source.get_token()
      if token is not None:
        raise EndOfFileError(source.token_start + 1, token)
    except ParseError as e:
      log_info(f"Rejected {self.mode.value} expression '{expression}': {e}", LogLevel.DETAILED)
      raise
    log_info(f"Parsed {self.mode.value} expression '{expression}' into {result.size()} nodes")
    log_debug(f"Parsed {self.mode.value} expression '{expression}' -> {result.to_string()}")
    return result

  def _parse_leaf(self, token: str) -> Optional[Node]:
    value = parse_number(token)
    if value is not None:
      return ConstantNode(value)
    return VARIABLES.get(token)

  def _parse_expression(self, source: Source) -> Node:
    token = source.get_token()
    if token is None:
      raise EndOfFileError(source.pos + 1, expected="expression")
    if token == '(':
      return self._parse_bracket_group(source)
    leaf = self._parse_leaf(token)
    if leaf is None:
      raise TokenError(source.token_start + 1, token)
    return leaf

  def _parse_bracket_group(self, source: Source) -> Node:
    group_start = source.token_start
    elements: List[_Element] = []

    while True:
      token = source.get_token()
      if token is None:
        raise EndOfFileError(source.pos + 1, expected="')'")
      start = source.token_start
      if token == ')':
        break
      if token == '(':
        node = self._parse_bracket_group(source)
        element = _Element(node, source.data[start:source.pos], start)
      else:
        element = _Element(self._parse_leaf(token), token, start)
      self._check_element(elements, element)
      elements.append(element)

    operation, operands = self._split_operation(elements, start)
    spec = get_operator_spec(operation.text)
    if not spec.accepts(len(operands)):
      if self.mode is ParseMode.PREFIX:
        position = operation.start + len(operation.text)
      else:
        position = group_start
      raise ArgumentsCountError(position + 1, operation.text, spec.arity, len(operands))
    return OperationNode(spec.op_type, *[element.node for element in operands])

  def _check_element(self, elements: List[_Element], element: _Element):
    """Validate the slot `element` is about to take, and the slot it pushes inward."""
    if self.mode is ParseMode.PREFIX:
      if not elements:
        if not element.is_operation:
          raise OperationError(element.start + 1, element.text)
      elif element.is_raw:
        raise ArgumentsError(element.start + 1, element.text, is_operation=element.is_operation)
    elif elements and elements[-1].is_raw:
      previous = elements[-1]
      raise ArgumentsError(previous.start + 1, previous.text, is_operation=previous.is_operation)

  def _split_operation(self, elements: List[_Element], close_start: int):
    if not elements:
      raise OperationError(close_start + 1, ')')
    if self.mode is ParseMode.PREFIX:
      operation, operands = elements[0], elements[1:]
    else:
      operation, operands = elements[-1], elements[:-1]
    if not operation.is_operation:
      raise OperationError(operation.start + 1, operation.text)
    return operation, operands


_PREFIX_PARSER = BracketParser(ParseMode.PREFIX)
_POSTFIX_PARSER = BracketParser(ParseMode.POSTFIX)


def parse_prefix(expression: str) -> Node:
  return _PREFIX_PARSER.parse(expression)


def parse_postfix(expression: str) -> Node:
  return _POSTFIX_PARSER.parse(expression)
