from typing import Iterator, Optional

BRACKETS = ('(', ')')
WHITESPACE = (' ', '\t', '\n', '\r')


class Source:
  """Character cursor that hands out `(`, `)` and whitespace/bracket-delimited words.

  `get_token` returns None once the input is exhausted. `pos` is the 0-based
  cursor; `token_start` is the 0-based offset of the last token returned.
  """

  __slots__ = ('data', 'pos', 'token_start')

  def __init__(self, data: str):
    self.data = data
    self.pos = 0
    self.token_start = 0

  def _skip_whitespace(self):
    while self.pos < len(self.data) and self.data[self.pos] in WHITESPACE:
      self.pos += 1

  def get_token(self) -> Optional[str]:
    self._skip_whitespace()
    self.token_start = self.pos
    if self.pos >= len(self.data):
      return None
    char = self.data[self.pos]
    if char in BRACKETS:
      self.pos += 1
      return char
    while (self.pos < len(self.data)
           and self.data[self.pos] not in WHITESPACE
           and self.data[self.pos] not in BRACKETS):
      self.pos += 1
    return self.data[self.token_start:self.pos]

  def at_end(self) -> bool:
    self._skip_whitespace()
    return self.pos >= len(self.data)

  def __iter__(self) -> Iterator[str]:
    while True:
      token = self.get_token()
      if token is None:
        return
      yield token


def parse_number(token: str) -> Optional[float]:
  """Numeric literal value of `token`, or None if it is not one."""
  if '_' in token:
    return None
  try:
    return float(token)
  except ValueError:
    return None
