"""
Points and spans within source text.

The external parser tags every node with where it came from, as a line and
column for each end. Lines count from one; columns count from zero. The
type-checker never looks at these; they matter only for complaining.
"""
from pathlib import Path
from typing import NamedTuple, Optional

class Point(NamedTuple):
	line: int
	column: int

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: Optional[Path]
	start: Point
	stop: Point
	
	def width_on(self, line_of_text:str) -> int:
		if self.stop.line == self.start.line: width = self.stop.column - self.start.column
		else: width = len(line_of_text.rstrip()) - self.start.column
		return max(width, 1)

def _point(it) -> Point:
	if not isinstance(it, dict): raise TypeError(it)
	line, column = it["line"], it["column"]
	for n in line, column:
		if isinstance(n, bool) or not isinstance(n, int): raise TypeError(n)
	return Point(line, column)

def span_of(loc:Optional[dict], path:Optional[Path]) -> Optional[Span]:
	""" Translate a parser's location tag, if any, into a Span. Raise TypeError or KeyError if it is malformed. """
	if not loc: return None
	if not isinstance(loc, dict): raise TypeError(loc)
	start = _point(loc["start"])
	stop = _point(loc["end"]) if "end" in loc else start
	return Span(path, start, stop)

def offset_of(text:str, point:Point) -> int:
	lines = text.splitlines(keepends=True)
	return sum(len(line) for line in lines[:point.line-1]) + point.column
