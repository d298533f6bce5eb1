import sys, random
from functools import lru_cache
from typing import Any, Optional
from pathlib import Path
from boozetools.support.failureprone import SourceText, illustration

from .location import Span, offset_of
from .syntax import Phrase
from .calculus import Error

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	
	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Heavens', "Mercy", 'Nuts', 'Rats',
	]
	
	resignations = [
		'I am undone.',
		'I cannot continue.',
		'That does not type-check.',
		'I need to ask for help.',
	]
	
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found along the way, for a human to read later. """
	_issues : list["Pic"]
	
	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
	
	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	
	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)
	
	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)
	
	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)
	
	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)
	
	# Methods the front-end is likely to call:
	
	def _file_error(self, path:Path, prefix:str, footer=()):
		self.issue(Pic(prefix+" "+str(path), [], footer))
	
	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")
	
	def broken_file(self, path:Path, why:Any):
		self._file_error(path, "Something went pear-shaped while trying to read", [str(why)])
	
	def malformed_tree(self, path:Optional[Path], where:str, hint:str):
		intro = "The term tree in %s is not well-formed at %s."%(path or "the input", where)
		self.issue(Pic(intro, [], [hint]))
	
	# Methods specific to report type-checking issues:
	
	def type_error(self, error:Error):
		assert error.is_error(), error
		intro = "Type-checking found a problem: %s"%error.nature
		self.issue(Pic(intro, [Annotation(error.guilty, error.nature)]))

class Annotation:
	span: Optional[Span]
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		loc = getattr(node, "loc", None)
		self.span = loc if isinstance(loc, Span) else None
		self.caption = caption
	
	@property
	def path(self):
		return self.span.path if self.span else None
	
	def illustrate(self):
		span = self.span
		if span is None or span.path is None:
			where = "line %d, column %d"%span.start if span else "an unknown location"
			return "    at %s: %s"%(where, self.caption)
		source = _fetch(span.path)
		row, col = source.find_row_col(offset_of(_read(span.path), span.start))
		single_line = source.line_of_text(row)
		width = span.width_on(single_line)
		return illustration(single_line, col, width, prefix='% 6d |' % span.start.line, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path is not None and ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

@lru_cache(5)
def _read(path:Path) -> str:
	with open(path, "r", encoding="utf-8") as fh:
		return fh.read()

@lru_cache(5)
def _fetch(path:Path) -> SourceText:
	return SourceText(_read(path), filename=str(path))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
