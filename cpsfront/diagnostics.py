import sys, random
from pathlib import Path
from typing import Optional, Union
from boozetools.support.failureprone import SourceText, illustration

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]

	grumbles = [
		'Bother', 'Blast', 'Botheration', 'Confound it', 'Drat', 'Fiddlesticks',
		'Gadzooks', 'Good Grief', 'Great Scott', 'Heavens', 'Nuts', 'Rats',
		'Sufferin\' Succotash', 'Zounds',
	]

	resignations = [
		'That is more than I know how to canonicalize.',
		'I cannot continue.',
		'This is where the continuations run out.',
		'Some rewriting may be in order.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, grumbles, resignations)))

class Report:
	"""
	Collects the issues found while parsing and canonicalizing one compilation unit.
	Nothing in the core prints or exits; the command-line driver decides what to do with these.
	"""
	issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.issues = []
		self._max_issues = max_issues
		self._source = None
		self._path = None

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def issue(self, it:"Pic"):
		self.issues.append(it)
		if len(self.issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self.issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def bind_source(self, text:str, path:Union[Path, str, None]):
		""" Subsequent annotations refer to this text. """
		self._source = SourceText(text, filename=str(path))
		self._path = path

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self.issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	def _annotate(self, spot:Optional[slice], caption:str="") -> list["Annotation"]:
		if spot is None or self._source is None: return []
		else: return [Annotation(self._source, spot, caption)]

	# Methods the front-end is likely to call:
	def parse_error(self, kind, spot:slice, hint:str):
		intro = "The parser got confused by %s." % kind
		self.issue(Pic(intro, self._annotate(spot, "confused here"), [hint]))

	def stray_character(self, character:str, spot:slice):
		intro = "The character %r does not belong in this language." % character
		self.issue(Pic(intro, self._annotate(spot)))

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), []))

	def broken_file(self, path:Path):
		self.issue(Pic("Something went pear-shaped while trying to read "+str(path), []))

	# Methods the canonicalizer entry point calls:
	def unsupported(self, ex):
		""" File an UnsupportedSyntax exception as an issue. """
		intro = "Unsupported syntax: %s." % ex.reason
		caption = "in %s" % ex.where if ex.where else ""
		self.issue(Pic(intro, self._annotate(ex.spot(), caption)))

class Annotation:
	def __init__(self, source:SourceText, spot:slice, caption:str=""):
		self.source = source
		self.slice = spot
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro]
		if self._anns:
			lines.append("")
			lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
