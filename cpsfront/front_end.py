"""
The parser: scanner actions and parse actions bound to the Dartlet grammar.
Most parse actions are the constructors in the syntax module;
the few here are the list-building ones.
"""
import sys
from pathlib import Path
from typing import Optional

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.parsing.interface import ParseError
from boozetools.support.pretty import DOT
from . import syntax
from .diagnostics import Report
from .ontology import Nom, Keyword

class DartletParseError(ParseError):
	pass

class StrayCharacter(Exception):
	""" Raised from the scanner for a character no pattern covers """
	pass

_tables = make_tables(Path(__file__).parent/"Dartlet.md")
_parse_table = _tables['parser']
RESERVED = frozenset(t for t in _parse_table["terminals"] if t.isupper() and t.isalpha())

class DartletParser(TypicalApplication):

	def scan_ignore(self, yy: IterableScanner): pass

	@staticmethod
	def scan_punctuation(yy: IterableScanner):
		punctuation = sys.intern(yy.match())
		yy.token(punctuation, yy.slice())

	@staticmethod
	def scan_integer(yy: IterableScanner): yy.token("integer", syntax.IntegerLiteral(int(yy.match()), yy.slice()))

	@staticmethod
	def scan_hexadecimal(yy: IterableScanner):
		yy.token("integer", syntax.IntegerLiteral(int(yy.match()[2:], 16), yy.slice()))

	@staticmethod
	def scan_short_string(yy: IterableScanner): yy.token("short_string", syntax.StringLiteral(yy.match()[1:-1], yy.slice()))

	@staticmethod
	def scan_word(yy: IterableScanner):
		# Keywords are lower-case in the source, upper-case in the grammar.
		word = yy.match()
		upper = word.upper()
		if word.islower() and upper in RESERVED: yy.token(upper, Keyword(word, yy.slice()))
		else: yy.token("name", Nom(sys.intern(word), yy.slice()))

	@staticmethod
	def scan_stray(yy: IterableScanner):
		raise StrayCharacter(yy.match(), yy.slice())

	@staticmethod
	def parse_empty(): return []
	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	def unexpected_token(self, kind, semantic, pds):
		raise DartletParseError(self.stack_symbols(pds), kind, self.yy.slice())

	pass

dartlet_parser = DartletParser(_tables)

def parse_text(text:str, path:Path, report:Report) -> Optional[syntax.CompilationUnit]:
	""" Submit text to parser; hand back the compilation unit, or None after filing an issue """
	report.bind_source(text, path)
	try:
		return dartlet_parser.parse(text, filename=str(path))
	except StrayCharacter as ex:
		character, span = ex.args
		report.stray_character(character, span)
	except ParseError as ex:
		stack_symbols, lookahead, span = ex.args
		hint = _best_hint(stack_symbols, lookahead)
		report.parse_error(lookahead, span, hint)

def parse_file(path:Path, report:Report) -> Optional[syntax.CompilationUnit]:
	report.info("Parsing", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError:
		report.broken_file(path)
	else:
		return parse_text(text, path, report)

##########################
#
#  Parse errors get a hint where a common mistake is recognizable from
#  the top of the parse stack and the lookahead token.
#

ETC = "???"
_advice_tree = {ETC:{}}

def _hint(path, text):
	def dig(where, what):
		if what not in where: where[what] = {}
		return where[what]
	symbols = path.split()
	node = dig(_advice_tree, symbols.pop())
	for symbol in reversed(symbols):
		if symbol == DOT:
			continue
		if symbol == ETC:
			node[ETC] = True
		else:
			node = dig(node, symbol)
	assert '' not in node, path
	node[''] = text

def _best_hint(stack_symbols, lookahead):
	"""
	Find the longest match between the parse stack and a known hint.
	If there is none, read out the parser state so it's easy to add a corresponding hint.
	"""
	best = None
	nodes = [_advice_tree[ETC]]
	if lookahead in _advice_tree: nodes.append(_advice_tree[lookahead])
	for symbol in reversed(stack_symbols):
		subsequent = []
		for n in nodes:
			if symbol in n: subsequent.append(n[symbol])
			if ETC in n: subsequent.append(n)
		nodes = subsequent
		for n in nodes:
			if '' in n: best = n['']
	if best:
		return "Here's my best guess:\n\t"+best
	else:
		return "Parser state:\n\t"+" ".join(list(stack_symbols) + [DOT, lookahead])

_hint("IF ( expr ) ● ???", "The then-branch of an if-statement must be a block in {braces}.")
_hint("expr ● }", "Probably a missing semicolon after this expression.")
_hint("expr ● name", "Probably a missing semicolon after this expression.")
_hint("BREAK name ● ???", "A break-statement ends with a semicolon.")
_hint("CONTINUE name ● ???", "A continue-statement ends with a semicolon.")
_hint("TRY block ● ???", "A try-statement needs a catch clause, a finally block, or both.")
_hint("name ● {", "A function declaration needs a (parameter list), even if it is empty.")
_hint("( ??? expr ● ;", "I suspect a missing ')' closing parenthesis.")
