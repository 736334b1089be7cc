"""
S-expressions in and out.

Printing goes through a small document-layout engine in the style of Wadler's
"prettier printer": a document is built from text, line-breaks, nesting, and groups.
Each group is laid out flat if it fits in the remaining width, and otherwise
its line-breaks become newlines. The decision is made per group, outermost first,
so a node that fits stays on one line even when its parent does not.

A tree is a str (an atom) or a sequence of trees. In particular,
both canonical trees and serialized CPS IR are trees.
"""
from typing import NamedTuple, Union
import sexpdata

DEFAULT_WIDTH = 120

class Text(NamedTuple):
	text: str

class Line(NamedTuple):
	""" A space when flat; a newline and indentation otherwise. """
	pass

class Nest(NamedTuple):
	depth: int
	body: "Doc"

class Concat(NamedTuple):
	parts: tuple

class Group(NamedTuple):
	body: "Doc"

Doc = Union[Text, Line, Nest, Concat, Group]

LINE = Line()

def _fits(room:int, item, rest:list) -> bool:
	"""
	Does the item, laid flat, fit in the room left on this line?
	Whatever follows the item, up to the next newline, counts against it too.
	"""
	stack = [item]
	spill = len(rest)
	while room >= 0:
		if not stack:
			if not spill: return True
			spill -= 1
			stack.append(rest[spill])
		indent, flat, doc = stack.pop()
		if isinstance(doc, Text):
			room -= len(doc.text)
		elif isinstance(doc, Line):
			if flat: room -= 1
			else: return True
		elif isinstance(doc, Concat):
			stack.extend((indent, flat, part) for part in reversed(doc.parts))
		elif isinstance(doc, Nest):
			stack.append((indent + doc.depth, flat, doc.body))
		else:
			stack.append((indent, flat, doc.body))
	return False

def layout(doc:Doc, width:int=DEFAULT_WIDTH) -> str:
	out = []
	column = 0
	todo = [(0, False, doc)]
	while todo:
		indent, flat, doc = todo.pop()
		if isinstance(doc, Text):
			out.append(doc.text)
			column += len(doc.text)
		elif isinstance(doc, Line):
			if flat:
				out.append(" ")
				column += 1
			else:
				out.append("\n" + " "*indent)
				column = indent
		elif isinstance(doc, Concat):
			todo.extend((indent, flat, part) for part in reversed(doc.parts))
		elif isinstance(doc, Nest):
			todo.append((indent + doc.depth, flat, doc.body))
		elif isinstance(doc, Group):
			item = (indent, True, doc.body)
			if flat or _fits(width - column, item, todo): todo.append(item)
			else: todo.append((indent, False, doc.body))
		else:
			raise TypeError(doc)
	return "".join(out)

def to_doc(tree) -> Doc:
	"""
	An atom is its text. A list is an open-paren, the first element,
	and then each remaining element after a line-break, nested two spaces.
	"""
	if isinstance(tree, str): return Text(tree)
	if not tree: return Text("()")
	docs = [to_doc(t) for t in tree]
	children = tuple(Concat((LINE, d)) for d in docs[1:])
	return Group(Concat((Text("("), docs[0], Nest(2, Concat(children + (Text(")"),))))))

def render(tree, width:int=DEFAULT_WIDTH) -> str:
	return layout(to_doc(tree), width)

class _AtomParser(sexpdata.Parser):
	""" Every bare atom is a Symbol. Without this, `NaN` would come back as a float. """
	def atom(self, token):
		return sexpdata.Symbol(token)

def read(text:str):
	"""
	Parse S-expression text back into atoms (str) and lists (tuple).
	Atoms come back as their text, numerals included, so that
	read(render(tree)) == tree for any tree of str and tuple.
	"""
	[it] = _AtomParser(text, nil=None, true=None).parse()
	return _plain(it)

def _plain(it):
	if isinstance(it, sexpdata.Symbol): return it.value()
	if isinstance(it, (list, tuple)): return tuple(_plain(x) for x in it)
	raise ValueError(it)
