"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid circular-import scenarios.

Every phrase can say where it starts, at least roughly. That is all
the diagnostics need: a slice of the source text to underline.
Trees built by hand (as in the tests) have no positions at all,
so anything here may answer None.
"""
from typing import Optional

class Phrase:
	def head(self) -> Optional[slice]:
		""" Return the slice of source text which best identifies this phrase """
		raise NotImplementedError(type(self))

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str, spot:Optional[slice]):
		assert isinstance(text, str)
		assert isinstance(spot, slice) or spot is None, type(spot)
		self.text, self.spot = text, spot
	def __repr__(self): return "<Name %r>" % self.text
	def head(self): return self.spot

class Statement(Phrase): pass

class Expression(Phrase): pass

class Keyword(Phrase):
	""" A reserved word, kept only for its position and spelling. """
	def __init__(self, text:str, spot:Optional[slice]):
		self.text, self.spot = text, spot
	def __repr__(self): return "<Keyword %s>" % self.text
	def head(self): return self.spot
