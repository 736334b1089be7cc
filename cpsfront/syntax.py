"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
Lower-case functions here are parse actions which adapt a grammar rule to one of the constructors.

The shapes follow the analyzer AST of the language this subset is drawn from,
because that is the shape the canonicalizer was designed against.
Nothing here decides what is supported. The grammar accepts rather more than
the canonicalizer does, so that rejection comes with a reason attached.
"""
from typing import Optional, Sequence, Union
from .ontology import Phrase, Nom, Statement, Expression, Keyword

#######################################################################
# Expressions

class IntegerLiteral(Expression):
	def __init__(self, value:int, spot:Optional[slice]):
		self.value, self.spot = value, spot
	def __repr__(self): return "<Integer %d>" % self.value
	def head(self): return self.spot

class StringLiteral(Expression):
	def __init__(self, value:str, spot:Optional[slice]):
		self.value, self.spot = value, spot
	def __repr__(self): return "<String %r>" % self.value
	def head(self): return self.spot

class SimpleIdentifier(Expression):
	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "<Identifier %s>" % self.nom.text
	def head(self): return self.nom.head()

class PropertyAccess(Expression):
	def __init__(self, target:Expression, nom:Nom):
		self.target, self.nom = target, nom
	def head(self): return self.nom.head()

class AssignmentExpression(Expression):
	def __init__(self, lhs:Expression, rhs:Expression):
		self.lhs, self.rhs = lhs, rhs
	def head(self): return self.lhs.head()

def assignment(nom:Nom, rhs:Expression):
	return AssignmentExpression(SimpleIdentifier(nom), rhs)

def property_assignment(target:Expression, nom:Nom, rhs:Expression):
	return AssignmentExpression(PropertyAccess(target, nom), rhs)

class MethodInvocation(Expression):
	""" A call. The target is the receiver, if there is one. """
	def __init__(self, target:Optional[Expression], nom:Nom, arguments:Sequence[Expression]):
		self.target, self.nom, self.arguments = target, nom, arguments or ()
	def __repr__(self):
		return "<Call %s/%d>" % (self.nom.text, len(self.arguments))
	def head(self): return self.nom.head()

def unqualified_call(nom:Nom, arguments:Sequence[Expression]):
	return MethodInvocation(None, nom, arguments)

class ThrowExpression(Expression):
	def __init__(self, keyword:Keyword, expression:Expression):
		self.keyword, self.expression = keyword, expression
	def head(self): return self.keyword.head()

#######################################################################
# Statements

class Block(Statement):
	def __init__(self, statements:Sequence[Statement]):
		self.statements = statements or ()
	def head(self):
		return self.statements[0].head() if self.statements else None

class VariableDeclaration(Phrase):
	def __init__(self, nom:Nom, initializer:Optional[Expression]=None):
		self.nom, self.initializer = nom, initializer
	def head(self): return self.nom.head()

class VariableDeclarationStatement(Statement):
	def __init__(self, keyword:Keyword, variables:Sequence[VariableDeclaration]):
		self.keyword, self.variables = keyword, variables
	def head(self): return self.keyword.head()

class ExpressionStatement(Statement):
	def __init__(self, expression:Expression): self.expression = expression
	def head(self): return self.expression.head()

class EmptyStatement(Statement):
	def __init__(self, spot:Optional[slice]): self.spot = spot
	def head(self): return self.spot

class ReturnStatement(Statement):
	def __init__(self, keyword:Keyword, expression:Optional[Expression]=None):
		self.keyword, self.expression = keyword, expression
	def head(self): return self.keyword.head()

class IfStatement(Statement):
	def __init__(self, keyword:Keyword, condition:Expression, then_statement:Statement, else_statement:Optional[Statement]=None):
		self.keyword = keyword
		self.condition = condition
		self.then_statement = then_statement
		self.else_statement = else_statement
	def head(self): return self.keyword.head()

class Label(Phrase):
	def __init__(self, nom:Nom): self.nom = nom
	def head(self): return self.nom.head()

class LabeledStatement(Statement):
	def __init__(self, labels:Sequence[Label], statement:Statement):
		assert labels
		self.labels, self.statement = labels, statement
	def head(self): return self.labels[0].head()

class BreakStatement(Statement):
	def __init__(self, keyword:Keyword, label:Optional[Nom]=None):
		self.keyword, self.label = keyword, label
	def head(self): return self.keyword.head()

class ContinueStatement(Statement):
	def __init__(self, keyword:Keyword, label:Optional[Nom]=None):
		self.keyword, self.label = keyword, label
	def head(self): return self.keyword.head()

class WhileStatement(Statement):
	def __init__(self, keyword:Keyword, condition:Expression, body:Statement):
		self.keyword, self.condition, self.body = keyword, condition, body
	def head(self): return self.keyword.head()

class DoStatement(Statement):
	def __init__(self, keyword:Keyword, body:Statement, condition:Expression):
		self.keyword, self.body, self.condition = keyword, body, condition
	def head(self): return self.keyword.head()

class CatchClause(Phrase):
	"""
	`on T catch (e, s) { ... }` in full generality.
	Any of the type, the exception parameter, and the stack-trace parameter may be absent,
	though the grammar never produces a clause lacking both the type and the parameter.
	"""
	def __init__(self, exception_type:Optional[Nom], exception:Optional[Nom], stack_trace:Optional[Nom], body:Block):
		self.exception_type = exception_type
		self.exception = exception
		self.stack_trace = stack_trace
		self.body = body
	def head(self): return (self.exception_type or self.exception).head()

def catch_clause(exception:Nom, body:Block):
	return CatchClause(None, exception, None, body)

def catch_with_trace(exception:Nom, stack_trace:Nom, body:Block):
	return CatchClause(None, exception, stack_trace, body)

def on_clause(exception_type:Nom, body:Block):
	return CatchClause(exception_type, None, None, body)

def on_catch_clause(exception_type:Nom, exception:Nom, body:Block):
	return CatchClause(exception_type, exception, None, body)

class TryStatement(Statement):
	def __init__(self, keyword:Keyword, body:Block, catch_clauses:Sequence[CatchClause], finally_block:Optional[Block]=None):
		self.keyword = keyword
		self.body = body
		self.catch_clauses = catch_clauses or ()
		self.finally_block = finally_block
	def head(self): return self.keyword.head()

def try_finally(keyword:Keyword, body:Block, finally_block:Block):
	return TryStatement(keyword, body, (), finally_block)

#######################################################################
# Functions and the compilation unit

class SimpleFormalParameter(Phrase):
	def __init__(self, nom:Nom, type_nom:Optional[Nom]=None):
		self.nom, self.type_nom = nom, type_nom
	def __repr__(self): return "<Parameter %s>" % self.nom.text
	def head(self): return self.nom.head()

def typed_parameter(type_nom:Nom, nom:Nom):
	return SimpleFormalParameter(nom, type_nom)

class DefaultFormalParameter(Phrase):
	""" An optional parameter, with or without its default value. """
	def __init__(self, parameter:SimpleFormalParameter, default:Optional[Expression]=None):
		self.parameter, self.default = parameter, default
	def head(self): return self.parameter.head()

def optional_parameter(parameter:SimpleFormalParameter):
	return DefaultFormalParameter(parameter)

FormalParameter = Union[SimpleFormalParameter, DefaultFormalParameter]

def with_optionals(required:list, optionals:list):
	return required + optionals

# Body modifiers come through as keywords spelled the way the language spells them.
def async_modifier(keyword:Keyword): return keyword
def async_star_modifier(keyword:Keyword): return Keyword("async*", keyword.spot)
def sync_star_modifier(keyword:Keyword): return Keyword("sync*", keyword.spot)

class BlockFunctionBody(Phrase):
	def __init__(self, block:Block, modifier:Optional[Keyword]=None):
		self.block, self.modifier = block, modifier
	def head(self): return self.modifier.head() if self.modifier else self.block.head()

def modified_body(modifier:Keyword, block:Block):
	return BlockFunctionBody(block, modifier)

class ExpressionFunctionBody(Phrase):
	def __init__(self, expression:Expression, modifier:Optional[Keyword]=None):
		self.expression, self.modifier = expression, modifier
	def head(self): return self.modifier.head() if self.modifier else self.expression.head()

def modified_arrow(modifier:Keyword, expression:Expression):
	return ExpressionFunctionBody(expression, modifier)

FunctionBody = Union[BlockFunctionBody, ExpressionFunctionBody]

class FunctionDeclaration(Phrase):
	def __init__(self, return_type:Optional[Nom], nom:Optional[Nom], parameters:Sequence[FormalParameter], body:FunctionBody):
		self.return_type = return_type
		self.nom = nom
		self.parameters = parameters or ()
		self.body = body
	def __repr__(self):
		return "{fn|%s/%d}" % (self.nom.text if self.nom else "?", len(self.parameters))
	def head(self): return self.nom.head() if self.nom else self.body.head()

def function(nom:Nom, parameters:Sequence[FormalParameter], body:FunctionBody):
	return FunctionDeclaration(None, nom, parameters, body)

class TopLevelVariableDeclaration(Phrase):
	def __init__(self, keyword:Keyword, variables:Sequence[VariableDeclaration]):
		self.keyword, self.variables = keyword, variables
	def head(self): return self.keyword.head()

Declaration = Union[FunctionDeclaration, TopLevelVariableDeclaration]

class CompilationUnit:
	""" The declarations appear in source order. """
	def __init__(self, declarations:Sequence[Declaration]):
		self.declarations = declarations or ()
