"""
Translate a compilation unit into canonical trees, or explain why not.

The canonical form exposes exactly what a conversion to continuation-passing style needs:
blocks, hoisted locals, labeled loops, single-catch try, and the await/yield forms.
Everything else is refused with an UnsupportedSyntax naming the construct.
There is no best-effort output: a declaration either canonicalizes completely or not at all.

Some conventions of the source text carry meaning here:

* A function is asynchronous if its name contains `_async`, and a synchronous generator
  if its name contains `_syncStar`. The `by_modifier` classifier reads the body modifier instead.
* All local variables are declared, without initial values, in a single `var` statement
  which is the first statement of the function body. That statement may be absent.
* `await(e)`, `yield(e)`, and `yieldStar(e)` look like calls but are the corresponding operators.
  A yield is a statement even though it is spelled like a call.
* Every `break` and `continue` names its target label.
"""
from typing import Callable, Optional, Union
from boozetools.support.foundation import Visitor
from . import syntax, canon
from .diagnostics import Report
from .ontology import Phrase

class UnsupportedSyntax(Exception):
	""" The input falls outside what the canonical form can represent. """
	def __init__(self, reason:str, guilty:Optional[Phrase]=None):
		super().__init__(reason)
		self.reason = reason
		self.guilty = guilty
		self.where = None  # The canonicalizer fills in the function name.
	def spot(self) -> Optional[slice]:
		return self.guilty.head() if self.guilty is not None else None
	def __str__(self):
		return "Unsupported syntax: %s." % self.reason

Classifier = Callable[[syntax.FunctionDeclaration], str]

def by_name(fn:syntax.FunctionDeclaration) -> str:
	""" The naming convention. `foo_async` is Async; `foo_syncStar` is SyncStar. """
	name = fn.nom.text
	if '_async' in name: return canon.ASYNC
	elif '_syncStar' in name: return canon.SYNC_STAR
	else: return canon.SYNC

_MODIFIER_TAG = {
	None: canon.SYNC,
	"async": canon.ASYNC,
	"sync*": canon.SYNC_STAR,
}

def by_modifier(fn:syntax.FunctionDeclaration) -> str:
	""" What the function body says it is, as in `f() async { ... }` """
	modifier = fn.body.modifier
	text = modifier.text if modifier else None
	if text not in _MODIFIER_TAG:
		raise UnsupportedSyntax("%s function" % text, modifier)
	return _MODIFIER_TAG[text]

# Calls to these names are really unary operators.
_OPERATORS = {
	'await': canon.Await,
	'yield': canon.Yield,
	'yieldStar': canon.YieldStar,
}

# And these are statements, even when they turn up as an expression-statement.
_YIELD_TAGS = (canon.YIELD, canon.YIELD_STAR)

class Canonicalizer(Visitor):
	"""
	Structural recursion over the source AST.
	Each visit method returns a canonical tree or raises UnsupportedSyntax.
	"""

	def __init__(self, classify:Classifier=by_name):
		self._classify = classify

	def visit_TopLevelVariableDeclaration(self, it:syntax.TopLevelVariableDeclaration):
		raise UnsupportedSyntax("top-level variable", it)

	def visit_FunctionDeclaration(self, fn:syntax.FunctionDeclaration):
		if fn.nom is None: raise UnsupportedSyntax("unnamed function declaration", fn)
		tag = self._classify(fn)
		parameters = [self.visit(p) for p in fn.parameters]
		if not isinstance(fn.body, syntax.BlockFunctionBody):
			raise UnsupportedSyntax("not a block function", fn.body)

		# Locals are hoisted into the first statement, if there is such a declaration.
		statements = fn.body.block.statements
		if statements and isinstance(statements[0], syntax.VariableDeclarationStatement):
			local_names = [self.visit(v) for v in statements[0].variables]
			statements = statements[1:]
		else:
			local_names = []

		body = canon.Block(self.visit(s) for s in statements)
		return canon.Function(tag, fn.nom.text, parameters, local_names, body)

	def visit_SimpleFormalParameter(self, p:syntax.SimpleFormalParameter):
		return p.nom.text

	def visit_DefaultFormalParameter(self, p:syntax.DefaultFormalParameter):
		raise UnsupportedSyntax("optional parameter", p)

	def visit_VariableDeclaration(self, v:syntax.VariableDeclaration):
		if v.initializer is not None: raise UnsupportedSyntax("initialized local variable", v)
		return v.nom.text

	# ==== Expressions ====

	def visit_IntegerLiteral(self, it:syntax.IntegerLiteral):
		return canon.Constant(str(it.value))

	def visit_StringLiteral(self, it:syntax.StringLiteral):
		raise UnsupportedSyntax("string literal", it)

	def visit_SimpleIdentifier(self, it:syntax.SimpleIdentifier):
		return canon.Variable(it.nom.text)

	def visit_PropertyAccess(self, it:syntax.PropertyAccess):
		raise UnsupportedSyntax("property access", it)

	def visit_AssignmentExpression(self, it:syntax.AssignmentExpression):
		if not isinstance(it.lhs, syntax.SimpleIdentifier):
			raise UnsupportedSyntax("non-simple left-hand side in assignment", it)
		return canon.Assignment(it.lhs.nom.text, self.visit(it.rhs))

	def visit_MethodInvocation(self, it:syntax.MethodInvocation):
		if it.target is not None: raise UnsupportedSyntax("method with a receiver", it)
		name = it.nom.text
		if name in _OPERATORS:
			# Nothing checks that yield and yieldStar occur as statements.
			if len(it.arguments) != 1: raise UnsupportedSyntax("wrong arity for %s" % name, it)
			return _OPERATORS[name](self.visit(it.arguments[0]))
		else:
			return canon.Call(name, [self.visit(a) for a in it.arguments])

	def visit_ThrowExpression(self, it:syntax.ThrowExpression):
		return canon.Throw(self.visit(it.expression))

	# ==== Statements ====

	def visit_Block(self, it:syntax.Block):
		return canon.Block(self.visit(s) for s in it.statements)

	def visit_VariableDeclarationStatement(self, it:syntax.VariableDeclarationStatement):
		raise UnsupportedSyntax("variable declaration other than the first statement of a function", it)

	def visit_EmptyStatement(self, it:syntax.EmptyStatement):
		raise UnsupportedSyntax("empty statement", it)

	def visit_ExpressionStatement(self, it:syntax.ExpressionStatement):
		expression = self.visit(it.expression)
		if expression[0] in _YIELD_TAGS: return expression
		else: return canon.Expression(expression)

	def visit_ReturnStatement(self, it:syntax.ReturnStatement):
		# A bare return is how a sync* function finishes.
		if it.expression is None: return canon.YieldBreak()
		else: return canon.Return(self.visit(it.expression))

	def visit_IfStatement(self, it:syntax.IfStatement):
		if it.else_statement is None: raise UnsupportedSyntax("if without an else", it)
		return canon.If(self.visit(it.condition), self.visit(it.then_statement), self.visit(it.else_statement))

	def visit_LabeledStatement(self, it:syntax.LabeledStatement):
		if len(it.labels) != 1: raise UnsupportedSyntax("multiple labels", it.labels[1])
		label = it.labels[0].nom.text
		if isinstance(it.statement, syntax.WhileStatement):
			return self.loop(it.statement, label)
		else:
			return canon.Label(label, self.visit(it.statement))

	def visit_WhileStatement(self, it:syntax.WhileStatement):
		return self.loop(it, None)

	def loop(self, it:syntax.WhileStatement, label:Optional[str]):
		return canon.While(label, self.visit(it.condition), self.visit(it.body))

	def visit_DoStatement(self, it:syntax.DoStatement):
		raise UnsupportedSyntax("do-while loop", it)

	def visit_BreakStatement(self, it:syntax.BreakStatement):
		if it.label is None: raise UnsupportedSyntax("break without a label", it)
		return canon.Break(it.label.text)

	def visit_ContinueStatement(self, it:syntax.ContinueStatement):
		if it.label is None: raise UnsupportedSyntax("continue without a label", it)
		return canon.Continue(it.label.text)

	def visit_TryStatement(self, it:syntax.TryStatement):
		# Try/catch/finally could be rewritten as try { try/catch } finally { ... },
		# but that is not done here. Consumers must not expect it.
		if not it.catch_clauses:
			if it.finally_block is None: raise UnsupportedSyntax("try without catch or finally", it)
			return canon.TryFinally(self.visit(it.body), self.visit(it.finally_block))
		elif len(it.catch_clauses) == 1:
			if it.finally_block is not None: raise UnsupportedSyntax("try/catch/finally", it)
			clause = it.catch_clauses[0]
			return canon.TryCatch(self.visit(it.body), self.catch_parameter(clause), self.visit(clause.body))
		else:
			raise UnsupportedSyntax("multiple catch clauses", it.catch_clauses[1])

	@staticmethod
	def catch_parameter(clause:syntax.CatchClause) -> str:
		if clause.exception_type is not None: raise UnsupportedSyntax("catch clause with an exception type", clause)
		if clause.exception is None: raise UnsupportedSyntax("catch clause without an exception parameter", clause)
		if clause.stack_trace is not None: raise UnsupportedSyntax("catch clause with a stack trace parameter", clause.stack_trace)
		return clause.exception.text

#######################################################################
# Entry points

def canonicalize_declaration(decl:syntax.Declaration, classify:Classifier=by_name) -> Union[tuple, UnsupportedSyntax]:
	""" The canonical tree for one declaration, or the reason there is none. """
	try:
		return Canonicalizer(classify).visit(decl)
	except UnsupportedSyntax as ex:
		if isinstance(decl, syntax.FunctionDeclaration) and decl.nom is not None:
			ex.where = decl.nom.text
		return ex

def canonicalize(unit:syntax.CompilationUnit, report:Report, *, classify:Classifier=by_name, keep_going=False) -> Optional[tuple]:
	"""
	Canonical trees for a whole compilation unit, in source order.
	On the first unsupported construct, file an issue and return None.
	With keep_going, every declaration gets a chance to complain, but the result is
	still None if any of them did. The report raises TooManyIssues at its limit.
	"""
	trees, failed = [], False
	for decl in unit.declarations:
		result = canonicalize_declaration(decl, classify)
		if isinstance(result, UnsupportedSyntax):
			report.unsupported(result)
			if not keep_going: return None
			failed = True
		else:
			report.info("Canonicalized", result[1])
			trees.append(result)
	if not failed: return tuple(trees)
