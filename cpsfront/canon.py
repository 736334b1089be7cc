"""
The canonical tree: what the canonicalizer produces and the printer consumes.

A tree is either an atom (a str: an identifier or the decimal text of a number)
or a tuple. Tagged nodes are tuples whose first element is one of the tags below,
followed by a fixed number of children. Untagged tuples are plain lists:
parameters, locals, the statements of a block, and the arguments of a call.

The constructors here are the only way the canonicalizer builds nodes,
so the shape table and the constructors cannot drift apart without a test noticing.
"""
from typing import Sequence, Union

Tree = Union[str, tuple]

SYNC = "Sync"
ASYNC = "Async"
SYNC_STAR = "SyncStar"
BLOCK = "Block"
EXPRESSION = "Expression"
RETURN = "Return"
YIELD_BREAK = "YieldBreak"
IF = "If"
LABEL = "Label"
BREAK = "Break"
CONTINUE = "Continue"
WHILE = "While"
TRY_CATCH = "TryCatch"
TRY_FINALLY = "TryFinally"
CONSTANT = "Constant"
VARIABLE = "Variable"
ASSIGNMENT = "Assignment"
CALL = "Call"
AWAIT = "Await"
YIELD = "Yield"
YIELD_STAR = "YieldStar"
THROW = "Throw"

FUNCTION_TAGS = (SYNC, ASYNC, SYNC_STAR)

# An unlabeled loop has the empty list in its label slot.
NO_LABEL = ()

# Child kinds, for the shape table:
ATOM = "atom"      # a bare str
ATOMS = "atoms"    # an untagged tuple of str
NODE = "node"      # a tagged node
NODES = "nodes"    # an untagged tuple of tagged nodes
OPT_ATOM = "atom?" # a str, or NO_LABEL

SHAPES = {
	SYNC: (ATOM, ATOMS, ATOMS, NODE),
	ASYNC: (ATOM, ATOMS, ATOMS, NODE),
	SYNC_STAR: (ATOM, ATOMS, ATOMS, NODE),
	BLOCK: (NODES,),
	EXPRESSION: (NODE,),
	RETURN: (NODE,),
	YIELD_BREAK: (),
	IF: (NODE, NODE, NODE),
	LABEL: (ATOM, NODE),
	BREAK: (ATOM,),
	CONTINUE: (ATOM,),
	WHILE: (OPT_ATOM, NODE, NODE),
	TRY_CATCH: (NODE, ATOM, NODE),
	TRY_FINALLY: (NODE, NODE),
	CONSTANT: (ATOM,),
	VARIABLE: (ATOM,),
	ASSIGNMENT: (ATOM, NODE),
	CALL: (ATOM, NODES),
	AWAIT: (NODE,),
	YIELD: (NODE,),
	YIELD_STAR: (NODE,),
	THROW: (NODE,),
}

def tag_of(tree:Tree):
	""" The tag of a tagged node, or None for atoms and plain lists. """
	if isinstance(tree, tuple) and tree and tree[0] in SHAPES: return tree[0]

class MisshapenTree(Exception):
	pass

#######################################################################
# Constructors, one per tag.

def Function(tag:str, name:str, parameters:Sequence[str], local_names:Sequence[str], body:tuple) -> tuple:
	if tag not in FUNCTION_TAGS: raise MisshapenTree("not a function tag", tag)
	return (tag, name, tuple(parameters), tuple(local_names), body)

def Block(statements:Sequence[tuple]) -> tuple: return (BLOCK, tuple(statements))
def Expression(expression:tuple) -> tuple: return (EXPRESSION, expression)
def Return(expression:tuple) -> tuple: return (RETURN, expression)
def YieldBreak() -> tuple: return (YIELD_BREAK,)
def If(condition:tuple, then_part:tuple, else_part:tuple) -> tuple: return (IF, condition, then_part, else_part)
def Label(label:str, statement:tuple) -> tuple: return (LABEL, label, statement)
def Break(label:str) -> tuple: return (BREAK, label)
def Continue(label:str) -> tuple: return (CONTINUE, label)

def While(label, condition:tuple, body:tuple) -> tuple:
	""" The label is a str, or None for an unlabeled loop. """
	return (WHILE, NO_LABEL if label is None else label, condition, body)

def TryCatch(body:tuple, exception:str, handler:tuple) -> tuple: return (TRY_CATCH, body, exception, handler)
def TryFinally(body:tuple, finalizer:tuple) -> tuple: return (TRY_FINALLY, body, finalizer)
def Constant(text:str) -> tuple: return (CONSTANT, text)
def Variable(name:str) -> tuple: return (VARIABLE, name)
def Assignment(name:str, expression:tuple) -> tuple: return (ASSIGNMENT, name, expression)
def Call(name:str, arguments:Sequence[tuple]) -> tuple: return (CALL, name, tuple(arguments))
def Await(expression:tuple) -> tuple: return (AWAIT, expression)
def Yield(expression:tuple) -> tuple: return (YIELD, expression)
def YieldStar(expression:tuple) -> tuple: return (YIELD_STAR, expression)
def Throw(expression:tuple) -> tuple: return (THROW, expression)

#######################################################################

def check_shape(tree:Tree):
	"""
	Raise MisshapenTree unless every tagged node in the tree has exactly the children
	its tag calls for. The argument is a single tagged node, as for one function.
	"""
	tag = tag_of(tree)
	if tag is None:
		raise MisshapenTree("not a tagged node", tree)
	kinds = SHAPES[tag]
	children = tree[1:]
	if len(children) != len(kinds):
		raise MisshapenTree("%s takes %d children, not %d" % (tag, len(kinds), len(children)), tree)
	for kind, child in zip(kinds, children):
		if kind == ATOM:
			if not isinstance(child, str): raise MisshapenTree("%s wants an atom"%tag, child)
		elif kind == OPT_ATOM:
			if not (isinstance(child, str) or child == NO_LABEL): raise MisshapenTree("%s wants a label"%tag, child)
		elif kind == ATOMS:
			if not (isinstance(child, tuple) and all(isinstance(c, str) for c in child)):
				raise MisshapenTree("%s wants a list of atoms"%tag, child)
		elif kind == NODE:
			check_shape(child)
		else:
			if not isinstance(child, tuple): raise MisshapenTree("%s wants a list"%tag, child)
			for c in child: check_shape(c)
