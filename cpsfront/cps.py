"""
The continuation-passing-style intermediate representation.

This is the target the canonical trees are meant to be converted into.
Control flow is explicit: every call names both the continuation for a normal return
and the one for a throw, and suspension is a value (Await) rather than a control construct.

There are values, which can be bound to names:
	Constant(n), Fun(parameters, return_cont, throw_cont, body), Await(value, normal_cont, error_cont)
and expressions, which go somewhere:
	LetVal, LetCont, CallFun, CallCont, If
and function declarations, which make up a program.

Every path through an expression ends in a CallFun or a CallCont. There is no
fall-through and no implicit return. The constructors do not check this, nor
anything about names; whoever builds the IR is responsible. The checkers at the
bottom of this module say whether they did.

Scoping policy (what unbound_names checks):
	* The program's function names are in scope everywhere.
	* A function's parameters and its two continuations are in scope in its body.
	* LetVal binds its name in its rest. LetCont binds its name in its rest and
	  in its own body (so that a continuation may be a loop); its parameters
	  are in scope in its body.
	* An inner binding may shadow an outer one.
	* Arity is not checked: a continuation may be called with any number of arguments.
"""
from typing import Sequence, Iterable
from .sexp import render, DEFAULT_WIDTH

class Value:
	def visit(self, visitor:"IRVisitor"): raise NotImplementedError(type(self))

class Expression:
	def visit(self, visitor:"IRVisitor"): raise NotImplementedError(type(self))

class Constant(Value):
	def __init__(self, value:int):
		assert isinstance(value, int), value
		self.value = value
	def visit(self, visitor:"IRVisitor"): return visitor.on_constant(self)
	def __repr__(self): return "Constant(%d)" % self.value

class Fun(Value):
	def __init__(self, parameters:Sequence[str], return_cont:str, throw_cont:str, body:Expression):
		self.parameters = tuple(parameters)
		self.return_cont, self.throw_cont = return_cont, throw_cont
		self.body = body
	def visit(self, visitor:"IRVisitor"): return visitor.on_fun(self)

class Await(Value):
	""" Suspend on the awaited value; resume at one continuation or the other. """
	def __init__(self, awaited:str, normal_cont:str, error_cont:str):
		self.awaited, self.normal_cont, self.error_cont = awaited, normal_cont, error_cont
	def visit(self, visitor:"IRVisitor"): return visitor.on_await(self)

class LetVal(Expression):
	def __init__(self, name:str, bound:Value, rest:Expression):
		self.name, self.bound, self.rest = name, bound, rest
	def visit(self, visitor:"IRVisitor"): return visitor.on_let_val(self)

class LetCont(Expression):
	def __init__(self, name:str, parameters:Sequence[str], cont_body:Expression, rest:Expression):
		self.name = name
		self.parameters = tuple(parameters)
		self.cont_body, self.rest = cont_body, rest
	def visit(self, visitor:"IRVisitor"): return visitor.on_let_cont(self)

class CallFun(Expression):
	def __init__(self, callee:str, arguments:Sequence[str], return_cont:str, throw_cont:str):
		self.callee = callee
		self.arguments = tuple(arguments)
		self.return_cont, self.throw_cont = return_cont, throw_cont
	def visit(self, visitor:"IRVisitor"): return visitor.on_call_fun(self)

class CallCont(Expression):
	def __init__(self, callee:str, arguments:Sequence[str]):
		self.callee = callee
		self.arguments = tuple(arguments)
	def visit(self, visitor:"IRVisitor"): return visitor.on_call_cont(self)

class If(Expression):
	def __init__(self, condition:str, then_part:Expression, else_part:Expression):
		self.condition, self.then_part, self.else_part = condition, then_part, else_part
	def visit(self, visitor:"IRVisitor"): return visitor.on_if(self)

class FunDecl:
	def __init__(self, name:str, parameters:Sequence[str], return_cont:str, throw_cont:str, body:Expression):
		self.name = name
		self.parameters = tuple(parameters)
		self.return_cont, self.throw_cont = return_cont, throw_cont
		self.body = body
	def visit(self, visitor:"IRVisitor"): return visitor.on_fun_decl(self)
	def __repr__(self): return "{FunDecl %s}" % self.name

###################
#

class IRVisitor:
	def on_constant(self, c:Constant): raise NotImplementedError(type(self))
	def on_fun(self, f:Fun): raise NotImplementedError(type(self))
	def on_await(self, a:Await): raise NotImplementedError(type(self))
	def on_let_val(self, lv:LetVal): raise NotImplementedError(type(self))
	def on_let_cont(self, lc:LetCont): raise NotImplementedError(type(self))
	def on_call_fun(self, cf:CallFun): raise NotImplementedError(type(self))
	def on_call_cont(self, cc:CallCont): raise NotImplementedError(type(self))
	def on_if(self, it:If): raise NotImplementedError(type(self))
	def on_fun_decl(self, fd:FunDecl): raise NotImplementedError(type(self))

class Serialize(IRVisitor):
	""" Return the tree (of str and tuple) which prints as this IR. """
	def on_constant(self, c:Constant):
		return ("Constant", str(c.value))
	def on_fun(self, f:Fun):
		return ("Fun", f.parameters, f.return_cont, f.throw_cont, f.body.visit(self))
	def on_await(self, a:Await):
		return ("Await", a.awaited, a.normal_cont, a.error_cont)
	def on_let_val(self, lv:LetVal):
		return ("LetVal", lv.name, lv.bound.visit(self), lv.rest.visit(self))
	def on_let_cont(self, lc:LetCont):
		return ("LetCont", lc.name, lc.parameters, lc.cont_body.visit(self), lc.rest.visit(self))
	def on_call_fun(self, cf:CallFun):
		return ("CallFun", cf.callee, cf.arguments, cf.return_cont, cf.throw_cont)
	def on_call_cont(self, cc:CallCont):
		return ("CallCont", cc.callee, cc.arguments)
	def on_if(self, it:If):
		return ("If", it.condition, it.then_part.visit(self), it.else_part.visit(self))
	def on_fun_decl(self, fd:FunDecl):
		return ("FunDecl", fd.name, fd.parameters, fd.return_cont, fd.throw_cont, fd.body.visit(self))

_SERIALIZE = Serialize()

def serialize(ir) -> tuple:
	""" A value, expression, or function declaration, as a tree. """
	return ir.visit(_SERIALIZE)

def serialize_program(program:Iterable[FunDecl]) -> tuple:
	return tuple(serialize(fd) for fd in program)

def write_program(program:Iterable[FunDecl], width:int=DEFAULT_WIDTH) -> str:
	return render(serialize_program(program), width)

###################
#

class Terminality(IRVisitor):
	"""
	True if every path through an expression ends in a call.
	Fun bodies inside LetVal count too, since they are expressions in their own right.
	"""
	def on_constant(self, c:Constant): return True
	def on_fun(self, f:Fun): return is_terminal(f.body)
	def on_await(self, a:Await): return True
	def on_let_val(self, lv:LetVal):
		return isinstance(lv.bound, Value) and lv.bound.visit(self) and is_terminal(lv.rest)
	def on_let_cont(self, lc:LetCont): return is_terminal(lc.cont_body) and is_terminal(lc.rest)
	def on_call_fun(self, cf:CallFun): return True
	def on_call_cont(self, cc:CallCont): return True
	def on_if(self, it:If): return is_terminal(it.then_part) and is_terminal(it.else_part)
	def on_fun_decl(self, fd:FunDecl): return is_terminal(fd.body)

_TERMINALITY = Terminality()

def is_terminal(expr) -> bool:
	""" Anything that isn't one of the five expression forms is not terminal. """
	return isinstance(expr, Expression) and expr.visit(_TERMINALITY)

class Unbound(IRVisitor):
	""" Collect names used out of scope, per the policy in the module docstring. """
	def __init__(self, in_scope:frozenset):
		self.in_scope = in_scope
		self.unbound = []

	def use(self, *names):
		for n in names:
			if n not in self.in_scope: self.unbound.append(n)

	def inside(self, extra:Iterable[str], ir):
		outer = self.in_scope
		self.in_scope = outer.union(extra)
		ir.visit(self)
		self.in_scope = outer

	def on_constant(self, c:Constant): pass
	def on_fun(self, f:Fun): self.inside(f.parameters + (f.return_cont, f.throw_cont), f.body)
	def on_await(self, a:Await): self.use(a.awaited, a.normal_cont, a.error_cont)
	def on_let_val(self, lv:LetVal):
		lv.bound.visit(self)
		self.inside([lv.name], lv.rest)
	def on_let_cont(self, lc:LetCont):
		self.inside(lc.parameters + (lc.name,), lc.cont_body)
		self.inside([lc.name], lc.rest)
	def on_call_fun(self, cf:CallFun): self.use(cf.callee, *cf.arguments, cf.return_cont, cf.throw_cont)
	def on_call_cont(self, cc:CallCont): self.use(cc.callee, *cc.arguments)
	def on_if(self, it:If):
		self.use(it.condition)
		it.then_part.visit(self)
		it.else_part.visit(self)
	def on_fun_decl(self, fd:FunDecl): self.inside(fd.parameters + (fd.return_cont, fd.throw_cont), fd.body)

def unbound_names(program:Sequence[FunDecl]) -> list[str]:
	""" Every out-of-scope use of a name, in order of appearance. """
	checker = Unbound(frozenset(fd.name for fd in program))
	for fd in program: fd.visit(checker)
	return checker.unbound
