import unittest

from cpsfront.cps import (
	Constant, Fun, Await, LetVal, LetCont, CallFun, CallCont, If, FunDecl,
	serialize, serialize_program, write_program, is_terminal, unbound_names,
)
from cpsfront.sexp import read

def choose():
	"""
	choose(x) returns f(1) if x, else x itself, by way of a join point.
	"""
	return FunDecl("choose", ["x"], "k", "h", LetCont(
		"j", ["y"], CallCont("k", ["y"]),
		If("x",
			LetVal("c", Constant(1), CallFun("f", ["c"], "j", "h")),
			CallCont("j", ["x"]),
		),
	))

def identity():
	return FunDecl("f", ["v"], "k", "h", CallCont("k", ["v"]))


class SerializeTests(unittest.TestCase):

	def test_values(self):
		self.assertEqual(("Constant", "17"), serialize(Constant(17)))
		self.assertEqual(("Await", "p", "ok", "oops"), serialize(Await("p", "ok", "oops")))
		self.assertEqual(
			("Fun", ("a", "b"), "k", "h", ("CallFun", "g", ("b", "a"), "k", "h")),
			serialize(Fun(["a", "b"], "k", "h", CallFun("g", ["b", "a"], "k", "h"))),
		)

	def test_declaration(self):
		self.assertEqual(
			("FunDecl", "choose", ("x",), "k", "h",
				("LetCont", "j", ("y",), ("CallCont", "k", ("y",)),
					("If", "x",
						("LetVal", "c", ("Constant", "1"), ("CallFun", "f", ("c",), "j", "h")),
						("CallCont", "j", ("x",))))),
			serialize(choose()),
		)

	def test_program_text(self):
		self.assertEqual("((FunDecl f (v) k h (CallCont k (v))))", write_program([identity()]))
		self.assertEqual("()", write_program([]))

	def test_program_reads_back(self):
		program = [choose(), identity()]
		for width in (20, 120):
			with self.subTest(width=width):
				self.assertEqual(serialize_program(program), read(write_program(program, width)))

	def test_awaiting(self):
		body = LetVal("r", Await("p", "resume", "h"), LetCont("resume", ["v"], CallCont("k", ["v"]), CallCont("resume", ["p"])))
		text = write_program([FunDecl("wait_async", ["p"], "k", "h", body)])
		self.assertIn("(Await p resume h)", text)


class TerminalityTests(unittest.TestCase):

	def test_calls_are_terminal(self):
		self.assertTrue(is_terminal(CallFun("f", [], "k", "h")))
		self.assertTrue(is_terminal(CallCont("k", [])))
		self.assertTrue(is_terminal(choose().body))

	def test_values_are_not_expressions(self):
		self.assertFalse(is_terminal(Constant(1)))
		self.assertFalse(is_terminal(Await("p", "k", "h")))

	def test_every_branch_must_end_in_a_call(self):
		self.assertFalse(is_terminal(If("x", CallCont("k", []), Constant(0))))
		self.assertFalse(is_terminal(LetCont("j", [], Constant(0), CallCont("j", []))))
		self.assertFalse(is_terminal(LetVal("a", Constant(0), Constant(1))))

	def test_function_bodies_count(self):
		self.assertFalse(is_terminal(LetVal("g", Fun([], "k", "h", Constant(3)), CallCont("k", ["g"]))))
		self.assertTrue(is_terminal(LetVal("g", Fun([], "r", "t", CallCont("r", [])), CallCont("k", ["g"]))))


class ScopeTests(unittest.TestCase):

	def test_well_scoped(self):
		self.assertEqual([], unbound_names([choose(), identity()]))

	def test_missing_function(self):
		self.assertEqual(["f"], unbound_names([choose()]))

	def test_continuation_may_call_itself(self):
		loop = LetCont("loop", ["i"], CallFun("step", ["i"], "loop", "h"), CallCont("loop", ["n"]))
		self.assertEqual([], unbound_names([FunDecl("step", ["n"], "k", "h", loop)]))

	def test_parameters_stay_inside(self):
		body = LetCont("j", ["y"], CallCont("k", ["y"]), CallCont("j", ["y"]))
		self.assertEqual(["y"], unbound_names([FunDecl("f", [], "k", "h", body)]))

	def test_let_val_binds_only_its_rest(self):
		body = LetVal("a", Await("a", "k", "h"), CallCont("k", ["a"]))
		self.assertEqual(["a"], unbound_names([FunDecl("f", [], "k", "h", body)]))

	def test_shadowing_is_allowed(self):
		body = LetVal("k", Constant(0), CallCont("k", ["k"]))
		self.assertEqual([], unbound_names([FunDecl("f", [], "k", "h", body)]))

	def test_inner_functions(self):
		inner = Fun(["z"], "r", "t", CallFun("outer", ["z", "k"], "r", "t"))
		body = LetVal("g", inner, CallCont("k", ["g", "r"]))
		self.assertEqual(["r"], unbound_names([FunDecl("outer", [], "k", "h", body)]))


if __name__ == '__main__':
	unittest.main()
