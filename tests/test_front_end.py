import io, unittest
from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path

from cpsfront import syntax, canon, cmdline, front_end
from cpsfront.front_end import parse_text, parse_file
from cpsfront.canonicalizer import canonicalize, by_modifier
from cpsfront.diagnostics import Report
from cpsfront.sexp import read

example_folder = Path(__file__).parent.parent/"examples"

def canonical(text, **kwargs):
	report = Report()
	unit = parse_text(text, Path("snippet.dart"), report)
	report.assert_no_issues("Snippet should parse.")
	trees = canonicalize(unit, report, **kwargs)
	report.assert_no_issues("Snippet should canonicalize.")
	return trees

def body_of(text, **kwargs):
	""" The statements of the one function in the text """
	[tree] = canonical(text, **kwargs)
	return tree[4][1]


class ParseTests(unittest.TestCase):

	def test_every_rule_is_in_the_grammar(self):
		# A nonterminal whose rules went missing would show up here as a terminal.
		terminals = set(front_end._parse_table["terminals"])
		for nonterminal in ("formals", "body", "block", "statement", "expr", "arguments"):
			with self.subTest(nonterminal):
				self.assertNotIn(nonterminal, terminals)
		self.assertTrue({"IF", "WHILE", "TRY", "CATCH", "THROW", "ASYNC", "SYNC"} <= front_end.RESERVED)

	def test_unit_structure(self):
		report = Report()
		unit = parse_text("int f(a, b) { return a; }\ng() {}\nvar x, y;", Path("snippet.dart"), report)
		self.assertTrue(report.ok())
		self.assertIsInstance(unit, syntax.CompilationUnit)
		f, g, x = unit.declarations
		self.assertEqual("int", f.return_type.text)
		self.assertEqual(["a", "b"], [p.nom.text for p in f.parameters])
		self.assertIsNone(g.return_type)
		self.assertIsInstance(x, syntax.TopLevelVariableDeclaration)

	def test_statements(self):
		self.assertEqual(
			(("If", ("Variable", "c"),
				("Block", (("Expression", ("Call", "a", ())),)),
				("Block", (("Expression", ("Call", "b", ())),))),),
			body_of("f(c) { if (c) { a(); } else { b(); } }"),
		)
		self.assertEqual(
			(("While", "top", ("Variable", "c"), ("Block", (("Break", "top"),))),),
			body_of("f(c) { top: while (c) { break top; } }"),
		)

	def test_literals_and_comments(self):
		self.assertEqual(
			(("Return", ("Call", "g", (("Constant", "31"), ("Constant", "10")))),),
			body_of("f() {\n  // Hex and decimal.\n  return g(0x1F, 10);\n}"),
		)

	def test_keywords_only_in_lowercase(self):
		self.assertEqual((("Return", ("Variable", "Return")),), body_of("f(Return) { return Return; }"))

	def test_generators_and_awaits(self):
		text = "gen() sync* { yield(1); yieldStar(more()); return; }\nwait() async { var r; r = await(get()); return r; }"
		gen, wait = canonical(text, classify=by_modifier)
		self.assertEqual(("SyncStar", "gen", (), (), ("Block", (
			("Yield", ("Constant", "1")),
			("YieldStar", ("Call", "more", ())),
			("YieldBreak",),
		))), gen)
		self.assertEqual(("Async", "wait", (), ("r",), ("Block", (
			("Expression", ("Assignment", "r", ("Await", ("Call", "get", ())))),
			("Return", ("Variable", "r")),
		))), wait)

	def test_try_and_throw(self):
		self.assertEqual(
			(("TryCatch", ("Block", (("Expression", ("Throw", ("Call", "oops", ()))),)), "e", ("Block", ())),),
			body_of("f() { try { throw oops(); } catch (e) { } }"),
		)


class ParseErrorTests(unittest.TestCase):

	def test_syntax_error(self):
		report = Report()
		self.assertIsNone(parse_text("f( {", Path("broken.dart"), report))
		self.assertEqual(1, len(report.issues))
		self.assertIn("confused", report.issues[0].intro)

	def test_stray_character(self):
		report = Report()
		self.assertIsNone(parse_text("f() { @ }", Path("broken.dart"), report))
		self.assertEqual(1, len(report.issues))
		self.assertIn("'@'", report.issues[0].intro)

	def test_issues_show_the_source(self):
		report = Report()
		parse_text("f() {\n  if (c) a(); else b();\n}", Path("broken.dart"), report)
		self.assertTrue(report.sick())
		self.assertIn("if (c) a();", report.issues[0].as_text())

	def test_missing_file(self):
		report = Report()
		self.assertIsNone(parse_file(example_folder/"no_such_thing.dart", report))
		self.assertIn("no file", report.issues[0].intro)


class ExampleTests(unittest.TestCase):
	""" The example programs do what they say. """

	def test_generators(self):
		report = Report()
		unit = parse_file(example_folder/"generators.dart", report)
		trees = canonicalize(unit, report)
		report.assert_no_issues("Every function in this example is supported.")
		self.assertEqual(["SyncStar", "Async", "Sync", "Sync"], [t[0] for t in trees])
		for tree in trees: canon.check_shape(tree)

	def test_refused(self):
		report = Report(max_issues=10)
		unit = parse_file(example_folder/"refused.dart", report)
		self.assertTrue(report.ok())
		self.assertIsNone(canonicalize(unit, report, keep_going=True))
		reasons = [pic.intro for pic in report.issues]
		self.assertEqual(4, len(reasons))
		self.assertIn("top-level variable", reasons[0])
		self.assertIn("method with a receiver", reasons[3])


class CommandLineTests(unittest.TestCase):

	def run_cli(self, *argv):
		out, err = io.StringIO(), io.StringIO()
		with redirect_stdout(out), redirect_stderr(err):
			status = cmdline.run(cmdline.parser.parse_args(list(argv)))
		return status, out.getvalue(), err.getvalue()

	def test_success_prints_the_trees(self):
		status, out, err = self.run_cli(str(example_folder/"generators.dart"))
		self.assertEqual(0, status)
		trees = read(out)
		self.assertEqual("count_syncStar", trees[0][1])
		self.assertEqual("", err)

	def test_width_is_honored(self):
		status, out, _ = self.run_cli("-w", "40", str(example_folder/"generators.dart"))
		self.assertEqual(0, status)
		self.assertTrue(all(len(line) <= 40 for line in out.splitlines()))

	def test_rejection_fails(self):
		status, out, err = self.run_cli(str(example_folder/"refused.dart"))
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("Unsupported syntax: top-level variable.", err)

	def test_one_program_at_a_time(self):
		with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as caught:
			cmdline.parser.parse_args(["one.dart", "two.dart"])
		self.assertEqual(2, caught.exception.code)

	def test_too_many_issues(self):
		status, out, err = self.run_cli("-k", str(example_folder/"refused.dart"))
		self.assertEqual(1, status)
		self.assertIn("Giving up", err)


if __name__ == '__main__':
	unittest.main()
