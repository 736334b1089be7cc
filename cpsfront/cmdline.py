"""
This is the canonicalizing front end of a continuation-passing-style compiler.

{0}

For example:

    cpsfront program.dart

will print the canonical trees for program.dart as one S-expression,
or else try to explain which construct it cannot represent.

    cpsfront -h

will explain all the arguments.

Functions are classified by name: `foo_async` is asynchronous and `foo_syncStar`
is a synchronous generator. Pass --by-modifier to go by the `async` and `sync*` markers instead.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="cpsfront",
	description="Canonicalize Dart-like functions for conversion to continuation-passing style.",
)
parser.add_argument("program", help="try examples/generators.dart for example.")
parser.add_argument('-w', "--width", type=int, default=120, help="Fit the output to this many columns. (Default 120.)")
parser.add_argument('-m', "--by-modifier", action="store_true", help="Classify functions by their body modifier rather than their name.")
parser.add_argument('-k', "--keep-going", action="store_true", help="Report every unsupported declaration, not just the first.")
parser.add_argument('-v', "--verbose", action="count", help="Mention each step along the way.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import parse_file
	from .canonicalizer import canonicalize, by_name, by_modifier
	from .sexp import render
	report = Report(verbose=args.verbose)
	classify = by_modifier if args.by_modifier else by_name
	try:
		unit = parse_file(Path.cwd() / args.program, report)
		if unit is None:
			report.complain_to_console()
			return 1
		trees = canonicalize(unit, report, classify=classify, keep_going=args.keep_going)
		if trees is None:
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	print(render(trees, args.width))
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
