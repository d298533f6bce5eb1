"""
This is a type-checker for a tiny typed language.

{0}

It reads the JSON term tree that a parser produces. For example:

    tinyts program.json

will print the type of the program if it is well-typed, or else try to explain why not.

    tinyts program.json -s program.ts

does the same, but can point at the guilty part of program.ts when complaining.

    tinyts -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="tinyts",
	description="Type-checker for term trees of a tiny typed language.",
)
parser.add_argument("program", help="a JSON term tree, as a parser emits it.")
parser.add_argument('-s', "--source", help="the source text the tree was parsed from, for illustrating complaints.")
parser.add_argument('-c', "--check", action="count", help="Check verbosely, reporting progress on stderr.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import read_file, Yuck
	from .checker import TypeChecker
	report = Report(verbose=args.check)
	source = Path.cwd() / args.source if args.source else None
	if source is not None and not source.is_file():
		report.no_such_file(source)
		report.complain_to_console()
		return 1
	try:
		try: term = read_file(Path.cwd() / args.program, report, source)
		except Yuck:
			assert report.sick()
			report.complain_to_console()
			return 1
		assert report.ok()
		result = TypeChecker(report).check_program(term)
		if report.sick():
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		return 1
	print(result)
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
