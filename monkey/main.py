"""Uses the Monkey interpreter to run .mk files or to run in command-line mode. Also uses the error handling context
manager. Called from the monkey executable script.
"""

import argparse

from monkey.interpreter import parse_source
from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="monkey", description="Tree-walking interpreter for the Monkey language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--step-limit", type=int, default=None, metavar="N",
                        help="stop evaluation with an error after N node visits")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--parse-only", action="store_true",
                      help="print the canonical form of the parsed file instead of running it")
    mode.add_argument("--tree", action="store_true",
                      help="print the syntax tree of the parsed file instead of running it")
    return parser


def main(argv=None):
    """Runs the Monkey interpreter. Called from the monkey executable script."""
    args = build_parser().parse_args(argv)

    if args.file is None:
        error_handler = ErrorHandler(fatal=False)
        with error_handler:
            Shell(Session(error_handler, Session.SH_FILE, args.step_limit)).cmdloop()
        return

    with ErrorHandler(path=args.file) as error_handler:
        if args.parse_only or args.tree:
            program = parse_source(Session.read_source(args.file))
            print(program.display() if args.tree else program)
            return

        sess = Session(error_handler, args.file, args.step_limit)
        sess.run()

        for result in sess.results:
            print(result.inspect())


if __name__ == "__main__":
    main()
