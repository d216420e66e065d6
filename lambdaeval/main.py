"""Runs the lambdaeval interpreter on a file of λ-terms (one per line), or in command-line mode. Also uses the error
handling context manager. Called from the lambdaeval console script.
"""

import argparse
import sys

from lambdaeval.lang.error import ErrorHandler
from lambdaeval.lang.session import Session
from lambdaeval.lang.shell import Shell
from lambdaeval.pure.reducer import Evaluator


def main(argv=None):
    """Runs lambdaeval interpreter. Called from lambdaeval executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lambdaeval", description="Untyped lambda calculus evaluator")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--trace", action="store_true", help="print every reduction step")
        parser.add_argument("--max-steps", type=int, default=Evaluator.MAX_STEPS,
                            help=f"beta reductions allowed per term (default: {Evaluator.MAX_STEPS})")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, trace=args.trace, max_steps=args.max_steps)
            sess.run()

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, trace=args.trace, max_steps=args.max_steps)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    sys.exit(main())
