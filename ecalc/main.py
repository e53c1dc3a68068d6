"""Uses the ecalc session to interpret .calc files/run in command-line mode. Also uses error handling context manager.
Called from the ecalc console script.

In file mode every non-blank line is one statement, and the first error aborts the run with exit status 1. In
command-line mode errors are reported and the shell moves on to the next statement.
"""

import argparse

from ecalc.lang.error import ErrorHandler
from ecalc.lang.session import Session
from ecalc.lang.shell import Shell


def main(argv=None):
    """Runs ecalc interpreter. Called from ecalc console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="ecalc", description="line-oriented expression interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        args = parser.parse_args(argv)

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False).run_all()
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
