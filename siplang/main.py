"""Runs sip source files, or the interactive shell when no file is given. Also uses the error handling context manager.
Installed as the sip executable script.
"""

import argparse
import sys

from siplang.lang.error import ErrorHandler
from siplang.lang.session import Session
from siplang.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="sip", description="sip scripting language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print the file's tokens before running it")
    parser.add_argument("--ast", action="store_true", help="print the file's syntax tree before running it")
    return parser


def main(argv=None):
    """Runs sip interpreter. Called from sip executable script."""
    assert sys.version_info >= (3, 7), "sip cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)

            if args.tokens:
                print(" ".join(str(token) for token in sess.tokens(sess.source)))
            if args.ast:
                print(sess.program(sess.source).display())

            sess.run()
            print(sess.pop().inspect())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
