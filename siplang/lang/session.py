"""Session control for the sip language. Drives the Lexer -> Parser -> Evaluator pipeline to run the interpreter, either
in command-line mode or file interpretation mode.
"""

import re

from siplang.lang.error import GenericException
from siplang.lang.evaluator import Evaluator
from siplang.lang.lexical import Lexer
from siplang.lang.parser import Parser


class Session:
    """Governs a sip session: one Evaluator, and so one set of bindings, for the whole session."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.evaluator = Evaluator()
        self.to_exec = []  # list of (line num, source, Program) to execute
        self.results = []  # final value of every executed Program, in execution order
        self.source = ""   # contents of path in file mode

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(self.source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the line without trailing whitespace and whether or not
        it leaves a brace or parenthesis open (a line continuation is then necessary).
        """
        line = line.rstrip()
        code = re.sub(r"\"[^\"]*\"?", "", line)  # brackets inside string literals do not count
        return line, code.count("{") > code.count("}") or code.count("(") > code.count(")")

    @property
    def env(self):
        return self.evaluator.env

    def tokens(self, source):
        """Returns the tokens of source without parsing it."""
        return Lexer(source).scan()

    def program(self, source):
        """Returns source parsed into a Program, without executing it."""
        return Parser(self.tokens(source), source).parse()

    def add(self, source, line_num=1):
        """Lexes and parses source, queueing the resulting Program. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised
        self.to_exec.append((line_num, source, self.program(source)))
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's queued Programs against the session's bindings. Will raise any errors that are
        encountered; queued Programs are discarded either way.
        """
        try:
            for line_num, source, program in self.to_exec:
                self.error_handler.register_line(self.path, source, line_num)
                self.results.append(self.evaluator.eval_program(program))
                self.error_handler.remove_line(self.path)
        finally:
            self.to_exec = []

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
