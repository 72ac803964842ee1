"""Error handling for the sip language. Each stage of the pipeline (lexer, parser, evaluator) has its own error family,
all derived from GenericException. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a sip error. exprs[0] should be the offending source
    line (used for the caret diagnosis), the rest are snippets interpolated into msg.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False, line=None):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = str(exprs[0]) if exprs else ""
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.line = line  # 1-based line of the offending expr within the registered source, if known
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


def _located(msg, expr):
    """Appends the offending source line to msg when it is known."""
    return msg + " in '{0}'" if expr else msg


# ---------------------------------------------------------------------------------------------------------------------
# lexer


class LexError(GenericException):
    """Raised by Lexer.scan. Positional args are filled in from the offending source line."""


class InvalidToken(LexError):

    def __init__(self, char, expr="", start=0, line=None):
        self.char = char
        super().__init__(_located("invalid character '{1}'", expr), (expr, char),
                         start=start, end=start + 1, line=line)


class InvalidString(LexError):

    def __init__(self, partial, expr="", start=0, line=None):
        self.partial = partial
        super().__init__(_located("unterminated string literal '\"{1}'", expr), (expr, partial), start=start, line=line)


class InvalidNum(LexError):

    def __init__(self, reason, numeral="", expr="", start=0, line=None):
        self.reason = reason
        self.numeral = numeral
        super().__init__(_located("invalid numeral '{1}' ({2})", expr), (expr, numeral, reason),
                         start=start, end=start + len(numeral), line=line)


# ---------------------------------------------------------------------------------------------------------------------
# parser


class ParseError(GenericException):
    """Raised by Parser.parse."""


class NotSupportedToken(ParseError):

    def __init__(self, token, expr="", line=None):
        self.token = token
        start = max(token.column - 1, 0)
        super().__init__(_located("unsupported token '{1}'", expr), (expr, token.lexeme),
                         start=start, end=start + len(token.lexeme), line=line)


class ExpectedTokenNotFound(ParseError):

    def __init__(self, description, expr="", start=0, line=None):
        self.description = description
        template = description.replace("{", "{{").replace("}", "}}")
        super().__init__(_located(template, expr), expr, start=start, end=start + 1, line=line)


# ---------------------------------------------------------------------------------------------------------------------
# evaluator


class EvalError(GenericException):
    """Raised by Evaluator. Tree nodes do not know their source position, so there is never a caret diagnosis."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class NotLiteral(EvalError):

    def __init__(self, token):
        self.token = token
        super().__init__("token '{}' is not a literal", [token.lexeme])


class NotNumber(EvalError):

    def __init__(self, obj):
        self.obj = obj
        super().__init__("'{}' is not a number", [obj.inspect()])


class NotIdent(EvalError):

    def __init__(self, token):
        self.token = token
        super().__init__("'{}' is not an identifier", [token.lexeme])


class NotNumberOrStr(EvalError):

    def __init__(self, obj):
        self.obj = obj
        super().__init__("'{}' is not a number or string", [obj.inspect()])


class DifferObjectToCompare(EvalError):

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__("'{}' and '{}' are different kinds and cannot be compared", [left.inspect(), right.inspect()])


class TkIsNotIdent(EvalError):

    def __init__(self, token):
        self.token = token
        super().__init__("token '{}' is not an identifier", [token.lexeme])


class NotTruthCond(EvalError):

    def __init__(self, obj):
        self.obj = obj
        super().__init__("condition '{}' is not a bool", [obj.inspect()])


class DivideByZero(EvalError):

    def __init__(self, reason="divide by zero"):
        self.reason = reason
        super().__init__("{}", reason)


class NotSupportedOperator(EvalError):

    def __init__(self, token):
        self.token = token
        super().__init__("operator '{}' is not supported", [token.lexeme])


class IdentNotFound(EvalError):

    def __init__(self, name):
        self.name = name
        super().__init__("identifier '{}' is not found", [name])


class IdentifierIsNotCallable(EvalError):

    def __init__(self, name):
        self.name = name
        super().__init__("'{}' is not callable", [name])


class OnlyClassInstanceHaveProperty(EvalError):

    def __init__(self, name):
        self.name = name
        super().__init__("'{}' can not get property, only class instances have properties", [name])


class UnknownNode(EvalError):

    def __init__(self, node):
        self.node = node
        super().__init__("unknown node '{}'", [type(node).__name__])


class EmptyNode(EvalError):

    def __init__(self):
        super().__init__("empty node")


# ---------------------------------------------------------------------------------------------------------------------


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print sip errors instead."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error. Errors that do not know their own line are
        reported against the whole registered source when it spans several lines.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line is None:
                continue

            if error.line is not None:
                error_msg += f"  File '{file}', line {line_num + error.line - 1}:\n"
                error_msg += f"    {error.expr}\n"
            elif "\n" in line:  # whole file registered, and the error does not know its line
                error_msg += f"  File '{file}':\n"
            else:
                error_msg += f"  File '{file}', line {line_num}:\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded while evaluating"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
