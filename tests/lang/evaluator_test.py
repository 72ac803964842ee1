import unittest

from siplang.lang import ast, objects
from siplang.lang.error import (DifferObjectToCompare, DivideByZero, EmptyNode, EvalError, IdentNotFound, NotIdent,
                                NotLiteral, NotNumber, NotNumberOrStr, NotSupportedOperator, NotTruthCond,
                                TkIsNotIdent, UnknownNode)
from siplang.lang.evaluator import Evaluator
from siplang.lang.lexical import scan
from siplang.lang.parser import parse
from siplang.lang.tokens import Token, TokenKind


def run(source, evaluator=None):
    evaluator = evaluator if evaluator is not None else Evaluator()
    return evaluator.eval_program(parse(scan(source), source))


class EvaluatorTestCase(unittest.TestCase):

    def test_literals(self):
        cases = {
            "100": objects.Integer(100),
            "1.5": objects.Float(1.5),
            "\"abc\"": objects.SString("abc"),
            "true": objects.Bool(True),
            "false": objects.Bool(False),
            "null": objects.Null(),
            "(((7)))": objects.Integer(7),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

        self.assertRaises(NotLiteral, Evaluator().eval, ast.Literal(Token(TokenKind.PLUS)))

    def test_arithmetic(self):
        cases = {
            "1024 + 1024": objects.Number(2048.0),
            "1 - 3": objects.Number(-2.0),
            "2.5 * 2": objects.Number(5.0),
            "7 / 2": objects.Number(3.5),
            "100 + 1000 * 2": objects.Number(2100.0),
            "(1 + 2) * 3": objects.Number(9.0),
            "1 + 2 + 3": objects.Number(6.0),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

        # arithmetic never preserves Integer/Float
        self.assertIsInstance(run("1 + 1"), objects.Number)
        self.assertNotEqual(objects.Integer(2), run("1 + 1"))

    def test_divide_by_zero(self):
        should_raise = ["2048 / 0", "1 / 0.0", "1 / (2 - 2)", "0 / 0"]
        for case in should_raise:
            self.assertRaises(DivideByZero, run, case)

    def test_arithmetic_type_errors(self):
        should_raise = ["\"a\" + 1", "1 * true", "null - 1", "\"a\" + \"b\""]
        for case in should_raise:
            self.assertRaises(NotNumber, run, case)

    def test_unary(self):
        cases = {
            "-5": objects.Integer(-5),
            "-2.5": objects.Float(-2.5),
            "--5": objects.Integer(5),
            "-(1 + 1)": objects.Number(-2.0),
            "!true": objects.Bool(False),
            "!!true": objects.Bool(True),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

        self.assertRaises(NotLiteral, run, "!1")
        self.assertRaises(NotNumber, run, "-\"abc\"")
        self.assertRaises(NotNumber, run, "-true")

    def test_comparison(self):
        cases = {
            "\"abc\" > \"xyz\"": objects.Bool(False),
            "\"abc\" < \"xyz\"": objects.Bool(True),
            "\"abc\" == \"abc\"": objects.Bool(True),
            "\"abc\" != \"abc\"": objects.Bool(False),
            "1 < 2": objects.Bool(True),
            "2 <= 2": objects.Bool(True),
            "1.5 >= 2": objects.Bool(False),
            "1 == 1.0": objects.Bool(True),
            "1 + 1 == 2": objects.Bool(True),
            "3 != 4": objects.Bool(True),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

    def test_comparison_type_errors(self):
        with self.assertRaises(DifferObjectToCompare) as ctx:
            run("\"def\" >= 1024")
        self.assertEqual(objects.SString("def"), ctx.exception.left)
        self.assertEqual(objects.Integer(1024), ctx.exception.right)

        self.assertRaises(DifferObjectToCompare, run, "1 == \"1\"")

        should_raise = ["true == true", "1 < false", "null == null", "\"a\" < true"]
        for case in should_raise:
            self.assertRaises(NotNumberOrStr, run, case)

    def test_logical(self):
        cases = {
            "true && false": objects.Bool(False),
            "true && true": objects.Bool(True),
            "false || true": objects.Bool(True),
            "false || false": objects.Bool(False),
            "1 < 2 && 2 < 3": objects.Bool(True),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

        # right operand is never evaluated when the left one decides the result
        self.assertEqual(objects.Bool(False), run("false && missing"))
        self.assertEqual(objects.Bool(True), run("true || missing"))
        self.assertEqual(objects.Bool(False), run("false && (x = true)"))

        self.assertRaises(IdentNotFound, run, "true && missing")
        self.assertRaises(NotTruthCond, run, "1 && true")
        self.assertRaises(NotTruthCond, run, "true && 1")

    def test_variables(self):
        evaluator = Evaluator()
        self.assertEqual(objects.Integer(100), run("var x = 100", evaluator))
        self.assertEqual(objects.Integer(100), run("x", evaluator))
        self.assertEqual(objects.Integer(100), run("x", evaluator))

        self.assertEqual(objects.Number(200.0), run("x = x * 2", evaluator))
        self.assertEqual(objects.Number(200.0), run("x", evaluator))

        self.assertEqual(objects.Null(), run("var y", evaluator))
        self.assertEqual(objects.Null(), run("y", evaluator))

        self.assertEqual(objects.SString("s"), run("a = b = \"s\"", evaluator))
        self.assertEqual(run("a", evaluator), run("b", evaluator))

        self.assertEqual(["a", "b", "x", "y"], evaluator.env.names())

    def test_declaration_round_trip(self):
        literals = ["100", "1.5", "\"text\"", "true", "false", "null"]
        for literal in literals:
            evaluator = Evaluator()
            run(f"var v = {literal}", evaluator)
            self.assertEqual(run(literal), run("v", evaluator), literal)

    def test_ident_not_found(self):
        with self.assertRaises(IdentNotFound) as ctx:
            run("nope")
        self.assertEqual("nope", ctx.exception.name)

    def test_name_tokens(self):
        evaluator = Evaluator()
        self.assertRaises(NotIdent, evaluator.eval, ast.VarStmt(Token(TokenKind.INTEGER, 1)))
        self.assertRaises(TkIsNotIdent, evaluator.eval, ast.Assign(Token(TokenKind.STRING, "x"), ast.Null()))

    def test_if(self):
        cases = {
            "if (true) 1 else 2": objects.Integer(1),
            "if (false) 1 else 2": objects.Integer(2),
            "if (false) 1": objects.Null(),
            "if (1 < 2) { \"yes\" } else { \"no\" }": objects.SString("yes"),
            "if (false) 1 else if (true) 2 else 3": objects.Integer(2),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

        should_raise = ["if (1) 2", "if (\"true\") 2", "if (null) 2"]
        for case in should_raise:
            self.assertRaises(NotTruthCond, run, case)

    def test_block_shares_scope(self):
        evaluator = Evaluator()
        self.assertEqual(objects.Integer(2), run("{ var inner = 1 2 }", evaluator))
        self.assertEqual(objects.Integer(1), run("inner", evaluator))

        self.assertEqual(objects.Null(), run("{}"))

    def test_return(self):
        self.assertEqual(objects.Return(objects.Integer(1)), run("return 1"))
        self.assertEqual(objects.Return(objects.Null()), run("return"))

        # returning does not unwind out of a block
        self.assertEqual(objects.Integer(2), run("{ return 1 2 }"))

    def test_program(self):
        self.assertEqual(objects.Null(), run(""))
        self.assertEqual(objects.Number(3.0), run("var a = 1\nvar b = 2\na + b"))
        self.assertEqual(objects.Null(), run("while"))

    def test_nodes(self):
        evaluator = Evaluator()
        literal = ast.Literal(Token(TokenKind.INTEGER, 1))
        self.assertEqual(objects.Integer(1), evaluator.eval(ast.ExpressionStmt(literal)))
        self.assertEqual(objects.Null(), evaluator.eval(ast.Null()))

        self.assertRaises(EmptyNode, evaluator.eval, None)
        with self.assertRaises(UnknownNode) as ctx:
            evaluator.eval(ast.Node())
        self.assertEqual(ast.Node(), ctx.exception.node)

        self.assertRaises(NotSupportedOperator, evaluator.eval, ast.Binary(literal, Token(TokenKind.PIPE), literal))
        self.assertRaises(NotSupportedOperator, evaluator.eval, ast.Unary(Token(TokenKind.STAR), literal))
        self.assertRaises(NotSupportedOperator, evaluator.eval, ast.Logical(literal, Token(TokenKind.PLUS), literal))

    def test_errors_are_eval_errors(self):
        should_raise = ["1 / 0", "missing", "1 < \"a\"", "if (1) 2"]
        for case in should_raise:
            self.assertRaises(EvalError, run, case)


if __name__ == '__main__':
    unittest.main()
