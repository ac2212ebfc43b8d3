import unittest

from monkey.core.environment import Environment
from monkey.core.evaluator import Evaluator, evaluate, is_truthy
from monkey.core.lexer import Lexer
from monkey.core.object import FALSE, NULL, TRUE, Error, Function, Integer, ReturnValue
from monkey.core.parser import parse


def run(text, env=None, step_limit=None):
    program, errors = parse(Lexer(text))
    assert not errors, errors
    return evaluate(program, env, step_limit)


class EvaluatorTestCase(unittest.TestCase):

    def assertResults(self, cases):
        for case, expected in cases.items():
            result = run(case)
            if expected is None:
                self.assertIs(NULL, result, case)
            elif isinstance(expected, bool):
                self.assertIs(TRUE if expected else FALSE, result, case)
            elif isinstance(expected, int):
                self.assertEqual(Integer(expected), result, case)
            else:
                self.assertIsInstance(result, Error, case)
                self.assertEqual(expected, result.message, case)

    def test_literals(self):
        self.assertEqual(Integer(5), run("5"))
        self.assertIs(TRUE, run("true"))
        self.assertIs(FALSE, run("false;"))
        self.assertIs(NULL, run(""))

    def test_integer_expressions(self):
        self.assertResults({
            "10": 10,
            "-10": -10,
            "--10": 10,
            "5 + 5 + 5 + 5 - 10": 10,
            "2 * 2 * 2 * 2 * 2": 32,
            "-50 + 100 + -50": 0,
            "5 * 2 + 10": 20,
            "5 + 2 * 10": 25,
            "50 / 2 * 2 + 10": 60,
            "2 * (5 + 10)": 30,
            "3 * 3 * 3 + 10": 37,
            "(5 + 10 * 2 + 15 / 3) * 2 + -10": 50,
            "7 / 2": 3,
            "-7 / 2": -3,
            "7 / -2": -3,
            "-7 / -2": 3,
            "99999999999999999999 * 10": 999999999999999999990,
        })

    def test_boolean_expressions(self):
        self.assertResults({
            "1 < 2": True,
            "1 > 2": False,
            "1 < 1": False,
            "1 == 1": True,
            "1 != 1": False,
            "1 == 2": False,
            "true == true": True,
            "false == false": True,
            "true == false": False,
            "true != false": True,
            "(1 < 2) == true": True,
            "(1 > 2) == true": False,
            "1 == true": False,
            "1 != true": True,
        })

    def test_bang_operator(self):
        self.assertResults({
            "!true": False,
            "!false": True,
            "!5": False,
            "!0": False,
            "!!true": True,
            "!!5": True,
            "!if (false) { 1 }": True,
        })

    def test_truthiness(self):
        self.assertFalse(is_truthy(FALSE))
        self.assertFalse(is_truthy(NULL))
        for case in [TRUE, Integer(0), Integer(1), Integer(-1)]:
            self.assertTrue(is_truthy(case), repr(case))

    def test_if_else_expressions(self):
        self.assertResults({
            "if (true) { 10 }": 10,
            "if (false) { 10 }": None,
            "if (1) { 10 }": 10,
            "if (0) { 10 }": 10,
            "if (1 < 2) { 10 }": 10,
            "if (1 > 2) { 10 }": None,
            "if (1 > 2) { 10 } else { 20 }": 20,
            "if (1 < 2) { 10 } else { 20 }": 10,
            "if (if (false) { 1 }) { 10 } else { 20 }": 20,
            "if (true) { }": None,
        })

    def test_return_statements(self):
        self.assertResults({
            "return 10;": 10,
            "return 10; 9;": 10,
            "return 2 * 5; 9;": 10,
            "9; return 2 * 5; 9;": 10,
            "if (10 > 1) { if (10 > 1) { return 10; } return 1; }": 10,
            "let f = fn(x) { return x; x + 10; }; f(10);": 10,
            "let f = fn(x) { let result = x + 10; return result; return 10; }; f(10);": 20,
        })

    def test_error_handling(self):
        self.assertResults({
            "5 + true;": "type mismatch: INTEGER + BOOLEAN",
            "5 + true; 5;": "type mismatch: INTEGER + BOOLEAN",
            "-true": "unknown operator: -BOOLEAN",
            "-fn(x) { x }": "unknown operator: -FUNCTION",
            "true + false;": "unknown operator: BOOLEAN + BOOLEAN",
            "5; true + false; 5": "unknown operator: BOOLEAN + BOOLEAN",
            "if (10 > 1) { true + false; }": "unknown operator: BOOLEAN + BOOLEAN",
            "if (10 > 1) { if (10 > 1) { return true + false; } return 1; }": "unknown operator: BOOLEAN + BOOLEAN",
            "foobar": "identifier not found: foobar",
            "let x = y; x": "identifier not found: y",
            "true < false": "unknown operator: BOOLEAN < BOOLEAN",
            "if (true) { } + 1": "type mismatch: NULL + INTEGER",
            "5 / 0": "division by zero: 5 / 0",
            "5(1)": "not a function: INTEGER",
            "let f = fn(a, b) { a }; f(1)": "wrong number of arguments: want=2, got=1",
            "fn() { 1 }(2, 3)": "wrong number of arguments: want=0, got=2",
            "if (x) { 1 }": "identifier not found: x",
            "f(1 + true)": "identifier not found: f",
            "let f = fn(x) { x }; f(1 + true, y)": "type mismatch: INTEGER + BOOLEAN",
        })

    def test_error_propagation(self):
        program, __ = parse(Lexer("(1 + true) * 2"))
        inner = program.statements[0].expression.left
        error = evaluate(inner)
        self.assertIsInstance(error, Error)

        evaluator = Evaluator()
        env = Environment()
        env.set("e", error)
        for case in ["e * 2", "-e", "!e", "e + e", "if (e) { 1 }", "let y = e; y", "fn(x) { x }(e)", "e(1)"]:
            program, __ = parse(Lexer(case))
            self.assertIs(error, evaluator.evaluate(program, env), case)

    def test_let_statements(self):
        self.assertResults({
            "let a = 5; a;": 5,
            "let a = 5 * 5; a;": 25,
            "let a = 5; let b = a; b;": 5,
            "let a = 5; let b = a; let c = a + b + 5; c;": 15,
            "let a = 5;": None,
            "let a = 1; let a = a + 1; a": 2,
        })

        env = Environment()
        run("let x = 3;", env)
        self.assertEqual(Integer(3), env.get("x"))
        self.assertEqual(Integer(6), run("x * 2", env))

    def test_function_object(self):
        result = run("fn(x) { x + 2; };")
        self.assertIsInstance(result, Function)
        self.assertEqual(["x"], [param.value for param in result.parameters])
        self.assertEqual("{ (x + 2) }", str(result.body))
        self.assertEqual("fn(x) { (x + 2) }", result.inspect())

    def test_function_application(self):
        self.assertResults({
            "let identity = fn(x) { x; }; identity(5);": 5,
            "let identity = fn(x) { return x; }; identity(5);": 5,
            "let double = fn(x) { x * 2; }; double(5);": 10,
            "let add = fn(x, y) { x + y; }; add(5, 5);": 10,
            "let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));": 20,
            "fn(x) { x; }(5)": 5,
            "let f = fn() { }; f()": None,
            "let x = 1; let f = fn(x) { x }; f(2) + x": 3,
        })

    def test_closures(self):
        self.assertResults({
            "let newAdder = fn(x) { fn(y) { x + y }; }; let addTwo = newAdder(2); addTwo(2);": 4,
            "let compose = fn(f, g) { fn(x) { g(f(x)) } }; compose(fn(x) { x + 1 }, fn(x) { x * 10 })(2)": 30,
            "let a = 1; let f = fn() { a }; let a = 2; f()": 2,
        })

    def test_recursion(self):
        fib = ("let fib = fn(n) { if (n < 2) { return n; } fib(n - 1) + fib(n - 2) };"
               "fib(15)")
        self.assertEqual(Integer(610), run(fib))

        result = run("let loop = fn(x) { loop(x + 1) }; loop(0)")
        self.assertIsInstance(result, Error)
        self.assertEqual("maximum recursion depth exceeded", result.message)

    def test_step_limit(self):
        result = run("let loop = fn(n) { if (n > 0) { loop(n - 1) } else { 0 } }; loop(50)", step_limit=100)
        self.assertIsInstance(result, Error)
        self.assertEqual("step limit exceeded: 100", result.message)

        self.assertEqual(Integer(3), run("1 + 2", step_limit=5))
        self.assertIsInstance(run("1 + 2", step_limit=4), Error)

    def test_return_value_unwrapped(self):
        for case in ["return 1;", "if (true) { return 1; }", "fn() { if (true) { return 1; } }()"]:
            result = run(case)
            self.assertNotIsInstance(result, ReturnValue, case)
            self.assertEqual(Integer(1), result, case)


if __name__ == '__main__':
    unittest.main()
