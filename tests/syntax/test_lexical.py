import unittest

from minilisp.syntax.lexical import Token, TokenKind, is_number, parse_float, parse_integer, tokenize


def kinds(source):
    return [token.kind for token in tokenize(source)]


class TokenizeTestCase(unittest.TestCase):

    def test_empty(self):
        for case in ["", "   ", "\n\t "]:
            self.assertEqual([], tokenize(case), repr(case))

    def test_parens_stand_alone(self):
        cases = {
            "()": ["(", ")"],
            "(a)": ["(", "a", ")"],
            "((a b)c)": ["(", "(", "a", "b", ")", "c", ")"],
            ")(": [")", "("],
            "a(b": ["a", "(", "b"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, [token.value for token in tokenize(case)], case)

    def test_classification(self):
        L, R, S, N = TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.SYMBOL, TokenKind.NUMBER
        cases = {
            "(+ 1 2)": [L, S, N, N, R],
            "(define r 10)": [L, S, S, N, R],
            "-7 +3 3.5 -.5 1e10": [N, N, N, N, N],
            "'a #t foo-bar? 1a -": [S, S, S, S, S],
            "(begin (define r 10) (* pi (* r r)))": [L, S, L, S, S, N, R, L, S, S, L, S, S, S, R, R, R],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), case)

    def test_offsets(self):
        tokens = tokenize("(foo  12)")
        self.assertEqual([0, 1, 6, 8], [token.offset for token in tokens])

    def test_whitespace(self):
        self.assertEqual(["(", "a", "b", ")"], [token.value for token in tokenize(" (a\n\tb )\n")])

    def test_tokens_are_immutable(self):
        token = Token(TokenKind.SYMBOL, "x")
        with self.assertRaises(AttributeError):
            token.value = "y"


class NumberTestCase(unittest.TestCase):

    def test_parse_integer(self):
        should_fail = ["1.0", "1e3", "abc", "", "+", "-", "1_000", "0x10", str(2 ** 63), str(-2 ** 63 - 1)]
        for case in should_fail:
            self.assertIsNone(parse_integer(case), case)

        should_pass = {"0": 0, "42": 42, "-7": -7, "+3": 3, "007": 7, str(2 ** 63 - 1): 2 ** 63 - 1}
        for case, result in should_pass.items():
            self.assertEqual(result, parse_integer(case), case)

    def test_parse_float(self):
        should_fail = ["abc", "", ".", "-", "1.2.3", "e5", "1e", "1_0.5", "infx"]
        for case in should_fail:
            self.assertIsNone(parse_float(case), case)

        should_pass = {"3.5": 3.5, "-.5": -0.5, "5.": 5.0, "1e10": 1e10, "-2.5E-3": -2.5e-3, "12": 12.0}
        for case, result in should_pass.items():
            self.assertEqual(result, parse_float(case), case)

        self.assertEqual(float("inf"), parse_float("Inf"))
        self.assertEqual(float("-inf"), parse_float("-infinity"))
        self.assertNotEqual(parse_float("NaN"), parse_float("NaN"))

    def test_out_of_range_float(self):
        should_fail = ["1e400", "-1e400", "1" + "0" * 400, "0x1p2000", "-0x1p1024"]
        for case in should_fail:
            self.assertIsNone(parse_float(case), case)
            self.assertEqual([TokenKind.SYMBOL], kinds(case), case)

        self.assertEqual(0.0, parse_float("1e-400"))  # underflow rounds to zero

    def test_hex_float(self):
        should_fail = ["0x10", "0x", "0xp4", "0x1.8", "0x1p", "0x1e4", "0x1p0x1"]
        for case in should_fail:
            self.assertIsNone(parse_float(case), case)

        should_pass = {"0x1p4": 16.0, "0X1P-2": 0.25, "0x1.8p1": 3.0, "-0x.8p1": -1.0, "+0xAp0": 10.0}
        for case, result in should_pass.items():
            self.assertEqual(result, parse_float(case), case)
            self.assertEqual([TokenKind.NUMBER], kinds(case), case)
        self.assertIsNone(parse_integer("0x1p4"))

    def test_large_integer_is_float(self):
        self.assertTrue(is_number(str(2 ** 64)))
        self.assertIsNone(parse_integer(str(2 ** 64)))
        self.assertEqual(float(2 ** 64), parse_float(str(2 ** 64)))


if __name__ == '__main__':
    unittest.main()
