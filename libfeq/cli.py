#!/usr/bin/env python3
#
#   Command line front end: solve f(x) = g(y) over Z/pZ
#

import argparse
import logging
import sys

from libfeq.basic_types import GF
from libfeq.polynomial import Polynomial
from libfeq.solver import solve_equation, solve_equation_tabulated

logger = logging.getLogger(__name__)

DEFAULT_MODULUS = 5

def parse_non_negative(text : str) -> int:
    value = int(text.strip())
    if value < 0:
        raise ValueError(f"expected a non-negative integer, got {value}")
    return value

def non_negative_arg(text):
    try:
        return parse_non_negative(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e

def modulus_arg(text):
    value = non_negative_arg(text)
    if value < 2:
        raise argparse.ArgumentTypeError(f"modulus must be at least 2, got {value}")
    return value

def read_coefficients(name : str):
    """
    Prompts for the degree of `name`, then for each coefficient from degree 0 upwards
    """
    print(f"Enter the degree of {name}")
    degree = parse_non_negative(input())
    coeffs = []
    for i in range(degree + 1):
        print(f"Enter the coefficient of degree {i}")
        coeffs.append(parse_non_negative(input()))
    return coeffs

def build_parser():
    parser = argparse.ArgumentParser(prog="libfeq",
                                     description="Find every (x, y) in Z/pZ with f(x) = g(y) by exhaustive search. "
                                                 "Coefficients are listed from degree 0 upwards and are read "
                                                 "interactively when not given.")
    parser.add_argument("-p", "--modulus", type=modulus_arg, default=DEFAULT_MODULUS,
                        help=f"modulus p (default: {DEFAULT_MODULUS})")
    parser.add_argument("-f", nargs="+", type=non_negative_arg, metavar="C", help="coefficients of f")
    parser.add_argument("-g", nargs="+", type=non_negative_arg, metavar="C", help="coefficients of g")
    parser.add_argument("--tabulated", action="store_true",
                        help="compare precomputed evaluation tables instead of evaluating every pair")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    # the one ring shared by every value of this run
    F = GF(args.modulus)

    print(f"Solving f(x) = g(y) over {F}")
    if not F.is_field:
        print(f"Note: {F.p} is not prime.")

    try:
        f = Polynomial(F, args.f if args.f is not None else read_coefficients("f"))
        g = Polynomial(F, args.g if args.g is not None else read_coefficients("g"))
    except (ValueError, EOFError) as e:
        logger.error("Invalid input: %s", e)
        return 2

    solve = solve_equation_tabulated if args.tabulated else solve_equation
    try:
        solutions = solve(f, g)
    except ValueError as e:
        logger.error("%s", e)
        return 1

    print(f"The solution set of {f.to_str('x')} = {g.to_str('y')} is")
    print(solutions)
    return 0

########################################################################################################################
#   Unit Tests
########################################################################################################################

import contextlib
import io
import unittest
from unittest import mock

def run_main(argv, inputs=()):
    out = io.StringIO()
    side_effect = list(inputs) + [EOFError("end of input")]
    with mock.patch("builtins.input", side_effect=side_effect), contextlib.redirect_stdout(out):
        status = main(argv)
    return status, out.getvalue()

class TestMain(unittest.TestCase):

    def test_arguments(self):
        status, out = run_main(["-p", "5", "-f", "0", "1", "-g", "0", "0", "1"])
        self.assertEqual(status, 0)
        self.assertIn("over GF(5)", out)
        self.assertIn("The solution set of x = y^2 is", out)
        self.assertIn("{(0, 0), (1, 1), (1, 4), (4, 2), (4, 3)}", out)
        self.assertNotIn("not prime", out)

    def test_tabulated(self):
        status, out = run_main(["-f", "0", "1", "-g", "0", "0", "1", "--tabulated"])
        self.assertEqual(status, 0)
        self.assertIn("{(0, 0), (1, 1), (1, 4), (4, 2), (4, 3)}", out)

    def test_default_modulus(self):
        status, out = run_main(["-f", "1", "-g", "2"])
        self.assertEqual(status, 0)
        self.assertIn(f"GF({DEFAULT_MODULUS})", out)
        self.assertIn("The solution set of 1 = 2 is\n{ }", out)

    def test_interactive(self):
        status, out = run_main(["-p", "5"], inputs=["1", "0", "1", "2", "0", " 0 ", "1"])
        self.assertEqual(status, 0)
        self.assertIn("Enter the degree of f", out)
        self.assertIn("Enter the coefficient of degree 2", out)
        self.assertIn("{(0, 0), (1, 1), (1, 4), (4, 2), (4, 3)}", out)

    def test_interactive_mixed(self):
        status, out = run_main(["-p", "7", "-f", "0", "0", "1"], inputs=["0", "3"])
        self.assertEqual(status, 0)
        self.assertNotIn("degree of f", out)
        self.assertIn("The solution set of x^2 = 3 is\n{ }", out)

    def test_non_prime(self):
        status, out = run_main(["-p", "6", "-f", "0", "1", "-g", "0", "1"])
        self.assertEqual(status, 0)
        self.assertIn("Note: 6 is not prime.", out)
        self.assertIn("{(0, 0), (1, 1), (2, 2), (3, 3), (4, 4), (5, 5)}", out)

    def test_bad_interactive_input(self):
        status, _ = run_main(["-g", "1"], inputs=["one"])
        self.assertEqual(status, 2)
        status, _ = run_main(["-g", "1"], inputs=["1", "-3"])
        self.assertEqual(status, 2)
        status, _ = run_main(["-g", "1"], inputs=[])
        self.assertEqual(status, 2)

    def test_bad_arguments(self):
        for argv in (["-f", "x"], ["-p", "1"], ["-p", "five"]):
            with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as cm:
                main(argv)
            self.assertEqual(cm.exception.code, 2)

class TestParsing(unittest.TestCase):

    def test_parse_non_negative(self):
        self.assertEqual(parse_non_negative(" 12\n"), 12)
        with self.assertRaises(ValueError):
            parse_non_negative("-1")
        with self.assertRaises(ValueError):
            parse_non_negative("1.5")

if __name__ == "__main__":
    sys.exit(main())
