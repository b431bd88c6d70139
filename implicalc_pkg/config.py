"""Centralized configuration for implicalc.

This module defines:
- The supported-function vocabulary the completion table is built from
- Variable symbols and special characters used by the splitter
- Default hint texts
- Input and cache limits
- Allowed SymPy names and transformations for the evaluator adapter

Numeric limits can be overridden via environment variables (prefixed with
IMPLICALC_).
"""

import os
import re

import sympy as sp
from sympy.parsing.sympy_parser import convert_xor, standard_transformations

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("implicalc")
except Exception:
    # Fallback if package not installed
    VERSION = "0.1.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("IMPLICALC_MAX_INPUT_LENGTH", "1000"))  # characters

# Cache configuration
CACHE_SIZE_HINT = int(os.getenv("IMPLICALC_CACHE_SIZE_HINT", "1024"))
CACHE_SIZE_PARSE = int(os.getenv("IMPLICALC_CACHE_SIZE_PARSE", "256"))

LOG_LEVEL = os.getenv("IMPLICALC_LOG_LEVEL", "WARNING")

# Update this together with ALLOWED_SYMPY_NAMES when adding functions
SUPPORTED_FUNCTIONS = (
    "abs",
    "signum",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "sinh",
    "cosh",
    "tanh",
    "floor",
    "round",
    "ceil",
    "trunc",
    "fract",
    "exp",
    "sqrt",
    "cbrt",
    "ln",
    "log2",
    "log10",
)

# Characters that stand for a variable or constant (compared lowercased)
VALID_VARIABLES = frozenset({"x", "e", "π"})

MULTIPLICATION_MARKER = "*"
OPEN_PAREN = "("
CLOSE_PAREN = ")"

# Private-use character standing in for `exp` while splitting
EXP_PLACEHOLDER = "\U0001fc93"

# Input spellings rewritten before splitting, applied in order
SPLIT_SUBSTITUTIONS = (
    ("pi", "π"),
    ("**", "^"),
    ("exp", EXP_PLACEHOLDER),
)

DEFAULT_HINT_TEXT = "x^2"
CLOSED_PARENS_HINT_TEXT = CLOSE_PAREN

# UI key names mapped to autocomplete movements
COMPLETE_KEYS = frozenset({"tab", "enter", "return", "right"})
UP_KEYS = frozenset({"up"})
DOWN_KEYS = frozenset({"down"})


# Float semantics: halves round away from zero and signum(0) is 1
def _signum(arg):
    return sp.Piecewise((1, arg >= 0), (-1, True))


def _trunc(arg):
    return sp.sign(arg) * sp.floor(sp.Abs(arg))


def _round(arg):
    return sp.sign(arg) * sp.floor(sp.Abs(arg) + sp.S.Half)


def _fract(arg):
    return arg - _trunc(arg)


ALLOWED_SYMPY_NAMES = {
    "π": sp.pi,
    "e": sp.E,
    "E": sp.E,
    "abs": sp.Abs,
    "signum": _signum,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "floor": sp.floor,
    "round": _round,
    "ceil": sp.ceiling,
    "trunc": _trunc,
    "fract": _fract,
    "exp": sp.exp,
    "sqrt": sp.sqrt,
    "cbrt": sp.cbrt,
    "ln": sp.log,
    "log2": lambda arg: sp.log(arg, 2),
    "log10": lambda arg: sp.log(arg, 10),
}

# Names the generated SymPy code may reference; everything else becomes a
# Symbol or an undefined Function
SYMPY_GLOBALS = {
    "Integer": sp.Integer,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "Symbol": sp.Symbol,
    "Function": sp.Function,
}

TRANSFORMATIONS = standard_transformations + (convert_xor,)

ALLOWED_VARIABLE_NAMES = frozenset({"x"})

ALLOWED_CHARS_REGEX = re.compile(r"^[0-9A-Za-zπ.+\-*/^()\s]*$")
ATTRIBUTE_ACCESS_REGEX = re.compile(r"\.\s*[A-Za-z_]")
