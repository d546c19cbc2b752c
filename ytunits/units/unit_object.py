"""
Unit expressions and their parsing.


"""

#-----------------------------------------------------------------------------
# Copyright (c) 2013, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
#-----------------------------------------------------------------------------

import math
import re
from fractions import Fraction
from numbers import Number

import numpy as np

from ytunits.units import dimensions as dims_module
from ytunits.units.dimensions import \
    Dimensions, \
    PowerProduct, \
    as_exponent
from ytunits.units.unit_registry import \
    UnitRegistry, \
    _lookup_unit_symbol, \
    _validate_dimensions, \
    default_unit_registry
from ytunits.utilities.exceptions import \
    IncommensurableUnitsError, \
    InvalidUnitOperation, \
    UnitParseError

# Relative tolerance used when comparing base values of units.
UNIT_EQUALITY_RTOL = 1e-12

_token_re = re.compile(
    r"\s*(?:"
    r"(?P<pow>\*\*|\^)"
    r"|(?P<op>[*/()])"
    r"|(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<sym>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<sign>[-+])"
    r")"
)


def _rewrite_sqrt(unit_expr):
    """
    Replace every ``sqrt(X)`` with ``(X)**0.5``.

    """
    while True:
        start = unit_expr.find("sqrt(")
        if start == -1:
            return unit_expr
        depth = 0
        for pos in range(start + 4, len(unit_expr)):
            if unit_expr[pos] == "(":
                depth += 1
            elif unit_expr[pos] == ")":
                depth -= 1
                if depth == 0:
                    break
        else:
            raise UnitParseError(unit_expr, "unbalanced parentheses in sqrt")
        inner = unit_expr[start + 5:pos]
        unit_expr = (unit_expr[:start] + "(" + inner + ")**0.5"
                     + unit_expr[pos + 1:])


def _tokenize(unit_expr):
    tokens = []
    pos = 0
    end = len(unit_expr.rstrip())
    while pos < end:
        match = _token_re.match(unit_expr, pos)
        if match is None or match.end() == pos:
            raise UnitParseError(
                unit_expr, f"unexpected character {unit_expr[pos]!r}")
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


class _UnitExprParser:
    """
    Recursive-descent parser for unit expressions::

        expr     := term (("*" | "/") term)*
        term     := factor (("**" | "^") exponent)?
        factor   := symbol | "1" | "(" expr ")"
        exponent := signed_number | "(" signed_number ("/" signed_number)? ")"

    The result is a PowerProduct of unit symbols.

    """

    def __init__(self, unit_expr):
        self.unit_expr = unit_expr
        self.tokens = _tokenize(unit_expr)
        self.pos = 0

    def error(self, reason):
        return UnitParseError(self.unit_expr, reason)

    def peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return (None, None)

    def next(self):
        tok = self.peek()
        if tok[0] is None:
            raise self.error("unexpected end of expression")
        self.pos += 1
        return tok

    def expect(self, text):
        kind, value = self.next()
        if value != text:
            raise self.error(f"expected {text!r}, got {value!r}")

    def parse(self):
        if not self.tokens:
            return PowerProduct()
        ret = self.expr()
        if self.pos != len(self.tokens):
            raise self.error(f"unexpected token {self.peek()[1]!r}")
        return ret

    def expr(self):
        ret = self.term()
        while self.peek() in (("op", "*"), ("op", "/")):
            _, op = self.next()
            rhs = self.term()
            ret = ret * rhs if op == "*" else ret / rhs
        return ret

    def term(self):
        base = self.factor()
        if self.peek()[0] == "pow":
            self.next()
            base = base ** self.exponent()
        return base

    def factor(self):
        kind, value = self.next()
        if kind == "sym":
            if value == "dimensionless":
                return PowerProduct()
            return PowerProduct.atom(value)
        if kind == "num":
            if float(value) != 1:
                raise self.error(
                    f"numeric coefficient {value!r} is not allowed")
            return PowerProduct()
        if (kind, value) == ("op", "("):
            ret = self.expr()
            self.expect(")")
            return ret
        raise self.error(f"unexpected token {value!r}")

    def exponent(self):
        if self.peek() == ("op", "("):
            self.next()
            power = self.signed_number()
            if self.peek() == ("op", "/"):
                self.next()
                denom = self.signed_number()
                if denom == 0:
                    raise self.error("division by zero in exponent")
                power = power / denom
            self.expect(")")
            return power
        return self.signed_number()

    def signed_number(self):
        sign = 1
        if self.peek()[0] == "sign":
            _, value = self.next()
            sign = -1 if value == "-" else 1
        kind, value = self.next()
        if kind != "num":
            raise self.error(f"expected a number, got {value!r}")
        return sign * as_exponent(Fraction(value))


def _parse_unit_expr(unit_expr):
    """
    Parse a unit string into a PowerProduct of unit symbols.

    """
    unit_expr = _rewrite_sqrt(unit_expr)
    return _UnitExprParser(unit_expr).parse()


def _get_unit_data_from_expr(unit_expr, registry):
    """
    Grabs the total base_value and dimensions from a valid unit expression.

    """
    base_value = 1.0
    dimensions = dims_module.dimensionless
    for symbol, power in unit_expr.terms:
        value, dim = _lookup_unit_symbol(symbol, registry)[:2]
        base_value *= float(value) ** float(power)
        dimensions = dimensions * dim ** power
    return base_value, dimensions


def _format_latex_power(power):
    if power.denominator == 1:
        return str(power.numerator)
    return f"{power.numerator}/{power.denominator}"


class Unit:
    """
    A unit expression: a product of unit symbols raised to rational powers,
    together with its value in base units and its dimensions.

    """

    # Extra attributes
    __slots__ = ["expr", "is_atomic", "base_value", "dimensions", "registry"]

    # keep numpy from turning a Unit into an object array; ndarray operators
    # then defer to the reflected methods below
    __array_ufunc__ = None

    def __new__(cls, unit_expr="", base_value=None, dimensions=None,
                registry=None):
        """
        Create a new unit. May be an atomic unit (like a gram) or combinations
        of atomic units (like g / cm**3).

        Parameters
        ----------
        unit_expr : Unit object, PowerProduct or str
            The unit expression.
        base_value : float
            The unit's value in base units.
        dimensions : Dimensions
            The dimensionality of this unit.
        registry : UnitRegistry object
            The unit registry we use to interpret unit symbols.

        """
        if registry is None:
            # Caller did not set the registry, so use the default.
            registry = default_unit_registry

        unit_key = None
        if unit_expr is None:
            unit_expr = ""
        if isinstance(unit_expr, bytes):
            unit_expr = unit_expr.decode("utf-8")

        if isinstance(unit_expr, str):
            if base_value is None:
                cached = registry.unit_objs.get(unit_expr)
                if cached is not None:
                    return cached
                # only units looked up in the registry are interned
                unit_key = unit_expr
            unit_expr = _parse_unit_expr(unit_expr)
        elif isinstance(unit_expr, Unit):
            if unit_expr.registry is registry or base_value is not None:
                if base_value is None:
                    return unit_expr
                unit_expr = unit_expr.expr
            else:
                base_value = unit_expr.base_value
                dimensions = unit_expr.dimensions
                unit_expr = unit_expr.expr
        elif isinstance(unit_expr, Number) and unit_expr == 1:
            unit_expr = PowerProduct()
        elif not isinstance(unit_expr, PowerProduct):
            raise UnitParseError(
                unit_expr, "unit representation must be a string or a "
                f"PowerProduct, got a {type(unit_expr)}")

        if base_value is not None and dimensions is not None:
            try:
                base_value = float(base_value)
            except (TypeError, ValueError):
                raise UnitParseError(
                    str(unit_expr), f"could not use base_value {base_value!r} "
                    "as a float") from None
            dimensions = _validate_dimensions(str(unit_expr), dimensions)
        else:
            # lookup the unit symbols
            base_value, dimensions = _get_unit_data_from_expr(unit_expr,
                                                              registry)

        obj = object.__new__(cls)
        obj.expr = unit_expr
        obj.is_atomic = unit_expr.is_atom
        obj.base_value = base_value
        obj.dimensions = dimensions
        obj.registry = registry

        if unit_key is not None:
            obj = registry._cache_unit(unit_key, obj)

        return obj

    def __reduce__(self):
        registry = self.registry
        if registry is default_unit_registry:
            registry = None
        return (_unpickle_unit, (self.expr.terms, self.base_value,
                                 self.dimensions.terms, registry))

    def __copy__(self):
        return self

    def __deepcopy__(self, memodict=None):
        return self

    def __hash__(self):
        return hash(self.dimensions)

    def __repr__(self):
        if self.expr.is_one:
            return "(dimensionless)"
        return str(self.expr)

    def __str__(self):
        if self.expr.is_one:
            return "dimensionless"
        return str(self.expr)

    @property
    def units(self):
        return self

    @property
    def latex_repr(self):
        """
        A LaTeX rendering of the unit, e.g. ``\\frac{\\rm{g}}{\\rm{cm}^{3}}``.

        """
        num = []
        den = []
        for symbol, power in self.expr.terms:
            latex = _lookup_unit_symbol(symbol, self.registry)[2]
            target = num if power > 0 else den
            power = abs(power)
            if power != 1:
                latex = "%s^{%s}" % (latex, _format_latex_power(power))
            target.append(latex)
        numerator = r"\ ".join(num) if num else "1"
        if not den:
            return numerator if num else ""
        return r"\frac{%s}{%s}" % (numerator, r"\ ".join(den))

    #
    # Start unit operations
    #

    def _new(self, expr, base_value, dimensions):
        return Unit(expr, base_value=base_value, dimensions=dimensions,
                    registry=self.registry)

    def __mul__(self, u):
        """ Multiply Unit with u (Unit object). """
        if isinstance(u, Unit):
            return self._new(self.expr * u.expr,
                             self.base_value * u.base_value,
                             self.dimensions * u.dimensions)
        return _attach_unit(u, self)

    def __rmul__(self, u):
        if isinstance(u, Unit):
            return u.__mul__(self)
        return _attach_unit(u, self)

    def __truediv__(self, u):
        """ Divide Unit by u (Unit object). """
        if not isinstance(u, Unit):
            raise InvalidUnitOperation(
                f"Tried to divide a Unit object by '{u}' (type {type(u)}). "
                "This behavior is undefined.")
        return self._new(self.expr / u.expr,
                         self.base_value / u.base_value,
                         self.dimensions / u.dimensions)

    def __rtruediv__(self, u):
        inverse = self ** -1
        if isinstance(u, Number) and u == 1:
            return inverse
        return _attach_unit(u, inverse)

    def __pow__(self, p):
        """ Take Unit to power p (float). """
        from ytunits.units.yt_array import YTArray
        if isinstance(p, YTArray):
            if not p.units.is_dimensionless:
                raise InvalidUnitOperation(
                    f"Tried to take a Unit object to the power '{p}'. "
                    "Exponents must be dimensionless.")
            p = p.in_units("").d
        try:
            power = as_exponent(p)
        except TypeError:
            raise InvalidUnitOperation(
                f"Tried to take a Unit object to the power '{p}' "
                f"(type {type(p)}). Failed to cast it to a number.") from None
        return self._new(self.expr ** power,
                         self.base_value ** float(power),
                         self.dimensions ** power)

    def __eq__(self, u):
        """ Test unit equality. """
        if isinstance(u, str):
            try:
                u = Unit(u, registry=self.registry)
            except UnitParseError:
                return False
        if not isinstance(u, Unit):
            return False
        return self.dimensions == u.dimensions and \
            math.isclose(self.base_value, u.base_value,
                         rel_tol=UNIT_EQUALITY_RTOL)

    def __ne__(self, u):
        """ Test unit inequality. """
        return not self.__eq__(u)

    #
    # End unit operations
    #

    def copy(self):
        return self

    def same_dimensions_as(self, other_unit):
        """ Test if dimensions are the same. """
        return self.dimensions == other_unit.dimensions

    @property
    def is_dimensionless(self):
        return self.dimensions.is_dimensionless

    @property
    def is_code_unit(self):
        """
        True when every symbol of the expression is a ``code_*`` unit.

        """
        return all(symbol.startswith("code") for symbol in self.expr.atoms())

    def get_base_equivalent(self, unit_system="cgs"):
        """
        Create and return dimensionally-equivalent units in a specified base.

        """
        from ytunits.units.unit_systems import get_unit_system
        unit_system = get_unit_system(unit_system)
        new_units = unit_system[self.dimensions]
        return Unit(new_units, registry=self.registry)

    def get_cgs_equivalent(self):
        """
        Create and return dimensionally-equivalent cgs units.

        """
        return self.get_base_equivalent("cgs")

    def get_mks_equivalent(self):
        """
        Create and return dimensionally-equivalent mks units.

        """
        return self.get_base_equivalent("mks")

    def get_conversion_factor(self, other_units):
        return get_conversion_factor(self, other_units)

#
# Unit manipulation functions
#

def get_conversion_factor(old_units, new_units):
    """
    Get the conversion factor between two units of equivalent dimensions. This
    is the number you multiply data by to convert from values in `old_units` to
    values in `new_units`.

    Parameters
    ----------
    old_units: str or Unit object
        The current units.
    new_units : str or Unit object
        The units we want.

    Returns
    -------
    conversion_factor : float
        `old_units / new_units`

    """
    # if args are not Unit objects, construct them
    if not isinstance(old_units, Unit):
        old_units = Unit(old_units)
    if not isinstance(new_units, Unit):
        new_units = Unit(new_units, registry=old_units.registry)

    if not old_units.same_dimensions_as(new_units):
        raise IncommensurableUnitsError(old_units, new_units)

    return old_units.base_value / new_units.base_value


def _attach_unit(value, unit):
    from ytunits.units.yt_array import YTArray, YTQuantity
    if isinstance(value, YTArray):
        return value.__class__(value.v, value.units * unit)
    if np.ndim(value) == 0:
        return YTQuantity(value, unit)
    return YTArray(value, unit)


def _unpickle_unit(expr_terms, base_value, dimension_terms, registry):
    if registry is None:
        registry = default_unit_registry
    return Unit(PowerProduct(expr_terms), base_value=base_value,
                dimensions=Dimensions(dimension_terms), registry=registry)


__all__ = ["Unit", "UnitRegistry", "get_conversion_factor"]
