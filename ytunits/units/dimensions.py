"""
Base dimensions


"""

#-----------------------------------------------------------------------------
# Copyright (c) 2013, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
#-----------------------------------------------------------------------------

from fractions import Fraction
from numbers import Rational

# Largest denominator accepted when a float exponent is turned into a
# rational one (0.5 -> 1/2, 0.3333333 -> 1/3).
MAX_EXPONENT_DENOMINATOR = 1000


def as_exponent(power):
    """
    Convert *power* (int, float, Fraction, or numpy scalar) to a Fraction.

    """
    if isinstance(power, Rational):
        return Fraction(power)
    try:
        power = float(power)
    except (TypeError, ValueError):
        raise TypeError(f"Cannot use {power!r} as an exponent.") from None
    return Fraction(power).limit_denominator(MAX_EXPONENT_DENOMINATOR)


def _format_exponent(power):
    if power.denominator == 1:
        return str(power.numerator)
    return f"({power.numerator}/{power.denominator})"


def _format_term(name, power):
    if power == 1:
        return name
    return f"{name}**{_format_exponent(power)}"


class PowerProduct:
    """
    An immutable product of named atoms raised to rational powers.

    This is the closed-form replacement for a general symbolic expression:
    ``g/cm**3`` is stored as ``(("cm", -3), ("g", 1))``. Atoms with a zero
    power are dropped, so an empty product represents 1.

    """

    __slots__ = ("_terms", "_hash")

    def __init__(self, terms=()):
        if isinstance(terms, dict):
            terms = terms.items()
        collected = {}
        for name, power in terms:
            collected[name] = collected.get(name, 0) + as_exponent(power)
        self._terms = tuple(
            sorted((k, v) for k, v in collected.items() if v != 0)
        )
        self._hash = None

    @classmethod
    def atom(cls, name):
        return cls(((name, 1),))

    @property
    def terms(self):
        return self._terms

    def as_dict(self):
        return dict(self._terms)

    def atoms(self):
        return [name for name, _ in self._terms]

    def power_of(self, name):
        return dict(self._terms).get(name, Fraction(0))

    @property
    def is_one(self):
        return len(self._terms) == 0

    @property
    def is_atom(self):
        return len(self._terms) == 1 and self._terms[0][1] == 1

    def _combine(self, other, sign):
        if not isinstance(other, PowerProduct):
            return NotImplemented
        terms = list(self._terms)
        terms.extend((k, sign * v) for k, v in other._terms)
        return self.__class__(terms)

    def __mul__(self, other):
        return self._combine(other, 1)

    def __truediv__(self, other):
        return self._combine(other, -1)

    def __rtruediv__(self, other):
        if other == 1:
            return self ** -1
        return NotImplemented

    def __pow__(self, power):
        power = as_exponent(power)
        return self.__class__([(k, v * power) for k, v in self._terms])

    def __eq__(self, other):
        if isinstance(other, PowerProduct):
            return self._terms == other._terms
        if other == 1:
            return self.is_one
        return NotImplemented

    def __ne__(self, other):
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    def __hash__(self):
        if self._hash is None:
            self._hash = hash((self.__class__.__name__, self._terms))
        return self._hash

    def __str__(self):
        if self.is_one:
            return "1"
        num = [_format_term(k, v) for k, v in self._terms if v > 0]
        den = [_format_term(k, -v) for k, v in self._terms if v < 0]
        ret = "*".join(num) if num else "1"
        if len(den) == 1:
            ret += "/" + den[0]
        elif den:
            ret += "/(" + "*".join(den) + ")"
        return ret

    def __repr__(self):
        return f"{self.__class__.__name__}({str(self)!r})"

    def __reduce__(self):
        return (self.__class__, (self._terms,))


base_dimension_names = (
    "mass",
    "length",
    "time",
    "temperature",
    "angle",
    "current_mks",
)


class Dimensions(PowerProduct):
    """
    A product of the base dimensions. Two units can be converted into one
    another only when their Dimensions compare equal.

    """

    __slots__ = ()

    def __init__(self, terms=()):
        super().__init__(terms)
        for name, _ in self._terms:
            if name not in base_dimension_names:
                raise ValueError(
                    f"dimensionality expression contains an unknown symbol {name!r}."
                )

    def as_vector(self):
        powers = self.as_dict()
        return tuple(powers.get(n, Fraction(0)) for n in base_dimension_names)

    @property
    def is_dimensionless(self):
        return self.is_one

    def __str__(self):
        if self.is_one:
            return "1"
        named = PowerProduct(("(%s)" % k, v) for k, v in self._terms)
        return str(named)


mass = Dimensions.atom("mass")
length = Dimensions.atom("length")
time = Dimensions.atom("time")
temperature = Dimensions.atom("temperature")
angle = Dimensions.atom("angle")
current_mks = Dimensions.atom("current_mks")
dimensionless = Dimensions()

base_dimensions = [mass, length, time, temperature, angle, current_mks,
                   dimensionless]

#
# Derived dimensions
#

rate = 1 / time
frequency = rate

velocity     = length / time
acceleration = length / time**2
jerk         = length / time**3
snap         = length / time**4
crackle      = length / time**5
pop          = length / time**6

area     = length * length
volume   = area * length
momentum = mass * velocity
force    = mass * acceleration
pressure = force / area
energy   = force * length
power    = energy / time
flux     = power / area
specific_flux = flux / rate
number_density = 1/(length*length*length)
density = mass * number_density
angular_momentum = mass*length*velocity
specific_angular_momentum = angular_momentum / mass
specific_energy = energy / mass

# Gaussian electromagnetic units
charge_cgs  = (energy * length)**Fraction(1, 2)  # proper 1/2 power
current_cgs = charge_cgs / time
electric_field_cgs = charge_cgs / length**2
magnetic_field_cgs = electric_field_cgs
electric_potential_cgs = energy / charge_cgs
resistance_cgs = electric_potential_cgs / current_cgs

# SI electromagnetic units
charge_mks = current_mks * time
electric_field_mks = force / charge_mks
magnetic_field_mks = electric_field_mks / velocity
electric_potential_mks = energy / charge_mks
resistance_mks = electric_potential_mks / current_mks

# Since cgs is our default, I'm adding these aliases for backwards-compatibility
charge = charge_cgs
electric_field = electric_field_cgs
magnetic_field = magnetic_field_cgs
electric_potential = electric_potential_cgs
resistance = resistance_cgs
current = current_cgs

solid_angle = angle * angle

derived_dimensions = [rate, velocity, acceleration, jerk, snap, crackle, pop,
                      momentum, force, energy, power, charge_cgs, electric_field_cgs,
                      magnetic_field_cgs, solid_angle, flux, specific_flux, volume,
                      area, current_cgs, charge_mks, electric_field_mks,
                      magnetic_field_mks, electric_potential_cgs, electric_potential_mks,
                      resistance_cgs, resistance_mks]

dimensions = base_dimensions + derived_dimensions


def get_dimension(name):
    """
    Look up a dimension by its name in this module ("energy", "velocity", ...).

    """
    dim = globals().get(name)
    if not isinstance(dim, Dimensions):
        raise KeyError(f"Unknown dimension {name!r}")
    return dim
