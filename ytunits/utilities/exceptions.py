# We don't need to import 'exceptions'


class YTException(Exception):
    def __init__(self, message=None, ds=None):
        Exception.__init__(self, message)
        self.ds = ds


# Unit and array exceptions:


class UnitParseError(YTException):
    def __init__(self, unit_expr, reason=None):
        YTException.__init__(self)
        self.unit_expr = unit_expr
        self.reason = reason

    def __str__(self):
        msg = f"Could not parse the unit expression {self.unit_expr!r}"
        if self.reason:
            msg += f": {self.reason}"
        return msg


class SymbolAlreadyDefinedError(YTException):
    def __init__(self, symbol):
        YTException.__init__(self)
        self.symbol = symbol

    def __str__(self):
        return f"The symbol {self.symbol!r} is already defined in this registry."


class UnitSystemAlreadyDefinedError(YTException):
    def __init__(self, name):
        YTException.__init__(self)
        self.name = name

    def __str__(self):
        return f"A unit system named {self.name!r} is already registered."


class DimensionMismatchError(YTException):
    def __init__(self, operation, unit1, unit2=None):
        YTException.__init__(self)
        self.operation = operation
        self.unit1 = unit1
        self.unit2 = unit2

    def __str__(self):
        err = (
            f"The {self.operation} operator for YTArrays with units "
            f"({self.unit1}) (dimensions '{_dims(self.unit1)}') "
        )
        if self.unit2 is not None:
            err += f"and ({self.unit2}) (dimensions '{_dims(self.unit2)}') "
        err += "is not well defined."
        return err


class IncommensurableUnitsError(YTException):
    def __init__(self, unit1, unit2):
        YTException.__init__(self)
        self.unit1 = unit1
        self.unit2 = unit2

    def __str__(self):
        return (
            f"Unit dimensionalities do not match. Tried to convert between "
            f"{self.unit1} (dim {_dims(self.unit1)}) and "
            f"{self.unit2} (dim {_dims(self.unit2)})."
        )


class LengthMismatchError(YTException):
    def __init__(self, operation, shape1, shape2):
        YTException.__init__(self)
        self.operation = operation
        self.shape1 = shape1
        self.shape2 = shape2

    def __str__(self):
        return (
            f"The {self.operation} operation requires operands of the same "
            f"shape, got {self.shape1} and {self.shape2}."
        )


class ExternalBufferWriteError(YTException):
    def __init__(self, operation):
        YTException.__init__(self)
        self.operation = operation

    def __str__(self):
        return (
            f"Cannot apply {self.operation} to an array wrapping an external "
            f"buffer. Use copy() or get_array() for data you can modify."
        )


class MissingMKSCurrent(IncommensurableUnitsError):
    def __init__(self, unit_system_name, dimensions):
        YTException.__init__(self)
        self.unit_system_name = unit_system_name
        self.dimensions = dimensions

    def __str__(self):
        return (
            f"The {self.unit_system_name} unit system does not have a MKS "
            f"current base unit, so it cannot express units with dimensions "
            f"{self.dimensions}."
        )


class UnknownUnitSystemError(YTException):
    def __init__(self, unit_system, known=None):
        YTException.__init__(self)
        self.unit_system = unit_system
        self.known = known

    def __str__(self):
        msg = f"Unknown unit system {self.unit_system!r}."
        if self.known:
            msg += " Known unit systems are: " + ", ".join(sorted(self.known))
        return msg


class InvalidUnitOperation(YTException):
    pass


class YTInvalidUnitEquivalence(YTException):
    def __init__(self, equiv, unit1, unit2):
        YTException.__init__(self)
        self.equiv = equiv
        self.unit1 = unit1
        self.unit2 = unit2

    def __str__(self):
        return (
            f"The unit equivalence {self.equiv!r} does not exist for the "
            f"units {str(self.unit1)!r} and {str(self.unit2)!r}."
        )


# define for back compat reasons
YTUnitOperationError = DimensionMismatchError
YTUnitConversionError = IncommensurableUnitsError


# Data access exceptions:


class YTFieldNotFound(YTException):
    def __init__(self, field, ds=None):
        YTException.__init__(self, ds=ds)
        self.field = field

    def __str__(self):
        return f"Could not find field {self.field!r} in {self.ds}."


class YTDataSelectorNotImplemented(YTException):
    def __init__(self, class_name, engine=None):
        YTException.__init__(self)
        self.class_name = class_name
        self.engine = engine

    def __str__(self):
        msg = f"Data selector {self.class_name!r} not implemented"
        if self.engine is not None:
            msg += f" by {self.engine}"
        return msg + "."


class YTDerivedQuantityNotImplemented(YTException):
    def __init__(self, name, engine=None):
        YTException.__init__(self)
        self.name = name
        self.engine = engine

    def __str__(self):
        return f"Derived quantity {self.name!r} is not available from {self.engine}."


class YTInconsistentGridFieldShapeGridDims(YTException):
    def __init__(self, shapes, grid_dims):
        YTException.__init__(self)
        self.shapes = shapes
        self.grid_dims = grid_dims

    def __str__(self):
        msg = "Not all grid-based fields match the grid dimensions! "
        msg += f"Grid dims are {self.grid_dims}, "
        msg += "and the following fields have shapes that do not match them:\n"
        for name, shape in self.shapes:
            if shape != self.grid_dims:
                msg += f"    Field {name} has shape {shape}.\n"
        return msg


class YTInvalidWidthError(YTException):
    def __init__(self, width):
        YTException.__init__(self)
        self.error = width

    def __str__(self):
        return str(self.error)


class YTSphereTooSmall(YTException):
    def __init__(self, ds, radius, smallest_cell):
        YTException.__init__(self, ds=ds)
        self.radius = radius
        self.smallest_cell = smallest_cell

    def __str__(self):
        return f"{self.radius:0.5e} < {self.smallest_cell:0.5e}"


def _dims(unit):
    return getattr(unit, "dimensions", None)
