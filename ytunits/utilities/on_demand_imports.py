from functools import wraps
from importlib.util import find_spec
from typing import Optional, Type


class NotAModule:
    """
    Stands in for an optional package that is not installed. Any use of it
    raises an ImportError naming the package, and the extra of ytunits that
    pulls it in when there is one.
    """

    def __init__(self, pkg_name, extra: Optional[str] = None):
        self.pkg_name = pkg_name
        msg = f"This functionality requires the {pkg_name} package to be installed."
        if extra is not None:
            msg += f" Try `python -m pip install 'ytunits[{extra}]'`."
        self.error = ImportError(msg)

    def __getattr__(self, item):
        raise self.error

    def __call__(self, *args, **kwargs):
        raise self.error

    def __repr__(self) -> str:
        return f"NotAModule({self.pkg_name!r})"


class OnDemand:
    """
    Base class of lazy importers. A subclass named ``<package>_imports``
    exposes the parts of ``<package>`` ytunits uses as properties wrapped
    with :func:`safe_import`.
    """

    _default_factory: Type[NotAModule] = NotAModule
    _extra: Optional[str] = None

    def __init_subclass__(cls):
        if not cls.__name__.endswith("_imports"):
            raise TypeError(f"class {cls}'s name needs to be suffixed '_imports'")

    def __new__(cls):
        if cls is OnDemand:
            raise TypeError("The OnDemand base class cannot be instanciated.")
        return object.__new__(cls)

    @property
    def _name(self) -> str:
        return self.__class__.__name__.rpartition("_")[0]

    @property
    def __is_available__(self) -> bool:
        return find_spec(self._name) is not None


def safe_import(func):
    @property
    @wraps(func)
    def inner(self):
        try:
            return func(self)
        except ImportError:
            return self._default_factory(self._name, extra=self._extra)

    return inner


class h5py_imports(OnDemand):
    _extra = "h5py"

    @safe_import
    def File(self):
        from h5py import File

        return File


_h5py = h5py_imports()
