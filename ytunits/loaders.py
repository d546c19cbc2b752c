"""
This module gathers all user-facing functions with a `load` prefix.

"""
import os

import ytunits.data_objects.api  # NOQA: F401 registers the data containers
from ytunits.config import ytcfg
from ytunits.data_objects.static_output import Dataset
from ytunits.engine import NativeAnalysisEngine
from ytunits.frontends.stream.api import StreamEngine, uniform_grid_handler
from ytunits.utilities.exceptions import YTException
from ytunits.utilities.logger import ytLogger as mylog
from ytunits.utilities.object_registries import engine_registry


def _get_engine(engine):
    if isinstance(engine, NativeAnalysisEngine):
        return engine
    try:
        cls = engine_registry[engine]
    except KeyError:
        raise YTException(
            f"Unknown engine {engine!r}; available engines are {sorted(engine_registry)}."
        ) from None
    return cls()


def load(fn, *args, engine="stream", unit_system=None, **kwargs):
    """
    Load a Dataset through an analysis engine.

    Parameters
    ----------
    fn : str, os.Pathlike[str] or object
        What to open. Engines decide what they accept: the stream engine
        takes a dict of field arrays, a StreamHandler or the path of an
        ``.npz`` file.

    engine : str or NativeAnalysisEngine, optional
        The name of a registered engine, or an engine instance.
        Defaults to "stream".

    unit_system : str, optional
        The unit system of the returned dataset. Defaults to the
        ``default_unit_system`` configuration option.

    Additional arguments, if any, are passed down to the engine's ``load``.

    Returns
    -------
    :class:`ytunits.data_objects.static_output.Dataset` object

    Raises
    ------
    FileNotFoundError
        If fn is a path that does not exist.

    ytunits.utilities.exceptions.YTException
        If no engine is registered under the given name.
    """
    engine = _get_engine(engine)
    if isinstance(fn, (str, os.PathLike)):
        fn = os.path.expanduser(fn)
        if not os.path.exists(fn):
            raise FileNotFoundError(fn)
    if unit_system is None:
        unit_system = ytcfg.get("ytunits", "default_unit_system")
    handle = engine.load(fn, *args, **kwargs)
    mylog.debug("Loaded %s with engine %s", handle, engine)
    return Dataset(handle, engine, unit_system=unit_system)


def load_uniform_grid(
    data,
    domain_dimensions,
    length_unit=None,
    bbox=None,
    sim_time=0.0,
    mass_unit=None,
    time_unit=None,
    velocity_unit=None,
    magnetic_unit=None,
    periodicity=(True, True, True),
    unit_system="cgs",
    *,
    parameters=None,
):
    r"""Load a uniform grid of data into ytunits as a
    :class:`~ytunits.frontends.stream.data_structures.StreamHandler`.

    This should allow a uniform grid of data to be loaded directly into
    ytunits and analyzed as would any others.  Units will be incorrect
    unless the code units are explicitly specified.

    Parameters
    ----------
    data : dict
        This is a dict of numpy arrays, YTArrays or (numpy array, unit spec)
        tuples. The keys to the dict are the field names.
    domain_dimensions : array_like
        This is the domain dimensions of the grid
    length_unit : string, float, YTQuantity or (value, unit) tuple
        Unit to use for lengths.  Defaults to centimeters.
    bbox : array_like (xdim:zdim, LE:RE), optional
        Size of computational domain in units specified by length_unit.
        Defaults to a cubic unit-length domain.
    sim_time : float, optional
        The simulation time in code units
    mass_unit : string, float, YTQuantity or (value, unit) tuple
        Unit to use for masses.  Defaults to grams.
    time_unit : string, float, YTQuantity or (value, unit) tuple
        Unit to use for times.  Defaults to seconds.
    velocity_unit : string, float, YTQuantity or (value, unit) tuple
        Unit to use for velocities.  Defaults to length_unit / time_unit.
    magnetic_unit : string, float, YTQuantity or (value, unit) tuple
        Unit to use for magnetic fields. Defaults to the gaussian unit
        derived from the mass, length and time units.
    periodicity : tuple of booleans
        Determines whether the data will be treated as periodic along
        each axis
    unit_system : str
        The unit system derived quantities are reported in. "code" selects
        the dataset's own code unit system.
    parameters: dictionary, optional
        Optional dictionary used to populate the dataset parameters, useful
        for storing dataset metadata.

    Examples
    --------

    >>> bbox = np.array([[0.0, 1.0], [-1.5, 1.5], [1.0, 2.5]])
    >>> arr = np.random.random((128, 128, 128))
    >>> data = dict(density=arr)
    >>> ds = load_uniform_grid(data, arr.shape, length_unit="cm", bbox=bbox)
    """
    handler = uniform_grid_handler(
        data,
        domain_dimensions,
        length_unit=length_unit,
        bbox=bbox,
        sim_time=sim_time,
        mass_unit=mass_unit,
        time_unit=time_unit,
        velocity_unit=velocity_unit,
        magnetic_unit=magnetic_unit,
        periodicity=periodicity,
        parameters=parameters,
    )
    return Dataset(handler, StreamEngine(), unit_system=unit_system)
