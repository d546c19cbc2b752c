import os
import shutil
import tempfile

import pytest

from ytunits.config import ytcfg


def pytest_configure(config):
    r"""
    Marks the session as running under pytest.
    """
    ytcfg["ytunits", "internals", "within_pytest"] = True


@pytest.fixture(scope="function")
def temp_dir():
    r"""
    Creates a temporary directory needed by certain tests.
    """
    curdir = os.getcwd()
    tmpdir = tempfile.mkdtemp()
    os.chdir(tmpdir)
    yield tmpdir
    os.chdir(curdir)
    shutil.rmtree(tmpdir)
