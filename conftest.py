#  ___________________________________________________________________________
#
#  Pyomo: Python Optimization Modeling Objects
#  Copyright (c) 2008-2025
#  National Technology and Engineering Solutions of Sandia, LLC
#  Under the terms of Contract DE-NA0003525 with National Technology and
#  Engineering Solutions of Sandia, LLC, the U.S. Government retains certain
#  rights in this software.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import pytest

_implicit_markers = {'default'}


def pytest_collection_modifyitems(items):
    """
    This method will mark any unmarked tests with the implicit marker ('default')

    """
    for item in items:
        try:
            next(item.iter_markers())
        except StopIteration:
            for marker in _implicit_markers:
                item.add_marker(getattr(pytest.mark, marker))


def pytest_runtest_setup(item):
    """
    This method overrides pytest's default behavior for marked tests.

    The logic below follows this flow:
        1) Did the user pass '--expensive'?  If so, run everything.
        2) Did the user ask for a specific marker using the '-m' flag?
            If so: Return to pytest's default behavior.
        3) Otherwise run unmarked tests and tests carrying only implicit
           markers; skip the rest (e.g. "expensive").
    """
    if item.config.getoption("--expensive"):
        return
    if item.config.getoption("-m"):
        return
    item_markers = set(mark.name for mark in item.iter_markers())
    if item_markers and not item_markers.issubset(_implicit_markers):
        pytest.skip('SKIPPED: Only running default and unmarked tests.')


def pytest_addoption(parser):
    """
    Add a parser option to also run the tests marked "expensive"
    """
    parser.addoption(
        "--expensive",
        action="store_true",
        default=False,
        help="Also run the tests marked 'expensive'.",
    )


def pytest_configure(config):
    """
    Register the lpgen markers.
    This stops pytest from printing a warning about unregistered markers.
    """
    config.addinivalue_line("markers", "default: tests run by default")
    config.addinivalue_line("markers", "expensive: long-running tests")
