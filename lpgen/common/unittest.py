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

import math
import re

# Import the base unittest environment.  We will override things
# specifically below
from unittest import *
import unittest as _unittest

from collections.abc import Mapping, Sequence

import pytest


def _floatOrCall(val):
    """Cast the value to float, if that fails call it and then cast."""
    try:
        return float(val)
    except TypeError:
        pass
    return float(val())


def assertStructuredAlmostEqual(
    first, second, places=None, msg=None, delta=None, reltol=None, abstol=None,
    exception=ValueError,
):
    """Test that first and second are equal up to a tolerance

    This compares first and second using both an absolute (`abstol`) and
    relative (`reltol`) tolerance.  It will recursively descend into
    Sequence and Mapping containers (allowing for the relative
    comparison of structured data including lists and dicts).

    If `places` is supplied, `abstol` is computed as `10**-places`.
    `delta` is an alias for `abstol`.  If none of {`abstol`, `reltol`,
    `places`, `delta`} are specified, `reltol` defaults to 1e-7.

    """
    if sum(1 for _ in (places, delta, abstol) if _ is not None) > 1:
        raise ValueError("Cannot specify more than one of {places, delta, abstol}")
    if places is not None:
        abstol = 10 ** (-places)
    if delta is not None:
        abstol = delta
    if abstol is None and reltol is None:
        reltol = 10**-7
    try:
        _assertStructuredAlmostEqual(first, second, abstol, reltol, exception)
    except exception as e:
        raise exception(msg or str(e)) from None


def _assertStructuredAlmostEqual(first, second, abstol, reltol, exception):
    """Recursive implementation of assertStructuredAlmostEqual"""
    args = (first, second)
    if all(isinstance(_, Mapping) for _ in args):
        if len(first) != len(second):
            raise exception(
                "mappings are different sizes (%s != %s)" % (len(first), len(second))
            )
        for key in first:
            if key not in second:
                raise exception(
                    "key (%s) from first not found in second"
                    % (_unittest.case.safe_repr(key),)
                )
            try:
                _assertStructuredAlmostEqual(
                    first[key], second[key], abstol, reltol, exception
                )
            except exception as e:
                raise exception(
                    "%s\n    Found when comparing key %s"
                    % (str(e), _unittest.case.safe_repr(key))
                )
        return  # PASS!

    elif any(isinstance(_, str) for _ in args):
        if first == second:
            return  # PASS!

    elif all(isinstance(_, Sequence) for _ in args):
        if len(first) != len(second):
            raise exception(
                "sequences are different sizes (%s != %s)" % (len(first), len(second))
            )
        for i, (f, s) in enumerate(zip(first, second)):
            try:
                _assertStructuredAlmostEqual(f, s, abstol, reltol, exception)
            except exception as e:
                raise exception("%s\n    Found at position %s" % (str(e), i))
        return  # PASS!

    else:
        if first is second or first == second:
            return  # PASS!
        try:
            f = _floatOrCall(first)
            s = _floatOrCall(second)
        except (TypeError, ValueError):
            pass
        else:
            diff = abs(f - s)
            if abstol is not None and diff <= abstol:
                return  # PASS!
            if reltol is not None and diff / max(abs(f), abs(s)) <= reltol:
                return  # PASS!
            if math.isnan(f) and math.isnan(s):
                return  # PASS! (we will treat NaN as equal)

    raise exception(
        "%s !~= %s"
        % (_unittest.case.safe_repr(first), _unittest.case.safe_repr(second))
    )


class _AssertRaisesContext_NormalizeWhitespace(_unittest.case._AssertRaisesContext):
    def __exit__(self, exc_type, exc_value, tb):
        try:
            _save_re = self.expected_regex
            self.expected_regex = None
            if not super().__exit__(exc_type, exc_value, tb):
                return False
        finally:
            self.expected_regex = _save_re

        exc_value = re.sub(r'(?s)\s+', ' ', str(exc_value))
        if not _save_re.search(exc_value):
            self._raiseFailure(
                '"{}" does not match "{}"'.format(_save_re.pattern, exc_value)
            )
        return True


class TestCase(_unittest.TestCase):
    """An lpgen-specific class whose instances are single test cases.

    Adds :py:meth:`assertStructuredAlmostEqual` and
    :py:meth:`assertPolynomialEqual`, and extends
    :py:meth:`assertRaisesRegex` with a `normalize_whitespace` option.
    """

    # Always spend the time to create the full diff of the test result
    # and the baseline
    maxDiff = None

    def assertStructuredAlmostEqual(
        self, first, second, places=None, msg=None, delta=None, reltol=None,
        abstol=None,
    ):
        assertStructuredAlmostEqual(
            first=first,
            second=second,
            places=places,
            msg=msg,
            delta=delta,
            reltol=reltol,
            abstol=abstol,
            exception=self.failureException,
        )

    def assertPolynomialEqual(self, poly, terms, places=None):
        """Assert that a Polynomial has exactly the given terms.

        `terms` maps monomials (tuples of VariableIds, ``()`` for the
        constant term) to coefficients.
        """
        self.assertStructuredAlmostEqual(
            dict(poly.items()), dict(terms), places=places
        )

    def assertRaisesRegex(self, expected_exception, expected_regex, *args, **kwargs):
        """Asserts that the message in a raised exception matches a regex.

        This is a light weight wrapper around
        :py:meth:`unittest.TestCase.assertRaisesRegex` that adds
        handling of a `normalize_whitespace` keyword argument that
        normalizes all consecutive whitespace in the exception message
        to a single space before checking the regular expression.

        """
        normalize_whitespace = kwargs.pop('normalize_whitespace', False)
        if normalize_whitespace:
            contextClass = _AssertRaisesContext_NormalizeWhitespace
        else:
            contextClass = _unittest.case._AssertRaisesContext
        context = contextClass(expected_exception, self, expected_regex)
        return context.handle('assertRaisesRegex', args, kwargs)
