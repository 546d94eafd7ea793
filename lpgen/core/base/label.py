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

# This module provides the functionality for generating LP-file labels
# from model names, which often contain characters (e.g. "[", "-", " ")
# that are illegal in CPLEX LP files.

import logging
import random
import string

logger = logging.getLogger(__name__)

#: Longest identifier accepted by CPLEX LP readers
MAX_LABEL_LENGTH = 255


class _CharMapper(object):
    def __init__(self, preserve, translate, other):
        """
        Arguments::
           preserve: a string of characters to preserve
           translate: a dict or key/value list of characters to translate
           other: the character to return for all characters not in
                  preserve or translate
        """
        self.table = {
            k if isinstance(k, int) else ord(k): v for k, v in dict(translate).items()
        }
        for c in preserve:
            _c = ord(c)
            if _c in self.table and self.table[_c] != c:
                raise RuntimeError(
                    "Duplicate character '%s' appears in both "
                    "translate table and preserve list" % (c,)
                )
            self.table[_c] = c
        self.other = other

    def __getitem__(self, c):
        # Characters outside the table (e.g. non-ASCII) are remembered
        # the first time they are seen and mapped to the default
        try:
            return self.table[c]
        except KeyError:
            self.table[c] = self.other
            return self.other


_alpha = string.ascii_letters
_digit = string.digits
_lp_translation_table = _CharMapper(
    preserve=_alpha + _digit + '!"#$%&(),.;?@_\'~',
    translate=zip('[]{}', '()()'),
    other='_',
)

#: Words an LP reader treats as section headers or values (compared
#: case-insensitively)
_lp_keywords = frozenset(
    (
        'inf', 'infinity', 'free', 'bound', 'bounds',
        'gen', 'general', 'generals', 'bin', 'binary', 'binaries',
        'int', 'integer', 'integers', 'semi', 'semis',
        'st', 's.t.', 'st.', 'subject', 'such', 'that',
        'min', 'max', 'minimize', 'maximize', 'minimise', 'maximise',
        'minimum', 'maximum', 'sos', 'sos1', 'sos2', 'end',
    )
)


def lp_label_from_name(name):
    """Map `name` onto the CPLEX LP identifier character set.

    Illegal characters become ``_`` and brackets/braces become
    parentheses.  Identifiers may not start with a digit or a period,
    and a leading ``e``/``E`` would be read as exponent notation, so
    such names get a ``_`` prefix, as do LP keywords (``inf``, ``free``,
    ``st``, ...).  The result is capped at
    :data:`MAX_LABEL_LENGTH` characters and may be empty.
    """
    if name is None:
        raise RuntimeError(
            "Illegal name=None supplied to lp_label_from_name function"
        )
    label = str(name).translate(_lp_translation_table)
    if label and (label[0] in _digit + '.eE' or label.lower() in _lp_keywords):
        label = '_' + label
    return label[:MAX_LABEL_LENGTH]


class LPFileLabeler(object):
    """Issue unique, LP-legal labels.

    Names that sanitize to nothing (or only underscores) are replaced by
    ``var_<8 random capitals>``; a label already issued to a different
    object gets ``_<8 random capitals>`` appended.  The random suffixes
    come from a private :class:`random.Random` seeded with `seed`, so the
    labels for a given sequence of names are reproducible.
    """

    suffix_length = 8

    def __init__(self, seed=0):
        self._rng = random.Random(seed)
        self.issued = {}

    def _random_suffix(self):
        return ''.join(
            self._rng.choice(string.ascii_uppercase)
            for _ in range(self.suffix_length)
        )

    def __call__(self, obj, name=None):
        if name is None:
            name = getattr(obj, 'name', obj)
        label = lp_label_from_name(name)
        if not label.strip('_'):
            label = 'var_' + self._random_suffix()
        while label in self.issued and self.issued[label] != obj:
            base = label[: MAX_LABEL_LENGTH - self.suffix_length - 1]
            label = base + '_' + self._random_suffix()
            logger.debug("Label for '%s' collides; using '%s'", name, label)
        self.issued[label] = obj
        return label
