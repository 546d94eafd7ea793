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

"""Declarative, validated option dictionaries.

Components that accept options (the :class:`ModelBuilder`, the LP
writer, the ``.dat`` reader) declare a class-level ``CONFIG``
:class:`ConfigDict`.  Each call clones the declaration and applies the
user options, validating every value through its domain:

.. code-block:: python

   CONFIG = ConfigDict('lp writer')
   CONFIG.declare('infinity', ConfigValue(
       default=1e30, domain=PositiveFloat, description='...'))

   config = self.CONFIG(options)
   config.infinity

"""

import enum
import inspect
import sys

from collections.abc import Mapping
from operator import attrgetter

import ply.lex

from lpgen.common.flags import NOTSET


def Bool(val):
    """Domain validator for bool-like objects.

    This is a more strict domain than ``bool``, as it will error on
    values that do not "look" like a Boolean value (i.e., it accepts
    ``True``, ``False``, 0, 1, and the case insensitive strings
    ``'true'``, ``'false'``, ``'yes'``, ``'no'``, ``'t'``, ``'f'``,
    ``'y'``, and ``'n'``)

    """
    if type(val) is bool:
        return val
    if isinstance(val, str):
        v = val.upper()
        if v in {'TRUE', 'YES', 'T', 'Y', '1'}:
            return True
        if v in {'FALSE', 'NO', 'F', 'N', '0'}:
            return False
    elif int(val) == float(val):
        v = int(val)
        if v in {0, 1}:
            return bool(v)
    raise ValueError("Expected Boolean, but received %s" % (val,))


def NonNegativeInt(val):
    """Domain validation function admitting integers >= 0"""
    ans = int(val)
    if ans != float(val) or ans < 0:
        raise ValueError("Expected non-negative int, but received %s" % (val,))
    return ans


def PositiveFloat(val):
    """Domain validation function admitting strictly positive numbers"""
    ans = float(val)
    if ans <= 0:
        raise ValueError("Expected positive float, but received %s" % (val,))
    return ans


class In(object):
    """In(domain, cast=None)
    Domain validation class admitting a Container of possible values

    If specified, incoming values are first passed to `cast()` before
    looking them up in `domain`.  If the domain is an :py:class:`enum.Enum`
    the constructor returns an :py:class:`InEnum`.

    """

    def __new__(cls, domain=None, cast=None):
        if (
            cls is In
            and cast is None
            and inspect.isclass(domain)
            and issubclass(domain, enum.Enum)
        ):
            return InEnum(domain)
        return super(In, cls).__new__(cls)

    def __init__(self, domain, cast=None):
        self._domain = domain
        self._cast = cast

    def __call__(self, value):
        if self._cast is not None:
            v = self._cast(value)
        else:
            v = value
        if v in self._domain:
            return v
        raise ValueError("value %s not in domain %s" % (value, self._domain))

    def domain_name(self):
        _dn = str(self._domain)
        if not _dn or _dn[0] not in '[({':
            return f'In({_dn})'
        return f'In{_dn}'


class InEnum(object):
    """Domain validation class admitting an enum value/name.

    Incoming values (members, values or member names) are cast to the
    Enum member.

    """

    def __init__(self, domain):
        self._domain = domain

    def __call__(self, value):
        try:
            return self._domain(value)
        except ValueError:
            try:
                return self._domain[value]
            except KeyError:
                pass
        raise ValueError("%r is not a valid %s" % (value, self._domain.__name__))

    def domain_name(self):
        return f'InEnum[{self._domain.__name__}]'


class ListOf(object):
    """Domain validator for lists of a specified type

    Parameters
    ----------
    itemtype: type
        The type for each element in the list

    domain: Callable
        A domain validator for each element in the list.  If not
        specified, defaults to the `itemtype`.

    string_lexer: Callable
        A preprocessor (lexer) called for all string values.  If
        NOTSET, then strings are split on whitespace and/or commas
        (honoring simple use of single or double quotes).  If None, then
        no tokenization is performed.

    """

    def __init__(self, itemtype, domain=None, string_lexer=NOTSET):
        self.itemtype = itemtype
        self.domain = self.itemtype if domain is None else domain
        if string_lexer is NOTSET:
            self.string_lexer = _default_string_list_lexer
        else:
            self.string_lexer = string_lexer
        self.__name__ = 'ListOf(%s)' % (getattr(self.domain, '__name__', self.domain),)

    def __call__(self, value):
        if isinstance(value, str) and self.string_lexer is not None:
            return [self.domain(v) for v in self.string_lexer(value)]
        if hasattr(value, '__iter__') and not isinstance(value, self.itemtype):
            return [self.domain(v) for v in value]
        return [self.domain(value)]

    def domain_name(self):
        return f'ListOf[{getattr(self.domain, "__name__", self.domain)}]'


def _build_lexer(literals=''):
    # Ignore whitespace (space, tab, linefeed, and comma)
    t_ignore = " \t\r,"

    tokens = ["STRING", "WORD"]  # quoted string  # unquoted string

    _quoted_str = r"'(?:[^'\\]|\\.)*'"
    _general_str = "|".join([_quoted_str, _quoted_str.replace("'", '"')])

    @ply.lex.TOKEN(_general_str)
    def t_STRING(t):
        t.value = t.value[1:-1]
        return t

    # A "word" contains no whitespace or commas
    @ply.lex.TOKEN(r'[^' + repr(t_ignore + literals) + r']+')
    def t_WORD(t):
        return t

    def t_error(t):
        # The lexer never sees "\n", so lexpos is the column number
        raise IOError(
            "ERROR: Token '%s' Line %s Column %s" % (t.value, t.lineno, t.lexpos + 1)
        )

    return ply.lex.lex()


def _default_string_list_lexer(value):
    """Simple string tokenizer for lists of words.

    Splits strings on whitespace and/or commas while honoring single and
    double quotes.  Consecutive delimiters do not yield empty strings.

    """
    _lex = _default_string_list_lexer._lex
    if _lex is None:
        _default_string_list_lexer._lex = _lex = _build_lexer()
    _lex.input(value)
    while True:
        tok = _lex.token()
        if not tok:
            break
        yield tok.value


_default_string_list_lexer._lex = None


class ConfigBase(object):
    __slots__ = (
        '_parent',
        '_domain',
        '_name',
        '_userSet',
        '_data',
        '_default',
        '_description',
        '_doc',
    )

    def __init__(self, default=None, domain=None, description=None, doc=None):
        self._parent = None
        self._name = None
        self._userSet = False
        self._default = default
        self._domain = domain
        self._description = description
        self._doc = doc
        self._data = NOTSET

    def __call__(self, value=NOTSET, default=NOTSET, domain=NOTSET, description=NOTSET):
        """Return a copy of this declaration (optionally with a new value)"""
        kwds = {}
        if isinstance(self, ConfigDict):
            assert domain is NOTSET and default is NOTSET
        else:
            kwds['default'] = self.value() if default is NOTSET else default
            kwds['domain'] = self._domain if domain is NOTSET else domain
        kwds['description'] = (
            self._description if description is NOTSET else description
        )
        kwds['doc'] = self._doc
        ans = self.__class__(**kwds)

        if isinstance(self, ConfigDict):
            for k, v in self._data.items():
                ans._data[k] = _tmp = v()
                _tmp._parent = ans
                _tmp._name = v._name

        if value is not NOTSET:
            ans.set_value(value)
        return ans

    def name(self, fully_qualified=False):
        if self._name is None:
            return ""
        elif fully_qualified and self._parent is not None:
            pName = self._parent.name(fully_qualified)
            if not pName:
                return self._name
            return pName + '.' + self._name
        return self._name

    def domain_name(self):
        _dn = getattr(self._domain, 'domain_name', None)
        if _dn is not None:
            return _dn()
        return getattr(self._domain, '__name__', str(self._domain))

    def _cast(self, value):
        if value is None or self._domain is None:
            return value
        try:
            return self._domain(value)
        except (ValueError, TypeError) as err:
            raise ValueError(
                "invalid value for configuration '%s':\n"
                "\tFailed casting %s\n\tto %s\n\tError: %s"
                % (self.name(True), value, self.domain_name(), err)
            ) from None

    def display(self, indent_spacing=2, ostream=None):
        if ostream is None:
            ostream = sys.stdout
        for lvl, prefix, obj in self._data_collector(0, ""):
            if isinstance(obj, ConfigDict):
                ostream.write(' ' * indent_spacing * lvl + prefix.rstrip() + '\n')
            else:
                ostream.write(
                    ' ' * indent_spacing * lvl + prefix + str(obj.value()) + '\n'
                )


class ConfigValue(ConfigBase):
    """Store and manipulate a single configuration value.

    Parameters
    ----------
    default: optional
        The default value that this ConfigValue will take if no value is
        provided.

    domain: Callable, optional
        Any callable that accepts a candidate value and returns the
        value converted to the desired type, optionally performing
        validation (e.g., :py:class:`In`, :py:func:`Bool`, ``float``).

    description: str, optional
        The short description of this value

    doc: str, optional
        The long documentation string for this value

    """

    __slots__ = ()

    def __init__(self, *args, **kwds):
        super().__init__(*args, **kwds)
        self.reset()

    def value(self):
        return self._data

    def set_value(self, value):
        self._data = self._cast(value)
        self._userSet = True

    def reset(self):
        self._data = self._cast(self._default)
        self._userSet = False

    def _data_collector(self, level, prefix):
        yield (level, prefix, self)


class ConfigDict(ConfigBase, Mapping):
    """Store and manipulate a dictionary of configuration values.

    Only keys declared through :py:meth:`declare` may be set; values
    are accessible both as items (``config['infinity']``) and as
    attributes (``config.infinity``).

    """

    __slots__ = ()
    _reserved_words = set()

    def __init__(self, description=None, doc=None):
        ConfigBase.__init__(self, None, dict, description, doc)
        self._data = {}

    def __getitem__(self, key):
        _key = str(key).replace(' ', '_')
        if isinstance(self._data[_key], ConfigValue):
            return self._data[_key].value()
        return self._data[_key]

    def get(self, key, default=NOTSET):
        _key = str(key).replace(' ', '_')
        if _key in self._data:
            return self._data[_key]
        if default is NOTSET:
            return None
        return ConfigValue(default)

    def __setitem__(self, key, val):
        _key = str(key).replace(' ', '_')
        if _key not in self._data:
            raise ValueError(
                "Key '%s' not defined in ConfigDict '%s'" % (key, self.name(True))
            )
        cfg = self._data[_key]
        if cfg is val:
            return
        cfg.set_value(val)

    def __contains__(self, key):
        return str(key).replace(' ', '_') in self._data

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return map(attrgetter('_name'), self._data.values())

    def __getattr__(self, attr):
        _attr = attr.replace(' ', '_')
        # "_data" is tested to avoid infinite recursion on partially
        # constructed objects
        if _attr == "_data" or _attr not in self._data:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{attr}'"
            )
        return ConfigDict.__getitem__(self, _attr)

    def __setattr__(self, name, value):
        if name in ConfigDict._reserved_words:
            super().__setattr__(name, value)
        else:
            ConfigDict.__setitem__(self, name, value)

    def declare(self, name, config):
        name = str(name)
        _name = name.replace(' ', '_')
        if config._parent is not None:
            raise ValueError(
                "config '%s' is already assigned to ConfigDict '%s'; "
                "cannot reassign to '%s'"
                % (name, config._parent.name(True), self.name(True))
            )
        if _name in self._data:
            raise ValueError(
                "duplicate config '%s' defined for ConfigDict '%s'"
                % (name, self.name(True))
            )
        self._data[_name] = config
        config._parent = self
        config._name = name
        return config

    def value(self):
        return {cfg._name: cfg.value() for cfg in self._data.values()}

    def set_value(self, value):
        if value is None:
            return self
        if not isinstance(value, (dict, ConfigDict)):
            raise ValueError(
                "Expected dict value for %s.set_value, found %s"
                % (self.name(True), type(value).__name__)
            )
        for key in value:
            if str(key).replace(' ', '_') not in self._data:
                raise ValueError(
                    "key '%s' not defined for ConfigDict '%s' and "
                    "implicit (undefined) keys are not allowed"
                    % (key, self.name(True))
                )
        # Either set_value succeeds completely, or nothing changes
        _old_data = self.value()
        try:
            for key in value:
                self[key] = value[key]
        except ValueError:
            self.reset()
            self.set_value(_old_data)
            raise
        self._userSet = True
        return self

    def reset(self):
        for val in self._data.values():
            val.reset()
        self._userSet = False

    def _data_collector(self, level, prefix):
        if prefix:
            yield (level, prefix, self)
            level += 1
        for cfg in self._data.values():
            yield from cfg._data_collector(level, cfg._name + ': ')


ConfigDict._reserved_words.update(dir(ConfigDict))
ConfigDict._reserved_words.update(ConfigBase.__slots__)

# Backwards-compatible alias
ConfigBlock = ConfigDict
