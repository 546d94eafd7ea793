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

import inspect
import textwrap


def format_exception(msg, prolog=None, epilog=None, exception=None, width=76):
    """Generate a formatted exception message

    The message is line wrapped for display on the console.  Optional
    ``prolog`` / ``epilog`` messages are emitted before / after the
    main message, in which case the main message is indented a level
    below them.

    Parameters
    ----------
    msg: str
        The raw exception message

    prolog: str, optional
        A message to output before ``msg``

    epilog: str, optional
        A message to output after ``msg``

    exception: Exception, optional
        The exception being raised (used to compute the initial indent
        so the first line accounts for the exception class name)

    width: int, optional
        The line length to wrap the message to

    Returns
    -------
    str
    """
    fields = []
    indent = ' ' * (8 if epilog else 4)

    if exception is None:
        # length of 'NotImplementedError: '
        initial_indent = ' ' * 21
    else:
        if not inspect.isclass(exception):
            exception = exception.__class__
        initial_indent = ' ' * (len(exception.__name__) + 2)
        if exception.__module__ != 'builtins':
            initial_indent += ' ' * (len(exception.__module__) + 1)

    def _fill(text, first, rest):
        return textwrap.fill(
            text,
            width=width,
            initial_indent=first,
            subsequent_indent=rest,
            break_long_words=False,
            break_on_hyphens=False,
        )

    if prolog is not None:
        if '\n' not in prolog:
            prolog = _fill(prolog, initial_indent, ' ' * 4).lstrip()
        if '\n' in prolog:
            indent = ' ' * 8
        fields.append(prolog)
        initial_indent = indent

    if '\n' not in msg:
        msg = _fill(msg, initial_indent, indent)
        if not fields:
            msg = msg.lstrip()
    fields.append(msg)

    if epilog is not None:
        if '\n' not in epilog:
            epilog = _fill(epilog, ' ' * 4, ' ' * 4)
        fields.append(epilog)

    return '\n'.join(fields)


class LpgenException(Exception):
    """
    Exception class for other lpgen exceptions to inherit from,
    allowing lpgen exceptions to be caught in a general way.
    Subclasses can define a class-level `default_message` attribute.
    """

    def __init__(self, *args):
        if not args and getattr(self, 'default_message', None):
            args = (self.default_message,)
        super().__init__(*args)


class DeveloperError(LpgenException, NotImplementedError):
    """
    Exception class used to throw errors that result from lpgen
    programming errors or malformed expression trees, rather than user
    modeling errors.
    """

    def __str__(self):
        return format_exception(
            repr(super().__str__()),
            prolog="Internal lpgen implementation error:",
            epilog="Please report this to the lpgen developers.",
            exception=self,
        )


class ModelingError(LpgenException):
    """Base class for all errors raised while compiling a model.

    Modeling errors are deterministic: recompiling the same model with
    the same data raises the same error.  As an error propagates out of
    the :class:`~lpgen.core.builder.ModelBuilder`, each layer may record
    where it was raised (the variable or constraint family, the
    generator combination, ...) through :meth:`add_context`.
    """

    def __init__(self, *args, context=None):
        super().__init__(*args)
        self.context = list(context or ())

    def add_context(self, msg):
        self.context.append(msg)
        return self

    def __str__(self):
        msg = str(self.args[0]) if self.args else ''
        if not self.context:
            return msg
        lines = ['while ' + c for c in self.context]
        if len(lines) == 1:
            # single-line epilogs are wrapped (and indented) by format_exception
            epilog = lines[0]
        else:
            epilog = '\n'.join('    ' + line for line in lines)
        return format_exception(msg, epilog=epilog, exception=self)


class UnboundName(ModelingError, NameError):
    """A referenced name has no binding in any environment layer"""


class NameConflict(ModelingError):
    """A generator binding would shadow an external parameter"""


class InvalidDomain(ModelingError, ValueError):
    """A generator domain did not resolve to a finite ordered sequence"""


class UnresolvedIndex(ModelingError):
    """An index expression could not be reduced to a concrete scalar"""


class ParameterKeyError(ModelingError, KeyError):
    """A concrete key was not present in the parameter data"""


class UnknownVariableFamily(ModelingError):
    """A variable reference names a family that was never declared"""


class UnknownVariable(ModelingError):
    """A fully indexed variable reference names an undeclared member"""


class DegreeOverflow(ModelingError):
    """An operation would produce a monomial of degree greater than 2"""

    default_message = "Polynomial degree exceeds 2"


class NonConstantDivisor(ModelingError):
    """Division by an expression that does not reduce to a nonzero constant"""


class NonBinaryOperand(ModelingError, ValueError):
    """A logical primitive received an operand that is not 0/1 valued"""


class NonNumericValue(ModelingError, TypeError):
    """A name or parameter used arithmetically does not hold a number"""


class InvalidConstraint(ModelingError, ValueError):
    """A relation cannot be expressed as an LP constraint (strict or
    "!=" operators, infinite equality right-hand sides)"""


class DuplicateVariable(ModelingError):
    """Two generator combinations produced the same VariableId"""


class DuplicateConstraintName(ModelingError):
    """Two constraints were given the same stored name"""


class NonLinearObjective(ModelingError):
    """The objective did not compile to a Polynomial"""


class UnsoundLinearization(ModelingError):
    """An auxiliary variable is pushed away from its tight value by the
    objective, so the relaxation emitted by the Linearizer is not exact"""


class ModelFrozenError(LpgenException, RuntimeError):
    """Attempt to modify a Model after it was returned by the builder"""

    default_message = "Cannot modify a Model that has already been built"
