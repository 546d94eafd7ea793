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
#
# Utility classes for working with the logger
#
import io
import logging
import sys
import textwrap

_DEBUG = logging.DEBUG
_NOTSET = logging.NOTSET
if not __debug__:

    def is_debug_set(logger):
        return False

else:

    def is_debug_set(logger):
        return _NOTSET < logger.getEffectiveLevel() <= _DEBUG


class WrappingFormatter(logging.Formatter):
    """Formatter that line-wraps the message portion of a log record

    Each line of the formatted record that contains the message is
    wrapped to ``wrap`` columns with a hanging indent of ``hang``.
    """

    _flag = "<<!MSG!>>"

    def __init__(self, **kwds):
        kwds.setdefault('fmt', '%(levelname)s: %(message)s')
        self._wrapper = textwrap.TextWrapper(width=kwds.pop('wrap', 78))
        self._wrapper.subsequent_indent = kwds.pop('hang', ' ' * 4) or ''
        super().__init__(**kwds)

    def format(self, record):
        msg = record.getMessage()
        _orig = record.msg, record.args
        record.msg = self._flag
        record.args = None
        try:
            raw_msg = super().format(record)
        finally:
            record.msg, record.args = _orig
        return '\n'.join(
            self._wrap_msg(line, msg) if self._flag in line else line
            for line in raw_msg.splitlines()
        )

    def _wrap_msg(self, format_line, msg):
        paragraphs = format_line.replace(self._flag, msg).split('\n')
        # Only the first paragraph (the one carrying the level name) is
        # wrapped; continuation lines (tracebacks, tables) are kept as-is
        return '\n'.join(
            [self._wrapper.fill(paragraphs[0])]
            + [self._wrapper.subsequent_indent + p for p in paragraphs[1:]]
        )


class _GlobalLogFilter(object):
    def __init__(self):
        self.logger = logging.getLogger()

    def filter(self, record):
        # Do not emit messages through the lpgen handler if someone has
        # registered a handler on the root logger.
        return not self.logger.handlers


lpgen_logger = logging.getLogger('lpgen')
lpgen_handler = logging.StreamHandler(sys.stdout)
lpgen_handler.setFormatter(WrappingFormatter())
lpgen_handler.addFilter(_GlobalLogFilter())
lpgen_logger.addHandler(lpgen_handler)


class LoggingIntercept(object):
    r"""Context manager for intercepting messages sent to a log stream

    This class is designed to enable easy testing of log messages.

    The LoggingIntercept context manager will intercept messages sent to
    a log stream matching a specified level and send the messages to the
    specified output stream.  Other handlers registered to the target
    logger will be temporarily removed and the logger will be set not to
    propagate messages up to higher-level loggers.

    Parameters
    ----------
    output: io.TextIOBase
        the file stream to send log messages to

    module: str
        the target logger name to intercept. `logger` and `module` are
        mutually exclusive.

    level: int
        the logging level to intercept

    formatter: logging.Formatter
        the formatter to use when rendering the log messages.  If not
        specified, uses `'%(message)s'`

    logger: logging.Logger
        the target logger to intercept. `logger` and `module` are
        mutually exclusive.

    Examples
    --------
    >>> import io, logging
    >>> from lpgen.common.log import LoggingIntercept
    >>> buf = io.StringIO()
    >>> with LoggingIntercept(buf, 'lpgen.core', logging.WARNING):
    ...     logging.getLogger('lpgen.core').warning('a simple message')
    >>> buf.getvalue()
    'a simple message\n'

    """

    def __init__(
        self,
        output=None,
        module=None,
        level=logging.WARNING,
        formatter=None,
        logger=None,
    ):
        self.handler = None
        self.output = output
        if logger is not None:
            if module is not None:
                raise ValueError(
                    "LoggingIntercept: only one of 'module' and 'logger' is allowed"
                )
            self._logger = logger
        else:
            self._logger = logging.getLogger(module)
        self._level = level
        if formatter is None:
            formatter = logging.Formatter('%(message)s')
        self._formatter = formatter
        self._save = None

    def __enter__(self):
        logger = self._logger
        self._save = logger.level, logger.propagate, logger.handlers
        if self._level is None:
            self._level = logger.getEffectiveLevel()
        output = self.output
        if output is None:
            output = io.StringIO()
        assert self.handler is None
        self.handler = logging.StreamHandler(output)
        self.handler.setFormatter(self._formatter)
        self.handler.setLevel(self._level)
        logger.handlers = []
        logger.propagate = False
        logger.setLevel(self.handler.level)
        logger.addHandler(self.handler)
        return output

    def __exit__(self, et, ev, tb):
        logger = self._logger
        logger.removeHandler(self.handler)
        self.handler = None
        logger.setLevel(self._save[0])
        logger.propagate = self._save[1]
        assert not logger.handlers
        logger.handlers.extend(self._save[2])

    @property
    def module(self):
        return self._logger.name
