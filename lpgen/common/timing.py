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

"""Lightweight wall-clock timing used to report writer section times."""

import logging
import sys

from time import perf_counter as default_timer

from lpgen.common.flags import NOTSET


class TicTocTimer(object):
    """A class to calculate and report elapsed time.

    Examples:
       >>> from lpgen.common.timing import TicTocTimer
       >>> timer = TicTocTimer()
       >>> timer.tic('starting timer') # starts the elapsed time timer (from 0)
       [    0.00] starting timer
       >>> # ... do task 1
       >>> dT = timer.toc('task 1')
       [+   0.00] task 1

    If no ostream or logger is provided, then output is printed to sys.stdout

    Args:
        ostream (FILE): an optional output stream to print the timing
            information
        logger (Logger): an optional output stream using the python
           logging package. Note: the timing is logged at ``level``
           (``logging.INFO`` by default)
    """

    def __init__(self, ostream=NOTSET, logger=None, level=logging.INFO):
        if ostream is NOTSET and logger is not None:
            ostream = None
        self._lastTime = self._loadTime = default_timer()
        self.ostream = ostream
        self.logger = logger
        self.level = level

    def tic(self, msg=NOTSET, *args, level=NOTSET):
        """Reset the tic/toc delta timer (and report the message)."""
        self._lastTime = self._loadTime = default_timer()
        if msg is NOTSET:
            msg = "Resetting the tic/toc delta timer"
        if msg is not None:
            self.toc(msg, *args, delta=False, level=level)

    def toc(self, msg=NOTSET, *args, delta=True, level=NOTSET):
        """Report the elapsed time.

        Args:
            msg (str): The message to print out.  If None, then no
                message is printed.
            *args (tuple): optional positional arguments used for
                %-formatting the `msg`
            delta (bool): report the time since the most recent call to
                either :meth:`tic` or :meth:`toc` (``True``) or since
                the last call to :meth:`tic` (``False``)
            level (int): an optional logging output level.
        """
        now = default_timer()
        if delta:
            ans = now - self._lastTime
            fmt = "[+%7.2f] %s"
        else:
            ans = now - self._loadTime
            fmt = "[%8.2f] %s"
        self._lastTime = now

        if msg is NOTSET:
            msg = ''
        if msg is not None:
            text = fmt % (ans, msg % args if args else msg)
            if self.logger is not None:
                self.logger.log(self.level if level is NOTSET else level, text)
            ostream = self.ostream
            if ostream is NOTSET:
                ostream = sys.stdout
            if ostream is not None:
                ostream.write(text + '\n')
        return ans
