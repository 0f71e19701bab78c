# -*- coding: utf-8 -*-
# Copyright 2010-2013 Kolab Systems AG (http://www.kolabsys.com)
#
# Jeroen van Meeuwen (Kolab Systems) <vanmeeuwen a kolabsys.com>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import logging
import os
import sys

from pyds389.constants import DS_SETUP_LOG_PATH


def settings_from_argv(argv):
    """
        Find the debug level, log level and log file on the command line,
        before the command line options are parsed.

        Returns a tuple (debuglevel, loglevel, logfile).
    """
    debuglevel = 0
    loglevel = logging.WARNING
    logfile = DS_SETUP_LOG_PATH

    for arg in argv:
        if debuglevel == -1:
            try:
                debuglevel = (int)(arg)
                loglevel = logging.DEBUG
                continue
            except ValueError:
                debuglevel = 0

        if arg == '-d':
            debuglevel = -1
            continue

        if arg == '-l':
            loglevel = -1
            continue

        if loglevel == -1:
            if hasattr(logging, arg.upper()):
                loglevel = getattr(logging, arg.upper())
            else:
                loglevel = logging.DEBUG

            continue

        if arg == '--logfile':
            logfile = -1
            continue

        if arg.startswith('--logfile='):
            logfile = arg.split('=', 1)[1]

        elif logfile == -1:
            logfile = arg

    if debuglevel == -1:
        debuglevel = 0

    if loglevel == -1:
        loglevel = logging.WARNING

    if logfile == -1:
        logfile = DS_SETUP_LOG_PATH

    return (debuglevel, loglevel, logfile)


class Logger(logging.Logger):
    """
        The pyds389 version of a logger.

        This class wraps the Python native logging library, adding to the
        loglevel capabilities, a debuglevel capability.

        Every record ends up in the setup log file, regardless of the level
        the console is configured for. All loggers share the one handle on
        that file.
    """
    (debuglevel, loglevel, logfile) = settings_from_argv(getattr(sys, 'argv', []))

    filelog_handler = None
    filelog_failed = False

    def __init__(self, *args, **kw):
        if 'name' in kw:
            name = kw['name']
        elif len(args) == 1:
            name = args[0]
        else:
            name = 'pyds389'

        logging.Logger.__init__(self, name)

        # Handlers decide what goes where.
        self.setLevel(logging.DEBUG)

        plaintextformatter = logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s [%(process)d] %(message)s"
        )

        self.console_stdout = logging.StreamHandler(sys.stdout)
        self.console_stdout.setFormatter(plaintextformatter)
        self.console_stdout.setLevel(self.loglevel)

        self.addHandler(self.console_stdout)

        filelog_handler = self.get_filelog_handler(plaintextformatter)

        if filelog_handler is not None:
            self.addHandler(filelog_handler)

    @classmethod
    def get_filelog_handler(cls, formatter):
        """
            The handler for the setup log, created on first use. Returns None
            if the setup log cannot be written to.
        """
        if cls.filelog_handler is not None or cls.filelog_failed:
            return cls.filelog_handler

        # Make sure the log file exists, and only root can read it.
        try:
            fhandle = open(cls.logfile, 'a')
            try:
                os.utime(cls.logfile, None)
            finally:
                fhandle.close()

            if os.getuid() == 0:
                os.chmod(cls.logfile, 0o600)

        except (IOError, OSError) as errmsg:
            print(
                "Cannot log to file %s: %s" % (cls.logfile, errmsg),
                file=sys.stderr
            )

            cls.filelog_failed = True

            return None

        cls.filelog_handler = logging.FileHandler(filename=cls.logfile)
        cls.filelog_handler.setFormatter(formatter)
        cls.filelog_handler.setLevel(logging.DEBUG)

        return cls.filelog_handler

    # pylint: disable=arguments-differ
    # pylint: disable=keyword-arg-before-vararg
    def debug(self, msg, level=1, *args, **kw):
        if level <= self.debuglevel:
            self.log(logging.DEBUG, msg, *args, **kw)


logging.setLoggerClass(Logger)
