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

import subprocess

import pyds389

from pyds389 import constants
from pyds389.translate import _

log = pyds389.getLogger('pyds389.package')


def installed(name):
    """
        Whether or not the software package is installed.
    """
    try:
        return subprocess.call(
            [constants.RPM, '-q', name],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL
        ) == 0

    except OSError as errmsg:
        log.error(_("Could not execute %s: %s") % (constants.RPM, errmsg))
        return False


def install(names):
    """
        Install the software packages that are not yet installed.

        Returns True when all of them are installed afterwards.
    """
    missing = [name for name in names if not installed(name)]

    if len(missing) < 1:
        log.debug(_("Packages %s are already installed") % (', '.join(names)), level=8)
        return True

    log.info(_("Installing packages: %s") % (', '.join(missing)))

    command = [constants.ZYPPER, '--non-interactive', 'install'] + missing

    try:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            universal_newlines=True
        )

    except OSError as errmsg:
        log.error(_("Could not execute '%s': %s") % (' '.join(command), errmsg))
        return False

    (stdoutdata, _stderrdata) = process.communicate()

    log.info(stdoutdata)

    if not process.returncode == 0:
        log.error(
            _("Installing packages %s failed with exit code %d") % (
                ', '.join(missing),
                process.returncode
            )
        )

        return False

    return True
