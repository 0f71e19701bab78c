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

import os
import sys

import pyds389
from pyds389.translate import _

log = pyds389.getLogger('pyds389.setup')
conf = pyds389.getConf()


class Setup(object):
    def __init__(self):
        from pyds389.setup import components
        components.__init__()

        self.components = components
        self.to_execute = []

        for arg in sys.argv[1:]:
            if arg.startswith('-'):
                continue

            if arg.replace('-', '_') in components.components:
                self.to_execute.append(arg.replace('-', '_'))

    def run(self):
        if not os.getuid() == 0 and self.to_execute not in (['help'], ['instances']):
            log.fatal(_("Setting up 389 Directory Server requires root privileges."))
            sys.exit(1)

        if len(self.to_execute) > 1:
            log.error(_("Please select one component at a time."))
            sys.exit(1)

        self.components.execute(''.join(self.to_execute))


def main():
    setup = Setup()
    setup.run()
