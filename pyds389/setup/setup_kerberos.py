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

import sys

from pyds389.setup import components

import pyds389

from pyds389 import instance
from pyds389 import utils
from pyds389.translate import _

log = pyds389.getLogger('pyds389.setup')
conf = pyds389.getConf()


def __init__():
    components.register(
        'kerberos',
        execute,
        description=description(),
        after=['dirsrv']
    )


def description():
    return _("Prepare a directory instance to hold Kerberos data.")


def execute(*args, **kw):
    instance_names = instance.get_instance_names()

    instance_name = getattr(conf, 'instance_name', None)

    if instance_name is None:
        default = ''
        if len(instance_names) == 1:
            default = instance_names[0]

        instance_name = utils.ask_question(
            _("Directory server instance name"),
            default=default
        )

    if instance_name not in instance_names:
        log.error(_("No such directory instance: %s") % (instance_name))
        sys.exit(1)

    log.info(_("Enabling the kerberos schema in directory instance %s") % (instance_name))

    if not instance.enable_krb_schema(instance_name):
        log.error(
            _("Failed to enable the kerberos schema, please inspect the journal of dirsrv@%s.service") % (
                instance_name
            )
        )

        sys.exit(1)

    log.info(_("Starting directory instance %s before the Kerberos services") % (instance_name))

    if not instance.set_ds389_dep(instance_name):
        log.error(
            _("Failed to order dirsrv@%s.service before the Kerberos services. Log output may be found in %s") % (
                instance_name,
                log.logfile
            )
        )

        sys.exit(1)
