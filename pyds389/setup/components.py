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

import importlib
import os
import sys

import pyds389

from pyds389.translate import _

log = pyds389.getLogger('pyds389.setup')
conf = pyds389.getConf()

components = {}
executed_components = []

components_included_in_cli = []


def __init__():
    # We only want the base path
    components_base_path = os.path.dirname(__file__)

    for filename in sorted(os.listdir(components_base_path)):
        if filename.startswith('setup_') and filename.endswith('.py'):
            module_name = filename.replace('.py', '')
            module = importlib.import_module('pyds389.setup.%s' % (module_name))
            module.__init__()

    register('help', list_components, description=_("Display this help."))


def list_components(*args, **kw):
    """
        List components
    """

    for component in _list_components():
        if components[component]['description'] is not None:
            print(
                "%-25s - %s" % (
                    component.replace('_', '-'),
                    components[component]['description']
                )
            )
        else:
            print("%-25s" % (component.replace('_', '-')))


def _list_components(*args, **kw):
    """
        List components and return API compatible, parseable lists.
    """

    return sorted(components.keys())


def cli_options_from_component(component_name, *args, **kw):
    if component_name in components_included_in_cli:
        return

    try:
        module = importlib.import_module('pyds389.setup.setup_%s' % (component_name))
    except ImportError:
        module = None

    if module is not None and hasattr(module, 'cli_options'):
        module.cli_options()

    components_included_in_cli.append(component_name)


def execute(component_name, *args, **kw):
    if component_name == '':

        log.debug(
            _("No component selected, continuing for all components"),
            level=8
        )

        for component in _list_components():
            cli_options_from_component(component)

        conf.finalize_conf()

        while 1:
            executed_any = False

            for component in _list_components():
                if component in executed_components or component == "help":
                    continue

                execute_this = True

                for _component in components[component]['after']:
                    if _component not in executed_components:
                        execute_this = False

                if execute_this:
                    components[component]['function'](conf.cli_args, kw)
                    executed_components.append(component)
                    executed_any = True

            executed_all = True
            for component in _list_components():
                if component not in executed_components and not component == "help":
                    executed_all = False

            if executed_all:
                break

            if not executed_any:
                log.error(_("Unable to resolve the order of components."))
                sys.exit(1)

        return

    for component in _list_components():
        cli_options_from_component(component)

    if component_name not in components:
        log.error(_("No such component."))
        sys.exit(1)

    conf.finalize_conf()

    # Drop the component name from the arguments.
    if len(conf.cli_args) >= 1 and conf.cli_args[0].replace('-', '_') == component_name:
        conf.cli_args.pop(0)

    components[component_name]['function'](conf.cli_args, kw)


def register(component_name, func, description=None, after=[]):
    if component_name in components:
        log.fatal(_("Component '%s' already registered") % (component_name))
        sys.exit(1)

    if callable(func):
        components[component_name] = {
            'function': func,
            'description': description,
            'after': after,
        }
