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

import traceback

import ldap

import pyds389

from pyds389.translate import _

log = pyds389.getLogger('pyds389.ldap_client')

# Results that mean the change is in place already.
ALREADY_APPLIED = (ldap.ALREADY_EXISTS, ldap.TYPE_OR_VALUE_EXISTS)


class LDAPClient(object):
    """
        A connection to one directory server, bound as one user, used to
        submit change records.

        A change record is a tuple (dn, changetype, changes), where changetype
        is either 'modify' or 'add', and changes the corresponding python-ldap
        modlist.
    """

    def __init__(self, uri, bind_dn, bind_pw):
        self.uri = uri
        self.bind_dn = bind_dn
        self.bind_pw = bind_pw

        self.ldap = None

    def connect(self):
        if self.ldap is not None:
            return

        log.debug(_("Connecting to LDAP server %s") % (self.uri), level=8)

        self.ldap = ldap.initialize(self.uri)
        self.ldap.protocol_version = 3

        # Changes to cn=config are not to be chased.
        self.ldap.set_option(ldap.OPT_REFERRALS, 0)

    def disconnect(self):
        if self.ldap is None:
            return

        try:
            self.ldap.unbind_s()
        except ldap.LDAPError:
            pass

        self.ldap = None

    def bind(self):
        log.debug(
            _("Binding with bind_dn: %s and password: %s") % (
                self.bind_dn,
                '*' * len(self.bind_pw)
            ),
            level=8
        )

        try:
            self.connect()

            # Must be synchronous
            self.ldap.simple_bind_s(self.bind_dn, self.bind_pw)
            return (_("Bound to %s as %s") % (self.uri, self.bind_dn), True)

        except ldap.SERVER_DOWN as errmsg:
            log.error(_("LDAP server unavailable: %r") % (errmsg))
            log.debug(traceback.format_exc(), level=8)
            return (_("LDAP server %s unavailable: %s") % (self.uri, errmsg), False)

        except (ldap.INVALID_CREDENTIALS, ldap.NO_SUCH_OBJECT):
            log.error(_("Invalid DN, username and/or password for '%s'.") % (self.bind_dn))
            return (
                _("Invalid DN, username and/or password for '%s'.") % (self.bind_dn),
                False
            )

        except ldap.LDAPError as errmsg:
            log.error(_("Could not bind to %s: %s") % (self.uri, _describe(errmsg)))
            log.debug(traceback.format_exc(), level=8)
            return (_("Could not bind to %s: %s") % (self.uri, _describe(errmsg)), False)

    def modify(self, changes, continue_on_error=False):
        """
            Apply the change records in order.

            Returns a tuple of the transcript of what happened, and whether
            the changes are in place.

            Without continue_on_error, the first change that fails stops
            processing. With it, every change is attempted, and changes that
            turn out to be in place already do not count as failures.
        """
        (out, ok) = self.bind()
        output = [out]

        if not ok:
            self.disconnect()
            return ('\n'.join(output), False)

        success = True

        for (dn, changetype, modlist) in changes:
            try:
                if changetype == 'add':
                    self.ldap.add_s(dn, modlist)
                    output.append(_("adding new entry \"%s\"") % (dn))
                elif changetype == 'modify':
                    self.ldap.modify_s(dn, modlist)
                    output.append(_("modifying entry \"%s\"") % (dn))
                else:
                    raise ValueError(_("Invalid changetype: %r") % (changetype))

            except ALREADY_APPLIED as errmsg:
                output.append(_("%s \"%s\": %s") % (changetype, dn, _describe(errmsg)))

                if continue_on_error:
                    log.warning(_("Change to %s already applied") % (dn))
                    continue

                success = False
                break

            except ldap.LDAPError as errmsg:
                output.append(_("%s \"%s\": %s") % (changetype, dn, _describe(errmsg)))
                log.error(_("Failed to %s %s: %s") % (changetype, dn, _describe(errmsg)))

                success = False

                if not continue_on_error:
                    break

        self.disconnect()

        return ('\n'.join(output), success)


def _describe(errmsg):
    """
        The description python-ldap attaches to its exceptions.
    """
    if errmsg.args and isinstance(errmsg.args[0], dict):
        info = errmsg.args[0]
        if 'info' in info and info['info']:
            return "%s (%s)" % (info.get('desc', ''), info['info'])

        return info.get('desc', repr(errmsg))

    return repr(errmsg)
