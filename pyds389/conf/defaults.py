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

from pyds389 import constants


class Defaults(object):
    def __init__(self):
        self.loglevel = logging.WARNING

        self.config_file = '/etc/ds389/ds389.conf'

        # Paths and names used while setting up an instance. Each of these
        # may be overridden in the [ds389] section of the configuration file.
        self.ds389 = {
            'setup_ini': constants.DS_SETUP_INI_PATH,
            'config_dir': constants.DS_CONFIG_DIR,
            'data_dir': constants.DS_DATA_DIR,
            'packages': list(constants.DS_PACKAGES),
            'systemd_unit_template': constants.SYSTEMD_UNIT_TEMPLATE,
            'systemd_unit_dir': constants.SYSTEMD_UNIT_DIR,
            'trust_anchors_dir': constants.CA_TRUST_ANCHORS_DIR,
            'ldap_conf': constants.LDAP_CONF_PATH,
            'krb_dependent_services': list(constants.KRB_DEPENDENT_SERVICES),
        }

        # Answers to the new instance form, for unattended setups.
        self.dirsrv = {
            'fqdn': constants.fqdn,
            'instance_name': '',
            'suffix': '',
            'dm_dn': 'cn=root',
            'dm_pass': '',
            'tls_ca': '',
            'tls_cert': '',
            'tls_key': '',
            'key_pass': '',
        }
