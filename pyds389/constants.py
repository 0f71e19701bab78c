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

import socket

domain = 'pyds389'

epilog = (
    "pyds389 sets up and hardens new instances of 389 Directory Server."
)

hostname = socket.gethostname()
fqdn = socket.getfqdn()

try:
    domainname = fqdn.split('.', 1)[1]
except IndexError:
    domainname = ''

# Progress and debug log of instance setup.
DS_SETUP_LOG_PATH = '/root/pyds389-dir-setup.log'

# Parameter file for setup-ds.pl. It holds the Directory Manager password,
# so it is kept under /root/ and written with mode 0600.
DS_SETUP_INI_PATH = '/root/pyds389-dir-setup.inf'

DS_CONFIG_DIR = '/etc/dirsrv'
DS_INSTANCE_PREFIX = 'slapd-'
DS_DATA_DIR = '/usr/share/dirsrv/data'

DS_PACKAGES = ['389-ds', 'openldap2-client']

SETUP_DS = '/usr/sbin/setup-ds.pl'
CERTUTIL = '/usr/bin/certutil'
OPENSSL = '/usr/bin/openssl'
PK12UTIL = '/usr/bin/pk12util'
RPM = '/usr/bin/rpm'
SYSTEMCTL = '/usr/bin/systemctl'
UPDATE_CA_CERTIFICATES = '/usr/sbin/update-ca-certificates'
ZYPPER = '/usr/bin/zypper'

SYSTEMD_UNIT_TEMPLATE = '/usr/lib/systemd/system/dirsrv@.service'
SYSTEMD_UNIT_DIR = '/etc/systemd/system'

CA_TRUST_ANCHORS_DIR = '/etc/pki/trust/anchors/'
LDAP_CONF_PATH = '/etc/openldap/ldap.conf'

# Nicknames of the TLS material in the instance NSS database.
NSS_CA_NICKNAME = 'ca_cert'
NSS_SERVER_CERT_NICKNAME = 'Server-Cert'

KRB_SCHEMA_FILE = '60kerberos.ldif'
KRB_DEPENDENT_SERVICES = ['radiusd.service', 'krb5kdc.service', 'kadmind.service']
