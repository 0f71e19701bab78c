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

"""
    Utility functions for setting up a new instance of 389 Directory Server.

    Each function wraps one external program or one file operation, and
    reports success as a boolean. The output of the external programs goes
    to the setup log.
"""

import glob
import io
import os
import re
import shutil
import subprocess

import ldap
import ldif

from Cheetah.Template import Template

import pyds389

from pyds389 import constants
from pyds389 import package
from pyds389 import utils
from pyds389.translate import _

log = pyds389.getLogger('pyds389.instance')
conf = pyds389.getConf()

SETUP_INI_TEMPLATE = """[General]
FullMachineName=${fqdn}
SuiteSpotUserID=dirsrv
SuiteSpotGroup=dirsrv

[slapd]
ServerPort=389
ServerIdentifier=${instance_name}
Suffix=${suffix}
RootDN=${dm_dn}
RootDNPwd=${dm_pass}
AddSampleEntries=No
"""

LDAP_CONF_TEMPLATE = """URI ldaps://${fqdn}
base ${suffix}"""


def install_pkgs():
    """
        Install the software packages needed to set up 389 Directory Server.
    """
    return package.install(conf.get_list('ds389', 'packages'))


def get_instance_names():
    """
        Return the names of the directory instances already present on the
        system.
    """
    pattern = os.path.join(
        conf.get('ds389', 'config_dir'),
        '%s*' % (constants.DS_INSTANCE_PREFIX)
    )

    return sorted(
        [
            os.path.basename(path)[len(constants.DS_INSTANCE_PREFIX):]
            for path in glob.glob(pattern)
        ]
    )


def instance_dir(instance_name):
    return os.path.join(
        conf.get('ds389', 'config_dir'),
        '%s%s' % (constants.DS_INSTANCE_PREFIX, instance_name)
    )


def unit_path(instance_name):
    return os.path.join(
        conf.get('ds389', 'systemd_unit_dir'),
        'dirsrv@%s.service' % (instance_name)
    )


def gen_setup_ini(fqdn, instance_name, suffix, dm_dn, dm_pass):
    """
        Generate the content of the parameter file for setup-ds.pl.
    """
    settings = {
        'fqdn': fqdn,
        'instance_name': instance_name,
        'suffix': suffix,
        'dm_dn': dm_dn,
        'dm_pass': dm_pass,
    }

    return str(Template(SETUP_INI_TEMPLATE, searchList=[settings]))


def exec_setup(content, secrets=()):
    """
        Run setup-ds.pl on a parameter file with the content.

        Returns True only if setup was successful.
    """
    setup_ini = conf.get('ds389', 'setup_ini')

    log.debug(_("Writing setup parameters to %s") % (setup_ini), level=8)

    try:
        fd = os.open(setup_ini, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w') as fp:
            fp.write(content)
    except (IOError, OSError) as errmsg:
        log.error(_("Could not write %s: %s") % (setup_ini, errmsg))
        return False

    log.info(_("Setting up 389 Directory Server"))

    return _execute(
        [constants.SETUP_DS, '--debug', '--silent', '-f', setup_ini],
        secrets=secrets
    )


def remove_setup_ini():
    setup_ini = conf.get('ds389', 'setup_ini')

    if os.path.exists(setup_ini):
        os.unlink(setup_ini)


def append_to_log(content):
    """
        Append the content to the setup log. The logger puts a time stamp in
        front of it.
    """
    if content is None or content.strip() == '':
        return

    log.info(content.rstrip())


def enable_krb_schema(instance_name):
    """
        Enable the kerberos schema in the directory instance, then restart
        the directory instance.

        Returns True only if the instance restarted successfully.
    """
    schema_file = os.path.join(conf.get('ds389', 'data_dir'), constants.KRB_SCHEMA_FILE)

    try:
        shutil.copy(
            schema_file,
            os.path.join(instance_dir(instance_name), 'schema', constants.KRB_SCHEMA_FILE)
        )
    except (IOError, OSError) as errmsg:
        log.error(_("Could not install the kerberos schema: %s") % (errmsg))
        return False

    return restart(instance_name)


def set_ds389_dep(instance_name):
    """
        Make sure the directory instance starts before the services that
        store their data in it.
    """
    if not _set_unit_option(
        unit_path(instance_name),
        'Before',
        ' '.join(conf.get_list('ds389', 'krb_dependent_services'))
    ):
        return False

    return _systemctl('--system', 'daemon-reload')


def restart(instance_name):
    return _systemctl('restart', 'dirsrv@%s' % (instance_name))


def enable(instance_name):
    """
        Register the system service for the directory instance, make it start
        on boot, and start it.
    """
    try:
        shutil.copy(conf.get('ds389', 'systemd_unit_template'), unit_path(instance_name))
    except (IOError, OSError) as errmsg:
        log.error(_("Could not create the service unit for %s: %s") % (instance_name, errmsg))
        return False

    if not _set_unit_option(
        unit_path(instance_name),
        'WantedBy',
        'multi-user.target dirsrv.target'
    ):
        return False

    if not _systemctl('--system', 'daemon-reload'):
        return False

    if not _systemctl('enable', 'dirsrv@%s.service' % (instance_name)):
        return False

    if not _systemctl('enable', 'dirsrv.target'):
        return False

    return _systemctl('start', 'dirsrv.target')


def install_tls_in_nss(instance_name, ca_path, cert_path, key_path, key_pass):
    """
        Import the CA certificate, and the server certificate and key, into
        the NSS database of the directory instance.
    """
    nss_dir = instance_dir(instance_name)
    pk12_path = os.path.join(nss_dir, 'servercert.pk12')

    if not _execute(
        [
            constants.CERTUTIL,
            '-A',
            '-d', nss_dir,
            '-n', constants.NSS_CA_NICKNAME,
            '-t', 'C,,',
            '-i', ca_path
        ]
    ):
        return False

    try:
        if not _execute(
            [
                constants.OPENSSL, 'pkcs12', '-export',
                '-in', cert_path,
                '-inkey', key_path,
                '-name', constants.NSS_SERVER_CERT_NICKNAME,
                '-out', pk12_path,
                '-passin', 'pass:%s' % (key_pass),
                '-passout', 'pass:%s' % (key_pass)
            ],
            secrets=[key_pass]
        ):
            return False

        return _execute(
            [constants.PK12UTIL, '-d', nss_dir, '-W', key_pass, '-K', '', '-i', pk12_path],
            secrets=[key_pass]
        )

    finally:
        if os.path.exists(pk12_path):
            os.unlink(pk12_path)


def add_ca_cert_to_system(ca_path):
    """
        Add the CA certificate to the certificates the system trusts.
    """
    try:
        shutil.copy(ca_path, conf.get('ds389', 'trust_anchors_dir'))
    except (IOError, OSError) as errmsg:
        log.error(_("Could not copy %s to the trust anchors: %s") % (ca_path, errmsg))
        append_to_log("%s" % (errmsg))
        return False

    return _execute([constants.UPDATE_CA_CERTIFICATES])


def gen_ldap_conf(fqdn, suffix):
    settings = {
        'fqdn': fqdn,
        'suffix': suffix,
    }

    return str(Template(LDAP_CONF_TEMPLATE, searchList=[settings]))


def write_ldap_conf(fqdn, suffix):
    """
        Point the system wide LDAP client configuration to the instance.
    """
    ldap_conf = conf.get('ds389', 'ldap_conf')

    try:
        with open(ldap_conf, 'w') as fp:
            fp.write("%s\n" % (gen_ldap_conf(fqdn, suffix)))
    except (IOError, OSError) as errmsg:
        log.error(_("Could not write %s: %s") % (ldap_conf, errmsg))
        return False

    return True


def get_enable_tls_changes():
    """
        The change records that turn on TLS in a directory instance, using
        the server certificate imported by install_tls_in_nss().
    """
    return [
        (
            'cn=encryption,cn=config',
            'modify',
            [
                (ldap.MOD_REPLACE, 'nsSSL3', [b'off']),
                (ldap.MOD_REPLACE, 'nsSSLClientAuth', [b'allowed']),
                (ldap.MOD_ADD, 'nsSSL3Ciphers', [b'+all']),
            ]
        ),
        (
            'cn=config',
            'modify',
            [
                (ldap.MOD_ADD, 'nsslapd-security', [b'on']),
                (ldap.MOD_REPLACE, 'nsslapd-ssl-check-hostname', [b'off']),
            ]
        ),
        (
            'cn=RSA,cn=encryption,cn=config',
            'add',
            [
                ('objectclass', [b'top', b'nsEncryptionModule']),
                ('cn', [b'RSA']),
                ('nsSSLPersonalitySSL', [constants.NSS_SERVER_CERT_NICKNAME.encode('utf-8')]),
                ('nsSSLToken', [b'internal (software)']),
                ('nsSSLActivation', [b'on']),
            ]
        ),
    ]


def get_enable_tls_ldif():
    """
        The LDIF representation of get_enable_tls_changes().
    """
    output = io.StringIO()
    writer = ldif.LDIFWriter(output, cols=1024, line_sep='\n')

    for (dn, _changetype, modlist) in get_enable_tls_changes():
        writer.unparse(dn, modlist)

    return output.getvalue()


def _execute(command, secrets=()):
    """
        Run the command, wait for it to finish and put its output in the
        setup log.

        Returns True only if the command exited with status 0.
    """
    printable = utils.mask_command(command, secrets)

    log.debug(_("Executing '%s'") % (printable), level=8)

    try:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            universal_newlines=True
        )

    except OSError as errmsg:
        log.error(_("Could not execute '%s': %s") % (printable, errmsg))
        return False

    (stdoutdata, _stderrdata) = process.communicate()

    append_to_log(utils.mask(stdoutdata or '', secrets))

    if not process.returncode == 0:
        log.error(_("Command '%s' exited with %d") % (printable, process.returncode))
        return False

    return True


def _systemctl(*args):
    return _execute([constants.SYSTEMCTL] + list(args))


def _set_unit_option(path, option, value):
    """
        Replace the value of every line setting the option in the systemd
        unit file.
    """
    try:
        with open(path, 'r') as fp:
            content = fp.read()

        content = re.sub(
            r'^%s=.*$' % (re.escape(option)),
            lambda match: '%s=%s' % (option, value),
            content,
            flags=re.MULTILINE
        )

        with open(path, 'w') as fp:
            fp.write(content)

    except (IOError, OSError) as errmsg:
        log.error(_("Could not set %s in %s: %s") % (option, path, errmsg))
        return False

    log.debug(_("Set %s=%s in %s") % (option, value, path), level=8)

    return True
