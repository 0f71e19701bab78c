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

from pyds389.setup import components

import pyds389

from pyds389 import instance
from pyds389 import utils
from pyds389.errors import SetupError
from pyds389.errors import ValidationError
from pyds389.ldap_client import LDAPClient
from pyds389.translate import _

log = pyds389.getLogger('pyds389.setup')
conf = pyds389.getConf()

# The answers the new instance form collects, in the order it asks for them.
FIELDS = [
    'fqdn',
    'instance_name',
    'suffix',
    'dm_dn',
    'dm_pass',
    'dm_pass_repeat',
    'tls_ca',
    'tls_cert',
    'tls_key',
    'key_pass',
]

MANDATORY_FIELDS = [
    'fqdn',
    'instance_name',
    'suffix',
    'dm_dn',
    'dm_pass',
    'tls_ca',
    'tls_cert',
    'tls_key',
]

TLS_FILE_FIELDS = ['tls_ca', 'tls_cert', 'tls_key']


def __init__():
    components.register('dirsrv', execute, description=description())


def cli_options():
    dirsrv_group = conf.add_cli_parser_option_group(_("Directory Instance Options"))

    dirsrv_group.add_option(
        "--fqdn",
        dest="fqdn",
        action="store",
        default=None,
        help=_("Fully qualified host name of the directory server.")
    )

    dirsrv_group.add_option(
        "--instance-name",
        dest="instance_name",
        action="store",
        default=None,
        help=_("Name of the directory server instance.")
    )

    dirsrv_group.add_option(
        "--suffix",
        dest="suffix",
        action="store",
        default=None,
        help=_("Directory suffix, for example dc=example,dc=net.")
    )

    dirsrv_group.add_option(
        "--dm-dn",
        dest="dm_dn",
        action="store",
        default=None,
        help=_("Directory manager DN (no suffix will be appended).")
    )

    dirsrv_group.add_option(
        "--tls-ca",
        dest="tls_ca",
        action="store",
        default=None,
        help=_("Server TLS certificate authority in PEM format.")
    )

    dirsrv_group.add_option(
        "--tls-cert",
        dest="tls_cert",
        action="store",
        default=None,
        help=_("Server TLS certificate in PEM format.")
    )

    dirsrv_group.add_option(
        "--tls-key",
        dest="tls_key",
        action="store",
        default=None,
        help=_("Server TLS certificate key in PEM format.")
    )


def description():
    return _("Create a new directory instance.")


def default_suffix(fqdn):
    """
        The suffix for the domain the host is in.
    """
    return utils.standard_root_dn(fqdn.split('.', 1)[-1])


def default_input():
    """
        Collect the answers known before asking any questions, from the
        configuration file and the command line.
    """
    _input = {}

    for field in FIELDS:
        _input[field] = conf.get('dirsrv', field, '')

        if getattr(conf, field, None) is not None:
            _input[field] = getattr(conf, field)

    if _input['dm_pass_repeat'] == '':
        _input['dm_pass_repeat'] = _input['dm_pass']

    if _input['suffix'] == '' and not _input['fqdn'] == '':
        _input['suffix'] = default_suffix(_input['fqdn'])

    return _input


def ask_input(_input):
    """
        Ask for the details of the new instance, with the previous answers as
        the defaults. Passwords are always asked for again.
    """
    _input = dict(_input)

    print(utils.multiline_message(
        _("""
                Please supply the details of the new directory instance. The
                host name, instance name, suffix, directory manager, and the
                TLS certificate authority, certificate and key are mandatory.
            """)
    ), file=sys.stderr)

    _input['fqdn'] = utils.ask_question(
        _("Fully qualified host name (e.g. dir.example.net)"),
        default=_input['fqdn']
    )

    _input['instance_name'] = utils.ask_question(
        _("Directory server instance name (e.g. MyOrgDirectory)"),
        default=_input['instance_name']
    )

    if _input['suffix'] == '' and not _input['fqdn'] == '':
        _input['suffix'] = default_suffix(_input['fqdn'])

    _input['suffix'] = utils.ask_question(
        _("Directory suffix (e.g. dc=example,dc=net)"),
        default=_input['suffix']
    )

    _input['dm_dn'] = utils.ask_question(
        _("Directory manager DN (e.g. cn=root -> no suffix will be appended)"),
        default=_input['dm_dn']
    )

    _input['dm_pass'] = utils.ask_question(
        _("Directory manager password"),
        password=True
    )

    _input['dm_pass_repeat'] = utils.ask_question(
        _("Repeat directory manager password"),
        password=True
    )

    _input['tls_ca'] = utils.ask_question(
        _("Server TLS certificate authority in PEM format"),
        default=_input['tls_ca']
    )

    _input['tls_cert'] = utils.ask_question(
        _("Server TLS certificate in PEM format"),
        default=_input['tls_cert']
    )

    _input['tls_key'] = utils.ask_question(
        _("Server TLS certificate key in PEM format"),
        default=_input['tls_key']
    )

    _input['key_pass'] = utils.ask_question(
        _("Certificate key password, if key is encrypted"),
        password=True
    )

    return _input


def validate_input(_input):
    """
        Raise a ValidationError describing the first problem with the
        answers, if any.
    """
    for field in MANDATORY_FIELDS:
        if _input.get(field) is None or _input.get(field) == '':
            raise ValidationError(
                _("Please complete setup details. All input fields are mandatory.")
            )

    if not _input.get('dm_pass_repeat') == _input['dm_pass']:
        raise ValidationError(_("The Directory manager password entries do not match."))

    for field in TLS_FILE_FIELDS:
        if not os.path.exists(_input[field]):
            raise ValidationError(
                _("TLS certificate authority or certificate/key file does not exist.")
            )

    if _input['instance_name'] in instance.get_instance_names():
        raise ValidationError(_("The instance name is already used."))


def create_instance(_input):
    """
        Set up, secure and start the new directory instance.

        Stops at the first step that fails, raising a SetupError. The steps
        that completed are not undone.
    """
    setup_log = log.logfile

    if not instance.install_pkgs():
        raise SetupError(
            _("Failed to install the directory server packages! Log output may be found in %s") % (
                setup_log
            )
        )

    # Collect setup parameters into an INI file and feed it into 389 setup script
    try:
        ok = instance.exec_setup(
            instance.gen_setup_ini(
                _input['fqdn'],
                _input['instance_name'],
                _input['suffix'],
                _input['dm_dn'],
                _input['dm_pass']
            ),
            secrets=[_input['dm_pass']]
        )

    finally:
        instance.remove_setup_ini()

    if not ok:
        raise SetupError(
            _("Failed to set up new instance! Log output may be found in %s") % (setup_log)
        )

    # Turn on TLS
    if not instance.install_tls_in_nss(
        _input['instance_name'],
        _input['tls_ca'],
        _input['tls_cert'],
        _input['tls_key'],
        _input['key_pass']
    ):
        raise SetupError(
            _("Failed to set up new instance! Log output may be found in %s") % (setup_log)
        )

    log.info(_("Enabling TLS in directory instance %s") % (_input['instance_name']))
    instance.append_to_log(instance.get_enable_tls_ldif())

    client = LDAPClient('ldap://%s' % (_input['fqdn']), _input['dm_dn'], _input['dm_pass'])
    (out, ok) = client.modify(instance.get_enable_tls_changes(), True)
    instance.append_to_log(out)

    if not ok:
        raise SetupError(
            _("Failed to enable TLS! Log output may be found in %s") % (setup_log)
        )

    if not instance.restart(_input['instance_name']):
        raise SetupError(
            _("Failed to restart directory instance, please inspect the journal of dirsrv@%s.service") % (
                _input['instance_name']
            )
        )

    if not instance.add_ca_cert_to_system(_input['tls_ca']):
        raise SetupError(
            _("Failed to install CA certificate to system database! Log output may be found in %s") % (
                setup_log
            )
        )

    if not instance.write_ldap_conf(_input['fqdn'], _input['suffix']):
        raise SetupError(
            _("Failed to write the LDAP client configuration! Log output may be found in %s") % (
                setup_log
            )
        )

    if not instance.enable(_input['instance_name']):
        raise SetupError(
            _(
                "Failed to enable directory instance, please inspect the journal of "
                "dirsrv@%s.service and dirsrv.target. Log output may be found in %s"
            ) % (
                _input['instance_name'],
                setup_log
            )
        )


def execute(*args, **kw):
    ask_questions = True

    if not conf.config_file == conf.defaults.config_file:
        ask_questions = False

    _input = default_input()

    while True:
        if ask_questions:
            _input = ask_input(_input)

        try:
            validate_input(_input)

            print(
                _("Installing new instance, this may take a minute or two."),
                file=sys.stderr
            )

            create_instance(_input)

        except SetupError as errmsg:
            log.error("%s" % (errmsg))

            # Give the user an opportunity to correct the mistake
            if not ask_questions:
                sys.exit(1)

            if not utils.ask_confirmation(_("Correct the setup details and try again?")):
                sys.exit(1)

            continue

        break

    # Let the components that come after work on the new instance.
    conf.instance_name = _input['instance_name']

    log.info(_("New instance %s has been set up") % (_input['instance_name']))

    print(
        _("New instance has been set up! Log output may be found in %s") % (log.logfile),
        file=sys.stderr
    )
