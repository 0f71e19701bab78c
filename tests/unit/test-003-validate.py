# -*- coding: utf-8 -*-

import os
import shutil
import tempfile
import unittest

from unittest import mock

import pyds389

from pyds389.errors import ValidationError
from pyds389.setup import setup_dirsrv

conf = pyds389.getConf()
conf.finalize_conf(fatal=False)


class TestValidateInput(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

        self._input = {
            'fqdn': 'dir.example.net',
            'instance_name': 'MyOrgDirectory',
            'suffix': 'dc=example,dc=net',
            'dm_dn': 'cn=root',
            'dm_pass': 'secret',
            'dm_pass_repeat': 'secret',
            'tls_ca': os.path.join(self.tmpdir, 'ca.pem'),
            'tls_cert': os.path.join(self.tmpdir, 'cert.pem'),
            'tls_key': os.path.join(self.tmpdir, 'key.pem'),
            'key_pass': '',
        }

        for field in ['tls_ca', 'tls_cert', 'tls_key']:
            with open(self._input[field], 'w') as fp:
                fp.write("-----BEGIN CERTIFICATE-----\n")

        patcher = mock.patch(
            'pyds389.instance.get_instance_names',
            return_value=['existing']
        )

        self.get_instance_names = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def assertValidationError(self, message):
        with self.assertRaises(ValidationError) as context:
            setup_dirsrv.validate_input(self._input)

        self.assertEqual(str(context.exception), message)

    def test_001_valid(self):
        setup_dirsrv.validate_input(self._input)

    def test_002_key_pass_optional(self):
        self._input['key_pass'] = ''
        setup_dirsrv.validate_input(self._input)

    def test_003_mandatory(self):
        for field in setup_dirsrv.MANDATORY_FIELDS:
            value = self._input[field]
            self._input[field] = ''

            self.assertValidationError(
                "Please complete setup details. All input fields are mandatory."
            )

            self._input[field] = value

    def test_004_password_mismatch(self):
        self._input['dm_pass_repeat'] = 'secrte'
        self.assertValidationError("The Directory manager password entries do not match.")

    def test_005_password_repeat_empty(self):
        self._input['dm_pass_repeat'] = ''
        self.assertValidationError("The Directory manager password entries do not match.")

    def test_006_missing_tls_file(self):
        os.unlink(self._input['tls_key'])
        self.assertValidationError(
            "TLS certificate authority or certificate/key file does not exist."
        )

    def test_007_instance_name_used(self):
        self._input['instance_name'] = 'existing'
        self.assertValidationError("The instance name is already used.")

    def test_008_mandatory_before_mismatch(self):
        self._input['suffix'] = ''
        self._input['dm_pass_repeat'] = 'other'
        self.assertValidationError(
            "Please complete setup details. All input fields are mandatory."
        )

    def test_009_mismatch_before_files(self):
        self._input['dm_pass_repeat'] = 'other'
        os.unlink(self._input['tls_ca'])
        self.assertValidationError("The Directory manager password entries do not match.")

    def test_010_files_before_instance_name(self):
        self._input['instance_name'] = 'existing'
        os.unlink(self._input['tls_cert'])
        self.assertValidationError(
            "TLS certificate authority or certificate/key file does not exist."
        )
        self.assertFalse(self.get_instance_names.called)


class TestDefaults(unittest.TestCase):

    def setUp(self):
        for field in setup_dirsrv.FIELDS:
            patcher = mock.patch.object(conf, field, None, create=True)
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_001_default_suffix(self):
        self.assertEqual(setup_dirsrv.default_suffix('dir.example.net'), 'dc=example,dc=net')

    def test_002_default_suffix_short_name(self):
        self.assertEqual(setup_dirsrv.default_suffix('localhost'), 'dc=localhost')

    def test_003_default_input(self):
        with mock.patch.object(conf, 'get', side_effect=lambda section, key, default=None: {
            'fqdn': 'dir.example.net',
            'dm_dn': 'cn=root',
            'dm_pass': 'secret',
        }.get(key, default)):
            _input = setup_dirsrv.default_input()

        self.assertEqual(_input['fqdn'], 'dir.example.net')
        self.assertEqual(_input['suffix'], 'dc=example,dc=net')
        self.assertEqual(_input['dm_dn'], 'cn=root')
        self.assertEqual(_input['dm_pass_repeat'], 'secret')
        self.assertEqual(_input['instance_name'], '')


if __name__ == '__main__':
    unittest.main()
