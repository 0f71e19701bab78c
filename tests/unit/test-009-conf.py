# -*- coding: utf-8 -*-

import os
import pyds389
import tempfile
import unittest

conf = pyds389.getConf()
conf.finalize_conf(fatal=False)


class TestConf(unittest.TestCase):
    config_file = None

    @classmethod
    def setUpClass(self, *args, **kw):
        (fp, self.config_file) = tempfile.mkstemp()
        os.write(fp, b'[ds389]\n')
        os.write(fp, b'config_dir = /srv/dirsrv\n')
        os.write(fp, b'packages = 389-ds, openldap2-client sssd\n')
        os.write(fp, b'\n[dirsrv]\n')
        os.write(fp, b'dm_pass = $%something\n')
        os.close(fp)
        conf.read_config(self.config_file)

    @classmethod
    def tearDownClass(self, *args, **kw):
        conf.read_config(conf.defaults.config_file)
        os.remove(self.config_file)

    def test_001_get(self):
        self.assertEqual(conf.get('ds389', 'config_dir'), '/srv/dirsrv')

    def test_002_get_from_defaults(self):
        self.assertEqual(conf.get('ds389', 'ldap_conf'), '/etc/openldap/ldap.conf')

    def test_003_get_unknown(self):
        self.assertEqual(conf.get('ds389', 'no_such_option', 'fallback'), 'fallback')

    def test_004_get_without_interpolation(self):
        self.assertEqual(conf.get('dirsrv', 'dm_pass'), '$%something')

    def test_005_get_list(self):
        self.assertEqual(
            conf.get_list('ds389', 'packages'),
            ['389-ds', 'openldap2-client', 'sssd']
        )

    def test_006_get_list_from_defaults(self):
        self.assertEqual(
            conf.get_list('ds389', 'krb_dependent_services'),
            ['radiusd.service', 'krb5kdc.service', 'kadmind.service']
        )

    def test_007_has_option(self):
        self.assertTrue(conf.has_section('dirsrv'))
        self.assertTrue(conf.has_option('dirsrv', 'dm_pass'))
        self.assertFalse(conf.has_option('dirsrv', 'tls_ca'))

    def test_008_load_config(self):
        config = conf.check_config(self.config_file)
        conf.load_config(config)

        self.assertEqual(conf.ds389_config_dir, '/srv/dirsrv')
        self.assertEqual(conf.ds389_packages, ['389-ds', 'openldap2-client', 'sssd'])

    def test_009_cli_defaults(self):
        self.assertEqual(conf.cli_keywords.debuglevel, 0)
        self.assertFalse(conf.cli_keywords.answer_yes)
        self.assertEqual(conf.cli_keywords.logfile, '/root/pyds389-dir-setup.log')


if __name__ == '__main__':
    unittest.main()
