# -*- coding: utf-8 -*-

import unittest

from unittest import mock

import pyds389

from pyds389 import package

conf = pyds389.getConf()
conf.finalize_conf(fatal=False)


class TestPackage(unittest.TestCase):

    @mock.patch('pyds389.package.subprocess.call', return_value=0)
    def test_001_installed(self, call):
        self.assertTrue(package.installed('389-ds'))
        self.assertEqual(call.call_args[0][0], ['/usr/bin/rpm', '-q', '389-ds'])

    @mock.patch('pyds389.package.subprocess.call', return_value=1)
    def test_002_not_installed(self, call):
        self.assertFalse(package.installed('389-ds'))

    @mock.patch('pyds389.package.subprocess.Popen')
    @mock.patch('pyds389.package.installed', return_value=True)
    def test_003_install_nothing_missing(self, installed, popen):
        self.assertTrue(package.install(['389-ds', 'openldap2-client']))
        popen.assert_not_called()

    @mock.patch('pyds389.package.subprocess.Popen')
    @mock.patch('pyds389.package.installed', side_effect=lambda name: name == '389-ds')
    def test_004_install_missing(self, installed, popen):
        popen.return_value.communicate.return_value = ('done', None)
        popen.return_value.returncode = 0

        self.assertTrue(package.install(['389-ds', 'openldap2-client']))
        self.assertEqual(
            popen.call_args[0][0],
            ['/usr/bin/zypper', '--non-interactive', 'install', 'openldap2-client']
        )

    @mock.patch('pyds389.package.subprocess.Popen')
    @mock.patch('pyds389.package.installed', return_value=False)
    def test_005_install_fails(self, installed, popen):
        popen.return_value.communicate.return_value = ('no repositories', None)
        popen.return_value.returncode = 4

        self.assertFalse(package.install(['389-ds']))

    @mock.patch('pyds389.constants.RPM', '/nonexistent/rpm')
    def test_006_rpm_missing(self):
        self.assertFalse(package.installed('389-ds'))

    @mock.patch('pyds389.constants.ZYPPER', '/nonexistent/zypper')
    @mock.patch('pyds389.constants.RPM', '/nonexistent/rpm')
    def test_007_installer_missing(self):
        self.assertFalse(package.install(['389-ds']))


if __name__ == '__main__':
    unittest.main()
