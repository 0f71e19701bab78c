# -*- coding: utf-8 -*-

import unittest

from unittest import mock

import pyds389

from pyds389.setup import setup_kerberos

conf = pyds389.getConf()
conf.finalize_conf(fatal=False)


class TestKerberos(unittest.TestCase):

    def setUp(self):
        patchers = [
            mock.patch(
                'pyds389.instance.get_instance_names',
                return_value=['MyOrgDirectory']
            ),
            mock.patch('pyds389.instance.enable_krb_schema', return_value=True),
            mock.patch('pyds389.instance.set_ds389_dep', return_value=True),
        ]

        (self.names, self.schema, self.dep) = [p.start() for p in patchers]

        for patcher in patchers:
            self.addCleanup(patcher.stop)

    def test_001_instance_from_dirsrv(self):
        with mock.patch.object(conf, 'instance_name', 'MyOrgDirectory', create=True):
            setup_kerberos.execute([], {})

        self.schema.assert_called_once_with('MyOrgDirectory')
        self.dep.assert_called_once_with('MyOrgDirectory')

    def test_002_ask_for_instance(self):
        with mock.patch.object(conf, 'instance_name', None, create=True):
            with mock.patch('builtins.input', return_value='') as _input:
                setup_kerberos.execute([], {})

        _input.assert_called_once_with("Directory server instance name [MyOrgDirectory]: ")
        self.schema.assert_called_once_with('MyOrgDirectory')

    def test_003_no_such_instance(self):
        with mock.patch.object(conf, 'instance_name', 'Other', create=True):
            with self.assertRaises(SystemExit):
                setup_kerberos.execute([], {})

        self.schema.assert_not_called()

    def test_004_schema_fails(self):
        self.schema.return_value = False

        with mock.patch.object(conf, 'instance_name', 'MyOrgDirectory', create=True):
            with self.assertRaises(SystemExit):
                setup_kerberos.execute([], {})

        self.dep.assert_not_called()

    def test_005_dependency_fails(self):
        self.dep.return_value = False

        with mock.patch.object(conf, 'instance_name', 'MyOrgDirectory', create=True):
            with self.assertRaises(SystemExit):
                setup_kerberos.execute([], {})


if __name__ == '__main__':
    unittest.main()
