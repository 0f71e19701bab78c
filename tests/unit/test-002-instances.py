# -*- coding: utf-8 -*-

import os
import shutil
import tempfile
import unittest

import pyds389

from pyds389 import instance

conf = pyds389.getConf()
conf.finalize_conf(fatal=False)


class TestInstanceNames(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.config_dir = os.path.join(self.tmpdir, 'dirsrv')
        os.mkdir(self.config_dir)

        self.config_file = os.path.join(self.tmpdir, 'ds389.conf')
        with open(self.config_file, 'w') as fp:
            fp.write("[ds389]\n")
            fp.write("config_dir = %s\n" % (self.config_dir))
            fp.write("systemd_unit_dir = %s\n" % (self.tmpdir))

        conf.read_config(self.config_file)

    def tearDown(self):
        conf.read_config(conf.defaults.config_file)
        shutil.rmtree(self.tmpdir)

    def test_001_no_instances(self):
        self.assertEqual(instance.get_instance_names(), [])

    def test_002_instances(self):
        os.mkdir(os.path.join(self.config_dir, 'slapd-MyOrgDirectory'))
        os.mkdir(os.path.join(self.config_dir, 'slapd-other'))
        os.mkdir(os.path.join(self.config_dir, 'schema'))

        self.assertEqual(instance.get_instance_names(), ['MyOrgDirectory', 'other'])

    def test_003_instance_dir(self):
        self.assertEqual(
            instance.instance_dir('MyOrgDirectory'),
            os.path.join(self.config_dir, 'slapd-MyOrgDirectory')
        )

    def test_004_unit_path(self):
        self.assertEqual(
            instance.unit_path('MyOrgDirectory'),
            os.path.join(self.tmpdir, 'dirsrv@MyOrgDirectory.service')
        )


if __name__ == '__main__':
    unittest.main()
