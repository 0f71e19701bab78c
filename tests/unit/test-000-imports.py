import unittest


class TestImports(unittest.TestCase):
    def test_pyds389(self):
        import pyds389

    def test_pyds389_conf(self):
        from pyds389.conf import Conf

    def test_pyds389_instance(self):
        import pyds389.instance

    def test_pyds389_ldap_client(self):
        from pyds389.ldap_client import LDAPClient

    def test_pyds389_setup(self):
        from pyds389.setup import Setup

    def test_pyds389_setup_dirsrv(self):
        import pyds389.setup.setup_dirsrv

    def test_pyds389_setup_kerberos(self):
        import pyds389.setup.setup_kerberos


if __name__ == '__main__':
    unittest.main()
