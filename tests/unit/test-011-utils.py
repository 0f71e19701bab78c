# -*- coding: utf-8 -*-

import unittest

from unittest import mock

import pyds389

from pyds389 import utils

conf = pyds389.getConf()
conf.finalize_conf(fatal=False)


class TestUtils(unittest.TestCase):

    def test_001_standard_root_dn(self):
        self.assertEqual(utils.standard_root_dn('example.org'), 'dc=example,dc=org')
        self.assertEqual(utils.standard_root_dn('dev.example.org'), 'dc=dev,dc=example,dc=org')

    def test_002_mask(self):
        self.assertEqual(
            utils.mask('-passin pass:secret', ['secret', '']),
            '-passin pass:********'
        )

    def test_003_mask_nothing(self):
        self.assertEqual(utils.mask('nothing to hide', ['', None]), 'nothing to hide')

    def test_004_mask_command(self):
        self.assertEqual(
            utils.mask_command(['pk12util', '-W', 'secret', '-K', ''], ['secret']),
            'pk12util -W ******** -K '
        )

    def test_005_multiline_message(self):
        message = utils.multiline_message(
            """
                This is a message
                spread across lines.
            """
        )

        self.assertEqual(message, "\nThis is a message spread across lines.\n")

    def test_006_multiline_message_wraps(self):
        message = utils.multiline_message(' '.join(['word'] * 40))

        for line in message.strip().split('\n'):
            self.assertTrue(len(line) <= 80)

    @mock.patch('builtins.input', return_value='')
    def test_007_ask_question_default(self, _input):
        self.assertEqual(utils.ask_question("Instance name", default="ds"), "ds")
        _input.assert_called_once_with("Instance name [ds]: ")

    @mock.patch('builtins.input', return_value='other')
    def test_008_ask_question_answer(self, _input):
        self.assertEqual(utils.ask_question("Instance name", default="ds"), "other")

    @mock.patch('getpass.getpass', return_value='secret')
    def test_009_ask_question_password(self, _getpass):
        self.assertEqual(utils.ask_question("Password", password=True), "secret")
        _getpass.assert_called_once_with("Password: ")

    @mock.patch('builtins.input', side_effect=['maybe', 'n'])
    def test_010_ask_confirmation(self, _input):
        self.assertFalse(utils.ask_confirmation("Try again?"))
        self.assertEqual(_input.call_count, 2)

    @mock.patch('builtins.input', return_value='')
    def test_011_ask_confirmation_default(self, _input):
        self.assertTrue(utils.ask_confirmation("Try again?"))

    def test_012_ask_confirmation_answer_yes(self):
        with mock.patch.object(conf.cli_keywords, 'answer_yes', True):
            with mock.patch.object(conf.cli_keywords, 'quiet', True):
                self.assertTrue(utils.ask_confirmation("Try again?", default="n"))


if __name__ == '__main__':
    unittest.main()
