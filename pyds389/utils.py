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

import getpass
import sys

import pyds389
from pyds389.translate import _

# pylint: disable=invalid-name
log = pyds389.getLogger('pyds389.utils')
conf = pyds389.getConf()


# pylint: disable=too-many-branches
def ask_question(question, default="", password=False, confirm=False):
    """
        Ask a question on stderr.

        Since the answer to the question may actually be a password, cover that
        case with a getpass.getpass() prompt.

        Accepts a default value, but ignores defaults for password prompts.

        Usage: pyds389.utils.ask_question("What is the server?", default="localhost")
    """
    if default != "" and default is not None and conf.cli_keywords.answer_default:
        if not conf.cli_keywords.quiet:
            print("%s [%s]: " % (question, default))
        return default

    if password:
        if default == "" or default is None:
            answer = getpass.getpass("%s: " % (question))
        else:
            answer = getpass.getpass("%s [%s]: " % (question, default))
    else:
        if default == "" or default is None:
            answer = input("%s: " % (question))
        else:
            answer = input("%s [%s]: " % (question, default))

    # pylint: disable=too-many-nested-blocks
    if not answer == "":
        if confirm:
            answer_confirmed = False
            while not answer_confirmed:
                if password:
                    answer_confirm = getpass.getpass(_("Confirm %s: ") % (question))
                else:
                    answer_confirm = input(_("Confirm %s: ") % (question))

                if not answer_confirm == answer:
                    print(_("Incorrect confirmation. Please try again."), file=sys.stderr)

                    if password:
                        answer = getpass.getpass("%s: " % (question))
                    else:
                        answer = input("%s: " % (question))

                else:
                    answer_confirmed = True

    if answer == "":
        return default

    return answer


# pylint: disable=too-many-return-statements
def ask_confirmation(question, default="y", all_inclusive_no=True):
    """
        Create a confirmation dialog, including a default option (capitalized),
        and a "yes" or "no" parsing that can either require an explicit, full
        "yes" or "no", or take the default or any YyNn answer.
    """
    default_answer = None

    if default in ["y", "Y"]:
        default_answer = True
        default_no = "n"
        default_yes = "Y"
    elif default in ["n", "N"]:
        default_answer = False
        default_no = "N"
        default_yes = "y"
    else:
        # This is a 'yes' or 'no' question the user
        # needs to provide the full yes or no for.
        default_no = "'no'"
        default_yes = "Please type 'yes'"

    if conf.cli_keywords.answer_yes \
            or (conf.cli_keywords.answer_default and default_answer is not None):

        if not conf.cli_keywords.quiet:
            print("%s [%s/%s]: " % (question, default_yes, default_no))
        if conf.cli_keywords.answer_yes:
            return True
        if conf.cli_keywords.answer_default:
            return default_answer

    answer = False
    while not answer:
        answer = input("%s [%s/%s]: " % (question, default_yes, default_no))
        # Parse answer and set back to False if not appropriate
        if all_inclusive_no:
            if answer == "" and default_answer is not None:
                return default_answer

            if answer in ["y", "Y", "yes"]:
                return True

            if answer in ["n", "N", "no"]:
                return False

            answer = False
            print(_("Please answer 'yes' or 'no'."), file=sys.stderr)

        if answer not in ["y", "Y", "yes"]:
            return False

        return True


def mask(text, secrets):
    """
        Replace each of the secrets in text by asterisks.
    """
    for secret in secrets:
        if secret:
            text = text.replace(secret, '*' * 8)

    return text


def mask_command(command, secrets):
    """
        Return a printable version of command, a list of arguments, with
        the secrets masked.
    """
    return ' '.join([mask(arg, secrets) for arg in command])


def multiline_message(message):
    if conf.cli_keywords is not None and conf.cli_keywords.quiet:
        return ""

    column_width = 80

    # First, replace all occurences of "\n"
    message = message.replace("    ", "")
    message = message.replace("\n", " ")

    lines = []
    line = ""
    for word in message.split():
        if (len(line) + len(word)) > column_width:
            lines.append(line)
            line = word
        else:
            if line == "":
                line = word
            else:
                line += " %s" % (word)

    lines.append(line)

    return "\n%s\n" % ("\n".join(lines))


def standard_root_dn(domain):
    return 'dc=%s' % (',dc='.join(domain.split('.')))
