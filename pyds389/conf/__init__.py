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

from configparser import ConfigParser
from optparse import OptionParser

import pyds389

from pyds389.conf.defaults import Defaults

from pyds389.constants import DS_SETUP_LOG_PATH
from pyds389.constants import epilog
from pyds389.translate import _

log = pyds389.getLogger('pyds389.conf')


class Conf(object):
    def __init__(self):
        """
            self.cli_args == Arguments passed on the CLI
            self.cli_keywords == Parser results (again, CLI)
            self.cli_parser == The actual Parser (from OptionParser)
        """

        self.cli_parser = None
        self.cli_args = []
        self.cli_keywords = None

        self.defaults = Defaults()
        self.config_file = self.defaults.config_file

        # The location where our configuration parser is going to end up
        self.cfg_parser = None

        # Create the options
        self.create_options()

    def finalize_conf(self, fatal=True):
        self.parse_options(fatal=fatal)

        # The defaults can come from;
        # - a file we ship with the packages
        # - a customly supplied file (by the administrator)
        # - this python class
        self.defaults = Defaults()

        # But, they should be available in our class as well
        for option in self.defaults.__dict__:
            log.debug(
                _("Setting %s to %r (from defaults)") % (
                    option,
                    self.defaults.__dict__[option]
                ),
                level=9
            )

            setattr(self, option, self.defaults.__dict__[option])

        # This is where we check our parser for the defaults being set there.
        self.set_defaults_from_cli_options()

        self.options_set_from_config()

        # Also set the cli options
        if self.cli_keywords is not None:
            for option in self.cli_keywords.__dict__:
                value = self.cli_keywords.__dict__[option]

                check = getattr(self, "check_setting_%s" % (option), None)

                if check is not None:
                    # The warning or error is in the check_setting_%s()
                    # function
                    if not check(value):
                        continue

                    log.debug(
                        _("Setting %s to %r (from CLI, verified)") % (option, value),
                        level=8
                    )

                else:
                    log.debug(
                        _("Setting %s to %r (from CLI, not checked)") % (option, value),
                        level=8
                    )

                setattr(self, option, value)

    def load_config(self, config):
        """
            Given a ConfigParser instance, loads a configuration
            file and checks, then sets everything it can find.
        """

        for section in self.defaults.__dict__:
            if not isinstance(self.defaults.__dict__[section], dict):
                continue

            if not config.has_section(section):
                continue

            for key in self.defaults.__dict__[section]:
                if not config.has_option(section, key):
                    continue

                default = self.defaults.__dict__[section][key]

                if isinstance(default, bool):
                    value = config.getboolean(section, key)
                elif isinstance(default, int):
                    value = config.getint(section, key)
                elif isinstance(default, list):
                    value = self.get_list(section, key, config=config)
                else:
                    value = config.get(section, key)

                check = getattr(self, "check_setting_%s_%s" % (section, key), None)

                if check is not None and not check(value):
                    # We just don't set it, check_setting_%s should have
                    # taken care of the error messages
                    continue

                if not default == value:
                    if key.count('pass') >= 1:
                        log.debug(
                            _("Setting %s_%s to '****' (from configuration file)") % (
                                section,
                                key
                            ),
                            level=8
                        )

                    else:
                        log.debug(
                            _("Setting %s_%s to %r (from configuration file)") % (
                                section,
                                key,
                                value
                            ),
                            level=8
                        )

                    setattr(self, "%s_%s" % (section, key), value)

    def options_set_from_config(self):
        """
            Sets the default configuration options from a
            configuration file. Configuration file may be
            customized using the --config CLI option
        """

        log.debug(_("Setting options from configuration file"), level=4)

        # Check from which configuration file we should get the defaults
        # Other then default?
        self.config_file = self.defaults.config_file

        if self.cli_keywords is not None:
            if not self.cli_keywords.config_file == self.defaults.config_file:
                self.config_file = self.cli_keywords.config_file

        config = self.check_config()
        self.load_config(config)

    def check_config(self, val=None):
        """
            Checks self.config_file or the filename passed using 'val'
            and returns a ConfigParser instance if everything is OK.
        """

        if val is not None:
            config_file = val
        else:
            config_file = self.config_file

        config = ConfigParser(interpolation=None)

        if not os.access(config_file, os.R_OK):
            log.debug(_("Configuration file %s not readable") % (config_file), level=4)
            return config

        log.debug(_("Reading configuration file %s") % (config_file), level=8)

        try:
            config.read(config_file)
        except Exception:
            log.error(_("Invalid configuration file %s") % (config_file))

        return config

    def add_cli_parser_option_group(self, name):
        return self.cli_parser.add_option_group(name)

    def create_options(self):
        """
            Create the OptionParser for the options passed to us from runtime
            Command Line Interface.
        """

        self.cli_parser = OptionParser(epilog=_(epilog))

        #
        # Runtime Options
        #
        runtime_group = self.cli_parser.add_option_group(_("Runtime Options"))
        runtime_group.add_option(
            "-c", "--config",
            dest="config_file",
            action="store",
            default=self.defaults.config_file,
            help=_("Configuration file to use")
        )

        runtime_group.add_option(
            "-d", "--debug",
            dest="debuglevel",
            type='int',
            default=0,
            help=_("Set the debugging verbosity. Maximum is 9.")
        )

        runtime_group.add_option(
            "-e", "--default",
            dest="answer_default",
            action="store_true",
            default=False,
            help=_("Use the default answer to all questions.")
        )

        runtime_group.add_option(
            "-l",
            dest="loglevel",
            type='str',
            default="WARNING",
            help=_("Set the logging level. One of info, warn, error, critical or debug")
        )

        runtime_group.add_option(
            "--logfile",
            dest="logfile",
            action="store",
            default=DS_SETUP_LOG_PATH,
            help=_("Log file to use")
        )

        runtime_group.add_option(
            "-q", "--quiet",
            dest="quiet",
            action="store_true",
            default=False,
            help=_("Be quiet.")
        )

        runtime_group.add_option(
            "-y", "--yes",
            dest="answer_yes",
            action="store_true",
            default=False,
            help=_("Answer yes to all questions.")
        )

    def parse_options(self, fatal=True):
        """
            Parse options passed to our call.

            Without fatal, the command line is left alone and the options
            assume their defaults.
        """

        if fatal:
            (self.cli_keywords, self.cli_args) = self.cli_parser.parse_args()
        else:
            (self.cli_keywords, self.cli_args) = self.cli_parser.parse_args([])

    def read_config(self, value=None):
        """
            Reads the configuration file, sets a self.cfg_parser.
        """

        if not value:
            value = self.defaults.config_file

            if self.cli_keywords is not None:
                value = self.cli_keywords.config_file

        self.cfg_parser = ConfigParser(interpolation=None)
        self.cfg_parser.read(value)

        if self.cli_keywords is not None:
            self.cli_keywords.config_file = value

        self.config_file = value

    def set_defaults_from_cli_options(self):
        for long_opt in self.cli_parser._long_opt:
            if long_opt == "--help":
                continue

            setattr(
                self.defaults,
                self.cli_parser._long_opt[long_opt].dest,
                self.cli_parser._long_opt[long_opt].default
            )

        # But, they should be available in our class as well
        for option in self.cli_parser.defaults:
            log.debug(
                _("Setting %s to %r (from the default values for CLI options)") % (
                    option,
                    self.cli_parser.defaults[option]
                ),
                level=9
            )

            setattr(self, option, self.cli_parser.defaults[option])

    def has_section(self, section):
        if not self.cfg_parser:
            self.read_config()

        return self.cfg_parser.has_section(section)

    def has_option(self, section, option):
        if not self.cfg_parser:
            self.read_config()

        return self.cfg_parser.has_option(section, option)

    def get_list(self, section, key, default=None, config=None):
        """
            Gets a comma and/or space separated list from the configuration file
            and returns a list.
        """
        if config is None:
            if not self.cfg_parser:
                self.read_config()

            config = self.cfg_parser

        if not config.has_option(section, key):
            if default is not None:
                return default

            _defaults = getattr(self.defaults, section, {})
            if isinstance(_defaults, dict) and isinstance(_defaults.get(key), list):
                return list(_defaults[key])

            return []

        values = []

        for raw_value in config.get(section, key).split(','):
            for value in raw_value.split(' '):
                if not value.strip() == "":
                    values.append(value.strip())

        return values

    def get(self, section, key, default=None):
        """
            Get a configuration option from the configuration file, or the
            defaults if the configuration file does not have it.
        """

        if not self.cfg_parser:
            self.read_config()

        if self.cfg_parser.has_option(section, key):
            return self.cfg_parser.get(section, key)

        log.debug(
            _("Option %s/%s does not exist in config file %s, pulling from defaults") % (
                section,
                key,
                self.config_file
            ),
            level=9
        )

        if hasattr(self.defaults, "%s_%s" % (section, key)):
            return getattr(self.defaults, "%s_%s" % (section, key))

        _defaults = getattr(self.defaults, section, None)

        if isinstance(_defaults, dict) and key in _defaults:
            return _defaults[key]

        return default

    def check_setting_config_file(self, value):
        if os.path.isfile(value):
            if os.access(value, os.R_OK):
                self.read_config(value=value)
                self.config_file = value
                return True
            else:
                log.error(_("Configuration file %s not readable.") % (value))
                return False
        else:
            if not value == self.defaults.config_file:
                log.error(_("Configuration file %s does not exist.") % (value))

            return False

    def check_setting_debuglevel(self, value):
        if value < 0:
            log.info(
                _(
                    "WARNING: A negative debug level value does not "
                    + "make this program be any more silent."
                )
            )

            return True

        elif value <= 9:
            return True
        else:
            log.warning(_("This program has 9 levels of verbosity. Using the maximum of 9."))
            return True
