# encoding: utf-8

#   Copyright 2013 Red Hat, Inc.
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

import sys
import os.path
import argparse
import json
import logging
from boxfac.BoxConfiguration import BoxConfiguration
from boxfac.BoxFactoryException import ConfigurationError
from boxfac.Version import VERSION

DEFAULT_CONFIG = '/etc/boxfactory/boxfactory.conf'
DEFAULT_BUILDER_ID = 'mitchellh.virtualbox'


class ApplicationConfiguration(object):
    """
    Command line options for the boxfactory tool, with defaults taken from
    a JSON config file when one exists.  Options given on the command line
    always win over the config file.
    """

    def __init__(self, argv=None, configuration=None):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))

        if configuration:
            if not isinstance(configuration, dict):
                raise ConfigurationError("ApplicationConfiguration configuration argument must be a dict")
            self.log.debug("ApplicationConfiguration passed a dictionary - ignoring command line and config files")
            self.configuration = configuration
        else:
            self.configuration = self.__parse_arguments(sys.argv[1:] if argv is None else argv)

        for key in ('debug', 'verbose', 'keep_input_artifact'):
            self.configuration.setdefault(key, False)

    def __new_argument_parser(self, appname):
        main_description = """Box Factory turns a VirtualBox OVF export into a Vagrant box."""

        argparser = argparse.ArgumentParser(description=main_description, prog=appname)
        argparser.add_argument('--version', action='version', default=argparse.SUPPRESS, version=VERSION, help='Show the version number and exit')
        debug_group = argparser.add_mutually_exclusive_group()
        debug_group.add_argument('--verbose', action='store_true', default=False, help='Set verbose logging.')
        debug_group.add_argument('--debug', action='store_true', default=False, help='Set really verbose logging for debugging.')
        argparser.add_argument('--config', default=DEFAULT_CONFIG, help='Configuration file to use. (default: %(default)s)')
        argparser.add_argument('--tmpdir', default=None, help='Use the specified location for the box staging directory.  (default: the system temporary directory)')
        argparser.add_argument('--plugins', default=None, help='Plugin directory. (default: the installed boxfac_plugins package)')
        argparser.add_argument('--keep-input-artifact', dest='keep_input_artifact', action='store_true', default=False, help='Leave the input files in place once the box is built.')

        group_box = argparser.add_argument_group(title='Box settings')
        group_box.add_argument('--builder-id', dest='builder_id', default=DEFAULT_BUILDER_ID, help='Builder that produced the input files. (default: %(default)s)')
        group_box.add_argument('--output', default=None, help='Template for the path of the box, e.g. "{{ .BuildName }}.box". (default: packer_{{ .BuildName }}_{{ .Provider }}.box)')
        group_box.add_argument('--vagrantfile-template', dest='vagrantfile_template', default=None, help='A file to use as the Vagrantfile template instead of the built in one.')
        group_box.add_argument('--build-name', dest='packer_build_name', default=None, help='Name of the build, available to templates as {{ .BuildName }}.')

        argparser.add_argument('files', nargs='+', help='The files that make up the artifact, including its OVF descriptor.')
        return argparser

    def __parse_arguments(self, argv):
        appname = os.path.basename(sys.argv[0]) or 'boxfactory'
        argparser = self.__new_argument_parser(appname)
        configuration = argparser.parse_args(argv)
        if (os.path.isfile(configuration.config)):
            try:
                with open(configuration.config) as config_file:
                    defaults = json.load(config_file)
            except (IOError, ValueError) as e:
                raise ConfigurationError("Unable to load config file (%s): %s" % (configuration.config, e)) from e
            if not isinstance(defaults, dict):
                raise ConfigurationError("Config file (%s) must contain a JSON object" % configuration.config)
            argparser.set_defaults(**defaults)
            configuration = argparser.parse_args(argv)
        return vars(configuration)

    def box_settings(self):
        """
        @return The settings dictionary a post-processor's configure() expects,
        holding only the box settings that were actually given.
        """
        return dict([ (field, self.configuration[field]) for field in BoxConfiguration.FIELDS
                      if self.configuration.get(field) is not None ])
