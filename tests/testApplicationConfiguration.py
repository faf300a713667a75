#!/usr/bin/env python
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

import unittest
import logging
import os
import json
import shutil
import tempfile
from boxfac.ApplicationConfiguration import ApplicationConfiguration
from boxfac.BoxFactoryException import ConfigurationError


class TestApplicationConfiguration(unittest.TestCase):
    def setUp(self):
        logging.basicConfig(level=logging.NOTSET, format='%(asctime)s %(levelname)s %(name)s pid(%(process)d) Message: %(message)s', filename=os.path.join(tempfile.gettempdir(), 'boxfactory-unittests.log'))
        self.workdir = tempfile.mkdtemp(prefix='bfut-')
        self.config_path = os.path.join(self.workdir, 'boxfactory.conf')
        self.missing_config = os.path.join(self.workdir, 'missing.conf')

    def tearDown(self):
        shutil.rmtree(self.workdir, ignore_errors=True)

    def testDefaults(self):
        configuration = ApplicationConfiguration(argv=['--config', self.missing_config, 'image.ovf']).configuration
        self.assertEqual(['image.ovf'], configuration['files'])
        self.assertEqual('mitchellh.virtualbox', configuration['builder_id'])
        self.assertFalse(configuration['debug'])
        self.assertFalse(configuration['keep_input_artifact'])
        self.assertIsNone(configuration['output'])

    def testCommandLineSettings(self):
        app_config = ApplicationConfiguration(argv=['--config', self.missing_config,
                                                    '--output', '{{.BuildName}}.box',
                                                    '--build-name', 'web',
                                                    'disk.vmdk', 'image.ovf'])
        self.assertEqual(['disk.vmdk', 'image.ovf'], app_config.configuration['files'])
        self.assertDictEqual({'output': '{{.BuildName}}.box', 'packer_build_name': 'web'}, app_config.box_settings())

    def testConfigFileDefaults(self):
        with open(self.config_path, 'w') as f:
            json.dump({'output': 'from-file.box', 'vagrantfile_template': '/etc/boxfactory/Vagrantfile.tpl', 'debug': True}, f)
        app_config = ApplicationConfiguration(argv=['--config', self.config_path, '--output', 'from-cli.box', 'image.ovf'])
        self.assertTrue(app_config.configuration['debug'])
        self.assertDictEqual({'output': 'from-cli.box', 'vagrantfile_template': '/etc/boxfactory/Vagrantfile.tpl'},
                             app_config.box_settings())

    def testBadConfigFile(self):
        with open(self.config_path, 'w') as f:
            f.write('{ "output": ')
        self.assertRaises(ConfigurationError, ApplicationConfiguration, argv=['--config', self.config_path, 'image.ovf'])

    def testConfigurationDict(self):
        app_config = ApplicationConfiguration(configuration={'output': 'x.box', 'files': ['image.ovf']})
        self.assertFalse(app_config.configuration['verbose'])
        self.assertDictEqual({'output': 'x.box'}, app_config.box_settings())
        self.assertRaises(ConfigurationError, ApplicationConfiguration, configuration=['output'])


if __name__ == '__main__':
    unittest.main()
