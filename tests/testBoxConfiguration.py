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
from boxfac.BoxConfiguration import BoxConfiguration
from boxfac.BoxFactoryException import ConfigurationError


class testBoxConfiguration(unittest.TestCase):
    def setUp(self):
        self.config = BoxConfiguration()

    def tearDown(self):
        del self.config

    def testDefaults(self):
        self.assertEqual('', self.config.output)
        self.assertEqual('', self.config.vagrantfile_template)
        self.assertEqual('', self.config.packer_build_name)

    def testDecode(self):
        config = self.config.decode({'output': '{{.BuildName}}.box', 'packer_build_name': 'web'})
        self.assertEqual('{{.BuildName}}.box', config.output)
        self.assertEqual('web', config.packer_build_name)
        self.assertEqual('', config.vagrantfile_template)
        # the original is left alone
        self.assertEqual('', self.config.output)

    def testLastSettingsWin(self):
        config = self.config.decode({'output': 'first.box', 'packer_build_name': 'web'},
                                    {'output': 'second.box'},
                                    None)
        self.assertEqual('second.box', config.output)
        self.assertEqual('web', config.packer_build_name)

    def testDashedKeysAndUnknownKeys(self):
        config = self.config.decode({'vagrantfile-template': '/tmp/Vagrantfile.tpl', 'compression_level': 6})
        self.assertEqual('/tmp/Vagrantfile.tpl', config.vagrantfile_template)
        self.assertDictEqual(dict(output='', vagrantfile_template='/tmp/Vagrantfile.tpl', packer_build_name=''),
                             config.as_dict())

    def testBadSettings(self):
        self.assertRaises(ConfigurationError, self.config.decode, ['output', 'x.box'])
        self.assertRaises(ConfigurationError, self.config.decode, {'output': 42})

    def testEquality(self):
        self.assertEqual(BoxConfiguration(output='x.box'), self.config.decode({'output': 'x.box'}))
        self.assertNotEqual(BoxConfiguration(output='y.box'), self.config.decode({'output': 'x.box'}))


if __name__ == '__main__':
    unittest.main()
