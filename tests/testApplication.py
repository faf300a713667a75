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

import os
import shutil
import tarfile
import unittest
import logging
import tempfile
from boxfac.Application import Application
from boxfac.Ui import RecordingUi

OVF = '<Envelope><Network><Adapter slot="0" enabled="true" MACAddress="080027ABCDEF"/></Network></Envelope>'


class testApplication(unittest.TestCase):
    def setUp(self):
        logging.basicConfig(level=logging.NOTSET, format='%(asctime)s %(levelname)s %(name)s pid(%(process)d) Message: %(message)s', filename=os.path.join(tempfile.gettempdir(), 'boxfactory-unittests.log'))
        self.workdir = tempfile.mkdtemp(prefix='bfut-')
        self.stagedir = os.path.join(self.workdir, 'staging')
        os.mkdir(self.stagedir)
        self.disk = os.path.join(self.workdir, 'disk.vmdk')
        with open(self.disk, 'wb') as f:
            f.write(b'\x00' * 16)
        self.ovf = os.path.join(self.workdir, 'image.ovf')
        with open(self.ovf, 'w') as f:
            f.write(OVF)
        self.output = os.path.join(self.workdir, '{{ .BuildName }}.box')
        self.ui = RecordingUi()

    def tearDown(self):
        shutil.rmtree(self.workdir, ignore_errors=True)

    def _argv(self, *extra):
        return ['--config', os.path.join(self.workdir, 'missing.conf'),
                '--tmpdir', self.stagedir,
                '--output', self.output,
                '--build-name', 'web'] + list(extra) + [self.disk, self.ovf]

    def testMain(self):
        application = Application(argv=self._argv('--keep-input-artifact'), ui=self.ui)
        self.assertEqual(0, application.main())
        box = os.path.join(self.workdir, 'web.box')
        with tarfile.open(box, 'r:gz') as tar:
            self.assertIn('box.ovf', tar.getnames())
        self.assertEqual("'virtualbox' provider box: %s" % box, self.ui.messages[-1])
        self.assertTrue(os.path.exists(self.disk))
        self.assertEqual([ ], os.listdir(self.stagedir))

    def testMainRemovesInputArtifact(self):
        application = Application(argv=self._argv(), ui=self.ui)
        self.assertEqual(0, application.main())
        self.assertTrue(os.path.exists(os.path.join(self.workdir, 'web.box')))
        self.assertFalse(os.path.exists(self.disk))
        self.assertFalse(os.path.exists(self.ovf))

    def testMainFailure(self):
        argv = ['--config', os.path.join(self.workdir, 'missing.conf'), '--tmpdir', self.stagedir, self.disk]
        application = Application(argv=argv, ui=self.ui)
        self.assertEqual(1, application.main())
        self.assertEqual("Box creation failed: ovf file couldn't be found", self.ui.messages[-1])
        self.assertTrue(os.path.exists(self.disk))

    def testUnknownBuilder(self):
        application = Application(argv=self._argv('--builder-id', 'mitchellh.amazonebs'), ui=self.ui)
        self.assertEqual(1, application.main())
        self.assertIn('Unknown artifact type', self.ui.messages[-1])


if __name__ == '__main__':
    unittest.main()
