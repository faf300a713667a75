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

import logging
from boxfac.ApplicationConfiguration import ApplicationConfiguration
from boxfac.Artifact import FileArtifact
from boxfac.BoxFactoryException import BoxFactoryException
from boxfac.PluginManager import PluginManager
from boxfac.Ui import BasicUi

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s pid(%(process)d) Message: %(message)s'


class Application(object):

    def __init__(self, argv=None, ui=None):
        super(Application, self).__init__()
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        self.argv = argv
        self.ui = ui if ui is not None else BasicUi()
        self.app_config = None

    def setup_logging(self):
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        if (self.app_config['debug']):
            logging.getLogger('').setLevel(logging.DEBUG)
        elif (self.app_config['verbose']):
            logging.getLogger('').setLevel(logging.INFO)

    def main(self):
        try:
            config = ApplicationConfiguration(argv=self.argv)
        except BoxFactoryException as e:
            self.ui.error(str(e))
            return 1
        self.app_config = config.configuration
        self.setup_logging()

        try:
            plugin_mgr = PluginManager(self.app_config.get('plugins'))
            plugin_mgr.load()

            artifact = FileArtifact(self.app_config['builder_id'], self.app_config['files'])
            post_processor = plugin_mgr.plugin_for_builder(artifact.builder_id(), tmpdir=self.app_config.get('tmpdir'))
            post_processor.configure(config.box_settings())

            self.ui.say("Creating box from %s" % artifact)
            box, keep_input_artifact = post_processor.post_process(self.ui, artifact)

            if not (keep_input_artifact or self.app_config['keep_input_artifact']):
                self.ui.message("Removing input artifact...")
                artifact.destroy()
        except BoxFactoryException as e:
            self.log.exception(e)
            self.ui.error("Box creation failed: %s" % e)
            return 1

        self.ui.say(str(box))
        return 0
