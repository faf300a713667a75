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
from zope.interface import implementer
from boxfac.Artifact import BoxArtifact
from boxfac.BoxConfiguration import BoxConfiguration
from boxfac.FactoryUtils import process_output_path
from boxfac.PostProcessor import IPostProcessor
from boxfac_plugins.ovfcommon.ovfcommon import BoxPackage, find_base_mac_address

PROVIDER = 'virtualbox'

DEFAULT_VAGRANTFILE = '''
Vagrant.configure("2") do |config|
config.vm.base_mac = "{{ .BaseMacAddress }}"
end
'''


@implementer(IPostProcessor)
class VirtualBox(object):
    """ Turns a VirtualBox OVF export into a Vagrant box. """

    def __init__(self, tmpdir=None):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        self.config = BoxConfiguration()
        self.tmpdir = tmpdir

    def configure(self, *raws):
        self.config = self.config.decode(*raws)
        self.log.debug("Configured with %r" % self.config)

    def post_process(self, ui, artifact):
        self.log.info('post_process() called in VirtualBox plugin')

        # Vagrant wants the box to come up with the MAC it was installed with,
        # otherwise the guest renumbers its network device on first boot
        tpl_data = dict(BaseMacAddress=find_base_mac_address(artifact.files()))

        output_path = process_output_path(self.config.output,
                                          self.config.packer_build_name,
                                          PROVIDER, artifact)

        with BoxPackage(tmpdir=self.tmpdir) as pkg:
            pkg.stage(artifact.files(), ui)
            pkg.render_vagrantfile(tpl_data, DEFAULT_VAGRANTFILE,
                                   self.config.vagrantfile_template)
            pkg.write_metadata({'provider': PROVIDER})

            ui.message("Renaming the OVF to box.ovf...")
            pkg.rename_ovf()

            ui.message("Compressing box...")
            pkg.make_box_package(output_path)

        return BoxArtifact(PROVIDER, output_path), False
