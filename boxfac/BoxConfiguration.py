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
from boxfac.BoxFactoryException import ConfigurationError


class BoxConfiguration(object):
    """
    Settings for turning a build artifact into a box.

    output               -- template for the path of the finished box
    vagrantfile_template -- path of a file to use instead of the built in
                            Vagrantfile template
    packer_build_name    -- name of the build, available to the output
                            template as {{ .BuildName }}

    Instances never change once made. decode() hands back a new one.
    """

    FIELDS = ('output', 'vagrantfile_template', 'packer_build_name')

    def __init__(self, output='', vagrantfile_template='', packer_build_name=''):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        self._settings = dict(output=output,
                              vagrantfile_template=vagrantfile_template,
                              packer_build_name=packer_build_name)

    @property
    def output(self):
        return self._settings['output']

    @property
    def vagrantfile_template(self):
        return self._settings['vagrantfile_template']

    @property
    def packer_build_name(self):
        return self._settings['packer_build_name']

    def as_dict(self):
        return dict(self._settings)

    def decode(self, *raws):
        """
        Apply one or more settings dictionaries over this configuration.

        @param raws Dictionaries of settings.  When the same key shows up
        in more than one, the last one wins.

        @return A new BoxConfiguration
        """
        settings = dict(self._settings)
        for index, raw in enumerate(raws):
            if raw is None:
                continue
            if not isinstance(raw, dict):
                raise ConfigurationError("Settings #%d must be a dictionary, got %s" % (index, type(raw).__name__))
            for key, value in raw.items():
                field = str(key).replace('-', '_')
                if field not in self.FIELDS:
                    self.log.debug("Ignoring unknown setting (%s)" % key)
                    continue
                if value is None:
                    value = ''
                if not isinstance(value, str):
                    raise ConfigurationError("Setting (%s) must be a string, got %s" % (key, type(value).__name__))
                settings[field] = value
        return BoxConfiguration(**settings)

    def __eq__(self, other):
        return isinstance(other, BoxConfiguration) and self._settings == other._settings

    def __repr__(self):
        return "BoxConfiguration(%s)" % ", ".join([ "%s=%r" % (f, self._settings[f]) for f in self.FIELDS ])
