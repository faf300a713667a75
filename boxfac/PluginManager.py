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
import os
import os.path
import json
from boxfac.BoxFactoryException import ConfigurationError

PLUGIN_TYPES = ('POSTPROCESSOR', )
INFO_FILE_EXTENSION = '.info'
DEFAULT_PLUGIN_PACKAGE = 'boxfac_plugins'

def default_plugin_path():
    import boxfac_plugins
    return os.path.dirname(os.path.abspath(boxfac_plugins.__file__))

class PluginManager(object):
    """ Registers and manages box post-processor plugins. """
    @property
    def plugins(self):
        """
        The property plugins
        """
        return self._plugins

    @property
    def targets(self):
        """
        Builder ids mapped to the name of the plugin that handles them
        """
        return self._targets

    def __init__(self, plugin_path=None, package=DEFAULT_PLUGIN_PACKAGE):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))

        if plugin_path is None:
            plugin_path = default_plugin_path()
        if(os.path.exists(plugin_path)):
            self.path = plugin_path
        else:
            msg = 'Plugin path (%s) does not exist! No plugins loaded.' % plugin_path
            self.log.error(msg)
            raise ConfigurationError(msg)

        self.package = package
        self._plugins = dict()
        self._targets = dict()
        self._info_files = dict()

    def _find_info_files(self):
        # Info files can sit directly in the plugin path or in a directory
        # named for the plugin, e.g. VirtualBox/VirtualBox.info
        info_files = dict()
        for _file in sorted(os.listdir(self.path)):
            full_path = os.path.join(self.path, _file)
            if _file.endswith(INFO_FILE_EXTENSION) and os.path.isfile(full_path):
                info_files[_file[:-len(INFO_FILE_EXTENSION)]] = full_path
            elif os.path.isdir(full_path):
                nested = os.path.join(full_path, _file + INFO_FILE_EXTENSION)
                if os.path.isfile(nested):
                    info_files[_file] = nested
        return info_files

    def load(self):
        """
        Enumerates through installed plugins and registers each according to
        the builder ids it handles. Only one plugin may be registered per
        builder id. When more than one plugin claims a builder id, the first
        will be registered and a warning logged for the others.
        """
        self._info_files = self._find_info_files()

        for plugin_name in sorted(self._info_files):
            try:
                md = self.metadata_for_plugin(plugin_name)
                if(md['type'].upper() in PLUGIN_TYPES):
                    for target in md['targets']:
                        if(not target in self._targets):
                            self._targets[target] = plugin_name
                        else:
                            msg = 'Did not register %s for %s. Plugin %s already registered.' % (plugin_name, target, self._targets[target])
                            self.log.warning(msg)
                    self._plugins[plugin_name] = md
                    self.log.info('Plugin (%s) loaded...' % plugin_name)
                else:
                    msg = 'Plugin (%s) has unsupported type (%s)' % (plugin_name, md['type'])
                    self._register_plugin_with_error(plugin_name, msg)
                    self.log.warning(msg)
            except KeyError as e:
                msg = 'Invalid metadata for plugin (%s). Missing entry for %s.' % (plugin_name, e)
                self._register_plugin_with_error(plugin_name, msg)
                self.log.exception(msg)
            except (IOError, OSError, ValueError) as e:
                msg = 'Loading plugin (%s) failed with exception: %s' % (plugin_name, e)
                self._register_plugin_with_error(plugin_name, msg)
                self.log.exception(msg)

    def _register_plugin_with_error(self, plugin_name, error_msg):
        self._plugins[plugin_name] = dict(ERROR = error_msg)

    def metadata_for_plugin(self, plugin):
        """
        Returns the metadata dictionary for the plugin.

        @param plugin name of the plugin

        @return dictionary containing the plugin's metadata
        """
        if(plugin in self._plugins):
            return self._plugins[plugin]

        info_file = self._info_files.get(plugin, os.path.join(self.path, plugin + INFO_FILE_EXTENSION))
        with open(info_file, 'r') as fp:
            return json.load(fp)

    def plugin_for_builder(self, builder_id, **kwargs):
        """
        Looks up the plugin registered for the builder that produced an
        artifact and returns a new instance of its delegate class.

        @param builder_id The builder id of the artifact, e.g. "mitchellh.virtualbox"
        @param kwargs Passed on to the delegate class constructor.

        @return An instance of the delegate class of the plugin.
        """
        plugin_name = self._targets.get(builder_id)
        if not plugin_name:
            raise ConfigurationError("Unknown artifact type, can't build box: %s" % builder_id)

        self.log.debug("Using plugin (%s) for builder (%s)" % (plugin_name, builder_id))
        plugin = __import__("%s.%s" % (self.package, plugin_name), fromlist=['delegate_class'])
        return plugin.delegate_class(**kwargs)
