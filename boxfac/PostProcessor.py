#
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

from zope.interface import Interface

class IPostProcessor(Interface):
    """ Interface for box post-processor plugins. A post-processor takes the
    artifact produced by a builder and turns it into a new artifact, for
    example a Vagrant box for a given provider. """

    def configure(*raws):
        """
        Decode one or more settings dictionaries into the plugin's
        configuration. Later dictionaries win over earlier ones.

        @param raws Settings dictionaries, applied in order.

        @raise ConfigurationError if a settings dictionary can't be decoded.
        """

    def post_process(ui, artifact):
        """
        Turn the given artifact into a new one.

        @param ui An IUi that receives progress messages.
        @param artifact The IArtifact produced by the builder.

        @return A tuple of (new IArtifact, keep_input_artifact)
        """
