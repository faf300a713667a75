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
from zope.interface import Interface, implementer
from boxfac.BoxFactoryException import BoxIOError

BOX_BUILDER_ID = 'mitchellh.post-processor.vagrant'


class IArtifact(Interface):
    """ The result of a single build step. Builders hand one of these to the
    post-processors, which hand back a new one describing what they made. """

    def builder_id():
        """
        @return A string naming the builder that produced this artifact.
        """

    def files():
        """
        @return An ordered list of absolute paths that make up the artifact.
        """

    def id():
        """
        @return A builder specific identifier for the artifact.
        """

    def destroy():
        """
        Remove the artifact's files.
        """


@implementer(IArtifact)
class FileArtifact(object):
    """ An artifact made of files already sitting on disk. """

    def __init__(self, builder_id, files):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        self._builder_id = builder_id
        self._files = [ os.path.abspath(f) for f in files ]

    def builder_id(self):
        return self._builder_id

    def files(self):
        return list(self._files)

    def id(self):
        return None

    def destroy(self):
        for path in self._files:
            self.log.debug("Removing artifact file (%s)" % path)
            try:
                os.remove(path)
            except OSError as e:
                raise BoxIOError("Failed to remove artifact file (%s)" % path, e) from e

    def __str__(self):
        return "Files from builder (%s): %s" % (self._builder_id, ", ".join(self._files))


@implementer(IArtifact)
class BoxArtifact(object):
    """ A finished Vagrant box for a single provider. """

    def __init__(self, provider, path):
        self.provider = provider
        self.path = path

    def builder_id(self):
        return BOX_BUILDER_ID

    def files(self):
        return [ self.path ]

    def id(self):
        return self.provider

    def destroy(self):
        try:
            os.remove(self.path)
        except OSError as e:
            raise BoxIOError("Failed to remove box (%s)" % self.path, e) from e

    def __str__(self):
        return "'%s' provider box: %s" % (self.provider, self.path)

    def __eq__(self, other):
        return (isinstance(other, BoxArtifact) and
                (self.provider, self.path) == (other.provider, other.path))

    def __hash__(self):
        return hash((self.provider, self.path))
