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


class BoxFactoryException(Exception):
    """ Base class for every error raised while building a box. """
    pass


class ConfigurationError(BoxFactoryException):
    pass


class NotFoundError(BoxFactoryException):
    pass


class ParseError(BoxFactoryException):
    pass


class AmbiguousArtifactError(BoxFactoryException):
    pass


class TemplateError(BoxFactoryException):
    pass


class BoxIOError(BoxFactoryException):
    """
    A filesystem operation failed while staging, rendering or archiving.

    @param message Description of the operation that failed.
    @param cause The underlying OSError, if any.
    """
    def __init__(self, message, cause=None):
        if cause is not None:
            message = "%s: %s" % (message, cause)
        super(BoxIOError, self).__init__(message)
        self.cause = cause
