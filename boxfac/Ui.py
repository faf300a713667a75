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
import sys
from zope.interface import Interface, implementer


class IUi(Interface):
    """ Where progress text for the user goes. None of these calls may
    stop a build if the text can't be shown. """

    def say(text):
        """ Print a top level line. """

    def message(text):
        """ Print a progress line belonging to the current step. """

    def error(text):
        """ Print an error line. """


@implementer(IUi)
class BasicUi(object):
    """ Writes to a pair of streams, and mirrors everything into the log. """

    def __init__(self, out=None, err=None, prefix=''):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.prefix = prefix

    def _write(self, stream, text):
        try:
            stream.write("%s%s\n" % (self.prefix, text))
            stream.flush()
        except (IOError, ValueError) as e:
            self.log.warning("Unable to display message (%s): %s" % (text, e))

    def say(self, text):
        self.log.info(text)
        self._write(self.out, text)

    def message(self, text):
        self.log.info(text)
        self._write(self.out, "    %s" % text)

    def error(self, text):
        self.log.error(text)
        self._write(self.err, text)


@implementer(IUi)
class RecordingUi(object):
    """ Keeps every line it is given, in order. Handy for callers that want
    to show the trail later, or not at all. """

    def __init__(self):
        self.messages = [ ]

    def say(self, text):
        self.messages.append(text)

    def message(self, text):
        self.messages.append(text)

    def error(self, text):
        self.messages.append(text)
