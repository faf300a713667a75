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
import re
from boxfac.BoxFactoryException import TemplateError

# Templates use the same action syntax packer templates do, e.g. "{{ .BuildName }}"
ACTION_PATTERN = re.compile(r'\{\{(.*?)\}\}', re.DOTALL)
FIELD_PATTERN = re.compile(r'^\.([A-Za-z_][A-Za-z0-9_]*)$')
COMMENT_PATTERN = re.compile(r'^/\*.*\*/$', re.DOTALL)


class BoxTemplate(object):
    """
    A text template with "{{ .Field }}" substitution points.

    The template is compiled when the object is created, so a malformed
    template is reported before anything gets written.  Only field
    references and comments are understood; any other action is an error.
    """

    def __init__(self, text, name='template'):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        self.name = name
        self.text = text
        self._parts = self._compile(text)

    @property
    def fields(self):
        """The set of field names the template refers to"""
        return set([ value for (is_field, value) in self._parts if is_field ])

    def _compile(self, text):
        parts = [ ]
        position = 0
        for match in ACTION_PATTERN.finditer(text):
            parts.append((False, text[position:match.start()]))
            position = match.end()
            body = match.group(1).strip()
            if COMMENT_PATTERN.match(body):
                continue
            field = FIELD_PATTERN.match(body)
            if not field:
                raise TemplateError("template: %s: unsupported action {{%s}}" % (self.name, match.group(1)))
            parts.append((True, field.group(1)))

        remainder = text[position:]
        if '{{' in remainder:
            line = text.count('\n', 0, position + remainder.index('{{')) + 1
            raise TemplateError("template: %s:%d: unclosed action" % (self.name, line))
        parts.append((False, remainder))
        return parts

    def render(self, context):
        """
        Substitute the given values into the template.

        @param context A dictionary of field name to value.

        @return The rendered text.
        """
        self.log.debug("Rendering template (%s) with fields %s" % (self.name, sorted(self.fields)))
        output = [ ]
        for (is_field, value) in self._parts:
            if not is_field:
                output.append(value)
            elif value in context:
                field_value = context[value]
                output.append('' if field_value is None else str(field_value))
            else:
                raise TemplateError("template: %s: can't evaluate field %s" % (self.name, value))
        return ''.join(output)

    def __repr__(self):
        return "BoxTemplate(%r)" % self.name
