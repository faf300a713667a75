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

import glob
import logging
import os
import re
import tempfile
from shutil import rmtree
import lxml.etree
from boxfac.BoxFactoryException import AmbiguousArtifactError, BoxIOError
from boxfac.BoxFactoryException import NotFoundError, ParseError, TemplateError
from boxfac.BoxTemplate import BoxTemplate
from boxfac.FactoryUtils import copy_contents, dir_to_box, write_metadata

OVF_EXTENSION = '.ovf'
BOX_OVF_NAME = 'box' + OVF_EXTENSION
VAGRANTFILE_NAME = 'Vagrantfile'

# VirtualBox keeps its own machine description inside the OVF, and that is
# where the adapter MAC addresses live, e.g.
#   <Adapter slot="0" enabled="true" MACAddress="080027CE083D" type="82540EM">
BASE_ADAPTER_XPATH = '//*[local-name()="Adapter"][@slot="0"][@MACAddress]'
ANY_ADAPTER_XPATH = '//*[local-name()="Adapter"]'
BASE_ADAPTER_PATTERN = re.compile(rb'<Adapter slot="0".+?MACAddress="(.+?)"')


def find_ovf(files):
    """Return the first path in files that looks like an OVF descriptor"""
    for path in files:
        if path.endswith(OVF_EXTENSION):
            return path
    return None

def find_base_mac_address(files):
    """
    Find the MAC address of the first network adapter of the VM described
    by the first OVF descriptor in files.

    @param files The paths that make up the artifact.

    @return The MAC address exactly as the descriptor spells it.
    """
    log = logging.getLogger(__name__)
    log.info("Looking for OVF for base mac address...")
    ovf = find_ovf(files)
    if not ovf:
        raise NotFoundError("ovf file couldn't be found")
    log.info("OVF found: %s" % ovf)

    try:
        with open(ovf, 'rb') as f:
            data = f.read()
    except (OSError, IOError) as e:
        raise BoxIOError("Failed to read OVF (%s)" % ovf, e) from e

    # VirtualBox exports are not always well formed - let lxml recover what it can
    parser = lxml.etree.XMLParser(recover=True, huge_tree=True, resolve_entities=False)
    try:
        doc = lxml.etree.fromstring(data, parser)
    except lxml.etree.XMLSyntaxError as e:
        log.debug("Unable to parse OVF (%s): %s" % (ovf, e))
        doc = None

    adapters = doc.xpath(BASE_ADAPTER_XPATH) if doc is not None else [ ]
    if adapters:
        mac_addr = adapters[0].get('MACAddress')
    elif doc is None or not doc.xpath(ANY_ADAPTER_XPATH):
        # Nothing recoverable as XML, fall back to scanning the raw text
        log.debug("No adapters parsed from OVF (%s), scanning raw text" % ovf)
        match = BASE_ADAPTER_PATTERN.search(data)
        mac_addr = match.group(1).decode('utf-8', 'replace') if match else None
    else:
        mac_addr = None
    if not mac_addr:
        raise ParseError("can't find base mac address in ovf")

    log.info("Base mac address: %s" % mac_addr)
    return mac_addr


class BoxPackage(object):
    '''A temporary directory holding the contents of a box until it is compressed'''
    def __init__(self, tmpdir=None):
        self.log = logging.getLogger('%s.%s' % (__name__, self.__class__.__name__))
        try:
            self.path = tempfile.mkdtemp(prefix='boxfactory-', dir=tmpdir)
        except OSError as e:
            raise BoxIOError("Failed to create staging directory", e) from e
        self.log.debug("Created staging directory (%s)" % self.path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.delete()
        return False

    def delete(self):
        if os.path.exists(self.path):
            self.log.debug("Removing staging directory (%s)" % self.path)
            rmtree(self.path, ignore_errors=True)

    def stage(self, files, ui):
        '''Copy every file into the package, flattening directories'''
        staged = [ ]
        for path in files:
            ui.message("Copying: %s" % path)
            dst_path = os.path.join(self.path, os.path.basename(path))
            copy_contents(dst_path, path)
            staged.append(dst_path)
        return staged

    def render_vagrantfile(self, context, default_template, template_path=None):
        '''
        Write the Vagrantfile, rendered from the file at template_path when
        one is given and from default_template otherwise.
        '''
        template_name = 'vagrantfile'
        template_text = default_template
        if template_path:
            try:
                with open(template_path, 'rb') as tf:
                    template_text = tf.read().decode('utf-8')
            except (OSError, IOError, UnicodeDecodeError) as e:
                raise TemplateError("Unable to read Vagrantfile template (%s): %s" % (template_path, e)) from e
            template_name = template_path

        contents = BoxTemplate(template_text, name=template_name).render(context)

        vagrantfile_path = os.path.join(self.path, VAGRANTFILE_NAME)
        try:
            with open(vagrantfile_path, 'w') as vf:
                vf.write(contents)
        except (OSError, IOError) as e:
            raise BoxIOError("Failed to write Vagrantfile (%s)" % vagrantfile_path, e) from e
        return vagrantfile_path

    def write_metadata(self, metadata):
        return write_metadata(self.path, metadata)

    def rename_ovf(self):
        '''Vagrant only looks for box.ovf - rename the one OVF in the package'''
        self.log.info("Looking for OVF to rename...")
        matches = glob.glob(os.path.join(glob.escape(self.path), '*' + OVF_EXTENSION))
        if len(matches) > 1:
            raise AmbiguousArtifactError("More than one OVF file in VirtualBox artifact.")
        if not matches:
            raise BoxIOError("No OVF file to rename in (%s)" % self.path)

        box_ovf = os.path.join(self.path, BOX_OVF_NAME)
        self.log.info("Renaming: '%s' => %s" % (matches[0], BOX_OVF_NAME))
        try:
            os.rename(matches[0], box_ovf)
        except OSError as e:
            raise BoxIOError("Failed to rename (%s) to (%s)" % (matches[0], box_ovf), e) from e
        return box_ovf

    def make_box_package(self, output_path):
        return dir_to_box(output_path, self.path)
