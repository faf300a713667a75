#!/usr/bin/python

# A set of helpful utility functions for putting boxes together
# Avoid imports that are too specific to a given provider
# We want to allow every post-processor plugin to import all of these

import gzip
import json
import logging
import os
import shutil
import tarfile
import tempfile
from boxfac.BoxFactoryException import BoxIOError, ConfigurationError, TemplateError
from boxfac.BoxTemplate import BoxTemplate

DEFAULT_OUTPUT_PATH = 'packer_{{ .BuildName }}_{{ .Provider }}.box'
METADATA_FILE = 'metadata.json'
BOX_FILE_MODE = 0o644

def copy_contents(dst, src):
    """Copy the full contents and mode bits of src to dst"""
    try:
        shutil.copyfile(src, dst)
        shutil.copymode(src, dst)
    except (OSError, IOError) as e:
        raise BoxIOError("Failed to copy (%s) to (%s)" % (src, dst), e) from e

def write_metadata(directory, metadata):
    """Write the metadata dictionary as JSON into directory/metadata.json"""
    path = os.path.join(directory, METADATA_FILE)
    try:
        with open(path, 'w') as mj:
            json.dump(metadata, mj, sort_keys=True)
            mj.write('\n')
    except (OSError, IOError) as e:
        raise BoxIOError("Failed to write box metadata (%s)" % path, e) from e
    return path

def process_output_path(path, build_name, provider, artifact):
    """
    Compute the file name of a box from the configured output template.

    @param path The output path template, or an empty value for the default.
    @param build_name The name of the build that produced the artifact.
    @param provider The provider the box is for, e.g. "virtualbox".
    @param artifact The IArtifact being turned into a box.

    @return The output path with every template field filled in.
    """
    if not path:
        path = DEFAULT_OUTPUT_PATH

    artifact_id = artifact.id() if artifact is not None else None
    context = dict(ArtifactId=artifact_id or '',
                   BuildName=build_name or '',
                   Provider=provider)
    try:
        return BoxTemplate(path, name='output').render(context)
    except TemplateError as e:
        raise ConfigurationError("Invalid output path (%s): %s" % (path, e)) from e

def _normalize_tarinfo(tarinfo):
    # Ownership and timestamps would otherwise make every box unique
    tarinfo.uid = 0
    tarinfo.gid = 0
    tarinfo.uname = ''
    tarinfo.gname = ''
    tarinfo.mtime = 0
    return tarinfo

def _sorted_tree(directory):
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for name in dirs + sorted(files):
            yield os.path.join(root, name)

def dir_to_box(output_path, directory):
    """
    Compress the contents of directory into a gzipped tarball at output_path.

    Paths inside the archive are relative to directory.  The archive is
    assembled next to output_path and only renamed into place once it is
    complete, so a failure never leaves a partial box behind.
    """
    log = logging.getLogger(__name__)
    output_dir = os.path.dirname(os.path.abspath(output_path))
    if not os.path.isdir(output_dir):
        raise BoxIOError("Output directory (%s) does not exist" % output_dir)
    if not os.access(output_dir, os.W_OK | os.X_OK):
        raise BoxIOError("Output directory (%s) is not writable" % output_dir)

    try:
        (fd, partial_path) = tempfile.mkstemp(dir=output_dir, prefix='.%s.' % os.path.basename(output_path), suffix='.partial')
    except OSError as e:
        raise BoxIOError("Failed to create box in (%s)" % output_dir, e) from e

    log.debug("Compressing (%s) into (%s)" % (directory, partial_path))
    try:
        with os.fdopen(fd, 'wb') as raw:
            with gzip.GzipFile(filename='', mode='wb', fileobj=raw, mtime=0) as gz:
                with tarfile.open(fileobj=gz, mode='w', format=tarfile.GNU_FORMAT) as tar:
                    for path in _sorted_tree(directory):
                        arcname = os.path.relpath(path, directory)
                        log.debug("Adding (%s) to box" % arcname)
                        tar.add(path, arcname=arcname, recursive=False, filter=_normalize_tarinfo)
        os.chmod(partial_path, BOX_FILE_MODE)
        os.rename(partial_path, output_path)
    except (OSError, IOError, tarfile.TarError) as e:
        _remove_quietly(partial_path)
        raise BoxIOError("Failed to compress box (%s)" % output_path, e) from e
    except BaseException:
        _remove_quietly(partial_path)
        raise

    log.info("Box written to (%s)" % output_path)
    return output_path

def _remove_quietly(path):
    try:
        os.remove(path)
    except OSError:
        pass
