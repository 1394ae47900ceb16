# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - mapping of (project, topic) keys to file names
"""


import posixpath

from werkzeug.security import safe_join

from config import DEFAULT_PROJECT, DIFF_SUFFIX, LOCK_SUFFIX, UNSAFE_NAME
from backend import BackendError


class PathResolver(object):
    """
    Computes file names, never touches the filesystem.

    Project and topic names must be usable as path segments below the data
    path, names that would escape it (absolute paths, "..") or that are not
    in normal form ("a/../b", "b/", "./b") are rejected.
    """
    def __init__(self, data_path, extension=None):
        self.data_path = data_path
        self.extension = extension

    def _join(self, directory, name):
        # names are used as they are, never normalized into another name
        if not name or posixpath.normpath(name) != name:
            raise BackendError(UNSAFE_NAME, name)
        path = safe_join(directory, name)
        if path is None:
            raise BackendError(UNSAFE_NAME, name)
        return path

    def project_directory(self, project):
        return self._join(self.data_path, project)

    def page_file(self, topic, project=DEFAULT_PROJECT):
        if self.extension is not None:
            topic = '%s.%s' % (topic, self.extension)
        return self._join(self.project_directory(project), topic)

    def diff_file(self, topic, project=DEFAULT_PROJECT):
        return self.page_file(topic, project) + DIFF_SUFFIX

    def lock_file(self, topic, project=DEFAULT_PROJECT):
        return self.page_file(topic, project) + LOCK_SUFFIX
