# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - backend storing pages as flat files

Layout below the data path::

    <project>/<topic>[.<ext>]           page content
    <project>/<topic>[.<ext>].rdiff     page history (JSON list of diffs)
    <project>/<topic>[.<ext>].lock      advisory lock (owner, expiry)
"""


import os
import logging

from config import FlatfilesConfig, DEFAULT_PROJECT, LOCK_TIMEOUT, UNKNOWN_ADDRESS, \
                   NO_DATA_DIRECTORY, NO_REVISION, OLD_SIZE

from backend import MutableBackendBase, BackendError
from backend._util import search_topics

from storage.paths import PathResolver
from storage.fs import ProjectStorage, PageStorage
from storage.history import HistoryStorage, apply_diff
from storage.locking import LockManager


class Backend(MutableBackendBase):
    """
    pages as plain files, one directory per project
    """
    def __init__(self, config=None):
        if config is None:
            config = FlatfilesConfig()
        self.config = config
        data_path = config.data_path
        if not os.path.isdir(data_path):
            logging.error("data directory '%s' does not exist" % data_path)
            raise BackendError(NO_DATA_DIRECTORY, data_path)
        self.resolver = PathResolver(data_path, config.extension)
        self.projects = ProjectStorage(self.resolver)
        self.history_store = HistoryStorage(self.resolver)
        self.pages = PageStorage(self.resolver, self.projects, self.history_store)
        self.locks = LockManager(self.resolver)

    @classmethod
    def from_options(cls, **options):
        """
        make a backend from keyword options data_path and extension
        """
        return cls(FlatfilesConfig(**options))

    def project_directory(self, project):
        return self.resolver.project_directory(project)

    def page_file(self, topic, project=DEFAULT_PROJECT):
        return self.resolver.page_file(topic, project)

    # pages

    def load(self, topic, project):
        return self.pages.load(topic, project)

    def store(self, page):
        self.pages.store(page)

    def destroy(self, page):
        self.pages.destroy(page)

    def page_exists(self, topic, project=DEFAULT_PROJECT):
        return self.pages.exists(topic, project)

    # history

    def history(self, topic, project=DEFAULT_PROJECT):
        """
        return the diff records of a page, oldest first
        """
        return self.history_store.load(topic, project)

    def load_revision(self, topic, project, version):
        """
        Return the content of a page as it was after save number version
        (1 is the first save), as list of lines with terminators.

        The history is replayed starting from an empty page. A save made from
        an empty page (the first one, or one after destroy) starts over from
        there. If the history does not fit together (e.g. the page file was
        written by something else), BackendError(no_revision) is raised.
        """
        diffs = self.history(topic, project)
        if not 1 <= version <= len(diffs):
            raise BackendError(NO_REVISION, topic, project, version)
        lines = []
        for diff in diffs[:version]:
            if diff.get(OLD_SIZE) == 0:
                lines = []
            try:
                lines = apply_diff(lines, diff)
            except ValueError as err:
                logging.warning("%s [while replaying history of %s/%s]" % (err, project, topic))
                raise BackendError(NO_REVISION, topic, project, version)
        return [line + '\n' for line in lines]

    # projects

    def project_exists(self, project):
        return self.projects.exists(project)

    def create_project(self, project):
        self.projects.create(project)

    def destroy_project(self, project):
        self.projects.destroy(project)

    def list_projects(self):
        return list(self.projects)

    def list_topics(self, project):
        return list(self.projects.topics(project))

    def search_project(self, project, pattern):
        return search_topics(self, project, pattern)

    # locking

    def obtain_lock(self, page, address=UNKNOWN_ADDRESS, timeout=LOCK_TIMEOUT):
        self.locks.obtain(page, address, timeout)

    def release_lock(self, page, address=UNKNOWN_ADDRESS):
        self.locks.release(page, address)
