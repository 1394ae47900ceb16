# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - filesystem storage of projects and pages

A project is a directory below the data path, a page is a text file in its
project directory. Storing a page writes 2 files: first the page history,
then the page content. These 2 writes are not atomic, if something goes wrong
in between, the history has one record more than the content has seen.
"""


import os
import logging

from config import DEFAULT_PROJECT, DIFF_SUFFIX, LOCK_SUFFIX, NO_PROJECT
from backend import BackendError, ProjectExists
from storage.history import make_diff


def split_lines(text):
    """
    split text into lines (without terminators), a final line break does not
    start another line
    """
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


class ProjectStorage(object):
    """
    the project directories below the data path
    """
    def __init__(self, resolver):
        self.resolver = resolver

    def exists(self, project):
        return os.path.isdir(self.resolver.project_directory(project))

    def create(self, project):
        path = self.resolver.project_directory(project)
        if os.path.exists(path):
            raise ProjectExists(project)
        os.mkdir(path)
        logging.debug("created project %r in %s" % (project, path))

    def destroy(self, project):
        # a project with pages in it is not removed, rmdir raises OSError
        path = self.resolver.project_directory(project)
        if os.path.isdir(path):
            os.rmdir(path)
            logging.debug("destroyed project %r" % (project, ))

    def __iter__(self):
        data_path = self.resolver.data_path
        for name in os.listdir(data_path):
            if os.path.isdir(os.path.join(data_path, name)):
                yield name

    def topics(self, project):
        """
        iterate over the topic names of a project

        Only regular files are topics, history files are not. A .lock file is
        not a topic if it is the lock of an existing page (the lock of a page
        not stored yet shows up as topic). With an extension configured, only
        files having it are topics and the topic name is the file name
        without it.
        """
        path = self.resolver.project_directory(project)
        if not os.path.exists(path):
            raise BackendError(NO_PROJECT, project)
        extension = self.resolver.extension
        for name in os.listdir(path):
            if name.endswith(DIFF_SUFFIX):
                continue
            if not os.path.isfile(os.path.join(path, name)):
                continue
            if name.endswith(LOCK_SUFFIX) and \
               os.path.isfile(os.path.join(path, name[:-len(LOCK_SUFFIX)])):
                continue
            if extension is not None:
                suffix = '.' + extension
                if not name.endswith(suffix) or name == suffix:
                    continue
                name = name[:-len(suffix)]
            yield name


class PageStorage(object):
    """
    the page files, storing a page also appends to its history
    """
    def __init__(self, resolver, projects, history):
        self.resolver = resolver
        self.projects = projects
        self.history = history

    def load(self, topic, project):
        # a missing page raises FileNotFoundError, use exists() to check first
        path = self.resolver.page_file(topic, project)
        with open(path, 'r', encoding='utf-8', newline='\n') as f:
            return f.readlines()

    def exists(self, topic, project=DEFAULT_PROJECT):
        path = self.resolver.page_file(topic, project)
        return self.projects.exists(project) and os.path.exists(path)

    def _load_lines(self, path):
        try:
            with open(path, 'r', encoding='utf-8', newline='\n') as f:
                return split_lines(f.read())
        except FileNotFoundError:
            return []

    def store(self, page):
        path = self.resolver.page_file(page.topic, page.project)
        old_lines = self._load_lines(path)
        new_lines = split_lines(page.rawtext)

        diff = make_diff(page, old_lines, new_lines)
        diffs = self.history.append(page.topic, page.project, diff)

        with open(path, 'w', encoding='utf-8', newline='\n') as f:
            for line in new_lines:
                f.write(line + '\n')
        logging.debug("stored %r, now at version %d" % (page, len(diffs)))

    def destroy(self, page):
        # the history file is kept
        path = self.resolver.page_file(page.topic, page.project)
        if os.path.exists(path):
            os.remove(path)
            logging.debug("destroyed %r" % (page, ))
