# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - backend base classes and errors
"""


from abc import abstractmethod, ABCMeta

from config import DEFAULT_PROJECT, LOCK_TIMEOUT, UNKNOWN_ADDRESS


class BackendError(Exception):
    """
    generic backend failure, reason is a symbolic name (see config)
    """
    def __init__(self, reason, *args):
        super(BackendError, self).__init__(reason, *args)
        self.reason = reason
        self.details = args

    def __str__(self):
        if self.details:
            return '%s: %s' % (self.reason, ', '.join(str(arg) for arg in self.details))
        return str(self.reason)


class ProjectExists(Exception):
    """
    a project of that name is already there
    """
    def __init__(self, project):
        super(ProjectExists, self).__init__(project)
        self.project = project


class Page(object):
    """
    what callers hand us for storing: the page key and its full new text
    """
    def __init__(self, topic, project=DEFAULT_PROJECT, rawtext=u'', change_ip=None, change_id=None):
        self.topic = topic
        self.project = project
        self.rawtext = rawtext
        self.change_ip = change_ip
        self.change_id = change_id

    def __repr__(self):
        return '<Page %s/%s>' % (self.project, self.topic)


class BackendBase(object, metaclass=ABCMeta):
    """
    read-only part of the capability set, locking and searching included
    """
    @abstractmethod
    def load(self, topic, project):
        """
        return the page content as list of lines (with line terminators)
        """

    @abstractmethod
    def project_exists(self, project):
        """
        return True if the project is there
        """

    @abstractmethod
    def page_exists(self, topic, project=DEFAULT_PROJECT):
        """
        return True if the project and the page are there
        """

    @abstractmethod
    def list_projects(self):
        """
        return the names of all projects (in no particular order)
        """

    @abstractmethod
    def list_topics(self, project):
        """
        return the names of all topics of a project (in no particular order)
        """

    @abstractmethod
    def search_project(self, project, pattern):
        """
        return a dict topic -> number of hits of pattern in name and content
        """

    @abstractmethod
    def obtain_lock(self, page, address=UNKNOWN_ADDRESS, timeout=LOCK_TIMEOUT):
        """
        lock the page for address, raise BackendError if someone else has it
        """

    @abstractmethod
    def release_lock(self, page, address=UNKNOWN_ADDRESS):
        """
        unlock the page, raise BackendError if someone else has it
        """


class MutableBackendBase(BackendBase):
    """
    same as Backend, but read/write
    """
    @abstractmethod
    def store(self, page):
        """
        save page.rawtext as new content of the page, record the change
        """

    @abstractmethod
    def destroy(self, page):
        """
        remove the page content (if there is any)
        """

    @abstractmethod
    def create_project(self, project):
        """
        create the project, raise ProjectExists if it is already there
        """

    @abstractmethod
    def destroy_project(self, project):
        """
        remove the (empty) project
        """
