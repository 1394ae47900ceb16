# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - backend tests
"""


import pytest

from backend import BackendError, ProjectExists, Page


class BackendTestBase(object):
    def setup_method(self, method):
        """
        self.be needs to be a backend with an existing project 'Default'
        """
        raise NotImplementedError

    def teardown_method(self, method):
        pass

    def test_load_raises(self):
        with pytest.raises(OSError):
            self.be.load('doesnotexist', 'Default')

    def test_page_exists(self):
        assert not self.be.page_exists('doesnotexist')
        assert not self.be.page_exists('doesnotexist', 'NoProject')

    def test_list_topics_no_project(self):
        with pytest.raises(BackendError) as excinfo:
            self.be.list_topics('NoProject')
        assert excinfo.value.reason == 'no_project'


class MutableBackendTestBase(BackendTestBase):
    def test_store_load(self):
        page = Page('Home', 'Default', 'Hello\nWorld')
        self.be.store(page)
        assert self.be.load('Home', 'Default') == ['Hello\n', 'World\n']
        assert self.be.page_exists('Home', 'Default')
        page.rawtext = 'Hello\nWiki'
        self.be.store(page)
        assert self.be.load('Home', 'Default') == ['Hello\n', 'Wiki\n']

    def test_store_empty(self):
        self.be.store(Page('Empty', 'Default', ''))
        assert self.be.page_exists('Empty')
        assert self.be.load('Empty', 'Default') == []

    def test_store_blank_lines(self):
        self.be.store(Page('Blank', 'Default', 'a\n\nb\n'))
        assert self.be.load('Blank', 'Default') == ['a\n', '\n', 'b\n']

    def test_destroy(self):
        page = Page('Home', 'Default', 'Hello')
        self.be.store(page)
        self.be.destroy(page)
        assert not self.be.page_exists('Home')
        # destroying again is fine
        self.be.destroy(page)

    def test_create_destroy_project(self):
        assert not self.be.project_exists('NewProj')
        self.be.create_project('NewProj')
        assert self.be.project_exists('NewProj')
        with pytest.raises(ProjectExists):
            self.be.create_project('NewProj')
        self.be.destroy_project('NewProj')
        assert not self.be.project_exists('NewProj')
        # not there, nothing to do
        self.be.destroy_project('NewProj')

    def test_destroy_project_not_empty(self):
        self.be.create_project('Full')
        self.be.store(Page('Home', 'Full', 'Hello'))
        with pytest.raises(OSError):
            self.be.destroy_project('Full')
        assert self.be.project_exists('Full')

    def test_list_projects(self):
        self.be.create_project('One')
        self.be.create_project('Two')
        assert sorted(self.be.list_projects()) == ['Default', 'One', 'Two']

    def test_list_topics(self):
        assert self.be.list_topics('Default') == []
        for topic in ['Home', 'Other', 'Third']:
            self.be.store(Page(topic, 'Default', 'text of %s' % topic))
        assert sorted(self.be.list_topics('Default')) == ['Home', 'Other', 'Third']

    def test_search_project(self):
        self.be.store(Page('Home', 'Default', 'Hello\nWorld, hello world'))
        self.be.store(Page('HelloPage', 'Default', 'nothing'))
        self.be.store(Page('Other', 'Default', 'nothing here'))
        hits = self.be.search_project('Default', 'hello')
        assert hits == {'Home': 2, 'HelloPage': 1, 'Other': 0}

    def test_search_project_no_hits(self):
        self.be.store(Page('Home', 'Default', 'Hello'))
        self.be.store(Page('Other', 'Default', 'World'))
        assert self.be.search_project('Default', 'xyzzy') == {'Home': 0, 'Other': 0}
        assert self.be.search_project('Default', '') == {'Home': 0, 'Other': 0}

    def test_search_project_empty(self):
        assert self.be.search_project('Default', 'anything') == {}

    def test_lock_conflict(self):
        page = Page('Home', 'Default')
        self.be.obtain_lock(page, 'A')
        with pytest.raises(BackendError):
            self.be.obtain_lock(page, 'B')
        with pytest.raises(BackendError):
            self.be.release_lock(page, 'B')
        # renewal by the owner
        self.be.obtain_lock(page, 'A')
        self.be.release_lock(page, 'A')
        self.be.obtain_lock(page, 'B')
        self.be.release_lock(page, 'B')

    def test_lock_expired(self):
        page = Page('Home', 'Default')
        self.be.obtain_lock(page, 'A', timeout=-10)
        self.be.obtain_lock(page, 'B')
        with pytest.raises(BackendError):
            self.be.obtain_lock(page, 'A')

    def test_release_unlocked(self):
        self.be.release_lock(Page('Home', 'Default'), 'A')
