# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - path resolver tests
"""


import pytest

from backend import BackendError
from storage.paths import PathResolver


def test_project_directory():
    resolver = PathResolver('./data/')
    assert resolver.project_directory('Default') == './data/Default'


def test_page_file():
    resolver = PathResolver('/srv/wiki')
    assert resolver.page_file('Home', 'Proj') == '/srv/wiki/Proj/Home'
    assert resolver.page_file('Home') == '/srv/wiki/Default/Home'
    assert resolver.diff_file('Home') == '/srv/wiki/Default/Home.rdiff'
    assert resolver.lock_file('Home') == '/srv/wiki/Default/Home.lock'


def test_page_file_extension():
    resolver = PathResolver('/srv/wiki', 'txt')
    assert resolver.page_file('Home', 'Proj') == '/srv/wiki/Proj/Home.txt'
    assert resolver.diff_file('Home', 'Proj') == '/srv/wiki/Proj/Home.txt.rdiff'
    assert resolver.lock_file('Home', 'Proj') == '/srv/wiki/Proj/Home.txt.lock'


@pytest.mark.parametrize('topic, project', [
    ('../secret', 'Default'),
    ('/etc/passwd', 'Default'),
    ('Home', '..'),
    ('Home', '../other'),
    ('Home', '/abs'),
    ('a/../Home', 'Default'),
    ('Home/', 'Default'),
    ('./Home', 'Default'),
    ('', 'Default'),
    ('Home', 'Proj/'),
])
def test_unsafe_names(topic, project):
    resolver = PathResolver('/srv/wiki')
    with pytest.raises(BackendError) as excinfo:
        resolver.page_file(topic, project)
    assert excinfo.value.reason == 'unsafe_name'
