# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - page history tests
"""


import json

import pytest

from config import OLD_VERSION, OLD_SIZE, NEW_VERSION, CHANGE_DATE, CHANGE_IP, CHANGE_ID, DIFF
from backend import Page
from storage.history import make_diff, apply_diff, revert_diff, HistoryStorage
from storage._tests import StorageTestBase


CHANGES = [
    ([], ['Hello', 'World']),
    (['Hello', 'World'], ['Hello', 'Wiki']),
    (['a', 'b', 'c', 'd'], ['b', 'c', 'x', 'd', 'e']),
    (['a', 'b'], []),
    (['same'], ['same']),
]


@pytest.mark.parametrize('old, new', CHANGES)
def test_apply_revert(old, new):
    diff = make_diff(Page('Home'), old, new)
    assert apply_diff(old, diff) == new
    assert revert_diff(new, diff) == old


def test_make_diff():
    page = Page('Home', change_ip='10.0.0.1', change_id='joe')
    diff = make_diff(page, ['Hello', 'World'], ['Hello', 'Wiki'])
    assert diff[DIFF] == [{'op': 'replace', 'old_start': 1, 'old_lines': ['World'],
                           'new_start': 1, 'new_lines': ['Wiki']}]
    assert diff[CHANGE_IP] == '10.0.0.1'
    assert diff[CHANGE_ID] == 'joe'
    assert isinstance(diff[CHANGE_DATE], int)


def test_make_diff_plain_page():
    class PlainPage(object):
        topic, project, rawtext = 'Home', 'Default', ''
    diff = make_diff(PlainPage(), [], ['x'])
    assert diff[CHANGE_IP] is None
    assert diff[CHANGE_ID] is None


def test_apply_wrong_size():
    diff = make_diff(Page('Home'), ['Hello'], ['Hello', 'World'])
    assert diff[OLD_SIZE] == 1
    # an insert at the end would fit anywhere, the size does not
    with pytest.raises(ValueError):
        apply_diff([], diff)
    with pytest.raises(ValueError):
        apply_diff(['Hello', 'Extra'], diff)


def test_apply_wrong_base():
    diff = make_diff(Page('Home'), ['Hello', 'World'], ['Hello', 'Wiki'])
    with pytest.raises(ValueError):
        apply_diff(['Hello', 'Moon'], diff)


class TestHistoryStorage(StorageTestBase):
    def setup_method(self, method):
        super(TestHistoryStorage, self).setup_method(method)
        self.history = HistoryStorage(self.resolver)

    def test_load_missing(self):
        assert self.history.load('Home', 'Default') == []

    def test_append(self):
        page = Page('Home')
        self.history.append('Home', 'Default', make_diff(page, [], ['one']))
        diffs = self.history.append('Home', 'Default', make_diff(page, ['one'], ['two']))
        assert [(d[OLD_VERSION], d[NEW_VERSION]) for d in diffs] == [(0, 1), (1, 2)]
        with open(self.resolver.diff_file('Home'), encoding='utf-8') as f:
            assert json.load(f) == diffs
        assert self.history.load('Home', 'Default') == diffs
