# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - configuration and key constants
"""


from collections import namedtuple

DEFAULT_DATA_PATH = './data/'
DEFAULT_PROJECT = 'Default'

# file name suffixes next to a page file
DIFF_SUFFIX = '.rdiff'
LOCK_SUFFIX = '.lock'

# locks are valid for this many seconds unless the caller asks otherwise
LOCK_TIMEOUT = 600
# owner address used when the caller does not give one
UNKNOWN_ADDRESS = 'UNKNOWN'

# diff record keys
OLD_VERSION = 'old_version'
OLD_SIZE = 'old_size'
NEW_VERSION = 'new_version'
CHANGE_DATE = 'change_date'
CHANGE_IP = 'change_ip'
CHANGE_ID = 'change_id'
DIFF = 'diff'

# hunk keys (one hunk per changed region of a diff)
OP = 'op'
OLD_START = 'old_start'
OLD_LINES = 'old_lines'
NEW_START = 'new_start'
NEW_LINES = 'new_lines'

# BackendError reasons
NO_DATA_DIRECTORY = 'flatfiles_no_data_directory'
NO_PROJECT = 'no_project'
PAGE_LOCKED = 'page_locked'
UNSAFE_NAME = 'unsafe_name'
INVALID_SEARCH_PATTERN = 'invalid_search_pattern'
NO_REVISION = 'no_revision'
INVALID_ADDRESS = 'invalid_lock_address'


class FlatfilesConfig(namedtuple('FlatfilesConfig', 'data_path extension')):
    """
    immutable configuration of a flatfile backend

    :param data_path: directory holding one sub directory per project
    :param extension: optional page file extension (with or without a dot)
    """
    __slots__ = ()

    def __new__(cls, data_path=DEFAULT_DATA_PATH, extension=None):
        if extension:
            extension = extension.lstrip('.')
        return super(FlatfilesConfig, cls).__new__(cls, str(data_path), extension or None)
