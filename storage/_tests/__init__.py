# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - storage tests
"""


import os
import shutil
import tempfile

from storage.paths import PathResolver


class StorageTestBase(object):
    extension = None

    def setup_method(self, method):
        """
        data path with a project 'Default', self.resolver pointing to it
        """
        self.data_path = tempfile.mkdtemp()
        os.mkdir(os.path.join(self.data_path, 'Default'))
        self.resolver = PathResolver(self.data_path, self.extension)

    def teardown_method(self, method):
        shutil.rmtree(self.data_path)
