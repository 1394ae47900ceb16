# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - advisory page locks

A lock is a file next to the page file, <pagefile>.lock, holding 2 lines:
the owner address and the UNIX timestamp when the lock expires. The file
being there is the lock.

The lock may be taken (or removed) by its owner at any time and by anybody
else once it is expired. Expired locks are not cleaned up by anything, they
just get overwritten by the next one asking for the lock.

Nothing else in the storage looks at locks, callers have to obtain a lock
before editing a page and release it afterwards.
"""


import os
import time
import logging

from config import LOCK_TIMEOUT, UNKNOWN_ADDRESS, PAGE_LOCKED, INVALID_ADDRESS
from backend import BackendError


class LockManager(object):
    def __init__(self, resolver):
        self.resolver = resolver

    def _now(self):
        return int(time.time())

    def _read(self, path):
        try:
            with open(path, 'r', encoding='utf-8', newline='\n') as f:
                lines = f.read().split('\n')
        except FileNotFoundError:
            return None
        owner = lines[0]
        try:
            expiry = int(lines[1])
        except (IndexError, ValueError):
            # unusable expiry, nobody can own that lock any more
            logging.warning("malformed lock file %s, treating it as expired" % path)
            expiry = 0
        return owner, expiry

    def _may_take(self, lock, address, now):
        owner, expiry = lock
        return owner == address or expiry < now

    def lock_owner(self, page):
        """
        return (owner, expiry) of the lock on page, None if it is not locked
        """
        return self._read(self.resolver.lock_file(page.topic, page.project))

    def obtain(self, page, address=UNKNOWN_ADDRESS, timeout=LOCK_TIMEOUT):
        """
        Lock page for address for the next timeout seconds.

        Renews the lock if address already has it, takes it over if it is
        expired, raises BackendError(page_locked) otherwise. The address is
        the first line of the lock file, so it must not contain line breaks.
        """
        if '\n' in address or '\r' in address:
            raise BackendError(INVALID_ADDRESS, address)
        path = self.resolver.lock_file(page.topic, page.project)
        now = self._now()
        content = '%s\n%d\n' % (address, now + timeout)
        lock = self._read(path)
        if lock is None:
            try:
                fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
            except FileExistsError:
                # somebody else was faster
                raise BackendError(PAGE_LOCKED, page.topic, page.project)
            with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
        elif self._may_take(lock, address, now):
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
        else:
            logging.debug("lock on %r refused to %s, held by %s" % (page, address, lock[0]))
            raise BackendError(PAGE_LOCKED, page.topic, page.project, lock[0])
        logging.debug("lock on %r granted to %s until %d" % (page, address, now + timeout))

    def release(self, page, address=UNKNOWN_ADDRESS):
        """
        Remove the lock of address from page.

        Not being locked is fine, a lock of someone else is only removed if it
        is expired, otherwise BackendError(page_locked) is raised.
        """
        path = self.resolver.lock_file(page.topic, page.project)
        lock = self._read(path)
        if lock is None:
            return
        if not self._may_take(lock, address, self._now()):
            raise BackendError(PAGE_LOCKED, page.topic, page.project, lock[0])
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        logging.debug("lock on %r released by %s" % (page, address))
