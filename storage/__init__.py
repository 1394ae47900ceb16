# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - storage subsystem
=============================

We use a layered approach like this::

 Flatfiles Backend                 the capability set callers use: load, store,
 |                                 destroy, locking, listing, searching, ...
 v
 Project / Page / History / Lock   simple stuff: one kind of file each, read,
 |           |                     write, remove
 v           v
 Path Resolver                     simplest stuff: (project, topic) -> file name

Nothing in here caches anything, every call goes to the filesystem.
"""
