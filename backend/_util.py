# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - backend utilities: linear full text search

There is no index, every search reads all pages of the project.
"""


import re
import logging

from config import INVALID_SEARCH_PATTERN
from backend import BackendError


def compile_pattern(pattern):
    """
    compile a (case insensitive) search pattern, a plain string works too
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as err:
        raise BackendError(INVALID_SEARCH_PATTERN, pattern, err)


def count_hits(regex, text):
    # empty matches (e.g. of an empty pattern) are no hits
    return sum(1 for match in regex.finditer(text) if match.group())


def search_topics(backend, project, pattern):
    """
    Search topic names and content of all topics of a project.

    :param backend: anything having list_topics() and load()
    :param project: project name
    :param pattern: regular expression, matched case insensitive
    :returns: dict topic name -> number of hits, with an entry for every
              topic (also for topics without hits)
    """
    regex = compile_pattern(pattern)
    hits = {}
    for topic in backend.list_topics(project):
        hits[topic] = count_hits(regex, topic)
        try:
            lines = backend.load(topic, project)
        except (OSError, ValueError) as err:
            # unreadable / undecodable page, search the rest anyway
            logging.warning("%s [while searching topic %r in project %r]" % (err, topic, project))
            lines = ['']
        for line in lines:
            hits[topic] += count_hits(regex, line)
    return hits
