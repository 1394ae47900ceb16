# Copyright: 2011 MoinMoin:ThomasWaldmann
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
wikistore - page history (one diff record per save)

The history of a page lives next to the page file, in <pagefile>.rdiff. It is
a JSON list of diff records, oldest first. Records are only ever appended,
the whole list is rewritten on every save.

A diff record is a dict::

    {
        old_version: 3,          # number of saves before this one
        old_size: 12,            # number of lines the diff was made from
        new_version: 4,
        change_date: 1318712345, # UNIX UTC timestamp (int)
        change_ip: u'10.0.0.1',  # from the page, may be None
        change_id: u'joe',       # from the page, may be None
        diff: [hunk, ...],
    }

and a hunk is a changed region, with the lines of both sides, so a diff can
be applied forwards (apply_diff) and backwards (revert_diff)::

    {op: u'replace', old_start: 1, old_lines: [u'World'],
                     new_start: 1, new_lines: [u'Wiki']}
"""


import json
import time
from difflib import SequenceMatcher

from config import OLD_VERSION, OLD_SIZE, NEW_VERSION, CHANGE_DATE, CHANGE_IP, CHANGE_ID, DIFF, \
                   OP, OLD_START, OLD_LINES, NEW_START, NEW_LINES


def make_diff(page, old_lines, new_lines):
    """
    Compute the diff record for a change of page from old_lines to new_lines.

    :param page: the page being stored (change_ip / change_id are optional)
    :param old_lines: previous content, list of lines without terminators
    :param new_lines: new content, list of lines without terminators
    :returns: diff record (without version numbers, see HistoryStorage.append)
    """
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    hunks = []
    for op, i1, i2, j1, j2 in matcher.get_opcodes():
        if op == 'equal':
            continue
        hunks.append({
            OP: op,
            OLD_START: i1,
            OLD_LINES: old_lines[i1:i2],
            NEW_START: j1,
            NEW_LINES: new_lines[j1:j2],
        })
    return {
        OLD_SIZE: len(old_lines),
        CHANGE_DATE: int(time.time()),
        CHANGE_IP: getattr(page, CHANGE_IP, None),
        CHANGE_ID: getattr(page, CHANGE_ID, None),
        DIFF: hunks,
    }


def _patch(lines, hunks, start_key, from_key, to_key):
    result = []
    pos = 0
    for hunk in hunks:
        start = hunk[start_key]
        end = start + len(hunk[from_key])
        if start < pos or lines[start:end] != hunk[from_key]:
            raise ValueError("diff does not apply at line %d" % start)
        result.extend(lines[pos:start])
        result.extend(hunk[to_key])
        pos = end
    result.extend(lines[pos:])
    return result


def apply_diff(old_lines, diff):
    """
    Reconstruct the new lines from the old lines and a diff record.
    Raises ValueError if old_lines are not what the diff was made from.
    """
    if diff.get(OLD_SIZE, len(old_lines)) != len(old_lines):
        raise ValueError("diff was made from %d lines, not %d" % (diff[OLD_SIZE], len(old_lines)))
    return _patch(old_lines, diff[DIFF], OLD_START, OLD_LINES, NEW_LINES)


def revert_diff(new_lines, diff):
    """
    Reconstruct the old lines from the new lines and a diff record.
    """
    return _patch(new_lines, diff[DIFF], NEW_START, NEW_LINES, OLD_LINES)


class HistoryStorage(object):
    """
    the per-page .rdiff files
    """
    def __init__(self, resolver):
        self.resolver = resolver

    def load(self, topic, project):
        """
        return the list of diff records of a page, [] if it has no history
        """
        path = self.resolver.diff_file(topic, project)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return []

    def _save(self, path, diffs):
        text = json.dumps(diffs, ensure_ascii=False)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)

    def append(self, topic, project, diff):
        """
        Add diff (see make_diff) to the history of a page, numbering it.

        :returns: the complete, updated list of diff records
        """
        diffs = self.load(topic, project)
        diff[OLD_VERSION] = len(diffs)
        diff[NEW_VERSION] = len(diffs) + 1
        diffs.append(diff)
        self._save(self.resolver.diff_file(topic, project), diffs)
        return diffs
