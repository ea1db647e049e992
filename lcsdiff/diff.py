import json

from lcsdiff.lcs import Edit


def old_sequence(results):
    """Rebuild the old sequence from the removed and
    common elements of a diff."""
    return [result.data for result in results
            if result.action != Edit.ADDED]


def new_sequence(results):
    """Rebuild the new sequence from the added and
    common elements of a diff."""
    return [result.data for result in results
            if result.action != Edit.REMOVED]


def count_actions(results):
    counts = {name: 0 for name in Edit.NAMES.values()}
    for result in results:
        counts[result.name] += 1
    return counts


class EditBuffer:
    """Collect consecutive elements sharing the same action."""

    TYPES = {Edit.COMMON: "UNC",
             Edit.ADDED: "INS",
             Edit.REMOVED: "DEL"}

    def __init__(self, action=None, position=None):
        self.action = action
        self.position = position
        self.edits = []

    def edit_tuple(self):
        return self.TYPES[self.action], self.position, tuple(self.edits)

    def __str__(self):
        type_, position, edits = self.edit_tuple()
        return "{} @{}: {}".format(type_, position, edits)


def edit_script(results):
    """Given the result of a diff, return the runs of
    added and removed elements.

    Each run is a tuple `(type, position, tokens)` where `type`
    is either "INS" or "DEL" and `position` is the index in the
    old sequence the run applies to.

    Eg:
      old = ["Trento", "is", "a", "city"]
      new = ["Trento", "is", "the", "city"]

    The function yields:

      ("INS", 2, ("the",)), ("DEL", 2, ("a",))
    """
    buffer = EditBuffer()
    # number of elements of the old sequence consumed so far
    consumed = 0
    for result in results:
        if result.action != buffer.action:
            if buffer.action not in (None, Edit.COMMON):
                yield buffer.edit_tuple()
            buffer = EditBuffer(result.action, consumed)
        buffer.edits.append(result.data)
        if result.action != Edit.ADDED:
            consumed += 1
    if buffer.action not in (None, Edit.COMMON):
        yield buffer.edit_tuple()


def to_records(results):
    return [{"action": result.name,
             "old_index": result.old_index,
             "new_index": result.new_index,
             "data": result.data}
            for result in results]


def to_json(results):
    return json.dumps(to_records(results))
