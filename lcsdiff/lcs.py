import copy


def default_equal(new_item, old_item):
    return new_item == old_item


class Edit:
    """Actions an element of the diff can be labelled with."""
    REMOVED = 0
    COMMON = 1
    ADDED = 2

    NAMES = {REMOVED: "Removed",
             COMMON: "Common",
             ADDED: "Added"}


class DiffElement:
    """An element of the diff together with its position in the
    old sequence and in the new one.

    A position is `None` when the element does not belong to
    that sequence (added elements have no old index, removed
    elements have no new index).
    """

    __slots__ = ("old_index", "new_index", "data")

    def __init__(self, old_index, new_index, data):
        self.old_index = old_index
        self.new_index = new_index
        self.data = data

    def __eq__(self, other):
        if not isinstance(other, DiffElement):
            return NotImplemented
        return (self.old_index, self.new_index, self.data) ==\
            (other.old_index, other.new_index, other.data)

    def __repr__(self):
        return "DiffElement({!r}, {!r}, {!r})".format(self.old_index,
                                                      self.new_index,
                                                      self.data)


class DiffResult:
    """A single unit of the diff: an element labelled
    with the action that transforms the old sequence
    into the new one.

    Use the `removed`, `common` and `added` constructors
    instead of building the element by hand, they make
    sure the indices are consistent with the action.
    """

    __slots__ = ("action", "element")

    def __init__(self, action, element):
        if action not in Edit.NAMES:
            raise ValueError("Unknown action: {}".format(action))
        self.action = action
        self.element = element

    @classmethod
    def removed(cls, old_index, data):
        return cls(Edit.REMOVED, DiffElement(old_index, None, data))

    @classmethod
    def common(cls, old_index, new_index, data):
        return cls(Edit.COMMON, DiffElement(old_index, new_index, data))

    @classmethod
    def added(cls, new_index, data):
        return cls(Edit.ADDED, DiffElement(None, new_index, data))

    @property
    def name(self):
        return Edit.NAMES[self.action]

    @property
    def old_index(self):
        return self.element.old_index

    @property
    def new_index(self):
        return self.element.new_index

    @property
    def data(self):
        return self.element.data

    def is_removed(self):
        return self.action == Edit.REMOVED

    def is_common(self):
        return self.action == Edit.COMMON

    def is_added(self):
        return self.action == Edit.ADDED

    def __eq__(self, other):
        if not isinstance(other, DiffResult):
            return NotImplemented
        return self.action == other.action and self.element == other.element

    def __repr__(self):
        if self.action == Edit.REMOVED:
            return "Removed({!r}, {}, _)".format(self.data, self.old_index)
        if self.action == Edit.ADDED:
            return "Added({!r}, _, {})".format(self.data, self.new_index)
        return "Common({!r}, {}, {})".format(self.data,
                                             self.old_index,
                                             self.new_index)


def common_spans(old, new, equal_function=None):
    """Return the size of the common prefix and of the
    common suffix of the two sequences.

    The suffix is searched only in the part of the sequences
    not already covered by the prefix, so that
    `prefix_size + suffix_size <= min(len(old), len(new))`.
    """
    if equal_function is None:
        equal_function = default_equal
    old_len = len(old)
    new_len = len(new)
    max_size = min(old_len, new_len)

    prefix_size = 0
    while prefix_size < max_size and\
          equal_function(new[prefix_size], old[prefix_size]):
        prefix_size += 1

    suffix_size = 0
    while prefix_size + suffix_size < max_size and\
          equal_function(new[new_len - 1 - suffix_size],
                         old[old_len - 1 - suffix_size]):
        suffix_size += 1
    return prefix_size, suffix_size


def create_table(old, new, equal_function=None):
    """Build the table of the lengths of the longest common
    subsequences between the suffixes of the two sequences.

    `table[n][o]` is the LCS length between `new[n:]` and
    `old[o:]`, so the table has `len(new) + 1` rows and
    `len(old) + 1` columns, the last row and the last
    column being 0.

    Note:
      The table is filled from the end of the sequences
      backwards, so the diff can walk it forwards.
    """
    if equal_function is None:
        equal_function = default_equal
    new_len = len(new)
    old_len = len(old)
    table = [[0] * (old_len + 1) for _ in range(new_len + 1)]
    for n in range(new_len - 1, -1, -1):
        row = table[n]
        next_row = table[n + 1]
        for o in range(old_len - 1, -1, -1):
            if equal_function(new[n], old[o]):
                row[o] = next_row[o + 1] + 1
            else:
                row[o] = max(next_row[o], row[o + 1])
    return table


def lcs_length(old, new, equal_function=None):
    """Length of the longest common subsequence of `old` and `new`."""
    return create_table(old, new, equal_function)[0][0]


def diff(old, new, equal_function=None, trim=True):
    """Compute the diff transforming `old` into `new`.

    Args:
      old: the original sequence.
      new: the modified sequence.
      equal_function: function used to compare an element of
        `new` with an element of `old` (default: `==`).
      trim (bool): exclude the common prefix and suffix from
        the LCS computation.

    Returns:
      A list of DiffResult, in the order they must be applied
      from left to right.

    Note:
      When two edits lead to a LCS of the same length the added
      element is preferred over the removed one. Because of this
      two sequences without elements in common produce all the
      added elements first and then all the removed ones.
    """
    if equal_function is None:
        equal_function = default_equal
    old_len = len(old)
    new_len = len(new)

    if old_len == 0 or new_len == 0:
        return [DiffResult.added(n, copy.deepcopy(new[n]))
                for n in range(new_len)] +\
               [DiffResult.removed(o, copy.deepcopy(old[o]))
                for o in range(old_len)]

    prefix_size, suffix_size = 0, 0
    if trim:
        prefix_size, suffix_size = common_spans(old, new, equal_function)
    old_residual = old[prefix_size:old_len - suffix_size]
    new_residual = new[prefix_size:new_len - suffix_size]
    old_residual_len = len(old_residual)
    new_residual_len = len(new_residual)

    result = [DiffResult.common(index, index, copy.deepcopy(new[index]))
              for index in range(prefix_size)]

    table = create_table(old_residual, new_residual, equal_function)
    n = 0
    o = 0
    while n < new_residual_len and o < old_residual_len:
        new_index = n + prefix_size
        old_index = o + prefix_size
        if equal_function(new[new_index], old[old_index]):
            result.append(DiffResult.common(old_index, new_index,
                                            copy.deepcopy(new[new_index])))
            n += 1
            o += 1
        elif table[n + 1][o] >= table[n][o + 1]:
            result.append(DiffResult.added(new_index,
                                           copy.deepcopy(new[new_index])))
            n += 1
        else:
            result.append(DiffResult.removed(old_index,
                                             copy.deepcopy(old[old_index])))
            o += 1
    while n < new_residual_len:
        new_index = n + prefix_size
        result.append(DiffResult.added(new_index,
                                       copy.deepcopy(new[new_index])))
        n += 1
    while o < old_residual_len:
        old_index = o + prefix_size
        result.append(DiffResult.removed(old_index,
                                         copy.deepcopy(old[old_index])))
        o += 1

    for suffix_index in range(suffix_size):
        old_index = suffix_index + old_residual_len + prefix_size
        new_index = suffix_index + new_residual_len + prefix_size
        result.append(DiffResult.common(old_index, new_index,
                                        copy.deepcopy(new[new_index])))
    return result
