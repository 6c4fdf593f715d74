import numbers

import numpy


class Sample(object):
    """ A single (input, expected output, actual output) data point

    The actual output is overwritten on every forward pass of a network; the
    input and expected output are the ground truth.
    """
    def __init__(self, input=0.0, expected_output=0.0, actual_output=0.0):
        self.input = float(input)
        self.expected_output = float(expected_output)
        self.actual_output = float(actual_output)

    def __repr__(self):
        return "<Sample input={}, expected_output={}, actual_output={}>".format(
            self.input, self.expected_output, self.actual_output)

    def __eq__(self, other):
        if not isinstance(other, Sample):
            return NotImplemented
        return (self.input == other.input and
                self.expected_output == other.expected_output and
                self.actual_output == other.actual_output)

    # Samples are mutated in place during training.
    __hash__ = None

    def copy(self):
        return Sample(self.input, self.expected_output, self.actual_output)


def as_sample(entry):
    """ Returns a new :class:`Sample` built from `entry`

    Parameters
    ----------
    entry: Sample, or sequence of 2 or 3 numbers
        Either an existing sample (which is copied), an
        `(input, expected_output)` pair or an
        `(input, expected_output, actual_output)` triple.

    """
    if isinstance(entry, Sample):
        return entry.copy()

    if not numpy.iterable(entry) or isinstance(entry, str):
        msg = "Cannot build a sample from type {}"
        raise TypeError(msg.format(type(entry).__name__))

    values = list(entry)

    if len(values) not in (2, 3):
        msg = "Sample sequences must have 2 or 3 values but had {}"
        raise TypeError(msg.format(len(values)))

    try:
        return Sample(*values)
    except ValueError:
        msg = "Sample values must be numbers but got {}"
        raise TypeError(msg.format(values))


def _is_index(value):
    return (isinstance(value, numbers.Integral) and
            not isinstance(value, bool))


class SampleTable(object):
    """ An ordered, mutable table of :class:`Sample` objects that a network
    trains on and predicts for

    The table owns its samples: every sample that crosses into the table
    (at construction or through :meth:`add_data`) is copied, so edits to the
    caller's objects never reach the table and vice versa. Samples read back
    with ``table[i]`` are the live objects.
    """
    def __init__(self, source):
        """ Initialize a sample table

        Parameters
        ----------
        source: int, SampleTable, or iterable
            An integer creates that many zero-valued samples. Another table
            is deep-copied. An iterable may hold :class:`Sample` objects,
            `(input, expected_output)` pairs, or
            `(input, expected_output, actual_output)` triples; each entry is
            copied in order.

        """
        if source is None:
            raise ValueError("`source` is None; provide a size or samples")

        if _is_index(source):
            if source < 0:
                msg = "`source` size ({}) is less than 0"
                raise ValueError(msg.format(source))
            self._data = [Sample() for _ in range(source)]
        elif isinstance(source, SampleTable):
            self._data = [sample.copy() for sample in source]
        elif numpy.iterable(source):
            self._data = [as_sample(entry) for entry in source]
        else:
            msg = "`source` of type {} is not a size or an iterable"
            raise TypeError(msg.format(type(source).__name__))

        self._table_size = len(self._data)

    @classmethod
    def from_arrays(cls, inputs, expected_outputs):
        """ Build a table from equal-length arrays of inputs and expected
        outputs
        """
        inputs = numpy.asarray(inputs, dtype=float).ravel()
        expected_outputs = numpy.asarray(expected_outputs, dtype=float).ravel()

        if inputs.shape != expected_outputs.shape:
            msg = "Mismatch in number of values: inputs ({}), outputs ({})"
            raise ValueError(msg.format(len(inputs), len(expected_outputs)))

        return cls(zip(inputs, expected_outputs))

    def __repr__(self):
        return "<SampleTable table_size={:d}>".format(self._table_size)

    def __len__(self):
        return self._table_size

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, index):
        if not _is_index(index):
            msg = "Table indices must be integers, not {}"
            raise TypeError(msg.format(type(index).__name__))

        if not 0 <= index < self._table_size:
            msg = "Index {} out of range for table of size {}"
            raise IndexError(msg.format(index, self._table_size))

        return self._data[index]

    @property
    def table_size(self):
        return self._table_size

    @property
    def inputs(self):
        return numpy.array([sample.input for sample in self._data],
                           dtype=float)

    @property
    def expected_outputs(self):
        return numpy.array([sample.expected_output for sample in self._data],
                           dtype=float)

    @property
    def actual_outputs(self):
        return numpy.array([sample.actual_output for sample in self._data],
                           dtype=float)

    def add_data(self, sample):
        """ Append a copy of `sample`. Returns False (and leaves the table
        untouched) when `sample` is None.
        """
        if sample is None:
            return False

        self._data.append(as_sample(sample))
        self._table_size += 1
        return True

    def remove_data(self, item):
        """ Remove a sample by reference (or, failing that, by value) or by
        index

        Parameters
        ----------
        item: Sample or int
            The sample to remove, or its index. Indices are only valid for
            ``0 < index < table_size``; index 0 is never removed through
            this path.

        Returns
        -------
        removed: bool
            Whether a sample was removed. Malformed arguments give False.

        """
        if isinstance(item, Sample):
            return self._remove_sample(item)
        elif _is_index(item):
            return self._remove_index(item)
        return False

    def _remove_sample(self, sample):
        for index, candidate in enumerate(self._data):
            if candidate is sample:
                return self._pop(index)

        for index, candidate in enumerate(self._data):
            if candidate == sample:
                return self._pop(index)

        return False

    def _remove_index(self, index):
        # Index 0 is excluded; callers rely on the first row staying put.
        if 0 < index < len(self._data):
            return self._pop(index)
        return False

    def _pop(self, index):
        del self._data[index]
        self._table_size -= 1
        return True

    def reset_actual_outputs(self):
        for sample in self._data:
            sample.actual_output = 0.0
