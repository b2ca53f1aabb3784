import sys
from dataclasses import dataclass

import numpy

from fastacount.util import AllocationFailure, EmptyInputError, FinalizedError, StoreFrozenError

DEFAULT_LENGTH_CAPACITY = 1000


@dataclass(frozen=True, slots=True)
class RankStats:
    n25: int
    n25_sequence_count: int
    n50: int
    n50_sequence_count: int
    n75: int
    n75_sequence_count: int


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    filename: str
    total_length: int
    sequence_count: int
    gc_count: int
    n_count: int
    largest_contig: int
    shortest_contig: int
    n25: int
    n25_sequence_count: int
    n50: int
    n50_sequence_count: int
    n75: int
    n75_sequence_count: int
    average_length: float
    gc_percentage: float
    n_percentage: float


class LengthStore:
    """Append-only buffer of sequence lengths backed by a numpy array.

    Capacity doubles whenever the buffer is full, so appends are amortized O(1).
    After sort_descending() the store is frozen and rejects further appends.
    """

    def __init__(self, capacity=DEFAULT_LENGTH_CAPACITY):
        self._buffer = numpy.empty(max(int(capacity), 1), dtype=numpy.int64)
        self._count = 0
        self.frozen = False

    def __len__(self):
        return self._count

    @property
    def capacity(self):
        return self._buffer.shape[0]

    def append(self, length):
        if self.frozen:
            raise StoreFrozenError('Sequence lengths were already sorted and can no longer be appended.')
        if self._count >= self.capacity:
            self._grow(self.capacity * 2)
        self._buffer[self._count] = length
        self._count += 1

    def _grow(self, new_capacity):
        try:
            new_buffer = numpy.empty(new_capacity, dtype=numpy.int64)
        except MemoryError as e:
            txt = 'Memory allocation failed while growing the length store to {:,} entries.'
            raise AllocationFailure(txt.format(new_capacity)) from e
        new_buffer[:self._count] = self._buffer[:self._count]
        self._buffer = new_buffer

    def values(self):
        return self._buffer[:self._count]

    def sort_descending(self):
        lengths = self.values()
        lengths.sort()
        lengths[:] = lengths[::-1].copy()
        self.frozen = True
        return lengths


def calc_nq_stats(sorted_lengths, total_length):
    """N25/N50/N75 over lengths already sorted in descending order.

    Thresholds use truncating integer division of total_length. For each threshold
    the first length whose cumulative sum reaches it is recorded along with the
    number of sequences taken so far. Thresholds never reached stay at 0.
    """
    thresholds = (total_length // 4, total_length // 2, total_length * 3 // 4)
    found = [None, None, None]
    cumulative_length = 0
    cumulative_sequences = 0
    for length in sorted_lengths:
        length = int(length)
        cumulative_length += length
        cumulative_sequences += 1
        for i in range(3):
            if (found[i] is None) and (cumulative_length >= thresholds[i]):
                found[i] = (length, cumulative_sequences)
        if found[2] is not None:
            break
    found = [ f if f is not None else (0, 0) for f in found ]
    return RankStats(
        n25=found[0][0], n25_sequence_count=found[0][1],
        n50=found[1][0], n50_sequence_count=found[1][1],
        n75=found[2][0], n75_sequence_count=found[2][1],
    )


class StatsAccumulator:
    def __init__(self, filename, capacity=DEFAULT_LENGTH_CAPACITY):
        self.filename = filename
        self.total_length = 0
        self.sequence_count = 0
        self.gc_count = 0
        self.n_count = 0
        self.largest_contig = 0
        self.shortest_contig = sys.maxsize
        self.lengths = LengthStore(capacity=capacity)
        self.finalized = False

    def ingest(self, record):
        if self.finalized:
            raise FinalizedError('Cannot ingest {} after the statistics were finalized.'.format(record.id))
        seq = str(record.seq).upper()
        length = len(seq)
        gc = seq.count('G') + seq.count('C')
        n = seq.count('N')
        # Grow the store first so an allocation failure leaves the aggregates untouched.
        self.lengths.append(length)
        self.sequence_count += 1
        self.total_length += length
        self.gc_count += gc
        self.n_count += n
        if length > self.largest_contig:
            self.largest_contig = length
        if length < self.shortest_contig:
            self.shortest_contig = length

    def finalize(self):
        if self.finalized:
            raise FinalizedError('Statistics for {} were already finalized.'.format(self.filename))
        if self.sequence_count == 0:
            raise EmptyInputError('No sequences found in {}.'.format(self.filename))
        if self.total_length == 0:
            txt = 'All {:,} sequences in {} are empty. Length-based statistics are undefined.'
            raise EmptyInputError(txt.format(self.sequence_count, self.filename))
        self.finalized = True
        sorted_lengths = self.lengths.sort_descending()
        rank = calc_nq_stats(sorted_lengths, self.total_length)
        return AnalysisReport(
            filename=self.filename,
            total_length=self.total_length,
            sequence_count=self.sequence_count,
            gc_count=self.gc_count,
            n_count=self.n_count,
            largest_contig=self.largest_contig,
            shortest_contig=self.shortest_contig,
            n25=rank.n25,
            n25_sequence_count=rank.n25_sequence_count,
            n50=rank.n50,
            n50_sequence_count=rank.n50_sequence_count,
            n75=rank.n75,
            n75_sequence_count=rank.n75_sequence_count,
            average_length=self.total_length / self.sequence_count,
            gc_percentage=self.gc_count / self.total_length * 100,
            n_percentage=self.n_count / self.total_length * 100,
        )
