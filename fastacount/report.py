import fcntl
import os

from fastacount.util import CsvWriteError

CSV_HEADER = 'filename;assembly_length;number_of_sequences;average_length;largest_contig;' \
             'shortest_contig;N50;GC_percentage;total_N;N_percentage'


def format_report_lines(report, legacy=False):
    lines = []
    if not legacy:
        lines.append('File name:\t{}'.format(report.filename))
    lines += [
        'Total length of sequence:\t{} bp'.format(report.total_length),
        'Total number of sequences:\t{}'.format(report.sequence_count),
        'Average contig length is:\t{:.2f} bp'.format(report.average_length),
        'Largest contig:\t\t{} bp'.format(report.largest_contig),
        'Shortest contig:\t\t{} bp'.format(report.shortest_contig),
    ]
    for pct, count, length in [
        (25, report.n25_sequence_count, report.n25),
        (50, report.n50_sequence_count, report.n50),
        (75, report.n75_sequence_count, report.n75),
    ]:
        txt = 'N{0} stats:\t\t\t{0}% of total sequence length is contained in the {1} sequences >= {2} bp'
        lines.append(txt.format(pct, count, length))
    lines += [
        'Total GC count:\t\t\t{} bp'.format(report.gc_count),
        'GC %:\t\t\t\t{:.2f} %'.format(report.gc_percentage),
        'Number of Ns:\t\t\t{}'.format(report.n_count),
        'Ns %:\t\t\t\t{:.2f} %'.format(report.n_percentage),
    ]
    return lines

def print_report(report, legacy=False):
    print('')
    for line in format_report_lines(report, legacy=legacy):
        print(line)

def format_csv_row(report):
    return '{};{};{};{:f};{};{};{};{:f};{};{:f}'.format(
        report.filename,
        report.total_length,
        report.sequence_count,
        report.average_length,
        report.largest_contig,
        report.shortest_contig,
        report.n50,
        report.gc_percentage,
        report.n_count,
        report.n_percentage,
    )

def append_to_csv(report, csv_path):
    """Append one row to a semicolon-delimited CSV, writing the header if the file is empty.

    The file is held under an exclusive flock while the row is written so that
    concurrent runs appending to the same file do not interleave.
    """
    try:
        with open(csv_path, 'a', encoding='utf-8') as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                if os.fstat(f.fileno()).st_size == 0:
                    f.write(CSV_HEADER + '\n')
                f.write(format_csv_row(report) + '\n')
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except OSError as e:
        raise CsvWriteError('Failed to append results to {}: {}'.format(csv_path, e)) from e
