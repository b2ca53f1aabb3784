from fastacount.accumulator import StatsAccumulator
from fastacount.report import append_to_csv, print_report
from fastacount.util import *

import sys

def analyze_seqfile(seqfile, seqformat='fasta'):
    accumulator = StatsAccumulator(filename=display_name(seqfile))
    for record in iter_seqs(seqfile=seqfile, seqformat=seqformat):
        accumulator.ingest(record)
    sys.stderr.write('Number of input sequences: {:,}\n'.format(accumulator.sequence_count))
    return accumulator.finalize()

def stats_main(args):
    report = analyze_seqfile(seqfile=args.seqfile, seqformat=args.inseqformat)
    if args.csv is None:
        print_report(report, legacy=args.legacy)
    else:
        append_to_csv(report, args.csv)
        sys.stderr.write('Appended results for {} to {}\n'.format(report.filename, args.csv))
    return report
