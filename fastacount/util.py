import Bio.SeqIO

import bz2
import gzip
import io
import lzma
import os
import sys
import zlib

GZIP_MAGIC = b'\x1f\x8b'
BZIP2_MAGIC = b'BZh'
XZ_MAGIC = b'\xfd7zXZ\x00'


class FastacountError(Exception):
    pass

class InputOpenError(FastacountError):
    pass

class InputParseError(FastacountError):
    pass

class AllocationFailure(FastacountError):
    pass

class EmptyInputError(FastacountError):
    pass

class CsvWriteError(FastacountError):
    pass

class FinalizedError(FastacountError):
    pass

class StoreFrozenError(FastacountError):
    pass


def detect_compression(head):
    if head.startswith(GZIP_MAGIC):
        return 'gzip'
    if head.startswith(BZIP2_MAGIC):
        return 'bzip2'
    if head.startswith(XZ_MAGIC):
        return 'xz'
    return None

def open_raw(seqfile):
    if seqfile=='-':
        return sys.stdin.buffer
    try:
        return open(seqfile, 'rb')
    except OSError as e:
        raise InputOpenError('Could not open input file {}: {}'.format(seqfile, e.strerror)) from e

def decompressed_text(raw):
    """Wrap a buffered binary stream as text, decompressing gzip/bgzip, bzip2 and xz on the fly.

    The format is sniffed from the leading bytes, so the file extension does not matter.
    For plain text the returned handle wraps `raw` directly and would close it when
    closed or garbage-collected, so callers that keep ownership of `raw` detach it.
    """
    compression = detect_compression(raw.peek(len(XZ_MAGIC))[:len(XZ_MAGIC)])
    if compression=='gzip':
        binary = gzip.GzipFile(fileobj=raw, mode='rb')
    elif compression=='bzip2':
        binary = bz2.BZ2File(raw, mode='rb')
    elif compression=='xz':
        binary = lzma.LZMAFile(raw, mode='rb')
    else:
        return io.TextIOWrapper(raw, encoding='ascii', errors='replace')
    return io.TextIOWrapper(binary, encoding='ascii', errors='replace')

def iter_seqs(seqfile, seqformat):
    """Yield SeqRecords one at a time from a plain or compressed file ('-' for stdin)."""
    raw = open_raw(seqfile)
    handle = None
    try:
        handle = decompressed_text(raw)
        for record in Bio.SeqIO.parse(handle, seqformat):
            yield record
    except (ValueError, EOFError, OSError, lzma.LZMAError, zlib.error) as e:
        # Truncated or corrupt archives surface as decompressor errors.
        raise InputParseError('Failed to parse {} as {}: {}'.format(display_name(seqfile), seqformat, e)) from e
    finally:
        if handle is not None:
            binary = handle.detach()
            if binary is not raw:
                binary.close()
        if raw is not sys.stdin.buffer:
            raw.close()

def display_name(seqfile):
    if seqfile=='-':
        return 'stdin'
    return os.path.basename(seqfile)
