"""
Pytest configuration and fixtures for fastacount tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import Bio.SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


@pytest.fixture
def write_fasta(temp_dir):
    """Factory fixture writing SeqRecords built from (id, sequence) pairs to a FASTA file."""
    def _write_fasta(seqs, name="input.fasta"):
        fasta_path = temp_dir / name
        records = [SeqRecord(Seq(seq), id=seqid, description="") for seqid, seq in seqs]
        Bio.SeqIO.write(records, str(fasta_path), "fasta")
        return fasta_path
    return _write_fasta


@pytest.fixture
def temp_fasta(write_fasta):
    """FASTA file with four all-A contigs of lengths 100, 50, 30 and 20."""
    return write_fasta([
        ("contig1", "A" * 100),
        ("contig2", "A" * 50),
        ("contig3", "A" * 30),
        ("contig4", "A" * 20),
    ])


class MockArgs:
    """Mock argument object for testing command functions."""
    def __init__(self, **kwargs):
        self.seqfile = '-'
        self.inseqformat = 'fasta'
        self.csv = None
        self.legacy = False
        for key, value in kwargs.items():
            setattr(self, key, value)


@pytest.fixture
def mock_args():
    """Factory fixture for creating mock argument objects."""
    def _mock_args(**kwargs):
        return MockArgs(**kwargs)
    return _mock_args
