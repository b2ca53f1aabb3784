from setuptools import setup, find_packages
import ast
import os
import re

with open(os.path.join('fastacount', '__init__.py')) as f:
        match = re.search(r'__version__\s+=\s+(.*)', f.read())
version = str(ast.literal_eval(match.group(1)))

setup(
        name             = 'fastacount',
        version          = version,
        description      = 'Assembly statistics (N50, GC content, N content) for FASTA files',
        license          = "BSD 3-clause License",
        keywords         = 'fasta assembly N50 statistics',
        packages         = find_packages(exclude=['tests', 'ci']),
        python_requires  = '>=3.10',
        install_requires = ['numpy','biopython',],
        extras_require   = {'test': ['pytest',],},
        scripts          = ['fastacount/fastacount',],
)
