"""Command-line interface modules for spine vector computation.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from spinevec.cli.run_spine import run_spine_vector

__all__ = ['run_spine_vector']
