"""
Writers for the output and error log tables.
"""

from .error_writer import ErrorLogWriter
from .output_writer import OutputWriter

__all__ = ["ErrorLogWriter", "OutputWriter"]
