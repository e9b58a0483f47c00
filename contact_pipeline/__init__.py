"""
contact-pipeline: validate, clean and reformat tabular contact records.
"""

__version__ = "0.1.0"
