"""
datareader — typed records from text files, one fallible step at a time.

Opens a file, reads it to the end, rejects blank content, decodes the text
into a typed record and rejects an absent result. Every stage runs on the
tracks railway, so the caller gets a single Result with a stage-specific
error instead of an exception.
"""

__version__ = "0.1.0"
