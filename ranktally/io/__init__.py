"""Input/output of poll snapshots and results.

This subpackage is structured into modules by file format. So far, only the
JSON poll snapshot format (:mod:`ranktally.io.snapshot`) is supported.
"""
