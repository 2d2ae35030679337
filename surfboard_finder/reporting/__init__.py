"""
Reporting: plain-text formatters for CLI output.

Modules
-------
formatters : source banner, volume hint, match / top-pick / compare tables.
"""
