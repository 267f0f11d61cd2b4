"""
Tests Package.

This package contains test suites for the txdag implementation: the value
types, the graph store and its insertion algorithm, the batch constructor,
the text and YAML loaders, rendering, statistics and the command-line
interface.
"""
