"""The ``utharness`` command-line interface."""
