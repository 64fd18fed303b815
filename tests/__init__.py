"""UTHARNESS test suite.

Folder taxonomy
- unit/      : Isolated, fast checks of a single module/class/function.
- property/  : Hypothesis properties of the registry, matcher and runner.
- e2e/       : The `utharness` command line, driven through Click's CliRunner.
- fixtures/  : Shared fixtures and importable suite modules (no tests here).

Suggested markers: unit, property, e2e
"""
