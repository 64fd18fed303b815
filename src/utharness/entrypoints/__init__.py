"""Process entrypoints for UTHARNESS."""
