"""Test suite for the pytest-screenplay package.

This package contains unit and integration tests validating actor
sequencing, failure modes, typed questions and expectations, error
formatting, configuration, the pytest plugin and the CLI.
"""
