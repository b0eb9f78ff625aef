"""
fwpolicy test suite.

Tests are organized by layer:
    tests/unit/         Resolver, operator, driver, config (tmp_path filesystem)
    tests/integration/  CLI end-to-end via click's CliRunner

Run all tests:
    pytest

Run unit tests only:
    pytest tests/unit/
"""
