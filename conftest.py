"""Root conftest: enables the pollwright fixtures for the test suite."""

pytest_plugins = ["pollwright.pytest_plugin"]
