"""Building blocks for YAML test suites: file discovery, variables, templates and steps."""

__version__ = "0.1.0"