"""Request matching, distance scoring and mismatch reporting for HTTP mocks."""

__version__ = "0.1.0"