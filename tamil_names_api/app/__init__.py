"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, database, errors), ``schemas``
(request/response models), ``services`` (business logic) and ``api``
(versioned routers).
"""

from .main import app  # noqa: F401
