"""Deployment environment, read from ENVIRONMENT.

Development renders logs for humans and exposes ``/config``; every other
environment logs JSON.
"""

from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
