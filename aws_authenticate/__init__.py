"""AWS Authenticate - A CLI tool to assume IAM roles and export AWS credentials."""

__version__ = "1.0.0"

from .auth import AuthRequest, authenticate
from .roles import resolve_role_arn, assume_role

__all__ = ["AuthRequest", "authenticate", "resolve_role_arn", "assume_role"]
