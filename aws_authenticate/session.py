"""boto3 session and STS client construction."""

import os

import boto3
from botocore.config import Config


def get_https_proxy(environ=None):
    """Return the outbound HTTPS proxy from the environment, if any."""
    if environ is None:
        environ = os.environ
    return environ.get('HTTPS_PROXY') or environ.get('https_proxy') or None


def build_session_kwargs(region=None, profile=None, env=None):
    """
    Build keyword arguments for boto3.Session.

    Overrides are applied in order: region, profile, then credentials already
    present in the environment mapping. Assumed credentials replace the profile.

    Args:
        region: Region name to use for the session
        profile: Named profile from ~/.aws/config
        env: Environment mapping built so far

    Returns:
        dict: Keyword arguments for boto3.Session
    """
    kwargs = {}

    if region:
        kwargs['region_name'] = region

    if profile:
        kwargs['profile_name'] = profile

    if env and env.get('AWS_ACCESS_KEY_ID'):
        kwargs.pop('profile_name', None)
        kwargs['aws_access_key_id'] = env['AWS_ACCESS_KEY_ID']
        kwargs['aws_secret_access_key'] = env['AWS_SECRET_ACCESS_KEY']
        kwargs['aws_session_token'] = env['AWS_SESSION_TOKEN']

    return kwargs


def build_client_config(environ=None):
    """Build the botocore client config, or None when nothing needs overriding."""
    proxy = get_https_proxy(environ)
    if proxy:
        return Config(proxies={'https': proxy})
    return None


def create_sts_client(region=None, profile=None, env=None):
    """Create an STS client for the given region, profile and environment mapping."""
    session = boto3.Session(**build_session_kwargs(region, profile, env))

    config = build_client_config()
    if config is not None:
        return session.client('sts', config=config)
    return session.client('sts')
