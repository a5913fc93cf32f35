"""Credential resolution flow for the 'auth' command."""

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from .environment import format_exports, with_credentials, with_profile, with_region
from .identity import show_identity
from .roles import (
    DEFAULT_DURATION,
    assume_role,
    build_assume_role_request,
    needs_account_lookup,
    report_error,
    resolve_role_arn,
)
from .session import create_sts_client


@dataclass(frozen=True)
class AuthRequest:
    """Options of a single 'auth' invocation."""

    role: Optional[str] = None
    role_account: Optional[str] = None
    external_id: Optional[str] = None
    role_session_name: Optional[str] = None
    duration: int = DEFAULT_DURATION
    region: Optional[str] = None
    profile: Optional[str] = None
    show_id: bool = False
    script: Optional[str] = None


def with_role(env, request):
    """
    Assume the requested role and add its credentials to env.

    Looking up the caller's account is not guarded: if it fails the error
    propagates. Any other failure, including a client that cannot be built
    for the profile, is reported and leaves env unchanged.
    """
    if not request.role:
        return dict(env)

    try:
        sts_client = create_sts_client(request.region, request.profile, env)
    except (BotoCoreError, ClientError) as e:
        if needs_account_lookup(request.role, request.role_account):
            raise
        report_error(e)
        return dict(env)

    role_arn = resolve_role_arn(request.role, request.role_account, sts_client)

    assume_request = build_assume_role_request(
        role_arn,
        duration=request.duration,
        external_id=request.external_id,
        role_session_name=request.role_session_name,
    )
    credentials = assume_role(sts_client, assume_request)

    return with_credentials(env, credentials)


def authenticate(request):
    """
    Run the profile, region, role and identity steps in order.

    Args:
        request: AuthRequest

    Returns:
        dict: Environment mapping, in the order the keys should be exported
    """
    print("# Configuring AWS auth")

    env = with_profile({}, request.profile)
    env = with_region(env, request.region)
    env = with_role(env, request)

    if request.show_id:
        show_identity(create_sts_client(request.region, request.profile, env))

    return env


def run_script(script, env):
    """Run script with bash, with env overlaid on the current environment."""
    result = subprocess.run(['bash', script], env={**os.environ, **env})
    return result.returncode


def emit(request, env):
    """
    Hand the environment mapping to its consumer.

    Returns:
        int: Process exit status
    """
    if request.script:
        return run_script(request.script, env)

    for line in format_exports(env):
        print(line)
    return 0
