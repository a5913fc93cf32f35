"""Environment variable mapping for AWS shell sessions."""

PROFILE_KEYS = ('AWS_DEFAULT_PROFILE', 'AWS_PROFILE')
REGION_KEYS = ('AWS_DEFAULT_REGION', 'AWS_REGION')
CREDENTIAL_KEYS = ('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_SESSION_TOKEN')

# Order of the clear snippet
CLEAR_KEYS = CREDENTIAL_KEYS + REGION_KEYS + PROFILE_KEYS


def with_profile(env, profile):
    """Return a copy of env with the profile keys set."""
    if not profile:
        return dict(env)

    print(f"# Setting AWS profile {profile}")
    return {**env, 'AWS_DEFAULT_PROFILE': profile, 'AWS_PROFILE': profile}


def with_region(env, region):
    """Return a copy of env with the region keys set."""
    if not region:
        return dict(env)

    print(f"# Setting AWS region {region}")
    return {**env, 'AWS_DEFAULT_REGION': region, 'AWS_REGION': region}


def with_credentials(env, credentials):
    """
    Return a copy of env with the temporary credentials set.

    Args:
        env: Environment mapping built so far
        credentials: 'Credentials' dict of an AssumeRole response, or None

    Returns:
        dict: New environment mapping
    """
    if not credentials:
        return dict(env)

    return {
        **env,
        'AWS_ACCESS_KEY_ID': credentials['AccessKeyId'],
        'AWS_SECRET_ACCESS_KEY': credentials['SecretAccessKey'],
        'AWS_SESSION_TOKEN': credentials['SessionToken'],
    }


def format_exports(env):
    """Format the mapping as shell export lines, in insertion order."""
    return [f"export {key}={value}" for key, value in env.items()]


def clear_exports():
    """Export lines that unset every variable this tool can produce."""
    return [f"export {key}=" for key in CLEAR_KEYS]
