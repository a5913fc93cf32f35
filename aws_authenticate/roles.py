"""IAM role resolution and assumption."""

import sys
import time

from botocore.exceptions import BotoCoreError, ClientError

# Region specific partitions (aws-cn, aws-us-gov) are not derived
PARTITION = 'aws'
DEFAULT_DURATION = 3600
SESSION_NAME_PREFIX = 'AWS-Auth-'


def needs_account_lookup(role, role_account=None):
    """Whether resolving role requires asking STS for the caller's account."""
    return not role.startswith('arn:') and not role_account


def report_error(error):
    """Print an STS or botocore error to stderr."""
    if isinstance(error, ClientError):
        details = error.response['Error']
        print(f"AWS Error ({details['Code']}): {details['Message']}", file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)


def resolve_role_arn(role, role_account=None, sts_client=None):
    """
    Turn a role name into a fully qualified role ARN.

    Args:
        role: Role name or full role ARN
        role_account: Account owning the role. Defaults to the caller's account.
        sts_client: STS client used to look up the caller's account

    Returns:
        str: Role ARN
    """
    if role.startswith('arn:'):
        return role

    if needs_account_lookup(role, role_account):
        account_id = sts_client.get_caller_identity()['Account']
    else:
        account_id = role_account

    return f"arn:{PARTITION}:iam::{account_id}:role/{role}"


def default_session_name():
    """Session name unique per millisecond."""
    return f"{SESSION_NAME_PREFIX}{int(time.time() * 1000)}"


def build_assume_role_request(role_arn, duration=None, external_id=None, role_session_name=None):
    """Build the keyword arguments for sts.assume_role."""
    request = {
        'RoleArn': role_arn,
        'DurationSeconds': duration or DEFAULT_DURATION,
        'RoleSessionName': role_session_name or default_session_name(),
    }
    if external_id:
        request['ExternalId'] = external_id
    return request


def assume_role(sts_client, request):
    """
    Assume the role described by request.

    Failures are reported on stderr and do not abort the caller.

    Args:
        sts_client: STS client holding the source credentials
        request: Keyword arguments for sts.assume_role

    Returns:
        dict: The 'Credentials' of the response, or None on failure
    """
    print(f"# Assuming IAM role {request['RoleArn']}")

    try:
        assumed = sts_client.assume_role(**request)
    except (BotoCoreError, ClientError) as e:
        report_error(e)
        return None

    user = assumed['AssumedRoleUser']
    credentials = assumed['Credentials']
    print(f"# Assumed role {user['Arn']} with id {user['AssumedRoleId']} "
          f"valid until {credentials['Expiration']}")

    return credentials
