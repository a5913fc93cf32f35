"""Caller identity reporting."""


def get_identity(sts_client):
    """Return the account id and principal ARN of the current credentials."""
    identity = sts_client.get_caller_identity()
    return {
        'account_id': identity['Account'],
        'arn': identity['Arn'],
    }


def show_identity(sts_client):
    """Print the current principal as a shell comment."""
    identity = get_identity(sts_client)
    print(f"# Account: {identity['account_id']} - User: {identity['arn']}")
    return identity
