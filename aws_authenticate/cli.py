"""Command-line interface for AWS Authenticate."""

import sys
import argparse
from botocore.exceptions import BotoCoreError, ClientError
from tabulate import tabulate

from .auth import AuthRequest, authenticate, emit
from .environment import clear_exports
from .identity import show_identity
from .roles import DEFAULT_DURATION, report_error
from .session import create_sts_client

PROG = 'aws-authenticate'

COMMANDS = [
    ('auth', '- used to configure credentials or assume roles'),
    ('id', '- prints the currently configured IAM principal to the console'),
    ('clear', '- creates a bash snippet to clear all AWS related environment variables'),
]

AUTH_OPTIONS = [
    ('--role <role>', '- The IAM role to assume'),
    ('--roleAccount <accountId>', '- The AWS account owning the role to assume. '
                                  'If not specified, your current account is used.'),
    ('--region <region>', '- The region to configure for subsequent calls'),
    ('--profile <profile>', "- The profile configured in '~/.aws/config' to use"),
    ('--externalId <id>', '- The external ID to use when assuming roles'),
    ('--duration <seconds>', '- The number of seconds the temporary credentials should be valid. '
                             f'Default is {DEFAULT_DURATION}.'),
    ('--roleSessionName <name>', "- The name of the session of the assumed role. Defaults to "
                                 "'AWS-Auth-<xyz>' with xyz being the current milliseconds since epoch."),
    ('--id', '- Print the final user information to the console for debugging purpose'),
    ('--script <path>', '- Run the given script with the AWS env instead of printing it to console'),
]


def format_usage():
    """Build the usage text shown when no known command is given."""
    return "\n".join([
        f"{PROG} <command> [options]",
        "",
        "Commands:",
        tabulate(COMMANDS, tablefmt='plain'),
        "",
        "Options for 'auth':",
        tabulate(AUTH_OPTIONS, tablefmt='plain'),
        "",
        "Example usage:",
        "",
        f'  eval "$({PROG} auth --role MyRole)"',
        "",
    ])


VALUE_OPTIONS = [
    ('--role', 'role'),
    ('--roleAccount', 'role_account'),
    ('--region', 'region'),
    ('--profile', 'profile'),
    ('--externalId', 'external_id'),
    ('--duration', 'duration'),
    ('--roleSessionName', 'role_session_name'),
    ('--script', 'script'),
]


def build_command_parser():
    """
    Create a parser that only finds the command.

    Option values are optional and untyped here, so a malformed option never
    keeps a command from being recognized.
    """
    parser = argparse.ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)

    parser.add_argument('command', nargs='?')
    for flag, dest in VALUE_OPTIONS:
        parser.add_argument(flag, dest=dest, nargs='?')
    parser.add_argument('--id', dest='show_id', action='store_true')

    return parser


def build_parser():
    """Create the argument parser. Option names match the documented camelCase flags."""
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)

    parser.add_argument('command', nargs='?')

    parser.add_argument('--role')
    parser.add_argument('--roleAccount', dest='role_account')
    parser.add_argument('--region')
    parser.add_argument('--profile')
    parser.add_argument('--externalId', dest='external_id')
    parser.add_argument('--duration', type=int, default=DEFAULT_DURATION)
    parser.add_argument('--roleSessionName', dest='role_session_name')
    parser.add_argument('--id', dest='show_id', action='store_true')
    parser.add_argument('--script')

    return parser


def request_from_args(args):
    """Convert parsed arguments into an AuthRequest."""
    return AuthRequest(
        role=args.role,
        role_account=args.role_account,
        external_id=args.external_id,
        role_session_name=args.role_session_name,
        duration=args.duration,
        region=args.region,
        profile=args.profile,
        show_id=args.show_id,
        script=args.script,
    )


def run_auth(args):
    """Resolve credentials and export them or run the script."""
    request = request_from_args(args)
    env = authenticate(request)
    return emit(request, env)


def run_id(args):
    """Print the principal of the credentials currently in effect."""
    show_identity(create_sts_client(args.region, args.profile))
    return 0


def run_clear():
    """Print exports that clear all AWS variables."""
    print("# Exports to clear AWS config")
    for line in clear_exports():
        print(line)
    return 0


COMMAND_HANDLERS = {
    'auth': run_auth,
    'id': run_id,
}


def main(argv=None):
    """Main function to parse arguments and route to the appropriate command."""
    command_args, _unknown = build_command_parser().parse_known_args(argv)
    command = command_args.command

    # clear takes no options, whatever else is on the command line
    if command == 'clear':
        return run_clear()

    handler = COMMAND_HANDLERS.get(command)
    if handler is None:
        print("Missing command")
        print()
        print(format_usage())
        return 1

    args, _unknown = build_parser().parse_known_args(argv)

    try:
        return handler(args)
    except (BotoCoreError, ClientError) as e:
        report_error(e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
