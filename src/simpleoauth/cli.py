"""
Command-line interface for SimpleOAuth
Signs a request and prints the Authorization header value or SASL string
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from . import __version__
from .config import ClientConfigManager
from .crypto import check_platform_compatibility
from .exceptions import SimpleOAuthError
from .signing import (
    AuthMethod,
    HttpMethod,
    SignatureMethod,
    SigningOptions,
    create_signer,
    create_signing_config,
    render,
)
from .token import Token


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='simpleoauth-sign',
        description='Sign a request with OAuth 1.0a and print the Authorization header value'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'SimpleOAuth {__version__}'
    )
    parser.add_argument(
        '--check-compatibility',
        action='store_true',
        help='Check platform compatibility and exit'
    )
    parser.add_argument('url', nargs='?', help='Absolute request URL (query parameters are signed)')
    parser.add_argument(
        '-X', '--method',
        choices=[m.value for m in HttpMethod],
        type=str.upper,
        default=HttpMethod.GET.value,
        help='HTTP method (default: GET)'
    )
    parser.add_argument(
        '-p', '--param',
        action='append',
        default=[],
        metavar='NAME=VALUE',
        help='Request parameter covered by the signature (repeatable)'
    )

    credentials = parser.add_argument_group('credentials')
    credentials.add_argument('--config', help='Client configuration JSON file')
    credentials.add_argument('--service', help='Service name in the configuration file')
    credentials.add_argument('--consumer-key', help='Consumer key')
    credentials.add_argument('--consumer-secret', help='Consumer secret')
    credentials.add_argument('--token', default='', help='Token string issued by the provider')
    credentials.add_argument('--token-secret', default='', help='Token secret issued by the provider')
    credentials.add_argument('--verifier', default='', help='Verifier for the access-token exchange')
    credentials.add_argument('--callback-url', default=None, help='Callback URL for the request-token exchange')

    output = parser.add_argument_group('output')
    output.add_argument(
        '--signature-method',
        type=str.upper,
        default=None,
        help=f"Signature method ({', '.join(m.value for m in SignatureMethod)})"
    )
    output.add_argument('--sasl', action='store_true', help='Print a SASL string instead of a header value')
    output.add_argument('--realm', default=None, help='Realm for the Authorization header')
    output.add_argument('--nonce', default=None, help='Use a fixed nonce')
    output.add_argument('--timestamp', type=int, default=None, help='Use a fixed timestamp')
    output.add_argument('--show-base-string', action='store_true', help='Also print the signature base string')
    output.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    return parser


def parse_parameters(values: List[str]) -> List[Tuple[str, str]]:
    """Parse NAME=VALUE arguments; a missing '=' means an empty value."""
    pairs = []
    for item in values:
        name, _, value = item.partition('=')
        if not name:
            raise ValueError(f"Invalid parameter '{item}': expected NAME=VALUE")
        pairs.append((name, value))
    return pairs


def build_token(args, manager: Optional[ClientConfigManager] = None) -> Token:
    """
    Build the token described by the command-line arguments.

    Without --token a fresh request token is built. --token together with
    --verifier describes the access-token exchange; --token alone is an
    access token.
    """
    if manager is not None:
        base = manager.to_request_token()
    else:
        if not args.consumer_key or not args.consumer_secret:
            raise ValueError("--consumer-key and --consumer-secret are required without --config")
        base = Token.request_token(args.consumer_key, args.consumer_secret)

    if args.callback_url is not None:
        base = Token.request_token(base.consumer_key, base.consumer_secret, args.callback_url, base.service)

    if not args.token:
        return base

    if args.verifier:
        return base.with_issued_token(args.token, args.token_secret).with_verifier(args.verifier)

    return base.promote_to_access_token(args.token, args.token_secret)


def handle_sign_command(args) -> int:
    """Sign the request and print the result."""
    manager = None
    if args.config:
        manager = ClientConfigManager.from_file(args.config, args.service)
        if not args.verbose:
            logging.getLogger('simpleoauth').setLevel(manager.get_logging_config().level.upper())
        config = manager.to_signing_config()
    else:
        config = create_signing_config().build()

    token = build_token(args, manager)
    signer = create_signer(config)

    auth_method = AuthMethod.SASL if args.sasl else None
    options = SigningOptions(nonce=args.nonce, timestamp=args.timestamp, realm=args.realm)

    result = signer.sign(
        token,
        args.url,
        args.method,
        parse_parameters(args.param),
        auth_method,
        args.signature_method,
        options
    )

    if args.show_base_string:
        print(result.base_string, file=sys.stderr)
    print(render(result))
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.check_compatibility:
        compat = check_platform_compatibility()
        if compat['hmac_sha1_supported']:
            print("✓ Platform is compatible with SimpleOAuth")
            return 0
        print("✗ HMAC-SHA1 is not available on this platform")
        return 1

    if not args.url:
        parser.print_help()
        return 1

    try:
        return handle_sign_command(args)
    except SimpleOAuthError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
