# Script to store the leaderboard session cookie in the encrypted secrets file.
# Copy the value of the `session` cookie from a logged in browser, then run:
# python scripts/store_session.py --session "53616c7465645f5f..."
import sys
import argparse

from aoc_timeline.config import settings
from aoc_timeline.services.secrets import SecretsError, store_session_token


def main():
    parser = argparse.ArgumentParser(description='Store the session cookie used to fetch leaderboards')
    parser.add_argument('--session', required=True, help='Value of the session cookie')
    parser.add_argument('--secrets-file', default=settings.SECRETS_FILE, help='Encrypted secrets file')
    parser.add_argument('--key-file', default=settings.SECRETS_KEY_FILE, help='Key file for the secrets file')

    args = parser.parse_args()

    try:
        if store_session_token(args.session, args.secrets_file, args.key_file):
            print(f"Generated new key at {args.key_file}, keep it out of version control")
        print(f"Session cookie stored in {args.secrets_file}")
    except SecretsError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
