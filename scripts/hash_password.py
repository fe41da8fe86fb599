"""
Print a password hash for ADMIN_PASSWORD

Usage: python scripts/hash_password.py [password]

Without an argument the password is read from the terminal.
"""

import getpass
import sys

from werkzeug.security import generate_password_hash


def main(argv):
    password = argv[1] if len(argv) > 1 else getpass.getpass('Admin password: ')
    if not password:
        print('Password must not be empty', file=sys.stderr)
        return 1
    print(generate_password_hash(password))
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
