# coding: utf-8
"""Prints the profile of the authorized Plurk user.

The first run asks for a PIN and stores the access token into the
configuration file, later runs reuse it. Run with --logout to remove it.
"""

import json
import sys

from flask_oauthflow.apps import plurk
from flask_oauthflow.cli import make_parser, setup_logging
from flask_oauthflow.cli import obtain_access_token, forget_access_token
from flask_oauthflow.config import CredentialsFile
from flask_oauthflow.exceptions import OAuthException


def main(argv=None):
    args = make_parser(__doc__).parse_args(argv)
    log = setup_logging(args.verbose)

    try:
        credentials = CredentialsFile.load(args.config)
        remote = plurk.create()
        if args.logout:
            forget_access_token(remote, credentials)
            return 0
        access, _ = obtain_access_token(remote, credentials)
        profile = remote.post('/APP/Profile/getOwnProfile', token=access)
    except OAuthException as e:
        log.error('failed: %s', e)
        return 1

    print(json.dumps(profile, indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
