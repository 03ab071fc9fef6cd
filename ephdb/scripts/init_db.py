"""Provisions the database: indexes on all managed collections and the
counter documents. With --destructive all managed collections are dropped
first, which destroys any existing data."""

import sys, logging
from argparse import ArgumentParser
from ephdb import Config
from ephdb.counter import Counter
from ephdb.schema import Schema
from ephdb.scripts import add_connection_args, setup_logging, connect

LOGGER = logging.getLogger(__name__)

def get_args(**kwargs):
    parser = ArgumentParser(prog='init-db', description='Create indexes and seed the ID counters')
    add_connection_args(parser)
    parser.add_argument('--destructive', action='store_true', help='Drop all managed collections first. Existing data is lost')
    parser.add_argument('--skip_prompt', action='store_true', help='Skip confirmation prompt in destructive mode')

    # if run as function convert args to sys.argv
    if kwargs:
        flags = [key for key in ('destructive', 'skip_prompt') if kwargs.pop(key, False)]
        sys.argv[1:] = [f'--{key}={val}' for key, val in kwargs.items()]
        sys.argv += [f'--{flag}' for flag in flags]

    return parser.parse_args()

def run(**kwargs):
    args = get_args(**kwargs)
    setup_logging(args)
    connect(args)

    if args.destructive and not args.skip_prompt:
        proceed = input(f'This will drop {", ".join(Config.collections())}. Proceed? y/n: ')

        if proceed.lower().strip() != 'y':
            print('Cancelled')
            return

    mode = 'destructive' if args.destructive else 'non-destructive'
    print(f'provisioning ({mode})...')

    try:
        applied = Schema.provision(destructive=args.destructive)
    except Exception as err:
        LOGGER.exception(err)
        raise err

    print(f'{len(applied)} steps applied')

    for kind in Config.counters.keys():
        print(f'{kind}: next ID is {Counter.current(kind)}')

if __name__ == '__main__':
    run()
