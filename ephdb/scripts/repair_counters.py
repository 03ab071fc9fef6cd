# Run this as a precaution after copying data between databases.
# This can be run at any time if a counter falls behind the stored IDs.

from argparse import ArgumentParser
from ephdb import Config
from ephdb.counter import Counter
from ephdb.scripts import add_connection_args, setup_logging, connect

parser = ArgumentParser(prog='repair-counters')
add_connection_args(parser)
parser.add_argument('--kind', choices=list(Config.counters.keys()), help='Repair only this counter')

def run():
    args = parser.parse_args()
    setup_logging(args)
    connect(args)

    for kind in [args.kind] if args.kind else Config.counters.keys():
        print(f'{kind}: next ID is {Counter.repair(kind)}')

if __name__ == '__main__':
    run()
