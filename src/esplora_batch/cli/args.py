import argparse
import logging

from esplora_batch import __version__


def parse_args(args):
    """Parse command line parameters

    Args:
      args ([str]): command line parameters as list of strings

    Returns:
      :obj:`argparse.Namespace`: command line parameters namespace
    """
    parser = argparse.ArgumentParser(
        prog="esplora-batch",
        description="Multi-address aggregation API for Esplora indexers")
    parser.add_argument(
        '--version',
        action='version',
        version='esplora-batch {ver}'.format(ver=__version__))
    parser.add_argument('-c', '--config', action="store", dest="config_file")
    parser.add_argument('-p', '--port', action="store", type=int, dest="port",
                        required=False)
    parser.add_argument('--bind', '-b', action="store", type=str, dest="host",
                        required=False)
    parser.add_argument(
        '--indexer-url',
        action="store",
        type=str,
        dest="indexer_url",
        help="Base URL of the Esplora API, overrides the config file",
        required=False)
    parser.add_argument(
        '-v',
        '--verbose',
        dest="loglevel",
        help="set loglevel to INFO",
        action='store_const',
        const=logging.INFO)
    parser.add_argument(
        '-vv',
        '--very-verbose',
        dest="loglevel",
        help="set loglevel to DEBUG",
        action='store_const',
        const=logging.DEBUG)
    parser.add_argument(
        '--log-file',
        dest="log_file",
        help="Write the logs to this file instead of stdout",
        action="store",
        type=str,
        default=None)
    parser.add_argument(
        '--disable-sentry',
        dest="sentry_disabled",
        help="Disable Sentry error tracking",
        action="store_true",
        default=False,
    )
    return parser.parse_args(args)
