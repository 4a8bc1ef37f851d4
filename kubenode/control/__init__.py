import argparse
import logging
import sys

from kubenode.control.command import Commander
from kubenode.control import ip
from kubenode.control import provision


SUBCOMMANDS = [
    ip,
    provision,
    ]

log = logging.getLogger("kubenode.control.cli")


class KubenodeParser(argparse.ArgumentParser):

    def error(self, message):
        self.print_help(sys.stderr)
        self.exit(2, '%s: error: %s\n' % (self.prog, message))


def setup_parser(subcommands, **kw):
    """Setup a command line argument/option parser."""
    parser = KubenodeParser(**kw)
    parser.add_argument(
        "--verbose", "-v", default=False,
        action="store_true",
        help="Enable verbose logging")

    parser.add_argument(
        "--log-file", "-l", default=sys.stderr, type=argparse.FileType('a'),
        help="Log output to file")

    subparsers = parser.add_subparsers(dest="subcommand")
    subparsers.required = True

    for module in subcommands:
        sub_parser = module.configure_subparser(subparsers)
        sub_parser.set_defaults(
            command=Commander(module.command),
            parser=sub_parser)

    return parser


def setup_logging(options):
    level = logging.DEBUG if options.verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        level=level,
        stream=options.log_file)


def main(args):
    """The main end user cli command for kubenode users."""
    parser = setup_parser(
        subcommands=SUBCOMMANDS,
        prog="kubenode",
        description="kubenode machine provisioning")

    options = parser.parse_args(args)
    options.log = log

    setup_logging(options)
    options.command(options)


def run():
    main(sys.argv[1:])
