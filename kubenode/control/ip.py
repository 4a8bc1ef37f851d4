from twisted.internet.defer import inlineCallbacks

from kubenode.cluster.config import new_config_store
from kubenode.control.utils import add_node_arguments, load_node_machine
from kubenode.machine.client import new_api_client


def configure_subparser(subparsers):
    """Configure ip subcommand"""
    sub_parser = subparsers.add_parser("ip", help=command.__doc__)
    add_node_arguments(sub_parser)
    return sub_parser


@inlineCallbacks
def command(options):
    """Print the IP address of a node's machine."""
    api = new_api_client()
    config_store = new_config_store()
    _, _, machine = yield load_node_machine(api, config_store, options)
    ip = yield machine.driver.get_ip()
    print(ip)
