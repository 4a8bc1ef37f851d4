from twisted.internet.defer import inlineCallbacks

from kubenode.cluster.config import new_config_store
from kubenode.control.utils import add_node_arguments, load_node_machine
from kubenode.machine.client import new_api_client
from kubenode.machine.persist import save_host
from kubenode.machine.provision import provision_docker_machine


def configure_subparser(subparsers):
    """Configure provision subcommand"""
    sub_parser = subparsers.add_parser("provision", help=command.__doc__)
    add_node_arguments(sub_parser)
    return sub_parser


@inlineCallbacks
def command(options):
    """Configure the container engine of a node and record its IP."""
    api = new_api_client()
    config_store = new_config_store()
    cluster_config, node, machine = yield load_node_machine(
        api, config_store, options)

    options.log.info(
        "Provisioning machine %r (driver: %s)...",
        machine.name, machine.driver.driver_name())
    yield provision_docker_machine(machine.host)
    yield save_host(api, machine.host, cluster_config, node, config_store)
