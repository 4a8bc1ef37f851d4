from twisted.internet.defer import inlineCallbacks

from kubenode.cluster.config import get_default_profile, machine_name
from kubenode.errors import InvalidMachine
from kubenode.machine import load_machine


def add_node_arguments(sub_parser):
    sub_parser.add_argument(
        "--profile", "-p", default=None,
        help="Cluster profile to operate on (default: $KUBENODE_PROFILE "
             "or kubenode).")
    sub_parser.add_argument(
        "--node", "-n", default=None,
        help="Node of the cluster (default: the primary control plane).")


def get_node(cluster_config, node_name):
    if node_name:
        return cluster_config.get_node(node_name)
    return cluster_config.primary_control_plane()


@inlineCallbacks
def load_node_machine(api, config_store, options):
    """Load the cluster config, node and valid machine chosen by `options`.

    :return: tuple of the cluster config, the node and its
        :class:`kubenode.machine.Machine`.
    :raises: :exc:`kubenode.errors.InvalidMachine` if the machine record
        is incomplete.
    """
    profile = options.profile or get_default_profile()
    cluster_config = yield config_store.load(profile)
    node = get_node(cluster_config, options.node)
    name = machine_name(cluster_config, node)
    machine = yield load_machine(api, name)
    if not machine.is_valid():
        raise InvalidMachine(name)
    return cluster_config, node, machine
