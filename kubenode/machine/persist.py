import logging

from twisted.internet.defer import inlineCallbacks

from kubenode.errors import HostSaveError

log = logging.getLogger("kubenode.machine")


@inlineCallbacks
def save_host(api, host, cluster_config, node, config_store):
    """Save a host record, then record the node's IP in the cluster config.

    The two writes are not atomic. If fetching the IP fails the host
    record is already saved and `node.ip` keeps its prior value. Both
    writes overwrite in place, so running this again after a failure
    is safe.

    :raises: :exc:`kubenode.errors.HostSaveError` if the host record
        can't be saved; driver and config store failures propagate as
        they are.
    """
    try:
        yield api.save(host)
    except Exception as e:
        raise HostSaveError(e)

    ip = yield host.driver.get_ip()
    node.ip = ip
    log.debug("Machine %r has IP %s", host.name, ip)
    print("Saving IP %s for node %r" % (ip, node.name))
    yield config_store.save_node(cluster_config, node)
