from twisted.internet.defer import fail, succeed

from kubenode.drivers.mock import MockDriver
from kubenode.host import Host, HostOptions


def make_host(name="minikube", driver=None, host_options=None,
              raw_driver="driver-name: mock\n"):
    if driver is None:
        driver = MockDriver(name)
    if host_options is None:
        host_options = HostOptions()
    return Host(name, driver, host_options, raw_driver)


class FakeClient(object):
    """Management client keeping host records in a dict."""

    def __init__(self, hosts=None, load_error=None, save_error=None):
        self.hosts = dict(hosts or {})
        self.saved = []
        self.load_error = load_error
        self.save_error = save_error

    def load(self, name):
        if self.load_error is not None:
            return fail(self.load_error)
        return succeed(self.hosts.get(name))

    def save(self, host):
        if self.save_error is not None:
            return fail(self.save_error)
        self.saved.append(host)
        self.hosts[host.name] = host
        return succeed(True)


class FakeConfigStore(object):

    def __init__(self):
        self.saved = []

    def save_node(self, cluster_config, node):
        self.saved.append((cluster_config, node, node.ip))
        return succeed(True)


class FakeProvisioner(object):

    def __init__(self, driver, error=None):
        self.driver = driver
        self.error = error
        self.calls = []

    def provision(self, swarm_options, auth_options, engine_options):
        self.calls.append((swarm_options, auth_options, engine_options))
        if self.error is not None:
            return fail(self.error)
        return succeed(None)
