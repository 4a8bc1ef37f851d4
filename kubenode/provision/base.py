import logging
import os
import shlex

from twisted.internet.defer import inlineCallbacks

from kubenode.errors import DriverError, ProvisionerError

log = logging.getLogger("kubenode.provision")

ENGINE_PORT = 2376


class Provisioner(object):
    """Configures the container engine of a reachable node.

    To write a working subclass, set :attr:`engine_config_path` and, if
    the node needs a complete systemd unit rather than a drop-in,
    override :meth:`render_engine_config`.

    Every step runs through the driver's :meth:`run_command`; a failing
    step fails the whole provisioning with a :exc:`ProvisionerError`.
    """

    engine_config_path = "/etc/systemd/system/docker.service.d/10-machine.conf"
    engine_binary = "/usr/bin/dockerd"
    service_name = "docker"

    def __init__(self, driver):
        self.driver = driver
        self.swarm_options = None
        self.auth_options = None
        self.engine_options = None

    def __repr__(self):
        return "<%s for %r>" % (
            self.__class__.__name__, self.driver.machine_name)

    @inlineCallbacks
    def provision(self, swarm_options, auth_options, engine_options):
        """Apply network, auth and engine configuration to the node.

        :param swarm_options: :class:`kubenode.host.SwarmOptions`
        :param auth_options: :class:`kubenode.host.AuthOptions`
        :param engine_options: :class:`kubenode.host.EngineOptions`

        :rtype: :class:`twisted.internet.defer.Deferred`
        """
        self.swarm_options = swarm_options
        self.auth_options = auth_options
        self.engine_options = engine_options

        if swarm_options.is_swarm:
            log.warning(
                "Swarm options are not applied by %s",
                self.__class__.__name__)

        hostname = self.driver.machine_name
        log.debug("Setting hostname %r", hostname)
        yield self.set_hostname(hostname)

        log.debug("Writing engine configuration to %s",
                  self.engine_config_path)
        yield self.write_file(
            self.engine_config_path, self.render_engine_config())

        log.debug("Restarting %s", self.service_name)
        yield self.restart_engine()

    def set_hostname(self, hostname):
        hostname = shlex.quote(hostname)
        return self.run(
            "sudo hostname %s && echo %s | sudo tee /etc/hostname" % (
                hostname, hostname))

    def write_file(self, path, content):
        return self.run(
            "sudo mkdir -p %s && printf %%s %s | sudo tee %s" % (
                shlex.quote(os.path.dirname(path)),
                shlex.quote(content),
                shlex.quote(path)))

    def restart_engine(self):
        return self.run(
            "sudo systemctl daemon-reload && "
            "sudo systemctl -f enable %(name)s && "
            "sudo systemctl -f restart %(name)s" % {"name": self.service_name})

    def run(self, command):
        d = self.driver.run_command(command)
        d.addErrback(self._step_failed, command)
        return d

    def _step_failed(self, failure, command):
        failure.trap(DriverError)
        raise ProvisionerError(
            "Provisioning step failed on %r: %s\n%s" % (
                self.driver.machine_name, command,
                failure.value.output or failure.getErrorMessage()))

    def get_engine_args(self):
        engine = self.engine_options
        auth = self.auth_options
        args = [self.engine_binary,
                "-H", "tcp://0.0.0.0:%d" % ENGINE_PORT,
                "-H", "unix:///var/run/docker.sock"]
        if engine.storage_driver:
            args.extend(["--storage-driver", engine.storage_driver])
        if engine.tls_verify:
            args.extend([
                "--tlsverify",
                "--tlscacert", auth.ca_cert_remote_path,
                "--tlscert", auth.server_cert_remote_path,
                "--tlskey", auth.server_key_remote_path])
        for label in engine.labels:
            args.extend(["--label", label])
        for registry in engine.insecure_registry:
            args.extend(["--insecure-registry", registry])
        for mirror in engine.registry_mirror:
            args.extend(["--registry-mirror", mirror])
        for flag in engine.arbitrary_flags:
            args.append("--%s" % flag)
        return args

    def get_service_lines(self):
        lines = ["Environment=%s" % env for env in self.engine_options.env]
        # An empty ExecStart= clears the one inherited from the packaged unit.
        lines.append("ExecStart=")
        lines.append("ExecStart=%s" % " ".join(
            shlex.quote(arg) for arg in self.get_engine_args()))
        return lines

    def render_engine_config(self):
        """Render a systemd drop-in overriding the engine's command line."""
        return "\n".join(["[Service]"] + self.get_service_lines()) + "\n"

    def render_engine_unit(self, unit_lines, service_lines=()):
        """Render a complete systemd unit for the engine."""
        lines = ["[Unit]"]
        lines.extend(unit_lines)
        lines.append("")
        lines.append("[Service]")
        lines.extend(service_lines)
        lines.extend(self.get_service_lines())
        lines.append("")
        lines.append("[Install]")
        lines.append("WantedBy=multi-user.target")
        return "\n".join(lines) + "\n"
