from kubenode.provision.base import Provisioner


class BuildrootProvisioner(Provisioner):
    """Provisioner for the buildroot based VM images built for kubenode.

    These images are not a standard distribution and carry no packaged
    docker unit, so the full unit is written.
    """

    engine_config_path = "/lib/systemd/system/docker.service"

    def render_engine_config(self):
        return self.render_engine_unit(
            ["Description=Docker Application Container Engine",
             "Documentation=https://docs.docker.com",
             "After=network.target minikube-automount.service docker.socket",
             "Requires=minikube-automount.service docker.socket"],
            ["Type=notify",
             "Restart=on-failure",
             "StartLimitBurst=3",
             "StartLimitIntervalSec=60",
             "LimitNOFILE=infinity",
             "LimitNPROC=infinity",
             "LimitCORE=infinity",
             "TasksMax=infinity",
             "TimeoutStartSec=0",
             "Delegate=yes",
             "KillMode=process"])
