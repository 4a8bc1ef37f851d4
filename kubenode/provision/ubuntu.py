from kubenode.provision.base import Provisioner


class UbuntuProvisioner(Provisioner):
    """Provisioner for the Ubuntu based KIC base image.

    The container image is always the same, so the unit is written
    outright instead of being layered on a packaged one.
    """

    engine_config_path = "/lib/systemd/system/docker.service"

    def get_engine_args(self):
        args = super(UbuntuProvisioner, self).get_engine_args()
        # Nested containers inherit the limits of the node container.
        args.append("--default-ulimit=nofile=1048576:1048576")
        return args

    def render_engine_config(self):
        return self.render_engine_unit(
            ["Description=Docker Application Container Engine",
             "Documentation=https://docs.docker.com",
             "BindsTo=containerd.service",
             "After=network-online.target firewalld.service "
             "containerd.service",
             "Wants=network-online.target",
             "Requires=docker.socket"],
            ["Type=notify",
             "Restart=on-failure",
             "LimitNOFILE=infinity",
             "LimitNPROC=infinity",
             "LimitCORE=infinity",
             "TasksMax=infinity",
             "Delegate=yes",
             "KillMode=process"])
