"""Certificate issuance through a locally trusted CA helper (mkcert)."""

from .config import ProvisionerConfig
from .errors import ToolInvocationError
from .logging_config import LOGGER
from .models import CertificateMaterial
from .process import run_tool
from .subjects import subject_names
from .workspace import read_material, scoped_workspace


class TrustedToolStrategy:
    """Issue a certificate signed by the helper's local root CA.

    The helper is expected to manage its own trust-store installation; this
    strategy only asks it for a key and certificate.
    """

    name = "trusted-tool"

    def __init__(self, config: ProvisionerConfig) -> None:
        self.config = config

    def issue(self, hostname: str) -> CertificateMaterial:
        """Run the helper for hostname plus the loopback aliases.

        Raises:
            ToolInvocationError: If the helper is missing, times out or exits non-zero
            WorkspaceError: If the workspace or the issued files cannot be used
        """
        with scoped_workspace("dev-certs-trusted-", self.config.workspace_dir) as workspace:
            key_path = workspace / "key.pem"
            cert_path = workspace / "cert.pem"

            run_tool(
                [
                    self.config.trusted_tool,
                    "-key-file",
                    str(key_path),
                    "-cert-file",
                    str(cert_path),
                    "--",
                    *subject_names(hostname),
                ],
                ToolInvocationError,
                timeout=self.config.tool_timeout_seconds,
                cwd=workspace,
            )

            material = read_material(key_path, cert_path)

        LOGGER.info(
            "Issued certificate with %s",
            self.config.trusted_tool,
            extra={"strategy": self.name, "hostname": hostname},
        )
        return material
