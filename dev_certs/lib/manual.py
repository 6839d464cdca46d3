"""Self-signed certificate issuance with the openssl command line."""

from pathlib import Path

from .config import ProvisionerConfig
from .errors import CsrGenerationError, KeyGenerationError, SigningError
from .logging_config import LOGGER
from .models import CertificateMaterial
from .process import run_tool
from .subjects import build_dn_from_config, san_entries
from .workspace import read_material, scoped_workspace

EXTENSION_SECTION = "v3_req"


def build_extension_config(hostname: str) -> str:
    """Build the extension block applied when self-signing.

    Args:
        hostname: Host the certificate is issued for

    Returns:
        OpenSSL config text with a single ``[v3_req]`` section
    """
    return "\n".join(
        [
            f"[{EXTENSION_SECTION}]",
            "keyUsage = critical, digitalSignature, keyAgreement",
            "extendedKeyUsage = serverAuth",
            f"subjectAltName = {san_entries(hostname)}",
            "",
        ]
    )


class ManualStrategy:
    """Issue a self-signed certificate in three openssl steps.

    1. Generate an EC private key
    2. Generate a CSR for the hostname (SAN declared inline)
    3. Self-sign the CSR with key usage, extended key usage and SAN supplied
       through an extension file streamed on stdin

    Each step runs only after the previous one succeeded.
    """

    name = "manual"

    def __init__(self, config: ProvisionerConfig) -> None:
        self.config = config

    def issue(self, hostname: str) -> CertificateMaterial:
        """Generate key, CSR and self-signed certificate for hostname.

        Raises:
            KeyGenerationError: If key generation fails
            CsrGenerationError: If CSR generation fails
            SigningError: If self-signing fails
            WorkspaceError: If the workspace or the issued files cannot be used
        """
        with scoped_workspace("dev-certs-manual-", self.config.workspace_dir) as workspace:
            key_path = workspace / "key.pem"
            csr_path = workspace / "cert.csr"
            cert_path = workspace / "cert.pem"

            self._generate_key(key_path)
            self._generate_csr(hostname, key_path, csr_path)
            self._self_sign(hostname, key_path, csr_path, cert_path)

            material = read_material(key_path, cert_path)

        LOGGER.info(
            "Issued self-signed certificate with %s",
            self.config.crypto_tool,
            extra={"strategy": self.name, "hostname": hostname},
        )
        return material

    def _generate_key(self, key_path: Path) -> None:
        run_tool(
            [
                self.config.crypto_tool,
                "ecparam",
                "-genkey",
                "-noout",
                "-name",
                self.config.ec_curve,
                "-out",
                str(key_path),
            ],
            KeyGenerationError,
            timeout=self.config.tool_timeout_seconds,
        )

    def _generate_csr(self, hostname: str, key_path: Path, csr_path: Path) -> None:
        subject = build_dn_from_config(self.config, common_name=hostname)
        run_tool(
            [
                self.config.crypto_tool,
                "req",
                "-new",
                "-key",
                str(key_path),
                "-out",
                str(csr_path),
                "-subj",
                subject.to_openssl_subject(),
                "-addext",
                f"subjectAltName={san_entries(hostname)}",
            ],
            CsrGenerationError,
            timeout=self.config.tool_timeout_seconds,
        )

    def _self_sign(
        self, hostname: str, key_path: Path, csr_path: Path, cert_path: Path
    ) -> None:
        # x509 -req ignores CSR extensions, so SAN must be repeated in the extfile
        run_tool(
            [
                self.config.crypto_tool,
                "x509",
                "-req",
                "-sha256",
                "-days",
                str(self.config.validity_days),
                "-in",
                str(csr_path),
                "-signkey",
                str(key_path),
                "-out",
                str(cert_path),
                "-extensions",
                EXTENSION_SECTION,
                "-extfile",
                "/dev/stdin",
            ],
            SigningError,
            timeout=self.config.tool_timeout_seconds,
            input_text=build_extension_config(hostname),
        )
