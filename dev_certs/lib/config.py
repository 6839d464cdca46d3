"""Provisioner configuration dataclasses."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ProvisionerConfig:
    """Provisioner configuration.

    Tool names are looked up on PATH. The subject fields are placeholders;
    only the common name carries meaning for a development certificate.
    """

    trusted_tool: str = "mkcert"
    crypto_tool: str = "openssl"
    ec_curve: str = "prime256v1"
    validity_days: int = 30
    tool_timeout_seconds: float = 10.0
    workspace_dir: Path | None = None
    country: str = "US"
    state: str = "Test"
    locality: str = "Test"
    organization: str = "Dev Certs"
    organizational_unit: str = "Test"


@dataclass
class DistinguishedName:
    """X.509 Subject Distinguished Name."""

    country: str
    state: str
    locality: str
    organization: str
    organizational_unit: str
    common_name: str

    def to_openssl_subject(self) -> str:
        """Render in the slash-separated form accepted by ``openssl req -subj``."""
        parts = [
            ("C", self.country),
            ("ST", self.state),
            ("L", self.locality),
            ("O", self.organization),
            ("OU", self.organizational_unit),
            ("CN", self.common_name),
        ]
        return "".join(f"/{attr}={value}" for attr, value in parts)
