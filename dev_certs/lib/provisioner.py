"""Provision a development key/certificate pair with ordered fallback."""

from collections.abc import Sequence
from typing import Protocol

from .config import ProvisionerConfig
from .logging_config import LOGGER
from .manual import ManualStrategy
from .models import CertificateMaterial
from .subjects import validate_hostname
from .trusted_tool import TrustedToolStrategy

DEFAULT_HOSTNAME = "localhost"


class CertificateStrategy(Protocol):
    """One way of issuing a key/certificate pair for a hostname."""

    name: str

    def issue(self, hostname: str) -> CertificateMaterial: ...


class CertificateProvisioner:
    """Try each strategy in order until one issues a certificate."""

    def __init__(
        self,
        config: ProvisionerConfig | None = None,
        strategies: Sequence[CertificateStrategy] | None = None,
    ) -> None:
        """Initialize provisioner.

        Args:
            config: Provisioner configuration (defaults if None)
            strategies: Ordered strategies; defaults to the trusted CA helper
                followed by the manual openssl flow
        """
        self.config = config or ProvisionerConfig()
        if strategies is None:
            strategies = [TrustedToolStrategy(self.config), ManualStrategy(self.config)]
        if not strategies:
            raise ValueError("at least one strategy is required")
        self.strategies = list(strategies)

    def provision(self, hostname: str = DEFAULT_HOSTNAME) -> CertificateMaterial:
        """Issue a key/certificate pair covering hostname, localhost and 127.0.0.1.

        Failures of every strategy but the last are logged as warnings and
        the next strategy is tried. The last strategy's failure propagates.

        Raises:
            ValueError: If hostname is not usable as a certificate subject
            ProvisioningError: If the last strategy fails
        """
        validate_hostname(hostname)

        *fallible, last = self.strategies
        for strategy in fallible:
            try:
                return strategy.issue(hostname)
            except Exception as e:
                LOGGER.warning(
                    "%s strategy failed, falling back: %s",
                    strategy.name,
                    e,
                    extra={"strategy": strategy.name, "hostname": hostname},
                )

        return last.issue(hostname)


def provision(
    hostname: str = DEFAULT_HOSTNAME, config: ProvisionerConfig | None = None
) -> CertificateMaterial:
    """Issue a development key/certificate pair with the default strategies."""
    return CertificateProvisioner(config).provision(hostname)
