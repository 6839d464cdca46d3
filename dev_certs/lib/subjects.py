"""Hostname validation and subject name helpers."""

import ipaddress

from .config import DistinguishedName, ProvisionerConfig

LOOPBACK_NAMES = ("localhost", "127.0.0.1")

# Characters that would break the openssl -subj or subjectAltName syntax
_FORBIDDEN_CHARS = set('/,=+\\"')

_MAX_HOSTNAME_LENGTH = 253


def validate_hostname(hostname: str) -> str:
    """Check that a hostname can be used as CN and SAN entry.

    Args:
        hostname: DNS name or IP address literal

    Returns:
        The hostname unchanged

    Raises:
        ValueError: If hostname is empty, too long, starts with "-", is not
            ASCII or contains characters that cannot be passed through the
            openssl command line safely
    """
    if not hostname:
        raise ValueError("hostname must not be empty")
    if hostname.startswith("-"):
        raise ValueError(f"hostname must not start with '-': {hostname!r}")
    if not hostname.isascii():
        raise ValueError(
            f"hostname must be ASCII, use the IDNA (punycode) form instead: {hostname!r}"
        )
    if len(hostname) > _MAX_HOSTNAME_LENGTH:
        raise ValueError(f"hostname longer than {_MAX_HOSTNAME_LENGTH} characters")
    for char in hostname:
        if char.isspace() or not char.isprintable() or char in _FORBIDDEN_CHARS:
            raise ValueError(f"hostname contains invalid character {char!r}: {hostname!r}")
    return hostname


def subject_names(hostname: str) -> list[str]:
    """Return hostname followed by the loopback aliases, without duplicates."""
    return list(dict.fromkeys([hostname, *LOOPBACK_NAMES]))


def _is_ip_address(name: str) -> bool:
    try:
        ipaddress.ip_address(name)
    except ValueError:
        return False
    return True


def san_entries(hostname: str) -> str:
    """Render the subjectAltName value, e.g. ``DNS:example.test,DNS:localhost,IP:127.0.0.1``."""
    return ",".join(
        f"IP:{name}" if _is_ip_address(name) else f"DNS:{name}"
        for name in subject_names(hostname)
    )


def build_dn_from_config(config: ProvisionerConfig, common_name: str) -> DistinguishedName:
    """Build DN from the placeholder config fields + common_name."""
    return DistinguishedName(
        country=config.country,
        state=config.state,
        locality=config.locality,
        organization=config.organization,
        organizational_unit=config.organizational_unit,
        common_name=common_name,
    )
