"""Result models for certificate provisioning."""

from dataclasses import dataclass, field
from typing import TypedDict


@dataclass
class CertificateMaterial:
    """Private key and certificate issued for a development host.

    Both fields are PEM text exactly as the issuing tool wrote them.
    """

    key: str = field(repr=False)
    cert: str


class CertificateMetadata(TypedDict):
    """Summary of an issued certificate, safe to log."""

    serialNumber: str
    commonName: str
    subjectAltNames: list[str]
    notBefore: str
    expiry: str
    selfSigned: bool
