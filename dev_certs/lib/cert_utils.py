"""Certificate utility functions for inspecting issued key/certificate pairs."""

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from .models import CertificateMetadata


def deserialize_private_key(pem_data: str | bytes) -> PrivateKeyTypes:
    """Deserialize unencrypted private key from PEM text."""
    if isinstance(pem_data, str):
        pem_data = pem_data.encode("utf-8")
    return serialization.load_pem_private_key(pem_data, password=None)


def deserialize_certificate(pem_data: str | bytes) -> x509.Certificate:
    """Deserialize certificate from PEM text."""
    if isinstance(pem_data, str):
        pem_data = pem_data.encode("utf-8")
    return x509.load_pem_x509_certificate(pem_data)


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def get_subject_alt_names(cert: x509.Certificate) -> list[str]:
    """Return SAN entries in openssl notation (``DNS:name``, ``IP:addr``).

    Returns an empty list when the certificate has no SAN extension.
    """
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        return []

    entries = [f"DNS:{name}" for name in san.get_values_for_type(x509.DNSName)]
    entries.extend(f"IP:{addr}" for addr in san.get_values_for_type(x509.IPAddress))
    return entries


def extract_certificate_metadata(cert: x509.Certificate) -> CertificateMetadata:
    """Summarise certificate for logging.

    Args:
        cert: Issued certificate

    Returns:
        CertificateMetadata with serial, CN, SAN entries, validity and
        whether the certificate is self-signed
    """
    cn_attributes = cert.subject.get_attributes_for_oid(x509.NameOID.COMMON_NAME)
    cn = cn_attributes[0].value if cn_attributes else ""
    if not isinstance(cn, str):
        raise ValueError("CN must be string")

    return CertificateMetadata(
        serialNumber=get_certificate_serial_hex(cert),
        commonName=cn,
        subjectAltNames=get_subject_alt_names(cert),
        notBefore=cert.not_valid_before_utc.isoformat(),
        expiry=cert.not_valid_after_utc.isoformat(),
        selfSigned=cert.issuer == cert.subject,
    )


def key_matches_certificate(key_pem: str | bytes, cert_pem: str | bytes) -> bool:
    """Check that the private key belongs to the certificate's public key."""
    key = deserialize_private_key(key_pem)
    cert = deserialize_certificate(cert_pem)

    public_format = serialization.PublicFormat.SubjectPublicKeyInfo
    return key.public_key().public_bytes(
        serialization.Encoding.DER, public_format
    ) == cert.public_key().public_bytes(serialization.Encoding.DER, public_format)
