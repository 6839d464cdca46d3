"""Test fixtures for dev_certs tests."""

import ipaddress
import logging
import shutil
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from dev_certs.lib.config import ProvisionerConfig
from dev_certs.lib.models import CertificateMaterial
from dev_certs.tests.fakes import FakeTools


def pytest_configure(config: pytest.Config) -> None:
    """Register the openssl marker."""
    config.addinivalue_line("markers", "openssl: test needs the openssl executable on PATH")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip openssl-marked tests when openssl is not installed."""
    if shutil.which("openssl") is not None:
        return
    skip_openssl = pytest.mark.skip(reason="openssl not installed")
    for item in items:
        if "openssl" in item.keywords:
            item.add_marker(skip_openssl)


@pytest.fixture
def fake_tools() -> Generator[FakeTools]:
    """Patch subprocess.run so external tools are emulated in-process."""
    tools = FakeTools()
    with patch("dev_certs.lib.process.subprocess.run", side_effect=tools):
        yield tools


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Return empty directory used as parent for scoped workspaces."""
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def provisioner_config(workspace_root: Path) -> ProvisionerConfig:
    """Return config whose workspaces are created under workspace_root."""
    return ProvisionerConfig(workspace_dir=workspace_root, tool_timeout_seconds=30.0)


@pytest.fixture
def provisioning_logs(
    caplog: pytest.LogCaptureFixture,
) -> Generator[pytest.LogCaptureFixture]:
    """Capture dev_certs logs (the package logger does not propagate by default)."""
    logger = logging.getLogger("dev_certs")
    logger.propagate = True
    try:
        with caplog.at_level(logging.DEBUG, logger="dev_certs"):
            yield caplog
    finally:
        logger.propagate = False


@pytest.fixture
def ec_key() -> ec.EllipticCurvePrivateKey:
    """Generate P-256 private key."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def self_signed_cert(ec_key: ec.EllipticCurvePrivateKey) -> x509.Certificate:
    """Build self-signed certificate for example.test with loopback SANs."""
    name = x509.Name([x509.NameAttribute(x509.NameOID.COMMON_NAME, "example.test")])
    not_before = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(ec_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_before + timedelta(days=30))
        .add_extension(
            x509.SubjectAlternativeName(
                [
                    x509.DNSName("example.test"),
                    x509.DNSName("localhost"),
                    x509.IPAddress(ipaddress.ip_address("127.0.0.1")),
                ]
            ),
            critical=False,
        )
        .sign(ec_key, hashes.SHA256())
    )


@pytest.fixture
def certificate_material(
    ec_key: ec.EllipticCurvePrivateKey, self_signed_cert: x509.Certificate
) -> CertificateMaterial:
    """Return PEM text material for the self-signed example.test certificate."""
    key_pem = ec_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    cert_pem = self_signed_cert.public_bytes(serialization.Encoding.PEM).decode("utf-8")
    return CertificateMaterial(key=key_pem, cert=cert_pem)
