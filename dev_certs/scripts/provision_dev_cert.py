#!/usr/bin/env python3
"""Provision a development TLS key/certificate pair for a local HTTPS server."""

import argparse
import os
import sys
from pathlib import Path

from dev_certs.lib.cert_utils import deserialize_certificate, extract_certificate_metadata
from dev_certs.lib.config import ProvisionerConfig
from dev_certs.lib.errors import ProvisioningError
from dev_certs.lib.logging_config import LOGGER, set_log_level
from dev_certs.lib.provisioner import DEFAULT_HOSTNAME, CertificateProvisioner


def write_material(output_dir: Path, key: str, cert: str) -> tuple[Path, Path]:
    """Write key (owner read/write only) and certificate into output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    key_path = output_dir / "key.pem"
    cert_path = output_dir / "cert.pem"

    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    # Existing files keep their old mode on open
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(key)
    cert_path.write_text(cert, encoding="utf-8")

    return key_path, cert_path


def main() -> int:
    """Provision a key/certificate pair and write it to disk.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Provision development TLS certificate")
    parser.add_argument(
        "--hostname",
        default=DEFAULT_HOSTNAME,
        help=f"Hostname used as CN and SAN entry (default: {DEFAULT_HOSTNAME})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("certs"),
        help="Output directory for key.pem and cert.pem (default: certs)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=ProvisionerConfig.tool_timeout_seconds,
        help="Seconds allowed for each external tool invocation",
    )
    parser.add_argument("--verbose", action="store_true", help="Log tool command lines")
    args = parser.parse_args()

    if args.verbose:
        set_log_level("DEBUG")

    try:
        config = ProvisionerConfig(tool_timeout_seconds=args.timeout)
        provisioner = CertificateProvisioner(config)

        LOGGER.info("Provisioning certificate for: %s", args.hostname)
        material = provisioner.provision(args.hostname)
        key_path, cert_path = write_material(args.output_dir, material.key, material.cert)

        metadata = extract_certificate_metadata(deserialize_certificate(material.cert))
        LOGGER.info("Certificate created:")
        LOGGER.info("  Key: %s", key_path)
        LOGGER.info("  Cert: %s", cert_path)
        LOGGER.info("  Serial: %s", metadata["serialNumber"])
        LOGGER.info("  SAN: %s", ", ".join(metadata["subjectAltNames"]))
        LOGGER.info("  Expires: %s", metadata["expiry"])
        return 0

    except (ProvisioningError, ValueError) as e:
        LOGGER.error("Certificate provisioning failed: %s", e)
        return 1
    except OSError as e:
        LOGGER.error("Failed to write certificate files: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
