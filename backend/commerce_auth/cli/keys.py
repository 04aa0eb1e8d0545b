"""Key-pair management commands.

``flask keys generate`` needs a running application, which itself needs a key
pair; the same group is therefore also installed as the standalone
``commerce-auth-keys`` script for first-time setup.
"""

from __future__ import annotations

from pathlib import Path

import click

from commerce_auth.core.config import get_config
from commerce_auth.infra.keys import generate_key_pair


@click.group("keys")
def keys_cli() -> None:
    """Manage the RSA key pair used to sign and verify tokens."""


@keys_cli.command("generate")
@click.option(
    "--private-key",
    "private_key",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output path of the private key (defaults to JWT_PRIVATE_KEY_PATH).",
)
@click.option(
    "--public-key",
    "public_key",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output path of the public key (defaults to JWT_PUBLIC_KEY_PATH).",
)
@click.option("--bits", type=click.IntRange(min=2048), default=2048, show_default=True)
@click.option("--force", is_flag=True, help="Overwrite existing key files.")
def generate(private_key: Path | None, public_key: Path | None, bits: int, force: bool) -> None:
    """Write a new RSA key pair as PEM files."""
    cfg = get_config()
    private_path = private_key or Path(cfg.JWT_PRIVATE_KEY_PATH)
    public_path = public_key or Path(cfg.JWT_PUBLIC_KEY_PATH)

    existing = [p for p in (private_path, public_path) if p.exists()]
    if existing and not force:
        names = ", ".join(str(p) for p in existing)
        raise click.UsageError(f"Refusing to overwrite {names}; pass --force to replace.")

    generate_key_pair(private_path, public_path, key_size=bits)
    click.echo(f"Private key: {private_path}")
    click.echo(f"Public key:  {public_path}")
