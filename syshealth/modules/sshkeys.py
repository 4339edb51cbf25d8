#!/usr/bin/env python3
"""
SSH key pair generation.
"""

import os
import logging

from .base import run_command, require_command, SyshealthError
from ..ui import console

logger = logging.getLogger("syshealth.sshkeys")


def key_exists(key_path: str) -> bool:
    return os.path.exists(key_path) or os.path.exists(f"{key_path}.pub")


def generate_ssh_key(key_path: str, passphrase: str = "", overwrite: bool = False,
                     bits: int = 4096) -> str:
    """
    Generate an RSA key pair and print the public key.

    Args:
        key_path: Private key path; the public key is written next to it
        passphrase: Key passphrase, empty for none
        overwrite: Replace an existing key pair at key_path
        bits: RSA modulus size

    Returns:
        The public key text
    """
    key_path = os.path.expanduser(key_path)

    if key_exists(key_path):
        if not overwrite:
            raise SyshealthError(f"Key file {key_path} or {key_path}.pub already exists. Aborting key generation.")
        for path in (key_path, f"{key_path}.pub"):
            if os.path.exists(path):
                os.remove(path)

    if not require_command("ssh-keygen"):
        raise SyshealthError("ssh-keygen not available. Install openssh-client or equivalent.")

    os.makedirs(os.path.dirname(os.path.abspath(key_path)), mode=0o700, exist_ok=True)
    run_command(["ssh-keygen", "-t", "rsa", "-b", str(bits), "-f", key_path, "-N", passphrase, "-q"])
    logger.info(f"Generated SSH key {key_path}")

    with open(f"{key_path}.pub", "r") as f:
        public_key = f.read().strip()

    console.success(f"SSH key generated at {key_path} (public key: {key_path}.pub).")
    console.info("Public key:")
    console.plain("-----------------")
    console.plain(public_key)
    console.plain("-----------------")
    console.info("To copy it to a remote server, run:")
    console.emphasis(f"ssh-copy-id -i {key_path}.pub user@remote-host")
    console.plain("Or, manually append the public key to ~/.ssh/authorized_keys on the remote server.")
    return public_key
