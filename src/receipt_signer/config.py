"""
Runtime configuration for the signer.

The only setting is the signing key. It is read from the `SIGNING_KEY`
environment variable; the CLI flag `--signing-key` takes precedence.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

SIGNING_KEY_ENV = "SIGNING_KEY"
"""Environment variable holding the hex-encoded private key."""


@dataclass(frozen=True, slots=True)
class SignerConfig:
    """Signer settings. The key is excluded from repr."""

    signing_key: str | None = field(default=None, repr=False)
    """Hex private key, with or without '0x'. None means generate one."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SignerConfig:
        """
        Build the configuration from environment variables.

        Blank values are treated as unset.
        """
        env = os.environ if environ is None else environ
        value = env.get(SIGNING_KEY_ENV, "").strip()
        return cls(signing_key=value or None)

    def with_signing_key(self, signing_key: str | None) -> SignerConfig:
        """Return a copy with the key overridden, unless `signing_key` is None."""
        if signing_key is None:
            return self
        return SignerConfig(signing_key=signing_key)
