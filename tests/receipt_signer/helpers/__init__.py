"""Constants shared by receipt_signer tests."""

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
"""Well-known test private key from the web3 documentation. Never use it for anything real."""

TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
"""Checksum address of TEST_PRIVATE_KEY."""

OTHER_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
"""An unrelated valid checksum address (EIP-55 example)."""

__all__ = ["OTHER_ADDRESS", "TEST_ADDRESS", "TEST_PRIVATE_KEY"]
