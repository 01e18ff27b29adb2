"""
Common values used in chain fixtures.
"""

from hashlib import sha256

from Crypto.Hash import keccak

EmptyBloom = bytes([0] * 256)
EmptyOmmersRoot = bytes.fromhex("1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347")
EmptyTrieRoot = bytes.fromhex("56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421")
EmptyCodeHash = keccak.new(digest_bits=256).update(b"").digest()
EmptyRequestsHash = sha256(b"").digest()
EmptyHash = bytes([0] * 32)
EmptyNonce = bytes([0] * 8)
