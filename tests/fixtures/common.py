"""
Common fixture factories.

Known-answer digests were computed independently with coreutils:
    printf "%016x" KEY | xxd -r -p | sha256sum
"""

from core.merkle.merkle_tree import IncrementalMerkleTree


# sha256 of the 8-byte big-endian key
KNOWN_KEY_DIGESTS = {
    0: "af5570f5a1810b7af78caf4bc70a660f0df51e42baf91d4de5b2328de0e83dfc",
    5: "5dee4dd60ff8d0ba9900fe91e90e0dcf65f0570d42c431f727d0300dd70dc431",
    10: "8d85f8467240628a94819b26bee26e3a9b2804334c63482deacec8d64ab4e1e7",
    30: "48a97e421546f8d4cae1cf88c51a459a8c10a88442eed63643dd263cef880c1c",
    2**64 - 1: "12a3ae445661ce5dee78d0650d33362dec29c4f82af05e7e57fb595bbbacf0ca",
}

# Root after appending 5, 10
ROOT_5_10 = "567dc2496e47bd3ee4330ed4b9d1f9ecfbc27dcc2d18c031eebc77b46424184d"

# Root after appending 5, 10, 30
ROOT_5_10_30 = "880ca15651bfb206d5a5f77d20c6a08e6ec03b9d14678b034d1cfb60436ce368"


def make_tree(keys=(5, 10, 30)) -> IncrementalMerkleTree:
    """Build a tree from the given keys."""
    tree = IncrementalMerkleTree()
    for key in keys:
        tree.append(key)
    return tree
