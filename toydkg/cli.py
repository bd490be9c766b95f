"""
Run a local (t,n) key generation with every party in this process.
"""

import argparse
import logging

from .dkg import DKGConfig, run_dkg
from .ed25519_op import compressed_hex, pub_key_from_priv
from .errors import DKGError


def parse_indices(value):
    return [int(v) for v in value.split(",") if v.strip()]


def keygen(args):
    config = DKGConfig(n=args.n, t=args.t)
    result = run_dkg(config)
    print(f"t={config.t} n={config.n} qualified={result.qualified}")
    print(result)
    if args.reconstruct:
        secret = result.reconstruct(args.reconstruct)
        matches = pub_key_from_priv(secret) == result.public_key
        print(f"reconstructed from {args.reconstruct}: "
              f"{compressed_hex(pub_key_from_priv(secret))} "
              f"{'matches' if matches else 'DOES NOT MATCH'} the joint key")
        return 0 if matches else 1
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('-n', type=int, default=5, help='Number of parties.')
    parser.add_argument('-t', type=int, default=3, help='Threshold.')
    parser.add_argument('--reconstruct', type=parse_indices, default=None,
                        help='Comma separated party indices to reconstruct from, e.g. 1,2,3.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log protocol rounds.')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")
    try:
        return keygen(args)
    except (DKGError, ValueError) as e:
        parser.exit(2, f"error: {e}\n")


if __name__ == "__main__":
    raise SystemExit(main())
