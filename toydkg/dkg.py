"""
Pedersen / Feldman distributed key generation.

The scheme is based on values t,n
t = minimum number of parties who can reconstruct (or use) the secret
n = total number of parties.

Protocol, as driven by run_dkg:
1. Every party draws a key pair (x_i, h_i = x_i*G), a blinder r_i and a
   degree t-1 polynomial f_i with f_i(0) = x_i. It publishes only the
   Pedersen commitment h_i + r_i*H.
2. Once every commitment is out, every party reveals r_i, its Feldman
   verification vector F_i = (a_i_0*G, ..., a_i_(t-1)*G) and a proof of
   knowledge of a_i_0. Everyone checks unblind(commitment_i) == F_i[0].
3. Party i sends s_i_j = f_i(x_j) privately to every party j, which checks
   it against F_i. A failed check becomes a public complaint; an upheld
   complaint disqualifies the sender.
4. Party j keeps sum_{i qualified} s_i_j. The joint public key is the sum of
   the qualified unblinded commitments. The joint secret is never formed.

Each Party object owns its secrets; everything that crosses between
parties goes through PublicArtifacts, commitments and addressed shares.
"""

import logging
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .ed25519_op import check_scalar, compressed_hex, export_verifying_key, pub_key_from_priv
from .errors import (ArithmeticFailure, DKGAborted, DKGError, ReconstructionFailure,
                     VerificationFailure)
from .feldman import (Complaint, check_vector, verify_share, resolve_complaint,
                      public_share, group_vector)
from .keypair import generate_keypair
from .pedersen import blind, unblind, random_blinder, aggregate_public_key
from .polynomial import random_polynomial
from .schnorr_nizk import SchnorrNIZK, proove, verify, index_user_id
from .shamir import aggregate_shares, shamir_reconstruct

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DKGConfig:
    n: int
    t: int
    indices: Tuple[int, ...] = field(default=())

    def __post_init__(self):
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (self.n, self.t)):
            raise ValueError("n and t must be integers")
        if not 1 <= self.t <= self.n:
            raise ValueError(f"need 1 <= t <= n, got t={self.t} n={self.n}")
        indices = tuple(self.indices) if self.indices else tuple(range(1, self.n + 1))
        if len(indices) != self.n:
            raise ValueError(f"{len(indices)} indices for {self.n} parties")
        for x in indices:
            check_scalar(x, "party index")
            if x == 0:
                raise ValueError("party index 0 would hand out the secret itself")
        if len(set(indices)) != len(indices):
            raise ValueError(f"party indices are not distinct: {indices}")
        object.__setattr__(self, "indices", indices)


PublicArtifacts = namedtuple(
    "PublicArtifacts",
    ["index", "commitment", "blinder", "verification_vector", "proof"])


def check_artifacts(artifacts: PublicArtifacts, sender, commitment, threshold) -> bool:
    """
    Everything a party publishes in round 2 must be consistent with what it
    committed to in round 1. sender is the index the artifacts arrived from,
    never the index they claim.
    """
    vector = artifacts.verification_vector
    if artifacts.index != sender:
        logger.warning("party %d published artifacts under index %r", sender, artifacts.index)
        return False
    if artifacts.commitment != commitment:
        logger.warning("party %d changed its commitment", artifacts.index)
        return False
    if len(vector) != threshold:
        logger.warning("party %d published %d coefficient commitments, expected %d",
                       artifacts.index, len(vector), threshold)
        return False
    try:
        opened = unblind(commitment, artifacts.blinder)
        check_vector(vector, threshold)
    except (ArithmeticFailure, ValueError):
        logger.warning("party %d published malformed values", artifacts.index)
        return False
    if opened != vector[0]:
        logger.warning("party %d: commitment does not open to its public key",
                       artifacts.index)
        return False
    proof = artifacts.proof
    if (not isinstance(proof, SchnorrNIZK) or proof.A != vector[0]
            or proof.user_id != index_user_id(sender) or not verify(proof)):
        logger.warning("party %d: bad proof of knowledge", artifacts.index)
        return False
    return True


class Party:
    """
    One participant. Secret key, blinder and polynomial never leave the
    object; the methods below are its whole outside interface.
    """

    def __init__(self, index: int, config: DKGConfig, rng=None):
        if index not in config.indices:
            raise ValueError(f"index {index} is not one of {config.indices}")
        self.index = index
        self.config = config
        self._rng = rng
        self._keypair = generate_keypair(rng)
        self._blinder = random_blinder(rng)
        self._poly = random_polynomial(self._keypair.secret, config.t - 1, rng)
        self.commitment = None
        self._received: Dict[int, int] = {}
        self.complaints: List[Complaint] = []

    def commit(self):
        """Round 1."""
        self.commitment = blind(self._keypair.public, self._blinder)
        return self.commitment

    def publish(self) -> PublicArtifacts:
        """Round 2, only after every commitment is out."""
        if self.commitment is None:
            raise DKGError("publish() before commit() would reveal an unused blinder")
        return PublicArtifacts(
            index=self.index,
            commitment=self.commitment,
            blinder=self._blinder,
            verification_vector=self._poly.verification_vector(),
            proof=proove(self._poly.secret, index_user_id(self.index), self._rng))

    def share_for(self, index: int) -> int:
        if index not in self.config.indices:
            raise ValueError(f"index {index} is not one of {self.config.indices}")
        return self._poly.evaluate(index)

    def receive_share(self, sender: int, artifacts: PublicArtifacts, share: int):
        """
        Round 3. A share that does not match the sender's vector is recorded
        as a complaint and raised as VerificationFailure. sender comes from the
        channel the share arrived on.
        """
        if sender != self.index and not verify_share(
                artifacts.verification_vector, share, self.index):
            complaint = Complaint(sender=sender, receiver=self.index, share=share)
            self.complaints.append(complaint)
            logger.warning("party %d: share from party %d failed verification",
                           self.index, sender)
            raise VerificationFailure(sender, self.index, share)
        self._received[sender] = share

    def final_share(self, qualified) -> int:
        missing = [i for i in qualified if i not in self._received]
        if missing:
            raise DKGError(f"party {self.index} has no share from {missing}")
        return aggregate_shares(self._received[i] for i in qualified)

    def __repr__(self):
        return f"Party(index={self.index}, t={self.config.t}, n={self.config.n})"


class DKGResult:
    def __init__(self, config, public_key, qualified, shares, public_shares, complaints):
        self.config = config
        self.public_key = public_key
        self.qualified = qualified
        self.shares = shares
        self.public_shares = public_shares
        self.complaints = complaints

    def reconstruct(self, indices) -> int:
        """
        Recover the joint secret from the shares of the given parties.
        Testing / recovery only: a deployment never gathers these in one place.
        """
        missing = [i for i in indices if i not in self.shares]
        if missing:
            raise ReconstructionFailure(f"no share held by {missing}")
        return shamir_reconstruct(list(indices), [self.shares[i] for i in indices],
                                  threshold=self.config.t)

    def verifying_key(self):
        return export_verifying_key(self.public_key)

    def __repr__(self):
        contents = [f"public_key [{compressed_hex(self.public_key)}]\n"]
        row = 1
        for i, v in sorted(self.shares.items()):
            contents.append(f"shard{i}=>[{v:0>64X}]")
            if row % 2 == 0:
                contents.append("\n")
            row += 1
        return " ".join(contents)


def run_dkg(config: DKGConfig, parties: Optional[List[Party]] = None, rng=None) -> DKGResult:
    """
    Run every round for a set of local parties. Only the published values
    move between Party objects.
    """
    if parties is None:
        parties = [Party(i, config, rng) for i in config.indices]
    if sorted(p.index for p in parties) != sorted(config.indices):
        raise ValueError("parties do not match the configured indices")
    by_index = {p.index: p for p in parties}
    logger.debug("starting dkg t=%d n=%d", config.t, config.n)

    # round 1
    commitments = {p.index: p.commit() for p in parties}

    # round 2
    artifacts = {p.index: p.publish() for p in parties}
    disqualified = set()
    for sender, published in artifacts.items():
        # public data, every party reaches the same verdict
        if not check_artifacts(published, sender, commitments[sender], config.t):
            disqualified.add(sender)

    # round 3
    complaints = []
    for sender in config.indices:
        if sender in disqualified:
            continue
        for receiver in parties:
            share = by_index[sender].share_for(receiver.index)
            try:
                receiver.receive_share(sender, artifacts[sender], share)
            except VerificationFailure as e:
                complaints.append(Complaint(e.sender, e.receiver, e.share))

    for complaint in complaints:
        if resolve_complaint(complaint, artifacts[complaint.sender].verification_vector):
            disqualified.add(complaint.sender)
            continue
        # the share is public now and provably correct, the accuser takes it
        try:
            by_index[complaint.receiver].receive_share(
                complaint.sender, artifacts[complaint.sender], complaint.share)
        except VerificationFailure:
            disqualified.add(complaint.receiver)

    qualified = [i for i in config.indices if i not in disqualified]
    if disqualified:
        logger.warning("disqualified parties: %s", sorted(disqualified))
    if len(qualified) < config.t:
        raise DKGAborted(f"only {len(qualified)} qualified parties, threshold is {config.t}")

    # round 4
    public_key = aggregate_public_key([commitments[i] for i in qualified],
                                      [artifacts[i].blinder for i in qualified])
    vectors = [artifacts[i].verification_vector for i in qualified]
    assert group_vector(vectors)[0] == public_key

    shares = {i: by_index[i].final_share(qualified) for i in qualified}
    public_shares = {i: public_share(vectors, i) for i in qualified}
    for i in qualified:
        assert pub_key_from_priv(shares[i]) == public_shares[i]

    logger.info("dkg finished with %d qualified parties", len(qualified))
    return DKGResult(config, public_key, qualified, shares, public_shares, complaints)
