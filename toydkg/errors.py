"""
Error taxonomy for the DKG core.

None of these are retried automatically: repeating a cryptographic
operation on the same input gives the same answer, only fixing the
input helps.
"""


class DKGError(Exception):
    """Base class for every error raised by toydkg."""


class GenerationFailure(DKGError):
    """
    Secure randomness was unavailable while generating a key, a blinder or
    polynomial coefficients. Fatal: a key built on degraded entropy must
    never be used.
    """


class ArithmeticFailure(DKGError, ValueError):
    """A scalar or point handed to the core is not a valid group/field element."""


class ReconstructionFailure(DKGError):
    """
    Lagrange reconstruction cannot produce a correct value: too few shares,
    mismatched inputs, or degenerate (zero / repeated) indices.
    """


class VerificationFailure(DKGError):
    """
    A received share does not match the sender's published verification
    vector. Carries everything a complaint needs so other parties can re-run
    the same check.
    """

    def __init__(self, sender, receiver, share):
        self.sender = sender
        self.receiver = receiver
        self.share = share
        super().__init__(
            f"share from party {sender} to party {receiver} "
            f"failed Feldman verification [{share:0>64X}]")


class DKGAborted(DKGError):
    """Fewer than t parties survived disqualification; no key was produced."""
