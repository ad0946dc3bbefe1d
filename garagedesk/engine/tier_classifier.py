"""
Verification tier classifier.

An ordered rule table evaluated top to bottom; the first rule whose
predicate holds decides the tier. The last rule always matches, so every
combination of evidence maps to exactly one tier.

Usage:
    result = classify(Evidence(has_identity=True, has_garage_photo=True))
    assert result.tier == VerificationTier.PROVISIONAL
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from garagedesk.engine.evidence import collect_evidence
from garagedesk.schemas.verification_schema import (
    BankVerification,
    Evidence,
    GarageDocument,
    TierResult,
    VerificationTier,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierRule:
    """One row of the decision table."""
    name: str
    predicate: Callable[[Evidence], bool]
    result: TierResult


CERTIFIED = TierResult(
    tier=VerificationTier.CERTIFIED,
    label="Revonn Certified",
    benefits="top visibility, full payouts active",
    badge_color="green",
    payouts_enabled=True,
)
VERIFIED = TierResult(
    tier=VerificationTier.VERIFIED,
    label="Verified",
    benefits="normal visibility, payouts require bank verification",
    badge_color="yellow",
    payouts_enabled=False,
)
PROVISIONAL = TierResult(
    tier=VerificationTier.PROVISIONAL,
    label="Provisional Verified",
    benefits="limited visibility, no payouts",
    badge_color="gray",
    payouts_enabled=False,
)
UNVERIFIED = TierResult(
    tier=VerificationTier.UNVERIFIED,
    label="Unverified",
    benefits="minimum visibility, no payouts",
    badge_color="red",
    payouts_enabled=False,
)


def _core_documents(e: Evidence) -> bool:
    return e.has_identity and e.has_garage_photo


TIER_RULES: list[TierRule] = [
    TierRule(
        "certified",
        lambda e: _core_documents(e) and e.has_address and e.has_business and e.bank_verified,
        CERTIFIED,
    ),
    TierRule("verified", lambda e: _core_documents(e) and e.has_address, VERIFIED),
    TierRule("provisional", _core_documents, PROVISIONAL),
    TierRule("unverified", lambda e: True, UNVERIFIED),
]

_TIER_RANK = {
    VerificationTier.UNVERIFIED: 0,
    VerificationTier.PROVISIONAL: 1,
    VerificationTier.VERIFIED: 2,
    VerificationTier.CERTIFIED: 3,
}


def classify(evidence: Evidence) -> TierResult:
    """Map evidence to a tier and its benefits. Never raises."""
    for rule in TIER_RULES:
        if rule.predicate(evidence):
            logger.debug("Evidence %s matched rule '%s'", evidence, rule.name)
            return rule.result
    # Unreachable while the catch-all rule is last
    return UNVERIFIED


def tier_rank(tier: VerificationTier) -> int:
    """Unverified < Provisional < Verified < Certified."""
    return _TIER_RANK[tier]


def classify_garage(
    documents: Optional[Iterable[GarageDocument]],
    bank_record: Optional[BankVerification],
) -> TierResult:
    """Aggregate a garage's evidence and classify it."""
    return classify(collect_evidence(documents, bank_record))
