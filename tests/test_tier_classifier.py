"""Tests for evidence aggregation and the verification tier classifier."""

from dataclasses import replace
from itertools import product

import pytest

from garagedesk.engine.evidence import bank_verified, collect_evidence, has_verified
from garagedesk.engine.tier_classifier import (
    TIER_RULES,
    classify,
    classify_garage,
    tier_rank,
)
from garagedesk.schemas.verification_schema import (
    BankStatus,
    DocumentType,
    Evidence,
    VerificationTier,
)
from tests.conftest import make_bank, make_document

FLAGS = ("has_identity", "has_garage_photo", "has_address", "has_business", "bank_verified")
ALL_EVIDENCE = [Evidence(*combo) for combo in product([False, True], repeat=5)]


def expected_tier(e: Evidence) -> VerificationTier:
    """Reference reading of the decision table."""
    if not (e.has_identity and e.has_garage_photo):
        return VerificationTier.UNVERIFIED
    if e.has_address and e.has_business and e.bank_verified:
        return VerificationTier.CERTIFIED
    if e.has_address:
        return VerificationTier.VERIFIED
    return VerificationTier.PROVISIONAL


class TestHasVerified:
    def test_verified_document_counts(self):
        docs = [make_document(DocumentType.IDENTITY_PROOF)]
        assert has_verified(docs, DocumentType.IDENTITY_PROOF)

    def test_unverified_document_does_not_count(self):
        docs = [make_document(DocumentType.IDENTITY_PROOF, verified=False)]
        assert not has_verified(docs, DocumentType.IDENTITY_PROOF)

    def test_any_verified_copy_is_enough(self):
        docs = [
            make_document(DocumentType.GARAGE_PHOTO, verified=False),
            make_document(DocumentType.GARAGE_PHOTO, verified=True),
        ]
        assert has_verified(docs, DocumentType.GARAGE_PHOTO)

    def test_other_type_does_not_count(self):
        docs = [make_document(DocumentType.ADDRESS_PROOF)]
        assert not has_verified(docs, DocumentType.BUSINESS_PROOF)

    def test_none_and_empty_are_false(self):
        assert not has_verified(None, DocumentType.IDENTITY_PROOF)
        assert not has_verified([], DocumentType.IDENTITY_PROOF)


class TestBankVerified:
    def test_missing_record(self):
        assert bank_verified(None) is False

    @pytest.mark.parametrize(
        "status,expected",
        [(BankStatus.VERIFIED, True), (BankStatus.PENDING, False), (BankStatus.REJECTED, False)],
    )
    def test_status(self, status, expected):
        assert bank_verified(make_bank(status)) is expected


class TestCollectEvidence:
    def test_empty_inputs_are_all_false(self):
        assert collect_evidence(None, None) == Evidence()

    def test_collects_each_flag(self):
        docs = [make_document(t) for t in DocumentType]
        evidence = collect_evidence(docs, make_bank(BankStatus.VERIFIED))
        assert evidence == Evidence(True, True, True, True, True)


class TestClassifyTable:
    @pytest.mark.parametrize("evidence", ALL_EVIDENCE)
    def test_every_combination_matches_table(self, evidence):
        assert classify(evidence).tier == expected_tier(evidence)

    def test_all_combinations_hit_exactly_one_tier(self):
        tiers = {classify(e).tier for e in ALL_EVIDENCE}
        assert tiers == set(VerificationTier)

    def test_catch_all_rule_is_last(self):
        assert TIER_RULES[-1].result.tier == VerificationTier.UNVERIFIED
        assert all(TIER_RULES[-1].predicate(e) for e in ALL_EVIDENCE)

    def test_provisional_benefits(self):
        result = classify(Evidence(has_identity=True, has_garage_photo=True))
        assert result.tier == VerificationTier.PROVISIONAL
        assert result.benefits == "limited visibility, no payouts"
        assert result.payouts_enabled is False

    def test_certified_with_full_evidence(self):
        result = classify(Evidence(True, True, True, True, True))
        assert result.tier == VerificationTier.CERTIFIED
        assert result.benefits == "top visibility, full payouts active"
        assert result.badge_color == "green"
        assert result.payouts_enabled is True

    def test_verified_without_bank(self):
        result = classify(Evidence(True, True, True, True, False))
        assert result.tier == VerificationTier.VERIFIED
        assert result.benefits == "normal visibility, payouts require bank verification"

    def test_all_false_is_unverified(self):
        result = classify(Evidence())
        assert result.tier == VerificationTier.UNVERIFIED
        assert result.benefits == "minimum visibility, no payouts"

    def test_address_without_core_documents_is_unverified(self):
        result = classify(Evidence(has_address=True, has_business=True, bank_verified=True))
        assert result.tier == VerificationTier.UNVERIFIED


class TestTierMonotonicity:
    def test_rank_order(self):
        ranks = [tier_rank(t) for t in (
            VerificationTier.UNVERIFIED,
            VerificationTier.PROVISIONAL,
            VerificationTier.VERIFIED,
            VerificationTier.CERTIFIED,
        )]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 4

    @pytest.mark.parametrize("evidence", ALL_EVIDENCE)
    def test_more_evidence_never_lowers_tier(self, evidence):
        base = tier_rank(classify(evidence).tier)
        for flag in FLAGS:
            if not getattr(evidence, flag):
                stronger = replace(evidence, **{flag: True})
                assert tier_rank(classify(stronger).tier) >= base


class TestClassifyGarage:
    def test_from_documents_and_bank(self):
        docs = [
            make_document(DocumentType.IDENTITY_PROOF),
            make_document(DocumentType.GARAGE_PHOTO),
            make_document(DocumentType.ADDRESS_PROOF),
        ]
        result = classify_garage(docs, make_bank(BankStatus.PENDING))
        assert result.tier == VerificationTier.VERIFIED
        assert result.label == "Verified"

    def test_nothing_uploaded(self):
        assert classify_garage([], None).tier == VerificationTier.UNVERIFIED
