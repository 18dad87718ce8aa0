"""Tests for the domain vocabulary policy table."""

import pytest

from concept_search.services import domain_policy


class TestDomainRules:
    """Registered domains and their vocabularies."""

    def test_exactly_five_domains_registered(self):
        assert sorted(domain_policy.registered_domains()) == [
            "Condition",
            "Drug",
            "Measurement",
            "Observation",
            "Procedure",
        ]

    def test_condition_vocabularies(self):
        assert domain_policy.permitted_vocabularies("Condition") == {"ICD10CM", "SNOMED", "ICD9CM"}

    def test_drug_vocabularies(self):
        assert domain_policy.permitted_vocabularies("Drug") == {"RxNorm", "NDC", "CPT4", "CVX", "HCPCS", "ATC"}

    def test_procedure_vocabularies(self):
        assert domain_policy.permitted_vocabularies("Procedure") == {
            "CPT4",
            "HCPCS",
            "SNOMED",
            "ICD09PCS",
            "LOINC",
            "ICD10PCS",
        }

    @pytest.mark.parametrize("domain", ["Device", "drug", "", "Visit"])
    def test_unregistered_domain_has_no_vocabularies(self, domain):
        assert domain_policy.rule_for(domain) is None
        assert domain_policy.permitted_vocabularies(domain) == frozenset()

    def test_only_drug_has_class_filter(self):
        for domain in domain_policy.registered_domains():
            rule = domain_policy.rule_for(domain)
            assert (rule.class_filter is not None) == (domain == "Drug")


class TestDrugClassFilter:
    """Drug concepts must be of a drug class or come from ATC."""

    @pytest.fixture
    def rule(self):
        return domain_policy.rule_for("Drug")

    @pytest.mark.parametrize("concept_class", ["Ingredient", "Clinical Drug", "11-digit NDC", "ATC 3rd"])
    def test_listed_classes_admitted(self, rule, concept_class):
        assert rule.admits("RxNorm", concept_class)

    def test_unlisted_class_rejected(self, rule):
        assert not rule.admits("RxNorm", "Brand Name")

    def test_atc_vocabulary_admitted_regardless_of_class(self, rule):
        assert rule.admits("ATC", "Something Else")

    def test_vocabulary_outside_domain_rejected(self, rule):
        assert not rule.admits("SNOMED", "Clinical Drug")

    def test_other_domains_ignore_class(self):
        rule = domain_policy.rule_for("Condition")
        assert rule.admits("SNOMED", "Brand Name")
        assert not rule.admits("LOINC", "Clinical Finding")
