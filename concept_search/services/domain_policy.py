"""Domain vocabulary policy.

Each clinical domain is searchable only within a fixed set of coding systems.
The table below is closed: a domain that is not registered has no permitted
vocabularies, so searches in it return nothing rather than failing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

ATC_VOCABULARY = "ATC"

DRUG_CONCEPT_CLASSES = frozenset(
    {
        "Clinical Drug",
        "Branded Drug",
        "Ingredient",
        "Clinical Pack",
        "Branded Pack",
        "Quant Clinical Drug",
        "Quant Branded Drug",
        "11-digit NDC",
        "ATC 1st",
        "ATC 2nd",
        "ATC 3rd",
        "ATC 4th",
        "ATC 5th",
    }
)


@dataclass(frozen=True)
class ClassFilter:
    """Admits a concept whose class is listed or whose vocabulary is exempt."""

    concept_classes: frozenset[str]
    exempt_vocabularies: frozenset[str] = frozenset()

    def admits(self, vocabulary_id: str, concept_class_id: str | None) -> bool:
        return concept_class_id in self.concept_classes or vocabulary_id in self.exempt_vocabularies


@dataclass(frozen=True)
class DomainRule:
    domain: str
    vocabularies: frozenset[str]
    class_filter: Optional[ClassFilter] = None

    def admits(self, vocabulary_id: str, concept_class_id: str | None) -> bool:
        if vocabulary_id not in self.vocabularies:
            return False
        if self.class_filter is None:
            return True
        return self.class_filter.admits(vocabulary_id, concept_class_id)


DOMAIN_RULES: Mapping[str, DomainRule] = {
    rule.domain: rule
    for rule in (
        DomainRule("Condition", frozenset({"ICD10CM", "SNOMED", "ICD9CM"})),
        DomainRule("Observation", frozenset({"ICD10CM", "SNOMED", "LOINC", "CPT4", "HCPCS"})),
        DomainRule(
            "Drug",
            frozenset({"RxNorm", "NDC", "CPT4", "CVX", "HCPCS", ATC_VOCABULARY}),
            class_filter=ClassFilter(
                concept_classes=DRUG_CONCEPT_CLASSES,
                exempt_vocabularies=frozenset({ATC_VOCABULARY}),
            ),
        ),
        DomainRule("Measurement", frozenset({"LOINC", "CPT4", "SNOMED", "HCPCS"})),
        DomainRule("Procedure", frozenset({"CPT4", "HCPCS", "SNOMED", "ICD09PCS", "LOINC", "ICD10PCS"})),
    )
}


def rule_for(domain: str) -> Optional[DomainRule]:
    return DOMAIN_RULES.get(domain)


def permitted_vocabularies(domain: str) -> frozenset[str]:
    rule = rule_for(domain)
    return rule.vocabularies if rule else frozenset()


def registered_domains() -> list[str]:
    return list(DOMAIN_RULES)
