"""Deterministic policy checks applied to each generated scenario."""
from __future__ import annotations

from typing import Optional

from premortem.config import runtime_config
from premortem.enforcement.matcher import TextMatcher, restricted_matcher
from premortem.enforcement.models import (
    REASON_CRITICAL_MITIGATION,
    REASON_RESTRICTED_CONTEXT,
    RULE_CRITICAL_MITIGATION,
    RULE_RESTRICTED_CONTEXT,
    ValidationResult,
)
from premortem.forensic.models import FailureScenario, Severity

DEFAULT_CRITICAL_LIKELIHOOD = 0.5


class PolicyValidator:
    """Evaluates one scenario; the first failing rule wins.

    Missing fields count against the scenario: a Critical scenario with no
    ``minimalPreventiveChange`` fails the mitigation rule.
    """

    def __init__(
        self,
        matcher: Optional[TextMatcher] = None,
        critical_likelihood: float = DEFAULT_CRITICAL_LIKELIHOOD,
    ) -> None:
        self._matcher = matcher or restricted_matcher()
        self._critical_likelihood = critical_likelihood

    def validate(self, scenario: FailureScenario) -> ValidationResult:
        if self._matcher.matches(scenario.content_text()):
            lookup = scenario.authoritativeLookup
            if lookup is None or not lookup.found:
                return ValidationResult(
                    valid=False,
                    overrideReason=REASON_RESTRICTED_CONTEXT,
                    rule=RULE_RESTRICTED_CONTEXT,
                )

        if scenario.severity == Severity.critical:
            change = scenario.minimalPreventiveChange
            if change is None or change.likelihood is None or change.likelihood < self._critical_likelihood:
                return ValidationResult(
                    valid=False,
                    overrideReason=REASON_CRITICAL_MITIGATION,
                    rule=RULE_CRITICAL_MITIGATION,
                )

        return ValidationResult(valid=True)


def validator_from_env() -> PolicyValidator:
    return PolicyValidator(
        matcher=restricted_matcher(runtime_config.get_restricted_terms()),
        critical_likelihood=runtime_config.get_critical_likelihood(),
    )
