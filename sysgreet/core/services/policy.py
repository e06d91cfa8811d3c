"""
Policy resolution — decide keep / overwrite / prompt for an existing config.

Precedence:
    --config-policy flag  >  SYSGREET_CONFIG_POLICY env var  >  prompt (interactive only)

A non-interactive run with neither source set is an error: we refuse
to guess between a destructive and a non-destructive default.
"""

from __future__ import annotations

from sysgreet.core.errors import InvalidPolicyError, PolicyRequiredError
from sysgreet.core.models.bootstrap import PolicyResolution, PolicySource, PolicyValue

POLICY_ENV_VAR = "SYSGREET_CONFIG_POLICY"


def parse_policy(raw: str | None, source: str = "") -> PolicyValue | None:
    """Parse a raw policy string (trimmed, case-insensitive).

    Returns:
        The PolicyValue, or None when ``raw`` is empty ("not provided").

    Raises:
        InvalidPolicyError: ``raw`` is non-empty but not a known policy.
    """
    cleaned = (raw or "").strip().lower()
    if not cleaned:
        return None
    try:
        return PolicyValue(cleaned)
    except ValueError:
        raise InvalidPolicyError(raw or "", source) from None


def resolve_policy(flag_value: str | None, env_value: str | None, interactive: bool) -> PolicyResolution:
    """Resolve the effective policy from flag, env, and interactivity.

    No I/O and no environment lookups; callers pass every input explicitly.

    Raises:
        InvalidPolicyError: The winning source holds an unknown value.
        PolicyRequiredError: Nothing set and the run is non-interactive.
    """
    value = parse_policy(flag_value, PolicySource.FLAG)
    if value is not None:
        return _resolution(value, PolicySource.FLAG, interactive)

    value = parse_policy(env_value, PolicySource.ENV)
    if value is not None:
        return _resolution(value, PolicySource.ENV, interactive)

    if not interactive:
        raise PolicyRequiredError()

    return PolicyResolution(PolicyValue.PROMPT, PolicySource.DEFAULT, True)


def _resolution(value: PolicyValue, source: PolicySource, interactive: bool) -> PolicyResolution:
    # An explicit "prompt" with no terminal cannot be honoured.
    if value is PolicyValue.PROMPT and not interactive:
        raise PolicyRequiredError(
            f"config policy 'prompt' (from {source}) needs an interactive terminal; "
            "use keep or overwrite"
        )
    return PolicyResolution(value, source, interactive)
