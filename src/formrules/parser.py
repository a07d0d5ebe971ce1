"""Rule specification parser.

Grammar: ``rule1|rule2[p1,p2]|rule3[p1]``. Rule names are case-insensitive
and whitespace-trimmed; parameters stay raw strings until a rule coerces them.

Parsing is best-effort and never raises: unbalanced brackets, empty segments
and trailing text are tolerated.
"""

from formrules.types import RuleInvocation

RULE_SEPARATOR = "|"
PARAM_OPEN = "["
PARAM_CLOSE = "]"
PARAM_SEPARATOR = ","


def normalize_rule_name(name: str) -> str:
    """Canonical form of a rule name: trimmed and lower-cased."""
    return name.strip().lower()


def parse_invocation(segment: str) -> RuleInvocation | None:
    """Parse a single ``name[params]`` segment.

    Returns None for a blank segment.
    """
    name, bracket, rest = segment.partition(PARAM_OPEN)
    name = normalize_rule_name(name)
    if not name:
        return None

    params: list[str] = []
    if bracket:
        # Anything after the first closing bracket is ignored
        body = rest.split(PARAM_CLOSE, 1)[0]
        if body.strip():
            params = [param.strip() for param in body.split(PARAM_SEPARATOR)]

    return RuleInvocation(name=name, params=params)


def parse_rules(spec: str | None) -> list[RuleInvocation]:
    """Parse a rule specification into invocations, in declaration order.

    Args:
        spec: Rule specification string, e.g. ``"required|between[1,10]"``

    Returns:
        List of RuleInvocation; empty for a blank or non-string spec
    """
    if not isinstance(spec, str) or not spec.strip():
        return []

    invocations = []
    for segment in spec.split(RULE_SEPARATOR):
        invocation = parse_invocation(segment)
        if invocation is not None:
            invocations.append(invocation)
    return invocations
