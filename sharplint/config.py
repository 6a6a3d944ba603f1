from __future__ import annotations

"""
Analyzer configuration: which rules are enabled and how they are instantiated.

The defaults reproduce the fixed behaviour of the tool: all five rules, in
report order, with a parameter limit of 5 and the built-in primitive type
names. The CLI only touches `disabled_rules`.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Sequence

from sharplint.rules.base import Rule
from sharplint.rules.long_parameter_list import MAX_PARAMETERS, LongParameterListRule
from sharplint.rules.nested_if import CollapsibleNestedIfRule
from sharplint.rules.public_fields import PublicFieldRule, PublicNonReadonlyFieldRule
from sharplint.rules.var_primitive import PRIMITIVE_TYPE_NAMES, InferredPrimitiveTypeRule


@dataclass
class Config:
    """
    Analyzer configuration.

    max_parameters and primitive_type_names feed the rules that use them;
    disabled_rules holds rule ids to leave out of the run.
    """

    max_parameters: int = MAX_PARAMETERS
    primitive_type_names: FrozenSet[str] = PRIMITIVE_TYPE_NAMES
    disabled_rules: FrozenSet[str] = field(default_factory=frozenset)


def build_rules(config: Config) -> List[Rule]:
    """Instantiate every built-in rule, in the order their findings are reported."""
    return [
        PublicFieldRule(),
        PublicNonReadonlyFieldRule(),
        InferredPrimitiveTypeRule(primitive_type_names=config.primitive_type_names),
        LongParameterListRule(max_parameters=config.max_parameters),
        CollapsibleNestedIfRule(),
    ]


def rule_ids() -> List[str]:
    """Ids of all built-in rules, in report order."""
    return [rule.id for rule in build_rules(Config())]


def get_default_config() -> Config:
    """Return the default configuration (every rule enabled, default thresholds)."""
    return Config()


def get_enabled_rules(config: Config | None = None) -> Sequence[Rule]:
    """
    Return the rules to run for the given config (or the default config).

    Disabled rules are dropped; the remaining ones keep their report order.
    """
    if config is None:
        config = get_default_config()
    return [rule for rule in build_rules(config) if rule.id not in config.disabled_rules]
