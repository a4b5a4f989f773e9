from .conforms_to_rule import ConformsTo
from .length_rules import MinLength, MaxLength, StringLength
from .predicate_rule import Predicate
from .range_rule import Range
from .regular_expression_rule import RegularExpression
from .required_rule import Required

__all__ = [
    "ConformsTo",
    "MaxLength",
    "MinLength",
    "Predicate",
    "Range",
    "RegularExpression",
    "Required",
    "StringLength",
]
