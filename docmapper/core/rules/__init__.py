from .compiler import compile_rules, compile_type
from .loader import RuleSet, load_ruleset
from .models import CompiledRules, TypeDescriptor
from .renames import RenameSpec, RenameTable

__all__ = [
    "CompiledRules",
    "RenameSpec",
    "RenameTable",
    "RuleSet",
    "TypeDescriptor",
    "compile_rules",
    "compile_type",
    "load_ruleset",
]
