"""taxes - Tax tables, PAYE and capped contributions.

Scope:
- SARS tax tables per tax year and age bracket, rebates
- Monthly PAYE from annualized progressive brackets
- UIF contribution and pension fund deduction limits

Constraints:
- Pure calculation - no employee records, no persistence
- Year-specific rules loaded from tax_rules/{year}.yaml, validated by schemas

Modules:
- schemas: Pydantic models for the YAML rule files
- tables: Rule loading and the (tax_year, age_bracket) registry
- paye: PAYE calculation
- contributions: UIF and pension fund caps

Usage:
    from sarscalc.sdk.taxes import calculate_paye_tax, get_active_tax_table

    result = calculate_paye_tax(25000, "under_65")
    table = get_active_tax_table("over_75", tax_year="2025")
"""

# Tax rules schemas
from .schemas import (
    AGE_CATEGORIES,
    AGE_CATEGORY_LABELS,
    AgeCategory,
    MedicalAidCredits,
    PensionFundRules,
    Rebates,
    SARSTaxTable,
    TaxBracket,
    TaxBracketResult,
    TaxRules,
    UIFRules,
    ValidationLimits,
)

# Tax rules loading and lookup
from .tables import (
    ConfigurationError,
    TaxTableRegistry,
    available_tax_years,
    build_registry,
    get_active_tax_table,
    get_bundled_rules_dir,
    get_registry,
    get_tax_rules_dirs,
    load_tax_rules,
    reset_registry,
    resolve_rules,
)

# Calculations
from .paye import PAYEResult, calculate_paye_tax
from .contributions import calculate_uif, validate_pension_fund

__all__ = [
    # Schemas
    "AGE_CATEGORIES",
    "AGE_CATEGORY_LABELS",
    "AgeCategory",
    "MedicalAidCredits",
    "PensionFundRules",
    "Rebates",
    "SARSTaxTable",
    "TaxBracket",
    "TaxBracketResult",
    "TaxRules",
    "UIFRules",
    "ValidationLimits",
    # Tables
    "ConfigurationError",
    "TaxTableRegistry",
    "available_tax_years",
    "build_registry",
    "get_active_tax_table",
    "get_bundled_rules_dir",
    "get_registry",
    "get_tax_rules_dirs",
    "load_tax_rules",
    "reset_registry",
    "resolve_rules",
    # Calculations
    "PAYEResult",
    "calculate_paye_tax",
    "calculate_uif",
    "validate_pension_fund",
]
