"""SARS Calc SDK - Core functionality for salary and tax calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_configured_tax_year,
    get_user_tax_rules_dir,
    KNOWN_SETTINGS,
    SettingsError,
)

from .taxes import (
    AGE_CATEGORIES,
    AGE_CATEGORY_LABELS,
    ConfigurationError,
    SARSTaxTable,
    TaxBracket,
    TaxBracketResult,
    TaxRules,
    TaxTableRegistry,
    available_tax_years,
    calculate_paye_tax,
    calculate_uif,
    get_active_tax_table,
    get_registry,
    load_tax_rules,
    reset_registry,
    validate_pension_fund,
)

from .schemas import (
    SalaryInputs,
    SalaryCalculation,
    DeductionBreakdown,
    AdditionBreakdown,
    BulkEmployeeData,
    BulkCalculationResult,
)

from .salary import (
    calculate_salary,
    validate_salary_inputs,
    calculate_tax_percentage,
    calculate_net_percentage,
)

from .bulk import (
    TEMPLATE_HEADER,
    ParseError,
    EmptyResultError,
    SkipReason,
    ParsedRow,
    SkippedRow,
    BulkTotals,
    parse_csv_line,
    parse_amount,
    parse_bulk_rows,
    process_bulk_file,
    calculate_bulk_salaries,
    summarize_bulk_results,
    generate_bulk_template,
)

__all__ = [
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_configured_tax_year",
    "get_user_tax_rules_dir",
    "KNOWN_SETTINGS",
    "SettingsError",
    # Tax tables and calculators
    "AGE_CATEGORIES",
    "AGE_CATEGORY_LABELS",
    "ConfigurationError",
    "SARSTaxTable",
    "TaxBracket",
    "TaxBracketResult",
    "TaxRules",
    "TaxTableRegistry",
    "available_tax_years",
    "calculate_paye_tax",
    "calculate_uif",
    "get_active_tax_table",
    "get_registry",
    "load_tax_rules",
    "reset_registry",
    "validate_pension_fund",
    # Schemas
    "SalaryInputs",
    "SalaryCalculation",
    "DeductionBreakdown",
    "AdditionBreakdown",
    "BulkEmployeeData",
    "BulkCalculationResult",
    # Salary
    "calculate_salary",
    "validate_salary_inputs",
    "calculate_tax_percentage",
    "calculate_net_percentage",
    # Bulk
    "TEMPLATE_HEADER",
    "ParseError",
    "EmptyResultError",
    "SkipReason",
    "ParsedRow",
    "SkippedRow",
    "BulkTotals",
    "parse_csv_line",
    "parse_amount",
    "parse_bulk_rows",
    "process_bulk_file",
    "calculate_bulk_salaries",
    "summarize_bulk_results",
    "generate_bulk_template",
]
