"""
Error Message Utilities

Provides human-readable error messages for PostgreSQL constraint
violations raised while writing companies and jobs.
"""

import re

# Human-readable constraint explanations (names as generated by schema.sql)
CONSTRAINT_MESSAGES = {
    "companies_pkey": "A company with this handle already exists.",
    "companies_name_key": "A company with this name already exists.",
    "companies_num_employees_check": "Number of employees cannot be negative.",
    "jobs_salary_check": "Salary cannot be negative.",
    "jobs_equity_check": "Equity must be a fraction no greater than 1.0.",
    "jobs_company_handle_fkey": "The company this job belongs to does not exist.",
}


def enhance_error_message(error: Exception) -> str:
    """
    Enhance database error messages with human-readable explanations.

    Handles:
    - Check constraint violations (adds explanation of the constraint)
    - Foreign key violations (explains the relationship)
    - Unique constraint violations
    - Not-null violations

    Returns the enhanced error message string.
    """
    error_str = str(error)

    # Check for constraint violations
    constraint_match = re.search(r'violates check constraint "(\w+)"', error_str)
    if constraint_match:
        name = constraint_match.group(1)
        explanation = CONSTRAINT_MESSAGES.get(name)

        if explanation:
            return f"Constraint violation ({name}): {explanation}"
        return f"Constraint violation: {name}. {error_str}"

    # Check for foreign key violations
    fk_match = re.search(r'violates foreign key constraint "(\w+)"', error_str)
    if fk_match:
        name = fk_match.group(1)
        explanation = CONSTRAINT_MESSAGES.get(name, "The referenced record does not exist.")
        return f"Foreign key violation ({name}): {explanation}"

    # Check for unique constraint violations
    unique_match = re.search(r'duplicate key value violates unique constraint "(\w+)"', error_str)
    if unique_match:
        name = unique_match.group(1)
        explanation = CONSTRAINT_MESSAGES.get(name, "A record with this value already exists.")
        return f"Duplicate entry ({name}): {explanation}"

    # Check for not-null violations
    null_match = re.search(r'null value in column "(\w+)" .* violates not-null constraint', error_str)
    if null_match:
        column_name = null_match.group(1)
        return f"Required field missing: '{column_name}' cannot be null."

    # Return original error if no enhancement found
    return error_str
