"""
Parsers for the comma separated lists the CI runner passes in environment variables.
"""
from typing import List, Optional


def split_list(value: Optional[str]) -> List[str]:
    """
    Splits a comma separated value into its entries.

    An unset or empty value is an empty list; entries are kept verbatim.
    """
    if not value:
        return []
    return value.split(",")
