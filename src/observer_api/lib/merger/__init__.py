"""Application merge: derive user accounts from nomination applications.

Public API:
    - ApplicationMerger: merges applications into a user
    - Lookups, RegionLookup, UicLookup: collaborators used for commission links
    - PRECINCT_CHAIN, TERRITORIAL_CHAIN, resolve_commission: commission resolution
    - MergeError, InvalidMergeInput: errors
"""

from observer_api.lib.merger.errors import InvalidMergeInput, MergeError
from observer_api.lib.merger.lookups import Lookups, RegionLookup, UicLookup
from observer_api.lib.merger.merger import OBSERVER_ROLE, ApplicationMerger, common_current_role_ids
from observer_api.lib.merger.resolution import (
    PRECINCT_CHAIN,
    TERRITORIAL_CHAIN,
    ResolutionContext,
    chain_for,
    resolve_commission,
)

__all__ = [
    "OBSERVER_ROLE",
    "PRECINCT_CHAIN",
    "TERRITORIAL_CHAIN",
    "ApplicationMerger",
    "InvalidMergeInput",
    "Lookups",
    "MergeError",
    "RegionLookup",
    "ResolutionContext",
    "UicLookup",
    "chain_for",
    "common_current_role_ids",
    "resolve_commission",
]
