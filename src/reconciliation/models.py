"""
Reconciliation Data Models
==========================

In-memory structures exchanged between the spec sources, the
reconciliation engine and the presentation layer. Nothing here is
persisted; every result is rebuilt on each call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class SpecTier(str, Enum):
    """Buyer-impact tier of a seller-drafted spec."""
    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    TERTIARY = "Tertiary"

    @property
    def priority(self) -> int:
        return _TIER_PRIORITY[self]


class ISQRole(str, Enum):
    """Role of a website-derived ISQ."""
    CONFIG = "config"
    KEY = "key"
    BUYER = "buyer"

    @property
    def priority(self) -> int:
        return _ROLE_PRIORITY[self]


class InputType(str, Enum):
    """Descriptive only, never used in matching."""
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"


class AuditStatus(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


_TIER_PRIORITY = {SpecTier.PRIMARY: 3, SpecTier.SECONDARY: 2, SpecTier.TERTIARY: 1}
_ROLE_PRIORITY = {ISQRole.CONFIG: 3, ISQRole.KEY: 2, ISQRole.BUYER: 1}


@dataclass
class Specification:
    """A named product attribute with its ordered candidate options."""
    name: str
    options: List[str] = field(default_factory=list)   # order = popularity
    priority: int = 1                                   # 1..3, from tier or role
    tier: Optional[SpecTier] = None                     # seller side only
    role: Optional[ISQRole] = None                      # website side only
    input_type: Optional[InputType] = None
    mcat_name: Optional[str] = None

    @classmethod
    def seller(cls, name: str, options: List[str], tier: SpecTier, **kwargs) -> "Specification":
        return cls(name=name, options=list(options or []), priority=tier.priority, tier=tier, **kwargs)

    @classmethod
    def website(cls, name: str, options: List[str], role: ISQRole) -> "Specification":
        return cls(name=name, options=list(options or []), priority=role.priority, role=role)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "options": list(self.options or []),
            "priority": self.priority,
            "tier": self.tier.value if self.tier else None,
            "role": self.role.value if self.role else None,
            "input_type": self.input_type.value if self.input_type else None,
            "mcat_name": self.mcat_name,
        }


@dataclass
class WebsiteISQs:
    """Output of one website extraction run: 1 config, up to 3 keys, buyers."""
    config: Optional[Specification] = None
    keys: List[Specification] = field(default_factory=list)
    buyers: List[Specification] = field(default_factory=list)

    def all_specs(self) -> List[Specification]:
        """Config, then keys, then buyers."""
        specs = [self.config] if self.config is not None else []
        return specs + list(self.keys) + list(self.buyers)


@dataclass
class MatchedSpecPair:
    """A seller spec matched to one website spec, with reconciled options."""
    name: str
    category: SpecTier
    combined_priority: int
    options: List[str] = field(default_factory=list)

    # Provenance
    website_name: str = ""
    website_index: int = -1
    seller_priority: int = 0
    website_priority: int = 0
    seller_options: List[str] = field(default_factory=list)
    website_options: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category.value,
            "combined_priority": self.combined_priority,
            "options": list(self.options or []),
            "website_name": self.website_name,
            "website_index": self.website_index,
            "seller_priority": self.seller_priority,
            "website_priority": self.website_priority,
            "seller_options": list(self.seller_options),
            "website_options": list(self.website_options),
        }


@dataclass
class BuyerISQ:
    """Terminal artifact: a buyer-facing ISQ with at most 8 options."""
    name: str
    options: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "options": list(self.options)}


@dataclass
class ReconciliationResult:
    """Common specs and selected buyer ISQs for one stage-1/stage-2 pair."""
    generated_at: datetime
    common_specs: List[MatchedSpecPair] = field(default_factory=list)
    buyer_isqs: List[BuyerISQ] = field(default_factory=list)
    seller_spec_count: int = 0
    website_spec_count: int = 0
    inputs_hash: str = ""
    tables_version: str = ""

    @property
    def has_common_specs(self) -> bool:
        return bool(self.common_specs)

    def to_dict(self) -> dict:
        return {
            "generated_at": self.generated_at.isoformat(),
            "inputs_hash": self.inputs_hash,
            "tables_version": self.tables_version,
            "seller_spec_count": self.seller_spec_count,
            "website_spec_count": self.website_spec_count,
            "common_specs": [p.to_dict() for p in self.common_specs],
            "buyer_isqs": [b.to_dict() for b in self.buyer_isqs],
        }


@dataclass
class AuditResult:
    """One record of the external spec audit."""
    specification: str
    status: AuditStatus = AuditStatus.CORRECT
    explanation: str = ""
    problematic_options: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "specification": self.specification,
            "status": self.status.value,
            "explanation": self.explanation,
            "problematic_options": list(self.problematic_options),
        }
