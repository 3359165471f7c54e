"""
ISQ Reconciler API Models
=========================

Pydantic models for API request/response serialization.
Stage documents are accepted as raw JSON objects and interpreted by the
loaders, so upstream schema drift degrades to "skipped entries" rather
than 422 errors.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class HealthResponse(BaseModel):
    status: str
    version: str
    tables_version: str


class ReconcileRequest(BaseModel):
    """Stage 1 + stage 2 documents."""
    stage1: Dict[str, Any] = Field(..., description="Seller specs document (seller_specs[])")
    stage2: Dict[str, Any] = Field(..., description="Website ISQs document (config/keys/buyers)")
    include_tertiary: Optional[bool] = None


class MatchedSpecModel(BaseModel):
    name: str
    category: str
    combined_priority: int
    options: List[str]
    website_name: str
    website_index: int
    seller_priority: int
    website_priority: int
    seller_options: List[str]
    website_options: List[str]


class BuyerISQModel(BaseModel):
    name: str
    options: List[str]


class ReconcileResponse(BaseModel):
    generated_at: str
    inputs_hash: str
    tables_version: str
    seller_spec_count: int
    website_spec_count: int
    common_specs: List[MatchedSpecModel] = Field(default_factory=list)
    buyer_isqs: List[BuyerISQModel] = Field(default_factory=list)


class OptionsRequest(BaseModel):
    options_a: List[str] = Field(default_factory=list)
    options_b: List[str] = Field(default_factory=list)


class OptionsResponse(BaseModel):
    options: List[str]


class NameSimilarityRequest(BaseModel):
    name_a: str
    name_b: str


class NameSimilarityResponse(BaseModel):
    similar: bool
    normalized_a: str
    normalized_b: str


class CompareRequest(BaseModel):
    stage1_a: Dict[str, Any]
    stage1_b: Dict[str, Any]


class AuditMergeRequest(BaseModel):
    stage1: Dict[str, Any]
    audit_results: List[Dict[str, Any]] = Field(default_factory=list)


class AuditMergeResponse(BaseModel):
    specs: List[Dict[str, Any]]
    correct_count: int
    incorrect_count: int
    all_correct: bool
