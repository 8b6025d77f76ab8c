# backend/sportbook/schemas/loyalty.py

from typing import Optional

from pydantic import BaseModel, Field


class TierBenefits(BaseModel):
    min_spent: float
    discount: float
    points_multiplier: float
    special_benefits: list[str]
    description: str


class LoyaltyInfo(BaseModel):
    """Response for GET /loyalty/{user_id}"""
    user_id: int
    current_tier: str
    reward_points: int
    total_spent: float
    tier_benefits: TierBenefits
    next_tier: Optional[str] = None
    spend_to_next_tier: float


class PointTransactionRead(BaseModel):
    """Transaction item in history list"""
    id: int
    user_id: int
    booking_id: Optional[int] = None
    points: int
    type: str  # earn, redeem, refund, correction
    description: Optional[str] = None
    created_at: Optional[str] = None

    model_config = {"from_attributes": True}


class UsePointsRequest(BaseModel):
    """Request body for POST /loyalty/{user_id}/use-points"""
    points: int = Field(..., gt=0, description="Points to redeem (1 point = 100 VND)")
    booking_id: Optional[int] = None


class UsePointsResponse(BaseModel):
    success: bool
    points_used: int
    discount_amount: float
    remaining_points: int
    transaction_id: int
    booking_final_price: Optional[float] = None
