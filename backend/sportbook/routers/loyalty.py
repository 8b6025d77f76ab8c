# backend/sportbook/routers/loyalty.py
"""
Loyalty API: tiers, point balance, history and redemption.

Points are credited by POST /bookings/{id}/complete; this router only
reads balances and spends points.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import (
    Bookings as DBBooking,
    PointTransactions as DBPointTransaction,
    Users as DBUser,
)
from ..schemas.loyalty import (
    LoyaltyInfo,
    PointTransactionRead,
    TierBenefits,
    UsePointsRequest,
    UsePointsResponse,
)
from ..services.loyalty import (
    TIER_BENEFITS,
    get_next_tier,
    get_tier,
    redeem_points,
    spend_to_next_tier,
)

router = APIRouter(prefix="/loyalty", tags=["loyalty"])

REDEEMABLE_STATUSES = ("pending", "confirmed")


def get_user_or_404(user_id: int, db: Session) -> DBUser:
    user = db.get(DBUser, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found"
        )
    return user


@router.get("/tiers", response_model=dict[str, TierBenefits])
def get_tier_benefits():
    return TIER_BENEFITS


@router.get("/{user_id}", response_model=LoyaltyInfo)
def get_loyalty_info(user_id: int, db: Session = Depends(get_db)):
    user = get_user_or_404(user_id, db)
    tier = get_tier(user.reward_points)

    return LoyaltyInfo(
        user_id=user.id,
        current_tier=tier,
        reward_points=user.reward_points,
        total_spent=user.total_spent,
        tier_benefits=TIER_BENEFITS[tier],
        next_tier=get_next_tier(tier),
        spend_to_next_tier=spend_to_next_tier(user.total_spent, tier),
    )


@router.get("/{user_id}/history", response_model=list[PointTransactionRead])
def get_points_history(
    user_id: int,
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Point transaction history.
    Newest first.
    """
    get_user_or_404(user_id, db)

    return (
        db.query(DBPointTransaction)
        .filter(DBPointTransaction.user_id == user_id)
        .order_by(DBPointTransaction.created_at.desc(), DBPointTransaction.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


@router.post("/{user_id}/use-points", response_model=UsePointsResponse)
def use_points(
    user_id: int,
    data: UsePointsRequest,
    db: Session = Depends(get_db),
):
    """
    Redeem points for a discount (1 point = 100 VND).
    With booking_id the discount is applied to that booking's final price.
    """
    user = get_user_or_404(user_id, db)

    booking = None
    if data.booking_id is not None:
        booking = db.get(DBBooking, data.booking_id)
        if not booking or booking.user_id != user.id:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status not in REDEEMABLE_STATUSES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot use points on a {booking.status} booking",
            )

    try:
        result = redeem_points(db, user, data.points, booking)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db.commit()

    return UsePointsResponse(
        success=True,
        booking_final_price=booking.final_price if booking is not None else None,
        **result,
    )
