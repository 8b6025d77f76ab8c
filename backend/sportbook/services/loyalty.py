# backend/sportbook/services/loyalty.py
"""
Loyalty points and tiers.

Tier is derived from the current reward point balance:
  Diamond >= 10000, Gold >= 5000, Silver >= 1000, else Bronze.

Points are earned when a booking is completed:
  floor(price / 10000) * 10 base points, times (1 + tier bonus).

Redemption rate: 1 point = 100 VND of booking discount.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models.generated import (
    Bookings as DBBooking,
    PointTransactions as DBPointTransaction,
    Users as DBUser,
)

logger = logging.getLogger(__name__)

TIERS = ["Bronze", "Silver", "Gold", "Diamond"]

# Reward point balance needed for each tier
TIER_POINTS = {
    "Bronze": 0,
    "Silver": 1000,
    "Gold": 5000,
    "Diamond": 10000,
}

TIER_BENEFITS = {
    "Bronze": {
        "min_spent": 0,
        "discount": 0,
        "points_multiplier": 1,
        "special_benefits": [],
        "description": "Start your journey with us",
    },
    "Silver": {
        "min_spent": 1_000_000,
        "discount": 5,
        "points_multiplier": 1.1,
        "special_benefits": ["Priority Support"],
        "description": "Enjoy priority support and extra points",
    },
    "Gold": {
        "min_spent": 5_000_000,
        "discount": 10,
        "points_multiplier": 1.2,
        "special_benefits": ["Priority Support", "Free Cancellation"],
        "description": "Premium benefits and flexible booking",
    },
    "Diamond": {
        "min_spent": 10_000_000,
        "discount": 15,
        "points_multiplier": 1.3,
        "special_benefits": ["Priority Support", "Free Cancellation", "VIP Access"],
        "description": "Ultimate VIP experience",
    },
}

# Extra earned points, percent
TIER_BONUS_PERCENT = {
    "Bronze": 0,
    "Silver": 10,
    "Gold": 20,
    "Diamond": 30,
}

POINT_VALUE_VND = 100


def get_tier(reward_points: int) -> str:
    for tier in reversed(TIERS):
        if reward_points >= TIER_POINTS[tier]:
            return tier
    return "Bronze"


def get_next_tier(tier: str) -> Optional[str]:
    idx = TIERS.index(tier)
    return TIERS[idx + 1] if idx < len(TIERS) - 1 else None


def spend_to_next_tier(total_spent: float, tier: str) -> float:
    """Amount left to spend before the next tier's min_spent; 0 at the top."""
    next_tier = get_next_tier(tier)
    if next_tier is None:
        return 0
    return max(0, TIER_BENEFITS[next_tier]["min_spent"] - total_spent)


def calculate_reward_points(price: float, tier: str) -> int:
    """
    Points earned for a paid amount.

    1,000,000 VND → 100 base points; Silver/Gold/Diamond add 10/20/30%.
    """
    base_points = int(price // 10000) * 10
    return base_points * (100 + TIER_BONUS_PERCENT[tier]) // 100


def tier_discount(price: float, tier: str) -> float:
    """Discount amount from the tier's percent."""
    return round(price * TIER_BENEFITS[tier]["discount"] / 100)


def points_to_vnd(points: int) -> int:
    return points * POINT_VALUE_VND


def create_point_transaction(
    db: Session,
    user_id: int,
    points: int,
    tx_type: str,
    booking_id: Optional[int] = None,
    description: Optional[str] = None,
) -> DBPointTransaction:
    """Create a point transaction record."""
    tx = DBPointTransaction(
        user_id=user_id,
        points=points,
        type=tx_type,
        booking_id=booking_id,
        description=description,
    )
    db.add(tx)
    return tx


def award_booking_points(db: Session, booking: DBBooking) -> int:
    """
    Credit points and total_spent for a completed booking.

    Does not commit.

    Returns:
        Points earned.
    """
    user = db.get(DBUser, booking.user_id)
    if not user:
        raise ValueError(f"User {booking.user_id} not found")

    points = calculate_reward_points(booking.final_price, get_tier(user.reward_points))

    user.total_spent += booking.final_price
    user.reward_points += points
    booking.points_earned = points

    if points > 0:
        create_point_transaction(
            db=db,
            user_id=user.id,
            points=points,
            tx_type="earn",
            booking_id=booking.id,
            description=f"Booking #{booking.id} completed",
        )

    db.flush()

    logger.info(
        f"Booking {booking.id} completed: user {user.id} +{points} points "
        f"(spent {booking.final_price:.0f})"
    )
    return points


def redeem_points(
    db: Session,
    user: DBUser,
    points: int,
    booking: Optional[DBBooking] = None,
) -> dict:
    """
    Spend points for a discount, optionally applied to a booking.

    Does not commit.

    Raises:
        ValueError: non-positive amount or insufficient balance.
    """
    if points <= 0:
        raise ValueError("Valid points amount is required")
    if user.reward_points < points:
        raise ValueError(f"Insufficient points: {user.reward_points} < {points}")

    discount_amount = points_to_vnd(points)
    user.reward_points -= points

    if booking is not None:
        booking.points_used += points
        booking.discount += discount_amount
        booking.final_price = max(0, booking.total_price - booking.discount)

    tx = create_point_transaction(
        db=db,
        user_id=user.id,
        points=-points,
        tx_type="redeem",
        booking_id=booking.id if booking is not None else None,
        description=f"Redeemed for {discount_amount} VND discount",
    )
    db.flush()

    logger.info(f"User {user.id} redeemed {points} points ({discount_amount} VND)")

    return {
        "points_used": points,
        "discount_amount": discount_amount,
        "remaining_points": user.reward_points,
        "transaction_id": tx.id,
    }


def refund_booking_points(db: Session, booking: DBBooking) -> int:
    """Return points redeemed on a cancelled booking. Does not commit."""
    if booking.points_used <= 0:
        return 0

    user = db.get(DBUser, booking.user_id)
    if not user:
        raise ValueError(f"User {booking.user_id} not found")

    refunded = booking.points_used
    user.reward_points += refunded
    create_point_transaction(
        db=db,
        user_id=user.id,
        points=refunded,
        tx_type="refund",
        booking_id=booking.id,
        description=f"Booking #{booking.id} cancelled",
    )
    db.flush()

    logger.info(f"Booking {booking.id} cancelled: refunded {refunded} points to user {user.id}")
    return refunded
