import pytest

from sportbook.services.loyalty import (
    calculate_reward_points,
    get_next_tier,
    get_tier,
    points_to_vnd,
    spend_to_next_tier,
    tier_discount,
)


@pytest.mark.parametrize("points, tier", [
    (0, "Bronze"),
    (999, "Bronze"),
    (1000, "Silver"),
    (4999, "Silver"),
    (5000, "Gold"),
    (10000, "Diamond"),
    (250000, "Diamond"),
])
def test_get_tier(points, tier):
    assert get_tier(points) == tier


@pytest.mark.parametrize("price, tier, expected", [
    (1_000_000, "Bronze", 100),
    (1_000_000, "Silver", 110),
    (1_000_000, "Gold", 120),
    (1_000_000, "Diamond", 130),
    (9_999, "Diamond", 0),
    (185_000, "Bronze", 180),
    (185_000, "Silver", 198),
])
def test_calculate_reward_points(price, tier, expected):
    assert calculate_reward_points(price, tier) == expected


def test_next_tier():
    assert get_next_tier("Bronze") == "Silver"
    assert get_next_tier("Gold") == "Diamond"
    assert get_next_tier("Diamond") is None


def test_spend_to_next_tier():
    assert spend_to_next_tier(200_000, "Bronze") == 800_000
    assert spend_to_next_tier(6_000_000, "Silver") == 0
    assert spend_to_next_tier(50_000_000, "Diamond") == 0


def test_tier_discount_and_point_value():
    assert tier_discount(200_000, "Bronze") == 0
    assert tier_discount(200_000, "Gold") == 20_000
    assert points_to_vnd(50) == 5_000
