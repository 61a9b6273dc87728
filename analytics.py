"""Derived wardrobe analytics.

Every function here is a pure computation over clothing items (ORM rows or
anything exposing the same attributes). Nothing is cached: the admin
endpoints recompute on every request.
"""

import math
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

import schemas

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Mean-price thresholds for the five-tier label, checked in order.
SOCIAL_STATUS_TIERS = [
    (30, "Budget-Conscious"),
    (60, "Middle Class"),
    (100, "Upper Middle Class"),
    (200, "Affluent"),
]
NO_DATA = "No Data"
TOP_TIER = "High Net Worth"

# Per-item tiers used by the distribution chart.
BUDGET_LIMIT = 30
MID_RANGE_LIMIT = 100


def parse_price(raw) -> Optional[float]:
    """Return the leading number of a free-text price, or None.

    ``"19.99"`` and ``"30 EUR"`` parse; ``"N/A"``, ``""`` and ``"$30"`` do
    not.
    """
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw).strip())
        if not match:
            return None
        value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def valid_prices(items: Iterable) -> List[float]:
    prices = []
    for item in items:
        value = parse_price(item.price)
        if value is not None:
            prices.append(value)
    return prices


def social_status(count: int, mean: float) -> str:
    if count == 0:
        return NO_DATA
    for limit, label in SOCIAL_STATUS_TIERS:
        if mean < limit:
            return label
    return TOP_TIER


def price_stats(items: Iterable) -> schemas.PriceStats:
    prices = valid_prices(items)
    count = len(prices)
    total = sum(prices)
    mean = total / count if count else 0.0
    return schemas.PriceStats(
        total_items=count,
        total_price=round(total, 2),
        average_price=round(mean, 2),
        social_status=social_status(count, mean),
    )


def price_tiers(items: Iterable) -> schemas.PriceTierBreakdown:
    """Bucket each priced item into budget / mid-range / premium.

    Independent of ``social_status``: this classifies single items, not the
    owner's mean.
    """
    tiers = schemas.PriceTierCounts()
    for price in valid_prices(items):
        if price < BUDGET_LIMIT:
            tiers.budget += 1
        elif price <= MID_RANGE_LIMIT:
            tiers.mid_range += 1
        else:
            tiers.premium += 1

    total = tiers.budget + tiers.mid_range + tiers.premium
    if total:
        percentages = schemas.PriceTierPercentages(
            budget=round(tiers.budget / total * 100, 1),
            mid_range=round(tiers.mid_range / total * 100, 1),
            premium=round(tiers.premium / total * 100, 1),
        )
    else:
        percentages = schemas.PriceTierPercentages()
    return schemas.PriceTierBreakdown(total_items=total, tiers=tiers, percentages=percentages)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 capture time; naive values are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def hourly_histogram(items: Iterable) -> List[schemas.HistogramBucket]:
    buckets = [schemas.HistogramBucket(hour=hour, count=0, label=f"{hour:02d}:00") for hour in range(24)]
    for item in items:
        captured = parse_timestamp(item.datetime_original)
        if captured is None:
            continue
        buckets[captured.hour].count += 1
    return buckets


def _coordinate(value) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def location_clusters(items: Iterable, users: Iterable) -> List[schemas.UserLocation]:
    """Group GPS-tagged items by owner and attach each owner's centroid.

    Owners without a single usable point get no entry at all.
    """
    users_by_id = {user.id: user for user in users}
    points_by_user = {}
    for item in items:
        lat = _coordinate(item.gps_lat)
        lng = _coordinate(item.gps_lon)
        if lat is None or lng is None or item.user_id not in users_by_id:
            continue
        points_by_user.setdefault(item.user_id, []).append(schemas.LocationPoint(
            item_id=item.id,
            brand=item.brand,
            category=item.category,
            lat=lat,
            lng=lng,
            alt=_coordinate(item.gps_alt),
            timestamp=item.datetime_original,
        ))

    clusters = []
    for user_id, points in points_by_user.items():
        user = users_by_id[user_id]
        clusters.append(schemas.UserLocation(
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            items=points,
            total_items=len(points),
            centroid=schemas.Centroid(
                lat=sum(p.lat for p in points) / len(points),
                lng=sum(p.lng for p in points) / len(points),
            ),
        ))
    clusters.sort(key=lambda cluster: cluster.user_name)
    return clusters


def wardrobe_summary(users_with_items, selected_user_id: Optional[str] = None) -> schemas.WardrobeSummary:
    """Headline numbers for the admin dashboard.

    ``users_with_items`` is a sequence of ``(user, items)`` pairs. The average
    is a mean of per-user means over users that have any valid price.
    """
    pairs = list(users_with_items)
    if selected_user_id is not None:
        pairs = [(user, items) for user, items in pairs if user.id == selected_user_id]

    total_items = 0
    items_with_gps = 0
    user_means = []
    for _, items in pairs:
        items = list(items)
        total_items += len(items)
        items_with_gps += sum(1 for item in items if item.gps_lat is not None and item.gps_lon is not None)
        prices = valid_prices(items)
        if prices:
            user_means.append(sum(prices) / len(prices))

    average = sum(user_means) / len(user_means) if user_means else 0.0
    return schemas.WardrobeSummary(
        total_users=len(pairs),
        total_items=total_items,
        items_with_gps=items_with_gps,
        avg_item_price=round(average, 1),
    )
