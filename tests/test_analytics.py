from types import SimpleNamespace

import pytest

import analytics


def item(price=None, datetime_original=None, gps_lat=None, gps_lon=None, gps_alt=None,
         user_id="u1", item_id="i1", brand=None, category=None):
    return SimpleNamespace(
        id=item_id, user_id=user_id, price=price, datetime_original=datetime_original,
        gps_lat=gps_lat, gps_lon=gps_lon, gps_alt=gps_alt, brand=brand, category=category,
    )


def user(user_id, name):
    return SimpleNamespace(id=user_id, name=name, email=f"{name.lower()}@example.com")


@pytest.mark.parametrize("raw,expected", [
    ("45", 45.0),
    ("19.99", 19.99),
    (" 30 EUR", 30.0),
    ("1e2", 100.0),
    (12, 12.0),
    ("N/A", None),
    ("", None),
    ("$30", None),
    ("inf", None),
    (None, None),
])
def test_parse_price(raw, expected):
    assert analytics.parse_price(raw) == expected


@pytest.mark.parametrize("mean,label", [
    (0, "Budget-Conscious"),
    (29.99, "Budget-Conscious"),
    (30, "Middle Class"),
    (59.99, "Middle Class"),
    (60, "Upper Middle Class"),
    (100, "Affluent"),
    (199.99, "Affluent"),
    (200, "High Net Worth"),
])
def test_social_status_thresholds(mean, label):
    assert analytics.social_status(1, mean) == label


def test_price_stats_scenario():
    stats = analytics.price_stats([item("10"), item("25"), item("150"), item("N/A"), item("")])
    assert stats.total_items == 3
    assert stats.total_price == 185.0
    assert stats.average_price == 61.67
    assert stats.social_status == "Upper Middle Class"


def test_price_stats_without_items():
    stats = analytics.price_stats([])
    assert stats.total_items == 0
    assert stats.average_price == 0
    assert stats.social_status == "No Data"


def test_price_tiers_scenario():
    breakdown = analytics.price_tiers([item("10"), item("25"), item("150"), item("N/A")])
    assert breakdown.total_items == 3
    assert (breakdown.tiers.budget, breakdown.tiers.mid_range, breakdown.tiers.premium) == (2, 0, 1)
    assert breakdown.percentages.budget == 66.7
    assert breakdown.percentages.mid_range == 0.0
    assert breakdown.percentages.premium == 33.3


def test_price_tier_boundaries():
    breakdown = analytics.price_tiers([item("29.99"), item("30"), item("100"), item("100.01")])
    assert (breakdown.tiers.budget, breakdown.tiers.mid_range, breakdown.tiers.premium) == (1, 2, 1)


def test_price_tiers_without_valid_prices():
    breakdown = analytics.price_tiers([item("N/A"), item(None)])
    assert breakdown.total_items == 0
    assert breakdown.percentages.model_dump() == {"budget": 0, "mid_range": 0, "premium": 0}


def test_hourly_histogram_scenario():
    items = [
        item(datetime_original="2024-05-01T03:10:00Z"),
        item(datetime_original="2024-05-02T03:59:59.000Z"),
        item(datetime_original="2024-05-01T14:00:00+00:00"),
        item(datetime_original="2024-05-01T23:30:00"),
        item(datetime_original=None),
        item(datetime_original="not a date"),
    ]
    buckets = analytics.hourly_histogram(items)
    assert len(buckets) == 24
    counts = {bucket.hour: bucket.count for bucket in buckets if bucket.count}
    assert counts == {3: 2, 14: 1, 23: 1}
    assert buckets[0].label == "00:00"
    assert buckets[14].label == "14:00"


def test_histogram_uses_utc_hour():
    buckets = analytics.hourly_histogram([item(datetime_original="2024-05-01T10:00:00+02:00")])
    assert buckets[8].count == 1


def test_location_clusters():
    users = [user("u1", "Bea"), user("u2", "Al"), user("u3", "Cy")]
    items = [
        item(user_id="u1", item_id="a", gps_lat=10.0, gps_lon=20.0, gps_alt=5.0),
        item(user_id="u1", item_id="b", gps_lat=20.0, gps_lon=40.0),
        item(user_id="u2", item_id="c", gps_lat=-5.0, gps_lon=1.5),
        item(user_id="u2", item_id="d", gps_lat=None, gps_lon=3.0),
        item(user_id="u3", item_id="e"),
    ]
    clusters = analytics.location_clusters(items, users)

    assert [c.user_id for c in clusters] == ["u2", "u1"]
    al, bea = clusters
    assert al.total_items == 1
    assert (al.centroid.lat, al.centroid.lng) == (-5.0, 1.5)
    assert bea.total_items == 2
    assert (bea.centroid.lat, bea.centroid.lng) == (15.0, 30.0)
    assert bea.items[0].alt == 5.0
    assert bea.items[1].alt is None


def test_user_without_gps_has_no_cluster():
    assert analytics.location_clusters([item(user_id="u1")], [user("u1", "Bea")]) == []


def test_wardrobe_summary():
    bea, al = user("u1", "Bea"), user("u2", "Al")
    pairs = [
        (bea, [item("10", gps_lat=1.0, gps_lon=2.0), item("30")]),
        (al, [item("100"), item("N/A", gps_lat=1.0)]),
        (user("u3", "Cy"), []),
    ]
    summary = analytics.wardrobe_summary(pairs)
    assert summary.total_users == 3
    assert summary.total_items == 4
    assert summary.items_with_gps == 1
    assert summary.avg_item_price == 60.0

    only_al = analytics.wardrobe_summary(pairs, selected_user_id="u2")
    assert only_al.total_users == 1
    assert only_al.avg_item_price == 100.0


def test_aggregations_are_repeatable():
    items = [item("10", "2024-05-01T03:00:00Z", 1.0, 2.0), item("150", "2024-05-01T14:00:00Z")]
    users = [user("u1", "Bea")]
    assert analytics.price_stats(items) == analytics.price_stats(items)
    assert analytics.price_tiers(items) == analytics.price_tiers(items)
    assert analytics.hourly_histogram(items) == analytics.hourly_histogram(items)
    assert analytics.location_clusters(items, users) == analytics.location_clusters(items, users)
