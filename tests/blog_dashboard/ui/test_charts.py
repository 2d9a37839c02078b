from __future__ import annotations

import pytest

from blog_dashboard.core.snapshot import DashboardSnapshot, Summary
from blog_dashboard.ui.charts import (
    blogs_by_category_figure,
    blogs_created_figure,
    category_colors,
    engagement_trend_figure,
    users_growth_figure,
)
from blog_dashboard.ui.layout.build_summary_cards import summary_card_values

PALETTE = ["#111111", "#222222", "#333333"]


def _snapshot():
    return DashboardSnapshot(
        summary=Summary(total_users=12, total_blogs=4, total_views=300, engagement_rate=7.5),
        users_growth=({"date": "2024-01-01", "users": 3}, {"date": "2024-01-02", "users": 5}),
        blogs_created=({"period": "2024-01", "blogs": 4},),
        blogs_by_category=(
            {"category": "a", "count": 1},
            {"category": "b", "count": 2},
            {"category": "c", "count": 3},
            {"category": "d", "count": 4},
            {"category": "e", "count": 5},
        ),
        engagement_trend=({"date": "2024-01-01", "engagement": 0.5},),
    )


def test_category_colors_cycle_by_position():
    assert category_colors(5, PALETTE) == ["#111111", "#222222", "#333333", "#111111", "#222222"]
    assert category_colors(0, PALETTE) == []


def test_category_colors_need_a_palette():
    with pytest.raises(ValueError):
        category_colors(2, [])


def test_pie_slices_use_cycled_palette():
    fig = blogs_by_category_figure(_snapshot(), PALETTE)
    pie = fig.data[0]

    assert list(pie.labels) == ["a", "b", "c", "d", "e"]
    assert list(pie.marker.colors) == category_colors(5, PALETTE)


def test_series_figures_keep_backend_order():
    snap = _snapshot()

    assert list(users_growth_figure(snap).data[0].y) == [3, 5]
    assert list(blogs_created_figure(snap).data[0].x) == ["2024-01"]
    assert list(engagement_trend_figure(snap).data[0].y) == [0.5]


def test_empty_series_render_no_data_message():
    fig = users_growth_figure(DashboardSnapshot())

    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "No data for this period."


def test_summary_cards_show_zero_for_missing_values():
    values = dict(summary_card_values(Summary(total_users=None, total_blogs=0, total_views="", engagement_rate=12.5)))

    assert values["Total Users"] == "0"
    assert values["Total Blogs"] == "0"
    assert values["Total Views"] == "0"
    assert values["Engagement Rate"] == "12.5%"
