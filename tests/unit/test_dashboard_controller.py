"""Unit tests for DashboardController

Tests the presentation layer in isolation: derived values, detail table,
chart config and the empty/error states.
"""
import pytest

from hostdash.dashboard.controller import DashboardController
from hostdash.dashboard.config import CHART_CATEGORIES, PAGE_TITLE
from hostdash.tasks.poller import DashboardState, FETCH_FAILED


FIXED_NOW = 1792411200  # Mon, 19 Oct 2026 12:00:00 GMT


def fixed_clock():
    return FIXED_NOW


def rows_by_parameter(rows):
    return {row["parameter"]: row["value"] for row in rows}


class TestTableRows:
    """Detail table formatting"""

    def test_sample_snapshot_rows(self, sample_snapshot):
        """Worked example: 2/4 GB memory, 10/100 GB disk, 1/2 MB network"""
        controller = DashboardController(clock=fixed_clock)

        rows = rows_by_parameter(controller.get_table_rows(sample_snapshot))

        assert rows["CPU Load"] == "42.5%"
        assert rows["Memory Used"] == "2.00 GB"
        assert rows["Memory Total"] == "4.00 GB"
        assert rows["Memory Usage"] == "50.00%"
        assert rows["Disk Used"] == "10.00 GB"
        assert rows["Disk Total"] == "100.00 GB"
        assert rows["Disk Usage"] == "10.00%"
        assert rows["Network RX"] == "1.00 MB"
        assert rows["Network TX"] == "2.00 MB"
        assert rows["Last Updated"] == "Mon, 19 Oct 2026 12:00:00 GMT"

    def test_ten_rows_in_display_order(self, sample_snapshot):
        controller = DashboardController(clock=fixed_clock)

        rows = controller.get_table_rows(sample_snapshot)

        assert [row["parameter"] for row in rows] == [
            "CPU Load", "Memory Used", "Memory Total", "Memory Usage",
            "Disk Used", "Disk Total", "Disk Usage",
            "Network RX", "Network TX", "Last Updated",
        ]

    @pytest.mark.parametrize("used,total,expected", [
        (1, 3, "33.33%"),
        (2, 3, "66.67%"),
        (3, 3, "100.00%"),
        (0, 8, "0.00%"),
        (150, 100, "150.00%"),   # no bounds checking
        (-10, 100, "-10.00%"),
    ])
    def test_memory_percentage_rounded_to_two_decimals(self, sample_snapshot, used, total, expected):
        snapshot = sample_snapshot.model_copy(update={"memory_used": used, "memory_total": total})
        controller = DashboardController(clock=fixed_clock)

        rows = rows_by_parameter(controller.get_table_rows(snapshot))

        assert rows["Memory Usage"] == expected

    def test_disk_percentage_rounded_to_two_decimals(self, sample_snapshot):
        snapshot = sample_snapshot.model_copy(update={"disk_used": 1, "disk_total": 7})
        controller = DashboardController(clock=fixed_clock)

        rows = rows_by_parameter(controller.get_table_rows(snapshot))

        assert rows["Disk Usage"] == "14.29%"

    def test_zero_total_renders_dash(self, sample_snapshot):
        snapshot = sample_snapshot.model_copy(update={"memory_total": 0, "disk_total": 0})
        controller = DashboardController(clock=fixed_clock)

        rows = rows_by_parameter(controller.get_table_rows(snapshot))

        assert rows["Memory Usage"] == "—"
        assert rows["Disk Usage"] == "—"
        assert rows["Memory Total"] == "0.00 GB"

    def test_whole_cpu_load_prints_without_decimals(self, sample_snapshot):
        snapshot = sample_snapshot.model_copy(update={"cpu_load": 42.0})
        controller = DashboardController(clock=fixed_clock)

        rows = rows_by_parameter(controller.get_table_rows(snapshot))

        assert rows["CPU Load"] == "42%"

    def test_rerender_only_changes_last_updated(self, sample_snapshot):
        times = iter([FIXED_NOW, FIXED_NOW + 10])
        controller = DashboardController(clock=lambda: next(times))

        first = controller.get_table_rows(sample_snapshot)
        second = controller.get_table_rows(sample_snapshot)

        assert first[:-1] == second[:-1]
        assert first[-1]["value"] != second[-1]["value"]

    def test_last_updated_ignores_server_timestamp(self, sample_snapshot):
        controller = DashboardController(clock=fixed_clock)

        rows = rows_by_parameter(controller.get_table_rows(sample_snapshot))

        assert sample_snapshot.timestamp not in rows["Last Updated"]
        assert rows["Last Updated"].endswith("GMT")


class TestChartConfig:
    """Chart.js bar chart config"""

    def test_chart_data_uses_raw_values(self, sample_snapshot):
        controller = DashboardController()

        chart = controller.get_chart_config(sample_snapshot)

        assert chart["type"] == "bar"
        assert chart["data"]["labels"] == CHART_CATEGORIES
        dataset = chart["data"]["datasets"][0]
        assert dataset["label"] == "Metrics"
        assert dataset["data"] == [42.5, 50.0, 10.0, 1048576, 2097152]
        assert dataset["borderWidth"] == 1

    def test_chart_percentages_not_rounded(self, sample_snapshot):
        snapshot = sample_snapshot.model_copy(update={"memory_used": 1, "memory_total": 3})
        controller = DashboardController()

        chart = controller.get_chart_config(snapshot)

        assert chart["data"]["datasets"][0]["data"][1] == pytest.approx(100 / 3)

    def test_chart_zero_total_is_null_bar(self, sample_snapshot):
        snapshot = sample_snapshot.model_copy(update={"disk_total": 0})
        controller = DashboardController()

        chart = controller.get_chart_config(snapshot)

        assert chart["data"]["datasets"][0]["data"][2] is None

    def test_chart_colors_and_title(self, sample_snapshot):
        controller = DashboardController()

        chart = controller.get_chart_config(sample_snapshot)

        dataset = chart["data"]["datasets"][0]
        assert dataset["backgroundColor"][0] == "rgba(75, 192, 192, 0.6)"
        assert dataset["borderColor"][4] == "rgba(153, 102, 255, 1)"
        assert len(dataset["backgroundColor"]) == 5
        assert chart["options"]["scales"]["y"]["beginAtZero"] is True
        assert chart["options"]["plugins"]["title"] == {"display": True, "text": "Metrics for h1"}

    def test_chart_reused_for_same_snapshot(self, sample_snapshot):
        controller = DashboardController()

        first = controller.get_chart_config(sample_snapshot)
        second = controller.get_chart_config(sample_snapshot)

        assert first is second

    def test_chart_rebuilt_for_new_snapshot(self, sample_snapshot):
        controller = DashboardController()
        newer = sample_snapshot.model_copy(update={"cpu_load": 99.0})

        controller.get_chart_config(sample_snapshot)
        chart = controller.get_chart_config(newer)

        assert chart["data"]["datasets"][0]["data"][0] == 99.0

    def test_release_chart_drops_cached_config(self, sample_snapshot):
        controller = DashboardController()
        first = controller.get_chart_config(sample_snapshot)

        controller.release_chart()
        second = controller.get_chart_config(sample_snapshot)

        assert first is not second
        assert first == second


class TestDashboardData:
    """Template context for the page"""

    def test_empty_state_renders_nothing_but_banner(self):
        controller = DashboardController()
        state = DashboardState(error=FETCH_FAILED, loading=True)

        data = controller.get_dashboard_data(state)

        assert data["page_title"] == PAGE_TITLE
        assert data["error"] == FETCH_FAILED
        assert data["loading"] is True
        assert data["snapshot"] is None
        assert data["chart"] is None
        assert data["table_rows"] == []

    def test_stale_snapshot_shown_with_error(self, sample_snapshot):
        controller = DashboardController(clock=fixed_clock)
        state = DashboardState(snapshot=sample_snapshot, error=FETCH_FAILED)

        data = controller.get_dashboard_data(state)

        assert data["error"] == FETCH_FAILED
        assert data["hostname"] == "h1"
        assert len(data["table_rows"]) == 10
        assert data["chart"]["options"]["plugins"]["title"]["text"] == "Metrics for h1"
