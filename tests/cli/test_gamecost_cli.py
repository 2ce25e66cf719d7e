"""
tests/cli/test_gamecost_cli.py - gamecost CLI 테스트
"""

import json
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gamecost import __version__
from gamecost.cli.app import cli
from gamecost.pricing import PriceCache, PricingSeeder, PricingStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def patched_store(store):
    """CLI가 파일 캐시 대신 테스트용 메모리 저장소를 사용하도록 패치"""
    with patch("gamecost.cli.app.open_store", return_value=store) as mock_open:
        yield mock_open


def _invoke_json(runner, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestCliBasics:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        for command in ("estimate", "scenarios", "alternatives", "scan", "pricing"):
            assert command in result.output

    def test_no_cache_flag(self, runner, patched_store):
        runner.invoke(cli, ["--no-cache", "pricing", "regions", "--json"])
        patched_store.assert_called_once()
        assert patched_store.call_args.args == (False,)

    def test_invalid_env_setting_exits_with_error(self, runner, patched_store, monkeypatch):
        monkeypatch.setenv("GAMECOST_SPOT_DISCOUNT", "1.5")
        result = runner.invoke(cli, ["estimate", "-p", "1000", "-s", "2"])

        assert result.exit_code == 1
        assert "GAMECOST_SPOT_DISCOUNT" in result.output

    def test_spot_discount_from_env(self, runner, patched_store, monkeypatch):
        """실행 시점 환경변수의 Spot 비율이 계산에 반영"""
        monkeypatch.setenv("GAMECOST_SPOT_DISCOUNT", "0.5")
        data = _invoke_json(runner, ["estimate", "-p", "1000", "-s", "2", "--fleet", "spot", "--json"])

        assert data["costs"]["compute"]["monthly_cost"] == pytest.approx(685.44 * 0.5)


class TestEstimateCommand:
    """estimate 명령 테스트"""

    def test_json_output(self, runner, patched_store):
        data = _invoke_json(runner, ["estimate", "-p", "1000", "-s", "2", "-r", "us-east-1", "--json"])

        assert data["region"] == "us-east-1"
        assert data["costs"]["compute"]["instances_needed"] == 20
        assert data["costs"]["total"]["monthly_operational"] == pytest.approx(695.44)
        assert data["unit_economics"]["monthly_active_users"] == 10000

    def test_console_output(self, runner, patched_store):
        result = runner.invoke(cli, ["estimate", "-p", "1000", "-s", "2"])

        assert result.exit_code == 0, result.output
        assert "$695.44" in result.output

    def test_spot_option(self, runner, patched_store):
        data = _invoke_json(runner, ["estimate", "-p", "1000", "-s", "2", "--fleet", "spot", "--json"])
        assert data["params"]["fleet_mode"] == "spot"
        assert data["costs"]["compute"]["monthly_cost"] == pytest.approx(685.44 * 0.7)

    def test_default_region_from_env(self, runner, patched_store, monkeypatch):
        monkeypatch.setenv("GAMECOST_REGION", "eu-west-1")
        data = _invoke_json(runner, ["estimate", "-p", "100", "-s", "1", "--json"])
        assert data["region"] == "eu-west-1"

    def test_unknown_region_exits_with_error(self, runner, patched_store):
        result = runner.invoke(cli, ["estimate", "-p", "1000", "-s", "2", "-r", "mars-north-1"])

        assert result.exit_code == 1
        assert "가격 정보 없음" in result.output
        assert "pricing instances" in result.output

    def test_invalid_players(self, runner, patched_store):
        result = runner.invoke(cli, ["estimate", "-p", "0", "-s", "2"])

        assert result.exit_code == 1
        assert "concurrent_players" in result.output

    def test_missing_required_option(self, runner, patched_store):
        result = runner.invoke(cli, ["estimate", "-s", "2"])
        assert result.exit_code == 2

    def test_file_export(self, runner, patched_store, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(cli, ["estimate", "-p", "1000", "-s", "2", "-f", "json", "-o", str(out_dir)])

        assert result.exit_code == 0, result.output
        files = list(out_dir.glob("gamecost_estimate_*.json"))
        assert len(files) == 1
        saved = json.loads(files[0].read_text(encoding="utf-8"))
        assert saved["costs"]["compute"]["monthly_hours"] == pytest.approx(8064)


class TestAnalysisCommands:
    """scenarios / alternatives / scan 명령 테스트"""

    def test_scenarios(self, runner, patched_store):
        data = _invoke_json(runner, ["scenarios", "-t", "c6g.large", "--json"])

        assert [s["label"] for s in data["scenarios"]] == [
            "Low Traffic",
            "Medium Traffic",
            "High Traffic",
            "Peak Traffic",
        ]
        assert all(s["params"]["instance_type"] == "c6g.large" for s in data["scenarios"])

    def test_scenarios_console(self, runner, patched_store):
        result = runner.invoke(cli, ["scenarios"])
        assert result.exit_code == 0, result.output

    def test_alternatives(self, runner, patched_store):
        data = _invoke_json(runner, ["alternatives", "-p", "1000", "-s", "2", "-t", "c5.xlarge", "--json"])

        assert [a["kind"] for a in data["alternatives"]] == ["arm_instances", "spot_fleet", "right_sized"]
        assert data["baseline"]["params"]["instance_type"] == "c5.xlarge"

    def test_alternatives_console_without_results(self, runner, patched_store):
        result = runner.invoke(cli, ["alternatives", "-p", "10", "-s", "1", "-t", "c6g.large", "--fleet", "spot"])

        assert result.exit_code == 0, result.output
        assert "대안 구성이 없습니다" in result.output

    def test_scan(self, runner, patched_store):
        data = _invoke_json(runner, ["scan", "-p", "1000", "-s", "2", "--json"])

        assert 50 <= data["score"] <= 100
        assert len(data["recommendations"]) == 3
        assert data["insights"]["cost_drivers"]


class TestPricingCommands:
    """pricing 하위 명령 테스트"""

    def test_regions(self, runner, patched_store):
        data = _invoke_json(runner, ["pricing", "regions", "--json"])
        assert data == {"ap-southeast-1": 4, "eu-west-1": 5, "us-east-1": 11, "us-west-2": 5}

    def test_instances(self, runner, patched_store):
        data = _invoke_json(runner, ["pricing", "instances", "-r", "eu-west-1", "--json"])

        assert [e["instance_type"] for e in data][:2] == ["c5.large", "c5.xlarge"]
        assert data[0]["hourly_rate"] == 0.094

    def test_instances_unknown_region(self, runner, patched_store):
        result = runner.invoke(cli, ["pricing", "instances", "-r", "mars-north-1"])
        assert result.exit_code == 1

    def test_status(self, runner, patched_store):
        data = _invoke_json(runner, ["pricing", "status", "--json"])

        assert len(data) == 7
        assert not any(entry["stale"] for entry in data)

    def test_refresh_without_stale_tables(self, runner, patched_store):
        data = _invoke_json(runner, ["pricing", "refresh", "--json"])
        assert data["refreshed"] == []
        assert len(data["current"]) == 7

    def test_force_refresh(self, runner, patched_store):
        data = _invoke_json(runner, ["pricing", "refresh", "--force", "--json"])
        assert len(data["seeded"]) == 7


class TestPricingStaleSnapshot:
    """파일 캐시에 남은 오래된 스냅샷 조회/갱신 테스트"""

    @pytest.fixture
    def stale_snapshot(self):
        """60일 전에 시드된 캐시 스냅샷 (GAMECOST_CACHE_DIR 아래)"""
        writer = PricingStore(cache=PriceCache())
        PricingSeeder(writer).seed_all(now=datetime.now() - timedelta(days=60))

    def test_status_reports_stale_tables(self, runner, stale_snapshot):
        data = _invoke_json(runner, ["pricing", "status", "--json"])

        assert len(data) == 7
        assert all(entry["stale"] for entry in data)
        assert all(entry["age_days"] >= 60 for entry in data)

    def test_refresh_reloads_stale_tables(self, runner, stale_snapshot):
        data = _invoke_json(runner, ["pricing", "refresh", "--json"])

        assert len(data["refreshed"]) == 7
        assert "ec2_instance/us-east-1" in data["refreshed"]
        assert data["current"] == []

        status = _invoke_json(runner, ["pricing", "status", "--json"])
        assert not any(entry["stale"] for entry in status)

    def test_estimate_refreshes_stale_tables_before_use(self, runner, stale_snapshot):
        _invoke_json(runner, ["estimate", "-p", "1000", "-s", "2", "--json"])

        status = _invoke_json(runner, ["pricing", "status", "--json"])
        assert not any(entry["stale"] for entry in status)
