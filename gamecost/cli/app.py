"""
gamecost/cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    gamecost --version                  # 버전 표시
    gamecost estimate -p 1000 -s 2      # 단일 구성 비용 계산
    gamecost scenarios                  # Low/Medium/High/Peak 프리셋 비교
    gamecost alternatives -p 1000 -s 2  # ARM/Spot/사이즈 축소 대안 비교
    gamecost scan -p 1000 -s 2          # 비용 최적화 스캔
    gamecost pricing regions            # 가격 테이블이 있는 리전
    gamecost pricing instances -r REGION
    gamecost pricing status             # 가격 테이블 적재 시각/stale 여부
    gamecost pricing refresh [--force]  # stale 테이블 재적재

공통 출력 옵션:
    --json          표준 출력에 JSON
    -f, --format    console | json | csv | excel | all (파일 저장)
    -o, --output    파일 저장 디렉토리

Usage:
    $ gamecost estimate -p 1000 -s 2 -t c5.large -r us-east-1
    $ python main.py scenarios -t c6g.large --json
"""

from __future__ import annotations

import functools
import json
import logging
from typing import Any, Callable

import click
from click import Context

from gamecost import build_calculator, open_store
from gamecost.config import Settings, get_version, load_settings, settings
from gamecost.estimator import (
    FleetMode,
    TrafficParameters,
    calculate_cost_per_player,
    estimate_monthly_active_users,
    generate_scenarios,
    propose_alternatives,
    run_cost_optimization_scan,
)
from gamecost.estimator.models import (
    DEFAULT_INSTANCE_TYPE,
    DEFAULT_MONTHLY_DATA_TRANSFER_GB,
    DEFAULT_STORAGE_GB,
)
from gamecost.exceptions import GameCostError, format_error_for_user
from gamecost.io import (
    FORMAT_CHOICES,
    OutputConfig,
    ReportTable,
    build_alternative_table,
    build_breakdown_table,
    build_recommendation_table,
    build_scenario_table,
    export_report,
)
from gamecost.pricing import SERVICE_EC2_INSTANCE, PricingSeeder, PricingStore

from .console import (
    configure_logging,
    console,
    format_usd,
    print_error,
    print_header,
    print_info,
    print_success,
    print_table,
    print_warning,
)

logger = logging.getLogger(__name__)

VERSION = get_version()

FLEET_CHOICES = ("on_demand", "on-demand", "spot")


# =============================================================================
# 공통 옵션 / 헬퍼
# =============================================================================


def handle_errors(func: Callable) -> Callable:
    """GameCostError를 사용자 메시지로 출력하고 종료 코드 1로 종료"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GameCostError as e:
            logger.debug(f"명령 실패: {e.to_dict()}")
            print_error(format_error_for_user(e))
            raise SystemExit(1) from e

    return wrapper


def traffic_options(include_load: bool = True) -> Callable:
    """트래픽 파라미터 옵션 묶음

    Args:
        include_load: 동시 접속자/세션 길이 옵션 포함 여부 (시나리오는 프리셋이 대신함)
    """

    def decorator(func: Callable) -> Callable:
        options = [
            click.option("-t", "--instance-type", default=DEFAULT_INSTANCE_TYPE, show_default=True, help="인스턴스 타입"),
            click.option("-n", "--regions-count", type=int, default=1, show_default=True, help="배포 리전 수"),
            click.option(
                "--fleet",
                "fleet_mode",
                type=click.Choice(FLEET_CHOICES),
                default=FleetMode.ON_DEMAND.value,
                show_default=True,
                help="플릿 요금 모드",
            ),
            click.option("--storage-gb", type=float, default=DEFAULT_STORAGE_GB, show_default=True, help="빌드 스토리지 (GB)"),
            click.option(
                "--transfer-gb",
                "monthly_data_transfer_gb",
                type=float,
                default=DEFAULT_MONTHLY_DATA_TRANSFER_GB,
                show_default=True,
                help="월간 데이터 전송량 (GB)",
            ),
            click.option(
                "--matchmaking-requests",
                "monthly_matchmaking_requests",
                type=int,
                default=0,
                show_default=True,
                help="월간 매치메이킹 요청 수",
            ),
            click.option("-r", "--region", default=None, help="리전 (기본: GAMECOST_REGION / AWS_REGION / us-east-1)"),
        ]
        if include_load:
            options = [
                click.option("-p", "--players", "concurrent_players", type=int, required=True, help="동시 접속자 수"),
                click.option(
                    "-s", "--session", "session_duration_hours", type=float, required=True, help="평균 세션 길이 (시간)"
                ),
            ] + options

        for option in reversed(options):
            func = option(func)
        return func

    return decorator


def output_options(func: Callable) -> Callable:
    func = click.option("-o", "--output", default=None, help="파일 저장 디렉토리")(func)
    func = click.option(
        "-f", "--format", "output_format", type=click.Choice(FORMAT_CHOICES), default="console", show_default=True
    )(func)
    func = click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")(func)
    return func


def _split_traffic_kwargs(kwargs: dict[str, Any], default_region: str) -> tuple[dict[str, Any], str]:
    region = kwargs.pop("region", None) or default_region
    params = {key: kwargs.pop(key) for key in list(kwargs) if key in TrafficParameters.__dataclass_fields__}
    return params, region


def _use_cache(ctx: Context) -> bool | None:
    return (ctx.obj or {}).get("use_cache")


def _settings(ctx: Context) -> Settings:
    return (ctx.obj or {}).get("settings") or settings


def _open_store(ctx: Context, refresh_stale: bool = True) -> PricingStore:
    """명령 실행 시점의 설정으로 가격 저장소 생성"""
    return open_store(_use_cache(ctx), refresh_stale=refresh_stale, config=_settings(ctx))


def _emit(
    payload: dict[str, Any],
    as_json: bool,
    output_format: str,
    output: str | None,
    name: str,
    tables: list[ReportTable],
    render: Callable[[], None],
) -> None:
    """JSON/콘솔 출력 후 파일 형식이 지정되면 저장"""
    if as_json:
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
    else:
        render()

    config = OutputConfig.from_string(output_format, output_dir=output)
    for path in export_report(tables, payload, config, name):
        if as_json:
            click.echo(f"저장됨: {path}", err=True)
        else:
            print_success(f"저장됨: {path}")


# =============================================================================
# CLI 그룹
# =============================================================================


@click.group()
@click.version_option(VERSION, prog_name="gamecost")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
@click.option("--no-cache", is_flag=True, help="가격 스냅샷 파일 캐시 사용 안 함")
@click.pass_context
@handle_errors
def cli(ctx: Context, verbose: bool, no_cache: bool) -> None:
    """게임 서버 플릿 비용 추정 도구"""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["use_cache"] = False if no_cache else None
    ctx.obj["settings"] = load_settings()


@cli.command("estimate")
@traffic_options(include_load=True)
@output_options
@click.pass_context
@handle_errors
def estimate_command(ctx: Context, as_json: bool, output_format: str, output: str | None, **kwargs: Any) -> None:
    """단일 구성의 월간 비용 계산"""
    raw_params, region = _split_traffic_kwargs(kwargs, _settings(ctx).DEFAULT_REGION)
    params = TrafficParameters.from_dict(raw_params)
    calculator = build_calculator(_open_store(ctx), config=_settings(ctx))
    costs = calculator.calculate_costs(params, region)

    mau = estimate_monthly_active_users(params.concurrent_players)
    cost_per_player = calculate_cost_per_player(costs.total.monthly_operational, mau)

    payload = {
        "region": region,
        "params": params.to_dict(),
        "costs": costs.to_dict(),
        "unit_economics": {"monthly_active_users": mau, "cost_per_player": cost_per_player},
    }

    def render() -> None:
        print_header(f"비용 추정: {params.instance_type} / {region}")
        table = build_breakdown_table(costs)
        rows = [[label, format_usd(cost)] for label, cost in table.rows]
        rows.append(["월 운영비 합계", format_usd(costs.total.monthly_operational)])
        print_table("월간 비용", table.headers, rows, numeric_columns={1})
        console.print(
            f"인스턴스 {costs.compute.instances_needed}대, 월 {costs.compute.monthly_hours:,.0f} 인스턴스-시간, "
            f"시간당 {format_usd(costs.compute.hourly_rate)} ({params.fleet_mode.value})"
        )
        console.print(f"초기 비용: {format_usd(costs.total.initial_setup)}")
        console.print(f"예상 MAU {mau:,}명, 플레이어당 월 {format_usd(cost_per_player)}")

    _emit(payload, as_json, output_format, output, "estimate", [build_breakdown_table(costs)], render)


@cli.command("scenarios")
@traffic_options(include_load=False)
@output_options
@click.pass_context
@handle_errors
def scenarios_command(ctx: Context, as_json: bool, output_format: str, output: str | None, **kwargs: Any) -> None:
    """트래픽 프리셋(Low/Medium/High/Peak)별 비용 비교"""
    base_params, region = _split_traffic_kwargs(kwargs, _settings(ctx).DEFAULT_REGION)
    calculator = build_calculator(_open_store(ctx), config=_settings(ctx))
    scenarios = generate_scenarios(calculator, base_params, region)

    payload = {"region": region, "scenarios": [s.to_dict() for s in scenarios]}
    table = build_scenario_table(scenarios)

    def render() -> None:
        print_header(f"트래픽 시나리오: {base_params['instance_type']} / {region}")
        rows = [
            [
                s.label,
                f"{s.params.concurrent_players:,}",
                s.params.session_duration_hours,
                s.costs.compute.instances_needed,
                format_usd(s.costs.compute.monthly_cost),
                format_usd(s.costs.total.initial_setup),
                format_usd(s.costs.total.monthly_operational),
            ]
            for s in scenarios
        ]
        print_table(
            "시나리오별 월간 비용",
            ["Scenario", "Players", "Session (h)", "Instances", "Compute", "Initial Setup", "Monthly Total"],
            rows,
            numeric_columns={1, 2, 3, 4, 5, 6},
        )

    _emit(payload, as_json, output_format, output, "scenarios", [table], render)


@cli.command("alternatives")
@traffic_options(include_load=True)
@output_options
@click.pass_context
@handle_errors
def alternatives_command(ctx: Context, as_json: bool, output_format: str, output: str | None, **kwargs: Any) -> None:
    """ARM/Spot/사이즈 축소 대안 구성 비교"""
    raw_params, region = _split_traffic_kwargs(kwargs, _settings(ctx).DEFAULT_REGION)
    params = TrafficParameters.from_dict(raw_params)
    calculator = build_calculator(_open_store(ctx), config=_settings(ctx))
    baseline = calculator.calculate_costs(params, region)
    alternatives = propose_alternatives(calculator, params, region)

    payload = {
        "region": region,
        "baseline": {"params": params.to_dict(), "monthly_estimate": baseline.total.monthly_operational},
        "alternatives": [alt.to_dict() for alt in alternatives],
    }

    def render() -> None:
        print_header(f"대안 구성: {params.instance_type} / {region}")
        console.print(f"기준 월 운영비: {format_usd(baseline.total.monthly_operational)}")
        if not alternatives:
            print_info("제안할 대안 구성이 없습니다.")
            return
        rows = [
            [
                alt.name,
                alt.params.instance_type,
                alt.params.fleet_mode.value,
                format_usd(alt.monthly_estimate),
                f"{alt.savings_percentage:.1f}%",
            ]
            for alt in alternatives
        ]
        print_table("대안 구성", ["Alternative", "Instance Type", "Fleet", "Monthly", "Savings"], rows, {3, 4})

    _emit(payload, as_json, output_format, output, "alternatives", [build_alternative_table(alternatives)], render)


@cli.command("scan")
@traffic_options(include_load=True)
@output_options
@click.pass_context
@handle_errors
def scan_command(ctx: Context, as_json: bool, output_format: str, output: str | None, **kwargs: Any) -> None:
    """비용 최적화 스캔 (점수, 비용 동인, 권고, 대안)"""
    raw_params, region = _split_traffic_kwargs(kwargs, _settings(ctx).DEFAULT_REGION)
    params = TrafficParameters.from_dict(raw_params)
    calculator = build_calculator(_open_store(ctx), config=_settings(ctx))
    report = run_cost_optimization_scan(calculator, params, region)

    payload = {"region": region, "params": params.to_dict(), **report.to_dict()}
    tables = [
        build_breakdown_table(report.breakdown),
        build_recommendation_table(report.recommendations),
        build_alternative_table(report.alternatives),
    ]

    def render() -> None:
        print_header(f"최적화 스캔: {params.instance_type} / {region}")
        console.print(f"최적화 점수: [bold]{report.score}[/bold] / 100")
        console.print(f"월 운영비: {format_usd(report.monthly_estimate)}")
        for driver in report.insights.cost_drivers:
            print_info(driver)
        rows = [[r.title, r.priority.value, format_usd(r.estimated_savings)] for r in report.recommendations]
        print_table("권고", ["Recommendation", "Priority", "Est. Savings"], rows, numeric_columns={2})
        if report.insights.quick_wins:
            console.print(f"빠른 적용: {', '.join(report.insights.quick_wins)}")

    _emit(payload, as_json, output_format, output, "scan", tables, render)


# =============================================================================
# 가격 테이블 명령
# =============================================================================


@cli.group("pricing")
def pricing_group() -> None:
    """가격 테이블 조회/갱신"""


@pricing_group.command("regions")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
@click.pass_context
@handle_errors
def pricing_regions(ctx: Context, as_json: bool) -> None:
    """인스턴스 가격이 있는 리전 목록"""
    store = _open_store(ctx)
    regions = {region: len(store.get_price_table(SERVICE_EC2_INSTANCE, region)) for region in store.regions(SERVICE_EC2_INSTANCE)}

    if as_json:
        click.echo(json.dumps(regions, ensure_ascii=False, indent=2))
        return

    print_table("지원 리전", ["Region", "Instance Types"], [[r, n] for r, n in regions.items()], numeric_columns={1})


@pricing_group.command("instances")
@click.option("-r", "--region", default=None, help="리전")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
@click.pass_context
@handle_errors
def pricing_instances(ctx: Context, region: str | None, as_json: bool) -> None:
    """리전의 인스턴스 타입별 시간당 요금"""
    region = region or _settings(ctx).DEFAULT_REGION
    store = _open_store(ctx)
    entries = store.get_price_table(SERVICE_EC2_INSTANCE, region)

    if as_json:
        click.echo(json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False, indent=2))
        return

    rows = [
        [
            e.instance_type,
            e.architecture,
            e.vcpus,
            f"{e.memory_gib:g}",
            f"${e.hourly_rate:.4f}",
            f"${e.platform_hourly_rate:.4f}",
        ]
        for e in entries
    ]
    print_table(
        f"인스턴스 요금 ({region})",
        ["Instance Type", "Arch", "vCPU", "Memory (GiB)", "Hourly", "Platform Hourly"],
        rows,
        numeric_columns={2, 3, 4, 5},
    )


@pricing_group.command("status")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
@click.pass_context
@handle_errors
def pricing_status(ctx: Context, as_json: bool) -> None:
    """가격 테이블 적재 시각 및 stale 여부"""
    store = _open_store(ctx, refresh_stale=False)
    status = [
        {
            "service_type": record.service_type,
            "region": record.region,
            "items": len(record.items),
            "last_updated": record.last_updated.isoformat(),
            "age_days": record.age_days(),
            "stale": store.is_record_stale(record),
        }
        for record in store.list_tables()
    ]

    if as_json:
        click.echo(json.dumps(status, ensure_ascii=False, indent=2))
        return

    rows = [
        [s["service_type"], s["region"], s["items"], s["last_updated"][:19], s["age_days"], "stale" if s["stale"] else "ok"]
        for s in status
    ]
    print_table("가격 테이블 상태", ["Service", "Region", "Items", "Last Updated", "Age (days)", "Status"], rows, {2, 4})


@pricing_group.command("refresh")
@click.option("--force", is_flag=True, help="stale 여부와 무관하게 전체 재적재")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
@click.pass_context
@handle_errors
def pricing_refresh(ctx: Context, force: bool, as_json: bool) -> None:
    """stale 가격 테이블 재적재"""
    store = _open_store(ctx, refresh_stale=False)
    seeder = PricingSeeder(store)
    report = seeder.seed_all() if force else seeder.refresh_stale()

    if as_json:
        click.echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        return

    if report.changed:
        print_success(f"가격 테이블 {report.changed}개 갱신")
    else:
        print_warning("갱신할 stale 테이블이 없습니다.")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
